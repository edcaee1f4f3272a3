"""Excepciones específicas del dominio compartidas por todas las etapas del motor.

Solo los fallos irrecuperables de arranque se propagan al llamador; las
ausencias transitorias (pose no encontrada, landmark con poca confianza,
estimador todavía sin resultado) nunca lanzan excepciones."""

from __future__ import annotations

from typing import Sequence, Tuple


class EngineError(Exception):
    """Excepción base para fallos fatales del motor de conteo."""


class ModelUnavailableError(EngineError):
    """Se lanza cuando ningún proveedor de la cadena consigue cargar un estimador."""

    def __init__(self, attempts: Sequence[Tuple[str, str]] = ()) -> None:
        self.attempts = list(attempts)
        if self.attempts:
            detail = "; ".join(f"{name}: {reason}" for name, reason in self.attempts)
            message = f"Model unavailable, all pose estimator providers failed ({detail})"
        else:
            message = "Model unavailable, no pose estimator providers were configured"
        super().__init__(message)


class FrameSourceUnavailableError(EngineError):
    """Se lanza cuando no es posible abrir la cámara o el vídeo de entrada."""


class UnsupportedExerciseError(EngineError, ValueError):
    """Se lanza cuando no existe un detector para el ejercicio solicitado."""


class InvalidSessionError(EngineError, ValueError):
    """Se lanza cuando los parámetros de la sesión son inválidos (p. ej. objetivo <= 0)."""


__all__ = [
    "EngineError",
    "ModelUnavailableError",
    "FrameSourceUnavailableError",
    "UnsupportedExerciseError",
    "InvalidSessionError",
]

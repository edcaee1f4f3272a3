"""Catálogo de ejercicios y utilidades para normalizar sus etiquetas.

El tipo de ejercicio siempre llega desde fuera (selector de la interfaz,
argumento de CLI o configuración), a veces con los identificadores en plural
que usaba la versión web de DeskFit. Este módulo los traduce a un único
``ExerciseType`` para que el resto del motor no repita condicionales."""

from __future__ import annotations

from enum import Enum
from typing import Union


class ExerciseType(str, Enum):
    """Ejercicios que el motor sabe contar."""

    SQUAT = "squat"
    JUMPING_JACK = "jumping_jack"
    SHOULDER_PRESS = "shoulder_press"
    LATERAL_RAISE = "lateral_raise"
    KNEE_RAISE = "knee_raise"
    BICEP_CURL = "bicep_curl"
    TRICEPS_EXTENSION = "triceps_extension"
    BAND_PULL_APART = "band_pull_apart"
    LOW_TO_HIGH_CHEST_FLY = "low_to_high_chest_fly"
    SVEND_CHEST_PRESS = "svend_chest_press"


_EXERCISE_ALIAS_MAP = {
    # Identificadores heredados de la app web (en plural).
    "squats": ExerciseType.SQUAT.value,
    "jumping_jacks": ExerciseType.JUMPING_JACK.value,
    "shoulder_presses": ExerciseType.SHOULDER_PRESS.value,
    "lateral_raises": ExerciseType.LATERAL_RAISE.value,
    "knee_raises": ExerciseType.KNEE_RAISE.value,
    "bicep_curls": ExerciseType.BICEP_CURL.value,
    "biceps_curl": ExerciseType.BICEP_CURL.value,
    "triceps_extensions": ExerciseType.TRICEPS_EXTENSION.value,
    "tricep_extension": ExerciseType.TRICEPS_EXTENSION.value,
    "band_pull_aparts": ExerciseType.BAND_PULL_APART.value,
    "low_to_high_chest_flies": ExerciseType.LOW_TO_HIGH_CHEST_FLY.value,
    "low_to_high_chest_flys": ExerciseType.LOW_TO_HIGH_CHEST_FLY.value,
    "svend_press": ExerciseType.SVEND_CHEST_PRESS.value,
}


def _normalize_label(value: str) -> str:
    """Limpiar una etiqueta textual para compararla de forma consistente."""

    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    while "__" in normalized:
        normalized = normalized.replace("__", "_")
    return normalized


def as_exercise(value: Union[str, "ExerciseType", None]) -> "ExerciseType":
    """Convertir una entrada libre en un ``ExerciseType`` reconocido.

    A diferencia de otras etiquetas, aquí no existe un valor "desconocido": el
    bucle necesita un detector concreto, así que una etiqueta no reconocida
    lanza ``ValueError`` y el llamador decide cómo informar al usuario."""

    if isinstance(value, ExerciseType):
        return value
    if not value:
        raise ValueError("An exercise label is required")
    normalized = _normalize_label(str(value))
    mapped = _EXERCISE_ALIAS_MAP.get(normalized, normalized)
    try:
        return ExerciseType(mapped)
    except ValueError:
        raise ValueError(f"Unknown exercise label: {value!r}") from None


def human_label(value: Union[str, "ExerciseType"]) -> str:
    """Etiqueta legible (``"Band Pull Apart"``) para mostrar en la interfaz."""

    exercise = as_exercise(value)
    return EXERCISE_HUMAN_LABEL.get(exercise) or exercise.value.replace("_", " ").title()


EXERCISE_HUMAN_LABEL = {
    ExerciseType.SQUAT: "Squat",
    ExerciseType.JUMPING_JACK: "Jumping Jack",
    ExerciseType.SHOULDER_PRESS: "Shoulder Press",
    ExerciseType.LATERAL_RAISE: "Lateral Raise",
    ExerciseType.KNEE_RAISE: "Knee Raise",
    ExerciseType.BICEP_CURL: "Bicep Curl",
    ExerciseType.TRICEPS_EXTENSION: "Triceps Extension",
    ExerciseType.BAND_PULL_APART: "Band Pull Apart",
    ExerciseType.LOW_TO_HIGH_CHEST_FLY: "Low-to-High Chest Fly",
    ExerciseType.SVEND_CHEST_PRESS: "Svend Chest Press",
}

# Instrucciones breves que acompañan al contador en la interfaz.
EXERCISE_INSTRUCTIONS = {
    ExerciseType.SQUAT: (
        "Stand feet shoulder-width, lower hips until thighs are roughly parallel, "
        "then stand up with controlled motion."
    ),
    ExerciseType.JUMPING_JACK: "Start standing; jump feet out while raising arms overhead, then jump back to start.",
    ExerciseType.SHOULDER_PRESS: (
        "Press weights or hands from shoulder height up overhead until arms are straight, then lower with control."
    ),
    ExerciseType.LATERAL_RAISE: (
        "With slight bend in elbows, raise arms out to the sides to shoulder height, then lower slowly."
    ),
    ExerciseType.KNEE_RAISE: "Lift one knee toward hip level, lower it back down, and alternate legs with control.",
    ExerciseType.BICEP_CURL: (
        "Curl the weight by bringing the wrist toward the shoulder, then lower slowly to full extension."
    ),
    ExerciseType.TRICEPS_EXTENSION: (
        "Keep the elbows above your head, lower the hands behind it, then extend until the wrists are overhead."
    ),
    ExerciseType.BAND_PULL_APART: (
        "Hold band in front at chest height, pull hands outward until arms are wide, then return slowly."
    ),
    ExerciseType.LOW_TO_HIGH_CHEST_FLY: (
        "Start with hands low by the hips and sweep them up and together until they pass shoulder height."
    ),
    ExerciseType.SVEND_CHEST_PRESS: (
        "Squeeze the hands together at the chest, press them straight out, then pull them back to the chest."
    ),
}

# Avisos de colocación frente a la cámara cuando el ejercicio lo requiere.
EXERCISE_HINTS = {
    ExerciseType.SVEND_CHEST_PRESS: "Turn 45-90 degrees left or right to accurately track this exercise",
}

# Repeticiones objetivo por defecto para cada ejercicio.
DEFAULT_REPS = {
    ExerciseType.SQUAT: 10,
    ExerciseType.JUMPING_JACK: 15,
    ExerciseType.SHOULDER_PRESS: 12,
    ExerciseType.LATERAL_RAISE: 12,
    ExerciseType.KNEE_RAISE: 12,
    ExerciseType.BICEP_CURL: 12,
    ExerciseType.TRICEPS_EXTENSION: 12,
    ExerciseType.BAND_PULL_APART: 12,
    ExerciseType.LOW_TO_HIGH_CHEST_FLY: 12,
    ExerciseType.SVEND_CHEST_PRESS: 12,
}

"""Filtro paso bajo adaptativo (familia "One-Euro") aplicado por keypoint y eje.

El estimador de pose tiembla varios píxeles incluso con el usuario quieto, lo
que basta para cruzar un umbral y volver a cruzarlo en el frame siguiente. El
filtro One-Euro suaviza con fuerza cuando la señal está casi estática y se abre
cuando la señal se mueve rápido, de modo que el retraso solo aparece cuando no
importa.

Cada par ``(landmark, eje)`` tiene su propia instancia y su propio historial;
las instancias viven mientras dure la sesión y solo se reinician con
:meth:`KeypointSmoother.reset`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from deskfit.config.settings import (
    SMOOTHING_BETA,
    SMOOTHING_DERIVATIVE_CUTOFF,
    SMOOTHING_MIN_CUTOFF,
    SMOOTHING_MIN_DT_S,
)

from .constants import LandmarkName
from .types import Keypoint, NameLike, Pose, as_landmark


def smoothing_factor(cutoff_hz: float, dt_s: float) -> float:
    """Coeficiente ``alpha = 1 / (1 + tau/dt)`` con ``tau = 1 / (2*pi*cutoff)``."""

    tau = 1.0 / (2.0 * math.pi * cutoff_hz)
    return 1.0 / (1.0 + tau / dt_s)


@dataclass
class _FilterState:
    value: float
    derivative: float
    timestamp_s: float
    rate_hz: float


class OneEuroFilter:
    """Filtro exponencial cuya frecuencia de corte crece con la velocidad de la señal."""

    def __init__(
        self,
        min_cutoff: float = SMOOTHING_MIN_CUTOFF,
        beta: float = SMOOTHING_BETA,
        d_cutoff: float = SMOOTHING_DERIVATIVE_CUTOFF,
    ) -> None:
        if min_cutoff <= 0 or d_cutoff <= 0:
            raise ValueError("Cutoff frequencies must be positive")
        self.min_cutoff = float(min_cutoff)
        self.beta = float(beta)
        self.d_cutoff = float(d_cutoff)
        self._state: Optional[_FilterState] = None

    @property
    def initialized(self) -> bool:
        return self._state is not None

    @property
    def last_derivative(self) -> float:
        return self._state.derivative if self._state is not None else 0.0

    def reset(self) -> None:
        self._state = None

    def __call__(self, value: float, timestamp_s: float) -> float:
        value = float(value)
        state = self._state
        if state is None:
            # Primera muestra: se devuelve tal cual e inicializa el estado.
            self._state = _FilterState(value=value, derivative=0.0, timestamp_s=float(timestamp_s), rate_hz=0.0)
            return value

        dt = max(float(timestamp_s) - state.timestamp_s, SMOOTHING_MIN_DT_S)
        rate = 1.0 / dt

        raw_derivative = (value - state.value) * rate
        alpha_d = smoothing_factor(self.d_cutoff, dt)
        derivative = state.derivative + alpha_d * (raw_derivative - state.derivative)

        cutoff = self.min_cutoff + self.beta * abs(derivative)
        alpha = smoothing_factor(cutoff, dt)
        smoothed = state.value + alpha * (value - state.value)

        self._state = _FilterState(
            value=smoothed,
            derivative=derivative,
            timestamp_s=float(timestamp_s),
            rate_hz=rate,
        )
        return smoothed


class KeypointSmoother:
    """Mapa explícito ``(landmark, eje) -> OneEuroFilter`` propiedad de una sesión."""

    def __init__(
        self,
        min_cutoff: float = SMOOTHING_MIN_CUTOFF,
        beta: float = SMOOTHING_BETA,
        d_cutoff: float = SMOOTHING_DERIVATIVE_CUTOFF,
        *,
        enabled: bool = True,
    ) -> None:
        self.min_cutoff = float(min_cutoff)
        self.beta = float(beta)
        self.d_cutoff = float(d_cutoff)
        self.enabled = bool(enabled)
        self._filters: Dict[Tuple[LandmarkName, str], OneEuroFilter] = {}

    @classmethod
    def from_config(cls, cfg) -> "KeypointSmoother":
        return cls(cfg.min_cutoff, cfg.beta, cfg.d_cutoff, enabled=cfg.enabled)

    def __len__(self) -> int:
        return len(self._filters)

    def reset(self) -> None:
        self._filters.clear()

    def _filter_for(self, name: LandmarkName, axis: str) -> OneEuroFilter:
        key = (name, axis)
        flt = self._filters.get(key)
        if flt is None:
            flt = OneEuroFilter(self.min_cutoff, self.beta, self.d_cutoff)
            self._filters[key] = flt
        return flt

    def filter(self, name: NameLike, axis: str, raw_value: float, timestamp_s: float) -> float:
        """Filtra una coordenada; ``axis`` es ``"x"`` o ``"y"``."""

        if axis not in ("x", "y"):
            raise ValueError(f"Unsupported axis {axis!r}")
        if not self.enabled:
            return float(raw_value)
        return self._filter_for(as_landmark(name), axis)(raw_value, timestamp_s)

    def smooth_pose(self, pose: Pose, timestamp_ms: float) -> Pose:
        """Devuelve una pose nueva con cada keypoint presente filtrado.

        Los landmarks ausentes en este frame no se tocan: su filtro conserva el
        estado para cuando el punto reaparezca.
        """

        timestamp_s = float(timestamp_ms) / 1000.0
        return Pose(
            Keypoint(
                name=kp.name,
                x=self.filter(kp.name, "x", kp.x, timestamp_s),
                y=self.filter(kp.name, "y", kp.y, timestamp_s),
                confidence=kp.confidence,
            )
            for kp in pose.values()
        )


__all__ = ["OneEuroFilter", "KeypointSmoother", "smoothing_factor"]

"""Captura de la línea base corporal ("de pie, erguido") para la sentadilla.

La profundidad de una sentadilla se juzga respecto a las proporciones de cada
usuario, no con un umbral fijo en píxeles. Durante los primeros frames se
guarda una ventana corta de medidas (hombros y torso); cuando el frame actual está
cerca del torso más largo visto y la ventana es estable, se congela la línea
base una única vez por sesión.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Tuple

import numpy as np

from deskfit.A_pose_estimation.constants import HIPS, SHOULDERS
from deskfit.A_pose_estimation.types import Pose
from deskfit.config.models import CalibrationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalibrationBaseline:
    """Instantánea inmutable del estado de calibración."""

    shoulder_y: Optional[float] = None
    torso_length: Optional[float] = None
    captured: bool = False
    recent_torso_lengths: Tuple[float, ...] = field(default_factory=tuple)


def calibration_measurements(pose: Pose) -> Optional[Tuple[float, float]]:
    """Devuelve ``(avg_shoulder_y, avg_hip_y)`` o ``None`` si falta algún hombro o cadera."""

    shoulders = pose.require(*SHOULDERS)
    hips = pose.require(*HIPS)
    if shoulders is None or hips is None:
        return None
    avg_shoulder_y = (shoulders[0].y + shoulders[1].y) / 2.0
    avg_hip_y = (hips[0].y + hips[1].y) / 2.0
    return avg_shoulder_y, avg_hip_y


class CalibrationStore:
    """Ventana FIFO de medidas ``(shoulder_y, torso)`` y línea base capturada una sola vez."""

    def __init__(self, cfg: Optional[CalibrationConfig] = None) -> None:
        self.cfg = cfg or CalibrationConfig()
        self._recent: Deque[Tuple[float, float]] = deque(maxlen=int(self.cfg.window))
        self._shoulder_y: Optional[float] = None
        self._torso_length: Optional[float] = None
        self._captured = False
        self.captured_at_ms: Optional[float] = None

    @classmethod
    def seeded(
        cls,
        shoulder_y: float,
        torso_length: float,
        cfg: Optional[CalibrationConfig] = None,
    ) -> "CalibrationStore":
        """Crea un almacén con una línea base ya conocida (p. ej. de una sesión anterior)."""

        store = cls(cfg)
        store._shoulder_y = float(shoulder_y)
        store._torso_length = float(torso_length)
        store._captured = True
        return store

    @property
    def captured(self) -> bool:
        return self._captured

    def snapshot(self) -> CalibrationBaseline:
        return CalibrationBaseline(
            shoulder_y=self._shoulder_y,
            torso_length=self._torso_length,
            captured=self._captured,
            recent_torso_lengths=tuple(torso for _, torso in self._recent),
        )

    def observe(self, avg_shoulder_y: float, avg_hip_y: float, timestamp_ms: float) -> CalibrationBaseline:
        """Añade una medida y captura la línea base si la ventana es estable."""

        if self._captured:
            return self.snapshot()

        torso_length = abs(float(avg_shoulder_y) - float(avg_hip_y))
        self._recent.append((float(avg_shoulder_y), torso_length))
        if len(self._recent) < self.cfg.min_samples:
            return self.snapshot()

        window = np.asarray([torso for _, torso in self._recent], dtype=float)
        window_max = float(window.max())
        stddev = float(np.std(window, ddof=1))
        if window_max <= 0:
            return self.snapshot()

        if torso_length / window_max >= self.cfg.relative_max and stddev <= self.cfg.max_stddev:
            self._shoulder_y = float(avg_shoulder_y)
            self._torso_length = torso_length
            self._captured = True
            self.captured_at_ms = float(timestamp_ms)
            logger.info(
                "Calibration baseline captured at %.1f ms (shoulder_y=%.1f, torso_length=%.1f, stddev=%.2f)",
                timestamp_ms,
                self._shoulder_y,
                self._torso_length,
                stddev,
            )
        return self.snapshot()

    def reference(self, avg_shoulder_y: float, avg_hip_y: float) -> Tuple[float, float]:
        """``(shoulder_y, torso_length)`` de referencia para los umbrales.

        Sin captura se usa como línea base provisional la medida más alta de la
        ventana (el torso más largo visto, que corresponde a estar de pie). Con
        la ventana vacía se recurre al frame actual.
        """

        if self._captured:
            return float(self._shoulder_y), float(self._torso_length)  # type: ignore[arg-type]
        if self._recent:
            shoulder_y, torso = max(self._recent, key=lambda item: item[1])
            return shoulder_y, torso
        return float(avg_shoulder_y), abs(float(avg_shoulder_y) - float(avg_hip_y))

    def reset(self) -> None:
        self._recent.clear()
        self._shoulder_y = None
        self._torso_length = None
        self._captured = False
        self.captured_at_ms = None


__all__ = ["CalibrationBaseline", "CalibrationStore", "calibration_measurements"]

"""Detector de sentadillas relativo a la línea base de cada usuario."""

from __future__ import annotations

from typing import Dict, Optional

from deskfit.A_pose_estimation.types import Pose
from deskfit.config.models import CountingConfig

from ..calibration import CalibrationStore, calibration_measurements
from .base import RepDetector, StateValue


class SquatDetector(RepDetector):
    """Cuenta al bajar la cadera por debajo de ``waist_y + depth * torso``.

    ``waist_y = shoulder_y + waist_fraction * torso`` se calcula con la línea
    base del :class:`CalibrationStore` (provisional mientras no haya captura).
    Solo el flanco de bajada (entrar en sentadilla) cuenta, y nunca en el
    primer frame evaluable: quien empieza agachado no suma una repetición.
    """

    requires_calibration = True

    def __init__(
        self,
        cfg: Optional[CountingConfig] = None,
        calibration: Optional[CalibrationStore] = None,
    ) -> None:
        self.calibration = calibration if calibration is not None else CalibrationStore()
        super().__init__(cfg)

    def reset(self) -> None:
        self.squatting: Optional[bool] = None
        self.waist_y: Optional[float] = None
        self.threshold_y: Optional[float] = None

    def thresholds(self, avg_shoulder_y: float, avg_hip_y: float) -> tuple[float, float]:
        """``(waist_y, threshold_y)`` para las medidas del frame actual."""

        shoulder_y, torso = self.calibration.reference(avg_shoulder_y, avg_hip_y)
        waist_y = shoulder_y + self.cfg.squat_waist_fraction * torso
        return waist_y, waist_y + self.cfg.squat_depth_fraction * torso

    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        measurements = calibration_measurements(pose)
        if measurements is None:
            return 0
        avg_shoulder_y, avg_hip_y = measurements
        self.waist_y, self.threshold_y = self.thresholds(avg_shoulder_y, avg_hip_y)
        squatting = avg_hip_y >= self.threshold_y
        # El primer frame evaluable solo fija el estado de partida.
        rising = squatting and self.squatting is False
        self.squatting = squatting
        return 1 if rising else 0

    def state(self) -> Dict[str, StateValue]:
        return {
            "squatting": bool(self.squatting),
            "active": bool(self.squatting),
            "waist_y": self.waist_y,
            "threshold_y": self.threshold_y,
            "baseline_captured": self.calibration.captured,
        }


__all__ = ["SquatDetector"]

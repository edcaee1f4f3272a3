"""Detector de brazos por encima de los hombros (press, elevaciones, jumping jacks)."""

from __future__ import annotations

from typing import Dict, Optional

from deskfit.A_pose_estimation.constants import LandmarkName
from deskfit.A_pose_estimation.types import Pose

from .base import RepDetector, StateValue


class ArmsOverheadDetector(RepDetector):
    """Cuenta el flanco de subida de "ambas muñecas por encima de su hombro".

    El primer frame evaluable solo fija el estado inicial.
    """

    def reset(self) -> None:
        self.arms_up: Optional[bool] = None

    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        points = pose.require(
            LandmarkName.LEFT_WRIST,
            LandmarkName.RIGHT_WRIST,
            LandmarkName.LEFT_SHOULDER,
            LandmarkName.RIGHT_SHOULDER,
        )
        if points is None:
            return 0
        left_wrist, right_wrist, left_shoulder, right_shoulder = points
        arms_up = left_wrist.y < left_shoulder.y and right_wrist.y < right_shoulder.y
        rising = arms_up and self.arms_up is False
        self.arms_up = arms_up
        return 1 if rising else 0

    def state(self) -> Dict[str, StateValue]:
        return {"arms_up": bool(self.arms_up), "active": bool(self.arms_up)}


__all__ = ["ArmsOverheadDetector"]

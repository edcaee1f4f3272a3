"""Detector de elevaciones de rodilla alternas."""

from __future__ import annotations

from typing import Dict, Optional

from deskfit.A_pose_estimation.constants import LEG_CHAINS
from deskfit.A_pose_estimation.geometry import torso_length
from deskfit.A_pose_estimation.types import Pose

from .base import RepDetector, StateValue


class KneeRaiseDetector(RepDetector):
    """Cuenta cuando exactamente una rodilla sube hasta la altura de su cadera.

    Una rodilla está "arriba" si ``knee_y < hip_y + allowance * torso``, con el
    torso medido en el frame actual. La condición es un XOR de ambas piernas, de
    modo que levantar las dos a la vez no cuenta. El primer frame evaluable solo
    fija el estado inicial.
    """

    def reset(self) -> None:
        self.knee_raised: Optional[bool] = None
        self.legs_up: Dict[str, bool] = {side: False for side in LEG_CHAINS}
        self.knee_thresholds: Dict[str, Optional[float]] = {side: None for side in LEG_CHAINS}

    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        torso = torso_length(pose)
        if torso is None:
            return 0
        legs = {side: pose.require(*chain) for side, chain in LEG_CHAINS.items()}
        if any(points is None for points in legs.values()):
            return 0

        allowance = self.cfg.knee_raise_allowance * torso
        for side, (hip, knee) in legs.items():  # type: ignore[misc]
            threshold = hip.y + allowance
            self.knee_thresholds[side] = threshold
            self.legs_up[side] = knee.y < threshold

        raised = self.legs_up["left"] != self.legs_up["right"]
        rising = raised and self.knee_raised is False
        self.knee_raised = raised
        return 1 if rising else 0

    def state(self) -> Dict[str, StateValue]:
        return {
            "knee_raised": bool(self.knee_raised),
            "active": bool(self.knee_raised),
            "left_knee_up": self.legs_up["left"],
            "right_knee_up": self.legs_up["right"],
            "left_knee_threshold_y": self.knee_thresholds["left"],
            "right_knee_threshold_y": self.knee_thresholds["right"],
        }


__all__ = ["KneeRaiseDetector"]

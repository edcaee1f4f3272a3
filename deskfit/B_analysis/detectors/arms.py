"""Detectores por brazo: curl de bíceps y extensión de tríceps.

Cada brazo tiene su propia máquina de estados; un frame puede producir un
flanco por brazo y el antirrebote de la sesión decide cuáles se aceptan.
"""

from __future__ import annotations

from typing import Dict, Optional

from deskfit.A_pose_estimation.constants import ARM_CHAINS
from deskfit.A_pose_estimation.geometry import eye_level
from deskfit.A_pose_estimation.types import Pose

from .base import RepDetector, StateValue


class BicepCurlDetector(RepDetector):
    """Cuenta al soltar el curl: flanco de bajada de ``wrist_y < elbow_y``."""

    def reset(self) -> None:
        self.curled: Dict[str, bool] = {side: False for side in ARM_CHAINS}

    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        edges = 0
        for side, (_, elbow_name, wrist_name) in ARM_CHAINS.items():
            points = pose.require(elbow_name, wrist_name)
            if points is None:
                continue
            elbow, wrist = points
            curled = wrist.y < elbow.y
            if self.curled[side] and not curled:
                edges += 1
            self.curled[side] = curled
        return edges

    def state(self) -> Dict[str, StateValue]:
        return {
            "left_curled": self.curled["left"],
            "right_curled": self.curled["right"],
            "active": any(self.curled.values()),
        }


class TricepsExtensionDetector(RepDetector):
    """Cuenta la transición flexionado -> extendido con el codo por encima de los ojos.

    Fuera de esa puerta (codo por debajo de la línea de los ojos) el brazo
    olvida su fase y necesita volver a flexionarse antes de contar otra vez.
    """

    def reset(self) -> None:
        # None: fase desconocida (fuera de la puerta o sin observar).
        self.extended: Dict[str, Optional[bool]] = {side: None for side in ARM_CHAINS}
        self.eye_y: Optional[float] = None

    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        eye_y = eye_level(pose)
        if eye_y is None:
            return 0
        self.eye_y = eye_y

        edges = 0
        for side, (_, elbow_name, wrist_name) in ARM_CHAINS.items():
            points = pose.require(elbow_name, wrist_name)
            if points is None:
                continue
            elbow, wrist = points
            if not elbow.y < eye_y:
                self.extended[side] = None
                continue
            extended = wrist.y < elbow.y
            if self.extended[side] is False and extended:
                edges += 1
            self.extended[side] = extended
        return edges

    def state(self) -> Dict[str, StateValue]:
        return {
            "left_extended": bool(self.extended["left"]),
            "right_extended": bool(self.extended["right"]),
            "left_flexed": self.extended["left"] is False,
            "right_flexed": self.extended["right"] is False,
            "active": any(bool(value) for value in self.extended.values()),
            "eye_y": self.eye_y,
        }


__all__ = ["BicepCurlDetector", "TricepsExtensionDetector"]

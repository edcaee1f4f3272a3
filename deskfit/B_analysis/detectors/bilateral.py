"""Detectores bilaterales con histéresis: band pull-apart y Svend press.

Ambos enganchan un estado de "apertura" cuando se alcanza la postura exterior
y solo cuentan cuando los dos brazos vuelven a la postura interior. Los
umbrales de entrada y salida son distintos para que el parpadeo alrededor de
uno de ellos no vuelva a disparar el enganche.
"""

from __future__ import annotations

from typing import Dict, Optional

from deskfit.A_pose_estimation.constants import ARM_CHAINS, LandmarkName
from deskfit.A_pose_estimation.geometry import distance, shoulder_width, torso_length
from deskfit.A_pose_estimation.types import Pose

from .base import RepDetector, StateValue


class BandPullApartDetector(RepDetector):
    """Abrir la banda a la altura de los hombros y volver a cerrar cuenta una repetición.

    * "wide": separación horizontal de muñecas > ``band_wide_multiplier`` x
      ancho de hombros y ambas muñecas a menos de
      ``band_wrist_height_fraction`` x torso de la altura de su hombro.
    * "narrow": cada muñeca a menos de ``band_narrow_multiplier`` x medio ancho
      de hombros de su propio hombro.
    """

    def reset(self) -> None:
        self.wide_latched = False
        self.wide = False
        self.narrow = False

    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        points = pose.require(
            LandmarkName.LEFT_WRIST,
            LandmarkName.RIGHT_WRIST,
            LandmarkName.LEFT_SHOULDER,
            LandmarkName.RIGHT_SHOULDER,
        )
        torso = torso_length(pose)
        width = shoulder_width(pose)
        if points is None or torso is None or width is None:
            return 0
        left_wrist, right_wrist, left_shoulder, right_shoulder = points

        separation = abs(left_wrist.x - right_wrist.x)
        height_tolerance = self.cfg.band_wrist_height_fraction * torso
        self.wide = (
            separation > self.cfg.band_wide_multiplier * width
            and abs(left_wrist.y - left_shoulder.y) <= height_tolerance
            and abs(right_wrist.y - right_shoulder.y) <= height_tolerance
        )
        narrow_radius = self.cfg.band_narrow_multiplier * (width / 2.0)
        self.narrow = (
            distance(left_wrist, left_shoulder) < narrow_radius
            and distance(right_wrist, right_shoulder) < narrow_radius
        )

        if self.wide:
            self.wide_latched = True
            return 0
        if self.wide_latched and self.narrow:
            self.wide_latched = False
            return 1
        return 0

    def state(self) -> Dict[str, StateValue]:
        return {
            "wide_latched": self.wide_latched,
            "wide": self.wide,
            "narrow": self.narrow,
            "active": self.wide,
        }


class SvendChestPressDetector(RepDetector):
    """Extender las manos al frente y recogerlas al pecho cuenta una repetición.

    El brazo se mide contra su propia longitud hombro-codo, así que el usuario
    debe girarse 45-90 grados respecto a la cámara para que la extensión sea
    visible en 2D.
    """

    def reset(self) -> None:
        self.extended_latched = False
        self.extended = False
        self.retracted = False
        self.reach: Dict[str, Optional[float]] = {side: None for side in ARM_CHAINS}

    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        arms = {side: pose.require(*chain) for side, chain in ARM_CHAINS.items()}
        if any(points is None for points in arms.values()):
            return 0

        extended = False
        retracted = True
        for side, (shoulder, elbow, wrist) in arms.items():  # type: ignore[misc]
            upper_arm = distance(shoulder, elbow)
            reach = distance(wrist, shoulder)
            self.reach[side] = reach / upper_arm if upper_arm > 0 else None
            if reach > self.cfg.svend_extended_multiplier * upper_arm:
                extended = True
            if reach > self.cfg.svend_retracted_multiplier * upper_arm:
                retracted = False
        self.extended = extended
        self.retracted = retracted

        if extended:
            self.extended_latched = True
            return 0
        if self.extended_latched and retracted:
            self.extended_latched = False
            return 1
        return 0

    def state(self) -> Dict[str, StateValue]:
        return {
            "extended_latched": self.extended_latched,
            "extended": self.extended,
            "retracted": self.retracted,
            "active": self.extended,
            "left_reach_ratio": self.reach["left"],
            "right_reach_ratio": self.reach["right"],
        }


__all__ = ["BandPullApartDetector", "SvendChestPressDetector"]

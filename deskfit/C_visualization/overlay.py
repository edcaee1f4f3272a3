"""Geometría del overlay de guía derivada de la pose suavizada.

:func:`build_overlay` es una función pura: a partir de los keypoints, el
ejercicio activo y el estado del detector produce primitivas de dibujo en
coordenadas de pantalla. No guarda nada entre frames ni influye en el conteo.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from deskfit.A_pose_estimation.constants import SHOULDERS, LandmarkName
from deskfit.A_pose_estimation.geometry import horizontal_line, mean_y
from deskfit.A_pose_estimation.types import Pose, as_landmark
from deskfit.config import video_landmarks_visualization as vlv
from deskfit.core.types import ExerciseType, as_exercise

from .styles import Color, OverlayStyle

Point = Tuple[float, float]

_ARMS = frozenset(
    {
        LandmarkName.LEFT_SHOULDER,
        LandmarkName.RIGHT_SHOULDER,
        LandmarkName.LEFT_ELBOW,
        LandmarkName.RIGHT_ELBOW,
        LandmarkName.LEFT_WRIST,
        LandmarkName.RIGHT_WRIST,
    }
)
_HIPS_AND_SHOULDERS = frozenset(
    {LandmarkName.LEFT_SHOULDER, LandmarkName.RIGHT_SHOULDER, LandmarkName.LEFT_HIP, LandmarkName.RIGHT_HIP}
)

# Landmarks que evalúa cada detector; se colorean según el estado "active".
EXERCISE_LANDMARKS: Dict[ExerciseType, FrozenSet[LandmarkName]] = {
    ExerciseType.SHOULDER_PRESS: _ARMS,
    ExerciseType.LATERAL_RAISE: _ARMS,
    ExerciseType.JUMPING_JACK: _ARMS,
    ExerciseType.LOW_TO_HIGH_CHEST_FLY: _ARMS,
    ExerciseType.BICEP_CURL: _ARMS,
    ExerciseType.TRICEPS_EXTENSION: _ARMS | {LandmarkName.LEFT_EYE, LandmarkName.RIGHT_EYE},
    ExerciseType.BAND_PULL_APART: _ARMS | _HIPS_AND_SHOULDERS,
    ExerciseType.SVEND_CHEST_PRESS: _ARMS,
    ExerciseType.SQUAT: _HIPS_AND_SHOULDERS,
    ExerciseType.KNEE_RAISE: _HIPS_AND_SHOULDERS | {LandmarkName.LEFT_KNEE, LandmarkName.RIGHT_KNEE},
}

# Claves del estado de los detectores que representan alturas de umbral.
THRESHOLD_KEYS: Tuple[str, ...] = (
    "threshold_y",
    "eye_y",
    "left_knee_threshold_y",
    "right_knee_threshold_y",
)


@dataclass(frozen=True)
class OverlayLine:
    start: Point
    end: Point
    color: Color
    thickness: int
    kind: str = "connection"


@dataclass(frozen=True)
class OverlayCircle:
    center: Point
    radius: int
    color: Color
    name: Optional[LandmarkName] = None
    filled: bool = True


@dataclass(frozen=True)
class OverlayFrame:
    """Primitivas de un frame en píxeles físicos de la superficie de dibujo."""

    width: int
    height: int
    lines: Tuple[OverlayLine, ...] = field(default_factory=tuple)
    circles: Tuple[OverlayCircle, ...] = field(default_factory=tuple)

    def lines_of(self, kind: str) -> List[OverlayLine]:
        return [line for line in self.lines if line.kind == kind]

    def __bool__(self) -> bool:
        return bool(self.lines or self.circles)


def display_scale(
    intrinsic_size: Tuple[int, int],
    display_size: Tuple[int, int],
    device_pixel_ratio: float = 1.0,
) -> Tuple[float, float]:
    """Factores ``(sx, sy)`` independientes: ``display * dpr / intrinsic`` por eje."""

    intrinsic_w, intrinsic_h = intrinsic_size
    display_w, display_h = display_size
    if intrinsic_w <= 0 or intrinsic_h <= 0:
        raise ValueError(f"Intrinsic frame size must be positive, got {intrinsic_size!r}")
    dpr = float(device_pixel_ratio) if device_pixel_ratio and device_pixel_ratio > 0 else 1.0
    return display_w * dpr / intrinsic_w, display_h * dpr / intrinsic_h


def build_overlay(
    pose: Optional[Pose],
    exercise: Union[str, ExerciseType],
    detector_state: Mapping[str, object],
    intrinsic_size: Tuple[int, int],
    display_size: Optional[Tuple[int, int]] = None,
    device_pixel_ratio: float = 1.0,
    style: OverlayStyle = OverlayStyle(),
) -> OverlayFrame:
    """Construye las primitivas del overlay para un frame.

    Dibuja el esqueleto, la línea de referencia de los hombros, las líneas de
    umbral que publica el detector y los marcadores de los landmarks evaluados
    en color "activo" (postura objetivo) o "en espera".
    """

    display_size = display_size or intrinsic_size
    sx, sy = display_scale(intrinsic_size, display_size, device_pixel_ratio)
    width = int(round(intrinsic_size[0] * sx))
    height = int(round(intrinsic_size[1] * sy))
    if not pose:
        return OverlayFrame(width=width, height=height)

    def to_display(x: float, y: float) -> Point:
        return float(x) * sx, float(y) * sy

    lines: List[OverlayLine] = []
    for name_a, name_b in vlv.SKELETON_CONNECTIONS:
        points = pose.require(name_a, name_b)
        if points is None:
            continue
        a, b = points
        lines.append(
            OverlayLine(
                to_display(a.x, a.y),
                to_display(b.x, b.y),
                style.connection_bgr,
                style.connection_thickness,
            )
        )

    shoulders = pose.require(*SHOULDERS)
    if shoulders is not None:
        shoulder_y = mean_y(shoulders) * sy
        start, end = horizontal_line(shoulder_y, width)
        lines.append(OverlayLine(start, end, style.reference_bgr, style.guide_thickness, "reference"))

    for key in THRESHOLD_KEYS:
        value = detector_state.get(key)
        if value is None:
            continue
        y = float(value) * sy  # type: ignore[arg-type]
        start, end = horizontal_line(y, width)
        lines.append(OverlayLine(start, end, style.threshold_bgr, style.guide_thickness, "threshold"))

    relevant = EXERCISE_LANDMARKS.get(as_exercise(exercise), frozenset())
    marker_color = style.active_bgr if detector_state.get("active") else style.idle_bgr
    circles: List[OverlayCircle] = []
    for name, kp in pose.items():
        landmark = as_landmark(name)
        color = marker_color if landmark in relevant else style.connection_bgr
        circles.append(OverlayCircle(to_display(kp.x, kp.y), style.landmark_radius, color, landmark))

    return OverlayFrame(width=width, height=height, lines=tuple(lines), circles=tuple(circles))


__all__ = [
    "OverlayLine",
    "OverlayCircle",
    "OverlayFrame",
    "EXERCISE_LANDMARKS",
    "THRESHOLD_KEYS",
    "display_scale",
    "build_overlay",
]

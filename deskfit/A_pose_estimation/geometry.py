"""Utilidades geométricas compartidas por los detectores y el overlay."""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .constants import EYES, HIPS, SHOULDERS
from .types import Keypoint, Pose


def distance(a: Keypoint, b: Keypoint) -> float:
    """Distancia euclídea en píxeles entre dos keypoints."""

    return math.hypot(float(a.x) - float(b.x), float(a.y) - float(b.y))


def mean_y(points: Sequence[Keypoint]) -> float:
    return float(np.mean([float(p.y) for p in points]))


def torso_length(pose: Pose) -> Optional[float]:
    """``|avg_shoulder_y - avg_hip_y|`` o ``None`` si falta algún hombro o cadera."""

    shoulders = pose.require(*SHOULDERS)
    hips = pose.require(*HIPS)
    if shoulders is None or hips is None:
        return None
    return abs(mean_y(shoulders) - mean_y(hips))


def shoulder_width(pose: Pose) -> Optional[float]:
    """Separación horizontal entre hombros (``None`` si falta alguno)."""

    shoulders = pose.require(*SHOULDERS)
    if shoulders is None:
        return None
    return abs(float(shoulders[0].x) - float(shoulders[1].x))


def eye_level(pose: Pose) -> Optional[float]:
    """Altura media de los ojos visibles; basta con uno."""

    eyes = [pose[name] for name in EYES if pose.has(name)]
    if not eyes:
        return None
    return mean_y(eyes)


def horizontal_line(y: float, width: float) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Segmento que cruza todo el frame a la altura ``y``."""

    return (0.0, float(y)), (float(width), float(y))


__all__ = ["distance", "mean_y", "torso_length", "shoulder_width", "eye_level", "horizontal_line"]

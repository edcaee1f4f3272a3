"""Catálogo de landmarks corporales empleados por el motor de conteo."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class LandmarkName(str, Enum):
    """Los 17 puntos del esquema COCO que producen MoveNet y BlazePose."""

    NOSE = "nose"
    LEFT_EYE = "left_eye"
    RIGHT_EYE = "right_eye"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"


LANDMARK_COUNT: int = len(LandmarkName)

# Eje de cada coordenada filtrada de forma independiente.
AXES: Tuple[str, str] = ("x", "y")

# Índices de BlazePose (33 puntos de MediaPipe) que corresponden a cada nombre.
MEDIAPIPE_INDEX_MAP: Dict[int, LandmarkName] = {
    0: LandmarkName.NOSE,
    2: LandmarkName.LEFT_EYE,
    5: LandmarkName.RIGHT_EYE,
    7: LandmarkName.LEFT_EAR,
    8: LandmarkName.RIGHT_EAR,
    11: LandmarkName.LEFT_SHOULDER,
    12: LandmarkName.RIGHT_SHOULDER,
    13: LandmarkName.LEFT_ELBOW,
    14: LandmarkName.RIGHT_ELBOW,
    15: LandmarkName.LEFT_WRIST,
    16: LandmarkName.RIGHT_WRIST,
    23: LandmarkName.LEFT_HIP,
    24: LandmarkName.RIGHT_HIP,
    25: LandmarkName.LEFT_KNEE,
    26: LandmarkName.RIGHT_KNEE,
    27: LandmarkName.LEFT_ANKLE,
    28: LandmarkName.RIGHT_ANKLE,
}

SHOULDERS = (LandmarkName.LEFT_SHOULDER, LandmarkName.RIGHT_SHOULDER)
HIPS = (LandmarkName.LEFT_HIP, LandmarkName.RIGHT_HIP)
EYES = (LandmarkName.LEFT_EYE, LandmarkName.RIGHT_EYE)

# Cadena hombro-codo-muñeca de cada brazo.
ARM_CHAINS: Dict[str, Tuple[LandmarkName, LandmarkName, LandmarkName]] = {
    "left": (LandmarkName.LEFT_SHOULDER, LandmarkName.LEFT_ELBOW, LandmarkName.LEFT_WRIST),
    "right": (LandmarkName.RIGHT_SHOULDER, LandmarkName.RIGHT_ELBOW, LandmarkName.RIGHT_WRIST),
}

# Cadena cadera-rodilla de cada pierna.
LEG_CHAINS: Dict[str, Tuple[LandmarkName, LandmarkName]] = {
    "left": (LandmarkName.LEFT_HIP, LandmarkName.LEFT_KNEE),
    "right": (LandmarkName.RIGHT_HIP, LandmarkName.RIGHT_KNEE),
}

__all__ = [
    "LandmarkName",
    "LANDMARK_COUNT",
    "AXES",
    "MEDIAPIPE_INDEX_MAP",
    "SHOULDERS",
    "HIPS",
    "EYES",
    "ARM_CHAINS",
    "LEG_CHAINS",
]

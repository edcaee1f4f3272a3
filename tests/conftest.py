# tests/conftest.py
"""Utilidades de configuración comunes para la batería de pruebas."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Mapping, Tuple

import pytest

# Repo root = parent de 'tests'
ROOT = Path(__file__).resolve().parents[1]

# Asegura que el paquete deskfit es importable sin instalarlo
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from deskfit.A_pose_estimation.types import Pose  # noqa: E402

# Postura de pie de referencia: hombros en y=100, caderas en y=300 (torso 200).
STANDING: Mapping[str, Tuple[float, float]] = {
    "nose": (300.0, 50.0),
    "left_eye": (290.0, 40.0),
    "right_eye": (310.0, 40.0),
    "left_shoulder": (250.0, 100.0),
    "right_shoulder": (350.0, 100.0),
    "left_elbow": (240.0, 180.0),
    "right_elbow": (360.0, 180.0),
    "left_wrist": (240.0, 260.0),
    "right_wrist": (360.0, 260.0),
    "left_hip": (270.0, 300.0),
    "right_hip": (330.0, 300.0),
    "left_knee": (270.0, 420.0),
    "right_knee": (330.0, 420.0),
    "left_ankle": (270.0, 540.0),
    "right_ankle": (330.0, 540.0),
}


def make_pose(overrides: Mapping[str, Tuple[float, float]] | None = None, *, drop: Tuple[str, ...] = ()) -> Pose:
    """Construye una ``Pose`` a partir de la postura de pie con los cambios indicados."""

    coords = dict(STANDING)
    coords.update(overrides or {})
    for name in drop:
        coords.pop(name, None)
    return Pose.from_xy(coords)


@pytest.fixture
def standing_pose() -> Pose:
    return make_pose()


@pytest.fixture
def pose_factory():
    """Devuelve ``make_pose`` para componer posturas en cada prueba."""

    return make_pose

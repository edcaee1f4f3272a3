"""Pruebas del modelo de datos de keypoints y poses."""

from __future__ import annotations

import math

import pytest

from deskfit.A_pose_estimation.constants import LANDMARK_COUNT, MEDIAPIPE_INDEX_MAP, LandmarkName
from deskfit.A_pose_estimation.types import Keypoint, Pose, PoseSample, as_landmark


def test_landmark_catalog_has_seventeen_names_and_full_mediapipe_mapping() -> None:
    assert LANDMARK_COUNT == 17
    assert set(MEDIAPIPE_INDEX_MAP.values()) == set(LandmarkName)


def test_keypoint_normalises_textual_names() -> None:
    kp = Keypoint(" Left_Wrist ", 1.0, 2.0, 0.5)
    assert kp.name is LandmarkName.LEFT_WRIST
    assert kp.xy == (1.0, 2.0)


def test_unknown_landmark_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        as_landmark("tail")


def test_pose_drops_non_finite_points_and_supports_string_lookup() -> None:
    pose = Pose(
        [
            Keypoint("nose", 10.0, 20.0, 0.9),
            Keypoint("left_eye", math.nan, 5.0, 0.9),
        ]
    )
    assert len(pose) == 1
    assert pose["nose"].y == 20.0
    assert pose[LandmarkName.NOSE] is pose["nose"]
    assert not pose.has("left_eye")
    with pytest.raises(KeyError):
        pose["tail"]


def test_require_returns_none_when_any_landmark_is_missing() -> None:
    pose = Pose.from_xy({"left_shoulder": (1.0, 2.0), "right_shoulder": (3.0, 4.0)})
    shoulders = pose.require("left_shoulder", "right_shoulder")
    assert shoulders is not None and shoulders[1].x == 3.0
    assert pose.require("left_shoulder", "left_hip") is None


def test_filtered_applies_confidence_floor() -> None:
    pose = Pose([Keypoint("nose", 0.0, 0.0, 0.9), Keypoint("left_ear", 0.0, 0.0, 0.1)])
    filtered = pose.filtered(0.3)
    assert list(filtered) == [LandmarkName.NOSE]


def test_pose_sample_exposes_frame_size() -> None:
    sample = PoseSample(Pose(), frame_width=640, frame_height=480, timestamp_ms=0.0)
    assert sample.frame_size == (640, 480)

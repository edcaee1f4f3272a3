"""Pruebas de la cadena de proveedores y de la conversión de landmarks de MediaPipe."""

from __future__ import annotations

import logging
from types import SimpleNamespace

import numpy as np
import pytest

from deskfit.A_pose_estimation.constants import LandmarkName
from deskfit.A_pose_estimation.estimators import (
    EstimatorProvider,
    LocalTaskModelProvider,
    MediaPipePoseEstimator,
    MediaPipeSolutionProvider,
    PoseEstimatorBase,
    build_default_providers,
    keypoints_from_normalized,
    load_pose_estimator,
)
from deskfit.config.models import PoseConfig
from deskfit.errors import ModelUnavailableError


class _FakeNormalizedLandmark:
    def __init__(self, x: float, y: float, z: float = 0.0, visibility: float = 0.0):
        self.x = x
        self.y = y
        self.z = z
        self.visibility = visibility


def _blazepose_landmarks(visibility: float = 0.9) -> list[_FakeNormalizedLandmark]:
    return [_FakeNormalizedLandmark(i / 40.0, i / 50.0, visibility=visibility) for i in range(33)]


class _StaticEstimator(PoseEstimatorBase):
    def __init__(self, label: str) -> None:
        self.label = label
        self.closed = False

    def estimate(self, image_bgr):
        return None

    def close(self) -> None:
        self.closed = True


class _FactoryProvider(EstimatorProvider):
    def __init__(self, name: str, factory) -> None:
        self.name = name
        self._factory = factory

    def load(self) -> PoseEstimatorBase:
        return self._factory()


def _failing(message: str):
    def factory():
        raise RuntimeError(message)

    return factory


def test_keypoints_from_normalized_maps_indices_to_pixels() -> None:
    pose = keypoints_from_normalized(_blazepose_landmarks(), width=400, height=300)

    assert len(pose) == 17
    left_wrist = pose[LandmarkName.LEFT_WRIST]  # índice 15 de BlazePose
    assert left_wrist.x == pytest.approx(15 / 40.0 * 400)
    assert left_wrist.y == pytest.approx(15 / 50.0 * 300)
    assert left_wrist.confidence == pytest.approx(0.9)


def test_keypoints_below_confidence_floor_are_omitted() -> None:
    landmarks = _blazepose_landmarks()
    landmarks[0].visibility = 0.1  # nariz
    pose = keypoints_from_normalized(landmarks, 100, 100, min_confidence=0.3)
    assert not pose.has("nose")
    assert pose.has("left_shoulder")


def test_first_successful_provider_wins_and_failures_are_logged(caplog) -> None:
    calls: list[str] = []

    def make(label: str):
        def factory():
            calls.append(label)
            return _StaticEstimator(label)

        return factory

    providers = [
        _FactoryProvider("local", _failing("missing file")),
        _FactoryProvider("full", make("full")),
        _FactoryProvider("lite", make("lite")),
    ]
    with caplog.at_level(logging.WARNING):
        estimator = load_pose_estimator(providers)

    assert isinstance(estimator, _StaticEstimator)
    assert estimator.label == "full"
    assert calls == ["full"]
    assert any("local" in record.getMessage() for record in caplog.records)


def test_all_providers_failing_raises_model_unavailable() -> None:
    providers = [
        _FactoryProvider("local", _failing("missing file")),
        _FactoryProvider("lite", _failing("graph error")),
    ]
    with pytest.raises(ModelUnavailableError) as excinfo:
        load_pose_estimator(providers)

    assert [name for name, _ in excinfo.value.attempts] == ["local", "lite"]
    assert "graph error" in str(excinfo.value)


def test_empty_chain_raises_model_unavailable() -> None:
    with pytest.raises(ModelUnavailableError):
        load_pose_estimator([])


def test_default_chain_order_is_local_then_configured_then_lite(tmp_path) -> None:
    cfg = PoseConfig(task_model_path=tmp_path / "pose.task", model_complexity=1, fallback_model_complexity=0)
    providers = build_default_providers(cfg)

    assert isinstance(providers[0], LocalTaskModelProvider)
    assert [p.model_complexity for p in providers[1:]] == [1, 0]
    assert all(isinstance(p, MediaPipeSolutionProvider) for p in providers[1:])


def test_default_chain_skips_local_model_when_not_configured() -> None:
    providers = build_default_providers(PoseConfig(task_model_path=None, model_complexity=0))
    assert len(providers) == 1
    assert providers[0].name == "mediapipe-pose:complexity=0"


def test_local_provider_fails_for_missing_model(tmp_path) -> None:
    provider = LocalTaskModelProvider(tmp_path / "absent.task")
    with pytest.raises(FileNotFoundError):
        provider.load()


class _FakeGraph:
    def __init__(self, landmarks) -> None:
        self.landmarks = landmarks
        self.closed = False
        self.frames: list[np.ndarray] = []

    def process(self, rgb_image):
        self.frames.append(rgb_image)
        if self.landmarks is None:
            return SimpleNamespace(pose_landmarks=None)
        return SimpleNamespace(pose_landmarks=SimpleNamespace(landmark=self.landmarks))

    def close(self) -> None:
        self.closed = True


def test_mediapipe_estimator_converts_results_and_closes_graph(monkeypatch) -> None:
    graph = _FakeGraph(_blazepose_landmarks())
    monkeypatch.setattr(MediaPipePoseEstimator, "_create_graph", lambda self: graph)

    with MediaPipePoseEstimator(model_complexity=0) as estimator:
        pose = estimator.estimate(np.zeros((300, 400, 3), dtype=np.uint8))

    assert pose is not None and pose.has("left_hip", "right_hip")
    assert pose["nose"].x == pytest.approx(0.0)
    assert graph.frames[0].shape == (300, 400, 3)
    assert graph.closed


def test_mediapipe_estimator_returns_none_without_person(monkeypatch) -> None:
    monkeypatch.setattr(MediaPipePoseEstimator, "_create_graph", lambda self: _FakeGraph(None))
    estimator = MediaPipePoseEstimator()
    assert estimator.estimate(np.zeros((10, 10, 3), dtype=np.uint8)) is None
    estimator.close()
    with pytest.raises(RuntimeError):
        estimator.estimate(np.zeros((10, 10, 3), dtype=np.uint8))

"""Estimadores de pose basados en Mediapipe listos para usar."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, Optional, Sequence

import cv2
import numpy as np

from deskfit.config.constants import (
    MIN_DETECTION_CONFIDENCE,
    MIN_KEYPOINT_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
)
from deskfit.config.settings import MODEL_COMPLEXITY, POSE_SMOOTH_LANDMARKS, build_pose_kwargs

from ..constants import MEDIAPIPE_INDEX_MAP
from ..types import Keypoint, Pose
from .base import PoseEstimatorBase

logger = logging.getLogger(__name__)


def keypoints_from_normalized(
    landmarks: Sequence[object],
    width: int,
    height: int,
    *,
    min_confidence: float = MIN_KEYPOINT_CONFIDENCE,
) -> Pose:
    """Convierte los 33 landmarks normalizados de BlazePose a una ``Pose`` en píxeles.

    Solo se conservan los índices presentes en ``MEDIAPIPE_INDEX_MAP``; la
    ``visibility`` de MediaPipe actúa como confianza y los puntos por debajo de
    ``min_confidence`` se omiten.
    """

    keypoints = []
    for index, name in MEDIAPIPE_INDEX_MAP.items():
        if index >= len(landmarks):
            continue
        lm = landmarks[index]
        confidence = float(getattr(lm, "visibility", 1.0))
        if not np.isfinite(confidence) or confidence < min_confidence:
            continue
        keypoints.append(
            Keypoint(
                name=name,
                x=float(lm.x) * width,
                y=float(lm.y) * height,
                confidence=confidence,
            )
        )
    return Pose(keypoints)


class MediaPipePoseEstimator(PoseEstimatorBase):
    """BlazePose a través de ``mediapipe.solutions.pose`` en modo vídeo."""

    def __init__(
        self,
        model_complexity: int = MODEL_COMPLEXITY,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
        min_keypoint_confidence: float = MIN_KEYPOINT_CONFIDENCE,
        smooth_landmarks: bool = POSE_SMOOTH_LANDMARKS,
    ) -> None:
        self.model_complexity = int(model_complexity)
        self.min_detection_confidence = float(min_detection_confidence)
        self.min_tracking_confidence = float(min_tracking_confidence)
        self.min_keypoint_confidence = float(min_keypoint_confidence)
        self.smooth_landmarks = bool(smooth_landmarks)
        # El grafo se crea aquí para que un modelo inexistente falle al cargar
        # y no en el primer frame.
        self.pose = self._create_graph()

    def _create_graph(self):
        from mediapipe.python.solutions import pose as mp_pose

        pose_kwargs = build_pose_kwargs(
            model_complexity=self.model_complexity,
            min_detection_confidence=self.min_detection_confidence,
            min_tracking_confidence=self.min_tracking_confidence,
            smooth_landmarks=self.smooth_landmarks,
        )
        logger.debug("Creating MediaPipe Pose graph (model_complexity=%d)", self.model_complexity)
        return mp_pose.Pose(**pose_kwargs)

    def estimate(self, image_bgr: np.ndarray) -> Optional[Pose]:
        if self.pose is None:
            raise RuntimeError("Estimator is closed")
        height, width = image_bgr.shape[:2]
        rgb_image = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        results = self.pose.process(rgb_image)
        if not results.pose_landmarks:
            return None
        return keypoints_from_normalized(
            results.pose_landmarks.landmark,
            width,
            height,
            min_confidence=self.min_keypoint_confidence,
        )

    def close(self) -> None:
        if self.pose is not None:
            self.pose.close()
            self.pose = None


class MediaPipeTaskEstimator(PoseEstimatorBase):
    """``PoseLandmarker`` de MediaPipe Tasks cargado desde un fichero ``.task`` local."""

    def __init__(
        self,
        model_path: Path | str,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
        min_keypoint_confidence: float = MIN_KEYPOINT_CONFIDENCE,
    ) -> None:
        self.model_path = Path(model_path)
        if not self.model_path.is_file():
            raise FileNotFoundError(f"Pose landmarker model not found: {self.model_path}")
        self.min_detection_confidence = float(min_detection_confidence)
        self.min_tracking_confidence = float(min_tracking_confidence)
        self.min_keypoint_confidence = float(min_keypoint_confidence)
        self._last_timestamp_ms = -1
        self.landmarker = self._create_landmarker()

    def _create_landmarker(self):
        from mediapipe.tasks import python as mp_tasks
        from mediapipe.tasks.python import vision

        options = vision.PoseLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(self.model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_poses=1,
            min_pose_detection_confidence=self.min_detection_confidence,
            min_tracking_confidence=self.min_tracking_confidence,
        )
        logger.debug("Creating PoseLandmarker from %s", self.model_path)
        return vision.PoseLandmarker.create_from_options(options)

    def _next_timestamp_ms(self) -> int:
        # El modo VIDEO exige timestamps estrictamente crecientes.
        now = int(time.monotonic() * 1000)
        timestamp = max(now, self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp
        return timestamp

    def estimate(self, image_bgr: np.ndarray) -> Optional[Pose]:
        if self.landmarker is None:
            raise RuntimeError("Estimator is closed")
        import mediapipe as mp

        height, width = image_bgr.shape[:2]
        rgb_image = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=np.ascontiguousarray(rgb_image))
        result = self.landmarker.detect_for_video(mp_image, self._next_timestamp_ms())
        poses: Iterable[Sequence[object]] = result.pose_landmarks or []
        for landmarks in poses:
            return keypoints_from_normalized(
                landmarks,
                width,
                height,
                min_confidence=self.min_keypoint_confidence,
            )
        return None

    def close(self) -> None:
        if self.landmarker is not None:
            self.landmarker.close()
            self.landmarker = None


__all__ = [
    "MediaPipePoseEstimator",
    "MediaPipeTaskEstimator",
    "keypoints_from_normalized",
]

"""API pública de estimadores de pose disponibles en el paquete."""

from .base import PoseEstimatorBase
from .mediapipe_estimators import MediaPipePoseEstimator, MediaPipeTaskEstimator, keypoints_from_normalized
from .providers import (
    EstimatorProvider,
    LocalTaskModelProvider,
    MediaPipeSolutionProvider,
    build_default_providers,
    load_pose_estimator,
)

__all__ = [
    "PoseEstimatorBase",
    "MediaPipePoseEstimator",
    "MediaPipeTaskEstimator",
    "keypoints_from_normalized",
    "EstimatorProvider",
    "LocalTaskModelProvider",
    "MediaPipeSolutionProvider",
    "build_default_providers",
    "load_pose_estimator",
]

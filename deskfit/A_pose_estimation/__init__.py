"""Exportaciones principales del paquete de estimación y suavizado de pose."""

from .constants import (
    ARM_CHAINS,
    EYES,
    HIPS,
    LANDMARK_COUNT,
    LEG_CHAINS,
    MEDIAPIPE_INDEX_MAP,
    SHOULDERS,
    LandmarkName,
)
from .estimators import (
    EstimatorProvider,
    LocalTaskModelProvider,
    MediaPipePoseEstimator,
    MediaPipeSolutionProvider,
    MediaPipeTaskEstimator,
    PoseEstimatorBase,
    build_default_providers,
    load_pose_estimator,
)
from .smoothing import KeypointSmoother, OneEuroFilter
from .sources import (
    EstimatorPoseSource,
    FrameSource,
    PoseSource,
    ReplayPoseSource,
    VideoCaptureFrameSource,
)
from .types import Keypoint, Pose, PoseSample, as_landmark

__all__ = [
    "LandmarkName",
    "LANDMARK_COUNT",
    "MEDIAPIPE_INDEX_MAP",
    "SHOULDERS",
    "HIPS",
    "EYES",
    "ARM_CHAINS",
    "LEG_CHAINS",
    "Keypoint",
    "Pose",
    "PoseSample",
    "as_landmark",
    "OneEuroFilter",
    "KeypointSmoother",
    "PoseEstimatorBase",
    "MediaPipePoseEstimator",
    "MediaPipeTaskEstimator",
    "EstimatorProvider",
    "LocalTaskModelProvider",
    "MediaPipeSolutionProvider",
    "build_default_providers",
    "load_pose_estimator",
    "FrameSource",
    "VideoCaptureFrameSource",
    "PoseSource",
    "ReplayPoseSource",
    "EstimatorPoseSource",
]

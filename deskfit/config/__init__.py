"""Reexportaciones para permitir ``from deskfit import config``."""

from __future__ import annotations

from .constants import (
    APP_NAME,
    MIN_DETECTION_CONFIDENCE,
    MIN_KEYPOINT_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
    PROJECT_ROOT,
    REP_DEBOUNCE_MS,
)
from .models import (
    CalibrationConfig,
    Config,
    CountingConfig,
    DebugConfig,
    LoopConfig,
    OverlayConfig,
    PoseConfig,
    SmoothingConfig,
)
from .utils import from_yaml, load_default

__all__ = [
    # Models
    "Config",
    "PoseConfig",
    "SmoothingConfig",
    "CalibrationConfig",
    "CountingConfig",
    "LoopConfig",
    "OverlayConfig",
    "DebugConfig",

    # Utilities
    "load_default",
    "from_yaml",

    # Constants
    "APP_NAME",
    "PROJECT_ROOT",
    "MIN_DETECTION_CONFIDENCE",
    "MIN_TRACKING_CONFIDENCE",
    "MIN_KEYPOINT_CONFIDENCE",
    "REP_DEBOUNCE_MS",
]

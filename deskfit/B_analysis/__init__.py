"""Motor de conteo: sesión, calibración, detectores y bucle de detección."""

from .calibration import CalibrationBaseline, CalibrationStore, calibration_measurements
from .detectors import (
    ArmsOverheadDetector,
    BandPullApartDetector,
    BicepCurlDetector,
    KneeRaiseDetector,
    RepDetector,
    SquatDetector,
    SvendChestPressDetector,
    TricepsExtensionDetector,
)
from .loop import DetectionLoop, LoopState, StepOutcome, downcast_trace_df
from .registry import DETECTOR_REGISTRY, create_detector
from .session import ExerciseSession

__all__ = [
    "ExerciseSession",
    "CalibrationBaseline",
    "CalibrationStore",
    "calibration_measurements",
    "RepDetector",
    "ArmsOverheadDetector",
    "SquatDetector",
    "KneeRaiseDetector",
    "BicepCurlDetector",
    "TricepsExtensionDetector",
    "BandPullApartDetector",
    "SvendChestPressDetector",
    "DETECTOR_REGISTRY",
    "create_detector",
    "DetectionLoop",
    "LoopState",
    "StepOutcome",
    "downcast_trace_df",
]

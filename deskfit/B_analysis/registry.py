"""Tabla ``ExerciseType -> detector``: el bucle depende solo de :class:`RepDetector`."""

from __future__ import annotations

from typing import Dict, Optional, Type, Union

from deskfit.config.models import CountingConfig
from deskfit.core.types import ExerciseType, as_exercise
from deskfit.errors import UnsupportedExerciseError

from .calibration import CalibrationStore
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

DETECTOR_REGISTRY: Dict[ExerciseType, Type[RepDetector]] = {
    ExerciseType.SHOULDER_PRESS: ArmsOverheadDetector,
    ExerciseType.LATERAL_RAISE: ArmsOverheadDetector,
    ExerciseType.JUMPING_JACK: ArmsOverheadDetector,
    ExerciseType.LOW_TO_HIGH_CHEST_FLY: ArmsOverheadDetector,
    ExerciseType.SQUAT: SquatDetector,
    ExerciseType.KNEE_RAISE: KneeRaiseDetector,
    ExerciseType.BICEP_CURL: BicepCurlDetector,
    ExerciseType.TRICEPS_EXTENSION: TricepsExtensionDetector,
    ExerciseType.BAND_PULL_APART: BandPullApartDetector,
    ExerciseType.SVEND_CHEST_PRESS: SvendChestPressDetector,
}


def create_detector(
    exercise: Union[str, ExerciseType],
    counting_cfg: Optional[CountingConfig] = None,
    calibration: Optional[CalibrationStore] = None,
) -> RepDetector:
    """Instancia el detector del ejercicio; ``calibration`` solo lo usan los que la requieren."""

    try:
        kind = as_exercise(exercise)
    except ValueError as exc:
        raise UnsupportedExerciseError(str(exc)) from exc
    detector_cls = DETECTOR_REGISTRY.get(kind)
    if detector_cls is None:
        raise UnsupportedExerciseError(f"No detector registered for {kind.value!r}")
    if detector_cls.requires_calibration:
        return detector_cls(counting_cfg, calibration=calibration)  # type: ignore[call-arg]
    return detector_cls(counting_cfg)


__all__ = ["DETECTOR_REGISTRY", "create_detector"]

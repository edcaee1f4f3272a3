"""Variantes de detector, una por familia de ejercicio."""

from .arms import BicepCurlDetector, TricepsExtensionDetector
from .base import RepDetector, StateValue
from .bilateral import BandPullApartDetector, SvendChestPressDetector
from .knee_raise import KneeRaiseDetector
from .overhead import ArmsOverheadDetector
from .squat import SquatDetector

__all__ = [
    "RepDetector",
    "StateValue",
    "ArmsOverheadDetector",
    "SquatDetector",
    "KneeRaiseDetector",
    "BicepCurlDetector",
    "TricepsExtensionDetector",
    "BandPullApartDetector",
    "SvendChestPressDetector",
]

"""Tipos comunes y ajustes de entorno compartidos por todo el paquete."""

from .runtime import configure_environment
from .types import (
    DEFAULT_REPS,
    EXERCISE_HINTS,
    EXERCISE_HUMAN_LABEL,
    EXERCISE_INSTRUCTIONS,
    ExerciseType,
    as_exercise,
    human_label,
)

__all__ = [
    "ExerciseType",
    "as_exercise",
    "human_label",
    "EXERCISE_HUMAN_LABEL",
    "EXERCISE_INSTRUCTIONS",
    "EXERCISE_HINTS",
    "DEFAULT_REPS",
    "configure_environment",
]

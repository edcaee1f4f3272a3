"""Pruebas del catálogo de ejercicios y la normalización de etiquetas."""

import pytest

from deskfit.core.types import (
    DEFAULT_REPS,
    EXERCISE_HINTS,
    EXERCISE_INSTRUCTIONS,
    ExerciseType,
    as_exercise,
    human_label,
)


@pytest.mark.parametrize(
    "label, expected",
    [
        ("squat", ExerciseType.SQUAT),
        ("Squats", ExerciseType.SQUAT),
        ("band-pull-aparts", ExerciseType.BAND_PULL_APART),
        ("  Bicep Curls ", ExerciseType.BICEP_CURL),
        ("svend_press", ExerciseType.SVEND_CHEST_PRESS),
        (ExerciseType.KNEE_RAISE, ExerciseType.KNEE_RAISE),
    ],
)
def test_as_exercise_normalizes_labels(label, expected) -> None:
    assert as_exercise(label) is expected


@pytest.mark.parametrize("label", ["", None, "burpee"])
def test_as_exercise_rejects_unknown_labels(label) -> None:
    with pytest.raises(ValueError):
        as_exercise(label)


def test_every_exercise_has_metadata() -> None:
    for exercise in ExerciseType:
        assert DEFAULT_REPS[exercise] > 0
        assert EXERCISE_INSTRUCTIONS[exercise]
        assert human_label(exercise)


def test_svend_press_carries_camera_hint() -> None:
    assert "45-90" in EXERCISE_HINTS[ExerciseType.SVEND_CHEST_PRESS]
    assert human_label("low_to_high_chest_flies") == "Low-to-High Chest Fly"

"""Pruebas del filtro One-Euro y del mapa de filtros por keypoint."""

from __future__ import annotations

import math

import pytest

from deskfit.A_pose_estimation.smoothing import KeypointSmoother, OneEuroFilter, smoothing_factor
from deskfit.A_pose_estimation.types import Keypoint, Pose
from deskfit.config.models import SmoothingConfig

RATE_HZ = 30.0


def _samples_to_reach(flt: OneEuroFilter, target: float, t0: float, tolerance: float) -> int:
    """Número de muestras a 30 Hz hasta quedar a ``tolerance`` de ``target``."""

    for n in range(1, 200):
        value = flt(target, t0 + n / RATE_HZ)
        if abs(value - target) <= tolerance:
            return n
    raise AssertionError("filter never reached the target")


def test_smoothing_factor_matches_closed_form() -> None:
    """``alpha = 1 / (1 + tau/dt)`` con ``tau = 1/(2*pi*fc)``."""

    tau = 1.0 / (2.0 * math.pi * 1.0)
    assert smoothing_factor(1.0, 0.1) == pytest.approx(1.0 / (1.0 + tau / 0.1))


def test_first_sample_passes_through_unfiltered() -> None:
    flt = OneEuroFilter()
    assert not flt.initialized
    assert flt(123.4, 0.0) == 123.4
    assert flt.initialized


def test_constant_input_converges_monotonically_within_one_percent() -> None:
    """Una entrada constante durante 30 muestras deja la salida a menos del 1%."""

    flt = OneEuroFilter()
    flt(0.0, 0.0)
    outputs = [flt(100.0, n / RATE_HZ) for n in range(1, 31)]

    assert all(b >= a for a, b in zip(outputs, outputs[1:]))
    assert all(value <= 100.0 for value in outputs)
    assert abs(outputs[-1] - 100.0) <= 1.0


def test_step_is_tracked_faster_after_fast_motion_than_after_rest() -> None:
    """El corte adaptativo sigue antes un salto si la señal ya se movía deprisa."""

    static = OneEuroFilter()
    t = 0.0
    for n in range(31):
        t = n / RATE_HZ
        static(0.0, t)
    static_samples = _samples_to_reach(static, 10.0, t, tolerance=0.5)

    moving = OneEuroFilter()
    t = 0.0
    for n, value in enumerate(range(-300, 1, 10)):
        t = n / RATE_HZ
        moving(float(value), t)
    assert abs(moving.last_derivative) > 100.0
    moving_samples = _samples_to_reach(moving, 10.0, t, tolerance=0.5)

    assert moving_samples < static_samples


def test_repeated_timestamp_does_not_divide_by_zero() -> None:
    flt = OneEuroFilter()
    flt(1.0, 5.0)
    value = flt(2.0, 5.0)
    assert math.isfinite(value)


def test_invalid_cutoff_is_rejected() -> None:
    with pytest.raises(ValueError):
        OneEuroFilter(min_cutoff=0.0)


def test_each_landmark_axis_has_independent_state() -> None:
    smoother = KeypointSmoother()
    smoother.filter("left_wrist", "x", 10.0, 0.0)
    smoother.filter("left_wrist", "y", 500.0, 0.0)
    smoother.filter("right_wrist", "x", -40.0, 0.0)

    assert len(smoother) == 3
    # Primera muestra de un eje nuevo: sin filtrar, sin influencia de los demás.
    assert smoother.filter("right_wrist", "y", 7.0, 0.1) == 7.0


def test_unknown_axis_raises() -> None:
    with pytest.raises(ValueError):
        KeypointSmoother().filter("nose", "z", 1.0, 0.0)


def test_missing_landmark_keeps_its_filter_state() -> None:
    """Un landmark que desaparece conserva su historial para cuando reaparece."""

    smoother = KeypointSmoother()
    smoother.smooth_pose(Pose.from_xy({"nose": (0.0, 0.0), "left_eye": (5.0, 5.0)}), 0.0)
    smoother.smooth_pose(Pose.from_xy({"left_eye": (5.0, 5.0)}), 33.0)
    smoothed = smoother.smooth_pose(Pose.from_xy({"nose": (100.0, 100.0)}), 66.0)

    nose = smoothed["nose"]
    assert 0.0 < nose.x < 100.0
    assert 0.0 < nose.y < 100.0


def test_smooth_pose_passes_confidence_through_and_converts_milliseconds() -> None:
    smoother = KeypointSmoother()
    smoother.smooth_pose(Pose([Keypoint("nose", 0.0, 0.0, 0.9)]), 0.0)
    smoothed = smoother.smooth_pose(Pose([Keypoint("nose", 10.0, 0.0, 0.4)]), 1000.0)

    expected = OneEuroFilter()
    expected(0.0, 0.0)
    assert smoothed["nose"].x == pytest.approx(expected(10.0, 1.0))
    assert smoothed["nose"].confidence == 0.4


def test_reset_forgets_every_filter() -> None:
    smoother = KeypointSmoother()
    smoother.filter("nose", "x", 0.0, 0.0)
    smoother.reset()
    assert len(smoother) == 0
    assert smoother.filter("nose", "x", 50.0, 0.1) == 50.0


def test_disabled_smoother_returns_raw_values() -> None:
    smoother = KeypointSmoother.from_config(SmoothingConfig(enabled=False))
    smoother.filter("nose", "x", 0.0, 0.0)
    assert smoother.filter("nose", "x", 80.0, 0.01) == 80.0
    assert len(smoother) == 0

"""Pruebas de las máquinas de estados por flancos de cada familia de ejercicio."""

from __future__ import annotations

import pytest

from deskfit.B_analysis.calibration import CalibrationStore
from deskfit.B_analysis.detectors import (
    ArmsOverheadDetector,
    BandPullApartDetector,
    BicepCurlDetector,
    KneeRaiseDetector,
    SquatDetector,
    SvendChestPressDetector,
    TricepsExtensionDetector,
)
from deskfit.B_analysis.registry import DETECTOR_REGISTRY, create_detector
from deskfit.B_analysis.session import ExerciseSession
from deskfit.config.models import CountingConfig
from deskfit.core.types import ExerciseType
from deskfit.errors import UnsupportedExerciseError

ARMS_UP = {"left_wrist": (240.0, 50.0), "right_wrist": (360.0, 50.0)}


def _edges(detector, poses, step_ms: float = 1000.0) -> list[int]:
    return [detector.observe(pose, i * step_ms) for i, pose in enumerate(poses)]


# --- Brazos por encima de los hombros ------------------------------------------------

def test_arms_overhead_counts_rising_edge_only(pose_factory) -> None:
    detector = ArmsOverheadDetector()
    down, up = pose_factory(), pose_factory(ARMS_UP)
    one_arm = pose_factory({"left_wrist": (240.0, 50.0)})

    assert _edges(detector, [down, up, up, down, one_arm, up]) == [0, 1, 0, 0, 0, 1]
    assert detector.state()["active"] is True


def test_arms_already_up_on_first_frame_do_not_count(pose_factory) -> None:
    detector = ArmsOverheadDetector()
    down, up = pose_factory(), pose_factory(ARMS_UP)

    assert _edges(detector, [up, up, down, up]) == [0, 0, 0, 1]


def test_missing_landmarks_skip_the_frame_and_keep_flags(pose_factory) -> None:
    detector = ArmsOverheadDetector()
    detector.observe(pose_factory(ARMS_UP), 0.0)

    assert detector.observe(pose_factory(drop=("left_wrist",)), 100.0) == 0
    assert detector.state()["arms_up"] is True
    # Sin falso flanco al reaparecer con los brazos todavía arriba.
    assert detector.observe(pose_factory(ARMS_UP), 200.0) == 0


def test_monotonic_cap_for_repeated_transitions(pose_factory) -> None:
    """N flancos con objetivo T producen ``min(N, T)`` sin decrecer nunca."""

    detector = ArmsOverheadDetector()
    session = ExerciseSession(ExerciseType.SHOULDER_PRESS, target=5)
    down, up = pose_factory(), pose_factory(ARMS_UP)
    counts = []
    for i in range(16):
        t = i * 1000.0
        session.register_reps(detector.observe(up if i % 2 else down, t), t)
        counts.append(session.count)

    assert counts[-1] == min(8, 5)
    assert counts == sorted(counts)
    assert max(counts) <= 5


# --- Sentadilla ---------------------------------------------------------------------------

def test_squat_scenario_with_fixed_baseline(pose_factory) -> None:
    """Línea base 100/200: umbral 240, la secuencia de caderas cuenta una vez."""

    detector = SquatDetector(calibration=CalibrationStore.seeded(100.0, 200.0))
    session = ExerciseSession(ExerciseType.SQUAT, target=10)
    hips = [180, 180, 180, 180, 250, 250, 100]
    timestamps = [0, 150, 300, 450, 600, 750, 900]

    for hip_y, ts in zip(hips, timestamps):
        pose = pose_factory({"left_hip": (270.0, float(hip_y)), "right_hip": (330.0, float(hip_y))})
        edges = detector.observe(pose, float(ts))
        session.register_reps(edges, float(ts))
        if ts == 600:
            assert edges == 1

    assert session.count == 1
    assert detector.state()["threshold_y"] == pytest.approx(240.0)
    assert detector.state()["waist_y"] == pytest.approx(200.0)


def test_squat_uses_current_frame_until_baseline_is_captured(pose_factory) -> None:
    store = CalibrationStore()
    detector = SquatDetector(calibration=store)

    # Hombros en 100 y caderas en 300: línea base provisional del propio frame.
    assert detector.observe(pose_factory(), 0.0) == 0
    assert detector.observe(pose_factory(), 1000.0) == 0
    assert detector.state()["waist_y"] == pytest.approx(200.0)
    assert detector.state()["baseline_captured"] is False
    assert detector.requires_calibration


def test_squat_first_frame_only_primes_the_state(pose_factory) -> None:
    detector = SquatDetector(calibration=CalibrationStore.seeded(100.0, 200.0))
    squatted = pose_factory({"left_hip": (270.0, 250.0), "right_hip": (330.0, 250.0)})
    standing = pose_factory({"left_hip": (270.0, 180.0), "right_hip": (330.0, 180.0)})

    # Empezar agachado no cuenta; la siguiente bajada sí.
    assert _edges(detector, [squatted, squatted, standing, squatted]) == [0, 0, 0, 1]


def test_squat_counts_with_provisional_baseline_from_the_window(pose_factory) -> None:
    store = CalibrationStore()
    detector = SquatDetector(calibration=store)
    edges = []
    for i, hip_y in enumerate([250.0, 180.0] * 3 + [250.0]):
        store.observe(100.0, hip_y, i * 1000.0)
        pose = pose_factory({"left_hip": (270.0, hip_y), "right_hip": (330.0, hip_y)})
        edges.append(detector.observe(pose, i * 1000.0))

    assert not store.captured
    # Torso más alto de la ventana: 150, umbral 100 + 0.7 * 150.
    assert detector.state()["threshold_y"] == pytest.approx(205.0)
    assert edges == [0, 0, 1, 0, 1, 0, 1]


# --- Elevación de rodilla -----------------------------------------------------------------

def test_knee_raise_counts_exactly_one_knee_up(pose_factory) -> None:
    detector = KneeRaiseDetector()
    standing = pose_factory()
    left_up = pose_factory({"left_knee": (270.0, 310.0)})
    both_up = pose_factory({"left_knee": (270.0, 310.0), "right_knee": (330.0, 310.0)})
    right_up = pose_factory({"right_knee": (330.0, 310.0)})

    assert _edges(detector, [standing, left_up, left_up, both_up, right_up, standing]) == [0, 1, 0, 0, 1, 0]
    # Umbral: cadera (300) + 0.08 * torso (200).
    assert detector.state()["left_knee_threshold_y"] == pytest.approx(316.0)


def test_knee_below_allowance_is_not_raised(pose_factory) -> None:
    detector = KneeRaiseDetector()
    assert detector.observe(pose_factory({"left_knee": (270.0, 320.0)}), 0.0) == 0
    assert detector.state()["left_knee_up"] is False


# --- Curl de bíceps -------------------------------------------------------------------------

def test_bicep_curl_scenario_counts_on_release(pose_factory) -> None:
    detector = BicepCurlDetector()
    session = ExerciseSession(ExerciseType.BICEP_CURL, target=12)
    down = pose_factory()
    curled = pose_factory({"left_wrist": (240.0, 150.0)})

    for pose, ts in [(down, 0.0), (curled, 100.0), (down, 1000.0), (down, 1100.0)]:
        session.register_reps(detector.observe(pose, ts), ts)
        if ts == 100.0:
            assert session.count == 0

    assert session.count == 1


def test_bicep_arms_are_independent(pose_factory) -> None:
    detector = BicepCurlDetector()
    both = pose_factory({"left_wrist": (240.0, 150.0), "right_wrist": (360.0, 150.0)})
    right_only = pose_factory({"right_wrist": (360.0, 150.0)})

    assert detector.observe(both, 0.0) == 0
    assert detector.observe(right_only, 100.0) == 1
    assert detector.observe(pose_factory(), 200.0) == 1


# --- Extensión de tríceps -------------------------------------------------------------------

EYES_LOW = {"left_eye": (290.0, 150.0), "right_eye": (310.0, 150.0)}


def _triceps_pose(pose_factory, elbow_y: float, wrist_y: float):
    overrides = dict(EYES_LOW)
    overrides.update({"left_elbow": (240.0, elbow_y), "left_wrist": (240.0, wrist_y)})
    return pose_factory(overrides)


def test_triceps_counts_flexed_to_extended_with_elbow_above_eyes(pose_factory) -> None:
    detector = TricepsExtensionDetector()
    flexed = _triceps_pose(pose_factory, 120.0, 170.0)
    extended = _triceps_pose(pose_factory, 120.0, 60.0)

    assert _edges(detector, [flexed, extended, extended, flexed, extended]) == [0, 1, 0, 0, 1]
    assert detector.state()["eye_y"] == pytest.approx(150.0)


def test_triceps_forgets_phase_when_elbow_leaves_the_gate(pose_factory) -> None:
    detector = TricepsExtensionDetector()
    flexed = _triceps_pose(pose_factory, 120.0, 170.0)
    elbow_low = _triceps_pose(pose_factory, 200.0, 170.0)
    extended = _triceps_pose(pose_factory, 120.0, 60.0)

    assert _edges(detector, [flexed, elbow_low, extended, flexed, extended]) == [0, 0, 0, 0, 1]


def test_triceps_without_eyes_cannot_be_evaluated(pose_factory) -> None:
    detector = TricepsExtensionDetector()
    detector.observe(_triceps_pose(pose_factory, 120.0, 170.0), 0.0)
    no_eyes = pose_factory({"left_elbow": (240.0, 120.0), "left_wrist": (240.0, 60.0)}, drop=("left_eye", "right_eye"))

    assert detector.observe(no_eyes, 100.0) == 0
    assert detector.state()["left_flexed"] is True


# --- Band pull-apart ------------------------------------------------------------------------

CHEST = {"left_wrist": (280.0, 120.0), "right_wrist": (320.0, 120.0)}
WIDE = {"left_wrist": (100.0, 110.0), "right_wrist": (500.0, 110.0)}
NEAR_A = {"left_wrist": (250.0, 199.0), "right_wrist": (350.0, 205.0)}
NEAR_B = {"left_wrist": (250.0, 199.0), "right_wrist": (350.0, 202.0)}
BOTH_NARROW = {"left_wrist": (250.0, 199.0), "right_wrist": (350.0, 190.0)}


def test_band_pull_apart_hysteresis(pose_factory) -> None:
    """Oscilar cerca del umbral estrecho sin alcanzarlo no cuenta; el ciclo completo sí."""

    detector = BandPullApartDetector()
    sequence = [CHEST, WIDE, NEAR_A, NEAR_B, NEAR_A, NEAR_B, BOTH_NARROW, CHEST, BOTH_NARROW]
    edges = _edges(detector, [pose_factory(o) for o in sequence])

    assert edges == [0, 0, 0, 0, 0, 0, 1, 0, 0]
    assert detector.state()["wide_latched"] is False


def test_band_narrow_without_wide_never_counts(pose_factory) -> None:
    detector = BandPullApartDetector()
    assert sum(_edges(detector, [pose_factory(CHEST), pose_factory(BOTH_NARROW)] * 3)) == 0


def test_band_wide_requires_wrists_near_shoulder_height(pose_factory) -> None:
    detector = BandPullApartDetector()
    detector.observe(pose_factory({"left_wrist": (100.0, 260.0), "right_wrist": (500.0, 260.0)}), 0.0)
    assert detector.state()["wide"] is False


# --- Svend press ----------------------------------------------------------------------------

RETRACTED = {"left_wrist": (280.0, 150.0), "right_wrist": (320.0, 150.0)}
EXTENDED = {"left_wrist": (100.0, 150.0), "right_wrist": (320.0, 150.0)}


def test_svend_press_counts_after_extension_and_full_retraction(pose_factory) -> None:
    detector = SvendChestPressDetector()
    sequence = [RETRACTED, EXTENDED, EXTENDED, RETRACTED, RETRACTED, EXTENDED]

    assert _edges(detector, [pose_factory(o) for o in sequence]) == [0, 0, 0, 1, 0, 0]
    assert detector.state()["extended_latched"] is True


def test_svend_press_needs_both_arms(pose_factory) -> None:
    detector = SvendChestPressDetector()
    detector.observe(pose_factory(EXTENDED), 0.0)
    assert detector.observe(pose_factory(RETRACTED, drop=("right_elbow",)), 100.0) == 0
    assert detector.state()["extended_latched"] is True


# --- Registro -----------------------------------------------------------------------------

def test_every_exercise_has_a_detector() -> None:
    assert set(DETECTOR_REGISTRY) == set(ExerciseType)
    assert DETECTOR_REGISTRY[ExerciseType.LOW_TO_HIGH_CHEST_FLY] is ArmsOverheadDetector


def test_create_detector_accepts_legacy_labels_and_shares_calibration() -> None:
    store = CalibrationStore()
    cfg = CountingConfig(squat_depth_fraction=0.3)
    detector = create_detector("squats", cfg, store)

    assert isinstance(detector, SquatDetector)
    assert detector.calibration is store
    assert detector.cfg.squat_depth_fraction == 0.3
    assert isinstance(create_detector("band_pull_aparts"), BandPullApartDetector)


def test_create_detector_rejects_unknown_exercise() -> None:
    with pytest.raises(UnsupportedExerciseError):
        create_detector("burpee")


def test_reset_restores_initial_flags(pose_factory) -> None:
    detector = BandPullApartDetector()
    detector.observe(pose_factory(WIDE), 0.0)
    detector.reset()
    assert detector.state() == {"wide_latched": False, "wide": False, "narrow": False, "active": False}

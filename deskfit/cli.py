"""Command-line runner: cuenta repeticiones desde la webcam o un vídeo."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from deskfit import config
from deskfit.A_pose_estimation.estimators import build_default_providers, load_pose_estimator
from deskfit.A_pose_estimation.sources import EstimatorPoseSource, VideoCaptureFrameSource
from deskfit.B_analysis.loop import DetectionLoop
from deskfit.core.types import (
    DEFAULT_REPS,
    EXERCISE_HINTS,
    EXERCISE_INSTRUCTIONS,
    ExerciseType,
    as_exercise,
    human_label,
)
from deskfit.errors import EngineError, FrameSourceUnavailableError, ModelUnavailableError

LOGGER = logging.getLogger(__name__)
WINDOW_NAME = config.APP_NAME


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} no es un entero válido") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("El valor debe ser un entero positivo")
    return number


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} no es un entero válido") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("El índice de cámara no puede ser negativo")
    return number


def _exercise(value: str) -> ExerciseType:
    try:
        return as_exercise(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deskfit",
        description="Cuenta repeticiones de un ejercicio a partir de la webcam o de un vídeo.",
    )
    parser.add_argument(
        "--exercise",
        type=_exercise,
        default=ExerciseType.SQUAT,
        help="Ejercicio a contar (p. ej. squat, bicep_curl, band_pull_apart).",
    )
    parser.add_argument(
        "--target",
        type=_positive_int,
        default=None,
        help="Repeticiones objetivo. Si se omite se usa el valor por defecto del ejercicio.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--camera", type=_non_negative_int, default=0, help="Índice de la webcam (por defecto 0).")
    source.add_argument("--video", default=None, help="Ruta a un vídeo para analizar en lugar de la webcam.")
    parser.add_argument("--config", default=None, help="YAML con la configuración a mezclar con los valores base.")
    parser.add_argument(
        "--model-path",
        default=None,
        help="Modelo PoseLandmarker (.task) local que se prueba antes de BlazePose.",
    )
    parser.add_argument("--overlay", action="store_true", help="Muestra el vídeo con la guía visual superpuesta.")
    parser.add_argument(
        "--trace",
        default=None,
        help="Guarda en CSV la traza por iteración del bucle (activa debug.record_trace).",
    )
    parser.add_argument(
        "--list-exercises",
        action="store_true",
        help="Lista los ejercicios disponibles y termina.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Muestra mensajes de log detallados durante la ejecución.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")


def _print_exercises() -> None:
    for exercise in ExerciseType:
        line = f"{exercise.value:<24} {human_label(exercise)} ({DEFAULT_REPS[exercise]} reps)"
        print(line)
        print(f"    {EXERCISE_INSTRUCTIONS[exercise]}")
        hint = EXERCISE_HINTS.get(exercise)
        if hint:
            print(f"    Nota: {hint}")


def _run_windowed(loop: DetectionLoop, source: EstimatorPoseSource) -> int:
    """Ejecuta el bucle en el hilo principal para poder usar ``cv2.imshow``."""

    import cv2

    from deskfit.C_visualization import adaptive_style, draw_counter, draw_overlay

    interval_ms = max(1, int(loop.config.loop.frame_interval_s * 1000))
    label = human_label(loop.exercise)
    styled = False
    loop.start_session()
    try:
        while True:
            outcome = loop.step()
            for count in loop.drain_counts():
                print(f"{label}: {count}/{loop.target}")
            frame = source.last_frame
            if frame is not None:
                if not styled:
                    height, width = frame.shape[:2]
                    loop.overlay_style = adaptive_style(width, height)
                    styled = True
                canvas = frame.copy()
                if outcome.overlay is not None:
                    canvas = draw_overlay(canvas, outcome.overlay)
                draw_counter(canvas, outcome.count, loop.target, label=label)
                cv2.imshow(WINDOW_NAME, canvas)
            key = cv2.waitKey(interval_ms) & 0xFF
            if key in (ord("q"), 27):
                LOGGER.info("Stopped by user")
                break
            if loop.config.loop.stop_at_target and outcome.count >= loop.target:
                break
            if source.exhausted:
                break
    finally:
        loop.teardown()
        cv2.destroyWindow(WINDOW_NAME)
    return loop.final_count


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_exercises:
        _print_exercises()
        return 0

    _configure_logging(args.verbose)

    cfg = config.from_yaml(args.config) if args.config else config.load_default()
    if args.model_path:
        cfg.pose.task_model_path = Path(args.model_path).expanduser()
    if args.overlay:
        cfg.overlay.enabled = True
    if args.trace:
        cfg.debug.record_trace = True

    exercise: ExerciseType = args.exercise
    target = args.target or DEFAULT_REPS[exercise]

    try:
        estimator = load_pose_estimator(build_default_providers(cfg.pose))
    except ModelUnavailableError as exc:
        LOGGER.error("%s", exc)
        print(f"ERROR: no se pudo cargar ningún modelo de pose ({len(exc.attempts)} intentos)", file=sys.stderr)
        return 1

    video_source = Path(args.video).expanduser() if args.video else args.camera
    try:
        frames = VideoCaptureFrameSource(video_source)
    except FrameSourceUnavailableError as exc:
        estimator.close()
        LOGGER.error("%s", exc)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    source = EstimatorPoseSource(frames, estimator)
    label = human_label(exercise)
    loop = DetectionLoop(
        source,
        exercise,
        target,
        config=cfg,
        on_count=None if cfg.overlay.enabled else lambda count: print(f"{label}: {count}/{target}"),
    )

    print(f"{label}: objetivo {target} repeticiones. {EXERCISE_INSTRUCTIONS[exercise]}")
    hint = EXERCISE_HINTS.get(exercise)
    if hint:
        print(f"Nota: {hint}")

    try:
        if cfg.overlay.enabled:
            final_count = _run_windowed(loop, source)
        else:
            final_count = loop.run()
    except KeyboardInterrupt:
        loop.stop()
        loop.teardown()
        final_count = loop.final_count
    except EngineError:
        LOGGER.exception("Detection loop failed")
        return 1

    if args.trace:
        trace_path = Path(args.trace).expanduser()
        trace_path.parent.mkdir(parents=True, exist_ok=True)
        loop.trace_dataframe().to_csv(trace_path, index=False)
        print(f"Traza: {trace_path}")

    print(f"Repeticiones detectadas: {final_count}/{target}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())

"""Bucle cooperativo de detección: ``Idle -> Running -> Idle``.

En cada iteración se pide una muestra a la fuente de poses, se suaviza, se
alimenta la calibración si el ejercicio la necesita, se evalúa el detector y,
opcionalmente, se genera el overlay. La iteración N termina por completo
(incluida la repetición que cuente) antes de que empiece la N+1.

El bucle puede ejecutarse en el hilo llamador (:meth:`DetectionLoop.run`) o en
un ``ThreadPoolExecutor`` de un solo hilo (:meth:`DetectionLoop.start`), de
modo que el hilo de interfaz nunca espera al modelo. La parada es cooperativa:
:meth:`DetectionLoop.stop` impide la siguiente iteración y la que esté en
curso termina con normalidad antes de liberar recursos.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from queue import Empty, SimpleQueue
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from deskfit.A_pose_estimation.constants import AXES, LandmarkName
from deskfit.A_pose_estimation.smoothing import KeypointSmoother
from deskfit.A_pose_estimation.sources import PoseSource
from deskfit.A_pose_estimation.types import Pose, PoseSample
from deskfit.C_visualization.overlay import OverlayFrame, build_overlay
from deskfit.C_visualization.styles import OverlayStyle
from deskfit.config.models import Config
from deskfit.core.types import ExerciseType, as_exercise
from deskfit.errors import UnsupportedExerciseError

from .calibration import CalibrationStore, calibration_measurements
from .detectors.base import RepDetector
from .registry import create_detector
from .session import ExerciseSession

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class StepOutcome:
    """Resultado de una iteración; ``pose_ok`` es ``False`` si el frame se saltó."""

    timestamp_ms: Optional[float]
    pose_ok: bool
    count: int
    delta: int = 0
    edges: int = 0
    smoothed_pose: Optional[Pose] = None
    detector_state: Mapping[str, Any] = field(default_factory=dict)
    overlay: Optional[OverlayFrame] = None


def downcast_trace_df(df: pd.DataFrame) -> pd.DataFrame:
    """Convertir columnas numéricas a tipos más pequeños para ahorrar memoria."""

    if df is None or df.empty:
        return df

    for col in ("iteration", "count", "delta", "edges"):
        if col in df.columns:
            df[col] = df[col].astype(np.int32, copy=False)
    if "pose_ok" in df.columns:
        df["pose_ok"] = df["pose_ok"].astype(bool, copy=False)

    float_cols = [c for c in df.columns if c.startswith(("x_", "y_"))]
    if "timestamp_ms" in df.columns:
        float_cols.append("timestamp_ms")
    for column in float_cols:
        df[column] = df[column].astype(np.float32, copy=False)
    return df


class DetectionLoop:
    """Conductor por frames de una única sesión de ejercicio."""

    def __init__(
        self,
        source: PoseSource,
        exercise: Union[str, ExerciseType],
        target: int,
        *,
        config: Optional[Config] = None,
        on_count: Optional[Callable[[int], None]] = None,
        on_overlay: Optional[Callable[[OverlayFrame], None]] = None,
        estimator_resources: Iterable[Any] = (),
        overlay_style: Optional[OverlayStyle] = None,
    ) -> None:
        try:
            self.exercise = as_exercise(exercise)
        except ValueError as exc:
            raise UnsupportedExerciseError(str(exc)) from exc
        self.config = config.copy() if config is not None else Config()
        # Valida el objetivo antes de arrancar: un error de parámetros debe
        # aparecer al construir el bucle, no en el hilo de trabajo.
        ExerciseSession(self.exercise, target, debounce_ms=self.config.counting.debounce_ms)
        self.target = int(target)
        self.source = source
        self.on_count = on_count
        self.on_overlay = on_overlay
        self.estimator_resources = list(estimator_resources)
        self.overlay_style = overlay_style or OverlayStyle()

        self.state = LoopState.IDLE
        self.session: Optional[ExerciseSession] = None
        self.smoother: Optional[KeypointSmoother] = None
        self.calibration: Optional[CalibrationStore] = None
        self.detector: Optional[RepDetector] = None
        self.last_outcome: Optional[StepOutcome] = None
        self.final_count = 0

        self._counts: SimpleQueue = SimpleQueue()
        self._stop_event = threading.Event()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._future: Optional[Future] = None
        self._trace_rows: List[Dict[str, Any]] = []
        self._iteration = 0

    # --- Ciclo de vida --------------------------------------------------------
    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    @property
    def count(self) -> int:
        return self.session.count if self.session is not None else self.final_count

    def start_session(self, source: Optional[PoseSource] = None) -> ExerciseSession:
        """Pasa a ``Running`` con contador, filtros, calibración y detector nuevos."""

        if self.running:
            raise RuntimeError("Detection loop is already running")
        if source is not None:
            self.source = source
        cfg = self.config
        self.session = ExerciseSession(self.exercise, self.target, debounce_ms=cfg.counting.debounce_ms)
        self.smoother = KeypointSmoother.from_config(cfg.smoothing)
        self.calibration = CalibrationStore(cfg.calibration)
        self.detector = create_detector(self.exercise, cfg.counting, self.calibration)
        self.final_count = 0
        self.last_outcome = None
        self._trace_rows = []
        self._iteration = 0
        self._stop_event.clear()
        self.state = LoopState.RUNNING
        logger.info(
            "Detection session started: exercise=%s target=%d detector=%s config=%s",
            self.exercise.value,
            self.target,
            type(self.detector).__name__,
            cfg.fingerprint()[:10],
        )
        return self.session

    def stop(self) -> None:
        """Señal de parada cooperativa: la iteración en curso termina antes de salir."""

        self._stop_event.set()

    def teardown(self) -> None:
        """Libera la fuente y el modelo y reinicia todo el estado de la sesión."""

        if self.session is not None:
            self.final_count = self.session.count
        # Un fallo al cerrar no debe dejar la sesión a medio desmontar.
        for resource in [self.source, *self.estimator_resources]:
            try:
                resource.close()
            except Exception:
                logger.exception("Failed to close %s during teardown", type(resource).__name__)
        if self.smoother is not None:
            self.smoother.reset()
        if self.calibration is not None:
            self.calibration.reset()
        if self.detector is not None:
            self.detector.reset()
        self.session = None
        self.smoother = None
        self.calibration = None
        self.detector = None
        was_running = self.running
        self.state = LoopState.IDLE
        if was_running:
            logger.info(
                "Detection session stopped: exercise=%s count=%d/%d",
                self.exercise.value,
                self.final_count,
                self.target,
            )

    # --- Iteración --------------------------------------------------------------
    def _poll(self) -> Optional[PoseSample]:
        try:
            return self.source.poll()
        except Exception:
            logger.exception("Pose source failed; skipping frame")
            return None

    def _publish_count(self, count: int) -> None:
        self._counts.put(count)
        if self.on_count is not None:
            self.on_count(count)

    def step(self) -> StepOutcome:
        """Ejecuta una iteración completa; nunca espera a que el modelo termine."""

        if not self.running or self.session is None:
            raise RuntimeError("Detection loop is not running; call start_session() first")
        session = self.session
        self._iteration += 1

        sample = self._poll()
        pose = sample.pose.filtered(self.config.pose.min_keypoint_confidence) if sample is not None else None
        if sample is None or not pose:
            logger.debug("Iteration %d skipped: no usable pose", self._iteration)
            outcome = StepOutcome(
                timestamp_ms=sample.timestamp_ms if sample is not None else None,
                pose_ok=False,
                count=session.count,
                detector_state=self.detector.state(),  # type: ignore[union-attr]
            )
            self._record(outcome)
            self.last_outcome = outcome
            return outcome

        timestamp_ms = float(sample.timestamp_ms)
        smoothed = self.smoother.smooth_pose(pose, timestamp_ms)  # type: ignore[union-attr]

        detector = self.detector
        if detector.requires_calibration:  # type: ignore[union-attr]
            measurements = calibration_measurements(smoothed)
            if measurements is not None:
                self.calibration.observe(*measurements, timestamp_ms)  # type: ignore[union-attr]

        edges = detector.observe(smoothed, timestamp_ms)  # type: ignore[union-attr]
        delta = session.register_reps(edges, timestamp_ms)
        if delta:
            self._publish_count(session.count)
        detector_state = detector.state()  # type: ignore[union-attr]

        overlay = None
        if self.config.overlay.enabled or self.on_overlay is not None:
            overlay = self._build_overlay(smoothed, detector_state, sample)
            if overlay is not None and self.on_overlay is not None:
                self.on_overlay(overlay)

        outcome = StepOutcome(
            timestamp_ms=timestamp_ms,
            pose_ok=True,
            count=session.count,
            delta=delta,
            edges=edges,
            smoothed_pose=smoothed,
            detector_state=detector_state,
            overlay=overlay,
        )
        self._record(outcome)
        self.last_outcome = outcome
        return outcome

    def _build_overlay(
        self, smoothed: Pose, detector_state: Mapping[str, Any], sample: PoseSample
    ) -> Optional[OverlayFrame]:
        overlay_cfg = self.config.overlay
        display_size = None
        if overlay_cfg.display_width and overlay_cfg.display_height:
            display_size = (int(overlay_cfg.display_width), int(overlay_cfg.display_height))
        try:
            return build_overlay(
                smoothed,
                self.exercise,
                detector_state,
                sample.frame_size,
                display_size,
                device_pixel_ratio=overlay_cfg.device_pixel_ratio,
                style=self.overlay_style,
            )
        except ValueError as exc:
            logger.debug("Overlay skipped: %s", exc)
            return None

    def run(self, stop_event: Optional[threading.Event] = None) -> int:
        """Itera hasta recibir la parada, alcanzar el objetivo o agotar la fuente.

        Devuelve el contador final. Siempre libera los recursos al salir.
        """

        if not self.running:
            self.start_session()
        interval = max(0.0, float(self.config.loop.frame_interval_s))
        try:
            while not self._stop_event.is_set() and not (stop_event is not None and stop_event.is_set()):
                self.step()
                if self.config.loop.stop_at_target and self.session.completed:  # type: ignore[union-attr]
                    logger.info("Target of %d reps reached", self.target)
                    break
                if self.source.exhausted:
                    logger.info("Pose source exhausted; ending session")
                    break
                if interval:
                    self._stop_event.wait(interval)
        finally:
            self.teardown()
        return self.final_count

    def start(self, stop_event: Optional[threading.Event] = None) -> Future:
        """Lanza :meth:`run` en un ``ThreadPoolExecutor`` de un solo hilo."""

        if self._future is not None and not self._future.done():
            raise RuntimeError("Detection loop is already running")
        self.start_session()
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="detection-loop")
        self._future = self._executor.submit(self.run, stop_event)
        return self._future

    def join(self, timeout: Optional[float] = None) -> int:
        """Espera al hilo de trabajo, apaga el ejecutor y devuelve el contador final."""

        if self._future is None:
            return self.final_count
        result = self._future.result(timeout=timeout)
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        self._future = None
        return result

    # --- Salidas ------------------------------------------------------------------
    def drain_counts(self) -> List[int]:
        """Vacía la cola de contadores publicados desde la última llamada."""

        counts: List[int] = []
        while True:
            try:
                counts.append(self._counts.get_nowait())
            except Empty:
                break
        return counts

    def _record(self, outcome: StepOutcome) -> None:
        if not self.config.debug.record_trace:
            return
        row: Dict[str, Any] = {
            "iteration": self._iteration,
            "timestamp_ms": np.nan if outcome.timestamp_ms is None else outcome.timestamp_ms,
            "pose_ok": outcome.pose_ok,
            "count": outcome.count,
            "delta": outcome.delta,
            "edges": outcome.edges,
        }
        pose = outcome.smoothed_pose
        for name in LandmarkName:
            kp = pose.get(name) if pose is not None else None
            for axis in AXES:
                row[f"{axis}_{name.value}"] = np.nan if kp is None else getattr(kp, axis)
        self._trace_rows.append(row)

    def trace_dataframe(self) -> pd.DataFrame:
        """Traza por iteración (requiere ``debug.record_trace``) como ``DataFrame``."""

        df = downcast_trace_df(pd.DataFrame.from_records(self._trace_rows))
        logger.debug("trace df shape=%s", df.shape)
        return df


__all__ = ["LoopState", "StepOutcome", "DetectionLoop", "downcast_trace_df"]

"""Fuentes de frames y de poses que alimentan el bucle de detección.

El bucle solo conoce :class:`PoseSource`: en cada iteración pide una muestra y
recibe ``None`` cuando no hay nada nuevo (cámara sin frame, estimador todavía
ocupado o ninguna persona en la imagen). Ninguna de estas situaciones es un
error.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union

import cv2
import numpy as np

from deskfit.config.settings import CAMERA_MAX_FAILED_READS
from deskfit.errors import FrameSourceUnavailableError

from .estimators.base import PoseEstimatorBase
from .types import PoseSample

logger = logging.getLogger(__name__)

Frame = Tuple[np.ndarray, float]


class FrameSource(ABC):
    """Origen de imágenes BGR con su timestamp en milisegundos."""

    @abstractmethod
    def read(self) -> Optional[Frame]:
        """Devuelve ``(frame, timestamp_ms)`` o ``None`` si no hay frame disponible."""

    def grab(self) -> None:
        """Descarta el frame que espera en el dispositivo para que ``read`` entregue el más reciente."""

    @property
    def exhausted(self) -> bool:
        return False

    def close(self) -> None:
        """Libera el dispositivo o fichero (sobrescribible)."""


class VideoCaptureFrameSource(FrameSource):
    """Cámara o fichero de vídeo leído con ``cv2.VideoCapture``.

    Para una cámara el timestamp sale del reloj monótono en el momento del
    ``grab``, y :meth:`grab` se llama en cada iteración del bucle para que el
    búfer del driver no entregue frames atrasados. Una cámara se da por agotada
    si deja de estar abierta o acumula ``max_failed_reads`` lecturas fallidas
    seguidas. Para un fichero se usa la posición del propio vídeo y los frames
    se leen en orden, de modo que el análisis offline reproduce los tiempos
    reales aunque se procese más rápido que en directo.
    """

    def __init__(
        self,
        source: Union[int, str, Path] = 0,
        *,
        clock: Callable[[], float] = time.monotonic,
        max_failed_reads: int = CAMERA_MAX_FAILED_READS,
    ) -> None:
        self.is_file = not isinstance(source, int)
        self.source = str(source) if self.is_file else int(source)
        self.max_failed_reads = max(1, int(max_failed_reads))
        self._clock = clock
        self._exhausted = False
        self._failed_reads = 0
        self._grabbed_ms: Optional[float] = None
        self.capture = cv2.VideoCapture(self.source)
        if not self.capture.isOpened():
            self.capture.release()
            raise FrameSourceUnavailableError(f"Could not open video source {source!r}")
        logger.info("Opened video source %r", source)

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def grab(self) -> None:
        if self.is_file or self._exhausted:
            return
        if self.capture.grab():
            self._grabbed_ms = self._clock() * 1000.0
            self._failed_reads = 0
        else:
            self._read_failed()

    def read(self) -> Optional[Frame]:
        if self._exhausted:
            return None
        if self._grabbed_ms is not None:
            timestamp_ms, self._grabbed_ms = self._grabbed_ms, None
            ok, frame = self.capture.retrieve()
        else:
            ok, frame = self.capture.read()
            if self.is_file:
                timestamp_ms = float(self.capture.get(cv2.CAP_PROP_POS_MSEC))
            else:
                timestamp_ms = self._clock() * 1000.0
        if not ok or frame is None:
            self._read_failed()
            return None
        self._failed_reads = 0
        return frame, timestamp_ms

    def _read_failed(self) -> None:
        if self.is_file:
            logger.info("Video source %r reached end of stream", self.source)
            self._exhausted = True
            return
        self._failed_reads += 1
        if not self.capture.isOpened() or self._failed_reads >= self.max_failed_reads:
            logger.warning(
                "Camera %r stopped delivering frames after %d failed reads; treating it as disconnected",
                self.source,
                self._failed_reads,
            )
            self._exhausted = True

    def close(self) -> None:
        if self.capture is not None:
            self.capture.release()
            self.capture = None
            self._exhausted = True


class PoseSource(ABC):
    """Contrato que consume el bucle de detección."""

    @abstractmethod
    def poll(self) -> Optional[PoseSample]:
        """Devuelve la última muestra lista o ``None``; nunca bloquea esperando al modelo."""

    @property
    def exhausted(self) -> bool:
        """``True`` cuando la fuente ya no producirá más muestras."""
        return False

    def close(self) -> None:
        """Libera los recursos de la fuente (sobrescribible)."""


class ReplayPoseSource(PoseSource):
    """Reproduce muestras grabadas; un ``None`` en la secuencia simula "no listo"."""

    def __init__(self, samples: Iterable[Optional[PoseSample]]) -> None:
        self._samples: Iterator[Optional[PoseSample]] = iter(samples)
        self._exhausted = False
        self.closed = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def poll(self) -> Optional[PoseSample]:
        if self._exhausted:
            return None
        try:
            return next(self._samples)
        except StopIteration:
            self._exhausted = True
            return None

    def close(self) -> None:
        self.closed = True
        self._exhausted = True


class EstimatorPoseSource(PoseSource):
    """Ejecuta el estimador en un hilo aparte y entrega sus resultados sin bloquear.

    En cada ``poll`` se recoge la inferencia terminada (si la hay), se hace
    ``grab`` en la fuente de frames, se envía el siguiente frame cuando el hilo
    queda libre y se devuelve la muestra nueva.
    Cada resultado se entrega una sola vez; mientras el modelo trabaja ``poll``
    devuelve ``None``. Si el estimador es más lento que el bucle, los frames
    intermedios se descartan y siempre se analiza el más reciente.
    """

    def __init__(
        self,
        frames: FrameSource,
        estimator: PoseEstimatorBase,
        *,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self.frames = frames
        self.estimator = estimator
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="pose-estimator")
        self._pending: Optional[Future] = None
        self._pending_frame: Optional[Frame] = None
        self._ready: Optional[PoseSample] = None
        self.last_frame: Optional[np.ndarray] = None
        self._closed = False

    @property
    def exhausted(self) -> bool:
        return self.frames.exhausted and self._pending is None and self._ready is None

    def _collect(self) -> None:
        future = self._pending
        if future is None or not future.done():
            return
        frame, timestamp_ms = self._pending_frame  # type: ignore[misc]
        self._pending = None
        self._pending_frame = None
        pose = future.result()
        self.last_frame = frame
        if pose is None:
            logger.debug("No pose found in frame at %.1f ms", timestamp_ms)
            return
        height, width = frame.shape[:2]
        self._ready = PoseSample(pose=pose, frame_width=width, frame_height=height, timestamp_ms=timestamp_ms)

    def _submit_next(self) -> None:
        if self._pending is not None:
            return
        item = self.frames.read()
        if item is None:
            return
        self._pending_frame = item
        self._pending = self._executor.submit(self.estimator.estimate, item[0])

    def poll(self) -> Optional[PoseSample]:
        if self._closed:
            return None
        try:
            self._collect()
        finally:
            self.frames.grab()
            self._submit_next()
        sample, self._ready = self._ready, None
        return sample

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._pending is not None:
            # La inferencia en curso debe terminar antes de liberar el modelo.
            self._pending.cancel()
            try:
                self._pending.result()
            except Exception:
                logger.debug("Discarding failed in-flight estimation during close", exc_info=True)
            self._pending = None
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        self.estimator.close()
        self.frames.close()


__all__ = [
    "Frame",
    "FrameSource",
    "VideoCaptureFrameSource",
    "PoseSource",
    "ReplayPoseSource",
    "EstimatorPoseSource",
]

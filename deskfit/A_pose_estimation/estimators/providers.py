"""Cadena ordenada de proveedores de estimadores de pose.

Cada proveedor sabe construir un estimador concreto. ``load_pose_estimator``
los prueba en orden y se queda con el primero que carga; solo si todos fallan
se informa al llamador con :class:`~deskfit.errors.ModelUnavailableError`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from deskfit.config.models import PoseConfig
from deskfit.core.runtime import configure_environment
from deskfit.errors import ModelUnavailableError

from .base import PoseEstimatorBase
from .mediapipe_estimators import MediaPipePoseEstimator, MediaPipeTaskEstimator

logger = logging.getLogger(__name__)


class EstimatorProvider(ABC):
    """Estrategia que construye un estimador o lanza una excepción si no puede."""

    name: str = "provider"

    @abstractmethod
    def load(self) -> PoseEstimatorBase:
        """Construye el estimador; cualquier excepción marca el intento como fallido."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class LocalTaskModelProvider(EstimatorProvider):
    """``PoseLandmarker`` a partir de un modelo ``.task`` guardado en disco."""

    def __init__(self, model_path: Path | str, pose_cfg: Optional[PoseConfig] = None) -> None:
        self.model_path = Path(model_path)
        self.pose_cfg = pose_cfg or PoseConfig()
        self.name = f"local-task:{self.model_path.name}"

    def load(self) -> PoseEstimatorBase:
        if not self.model_path.is_file():
            raise FileNotFoundError(f"model file not found: {self.model_path}")
        return MediaPipeTaskEstimator(
            self.model_path,
            min_detection_confidence=self.pose_cfg.min_detection_confidence,
            min_tracking_confidence=self.pose_cfg.min_tracking_confidence,
            min_keypoint_confidence=self.pose_cfg.min_keypoint_confidence,
        )


class MediaPipeSolutionProvider(EstimatorProvider):
    """BlazePose de ``mediapipe.solutions`` con una complejidad concreta."""

    def __init__(self, model_complexity: int, pose_cfg: Optional[PoseConfig] = None) -> None:
        self.model_complexity = int(model_complexity)
        self.pose_cfg = pose_cfg or PoseConfig()
        self.name = f"mediapipe-pose:complexity={self.model_complexity}"

    def load(self) -> PoseEstimatorBase:
        return MediaPipePoseEstimator(
            model_complexity=self.model_complexity,
            min_detection_confidence=self.pose_cfg.min_detection_confidence,
            min_tracking_confidence=self.pose_cfg.min_tracking_confidence,
            min_keypoint_confidence=self.pose_cfg.min_keypoint_confidence,
        )


def build_default_providers(pose_cfg: Optional[PoseConfig] = None) -> List[EstimatorProvider]:
    """Cadena por defecto: modelo local, BlazePose configurado y BlazePose lite."""

    cfg = pose_cfg or PoseConfig()
    providers: List[EstimatorProvider] = []
    if cfg.task_model_path is not None:
        providers.append(LocalTaskModelProvider(cfg.task_model_path, cfg))
    providers.append(MediaPipeSolutionProvider(cfg.model_complexity, cfg))
    if cfg.fallback_model_complexity != cfg.model_complexity:
        providers.append(MediaPipeSolutionProvider(cfg.fallback_model_complexity, cfg))
    return providers


def load_pose_estimator(providers: Iterable[EstimatorProvider]) -> PoseEstimatorBase:
    """Devuelve el primer estimador que carga correctamente.

    Raises:
        ModelUnavailableError: si la cadena está vacía o todos los proveedores fallan.
    """

    configure_environment()
    attempts: List[Tuple[str, str]] = []
    for provider in providers:
        try:
            estimator = provider.load()
        except Exception as exc:
            logger.warning("Pose estimator provider %s failed: %s", provider.name, exc)
            attempts.append((provider.name, f"{type(exc).__name__}: {exc}"))
            continue
        logger.info("Pose estimator loaded from %s", provider.name)
        return estimator
    raise ModelUnavailableError(attempts)


__all__ = [
    "EstimatorProvider",
    "LocalTaskModelProvider",
    "MediaPipeSolutionProvider",
    "build_default_providers",
    "load_pose_estimator",
]

"""Tipos ligeros que describen keypoints, poses y muestras del estimador."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import numpy as np

from .constants import LandmarkName

NameLike = Union[str, LandmarkName]


def as_landmark(name: NameLike) -> LandmarkName:
    """Normaliza un nombre textual a ``LandmarkName`` (lanza ``ValueError`` si no existe)."""

    if isinstance(name, LandmarkName):
        return name
    return LandmarkName(str(name).strip().lower())


@dataclass(frozen=True)
class Keypoint:
    """Un landmark con coordenadas de imagen (píxeles, origen arriba a la izquierda)."""

    name: LandmarkName
    x: float
    y: float
    confidence: float

    def __post_init__(self) -> None:
        if not isinstance(self.name, LandmarkName):
            object.__setattr__(self, "name", as_landmark(self.name))

    @property
    def xy(self) -> Tuple[float, float]:
        return float(self.x), float(self.y)


class Pose(Mapping[LandmarkName, Keypoint]):
    """Colección de keypoints de un frame indexada por nombre de landmark.

    Los nombres son únicos dentro de la pose y los puntos con coordenadas no
    finitas se descartan al construirla; un landmark ausente significa que el
    estimador no lo vio con confianza suficiente en este frame."""

    __slots__ = ("_points",)

    def __init__(self, keypoints: Iterable[Keypoint] = ()) -> None:
        points: Dict[LandmarkName, Keypoint] = {}
        for kp in keypoints:
            if not (np.isfinite(kp.x) and np.isfinite(kp.y)):
                continue
            points[kp.name] = kp
        self._points = points

    @classmethod
    def from_xy(cls, coords: Mapping[NameLike, Tuple[float, float]], confidence: float = 1.0) -> "Pose":
        """Atajo para construir poses a partir de ``{nombre: (x, y)}``."""

        return cls(
            Keypoint(as_landmark(name), float(x), float(y), float(confidence)) for name, (x, y) in coords.items()
        )

    def __getitem__(self, key: NameLike) -> Keypoint:  # type: ignore[override]
        try:
            name = as_landmark(key)
        except ValueError:
            raise KeyError(key) from None
        return self._points[name]

    def __iter__(self) -> Iterator[LandmarkName]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name.value}=({kp.x:.1f}, {kp.y:.1f})" for name, kp in self._points.items())
        return f"Pose({inner})"

    def has(self, *names: NameLike) -> bool:
        return all(as_landmark(name) in self._points for name in names)

    def require(self, *names: NameLike) -> Optional[Tuple[Keypoint, ...]]:
        """Devuelve los keypoints pedidos o ``None`` si falta alguno."""

        try:
            return tuple(self._points[as_landmark(name)] for name in names)
        except KeyError:
            return None

    def filtered(self, min_confidence: float) -> "Pose":
        """Nueva pose sin los puntos por debajo de ``min_confidence``."""

        return Pose(kp for kp in self._points.values() if kp.confidence >= min_confidence)


@dataclass(frozen=True)
class PoseSample:
    """Una pose lista para el bucle junto al tamaño intrínseco del frame."""

    pose: Pose
    frame_width: int
    frame_height: int
    timestamp_ms: float

    @property
    def frame_size(self) -> Tuple[int, int]:
        return int(self.frame_width), int(self.frame_height)


__all__ = ["Keypoint", "Pose", "PoseSample", "as_landmark", "NameLike"]

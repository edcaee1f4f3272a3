"""Estilos del overlay de guía: colores y grosores de cada primitiva.
Agruparlos en una dataclass permite probar estilos alternativos sin tocar la
lógica que decide qué se dibuja."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from deskfit.config import video_landmarks_visualization as vlv

__all__ = ["OverlayStyle", "adaptive_style"]

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class OverlayStyle:
    """Parámetros visuales del overlay (colores BGR, convención de OpenCV)."""

    # Grosor de las líneas que unen los puntos esqueléticos.
    connection_thickness: int = vlv.THICKNESS_DEFAULT
    # Grosor de las líneas de referencia y de umbral.
    guide_thickness: int = vlv.THICKNESS_DEFAULT
    # Radio de los círculos que representan cada punto clave.
    landmark_radius: int = vlv.RADIUS_DEFAULT
    connection_bgr: Color = tuple(vlv.CONNECTION_COLOR)
    active_bgr: Color = tuple(vlv.ACTIVE_COLOR)
    idle_bgr: Color = tuple(vlv.IDLE_COLOR)
    reference_bgr: Color = tuple(vlv.REFERENCE_COLOR)
    threshold_bgr: Color = tuple(vlv.THRESHOLD_COLOR)


def adaptive_style(width: int, height: int) -> OverlayStyle:
    """Calcula un estilo proporcional al tamaño de la superficie de dibujo.
    Así las guías siguen siendo legibles tanto en una ventana pequeña como en
    una pantalla de alta densidad."""

    base = max(1, min(int(width), int(height)))
    thickness = max(2, round(base / 320 * 2))
    radius = max(3, round(base / 320 * 4))
    return OverlayStyle(connection_thickness=thickness, guide_thickness=thickness, landmark_radius=radius)

"""Rutinas de dibujo que pintan las primitivas del overlay sobre un frame BGR."""

from __future__ import annotations

from typing import Optional, Tuple

import cv2
import numpy as np

from .overlay import OverlayFrame

__all__ = ["draw_overlay", "draw_counter"]


def _pt(point: Tuple[float, float]) -> Tuple[int, int]:
    return int(round(point[0])), int(round(point[1]))


def draw_overlay(frame: np.ndarray, overlay: OverlayFrame) -> np.ndarray:
    """Dibuja ``overlay`` sobre ``frame`` (in situ) y lo devuelve.

    Si el frame no tiene el tamaño de la superficie del overlay se redimensiona
    primero, de modo que las coordenadas de pantalla coinciden con los píxeles.
    """

    height, width = frame.shape[:2]
    if overlay.width > 0 and overlay.height > 0 and (width, height) != (overlay.width, overlay.height):
        frame = cv2.resize(frame, (overlay.width, overlay.height), interpolation=cv2.INTER_LINEAR)
    for line in overlay.lines:
        cv2.line(frame, _pt(line.start), _pt(line.end), line.color, line.thickness)
    for circle in overlay.circles:
        cv2.circle(frame, _pt(circle.center), circle.radius, circle.color, -1 if circle.filled else 1)
    return frame


def draw_counter(
    frame: np.ndarray,
    count: int,
    target: int,
    *,
    label: Optional[str] = None,
    color: Tuple[int, int, int] = (255, 255, 255),
) -> np.ndarray:
    """Escribe ``label count/target`` en la esquina superior izquierda."""

    text = f"{count}/{target}" if not label else f"{label}: {count}/{target}"
    cv2.putText(frame, text, (12, 32), cv2.FONT_HERSHEY_SIMPLEX, 0.9, color, 2, cv2.LINE_AA)
    return frame

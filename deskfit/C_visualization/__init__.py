"""Overlay de guía visual: primitivas puras y su dibujo con OpenCV."""

from .drawing import draw_counter, draw_overlay
from .overlay import (
    EXERCISE_LANDMARKS,
    OverlayCircle,
    OverlayFrame,
    OverlayLine,
    build_overlay,
    display_scale,
)
from .styles import OverlayStyle, adaptive_style

__all__ = [
    "OverlayStyle",
    "adaptive_style",
    "OverlayLine",
    "OverlayCircle",
    "OverlayFrame",
    "EXERCISE_LANDMARKS",
    "build_overlay",
    "display_scale",
    "draw_overlay",
    "draw_counter",
]

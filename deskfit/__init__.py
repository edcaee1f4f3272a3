"""DeskFit: conteo de repeticiones en tiempo real a partir de keypoints 2D."""

__version__ = "0.1.0"

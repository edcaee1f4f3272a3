"""Utilidades para cargar configuraciones por defecto o desde archivos YAML.

Un YAML parcial solo necesita declarar las claves que cambian; el resto se
completa con los valores de :func:`load_default`."""
from pathlib import Path

import yaml

from .models import Config, _update_dataclass


def load_default() -> Config:
    """Obtener la configuración por defecto del motor de conteo."""
    return Config()


def from_yaml(path: str | Path) -> Config:
    """Cargar una configuración desde un YAML y mezclarla con los valores base."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    cfg = load_default()
    _update_dataclass(cfg, data)
    return cfg

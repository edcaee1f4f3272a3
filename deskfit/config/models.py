"""Modelos ``dataclass`` que describen la configuración del motor de conteo."""
from __future__ import annotations
from dataclasses import dataclass, field, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import hashlib
import json

# Importa valores por defecto definidos en los módulos de configuración central.
from .constants import (
    DEFAULT_POSE_TASK_MODEL,
    MIN_DETECTION_CONFIDENCE,
    MIN_KEYPOINT_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
    REP_DEBOUNCE_MS,
)
from .settings import (
    BAND_NARROW_MULTIPLIER,
    BAND_WIDE_MULTIPLIER,
    BAND_WRIST_HEIGHT_FRACTION,
    CALIBRATION_MAX_STDDEV,
    CALIBRATION_MIN_SAMPLES,
    CALIBRATION_RELATIVE_MAX,
    CALIBRATION_WINDOW,
    DEFAULT_DEVICE_PIXEL_RATIO,
    DEFAULT_OVERLAY_ENABLED,
    FALLBACK_MODEL_COMPLEXITY,
    KNEE_RAISE_ALLOWANCE,
    LOOP_FRAME_INTERVAL_S,
    MODEL_COMPLEXITY,
    SMOOTHING_BETA,
    SMOOTHING_DERIVATIVE_CUTOFF,
    SMOOTHING_MIN_CUTOFF,
    SQUAT_DEPTH_FRACTION,
    SQUAT_WAIST_FRACTION,
    SVEND_EXTENDED_MULTIPLIER,
    SVEND_RETRACTED_MULTIPLIER,
)


@dataclass
class PoseConfig:
    """Parámetros de la cadena de estimadores de pose."""
    task_model_path: Optional[Path] = DEFAULT_POSE_TASK_MODEL
    model_complexity: int = MODEL_COMPLEXITY
    fallback_model_complexity: int = FALLBACK_MODEL_COMPLEXITY
    min_detection_confidence: float = float(MIN_DETECTION_CONFIDENCE)
    min_tracking_confidence: float = float(MIN_TRACKING_CONFIDENCE)
    min_keypoint_confidence: float = float(MIN_KEYPOINT_CONFIDENCE)


@dataclass
class SmoothingConfig:
    """Constantes del filtro One-Euro aplicado por keypoint y eje."""
    enabled: bool = True
    min_cutoff: float = SMOOTHING_MIN_CUTOFF
    beta: float = SMOOTHING_BETA
    d_cutoff: float = SMOOTHING_DERIVATIVE_CUTOFF


@dataclass
class CalibrationConfig:
    """Ventana y criterios de estabilidad para capturar la línea base."""
    window: int = CALIBRATION_WINDOW
    min_samples: int = CALIBRATION_MIN_SAMPLES
    relative_max: float = CALIBRATION_RELATIVE_MAX
    max_stddev: float = CALIBRATION_MAX_STDDEV


@dataclass
class CountingConfig:
    """Antirrebote y multiplicadores empíricos de cada detector."""
    debounce_ms: float = REP_DEBOUNCE_MS
    squat_waist_fraction: float = SQUAT_WAIST_FRACTION
    squat_depth_fraction: float = SQUAT_DEPTH_FRACTION
    knee_raise_allowance: float = KNEE_RAISE_ALLOWANCE
    band_wide_multiplier: float = BAND_WIDE_MULTIPLIER
    band_wrist_height_fraction: float = BAND_WRIST_HEIGHT_FRACTION
    band_narrow_multiplier: float = BAND_NARROW_MULTIPLIER
    svend_extended_multiplier: float = SVEND_EXTENDED_MULTIPLIER
    svend_retracted_multiplier: float = SVEND_RETRACTED_MULTIPLIER


@dataclass
class LoopConfig:
    """Ritmo del bucle cooperativo de detección."""
    frame_interval_s: float = LOOP_FRAME_INTERVAL_S
    stop_at_target: bool = True


@dataclass
class OverlayConfig:
    """Ajustes de la guía visual opcional."""
    enabled: bool = DEFAULT_OVERLAY_ENABLED
    device_pixel_ratio: float = DEFAULT_DEVICE_PIXEL_RATIO
    display_width: Optional[int] = None
    display_height: Optional[int] = None


@dataclass
class DebugConfig:
    """Ajustes de depuración y diagnósticos del bucle."""
    record_trace: bool = False


@dataclass
class Config:
    """Configuración de alto nivel consumida por el bucle de detección completo."""
    pose: PoseConfig = field(default_factory=PoseConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    calibration: CalibrationConfig = field(default_factory=CalibrationConfig)
    counting: CountingConfig = field(default_factory=CountingConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    overlay: OverlayConfig = field(default_factory=OverlayConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)

    def copy(self) -> "Config":
        """Devuelve una copia profunda del objeto de configuración."""
        return copy.deepcopy(self)

    # --- Serialisation helpers -------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Entrega la configuración como diccionario de Python."""
        return _dataclass_to_dict(self, convert_paths=False)

    def to_serializable_dict(self) -> Dict[str, Any]:
        """Genera una representación serializable en JSON."""
        return _dataclass_to_dict(self, convert_paths=True)

    # --- Fingerprint -----------------------------------------------------------
    def fingerprint(self) -> str:
        """Calcula un hash SHA1 de los parámetros que influyen en el conteo."""
        payload = {
            "smoothing": _dataclass_to_dict(self.smoothing, convert_paths=True),
            "calibration": _dataclass_to_dict(self.calibration, convert_paths=True),
            "counting": _dataclass_to_dict(self.counting, convert_paths=True),
        }
        encoded = json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")
        return hashlib.sha1(encoded).hexdigest()


# --- Internal utilities -------------------------------------------------------

def _dataclass_to_dict(obj: Any, *, convert_paths: bool = False) -> Any:
    """Convierte recursivamente ``dataclasses`` (y anidados) en diccionarios."""
    if is_dataclass(obj):
        return {key: _dataclass_to_dict(value, convert_paths=convert_paths) for key, value in obj.__dict__.items()}
    if isinstance(obj, dict):
        return {key: _dataclass_to_dict(value, convert_paths=convert_paths) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_dataclass_to_dict(value, convert_paths=convert_paths) for value in obj]
    if isinstance(obj, Path):
        return str(obj) if convert_paths else obj
    return obj


def _update_dataclass(instance: Any, updates: Dict[str, Any]) -> Any:
    """Actualiza recursivamente ``instance`` respetando los límites de cada ``dataclass``."""
    for key, value in updates.items():
        if not hasattr(instance, key):
            continue
        current = getattr(instance, key)
        if is_dataclass(current) and isinstance(value, dict):
            _update_dataclass(current, value)
        elif isinstance(current, Path) and isinstance(value, str):
            setattr(instance, key, Path(value))
        else:
            setattr(instance, key, value)
    return instance

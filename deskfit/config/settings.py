"""Parámetros por defecto del motor de conteo: filtro, calibración y detectores."""

from __future__ import annotations

from .constants import MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE

# --- PARÁMETROS DEL ESTIMADOR ---
# Complejidad del grafo BlazePose de MediaPipe (0/1/2). El modelo "full" (1)
# equilibra precisión y latencia para una webcam en tiempo real.
MODEL_COMPLEXITY = 1

# Complejidad usada por el último proveedor de la cadena (arquitectura "lite").
FALLBACK_MODEL_COMPLEXITY = 0

# El suavizado propio (One-Euro) sustituye al de MediaPipe para que el filtro
# sea explícito y se reinicie con cada sesión.
POSE_SMOOTH_LANDMARKS = False

# --- FILTRO ONE-EURO ---
# Frecuencia de corte mínima (Hz): cuanto menor, más suavizado en reposo.
SMOOTHING_MIN_CUTOFF = 1.0
# Coeficiente de velocidad: cuánto se abre el filtro cuando el punto se mueve.
SMOOTHING_BETA = 0.05
# Corte fijo aplicado a la derivada.
SMOOTHING_DERIVATIVE_CUTOFF = 1.0
# Suelo de ``dt`` para no dividir por cero con timestamps repetidos.
SMOOTHING_MIN_DT_S = 1e-6

# --- CALIBRACIÓN (SENTADILLA) ---
CALIBRATION_WINDOW = 10
CALIBRATION_MIN_SAMPLES = 4
# El frame actual debe estar cerca del torso más largo visto recientemente.
CALIBRATION_RELATIVE_MAX = 0.92
# Desviación típica máxima (píxeles) de la ventana para considerarla estable.
CALIBRATION_MAX_STDDEV = 6.0

# --- UMBRALES DE LOS DETECTORES ---
SQUAT_WAIST_FRACTION = 0.5
SQUAT_DEPTH_FRACTION = 0.2
KNEE_RAISE_ALLOWANCE = 0.08
BAND_WIDE_MULTIPLIER = 1.9
BAND_WRIST_HEIGHT_FRACTION = 0.5
BAND_NARROW_MULTIPLIER = 2.0
SVEND_EXTENDED_MULTIPLIER = 1.5
SVEND_RETRACTED_MULTIPLIER = 1.5

# --- BUCLE DE DETECCIÓN ---
# Pausa entre iteraciones para ceder el hilo (≈30 fps).
LOOP_FRAME_INTERVAL_S = 1.0 / 30.0
# Lecturas fallidas seguidas tras las que una cámara se da por desconectada.
CAMERA_MAX_FAILED_READS = 60

# --- OVERLAY ---
DEFAULT_DEVICE_PIXEL_RATIO = 1.0
DEFAULT_OVERLAY_ENABLED = False


def build_pose_kwargs(
    *,
    model_complexity: int | None = None,
    min_detection_confidence: float | None = None,
    min_tracking_confidence: float | None = None,
    smooth_landmarks: bool | None = None,
) -> dict[str, object]:
    """Configuración estándar para el grafo ``Pose`` de MediaPipe.

    Todas las instancias del motor trabajan sobre vídeo (``static_image_mode``
    desactivado) y sin segmentación, ya que solo se necesitan los keypoints.
    """

    return {
        "static_image_mode": False,
        "model_complexity": MODEL_COMPLEXITY if model_complexity is None else int(model_complexity),
        "smooth_landmarks": POSE_SMOOTH_LANDMARKS if smooth_landmarks is None else bool(smooth_landmarks),
        "enable_segmentation": False,
        "smooth_segmentation": False,
        "min_detection_confidence": (
            MIN_DETECTION_CONFIDENCE if min_detection_confidence is None else float(min_detection_confidence)
        ),
        "min_tracking_confidence": (
            MIN_TRACKING_CONFIDENCE if min_tracking_confidence is None else float(min_tracking_confidence)
        ),
    }

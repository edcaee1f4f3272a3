"""Constantes globales de la aplicación y umbrales base de la estimación de pose."""
from pathlib import Path

# --- CONFIGURACIÓN GENERAL ---
APP_NAME = "DeskFit"

# --- RUTAS DE ARCHIVOS ---
# NOTA: usamos ``parents[2]`` porque este archivo vive en ``deskfit/config/``.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_MODELS_DIR = PROJECT_ROOT / "models"
DEFAULT_POSE_TASK_MODEL = DEFAULT_MODELS_DIR / "pose_landmarker.task"

# --- CONSTANTES DEL ESTIMADOR ---
# Valores ligeramente permisivos: la cámara de escritorio suele tener poca luz
# y el usuario aparece parcialmente recortado.
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5

# Confianza mínima de un keypoint para incluirlo en la ``Pose`` del frame.
MIN_KEYPOINT_CONFIDENCE = 0.3

# --- TIEMPOS DEL CONTADOR ---
# Tiempo mínimo entre dos repeticiones aceptadas en la misma sesión.
REP_DEBOUNCE_MS = 800.0

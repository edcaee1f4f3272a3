"""Parámetros de visualización: conexiones del esqueleto COCO y colores del overlay."""

# --- CONFIGURACIÓN DE VISUALIZACIÓN ---
# Pares de landmarks (por nombre) que se unen para sugerir el esqueleto.
SKELETON_CONNECTIONS = [
    ("left_shoulder", "right_shoulder"),
    ("left_shoulder", "left_elbow"),
    ("left_elbow", "left_wrist"),
    ("right_shoulder", "right_elbow"),
    ("right_elbow", "right_wrist"),
    ("left_shoulder", "left_hip"),
    ("right_shoulder", "right_hip"),
    ("left_hip", "right_hip"),
    ("left_hip", "left_knee"),
    ("left_knee", "left_ankle"),
    ("right_hip", "right_knee"),
    ("right_knee", "right_ankle"),
]

# Colores BGR (convención de OpenCV).
ACTIVE_COLOR = (80, 200, 80)  # Verde: postura objetivo alcanzada
IDLE_COLOR = (0, 165, 255)  # Naranja: fuera de la postura objetivo
REFERENCE_COLOR = (255, 200, 0)  # Cian: líneas de referencia corporales
THRESHOLD_COLOR = (60, 60, 230)  # Rojo: umbrales del detector
CONNECTION_COLOR = (200, 200, 200)  # Gris claro

THICKNESS_DEFAULT = 2
RADIUS_DEFAULT = 5

__all__ = [
    "SKELETON_CONNECTIONS",
    "ACTIVE_COLOR",
    "IDLE_COLOR",
    "REFERENCE_COLOR",
    "THRESHOLD_COLOR",
    "CONNECTION_COLOR",
    "THICKNESS_DEFAULT",
    "RADIUS_DEFAULT",
]

"""Interfaz común de los detectores de repeticiones.

Cada detector es una pequeña máquina de estados por flancos: compara la
condición "postura objetivo alcanzada" del frame actual con la del frame
anterior y solo informa de un flanco en la transición. El antirrebote y el
tope del objetivo los aplica :class:`~deskfit.B_analysis.session.ExerciseSession`,
así que todas las variantes los comparten sin repetirlos.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

from deskfit.A_pose_estimation.types import Pose
from deskfit.config.models import CountingConfig

StateValue = Union[bool, float, None]


class RepDetector(ABC):
    """Contrato ``reset() / observe(pose, timestamp_ms) -> flancos / state()``.

    Si falta algún landmark necesario el detector devuelve ``0`` y conserva sus
    banderas: el frame simplemente no se puede evaluar.
    """

    requires_calibration: bool = False

    def __init__(self, cfg: Optional[CountingConfig] = None) -> None:
        self.cfg = cfg or CountingConfig()
        self.reset()

    @abstractmethod
    def reset(self) -> None:
        """Vuelve al estado inicial de la sesión."""

    @abstractmethod
    def observe(self, pose: Pose, timestamp_ms: float) -> int:
        """Evalúa un frame suavizado y devuelve el número de flancos que cuentan."""

    @abstractmethod
    def state(self) -> Dict[str, StateValue]:
        """Instantánea de las banderas internas; ``active`` indica postura objetivo."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.state()!r})"


__all__ = ["RepDetector", "StateValue"]

"""Estado de una sesión de ejercicio: objetivo, contador y antirrebote compartido."""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Optional

from deskfit.config.constants import REP_DEBOUNCE_MS
from deskfit.core.types import ExerciseType, as_exercise
from deskfit.errors import InvalidSessionError, UnsupportedExerciseError

logger = logging.getLogger(__name__)


@dataclass
class ExerciseSession:
    """Contador de una sesión, propiedad exclusiva del bucle de detección.

    ``count`` nunca decrece ni supera ``target``. Todas las repeticiones pasan
    por :meth:`register_reps`, que aplica la ventana de antirrebote y el tope,
    de modo que cada detector solo decide *cuándo* hay un flanco.
    """

    exercise: ExerciseType
    target: int
    count: int = 0
    last_rep_timestamp_ms: Optional[float] = None
    debounce_ms: float = REP_DEBOUNCE_MS

    def __post_init__(self) -> None:
        try:
            self.exercise = as_exercise(self.exercise)
        except ValueError as exc:
            raise UnsupportedExerciseError(str(exc)) from exc
        if isinstance(self.target, bool) or not isinstance(self.target, numbers.Integral) or self.target <= 0:
            raise InvalidSessionError(f"Target must be a positive integer, got {self.target!r}")
        self.target = int(self.target)

    @property
    def completed(self) -> bool:
        return self.count >= self.target

    def register_reps(self, delta: int, timestamp_ms: float) -> int:
        """Aplica ``delta`` flancos detectados en ``timestamp_ms``; devuelve las repeticiones aceptadas.

        Un flanco solo cuenta si han pasado al menos ``debounce_ms`` desde la
        última repetición aceptada (la primera siempre se acepta). Varios
        flancos en el mismo frame comparten timestamp, así que como mucho uno
        de ellos supera el antirrebote.
        """

        accepted = 0
        for _ in range(max(0, int(delta))):
            if self.completed:
                break
            if (
                self.last_rep_timestamp_ms is not None
                and timestamp_ms - self.last_rep_timestamp_ms < self.debounce_ms
            ):
                logger.debug(
                    "Rep edge at %.1f ms rejected by debounce (last rep at %.1f ms)",
                    timestamp_ms,
                    self.last_rep_timestamp_ms,
                )
                continue
            self.count += 1
            self.last_rep_timestamp_ms = float(timestamp_ms)
            accepted += 1
            logger.info("Rep %d/%d counted for %s", self.count, self.target, self.exercise.value)
        return accepted


__all__ = ["ExerciseSession"]

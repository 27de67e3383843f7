# rubik_demo/logic/moves.py
from __future__ import annotations

from typing import NamedTuple

from rubik_demo.core.cubelet_model import Move

VALID_DIRECTIONS = (-1, 1)


class Turn(NamedTuple):
    """Un giro concreto: capa + dirección. También es la entrada del historial."""

    move: Move
    direction: int

    def inverse(self) -> "Turn":
        """Devuelve el giro que deshace a este (misma capa, dirección opuesta).

        Ejemplos:
            - (RIGHT, +1) -> (RIGHT, -1)
            - (TOP, -1)   -> (TOP, +1)
        """
        return Turn(self.move, -self.direction)

    def cancels(self, other: "Turn") -> bool:
        """Indica si aplicar `other` justo después de este giro lo anula."""
        return other == self.inverse()

    def __str__(self) -> str:
        return f"{self.move.name}{'+' if self.direction > 0 else '-'}"

# rubik_demo/logic/scramble.py
from __future__ import annotations

import random
from typing import Optional

from rubik_demo.core.cubelet_model import Move
from rubik_demo.logic.moves import VALID_DIRECTIONS, Turn

MOVE_COUNT = len(Move)


class RandomMoveGenerator:
    """Genera giros aleatorios para la mezcla (scramble) del cubo.

    La fuente de aleatoriedad se inyecta para poder reproducir secuencias
    exactas en tests: se puede pasar un `random.Random` ya creado o una
    semilla.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        """Crea el generador.

        Args:
            rng: Generador a usar. Si es None se crea uno con `seed`.
            seed: Semilla opcional (sólo se usa si `rng` es None). Si también
                es None, la mezcla será distinta en cada ejecución.
        """
        self.rng: random.Random = rng if rng is not None else random.Random(seed)

    def _draw(self) -> Turn:
        move = Move.from_index(self.rng.randrange(MOVE_COUNT))
        return Turn(move, self.rng.choice(VALID_DIRECTIONS))

    def next(self, exclude_cancel_of: Optional[Turn] = None) -> Turn:
        """Sortea un giro uniforme entre los 12 posibles.

        Sólo se descarta el inverso exacto del giro anterior (por ejemplo,
        evita "RIGHT+ RIGHT-" seguidos); secuencias redundantes más largas
        no se filtran.

        Args:
            exclude_cancel_of: Giro anterior, o None para no excluir nada.

        Returns:
            El giro sorteado.
        """
        while True:
            turn = self._draw()
            if exclude_cancel_of is None or not exclude_cancel_of.cancels(turn):
                return turn

    def scramble_length(self, min_steps: int, max_steps: int) -> int:
        """Sortea la cantidad de giros de una mezcla, uniforme en [min_steps, max_steps].

        Raises:
            ValueError: Si el rango es vacío.
        """
        if max_steps < min_steps:
            raise ValueError("max_steps debe ser mayor o igual que min_steps.")
        return self.rng.randint(min_steps, max_steps)

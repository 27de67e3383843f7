# rubik_demo/core/cubelet_model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple

import numpy as np

from rubik_demo.core import quaternion as qt

Vec3i = Tuple[int, int, int]
CubeSnapshot = Tuple[Tuple[Vec3i, Tuple[float, ...]], ...]


class Move(Enum):
    """Giro de una capa exterior del cubo.

    El orden importa: `value // 2` es el eje (0=x, 1=y, 2=z) y la paridad
    del valor indica la capa (par = -1, impar = +1).
    """

    LEFT = 0
    RIGHT = 1
    BOTTOM = 2
    TOP = 3
    BACK = 4
    FRONT = 5

    @classmethod
    def from_index(cls, index: int) -> "Move":
        """Obtiene el movimiento a partir de su índice 0..5."""
        return cls(index)

    @property
    def axis(self) -> int:
        """Eje de rotación (0=x, 1=y, 2=z)."""
        return self.value // 2

    @property
    def layer(self) -> int:
        """Coordenada de la capa sobre el eje (-1 o +1)."""
        return -1 if self.value % 2 == 0 else 1


@dataclass(eq=False)
class Cubelet:
    """Una de las 26 piezas del cubo.

    Attributes:
        num: Identificador fijo 0..25.
        original_position: Posición en el cubo resuelto (define los colores).
        position: Posición actual, cada componente en {-1, 0, 1}.
        rotation: Orientación actual como cuaternión unitario (w, x, y, z).
    """

    num: int
    original_position: Vec3i
    position: List[int] = field(default_factory=list)
    rotation: np.ndarray = field(default_factory=qt.identity)

    def __post_init__(self) -> None:
        if not self.position:
            self.position = list(self.original_position)

    def colored_faces(self) -> List[bool]:
        """Caras con sticker: [izquierda, derecha, abajo, arriba, atrás, frente]."""
        x, y, z = self.original_position
        return [x == -1, x == 1, y == -1, y == 1, z == -1, z == 1]

    def rotation_sign(self, move: Move) -> int:
        """Signo de la capa de `move` si la pieza está en ella; 0 si no."""
        if self.position[move.axis] == move.layer:
            return move.layer
        return 0

    def is_home(self, tol: float = 1e-5) -> bool:
        """Indica si la pieza está en su posición original y sin rotar."""
        return tuple(self.position) == tuple(self.original_position) and qt.same_rotation(
            self.rotation, qt.identity(), tol
        )


class CubeletModel:
    """Modelo del cubo 3x3x3 como 26 piezas (sin la pieza central).

    Se crea una sola vez en estado resuelto y sólo se modifica mediante
    giros confirmados (`rubik_demo.core.movement.apply_turn`).
    """

    def __init__(self) -> None:
        """Construye las 26 piezas en orden x, y, z (de -1 a 1)."""
        self.cubelets: List[Cubelet] = []
        num = 0
        for x in (-1, 0, 1):
            for y in (-1, 0, 1):
                for z in (-1, 0, 1):
                    if x == 0 and y == 0 and z == 0:
                        continue
                    self.cubelets.append(Cubelet(num, (x, y, z)))
                    num += 1

    def __iter__(self) -> Iterator[Cubelet]:
        return iter(self.cubelets)

    def __len__(self) -> int:
        return len(self.cubelets)

    def __getitem__(self, num: int) -> Cubelet:
        return self.cubelets[num]

    # --------------------------
    # Consultas
    # --------------------------
    def layer(self, move: Move) -> List[Cubelet]:
        """Piezas que están actualmente en la capa de `move` (siempre 9)."""
        return [c for c in self.cubelets if c.position[move.axis] == move.layer]

    def is_solved(self, tol: float = 1e-5) -> bool:
        """Indica si todas las piezas están en su lugar y sin rotar.

        Args:
            tol: Tolerancia para comparar orientaciones.

        Returns:
            True si el cubo está resuelto.
        """
        return all(c.is_home(tol) for c in self.cubelets)

    def positions(self) -> List[Vec3i]:
        """Lista ordenada de posiciones (para comparar como multiconjunto)."""
        return sorted(tuple(c.position) for c in self.cubelets)

    def snapshot(self, decimals: int = 6) -> CubeSnapshot:
        """Estado inmutable y hasheable: posición y orientación redondeada por pieza.

        El cuaternión se normaliza de signo (primera componente no nula
        positiva) para que `q` y `-q` den el mismo snapshot.
        """
        out = []
        for c in self.cubelets:
            q = c.rotation
            lead = next((float(v) for v in q if abs(v) > 10.0 ** -decimals), 1.0)
            if lead < 0:
                q = -q
            out.append((tuple(c.position), tuple(round(float(v), decimals) + 0.0 for v in q)))
        return tuple(out)

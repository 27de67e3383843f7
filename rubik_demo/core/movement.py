# rubik_demo/core/movement.py
from __future__ import annotations

import math
from typing import Dict, List, Tuple

from rubik_demo.core import quaternion as qt
from rubik_demo.core.cubelet_model import Cubelet, CubeletModel, Move

# Cuartos de vuelta precalculados: (eje, signo efectivo) -> cuaternión.
_QUARTER_TURNS: Dict[Tuple[int, int], qt.Quat] = {
    (axis, sign): qt.from_axis_angle(qt.AXES[axis], sign * math.pi / 2.0)
    for axis in range(3)
    for sign in (-1, 1)
}


def quarter_turn(move: Move, direction: int) -> qt.Quat:
    """Rotación de 90°·direction alrededor de `layer·e_axis` para un movimiento.

    Girar sobre `-e_axis` es lo mismo que girar en sentido contrario sobre
    `+e_axis`, así que sólo se guardan 6 cuaterniones.
    """
    return _QUARTER_TURNS[(move.axis, direction * move.layer)]


def apply_turn(model: CubeletModel, move: Move, direction: int) -> List[Cubelet]:
    """Aplica un cuarto de vuelta a la capa de `move`.

    Regla única indexada por eje: para el eje `a` se rotan las otras dos
    coordenadas `b1 = (a+1) % 3` y `b2 = (a+2) % 3`:

        b1' = -s·p·b2
        b2' =  s·p·b1

    con `p` el signo de la capa y `s` la dirección. La orientación se
    compone por la izquierda con la misma rotación y se re-normaliza.
    Las piezas fuera de la capa no se tocan.

    Args:
        model: Cubo a modificar (se modifica in-place).
        move: Capa a girar.
        direction: +1 o -1.

    Returns:
        Las piezas afectadas (siempre 9).

    Raises:
        ValueError: Si `direction` no es +1 ni -1.
    """
    if direction not in (-1, 1):
        raise ValueError(f"Dirección no soportada: {direction}")

    a = move.axis
    b1 = (a + 1) % 3
    b2 = (a + 2) % 3
    k = direction * move.layer
    rotation = quarter_turn(move, direction)

    affected = model.layer(move)
    for item in affected:
        u = item.position[b1]
        v = item.position[b2]
        item.position[b1] = -k * v
        item.position[b2] = k * u
        item.rotation = qt.normalized(qt.multiply(rotation, item.rotation))
    return affected

# rubik_demo/core/quaternion.py
from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

# Cuaterniones como arrays numpy (w, x, y, z) en float64.
Quat = np.ndarray
Vec3f = Tuple[float, float, float]

AXES: Tuple[Vec3f, Vec3f, Vec3f] = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def identity() -> Quat:
    """Cuaternión identidad (sin rotación)."""
    return np.array([1.0, 0.0, 0.0, 0.0])


def from_axis_angle(axis: Sequence[float], angle_rad: float) -> Quat:
    """Construye un cuaternión unitario a partir de eje y ángulo.

    Args:
        axis: Eje de rotación (no necesita estar normalizado).
        angle_rad: Ángulo en radianes (regla de la mano derecha).

    Returns:
        Cuaternión (w, x, y, z).
    """
    v = np.asarray(axis, dtype=float)
    v = v / np.linalg.norm(v)
    half = angle_rad / 2.0
    return np.concatenate(([math.cos(half)], v * math.sin(half)))


def multiply(a: Quat, b: Quat) -> Quat:
    """Producto de Hamilton `a * b` (primero se aplica `b`, luego `a`)."""
    w1, x1, y1, z1 = a
    w2, x2, y2, z2 = b
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ]
    )


def normalized(q: Quat) -> Quat:
    """Re-normaliza `q` a magnitud 1."""
    return q / np.linalg.norm(q)


def rotate_vector(q: Quat, v: Sequence[float]) -> np.ndarray:
    """Aplica la rotación `q` a un vector 3D.

    Args:
        q: Cuaternión unitario.
        v: Vector (x, y, z).

    Returns:
        Vector rotado como array numpy.
    """
    p = np.concatenate(([0.0], np.asarray(v, dtype=float)))
    conj = q * np.array([1.0, -1.0, -1.0, -1.0])
    return multiply(multiply(q, p), conj)[1:]


def same_rotation(a: Quat, b: Quat, tol: float = 1e-5) -> bool:
    """Indica si dos cuaterniones representan la misma rotación.

    `q` y `-q` son la misma rotación (tras 4 cuartos de vuelta el cuaternión
    queda negado), por eso se compara el valor absoluto del producto punto.

    Args:
        a: Primer cuaternión unitario.
        b: Segundo cuaternión unitario.
        tol: Tolerancia permitida.

    Returns:
        True si ambos giran igual dentro de la tolerancia.
    """
    return abs(abs(float(np.dot(a, b))) - 1.0) <= tol


def to_axis_angle(q: Quat) -> Tuple[Vec3f, float]:
    """Convierte un cuaternión unitario a (eje, ángulo en grados).

    Pensado para `glRotatef`. Si la rotación es nula devuelve el eje X y 0°.
    """
    w = max(-1.0, min(1.0, float(q[0])))
    s = math.sqrt(max(0.0, 1.0 - w * w))
    angle = math.degrees(2.0 * math.acos(w))
    if s < 1e-9:
        return AXES[0], 0.0
    return (float(q[1]) / s, float(q[2]) / s, float(q[3]) / s), angle

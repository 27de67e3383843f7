# rubik_demo/render/style.py
from __future__ import annotations

from typing import List, Tuple

Vec3f = Tuple[float, float, float]

COLOR_LEFT: Vec3f = (0.0, 0.35, 1.0)     # azul
COLOR_RIGHT: Vec3f = (0.0, 0.85, 0.0)    # verde
COLOR_BOTTOM: Vec3f = (1.0, 1.0, 0.0)    # amarillo
COLOR_TOP: Vec3f = (1.0, 1.0, 1.0)       # blanco
COLOR_BACK: Vec3f = (0.55, 0.1, 0.75)    # morado
COLOR_FRONT: Vec3f = (1.0, 0.0, 0.0)     # rojo

# Mismo orden que `Cubelet.colored_faces()`
COLORS: List[Vec3f] = [COLOR_LEFT, COLOR_RIGHT, COLOR_BOTTOM, COLOR_TOP, COLOR_BACK, COLOR_FRONT]

COLOR_BEVEL: Vec3f = (0.05, 0.05, 0.06)
COLOR_BACKGROUND: Vec3f = (0.10, 0.10, 0.12)

BEVEL_FRACTION: float = 0.2

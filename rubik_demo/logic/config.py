# rubik_demo/logic/config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MIN_STEPS = 4
MAX_STEPS = 15
RATE = 1.0          # cuartos de vuelta por segundo
DWELL = 3.0         # segundos mostrando el cubo resuelto
ITEM_SPACING = 2.0  # distancia entre centros de piezas


@dataclass(frozen=True)
class DemoConfig:
    """Parámetros de la demo (mezcla, velocidad, pausa y presentación).

    Attributes:
        min_steps: Mínimo de giros por mezcla.
        max_steps: Máximo de giros por mezcla (inclusive).
        rate: Velocidad angular en cuartos de vuelta por segundo.
        dwell: Segundos que se muestra el cubo resuelto antes de mezclar.
        seed: Semilla para el generador aleatorio (None = no reproducible).
        item_spacing: Distancia entre centros de piezas al dibujar.
        tumble: Si True, el cubo entero rota lentamente en pantalla.
    """

    min_steps: int = MIN_STEPS
    max_steps: int = MAX_STEPS
    rate: float = RATE
    dwell: float = DWELL
    seed: Optional[int] = None
    item_spacing: float = ITEM_SPACING
    tumble: bool = True

    def validate(self) -> "DemoConfig":
        """Valida los parámetros y retorna la misma instancia.

        Raises:
            ValueError: Si algún valor está fuera de rango.
        """
        if self.min_steps < 1:
            raise ValueError("min_steps debe ser mayor que 0.")
        if self.max_steps < self.min_steps:
            raise ValueError("max_steps debe ser mayor o igual que min_steps.")
        if self.rate <= 0:
            raise ValueError("rate debe ser mayor que 0.")
        if self.dwell < 0:
            raise ValueError("dwell no puede ser negativo.")
        if self.item_spacing <= 0:
            raise ValueError("item_spacing debe ser mayor que 0.")
        return self

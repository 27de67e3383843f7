# rubik_demo/anim/controller.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from rubik_demo.core import quaternion as qt
from rubik_demo.core.cubelet_model import CubeletModel, Move
from rubik_demo.core.movement import apply_turn
from rubik_demo.logic.config import ITEM_SPACING, DemoConfig
from rubik_demo.logic.moves import Turn
from rubik_demo.logic.scramble import RandomMoveGenerator

logger = logging.getLogger(__name__)

Vec3i = Tuple[int, int, int]
OnCommitCallback = Callable[[Turn, int], None]


# --------------------------
# Estados
# --------------------------
@dataclass(frozen=True)
class ShowSolved:
    """El cubo está resuelto y se muestra quieto desde `since` (segundos)."""

    since: float


@dataclass
class Turning:
    """Un giro en curso. `progress` lleva el signo de `direction` y llega a ±1."""

    move: Move
    direction: int
    progress: float = 0.0


AnimationState = Union[ShowSolved, Turning]


# --------------------------
# Salida por tick
# --------------------------
@dataclass(frozen=True)
class TurnDelta:
    """Rotación extra de una pieza en la capa animada: 90°·fraction sobre +eje."""

    axis: int
    fraction: float

    def rotation(self) -> qt.Quat:
        return qt.from_axis_angle(qt.AXES[self.axis], self.fraction * math.pi / 2.0)

    @property
    def angle_deg(self) -> float:
        return 90.0 * self.fraction


@dataclass(frozen=True)
class CubeletPose:
    """Pose de una pieza para el render.

    Attributes:
        num: Identificador de la pieza.
        position: Posición asentada (enteros en {-1, 0, 1}).
        rotation: Orientación asentada (cuaternión unitario).
        on_active_layer: True si la pieza está en la capa que se está girando.
        turn_delta: Rotación interpolada a componer encima, o None.
    """

    num: int
    position: Vec3i
    rotation: np.ndarray
    on_active_layer: bool
    turn_delta: Optional[TurnDelta] = None

    def world_rotation(self) -> qt.Quat:
        """Orientación final: delta de animación compuesto sobre la asentada."""
        if self.turn_delta is None:
            return self.rotation
        return qt.multiply(self.turn_delta.rotation(), self.rotation)

    def translation(self, spacing: float = ITEM_SPACING) -> np.ndarray:
        """Centro de la pieza en coordenadas del cubo, incluida la animación.

        Args:
            spacing: Distancia entre centros de piezas vecinas.

        Returns:
            Vector (x, y, z).
        """
        center = np.asarray(self.position, dtype=float) * spacing
        if self.turn_delta is None:
            return center
        return qt.rotate_vector(self.turn_delta.rotation(), center)


@dataclass(frozen=True)
class Frame:
    """Todo lo que el render necesita leer en un tick."""

    active_move: Optional[Move]
    direction: int
    progress: float
    poses: List[CubeletPose]
    phase: str = "solved"

    @property
    def is_turning(self) -> bool:
        return self.active_move is not None


# --------------------------
# Controlador
# --------------------------
class AnimationController:
    """Máquina de estados que mezcla el cubo y luego deshace la mezcla, en bucle.

    Ciclo:
        1. `ShowSolved(since)`: espera `dwell` segundos.
        2. Sortea N giros (N en [min_steps, max_steps]) y los anima uno a uno,
           guardándolos en `history`.
        3. Al terminar la mezcla, reproduce `history` al revés con dirección
           negada hasta vaciarla, y vuelve a 1.

    El controlador es el único dueño del modelo: el render sólo lee `Frame`.
    """

    def __init__(
        self,
        model: Optional[CubeletModel] = None,
        generator: Optional[RandomMoveGenerator] = None,
        config: Optional[DemoConfig] = None,
        on_commit: Optional[OnCommitCallback] = None,
    ) -> None:
        """Crea el controlador en estado `ShowSolved(0)`.

        Args:
            model: Cubo a animar (si None, se crea uno resuelto).
            generator: Generador de giros (si None, usa `config.seed`).
            config: Parámetros de la demo.
            on_commit: Callback opcional `(turn, len(history))` que se llama
                justo después de confirmar cada giro. Se pueden sumar más con
                `add_commit_listener`.
        """
        self.config: DemoConfig = (config or DemoConfig()).validate()
        self.model: CubeletModel = model if model is not None else CubeletModel()
        self.generator: RandomMoveGenerator = (
            generator if generator is not None else RandomMoveGenerator(seed=self.config.seed)
        )
        self._commit_listeners: List[OnCommitCallback] = []
        if on_commit is not None:
            self._commit_listeners.append(on_commit)

        self.state: AnimationState = ShowSolved(0.0)
        self.history: List[Turn] = []
        self.scramble_remaining: int = 0
        self.scramble_length: int = 0
        self.cycles: int = 0

    # --------------------------
    # API
    # --------------------------
    @property
    def phase(self) -> str:
        """Fase legible: "solved", "scrambling" o "solving"."""
        if isinstance(self.state, ShowSolved):
            return "solved"
        return "scrambling" if self.scramble_remaining > 0 else "solving"

    def add_commit_listener(self, listener: OnCommitCallback) -> None:
        """Registra otro callback `(turn, len(history))` para cada giro confirmado."""
        self._commit_listeners.append(listener)

    def tick(self, now: float, dt: float) -> Frame:
        """Avanza la animación un frame.

        Args:
            now: Segundos desde el inicio (reloj monótono).
            dt: Segundos desde el tick anterior.

        Returns:
            Las poses de todas las piezas para este tick.
        """
        if isinstance(self.state, ShowSolved):
            if now < self.state.since + self.config.dwell:
                return self.frame()
            self.state = self._start_scramble()

        state = self.state
        state.progress += dt * self.config.rate * state.direction
        if abs(state.progress) >= 1.0:
            completed = self._commit(state)
            self.state = self._next_state(completed, now)

        return self.frame()

    def frame(self) -> Frame:
        """Construye la salida del tick actual sin avanzar el estado."""
        state = self.state
        if isinstance(state, Turning):
            move: Optional[Move] = state.move
            direction, progress = state.direction, state.progress
        else:
            move, direction, progress = None, 0, 0.0

        poses: List[CubeletPose] = []
        for item in self.model:
            sign = item.rotation_sign(move) if move is not None else 0
            delta = TurnDelta(move.axis, sign * progress) if move is not None and sign else None
            poses.append(
                CubeletPose(
                    num=item.num,
                    position=(item.position[0], item.position[1], item.position[2]),
                    rotation=item.rotation.copy(),
                    on_active_layer=sign != 0,
                    turn_delta=delta,
                )
            )
        return Frame(move, direction, progress, poses, self.phase)

    # --------------------------
    # Transiciones
    # --------------------------
    def _start_scramble(self) -> Turning:
        """Sale de `ShowSolved`: sortea la longitud de la mezcla y el primer giro."""
        self.scramble_length = self.generator.scramble_length(
            self.config.min_steps, self.config.max_steps
        )
        self.scramble_remaining = self.scramble_length
        first = self.generator.next()
        logger.info("Scramble #%d: %d giros", self.cycles + 1, self.scramble_length)
        return Turning(first.move, first.direction)

    def _commit(self, state: Turning) -> Turn:
        """Aplica el giro completado al modelo y lo registra si es parte de la mezcla."""
        turn = Turn(state.move, state.direction)
        apply_turn(self.model, turn.move, turn.direction)
        if self.scramble_remaining > 0:
            self.history.append(turn)
            self.scramble_remaining -= 1
        state.progress = 0.0

        logger.debug("Giro confirmado %s (historial=%d)", turn, len(self.history))
        for listener in self._commit_listeners:
            listener(turn, len(self.history))
        return turn

    def _next_state(self, completed: Turn, now: float) -> AnimationState:
        """Decide el siguiente estado en el mismo tick en que terminó un giro."""
        if self.scramble_remaining > 0:
            nxt = self.generator.next(exclude_cancel_of=completed)
            return Turning(nxt.move, nxt.direction)

        if not self.history:
            self.cycles += 1
            logger.info("Cubo resuelto (ciclo %d)", self.cycles)
            return ShowSolved(now)

        popped = self.history.pop()
        undo = popped.inverse()
        return Turning(undo.move, undo.direction)

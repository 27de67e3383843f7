# rubik_demo/render/cube_gl_widget.py
from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Tuple

import numpy as np

from PySide6.QtCore import QElapsedTimer, QTimer, Signal
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glRotatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluLookAt, gluPerspective

from rubik_demo.anim.controller import AnimationController, CubeletPose, Frame
from rubik_demo.core import quaternion as qt
from rubik_demo.logic.moves import Turn
from rubik_demo.render import style

logger = logging.getLogger(__name__)

Vec3f = Tuple[float, float, float]

# Normal y ejes tangentes (u, v) por cara, en el orden de `colored_faces()`.
FACE_FRAMES: List[Tuple[Vec3f, Vec3f, Vec3f]] = [
    ((-1.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 1.0, 0.0)),   # izquierda
    ((1.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 1.0, 0.0)),   # derecha
    ((0.0, -1.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),   # abajo
    ((0.0, 1.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, -1.0)),   # arriba
    ((0.0, 0.0, -1.0), (-1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),  # atrás
    ((0.0, 0.0, 1.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),    # frente
]


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja el cubo y mueve la animación en tiempo real.

    Características:
    - Render OpenGL clásico (sin shaders).
    - Cada pieza es un cuerpo oscuro con stickers biselados en sus caras de color.
    - Un QTimer (~60fps) llama a `AnimationController.tick` una vez por frame.
    - El cubo entero "flota" rotando lentamente (opcional).
    """

    move_applied = Signal(str)
    frame_advanced = Signal(object)

    def __init__(self, controller: AnimationController, parent=None) -> None:
        """Crea el widget y prepara el reloj de la animación (ver `start`).

        Args:
            controller: Controlador que es dueño del modelo del cubo.
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.controller: AnimationController = controller
        self.controller.add_commit_listener(self._on_commit)

        config = controller.config
        self.spacing: float = config.item_spacing
        self.tumble_enabled: bool = config.tumble
        self.item_radius: float = config.item_spacing / 2.0
        self.sticker_offset: float = 0.01

        # Colores fijos: dependen de la posición original de cada pieza.
        self._colored_faces: Dict[int, List[bool]] = {
            item.num: item.colored_faces() for item in controller.model
        }

        # Cámara
        self.eye: Vec3f = (0.0, 12.0, 16.0)
        self._tumble: qt.Quat = qt.identity()

        self._frame: Frame = controller.frame()

        self._clock: QElapsedTimer = QElapsedTimer()
        self._last_time: Optional[float] = None
        self._anim_timer: QTimer = QTimer(self)
        self._anim_timer.setInterval(16)  # ~60fps
        self._anim_timer.timeout.connect(self._on_anim_tick)

    # --------------------------
    # Reloj
    # --------------------------
    def start(self) -> None:
        """Arranca (o reanuda) el reloj y el timer de animación."""
        if not self._clock.isValid():
            self._clock.start()
        self._anim_timer.start()

    def stop(self) -> None:
        """Detiene el timer de animación."""
        self._anim_timer.stop()

    def _on_anim_tick(self) -> None:
        """Tick del timer: avanza el controlador y la rotación del cubo entero."""
        now = self._clock.elapsed() / 1000.0
        dt = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now

        self._frame = self.controller.tick(now, dt)
        if self.tumble_enabled:
            self._advance_tumble(now, dt)

        self.frame_advanced.emit(self._frame)
        self.update()

    def _on_commit(self, turn: Turn, history_len: int) -> None:
        self.move_applied.emit(str(turn))

    def _advance_tumble(self, t: float, dt: float) -> None:
        """Rota el cubo entero sobre sus ejes locales con velocidades oscilantes."""
        rates = (
            math.sin(t * 0.7 + 0.1),
            math.sin(t * 1.5 + 0.5),
            math.sin(t * 0.6 - 0.2),
        )
        for axis, rate in zip(qt.AXES, rates):
            step = qt.from_axis_angle(axis, dt * rate)
            self._tumble = qt.multiply(self._tumble, step)
        self._tumble = qt.normalized(self._tumble)

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(*style.COLOR_BACKGROUND, 1.0)
        glEnable(GL_DEPTH_TEST)
        logger.debug("OpenGL inicializado")

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        aspect = fb_w / float(fb_h)
        gluPerspective(45.0, aspect, 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual: todas las piezas con su pose (y animación)."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        self._apply_camera()

        axis, angle = qt.to_axis_angle(self._tumble)
        glRotatef(angle, *axis)

        glBegin(GL_QUADS)
        for pose in self._frame.poses:
            self._draw_cubelet(pose)
        glEnd()

    def _apply_camera(self) -> None:
        """Cámara fija mirando al centro del cubo."""
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        gluLookAt(*self.eye, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0)

    # --------------------------
    # Render helpers
    # --------------------------
    def _draw_cubelet(self, pose: CubeletPose) -> None:
        """Dibuja una pieza: cuerpo oscuro + stickers en las caras con color.

        Los vértices se transforman en CPU porque se
        dibuja todo dentro de un único `glBegin(GL_QUADS)`.

        Args:
            pose: Pose de la pieza para este frame.
        """
        rotation = pose.world_rotation()
        center = pose.translation(self.spacing)
        colored = self._colored_faces[pose.num]
        r = self.item_radius
        inner = r * (1.0 - style.BEVEL_FRACTION)

        for i, (n, u, v) in enumerate(FACE_FRAMES):
            # Cuerpo
            self._emit_quad(rotation, center, n, u, v, r * 0.98, r * 0.98, style.COLOR_BEVEL)
            if not colored[i]:
                continue
            # Sticker (un poco por encima del cuerpo)
            self._emit_quad(
                rotation, center, n, u, v, r + self.sticker_offset, inner, style.COLORS[i]
            )

    def _emit_quad(
        self,
        rotation: qt.Quat,
        center: np.ndarray,
        n: Vec3f,
        u: Vec3f,
        v: Vec3f,
        depth: float,
        half: float,
        color: Vec3f,
    ) -> None:
        """Emite los 4 vértices de un cuadrado sobre una cara de la pieza.

        Args:
            rotation: Orientación de la pieza.
            center: Centro de la pieza (ya con la animación aplicada).
            n: Normal de la cara (local).
            u: Primer eje tangente (local).
            v: Segundo eje tangente (local).
            depth: Distancia del centro al plano del cuadrado.
            half: Mitad del lado del cuadrado.
            color: Color RGB.
        """
        glColor3f(*color)
        for su, sv in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
            local = [n[k] * depth + u[k] * su * half + v[k] * sv * half for k in range(3)]
            p = qt.rotate_vector(rotation, local) + center
            glVertex3f(float(p[0]), float(p[1]), float(p[2]))

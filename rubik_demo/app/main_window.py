# rubik_demo/app/main_window.py
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QLabel, QMainWindow

from rubik_demo.anim.controller import AnimationController, Frame
from rubik_demo.logic.config import DemoConfig
from rubik_demo.render.cube_gl_widget import CubeGLWidget

logger = logging.getLogger(__name__)

PHASE_LABELS = {
    "solved": "Resuelto ✅",
    "scrambling": "Mezclando 🔄",
    "solving": "Resolviendo ↩",
}


class MainWindow(QMainWindow):
    """Ventana principal de la demo.

    No tiene controles: el cubo se mezcla y se resuelve solo. La barra de
    estado muestra la fase actual, los giros pendientes y el último giro.
    """

    def __init__(self, config: Optional[DemoConfig] = None) -> None:
        """Crea el controlador, el widget OpenGL y la barra de estado.

        Args:
            config: Parámetros de la demo (si None, usa los valores por defecto).
        """
        super().__init__()
        self.setWindowTitle("Rubik Demo")
        self.resize(900, 700)

        # --- Controlador + render ---
        self.controller: AnimationController = AnimationController(config=config)
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.controller, self)
        self.setCentralWidget(self.gl_widget)

        # --- Barra de estado ---
        self.lbl_state = QLabel("")
        self.statusBar().addPermanentWidget(self.lbl_state)
        self._last_phase: str = ""

        # --- Conexiones ---
        self.gl_widget.frame_advanced.connect(self.on_frame_advanced)
        self.gl_widget.move_applied.connect(self.on_move_applied)

        self._refresh_state_label()
        self.gl_widget.start()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh_state_label(self) -> None:
        """Actualiza el label con fase, giros restantes e historial."""
        c = self.controller
        self.lbl_state.setText(
            f"{PHASE_LABELS[c.phase]}  |  mezcla: {c.scramble_remaining}"
            f"  |  historial: {len(c.history)}  |  ciclos: {c.cycles}"
        )

    def on_frame_advanced(self, frame: Frame) -> None:
        """Refresca la barra de estado sólo cuando cambia la fase."""
        phase = frame.phase
        if phase != self._last_phase:
            self._last_phase = phase
            logger.debug("Fase: %s", phase)
            self._refresh_state_label()

    def on_move_applied(self, move: str) -> None:
        """Muestra el último giro confirmado.

        Args:
            move: Giro aplicado (por ejemplo "RIGHT+").
        """
        self.statusBar().showMessage(f"Giro: {move}", 1200)
        self._refresh_state_label()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre de ventana: detiene el timer de animación.

        Args:
            event: Evento de cierre de Qt.
        """
        self.gl_widget.stop()
        event.accept()

# main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from PySide6.QtWidgets import QApplication

from rubik_demo.app.main_window import MainWindow
from rubik_demo.logic.config import DWELL, MAX_STEPS, MIN_STEPS, RATE, DemoConfig


def build_parser() -> argparse.ArgumentParser:
    """Construye el parser de argumentos de línea de comandos."""
    parser = argparse.ArgumentParser(
        description="Cubo Rubik 3D que se mezcla y se resuelve solo, en bucle."
    )
    parser.add_argument("--seed", type=int, default=None, help="semilla para reproducir mezclas")
    parser.add_argument("--min-steps", type=int, default=MIN_STEPS, help="mínimo de giros por mezcla")
    parser.add_argument("--max-steps", type=int, default=MAX_STEPS, help="máximo de giros por mezcla")
    parser.add_argument("--rate", type=float, default=RATE, help="cuartos de vuelta por segundo")
    parser.add_argument("--dwell", type=float, default=DWELL, help="segundos mostrando el cubo resuelto")
    parser.add_argument("--no-tumble", action="store_true", help="no rotar el cubo entero")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="nivel de logging",
    )
    return parser


def parse_config(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Lee los argumentos y arma una `DemoConfig` validada en `args.config`.

    Args:
        argv: Argumentos (sin el nombre del programa). None usa `sys.argv`.

    Returns:
        El namespace de argparse con el atributo extra `config`.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = DemoConfig(
        min_steps=args.min_steps,
        max_steps=args.max_steps,
        rate=args.rate,
        dwell=args.dwell,
        seed=args.seed,
        tumble=not args.no_tumble,
    )
    try:
        args.config = config.validate()
    except ValueError as exc:
        parser.error(str(exc))
    return args


def main() -> NoReturn:
    """Punto de entrada de la aplicación.

    Configura logging, crea la instancia de `QApplication`, construye la
    ventana principal (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    args = parse_config(sys.argv[1:])
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    w = MainWindow(args.config)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

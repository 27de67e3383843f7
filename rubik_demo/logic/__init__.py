from rubik_demo.logic.config import DemoConfig
from rubik_demo.logic.moves import Turn
from rubik_demo.logic.scramble import RandomMoveGenerator

__all__ = ["DemoConfig", "RandomMoveGenerator", "Turn"]

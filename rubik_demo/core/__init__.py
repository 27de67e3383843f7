from rubik_demo.core.cubelet_model import Cubelet, CubeletModel, Move
from rubik_demo.core.movement import apply_turn, quarter_turn

__all__ = ["Cubelet", "CubeletModel", "Move", "apply_turn", "quarter_turn"]

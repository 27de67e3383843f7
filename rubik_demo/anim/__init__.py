from rubik_demo.anim.controller import (
    AnimationController,
    AnimationState,
    CubeletPose,
    Frame,
    ShowSolved,
    Turning,
    TurnDelta,
)

__all__ = [
    "AnimationController",
    "AnimationState",
    "CubeletPose",
    "Frame",
    "ShowSolved",
    "Turning",
    "TurnDelta",
]

from __future__ import annotations

from .controller import (
    ActivationResult,
    AnimationRequest,
    ControllerEvents,
    Selection,
    SelectionController,
)
from .view import BoardView, SquareView

__all__ = [
    "ActivationResult",
    "AnimationRequest",
    "BoardView",
    "ControllerEvents",
    "Selection",
    "SelectionController",
    "SquareView",
]

"""Board model and pseudo-legal move generation.

Pure, deterministic, and side-effect free apart from :func:`commit`.
"""

from __future__ import annotations

from .board import STARTPOS_PLACEMENT, Position
from .move import MoveRecord, commit
from .movegen import PreconditionError, in_bounds, same_color, valid_moves
from .pieces import Color, Kind, Piece, Square

__all__ = [
    "STARTPOS_PLACEMENT",
    "Color",
    "Kind",
    "MoveRecord",
    "Piece",
    "Position",
    "PreconditionError",
    "Square",
    "commit",
    "in_bounds",
    "same_color",
    "valid_moves",
]

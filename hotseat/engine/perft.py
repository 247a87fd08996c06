from __future__ import annotations

from .board import Position
from .move import commit
from .movegen import valid_moves
from .pieces import Color


def perft(position: Position, turn: Color, depth: int) -> int:
    """Count leaf nodes of the pseudo-legal move tree below ``position``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over every destination of every piece of
      ``turn`` of the child position's perft(depth-1), colors alternating.

    Moves are committed by overwrite on a copy, as the controller does, so
    kings can be captured and there is no notion of check.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for origin, piece in list(position.pieces()):
        if piece.color is not turn:
            continue
        for dest in valid_moves(position, origin, piece):
            if depth == 1:
                nodes += 1
                continue
            child = position.copy()
            commit(child, origin, dest)
            nodes += perft(child, turn.opposite(), depth - 1)
    return nodes

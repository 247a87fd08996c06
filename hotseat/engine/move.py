from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import Position
from .pieces import Piece, Square


@dataclass(frozen=True)
class MoveRecord:
    """A committed move.

    Attributes:
        piece (Piece): The piece that moved.
        origin (Square): Square it left.
        destination (Square): Square it landed on.
        captured (Optional[Piece]): Piece overwritten on ``destination``, if any.
    """

    piece: Piece
    origin: Square
    destination: Square
    captured: Optional[Piece] = None

    def to_text(self) -> str:
        """Serialize the move as origin and destination names, e.g. ``"e2e4"``."""
        return self.origin.name + self.destination.name


def commit(position: Position, origin: Square, destination: Square) -> MoveRecord:
    """Move the piece on ``origin`` to ``destination`` in place.

    Whatever stood on ``destination`` is overwritten; it is reported in the
    returned record and otherwise discarded.

    Raises:
        ValueError: If ``origin`` is empty.
    """
    piece = position.piece_at(origin)
    if piece is None:
        raise ValueError(f"no piece on {origin.name}")
    captured = position.place(destination, piece)
    position.clear(origin)
    return MoveRecord(piece, origin, destination, captured)

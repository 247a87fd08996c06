"""Pseudo-legal move generation.

Pure functions over a :class:`Position`. A destination is valid purely in the
movement-pattern sense: nothing here looks at whether the mover's king ends up
attacked.
"""

from __future__ import annotations

from typing import Callable, Dict, Final, Iterable, Set, Tuple

from .board import Position
from .pieces import Color, Kind, Piece, Square


Direction = Tuple[int, int]

ORTHOGONAL: Final = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL: Final = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ALL_DIRECTIONS: Final = ORTHOGONAL + DIAGONAL
KNIGHT_OFFSETS: Final = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

PAWN_FORWARD: Final = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: Final = {Color.WHITE: 6, Color.BLACK: 1}


class PreconditionError(ValueError):
    """Raised when moves are requested for a square not holding the piece."""


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def same_color(a: Piece, b: Piece) -> bool:
    return a.color is b.color


def valid_moves(position: Position, origin: Square, piece: Piece) -> Set[Square]:
    """Compute the destinations ``piece`` may move to from ``origin``.

    Args:
        position (Position): Board to inspect; not modified.
        origin (Square): Square the piece stands on.
        piece (Piece): The piece on ``origin``.

    Returns:
        Set[Square]: Pseudo-legal destination squares. Captures are not
        flagged; a destination holding an enemy piece is a capture.

    Raises:
        PreconditionError: If ``origin`` does not hold ``piece``.
    """
    occupant = position.piece_at(origin)
    if occupant != piece:
        raise PreconditionError(
            f"{origin.name} holds {occupant.char if occupant else 'nothing'}, "
            f"not {piece.char}"
        )
    return _GENERATORS[piece.kind](position, origin, piece)


def pawn_moves(position: Position, origin: Square, piece: Piece) -> Set[Square]:
    moves: Set[Square] = set()
    step = PAWN_FORWARD[piece.color]
    row = origin.row + step
    if not in_bounds(row, origin.col):
        return moves
    ahead = Square(row, origin.col)
    if position.piece_at(ahead) is None:
        moves.add(ahead)
        if origin.row == PAWN_START_ROW[piece.color]:
            two = Square(row + step, origin.col)
            if position.piece_at(two) is None:
                moves.add(two)
    for side in (-1, 1):
        col = origin.col + side
        if not in_bounds(row, col):
            continue
        target = Square(row, col)
        victim = position.piece_at(target)
        if victim is not None and not same_color(piece, victim):
            moves.add(target)
    return moves


def _step_moves(
    position: Position, origin: Square, piece: Piece, offsets: Iterable[Direction]
) -> Set[Square]:
    moves: Set[Square] = set()
    for dr, dc in offsets:
        row, col = origin.row + dr, origin.col + dc
        if not in_bounds(row, col):
            continue
        target = Square(row, col)
        occupant = position.piece_at(target)
        if occupant is None or not same_color(piece, occupant):
            moves.add(target)
    return moves


def knight_moves(position: Position, origin: Square, piece: Piece) -> Set[Square]:
    return _step_moves(position, origin, piece, KNIGHT_OFFSETS)


def king_moves(position: Position, origin: Square, piece: Piece) -> Set[Square]:
    return _step_moves(position, origin, piece, ALL_DIRECTIONS)


def sliding_moves(
    position: Position, origin: Square, piece: Piece, directions: Iterable[Direction]
) -> Set[Square]:
    """Walk each ray outward until the edge or the first occupied square.

    An enemy on the ray is included and ends it; an own piece ends it without
    being included. Each ray is walked independently.
    """
    moves: Set[Square] = set()
    for dr, dc in directions:
        row, col = origin.row + dr, origin.col + dc
        while in_bounds(row, col):
            target = Square(row, col)
            occupant = position.piece_at(target)
            if occupant is not None:
                if not same_color(piece, occupant):
                    moves.add(target)
                break
            moves.add(target)
            row += dr
            col += dc
    return moves


def rook_moves(position: Position, origin: Square, piece: Piece) -> Set[Square]:
    return sliding_moves(position, origin, piece, ORTHOGONAL)


def bishop_moves(position: Position, origin: Square, piece: Piece) -> Set[Square]:
    return sliding_moves(position, origin, piece, DIAGONAL)


def queen_moves(position: Position, origin: Square, piece: Piece) -> Set[Square]:
    return sliding_moves(position, origin, piece, ALL_DIRECTIONS)


_GENERATORS: Dict[Kind, Callable[[Position, Square, Piece], Set[Square]]] = {
    Kind.PAWN: pawn_moves,
    Kind.KNIGHT: knight_moves,
    Kind.BISHOP: bishop_moves,
    Kind.ROOK: rook_moves,
    Kind.QUEEN: queen_moves,
    Kind.KING: king_moves,
}

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Tuple

from ..engine.board import Position
from ..engine.pieces import Color, Square


@dataclass(frozen=True)
class SquareView:
    row: int
    col: int
    name: str
    shade: str  # 'light' or 'dark'
    piece: Optional[str]  # piece letter, uppercase for white
    glyph: Optional[str]
    piece_color: Optional[str]
    selected: bool
    valid_move: bool


@dataclass(frozen=True)
class BoardView:
    """Everything the presentation layer needs to redraw the board."""

    turn: Color
    placement: str
    selected: Optional[Square]
    valid_moves: Tuple[Square, ...]
    animating: bool
    squares: Tuple[SquareView, ...]

    @property
    def turn_label(self) -> str:
        return f"{self.turn.value.capitalize()}'s Turn"


def build_view(
    position: Position,
    turn: Color,
    selected: Optional[Square],
    valid: AbstractSet[Square],
    animating: bool,
) -> BoardView:
    squares: List[SquareView] = []
    for row in range(8):
        for col in range(8):
            sq = Square(row, col)
            piece = position.piece_at(sq)
            squares.append(
                SquareView(
                    row=row,
                    col=col,
                    name=sq.name,
                    shade="light" if (row + col) % 2 == 0 else "dark",
                    piece=piece.char if piece else None,
                    glyph=piece.glyph if piece else None,
                    piece_color=piece.color.value if piece else None,
                    selected=sq == selected,
                    valid_move=sq in valid,
                )
            )
    return BoardView(
        turn=turn,
        placement=position.to_placement(),
        selected=selected,
        valid_moves=tuple(sorted(valid)),
        animating=animating,
        squares=tuple(squares),
    )

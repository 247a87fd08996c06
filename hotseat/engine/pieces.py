from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    def opposite(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE


class Kind(str, Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


# Display glyphs; black uses the filled symbols
GLYPHS = {
    (Kind.KING, Color.WHITE): "♔",
    (Kind.QUEEN, Color.WHITE): "♕",
    (Kind.ROOK, Color.WHITE): "♖",
    (Kind.BISHOP, Color.WHITE): "♗",
    (Kind.KNIGHT, Color.WHITE): "♘",
    (Kind.PAWN, Color.WHITE): "♙",
    (Kind.KING, Color.BLACK): "♚",
    (Kind.QUEEN, Color.BLACK): "♛",
    (Kind.ROOK, Color.BLACK): "♜",
    (Kind.BISHOP, Color.BLACK): "♝",
    (Kind.KNIGHT, Color.BLACK): "♞",
    (Kind.PAWN, Color.BLACK): "♟",
}


@dataclass(frozen=True)
class Piece:
    """A chess piece.

    Attributes:
        kind (Kind): Piece type.
        color (Color): Owning side.
    """

    kind: Kind
    color: Color

    @classmethod
    def from_char(cls, ch: str) -> "Piece":
        """Decode a piece letter (uppercase white, lowercase black).

        Raises:
            ValueError: If ``ch`` is not one of ``pnbrqk`` in either case.
        """
        if len(ch) != 1:
            raise ValueError(f"invalid piece character: {ch!r}")
        try:
            kind = Kind(ch.lower())
        except ValueError as e:
            raise ValueError(f"invalid piece character: {ch!r}") from e
        return cls(kind, Color.WHITE if ch.isupper() else Color.BLACK)

    @property
    def char(self) -> str:
        letter = self.kind.value
        return letter.upper() if self.color is Color.WHITE else letter

    @property
    def glyph(self) -> str:
        return GLYPHS[(self.kind, self.color)]


@dataclass(frozen=True, order=True)
class Square:
    """Board coordinate.

    Row 0 is black's back rank, row 7 is white's. ``(6, 4)`` is ``e2``.

    Attributes:
        row (int): Row index in range 0..7.
        col (int): Column index in range 0..7 (file a..h).
    """

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < 8 and 0 <= self.col < 8):
            raise ValueError(f"square out of bounds: ({self.row}, {self.col})")

    @classmethod
    def parse(cls, name: str) -> "Square":
        """Convert algebraic notation (e.g. ``"e4"``) into a square.

        Raises:
            ValueError: If ``name`` is not a valid square.
        """
        if len(name) != 2 or name[0] < "a" or name[0] > "h" or name[1] < "1" or name[1] > "8":
            raise ValueError(f"invalid square: {name!r}")
        col = ord(name[0]) - ord("a")
        row = 8 - int(name[1])
        return cls(row, col)

    @property
    def name(self) -> str:
        return chr(ord("a") + self.col) + str(8 - self.row)

    def __str__(self) -> str:
        return self.name

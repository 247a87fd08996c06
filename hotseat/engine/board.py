from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .pieces import Piece, Square


STARTPOS_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

Cell = Optional[Piece]


def _empty_grid() -> List[List[Cell]]:
    return [[None] * 8 for _ in range(8)]


@dataclass
class Position:
    """8x8 grid of cells, row-major.

    Notes:
    - Row 0 is the black back rank, row 7 the white back rank.
    - Only the selection controller mutates a live position; the move
      generators treat it as read-only.
    """

    cells: List[List[Cell]] = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> "Position":
        return cls()

    @classmethod
    def startpos(cls) -> "Position":
        """Create a position holding the standard chess starting layout."""
        return cls.from_placement(STARTPOS_PLACEMENT)

    @classmethod
    def from_placement(cls, placement: str) -> "Position":
        """Create a position from the piece-placement field of a FEN string.

        Rows are listed from row 0 (black's back rank) down to row 7, digits
        stand for runs of empty cells.

        Args:
            placement (str): Placement text such as ``"8/8/8/8/4P3/8/8/8"``.

        Returns:
            Position: Position holding the encoded pieces.

        Raises:
            ValueError: If the text is empty, does not have 8 rows, contains an
                invalid character, or a row does not sum to 8 cells.
        """
        if not placement or not isinstance(placement, str):
            raise ValueError("placement must be a non-empty string")
        rows = placement.strip().split("/")
        if len(rows) != 8:
            raise ValueError("placement must have 8 rows")
        pos = cls()
        for row_idx, text in enumerate(rows):
            col = 0
            for ch in text:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in placement row")
                    col += n
                else:
                    if col >= 8:
                        raise ValueError("too many cells in placement row")
                    pos.cells[row_idx][col] = Piece.from_char(ch)
                    col += 1
            if col != 8:
                raise ValueError("placement row does not sum to 8 cells")
        return pos

    def to_placement(self) -> str:
        """Serialize the grid into FEN piece-placement text."""
        rows: List[str] = []
        for row in self.cells:
            run = 0
            out = []
            for cell in row:
                if cell is None:
                    run += 1
                    continue
                if run > 0:
                    out.append(str(run))
                    run = 0
                out.append(cell.char)
            if run > 0:
                out.append(str(run))
            rows.append("".join(out))
        return "/".join(rows)

    def piece_at(self, sq: Square) -> Cell:
        return self.cells[sq.row][sq.col]

    def place(self, sq: Square, piece: Piece) -> Cell:
        """Put ``piece`` on ``sq`` and return whatever it replaced."""
        prev = self.cells[sq.row][sq.col]
        self.cells[sq.row][sq.col] = piece
        return prev

    def clear(self, sq: Square) -> None:
        self.cells[sq.row][sq.col] = None

    def pieces(self) -> Iterator[Tuple[Square, Piece]]:
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell is not None:
                    yield Square(r, c), cell

    def copy(self) -> "Position":
        return Position(cells=[list(row) for row in self.cells])

    def __str__(self) -> str:
        return "\n".join("".join(c.char if c else "." for c in row) for row in self.cells)

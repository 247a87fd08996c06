from __future__ import annotations

import pytest

from hotseat.engine.board import Position
from hotseat.engine.move import MoveRecord, commit
from hotseat.engine.pieces import Color, Kind, Piece, Square


def test_commit_quiet_move() -> None:
    pos = Position.startpos()
    rec = commit(pos, Square.parse("e2"), Square.parse("e4"))
    assert rec == MoveRecord(
        Piece(Kind.PAWN, Color.WHITE), Square.parse("e2"), Square.parse("e4"), None
    )
    assert rec.to_text() == "e2e4"
    assert pos.piece_at(Square.parse("e2")) is None
    assert pos.piece_at(Square.parse("e4")) == Piece(Kind.PAWN, Color.WHITE)


def test_commit_capture_overwrites_destination() -> None:
    pos = Position.from_placement("8/8/8/3p4/4P3/8/8/8")
    rec = commit(pos, Square.parse("e4"), Square.parse("d5"))
    assert rec.captured == Piece(Kind.PAWN, Color.BLACK)
    assert pos.piece_at(Square.parse("d5")) == Piece(Kind.PAWN, Color.WHITE)
    assert len(list(pos.pieces())) == 1


def test_commit_from_empty_square_raises() -> None:
    pos = Position.empty()
    with pytest.raises(ValueError):
        commit(pos, Square(4, 4), Square(3, 4))

from __future__ import annotations

from hotseat.engine.board import Position
from hotseat.engine.movegen import sliding_moves, valid_moves
from hotseat.engine.pieces import Square


def moves_set(pos: Position, name: str) -> set[str]:
    sq = Square.parse(name)
    piece = pos.piece_at(sq)
    assert piece is not None
    return {m.name for m in valid_moves(pos, sq, piece)}


def test_rook_on_empty_board() -> None:
    pos = Position.from_placement("8/8/8/8/3R4/8/8/8")
    assert len(moves_set(pos, "d4")) == 14


def test_queen_on_empty_board() -> None:
    pos = Position.from_placement("8/8/8/8/3Q4/8/8/8")
    assert len(moves_set(pos, "d4")) == 27


def test_bishop_on_empty_board_corner() -> None:
    pos = Position.from_placement("8/8/8/8/8/8/8/B7")
    assert moves_set(pos, "a1") == {"b2", "c3", "d4", "e5", "f6", "g7", "h8"}


def test_ray_stops_on_enemy_inclusive_and_own_exclusive() -> None:
    # White rook d4, black pawn d6, white pawn d2
    pos = Position.from_placement("8/8/3p4/8/3R4/8/3P4/8")
    ms = moves_set(pos, "d4")
    assert {"d5", "d6"}.issubset(ms)
    assert "d7" not in ms and "d8" not in ms
    assert "d3" in ms
    assert "d2" not in ms and "d1" not in ms
    # Sideways rays are unaffected by the blocked file
    assert {"a4", "b4", "c4", "e4", "f4", "g4", "h4"}.issubset(ms)
    assert len(ms) == 10


def test_bishop_rays_are_independent() -> None:
    # White bishop c1 with own pawn on b2 and enemy knight on e3
    pos = Position.from_placement("8/8/8/8/8/4n3/1P6/2B5")
    assert moves_set(pos, "c1") == {"d2", "e3"}


def test_queen_mixed_blockers() -> None:
    # White queen e4; black rook e7, white knight g6, black pawn c4
    pos = Position.from_placement("8/4r3/6N1/8/2p1Q3/8/8/8")
    ms = moves_set(pos, "e4")
    assert {"e5", "e6", "e7"}.issubset(ms) and "e8" not in ms
    assert "f5" in ms and "g6" not in ms and "h7" not in ms
    assert {"d4", "c4"}.issubset(ms) and "b4" not in ms


def test_startpos_sliders_fully_blocked() -> None:
    pos = Position.startpos()
    for name in ("a1", "h1", "c1", "f1", "d1", "a8", "h8", "c8", "f8", "d8"):
        assert moves_set(pos, name) == set(), name


def test_sliding_generator_custom_directions() -> None:
    pos = Position.from_placement("8/8/8/8/3R4/8/8/8")
    sq = Square.parse("d4")
    piece = pos.piece_at(sq)
    assert piece is not None
    up_only = sliding_moves(pos, sq, piece, [(-1, 0)])
    assert {m.name for m in up_only} == {"d5", "d6", "d7", "d8"}

"""SelectionController — the turn and selection state machine.

Owns the position, the side to move, the current selection and the animation
flag. It is the only code that mutates a live position. Listeners subscribe to
render, animation and move events through plain callbacks.

Thread-safety: not thread-safe. Activations are expected one at a time from a
single event loop.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from ..engine.board import Position
from ..engine.move import MoveRecord, commit
from ..engine.movegen import valid_moves
from ..engine.pieces import Color, Piece, Square
from .view import BoardView, build_view


logger = logging.getLogger(__name__)

DEFAULT_ANIMATION_TIMEOUT = 2.0


class ActivationResult(str, Enum):
    IGNORED = "ignored"  # dropped while a move is animating
    NOOP = "noop"
    SELECTED = "selected"
    RESELECTED = "reselected"
    DESELECTED = "deselected"
    MOVED = "moved"


@dataclass(frozen=True)
class Selection:
    square: Square
    piece: Piece
    moves: FrozenSet[Square]


@dataclass(frozen=True)
class AnimationRequest:
    piece: Piece
    origin: Square
    destination: Square


RenderCallback = Callable[[BoardView], None]
AnimateCallback = Callable[[AnimationRequest], None]
MoveCallback = Callable[[MoveRecord], None]


@dataclass
class ControllerEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_render: list[RenderCallback] = field(default_factory=list)
    on_animate: list[AnimateCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)


class SelectionController:
    """Gate square activations through move generation and commit moves.

    States are Idle (no selection) and Selected (a square, its piece and the
    cached destinations). A commit mutates the position synchronously; the
    animation that follows is cosmetic and only holds the animation flag until
    :meth:`finish_animation` is called or ``animation_timeout`` elapses.
    """

    __slots__ = (
        "_position",
        "_turn",
        "_selection",
        "_animating_since",
        "_animation_timeout",
        "_clock",
        "events",
    )

    def __init__(
        self,
        position: Optional[Position] = None,
        turn: Color = Color.WHITE,
        *,
        animation_timeout: float = DEFAULT_ANIMATION_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if animation_timeout <= 0:
            raise ValueError("animation_timeout must be > 0")
        self._position = position if position is not None else Position.startpos()
        self._turn = turn
        self._selection: Optional[Selection] = None
        self._animating_since: Optional[float] = None
        self._animation_timeout = animation_timeout
        self._clock = clock
        self.events = ControllerEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def turn(self) -> Color:
        return self._turn

    @property
    def selection(self) -> Optional[Selection]:
        return self._selection

    @property
    def animating(self) -> bool:
        return self._animating_since is not None

    def view(self) -> BoardView:
        sel = self._selection
        return build_view(
            self._position,
            self._turn,
            sel.square if sel else None,
            sel.moves if sel else frozenset(),
            self.animating,
        )

    # ── Input ────────────────────────────────────────────────────────────

    def activate(self, square: Square) -> ActivationResult:
        """Handle the user choosing ``square``."""
        if self.animating and not self._expire_stale_animation():
            logger.debug("activation dropped during animation", extra={"square": square.name})
            return ActivationResult.IGNORED

        sel = self._selection
        if sel is None:
            if self._select(square):
                self._render()
                return ActivationResult.SELECTED
            return ActivationResult.NOOP

        if square in sel.moves:
            self._commit(sel, square)
            return ActivationResult.MOVED

        self._selection = None
        if self._select(square):
            result = ActivationResult.RESELECTED
        else:
            result = ActivationResult.DESELECTED
        self._render()
        return result

    def finish_animation(self) -> None:
        """Completion signal from the presentation layer. Idempotent."""
        if self._animating_since is None:
            return
        self._animating_since = None
        self._render()

    # ── Internals ────────────────────────────────────────────────────────

    def _select(self, square: Square) -> bool:
        piece = self._position.piece_at(square)
        if piece is None or piece.color is not self._turn:
            return False
        moves = frozenset(valid_moves(self._position, square, piece))
        self._selection = Selection(square, piece, moves)
        logger.debug(
            "selected",
            extra={"square": square.name, "piece": piece.char, "moves": len(moves)},
        )
        return True

    def _commit(self, sel: Selection, destination: Square) -> None:
        record = commit(self._position, sel.square, destination)
        self._turn = self._turn.opposite()
        self._selection = None
        logger.info(
            "move",
            extra={
                "move": record.to_text(),
                "piece": record.piece.char,
                "captured": record.captured.char if record.captured else None,
                "turn": self._turn.value,
            },
        )
        for cb in self.events.on_move:
            cb(record)
        if self.events.on_animate:
            self._animating_since = self._clock()
            request = AnimationRequest(record.piece, record.origin, record.destination)
            for cb in self.events.on_animate:
                cb(request)
        self._render()

    def _expire_stale_animation(self) -> bool:
        assert self._animating_since is not None
        elapsed = self._clock() - self._animating_since
        if elapsed < self._animation_timeout:
            return False
        logger.warning(
            "animation completion not received, clearing flag",
            extra={"elapsed_s": round(elapsed, 3)},
        )
        self._animating_since = None
        return True

    def _render(self) -> None:
        if not self.events.on_render:
            return
        view = self.view()
        for cb in self.events.on_render:
            cb(view)

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from ...engine.move import MoveRecord
from ...game.controller import AnimationRequest, SelectionController


@dataclass
class GameSession:
    """A controller plus the outputs of its most recent activation.

    The browser is the animation sink: commits on a session always raise the
    animation flag until the client reports completion.
    """

    controller: SelectionController = field(default_factory=SelectionController)
    last_move: Optional[MoveRecord] = None
    last_animation: Optional[AnimationRequest] = None

    def __post_init__(self) -> None:
        self.controller.events.on_move.append(self._on_move)
        self.controller.events.on_animate.append(self._on_animate)

    def reset_outputs(self) -> None:
        self.last_move = None
        self.last_animation = None

    def _on_move(self, record: MoveRecord) -> None:
        self.last_move = record

    def _on_animate(self, request: AnimationRequest) -> None:
        self.last_animation = request


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Retrieve existing sessions by `game_id`
    - Delete sessions

    Nothing is persisted; restarting the server drops every game.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, GameSession] = {}

    def create(self, session: Optional[GameSession] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        if session is None:
            session = GameSession()
        with self._lock:
            self._games[gid] = session
        return gid

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._games.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Remove a session; returns whether it existed."""
        with self._lock:
            return self._games.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import GameSession, InMemorySessionStore
from ...config import Settings
from ...engine.movegen import PreconditionError, valid_moves
from ...engine.move import MoveRecord
from ...engine.pieces import Square
from ...game.controller import AnimationRequest, SelectionController
from ...game.view import BoardView


logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"


class SquareState(BaseModel):
    row: int
    col: int
    name: str
    shade: str
    piece: Optional[str]
    glyph: Optional[str]
    piece_color: Optional[str]
    selected: bool
    valid_move: bool


class GameState(BaseModel):
    game_id: str
    turn: str
    turn_label: str
    placement: str
    selected: Optional[str]
    valid_moves: list[str]
    animating: bool
    squares: list[SquareState]


class ActivateRequest(BaseModel):
    row: int = Field(..., ge=0, le=7, description="Row index, 0 is black's back rank")
    col: int = Field(..., ge=0, le=7, description="Column index, 0 is the a-file")


class MoveInfo(BaseModel):
    move: str
    piece: str
    origin: str
    destination: str
    captured: Optional[str]


class AnimationInfo(BaseModel):
    piece: str
    glyph: str
    origin: str
    destination: str


class ActivateResponse(BaseModel):
    result: str
    move: Optional[MoveInfo]
    animation: Optional[AnimationInfo]
    state: GameState


class MovesResponse(BaseModel):
    square: str
    piece: str
    moves: list[str]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Hotseat Chess", version="0.1.0")

    logging.basicConfig(level=settings.log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    app.state.sessions = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        return FileResponse(_STATIC_DIR / "index.html")

    @app.post("/api/games", response_model=GameState)
    async def create_game() -> GameState:
        controller = SelectionController(animation_timeout=settings.animation_timeout)
        game_id = store.create(GameSession(controller))
        logger.info("game created", extra={"game_id": game_id})
        return _game_state(game_id, controller.view())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        session = _require_session(store, game_id)
        return _game_state(game_id, session.controller.view())

    @app.post("/api/games/{game_id}/activate", response_model=ActivateResponse)
    async def activate(game_id: str, req: ActivateRequest) -> ActivateResponse:
        session = _require_session(store, game_id)
        session.reset_outputs()
        result = session.controller.activate(Square(req.row, req.col))
        return ActivateResponse(
            result=result.value,
            move=_move_info(session.last_move) if session.last_move else None,
            animation=_animation_info(session.last_animation) if session.last_animation else None,
            state=_game_state(game_id, session.controller.view()),
        )

    @app.post("/api/games/{game_id}/animation/complete", response_model=GameState)
    async def animation_complete(game_id: str) -> GameState:
        session = _require_session(store, game_id)
        session.controller.finish_animation()
        return _game_state(game_id, session.controller.view())

    @app.get("/api/games/{game_id}/moves/{square}", response_model=MovesResponse)
    async def moves(game_id: str, square: str) -> MovesResponse:
        session = _require_session(store, game_id)
        try:
            sq = Square.parse(square)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        position = session.controller.position
        piece = position.piece_at(sq)
        if piece is None:
            raise HTTPException(status_code=400, detail=f"no piece on {sq.name}")
        try:
            dests = valid_moves(position, sq, piece)
        except PreconditionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return MovesResponse(
            square=sq.name, piece=piece.char, moves=[d.name for d in sorted(dests)]
        )

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        logger.info("game deleted", extra={"game_id": game_id})
        return Response(status_code=204)

    # Static assets mounted last; API routes take precedence
    app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")

    return app


def _require_session(store: InMemorySessionStore, game_id: str) -> GameSession:
    session = store.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="game not found")
    return session


def _game_state(game_id: str, view: BoardView) -> GameState:
    return GameState(
        game_id=game_id,
        turn=view.turn.value,
        turn_label=view.turn_label,
        placement=view.placement,
        selected=view.selected.name if view.selected else None,
        valid_moves=[sq.name for sq in view.valid_moves],
        animating=view.animating,
        squares=[
            SquareState(
                row=s.row,
                col=s.col,
                name=s.name,
                shade=s.shade,
                piece=s.piece,
                glyph=s.glyph,
                piece_color=s.piece_color,
                selected=s.selected,
                valid_move=s.valid_move,
            )
            for s in view.squares
        ],
    )


def _move_info(record: MoveRecord) -> MoveInfo:
    return MoveInfo(
        move=record.to_text(),
        piece=record.piece.char,
        origin=record.origin.name,
        destination=record.destination.name,
        captured=record.captured.char if record.captured else None,
    )


def _animation_info(request: AnimationRequest) -> AnimationInfo:
    return AnimationInfo(
        piece=request.piece.char,
        glyph=request.piece.glyph,
        origin=request.origin.name,
        destination=request.destination.name,
    )


# Default app for non-factory servers
app = create_app()

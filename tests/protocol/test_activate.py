from __future__ import annotations

import time

from fastapi.testclient import TestClient

from hotseat.config import Settings
from hotseat.protocol.http.app import create_app


def _new_game(client: TestClient) -> str:
    return client.post("/api/games").json()["game_id"]


def _activate(client: TestClient, game_id: str, row: int, col: int) -> dict:
    r = client.post(f"/api/games/{game_id}/activate", json={"row": row, "col": col})
    assert r.status_code == 200
    return r.json()


def test_select_then_move_e2e4() -> None:
    client = TestClient(create_app())
    game_id = _new_game(client)

    body = _activate(client, game_id, 6, 4)
    assert body["result"] == "selected"
    assert body["move"] is None and body["animation"] is None
    state = body["state"]
    assert state["selected"] == "e2"
    assert state["valid_moves"] == ["e4", "e3"]
    marked = {s["name"] for s in state["squares"] if s["valid_move"]}
    assert marked == {"e3", "e4"}

    body = _activate(client, game_id, 4, 4)
    assert body["result"] == "moved"
    assert body["move"] == {
        "move": "e2e4",
        "piece": "P",
        "origin": "e2",
        "destination": "e4",
        "captured": None,
    }
    assert body["animation"]["origin"] == "e2"
    assert body["animation"]["destination"] == "e4"
    assert body["animation"]["glyph"] == "♙"
    state = body["state"]
    assert state["turn"] == "black"
    assert state["turn_label"] == "Black's Turn"
    assert state["placement"] == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"
    assert state["animating"] is True


def test_activation_ignored_until_animation_completes() -> None:
    client = TestClient(create_app())
    game_id = _new_game(client)
    _activate(client, game_id, 6, 4)
    _activate(client, game_id, 4, 4)

    body = _activate(client, game_id, 1, 4)
    assert body["result"] == "ignored"
    assert body["state"]["selected"] is None

    r = client.post(f"/api/games/{game_id}/animation/complete")
    assert r.status_code == 200
    assert r.json()["animating"] is False

    body = _activate(client, game_id, 1, 4)
    assert body["result"] == "selected"


def test_animation_timeout_from_settings() -> None:
    app = create_app(Settings(animation_timeout=0.001))
    client = TestClient(app)
    game_id = _new_game(client)
    _activate(client, game_id, 6, 4)
    _activate(client, game_id, 4, 4)
    time.sleep(0.01)
    assert _activate(client, game_id, 1, 4)["result"] == "selected"


def test_opposing_piece_is_noop() -> None:
    client = TestClient(create_app())
    game_id = _new_game(client)
    body = _activate(client, game_id, 1, 4)
    assert body["result"] == "noop"
    assert body["state"]["selected"] is None


def test_activate_validation_error_422() -> None:
    client = TestClient(create_app())
    game_id = _new_game(client)
    r = client.post(f"/api/games/{game_id}/activate", json={"row": 8, "col": 0})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(fe["field"].endswith("row") for fe in err["field_errors"])


def test_activate_unknown_game_404() -> None:
    client = TestClient(create_app())
    r = client.post("/api/games/nope/activate", json={"row": 6, "col": 4})
    assert r.status_code == 404


def test_moves_query_does_not_select() -> None:
    client = TestClient(create_app())
    game_id = _new_game(client)
    r = client.get(f"/api/games/{game_id}/moves/g1")
    assert r.status_code == 200
    assert r.json() == {"square": "g1", "piece": "N", "moves": ["f3", "h3"]}
    assert client.get(f"/api/games/{game_id}/state").json()["selected"] is None

    # Either side may be queried regardless of turn
    r = client.get(f"/api/games/{game_id}/moves/a8")
    assert r.json()["moves"] == []


def test_moves_query_rejects_bad_squares() -> None:
    client = TestClient(create_app())
    game_id = _new_game(client)
    r = client.get(f"/api/games/{game_id}/moves/e4")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"
    r = client.get(f"/api/games/{game_id}/moves/z9")
    assert r.status_code == 400

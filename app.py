from __future__ import annotations

import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    DEFAULT_DB,
    GRID_SIZE,
    POINTS_PER_PAIR,
    RESOLVE_DELAY_MS,
    TARGET_SCORE,
    TOTAL_CELLS,
    Board,
    GameSession,
    MatchController,
    SqliteKeyValueStore,
    ThreadingScheduler,
    Tile,
    board_from_values,
)

app = Flask(__name__)


def _make_controller() -> MatchController:
    return MatchController(
        store=SqliteKeyValueStore(DEFAULT_DB),
        scheduler=ThreadingScheduler(),
        resolve_delay_ms=RESOLVE_DELAY_MS,
    )


# The one game this process serves; tests swap it for a controller on a fake clock.
controller = _make_controller()


def tile_to_json(t: Tile) -> Dict[str, Any]:
    return {"id": int(t.id), "value": int(t.value), "matched": bool(t.matched)}


def board_to_json(b: Board) -> Dict[str, Any]:
    return {"width": GRID_SIZE, "height": GRID_SIZE, "tiles": [tile_to_json(t) for t in b.tiles]}


def state_to_json(s: GameSession) -> Dict[str, Any]:
    return {
        "board": board_to_json(s.board),
        "score": int(s.score),
        "highScore": int(s.high_score),
        "selection": [int(i) for i in s.selection],
        "processing": bool(s.processing),
        "gameOver": bool(s.game_over),
        "phase": s.phase,
        "targetScore": TARGET_SCORE,
        "progress": s.progress,
    }


def _bad_request(error: str) -> Tuple[Any, int]:
    app.logger.info(f"[reject] path={request.path} error={error}")
    return jsonify({"ok": False, "error": error}), 400


def _int_field(body: Dict[str, Any], name: str) -> Optional[int]:
    value = body.get(name)
    # bool is an int subclass; true/false are not indices
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@app.get("/api/state")
def api_state() -> Any:
    return jsonify({"ok": True, "state": state_to_json(controller.session)})


@app.post("/api/click")
def api_click() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        return _bad_request("body must be a JSON object")
    index = _int_field(body, "index")
    if index is None:
        return _bad_request("index must be an integer")
    if not 0 <= index < TOTAL_CELLS:
        return _bad_request(f"index out of range 0..{TOTAL_CELLS - 1}")
    accepted = controller.handle_tile_click(index)
    session = controller.session
    app.logger.info(f"[click] index={index} accepted={accepted} phase={session.phase} score={session.score}")
    return jsonify({"ok": True, "accepted": accepted, "state": state_to_json(session)})


@app.post("/api/reset")
def api_reset() -> Any:
    session = controller.reset_game()
    app.logger.info(f"[reset] generation={session.generation} highScore={session.high_score}")
    return jsonify({"ok": True, "state": state_to_json(session)})


@app.post("/api/new_from")
def api_new_from() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        return _bad_request("body must be a JSON object")
    values = body.get("values")
    if not isinstance(values, list) or len(values) != TOTAL_CELLS:
        return _bad_request(f"values must be a list of {TOTAL_CELLS} integers")
    score = body.get("score", 0)
    if isinstance(score, bool) or not isinstance(score, int):
        return _bad_request("score must be an integer")
    if score < 0 or score % POINTS_PER_PAIR or score >= TARGET_SCORE:
        return _bad_request(f"score must be an even value in 0..{TARGET_SCORE - 1}")
    try:
        board = board_from_values(values, controller.dealer)
    except ValueError as e:
        return _bad_request(f"bad values: {e}")
    session = controller.start_from(GameSession(board=board, score=score))
    app.logger.info(f"[new_from] generation={session.generation} score={session.score}")
    return jsonify({"ok": True, "state": state_to_json(session)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=debug)

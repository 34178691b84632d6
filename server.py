"""
Minimal Flask API that wires the blind chess engine into a UI.

Endpoints:
- POST /api/recorders                    -> start a blind recording session for one color
- GET  /api/recorders/<id>               -> restricted board FEN and moves so far
- POST /api/recorders/<id>/select        -> destinations for the selected square
- POST /api/recorders/<id>/move          -> commit a move (409 when it cannot be recorded)
- POST /api/recorders/<id>/undo          -> drop the last move (board rebuilt by replay)
- POST /api/recorders/<id>/reset         -> clear the session, optionally switching color
- GET  /api/recorders/<id>/moves.txt     -> download the move-list artifact
- POST /api/simulations                  -> reconcile a white and a black move-list (optional white_name/black_name for PGN)

Recorder sessions live in memory only and expire after BLINDCHESS_SESSION_TTL_S of inactivity.
"""
from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import Dict

from flask import Flask, Response, jsonify, request

from blindchess.config import SETTINGS, parse_log_level
from blindchess.history import trace_to_dict
from blindchess.movelist import parse_moves
from blindchess.notation import color_name
from blindchess.recorder import MoveListRecorder
from blindchess.simulator import Policy, Reconciliation

logging.basicConfig(level=parse_log_level(SETTINGS.log_level), format="%(asctime)s %(levelname)s %(message)s")

app = Flask(__name__)
recorder_lock = threading.Lock()

RECORDERS: Dict[str, dict] = {}


def _cleanup_stale_recorders(max_age_s: float = SETTINGS.session_ttl_s):
    now = time.time()
    with recorder_lock:
        expired = [sid for sid, sess in RECORDERS.items() if now - sess.get("updated_at", now) > max_age_s]
        for sid in expired:
            RECORDERS.pop(sid, None)
    if expired:
        logging.info("Dropped %d idle recorder session(s)", len(expired))


def _get_session(session_id: str) -> dict | None:
    _cleanup_stale_recorders()
    with recorder_lock:
        return RECORDERS.get(session_id)


def _serialize_recorder(session: dict) -> dict:
    rec: MoveListRecorder = session["recorder"]
    return {
        "recorder_id": session["id"],
        "color": color_name(rec.color),
        "fen": rec.fen,
        "moves": list(rec.moves),
        "filename": rec.default_filename(),
    }


def _move_list_from_payload(value) -> list[str]:
    """Accept either a list of notations or the artifact text."""
    if value is None:
        return []
    if isinstance(value, str):
        return parse_moves(value)
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    raise ValueError("move-list must be a list of strings or text")


@app.route("/api/recorders", methods=["POST"])
def create_recorder():
    _cleanup_stale_recorders()
    data = request.get_json(silent=True) or {}
    try:
        rec = MoveListRecorder(data.get("color", "white"))
    except ValueError as e:
        return jsonify({"error": "bad_color", "message": str(e)}), 400
    session_id = f"rec_{int(time.time())}_{uuid.uuid4().hex[:6]}"
    session = {"id": session_id, "recorder": rec, "lock": threading.Lock(), "updated_at": time.time()}
    with recorder_lock:
        RECORDERS[session_id] = session
    return jsonify(_serialize_recorder(session)), 201


@app.route("/api/recorders/<session_id>", methods=["GET"])
def get_recorder(session_id: str):
    session = _get_session(session_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    return jsonify(_serialize_recorder(session))


@app.route("/api/recorders/<session_id>/select", methods=["POST"])
def recorder_select(session_id: str):
    session = _get_session(session_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    data = request.get_json(silent=True) or {}
    with session["lock"]:
        try:
            dests = session["recorder"].propose(str(data.get("square", "")))
        except ValueError as e:
            return jsonify({"error": "bad_square", "message": str(e)}), 400
        session["updated_at"] = time.time()
    return jsonify({"square": data.get("square"), "destinations": dests})


@app.route("/api/recorders/<session_id>/move", methods=["POST"])
def recorder_move(session_id: str):
    session = _get_session(session_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    data = request.get_json(silent=True) or {}
    with session["lock"]:
        try:
            san = session["recorder"].commit(str(data.get("from", "")), str(data.get("to", "")))
        except ValueError as e:
            return jsonify({"error": "bad_square", "message": str(e)}), 400
        session["updated_at"] = time.time()
        if san is None:
            return jsonify({"error": "move_not_recorded", **_serialize_recorder(session)}), 409
        return jsonify({"san": san, **_serialize_recorder(session)})


@app.route("/api/recorders/<session_id>/undo", methods=["POST"])
def recorder_undo(session_id: str):
    session = _get_session(session_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    with session["lock"]:
        removed = session["recorder"].undo()
        session["updated_at"] = time.time()
        return jsonify({"removed": removed, **_serialize_recorder(session)})


@app.route("/api/recorders/<session_id>/reset", methods=["POST"])
def recorder_reset(session_id: str):
    session = _get_session(session_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    data = request.get_json(silent=True) or {}
    with session["lock"]:
        try:
            session["recorder"].reset(data.get("color"))
        except ValueError as e:
            return jsonify({"error": "bad_color", "message": str(e)}), 400
        session["updated_at"] = time.time()
        return jsonify(_serialize_recorder(session))


@app.route("/api/recorders/<session_id>/moves.txt", methods=["GET"])
def recorder_download(session_id: str):
    session = _get_session(session_id)
    if not session:
        return jsonify({"error": "not found"}), 404
    rec: MoveListRecorder = session["recorder"]
    return Response(
        rec.to_text(),
        mimetype="text/plain",
        headers={"Content-Disposition": f"attachment; filename={rec.default_filename()}"},
    )


@app.route("/api/simulations", methods=["POST"])
def run_simulation():
    data = request.get_json(silent=True) or {}
    try:
        white = _move_list_from_payload(data.get("white"))
        black = _move_list_from_payload(data.get("black"))
        policy = Policy.parse(data.get("policy") or SETTINGS.default_policy)
    except ValueError as e:
        return jsonify({"error": "bad_request", "message": str(e)}), 400
    sim = Reconciliation(policy, white_name=str(data.get("white_name") or "White"),
                         black_name=str(data.get("black_name") or "Black"))
    trace = sim.run(white, black)
    return jsonify(trace_to_dict(trace, policy=policy, pgn=sim.pgn(), white_moves=white, black_moves=black))


@app.after_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = request.headers.get("Origin", "*")
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Cache-Control"] = "no-store, max-age=0"
    return response


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000, debug=True)

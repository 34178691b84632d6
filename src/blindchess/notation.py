"""
Move notation helpers shared by authoring and reconciliation.

- parse_notation(): SAN first (castling written with zeros is accepted), then plain UCI.
  Anything that does not parse is reported as None, the same as an illegal move.
- Capture/destination helpers read recorded SAN during recorder replay.
- parse_color(): accepts "white"/"black", "w"/"b" or a chess.Color.
"""
from __future__ import annotations

import chess
import re

UCI_RE = re.compile(r"^[a-h][1-8][a-h][1-8][qrbn]?$", re.I)
SQUARE_RE = re.compile(r"[a-h][1-8]")
CASTLE_ZERO = {"0-0": "O-O", "0-0-0": "O-O-O", "o-o": "O-O", "o-o-o": "O-O-O"}

COLOR_NAMES = {chess.WHITE: "white", chess.BLACK: "black"}


def parse_notation(board: chess.Board, text: str) -> chess.Move | None:
    """Parse SAN (or UCI) against board. Returns None for empty or unparseable text."""
    token = (text or "").strip()
    if not token:
        return None
    token = CASTLE_ZERO.get(token.lower(), token)
    try:
        return board.parse_san(token)
    except ValueError:
        pass
    if UCI_RE.fullmatch(token):
        try:
            return chess.Move.from_uci(token.lower())
        except ValueError:
            return None
    return None


def is_capture_notation(san: str) -> bool:
    return "x" in (san or "")


def destination_square(san: str) -> chess.Square | None:
    """Target square of a SAN move (the last square named); None for castling."""
    found = SQUARE_RE.findall(san or "")
    if not found:
        return None
    return chess.parse_square(found[-1])


def parse_color(value) -> chess.Color:
    if isinstance(value, bool):
        return value
    name = str(value or "").strip().lower()
    if name in ("white", "w"):
        return chess.WHITE
    if name in ("black", "b"):
        return chess.BLACK
    raise ValueError(f"unknown color: {value!r}")


def color_name(color: chess.Color) -> str:
    return COLOR_NAMES[color]


__all__ = [
    "parse_notation",
    "is_capture_notation",
    "destination_square",
    "parse_color",
    "color_name",
]

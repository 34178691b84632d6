"""Material and captured-piece accounting read straight from board occupancy."""
from __future__ import annotations

import chess

PIECE_VALUES = {
    chess.PAWN: 1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK: 5,
    chess.QUEEN: 9,
    chess.KING: 0,
}
STARTING_COUNTS = {
    chess.PAWN: 8,
    chess.KNIGHT: 2,
    chess.BISHOP: 2,
    chess.ROOK: 2,
    chess.QUEEN: 1,
    chess.KING: 1,
}
STARTING_MATERIAL = sum(PIECE_VALUES[pt] * n for pt, n in STARTING_COUNTS.items())  # 39

CHECK_BONUS = 10
MATE_BONUS = 500


def material(board: chess.Board, color: chess.Color) -> int:
    return sum(PIECE_VALUES[pt] * len(board.pieces(pt, color)) for pt in PIECE_VALUES)


def missing_pieces(board: chess.Board, color: chess.Color) -> tuple[str, ...]:
    """Names of `color` pieces no longer on the board, pawns first, queen last."""
    missing: list[str] = []
    for pt in (chess.PAWN, chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN):
        gone = STARTING_COUNTS[pt] - len(board.pieces(pt, color))
        missing.extend([chess.piece_name(pt)] * max(gone, 0))
    return tuple(missing)


def captured_pieces(board: chess.Board) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """(captured by white, captured by black)."""
    return missing_pieces(board, chess.BLACK), missing_pieces(board, chess.WHITE)


def move_bonus(board: chess.Board) -> int:
    """Bonus earned by the side that just moved: mate beats check, never both."""
    if board.is_checkmate():
        return MATE_BONUS
    if board.is_check():
        return CHECK_BONUS
    return 0


def label_value(name: str) -> int:
    return PIECE_VALUES[chess.PIECE_NAMES.index(name)]

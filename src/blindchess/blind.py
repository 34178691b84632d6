"""
Blind move authoring against a restricted board (own pieces plus the enemy king).

- propose_destinations(): the referee's legal targets for a piece, plus "blind captures":
  forward-diagonal pawn steps into squares that look empty but may hide an enemy piece.
- commit_move(): applies a move, materializing a phantom enemy pawn when a pawn steps
  diagonally into an empty square, then hands the move back to the same side.
"""
from __future__ import annotations

import logging

import chess

from .referee import Referee

log = logging.getLogger("blind")


def blind_pawn_targets(ref: Referee, square: chess.Square) -> list[chess.Square]:
    """Empty forward-diagonal squares a pawn on `square` could aim at blindly."""
    piece = ref.piece_at(square)
    if piece is None or piece.piece_type != chess.PAWN:
        return []
    rank = chess.square_rank(square) + (1 if piece.color == chess.WHITE else -1)
    if not 0 <= rank <= 7:
        return []
    targets = []
    for file in (chess.square_file(square) - 1, chess.square_file(square) + 1):
        if not 0 <= file <= 7:
            continue
        target = chess.square(file, rank)
        if ref.piece_at(target) is None:
            targets.append(target)
    return targets


def propose_destinations(ref: Referee, square: chess.Square, color: chess.Color) -> list[chess.Square]:
    """Legal destinations for the piece on `square` united with its blind pawn captures.

    Only pieces of `color` may be selected; anything else yields no destinations.
    """
    piece = ref.piece_at(square)
    if piece is None or piece.color != color:
        return []
    found = set(ref.legal_destinations(square))
    found.update(blind_pawn_targets(ref, square))
    return sorted(found)


def commit_move(ref: Referee, from_square: chess.Square, to_square: chess.Square,
                color: chess.Color) -> str | None:
    """Apply an authored move; return its SAN, or None with the board untouched."""
    piece = ref.piece_at(from_square)
    if piece is None or piece.color != color:
        return None
    phantom = (
        piece.piece_type == chess.PAWN
        and ref.piece_at(to_square) is None
        and chess.square_file(from_square) != chess.square_file(to_square)
    )
    if phantom:
        ref.put_piece(to_square, chess.Piece(chess.PAWN, not color))
    san = ref.try_move(from_square, to_square)
    if san is None:
        if phantom:
            ref.remove_piece(to_square)
        log.debug("Rejected %s%s", chess.square_name(from_square), chess.square_name(to_square))
        return None
    ref.force_turn(color)
    log.debug("Committed %s (phantom=%s)", san, phantom)
    return san

"""
MoveListRecorder: one player's blind authoring session.

- Holds a restricted board (own pieces plus the opposing king) and the ordered SAN list.
- commit() goes through the blind proposer/phantom resolver; failures record nothing.
- undo() rebuilds the board by replaying the remaining list from the restricted start,
  re-creating phantom pawns for captures into empty squares. Forced turn resets make
  stepping back one move unsound, so replay is the only rollback.

"""
from __future__ import annotations

import logging

import chess

from .blind import commit_move, propose_destinations
from .movelist import format_moves
from .notation import color_name, destination_square, is_capture_notation, parse_color
from .referee import Referee

RESTRICTED_START_FEN = {
    chess.WHITE: "7k/8/8/8/8/8/PPPPPPPP/RNBQKBNR w KQ - 0 1",
    chess.BLACK: "rnbqkbnr/pppppppp/8/8/8/8/8/K7 b kq - 0 1",
}


class MoveListRecorder:
    def __init__(self, color: chess.Color | str = chess.WHITE):
        self.log = logging.getLogger("MoveListRecorder")
        self.color = parse_color(color)
        self.moves: list[str] = []
        self.ref = Referee(RESTRICTED_START_FEN[self.color])

    @property
    def fen(self) -> str:
        return self.ref.fen()

    def propose(self, square: str) -> list[str]:
        """Destination square names for the own piece on `square` (empty if not selectable)."""
        dests = propose_destinations(self.ref, chess.parse_square(square), self.color)
        return [chess.square_name(sq) for sq in dests]

    def commit(self, from_square: str, to_square: str) -> str | None:
        """Record the move if `to_square` is among the proposals; returns the SAN or None."""
        if to_square not in self.propose(from_square):
            return None
        san = commit_move(self.ref, chess.parse_square(from_square), chess.parse_square(to_square), self.color)
        if san is not None:
            self.moves.append(san)
            self.log.debug("%s recorded #%d %s", color_name(self.color), len(self.moves), san)
        return san

    def undo(self) -> str | None:
        if not self.moves:
            return None
        removed = self.moves.pop()
        self.ref = self._replay(self.moves)
        return removed

    def reset(self, color: chess.Color | str | None = None) -> None:
        if color is not None:
            self.color = parse_color(color)
        self.moves = []
        self.ref = Referee(RESTRICTED_START_FEN[self.color])

    def _replay(self, moves: list[str]) -> Referee:
        ref = Referee(RESTRICTED_START_FEN[self.color])
        for san in moves:
            if ref.apply_san(san) is None and not self._replay_phantom(ref, san):
                self.log.warning("Replay could not apply %s for %s; skipped", san, color_name(self.color))
            ref.force_turn(self.color)
        return ref

    def _replay_phantom(self, ref: Referee, san: str) -> bool:
        if not is_capture_notation(san):
            return False
        target = destination_square(san)
        if target is None or ref.piece_at(target) is not None:
            return False
        ref.put_piece(target, chess.Piece(chess.PAWN, not self.color))
        if ref.apply_san(san) is None:
            ref.remove_piece(target)
            return False
        return True

    # ---------------- Export -----------------
    def export(self) -> tuple[str, ...]:
        return tuple(self.moves)

    def to_text(self) -> str:
        return format_moves(self.moves)

    def default_filename(self) -> str:
        return f"{color_name(self.color)}.txt"

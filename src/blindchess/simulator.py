"""
Reconciliation of two blind move-lists against one authoritative board.

- Policy: STRICT forfeits the turn on an illegal notation; SEEK_NEXT scans the same
  side's list for the next legal one and ends the game when the list runs dry.
- GameStep: immutable per-step record (FEN, applied SAN, scores, material, captures).
- Reconciliation.run(): replays both lists and returns the step trace; simulate() is the
  functional entry point. Illegal or malformed notation never raises, it becomes a step.
- winner(): result by final score, as shown at the end of a replay.

"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import chess

from .notation import color_name
from .referee import Referee
from .scoring import captured_pieces, material, move_bonus


class Policy(str, Enum):
    STRICT = "strict"
    SEEK_NEXT = "seek-next"

    @classmethod
    def parse(cls, value: "Policy | str | int") -> "Policy":
        if isinstance(value, Policy):
            return value
        name = str(value).strip().lower().replace("_", "-")
        # numeric modes as the move-list files were first described
        legacy = {"1": cls.STRICT, "2": cls.SEEK_NEXT}
        if name in legacy:
            return legacy[name]
        for policy in cls:
            if policy.value == name:
                return policy
        raise ValueError(f"unknown policy: {value!r} (expected 'strict' or 'seek-next')")


class StepKind(str, Enum):
    GAME_START = "game_start"
    MOVE_MADE = "move_made"
    ILLEGAL_ATTEMPT = "illegal_attempt"
    LEGAL_ALTERNATIVE = "legal_alternative"
    NO_LEGAL_MOVE = "no_legal_move"


@dataclass(frozen=True)
class GameStep:
    fen: str
    move_san: str | None
    kind: StepKind
    description: str
    white_score: int
    black_score: int
    white_material: int
    black_material: int
    captured_by_white: tuple[str, ...]
    captured_by_black: tuple[str, ...]
    turn: chess.Color
    is_check: bool
    is_mate: bool
    is_illegal_attempt: bool = False
    # notations passed over by SEEK_NEXT before move_san was found
    skipped: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "fen": self.fen,
            "move_san": self.move_san,
            "kind": self.kind.value,
            "description": self.description,
            "white_score": self.white_score,
            "black_score": self.black_score,
            "white_material": self.white_material,
            "black_material": self.black_material,
            "captured_by_white": list(self.captured_by_white),
            "captured_by_black": list(self.captured_by_black),
            "turn": color_name(self.turn),
            "is_check": self.is_check,
            "is_mate": self.is_mate,
            "is_illegal_attempt": self.is_illegal_attempt,
            "skipped": list(self.skipped),
        }


class Reconciliation:
    """Replays a white and a black move-list under one policy."""

    def __init__(self, policy: Policy | str = Policy.SEEK_NEXT, white_name: str = "White", black_name: str = "Black"):
        self.log = logging.getLogger("Reconciliation")
        self.policy = Policy.parse(policy)
        self.names = {chess.WHITE: white_name, chess.BLACK: black_name}
        self.ref = Referee()
        self._bonus = {chess.WHITE: 0, chess.BLACK: 0}

    def run(self, white_moves: Iterable[str], black_moves: Iterable[str]) -> list[GameStep]:
        self.ref = Referee()
        self.ref.set_headers(white=self.names[chess.WHITE], black=self.names[chess.BLACK],
                             Event="Blind Chess reconciliation", Policy=self.policy.value)
        self._bonus = {chess.WHITE: 0, chess.BLACK: 0}
        lists = {chess.WHITE: list(white_moves), chess.BLACK: list(black_moves)}
        cursor = {chess.WHITE: 0, chess.BLACK: 0}

        trace = [self._step(StepKind.GAME_START, "Game start", None, chess.WHITE)]
        while not self.ref.is_game_over() and any(cursor[c] < len(lists[c]) for c in lists):
            mover = self.ref.turn
            queue = lists[mover]
            if cursor[mover] >= len(queue):
                break
            side = color_name(mover).capitalize()
            notation = queue[cursor[mover]]
            cursor[mover] += 1

            mv = self.ref.probe_san(notation)
            if mv is not None:
                san = self.ref.apply_move(mv)
                self._bonus[mover] += move_bonus(self.ref.board)
                trace.append(self._step(StepKind.MOVE_MADE, f"{side} made move {san}", san, mover))
                self.log.debug("%s %s", side, san)
                continue

            if self.policy is Policy.STRICT:
                self.ref.force_turn(not mover)
                trace.append(self._step(StepKind.ILLEGAL_ATTEMPT, f"{side}: {notation} (illegal move)",
                                        None, mover, illegal=True))
                self.log.debug("%s forfeits turn on illegal %r", side, notation)
                continue

            skipped = [notation]
            while mv is None and cursor[mover] < len(queue):
                notation = queue[cursor[mover]]
                cursor[mover] += 1
                mv = self.ref.probe_san(notation)
                if mv is None:
                    skipped.append(notation)
            if mv is None:
                trace.append(self._step(StepKind.NO_LEGAL_MOVE, f"{side}: no legal move found", None, mover,
                                        illegal=True, skipped=skipped))
                self.log.info("%s list exhausted without a legal move; stopping", side)
                break
            san = self.ref.apply_move(mv)
            self._bonus[mover] += move_bonus(self.ref.board)
            trace.append(self._step(StepKind.LEGAL_ALTERNATIVE, f"{side}: found legal move {san}", san, mover,
                                    skipped=skipped))
            self.log.debug("%s skipped %s, played %s", side, skipped, san)

        self.log.info("Reconciliation finished policy=%s steps=%d result=%s winner=%s",
                      self.policy.value, len(trace), self.ref.status(), winner(trace))
        return trace

    def _step(self, kind: StepKind, description: str, san: str | None, turn: chess.Color,
              illegal: bool = False, skipped: list[str] | None = None) -> GameStep:
        board = self.ref.board
        w_mat, b_mat = material(board, chess.WHITE), material(board, chess.BLACK)
        by_white, by_black = captured_pieces(board)
        return GameStep(
            fen=board.fen(),
            move_san=san,
            kind=kind,
            description=description,
            white_score=self._bonus[chess.WHITE] + w_mat,
            black_score=self._bonus[chess.BLACK] + b_mat,
            white_material=w_mat,
            black_material=b_mat,
            captured_by_white=by_white,
            captured_by_black=by_black,
            turn=turn,
            is_check=board.is_check(),
            is_mate=board.is_checkmate(),
            is_illegal_attempt=illegal,
            skipped=tuple(skipped or ()),
        )

    def pgn(self) -> str:
        return self.ref.pgn()


def simulate(white_moves: Iterable[str], black_moves: Iterable[str],
             policy: Policy | str = Policy.SEEK_NEXT) -> list[GameStep]:
    return Reconciliation(policy).run(white_moves, black_moves)


def winner(trace: list[GameStep]) -> str:
    final = trace[-1]
    if final.white_score > final.black_score:
        return "white"
    if final.black_score > final.white_score:
        return "black"
    return "draw"


__all__ = ["Policy", "StepKind", "GameStep", "Reconciliation", "simulate", "winner"]

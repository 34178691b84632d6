"""
Structured export of a reconciliation trace for viewers and the API.

- trace_to_dict(): policy, winner, final scores, optional PGN, and one dict per step.
- dump_trace_json()/load_trace_json(): JSON files read back by scripts/view_trace.py.
"""
from __future__ import annotations

import json
import logging
import os

from .simulator import GameStep, Policy, StepKind, winner

log = logging.getLogger("history")


def trace_to_dict(trace: list[GameStep], policy: Policy | str | None = None, pgn: str | None = None,
                  white_moves: list[str] | None = None, black_moves: list[str] | None = None) -> dict:
    final = trace[-1]
    data = {
        "policy": Policy.parse(policy).value if policy is not None else None,
        "winner": winner(trace),
        "final_scores": {"white": final.white_score, "black": final.black_score},
        "terminated_early": final.kind is StepKind.NO_LEGAL_MOVE,
        "steps": [step.to_dict() for step in trace],
    }
    if pgn is not None:
        data["pgn"] = pgn
    if white_moves is not None or black_moves is not None:
        data["inputs"] = {"white": list(white_moves or []), "black": list(black_moves or [])}
    return data


def dump_trace_json(path: str, data: dict) -> str:
    dir_path = os.path.dirname(path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    log.info("Wrote trace to %s", path)
    return path


def load_trace_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or not isinstance(data.get("steps"), list) or not data["steps"]:
        raise ValueError(f"{path} does not contain a reconciliation trace")
    return data

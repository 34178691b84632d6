"""Move-list artifact: plain text, one notation per line, blank lines ignored on read."""
from __future__ import annotations

import os
from typing import Iterable


def parse_moves(text: str) -> list[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def format_moves(moves: Iterable[str]) -> str:
    return "\n".join(moves)


def read_moves(path: str) -> list[str]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_moves(f.read())


def write_moves(path: str, moves: Iterable[str]) -> str:
    dir_path = os.path.dirname(path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_moves(moves))
    return path

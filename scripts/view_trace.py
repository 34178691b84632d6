#!/usr/bin/env python3
import argparse
import os
import sys
from typing import List

import chess

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from blindchess.history import load_trace_json
from blindchess.scoring import label_value


def clear_screen():
    if os.name == "nt":
        os.system("cls")
    else:
        os.system("clear")


def render(data: dict, steps: List[dict], idx: int):
    """
    idx: index into steps (0 is the start position)
    """
    clear_screen()
    step = steps[idx]
    print(f"Policy: {data.get('policy') or '?'} | Winner: {data.get('winner')}")
    print("-")
    print(chess.Board(step["fen"]))
    print("-")
    if idx == 0:
        print("Start position")
    else:
        flag = "  (!)" if step.get("is_illegal_attempt") else ""
        print(f"Step {idx}/{len(steps) - 1}  {step['description']}{flag}")
        if step.get("skipped"):
            print(f"Skipped: {' '.join(step['skipped'])}")
    if step.get("is_mate"):
        print("CHECKMATE")
    elif step.get("is_check"):
        print("Check")
    print(f"Score  W {step['white_score']}  B {step['black_score']}")
    lost_w = sum(label_value(name) for name in step["captured_by_black"])
    lost_b = sum(label_value(name) for name in step["captured_by_white"])
    print(f"Lost by white: -{lost_w}  {', '.join(step['captured_by_black']) or '-'}")
    print(f"Lost by black: -{lost_b}  {', '.join(step['captured_by_white']) or '-'}")
    print("Commands: [Enter] next | p prev | r restart | e end | g <step> goto | q quit")


def main():
    parser = argparse.ArgumentParser(description="Step through a saved reconciliation trace.")
    parser.add_argument("trace", help="Path to a trace JSON written by scripts/simulate.py --json-out")
    args = parser.parse_args()

    data = load_trace_json(args.trace)
    steps = data["steps"]
    idx = 0
    while True:
        render(data, steps, idx)
        try:
            inp = input("").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if inp == "q":
            break
        elif inp in ("p", "P"):
            idx = max(0, idx - 1)
        elif inp in ("r", "R"):
            idx = 0
        elif inp in ("e", "E"):
            idx = len(steps) - 1
        elif inp.startswith("g "):
            try:
                target = int(inp.split()[1])
            except (IndexError, ValueError):
                continue
            if 0 <= target < len(steps):
                idx = target
        elif idx < len(steps) - 1:
            idx += 1


if __name__ == "__main__":
    main()

"""
RECORD.py: Blind move-list authoring in the terminal
- Shows only your own pieces (plus the enemy king) and records the moves you enter.
- Pawns may capture diagonally into empty squares: an enemy piece might be hiding there.
- Commands: <from><to> or "<from> <to>" (e.g. e2e4), "sq e2" to list destinations,
  "moves", "undo", "reset", "save", "quit".
Usage: python scripts/record.py --color white [--out white.txt]
"""
import argparse
import logging
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from blindchess.config import SETTINGS, parse_log_level
from blindchess.movelist import write_moves
from blindchess.notation import color_name
from blindchess.recorder import MoveListRecorder

HELP = "Enter a move (e2e4 or 'e2 e4'), 'sq e2', 'moves', 'undo', 'reset', 'save', or 'quit'."


def split_move(raw: str) -> tuple[str, str] | None:
    parts = raw.replace("-", " ").split()
    if len(parts) == 2 and all(len(p) == 2 for p in parts):
        return parts[0].lower(), parts[1].lower()
    if len(parts) == 1 and len(parts[0]) == 4:
        return parts[0][:2].lower(), parts[0][2:].lower()
    return None


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Record a blind chess move-list.")
    ap.add_argument("--color", choices=["white", "black"], default="white")
    ap.add_argument("--out", default=None, help="Output file (default: <moves_dir>/<color>.txt)")
    ap.add_argument("--log-level", default=None)
    args = ap.parse_args(argv)
    logging.basicConfig(level=parse_log_level(args.log_level), format="%(asctime)s %(levelname)s %(message)s")

    rec = MoveListRecorder(args.color)
    out = args.out or os.path.join(SETTINGS.moves_dir, rec.default_filename())
    print(HELP)
    while True:
        print("\nBoard FEN:", rec.fen)
        print(rec.ref.board.unicode(orientation=rec.color, empty_square="."))
        try:
            raw = input(f"[{color_name(rec.color)} #{len(rec.moves) + 1}] > ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw:
            continue
        cmd = raw.lower()
        if cmd in ("q", "quit", "exit"):
            break
        if cmd == "moves":
            print(" ".join(rec.moves) or "(no moves yet)")
            continue
        if cmd == "undo":
            removed = rec.undo()
            print(f"Removed {removed}" if removed else "Nothing to undo.")
            continue
        if cmd == "reset":
            rec.reset()
            print("Session cleared.")
            continue
        if cmd == "save":
            print("Saved to", write_moves(out, rec.moves))
            continue
        try:
            if cmd.startswith("sq "):
                print("Destinations:", " ".join(rec.propose(cmd[3:].strip())) or "(none)")
                continue
            squares = split_move(cmd)
            if not squares:
                print(HELP)
                continue
            san = rec.commit(*squares)
        except ValueError as e:
            print(f"Bad square: {e}")
            continue
        print(f"Recorded {san}" if san else "That move cannot be recorded. Please try again.")
    if rec.moves:
        print("Saved to", write_moves(out, rec.moves))
    return 0


if __name__ == "__main__":
    sys.exit(main())

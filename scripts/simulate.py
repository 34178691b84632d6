"""
SIMULATE.py: Reconcile two blind move-lists
- Reads white's and black's move-list files (one notation per line, blank lines ignored).
- Replays them on one board under the chosen policy and prints the step log.
- Optionally writes the trace JSON (readable by scripts/view_trace.py) and the PGN.
Usage: python scripts/simulate.py --white white.txt --black black.txt --policy strict
Env knobs: BLINDCHESS_POLICY, BLINDCHESS_LOG_LEVEL.
"""
import argparse
import logging
import os
import sys

# Ensure the src/ layout is importable without installation
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from blindchess.config import SETTINGS, parse_log_level
from blindchess.history import dump_trace_json, trace_to_dict
from blindchess.movelist import read_moves
from blindchess.simulator import Policy, Reconciliation, StepKind, winner


def format_step(idx: int, step) -> str:
    marks = []
    if step.is_mate:
        marks.append("MATE")
    elif step.is_check:
        marks.append("check")
    if step.kind in (StepKind.ILLEGAL_ATTEMPT, StepKind.NO_LEGAL_MOVE):
        marks.append("!")
    tail = f" [{' '.join(marks)}]" if marks else ""
    return f"{idx:3d}. {step.description}{tail}  (W {step.white_score} / B {step.black_score})"


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Reconcile two blind chess move-lists.")
    ap.add_argument("--white", required=True, help="White move-list file")
    ap.add_argument("--black", required=True, help="Black move-list file")
    ap.add_argument("--policy", default=None, help="strict | seek-next (default from settings)")
    ap.add_argument("--json-out", default=None, help="Optional path to write the trace JSON")
    ap.add_argument("--pgn-out", default=None, help="Optional path to write the reconciled PGN")
    ap.add_argument("--log-level", default=None, help="Python logging level (e.g., INFO, DEBUG)")
    args = ap.parse_args(argv)

    logging.basicConfig(level=parse_log_level(args.log_level), format="%(asctime)s %(levelname)s %(message)s")
    log = logging.getLogger("simulate")

    try:
        policy = Policy.parse(args.policy or SETTINGS.default_policy)
    except ValueError as e:
        ap.error(str(e))
    try:
        white = read_moves(args.white)
        black = read_moves(args.black)
    except OSError as e:
        log.error("Failed to read move-list: %s", e)
        return 2

    sim = Reconciliation(policy, white_name=os.path.basename(args.white), black_name=os.path.basename(args.black))
    trace = sim.run(white, black)
    for idx, step in enumerate(trace[1:], start=1):
        print(format_step(idx, step))
    final = trace[-1]
    print(f"Policy: {policy.value} | Steps: {len(trace) - 1} | Score W {final.white_score} - B {final.black_score}"
          f" | Winner: {winner(trace)}")
    print(f"Captured by white: {', '.join(final.captured_by_white) or '-'}")
    print(f"Captured by black: {', '.join(final.captured_by_black) or '-'}")

    if args.json_out:
        dump_trace_json(args.json_out, trace_to_dict(trace, policy=policy, pgn=sim.pgn(),
                                                     white_moves=white, black_moves=black))
    if args.pgn_out:
        with open(args.pgn_out, "w", encoding="utf-8") as f:
            f.write(sim.pgn() + "\n")
        log.info("Wrote PGN to %s", args.pgn_out)
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `hotseat/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from hotseat.engine.board import STARTPOS_PLACEMENT, Position
from hotseat.engine.perft import perft
from hotseat.engine.pieces import Color


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Count pseudo-legal move-tree nodes from a placement"
    )
    parser.add_argument(
        "--placement",
        type=str,
        default=STARTPOS_PLACEMENT,
        help="FEN piece-placement field (default: start position)",
    )
    parser.add_argument(
        "--turn", choices=[c.value for c in Color], default=Color.WHITE.value, help="side to move"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    args = parser.parse_args()

    try:
        position = Position.from_placement(args.placement)
    except ValueError as e:
        parser.error(str(e))
    start = time.perf_counter()
    nodes = perft(position, Color(args.turn), args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()

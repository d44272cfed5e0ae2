#!/usr/bin/env python3
"""
Benchmark: measure nodes visited and time per engine move at each search
difficulty.

Run before and after a change to the move generator or the search to
quantify its cost. A lower node count at the same depth means more
effective pruning; a higher NPS means cheaper move generation and
evaluation.

Usage: python3 tools/bench.py
"""
import os
import random
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from engine.board import Player, Position, initial_board  # noqa: E402
from engine.search import Difficulty, analyse  # noqa: E402

# Fixed positions spanning opening, middlegame and endgame. Keep them
# unchanged so numbers stay comparable between versions.
POSITIONS = [
    ("Start", initial_board().to_text(), Player.RED),
    (
        "Opening",
        ".b.b.b.b/b.b.b.b./.b.b...b/....b.../...r..../r...r.r./.r.r.r.r/r.r.r.r.",
        Player.BLACK,
    ),
    (
        "Middlegame",
        ".b...b.b/b...b.../...b.b../..b.r.../.r....../r...r.r./.r...r.r/r.r.....",
        Player.RED,
    ),
    (
        "Kings",
        "......../..B...../......../..r.r.../......../R......./......../B.......",
        Player.RED,
    ),
    (
        "Double jump",
        "......../......../......../..b...../...r..../......../.....r../r.......",
        Player.BLACK,
    ),
]


def run_position(label: str, board: str, player: Player, difficulty: Difficulty) -> dict:
    """Search one position and return metrics.

    Args:
        label: Human-readable position name for display.
        board: Board notation.
        player: Side to move.
        difficulty: Search tier to run.

    Returns:
        Dict with keys: label, move, depth, score, nodes, nps, time_ms.
    """
    position = Position.from_text(board)
    start = time.monotonic()
    result = analyse(position, player, difficulty, rng=random.Random(0))
    time_ms = max(1, int((time.monotonic() - start) * 1000))

    return {
        "label": label,
        "move": str(result.move) if result.move else "(none)",
        "depth": result.depth,
        "score": result.score,
        "nodes": result.nodes,
        "nps": result.nodes * 1000 // time_ms,
        "time_ms": time_ms,
    }


def main() -> None:
    """Run all benchmark positions at each searching tier and print a table."""
    print(f"Checkers AI engine benchmark - {sys.executable}")
    print()

    for difficulty in (Difficulty.MEDIUM, Difficulty.HARD):
        print(f"Difficulty: {difficulty.value}")
        print(
            f"{'Position':<12} {'Move':<7} {'Depth':>5} {'Score':>6} "
            f"{'Nodes':>8} {'NPS':>8} {'Time(ms)':>9}"
        )
        print("-" * 62)

        results = []
        for label, board, player in POSITIONS:
            r = run_position(label, board, player, difficulty)
            results.append(r)
            print(
                f"{r['label']:<12} {r['move']:<7} {r['depth']:>5} {r['score']:>6} "
                f"{r['nodes']:>8,} {r['nps']:>8,} {r['time_ms']:>9,}"
            )

        valid = [r for r in results if r["nodes"] > 0]
        if valid:
            avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
            avg_time = sum(r["time_ms"] for r in valid) // len(valid)
            avg_nps = sum(r["nps"] for r in valid) // len(valid)
            print("-" * 62)
            print(
                f"{'AVERAGE':<12} {'':<7} {'':<5} {'':<6} "
                f"{avg_nodes:>8,} {avg_nps:>8,} {avg_time:>9,}"
            )
        print()


if __name__ == "__main__":
    main()

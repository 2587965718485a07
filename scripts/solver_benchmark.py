import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pathquest.algo.prim import generate
from pathquest.algo.solvers import solve, Strategy, GoalMode

# ==========================================
# GLOBAL CONFIGURATION
# Add or remove strategies here to include/exclude them from the race.
# ==========================================
ENABLED_STRATEGIES = [
    Strategy.BFS,
    Strategy.DFS,
    Strategy.DIJKSTRA,
    Strategy.ASTAR,
]


def run_benchmark():
    parser = argparse.ArgumentParser(description="Solver Benchmark")
    parser.add_argument("--rows", type=int, default=200, help="Maze Rows")
    parser.add_argument("--cols", type=int, default=200, help="Maze Columns")
    parser.add_argument("--goals", type=int, default=3, help="Goal count")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    parser.add_argument("--repeat", type=int, default=3, help="Runs per strategy (best time kept)")
    args = parser.parse_args()

    print(f"=== MAZE SOLVER BENCHMARK ===")
    print(f"Size: {args.rows}x{args.cols} | Goals: {args.goals} | Seed: {args.seed}")

    t0 = time.time()
    grid = generate(args.rows, args.cols, rng=args.seed, goal_count=args.goals)
    print(f"Generation: {time.time() - t0:.4f}s\n")

    for mode in GoalMode:
        print(f"--- Goal mode: {mode.value} ---")
        print(f"{'ALGORITHM':<10} | {'TIME (s)':<10} | {'EXPLORED':<10} | {'EFFICIENCY':<10} | {'COSTS'}")
        print("-" * 70)

        for strategy in ENABLED_STRATEGIES:
            best_time = None
            result = None
            for _ in range(args.repeat):
                t_start = time.time()
                result = solve(grid, strategy, mode)
                duration = time.time() - t_start
                if best_time is None or duration < best_time:
                    best_time = duration

            costs = ", ".join(str(p.cost) for p in result.paths) or "---"
            print(f"{strategy.value:<10} | {best_time:<10.4f} | {result.explored_count:<10} | "
                  f"{result.efficiency:<10.1%} | {costs}")
        print()


if __name__ == "__main__":
    run_benchmark()

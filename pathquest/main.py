import argparse
import sys
import os
import time
import logging

# Ensure project root is in path so we can import 'pathquest' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pathquest.core.cell import TerrainKind
from pathquest.core.complexity import MazeStats
from pathquest.core.errors import MazeError
from pathquest.algo.prim import generate, DEFAULT_GOAL_COUNT
from pathquest.algo.solvers import solve, Strategy, GoalMode

logger = logging.getLogger("pathquest")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def add_maze_args(parser: argparse.ArgumentParser):
    parser.add_argument("--rows", type=int, default=20, help="Maze rows")
    parser.add_argument("--cols", type=int, default=20, help="Maze columns")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    parser.add_argument("--goals", type=int, default=DEFAULT_GOAL_COUNT, help="Number of goal cells")
    parser.add_argument("--weights", type=int, nargs=4, metavar=("DEFAULT", "GRASS", "MUD", "WATER"),
                        default=None, help="Terrain weights (default 40 30 20 10)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PathQuest: maze generation and search strategies")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a maze and report its statistics")
    add_maze_args(gen_parser)

    modes = [m.value for m in GoalMode]
    algos = [s.value for s in Strategy]

    solve_parser = subparsers.add_parser("solve", help="Generate a maze and solve it")
    add_maze_args(solve_parser)
    solve_parser.add_argument("--algo", type=str, default="bfs", choices=algos, help="Search strategy")
    solve_parser.add_argument("--mode", type=str, default="first", choices=modes, help="Stop at the first goal or find all")

    bench_parser = subparsers.add_parser("benchmark", help="Race every strategy on one maze")
    add_maze_args(bench_parser)
    bench_parser.add_argument("--mode", type=str, default="all", choices=modes, help="Stop at the first goal or find all")

    return parser


def make_maze(args):
    weights = None
    if args.weights:
        weights = dict(zip(TerrainKind, args.weights))
    logger.info(f"Generating {args.rows}x{args.cols} maze (seed={args.seed}, goals={args.goals})...")
    return generate(args.rows, args.cols, rng=args.seed, goal_count=args.goals, terrain_weights=weights)


def run_generate(args):
    grid = make_maze(args)
    stats = MazeStats.calculate_stats(grid)
    logger.info(f"Stats: {stats}")
    goals = ", ".join(f"({g.row}, {g.col})" for g in grid.goal_cells)
    print(f"Goals: {goals or 'none'}")


def run_solve(args):
    grid = make_maze(args)
    logger.info(f"Solving with {args.algo.upper()} ({args.mode})...")

    result = solve(grid, args.algo, args.mode)

    print(f"Explored: {result.explored_count}/{result.total_cells} (efficiency {result.efficiency:.0%})")
    if not result.paths:
        print("No goal reached.")
    for p in result.paths:
        print(f"Goal #{p.goal_index} at ({p.goal.row}, {p.goal.col}): length {len(p.cells) - 1}, cost {p.cost}")
    if result.best_cost is not None:
        print(f"Best Cost: {result.best_cost}")


def run_benchmark(args):
    grid = make_maze(args)

    print(f"\n{'ALGORITHM':<10} | {'TIME (s)':<10} | {'EXPLORED':<10} | {'GOALS':<6} | {'BEST COST':<10}")
    print("-" * 58)

    for strategy in Strategy:
        t_start = time.time()
        result = solve(grid, strategy, args.mode)
        duration = time.time() - t_start

        best = "---" if result.best_cost is None else result.best_cost
        print(f"{strategy.value:<10} | {duration:<10.4f} | {result.explored_count:<10} | "
              f"{len(result.found_goals):<6} | {best:<10}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    commands = {
        "generate": run_generate,
        "solve": run_solve,
        "benchmark": run_benchmark,
    }
    try:
        commands[args.command](args)
    except MazeError as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

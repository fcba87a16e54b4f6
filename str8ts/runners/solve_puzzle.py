"""
Command-line runner: load a Str8ts puzzle, solve it, and print the result.

Usage:
    python -m str8ts.runners.solve_puzzle puzzles/example.txt
    python -m str8ts.runners.solve_puzzle puzzles/example.json --output solved.json
    python -m str8ts.runners.solve_puzzle puzzles/example.txt --time-limit 10 -v

The solution is checked against the puzzle rules before it is reported.
Exit codes: 0 solved, 1 no solution, 2 invalid puzzle or unreadable file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from str8ts.core.grid_types import MalformedPuzzleError, print_grid
from str8ts.core.puzzle_io import load_puzzle, save_puzzle
from str8ts.runners.kernel import solve_str8ts_with_diagnostics
from str8ts.runners.results import check_solution
from str8ts.solver.lp_solver import SolverConfig


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the solve runner.

    Returns:
        Parsed arguments with puzzle path, output path and solver options
    """
    parser = argparse.ArgumentParser(description="Solve a Str8ts puzzle with an ILP model.")
    parser.add_argument(
        "puzzle",
        type=Path,
        help="Puzzle file (.json, or the 9-line text format otherwise)"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the solved grid (format chosen by suffix)"
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="CBC time limit in seconds"
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Maximum CBC threads"
    )
    parser.add_argument(
        "--solver-msg",
        action="store_true",
        help="Show the CBC log"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log compartments and model sizes"
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """
    Load, solve, check, and optionally save one puzzle.

    Returns:
        Process exit code
    """
    try:
        puzzle = load_puzzle(args.puzzle)
    except (OSError, MalformedPuzzleError) as e:
        print(f"[ERROR] Failed to load puzzle: {e}")
        return 2

    print("=" * 70)
    print(f"PUZZLE: {args.puzzle}")
    print("=" * 70)
    print_grid(puzzle)

    config = SolverConfig(msg=args.solver_msg, time_limit=args.time_limit, threads=args.threads)
    logger.debug("Solver config: %s", config)

    print("\nSolving...")
    try:
        solution, diag = solve_str8ts_with_diagnostics(puzzle, config)
    except MalformedPuzzleError as e:
        print(f"[ERROR] Invalid puzzle: {e}")
        return 2

    print(f"  White cells: {diag.num_white_cells}")
    print(f"  Compartments: {diag.num_compartments}")
    print(f"  Variables: {diag.num_variables}")
    print(f"  Constraints: {diag.num_constraints}")
    print(f"  Solver status: {diag.solver_status}")

    if solution is None:
        print("\nNo solution found!")
        return 1

    print("\nSolution found!")
    print_grid(solution)

    violations = check_solution(puzzle, solution)
    if violations:
        print(f"\n[ERROR] Solution breaks {len(violations)} rule(s):")
        for v in violations[:10]:
            print(f"  {v}")
        return 1
    print("\n✓ Solution satisfies all rules")

    if args.output is not None:
        save_puzzle(solution, args.output)
        print(f"Saved solution to {args.output}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )

    return run(args)


if __name__ == "__main__":
    sys.exit(main())

"""
Core kernel runner for the Str8ts solver.

Solving a puzzle runs the full pipeline:
  1. Find row and column compartments
  2. Encode grid + compartments as a binary model
  3. Solve the model with CBC
  4. Decode the variable values into a new grid

The kernel keeps no state between calls and never modifies its input grid.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from str8ts.core.grid_types import Str8tsGrid
from str8ts.constraints.encoder import encode_grid
from str8ts.features.compartments import describe_compartments, find_compartments
from str8ts.runners.results import SolveDiagnostics, status_from_solver
from str8ts.solver.decoding import compartment_minimums, decode_solution
from str8ts.solver.lp_solver import SolverConfig, solve_constraints


logger = logging.getLogger(__name__)


def solve_str8ts_with_diagnostics(
    grid: Str8tsGrid,
    config: Optional[SolverConfig] = None,
) -> Tuple[Optional[Str8tsGrid], SolveDiagnostics]:
    """
    Solve a Str8ts puzzle and report how the attempt went.

    Args:
        grid: Puzzle to solve (not modified)
        config: Solver options, defaults to SolverConfig()

    Returns:
        Tuple of (solution, diagnostics):
          - solution: a new solved grid, or None if no solution was found
          - diagnostics: SolveDiagnostics with the raw solver status and
            model size; status distinguishes "infeasible" from "not_solved"

    Raises:
        MalformedPuzzleError: If a row or column repeats a black clue
        AssertionError: If decoding leaves a white cell empty

    Example:
        >>> solution, diag = solve_str8ts_with_diagnostics(puzzle)
        >>> if diag.status == "not_solved":
        ...     print(f"Solver gave up: {diag.solver_status}")
    """
    # 1. Compartments
    compartments = find_compartments(grid)
    for line in describe_compartments(compartments):
        logger.debug("Compartment %s", line)

    # 2. Encode
    encoding = encode_grid(grid, compartments)
    builder = encoding.builder

    # 3. Solve
    lp_solution = solve_constraints(builder, config)
    status = status_from_solver(lp_solution.solver_status)

    diagnostics = SolveDiagnostics(
        status=status,
        solver_status=lp_solution.solver_status,
        num_variables=builder.num_variables,
        num_constraints=builder.num_constraints,
        num_compartments=len(compartments),
        num_white_cells=len(encoding.white_cells),
    )

    if not lp_solution.is_optimal:
        diagnostics.error_message = f"Solver status: {lp_solution.solver_status}"
        logger.info("No solution found (%s)", lp_solution.solver_status)
        return None, diagnostics

    # 4. Decode
    solution = decode_solution(grid, encoding, lp_solution.values)
    logger.debug("Compartment minimums: %s", compartment_minimums(encoding, lp_solution.values))
    logger.info("Solution found")
    return solution, diagnostics


def solve_str8ts(
    grid: Str8tsGrid,
    config: Optional[SolverConfig] = None,
) -> Optional[Str8tsGrid]:
    """
    Solve a Str8ts puzzle.

    Returns:
        A new solved grid, or None if there is no solution (every solver
        status other than "Optimal" counts as no solution)

    Raises:
        MalformedPuzzleError: If a row or column repeats a black clue
    """
    solution, _ = solve_str8ts_with_diagnostics(grid, config)
    return solution

"""
Result and diagnostics structures for the Str8ts solver.

Key components:
  - SolveDiagnostics: record of one solve attempt (status, model size)
  - check_solution: independent rule checker for a solved grid, returning
    one record per violation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional

import numpy as np

from str8ts.core.grid_types import GRID_SIZE, CellColor, CellValue, Str8tsGrid, index_to_cell
from str8ts.features.compartments import find_compartments


# Status type for solve attempts
SolveStatus = Literal["ok", "infeasible", "not_solved"]


@dataclass
class SolveDiagnostics:
    """
    Diagnostics for a single solve attempt.

    Attributes:
        status: Solve outcome - one of:
            - "ok": the solver found a solution
            - "infeasible": the solver proved there is none
            - "not_solved": any other solver outcome (time limit, unbounded,
              undefined); treated as "no solution" by solve_str8ts
        solver_status: Raw status string from pulp (e.g. "Optimal", "Infeasible")
        num_variables: Variables in the model (9 per white cell + 9 per compartment)
        num_constraints: Constraints in the model
        num_compartments: Row plus column compartments
        num_white_cells: White cells in the puzzle
        error_message: Optional explanation when status != "ok"
    """
    status: SolveStatus
    solver_status: str

    num_variables: int
    num_constraints: int
    num_compartments: int
    num_white_cells: int

    error_message: Optional[str] = None


def status_from_solver(solver_status: str) -> SolveStatus:
    """Collapse a raw PuLP status string into a SolveStatus."""
    if solver_status == "Optimal":
        return "ok"
    if solver_status == "Infeasible":
        return "infeasible"
    return "not_solved"


def _line_cells(axis: str, line: int) -> List[int]:
    if axis == "row":
        return [line * GRID_SIZE + j for j in range(GRID_SIZE)]
    return [j * GRID_SIZE + line for j in range(GRID_SIZE)]


def check_solution(puzzle: Str8tsGrid, solution: Str8tsGrid) -> List[Dict]:
    """
    Check a solved grid against the puzzle it came from.

    Checks, in order:
      1. Black cells are identical to the puzzle ("black_changed")
      2. White clues are kept ("clue_changed")
      3. No white cell is empty ("empty_white")
      4. No digit repeats among the white cells and black clues of a row or
         column ("duplicate")
      5. Every compartment holds consecutive digits ("not_straight")

    Args:
        puzzle: Puzzle as given
        solution: Proposed completion

    Returns:
        List of violation records, empty if the solution is valid. Each
        record has a "kind" key plus location details, e.g.
        {"kind": "clue_changed", "r": 0, "c": 3, "clue": 5, "got": 6}
    """
    violations: List[Dict] = []

    # 1-3. Cell-level checks
    for index in range(GRID_SIZE * GRID_SIZE):
        r, c = index_to_cell(index)
        before = puzzle.get_cell(r, c)
        after = solution.get_cell(r, c)
        if before.color is CellColor.BLACK or after.color is CellColor.BLACK:
            if before != after:
                violations.append({"kind": "black_changed", "r": r, "c": c})
            continue
        if before.value is not CellValue.EMPTY and after.value != before.value:
            violations.append({"kind": "clue_changed", "r": r, "c": c,
                               "clue": int(before.value), "got": int(after.value)})
        if after.value is CellValue.EMPTY:
            violations.append({"kind": "empty_white", "r": r, "c": c})

    # 4. Row / column uniqueness, black clues included
    flat_values = solution.values.ravel()
    for axis in ("row", "col"):
        for line in range(GRID_SIZE):
            digits = [int(flat_values[i]) for i in _line_cells(axis, line) if flat_values[i] > 0]
            unique, counts = np.unique(np.array(digits, dtype=int), return_counts=True)
            for digit, count in zip(unique.tolist(), counts.tolist()):
                if count > 1:
                    violations.append({"kind": "duplicate", "axis": axis,
                                       "line": line, "digit": digit})

    # 5. Straights
    for comp in find_compartments(solution):
        digits = sorted(int(flat_values[i]) for i in comp.cells)
        if 0 in digits:
            continue  # already reported as empty_white
        if digits != list(range(digits[0], digits[0] + len(digits))):
            violations.append({"kind": "not_straight", "axis": comp.axis,
                               "line": comp.line, "cells": list(comp.cells),
                               "digits": digits})

    return violations

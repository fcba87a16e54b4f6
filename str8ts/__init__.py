"""
Str8ts puzzle solver.

Encodes a 9x9 Str8ts grid as a binary integer program, solves it with CBC
through PuLP, and decodes the result back into a grid.

Key components:
  - core.grid_types: Str8tsGrid, Cell, CellColor, CellValue
  - core.puzzle_io: text / JSON puzzle files
  - features.compartments: row and column compartments
  - constraints.encoder: grid -> variables and constraints
  - solver.lp_solver: PuLP / CBC wrapper
  - solver.decoding: variable values -> grid
  - runners.kernel: solve_str8ts, the end-to-end entry point
"""

from str8ts.core.grid_types import (
    Cell,
    CellColor,
    CellValue,
    MalformedPuzzleError,
    Str8tsGrid,
    cell_index,
    index_to_cell,
)
from str8ts.core.puzzle_io import load_puzzle, save_puzzle, parse_puzzle_text, format_puzzle_text
from str8ts.features.compartments import Compartment, find_compartments
from str8ts.constraints.encoder import Str8tsEncoding, encode_grid
from str8ts.solver.lp_solver import SolverConfig, LpSolution, solve_constraints
from str8ts.solver.decoding import decode_solution
from str8ts.runners.results import SolveDiagnostics, check_solution
from str8ts.runners.kernel import solve_str8ts, solve_str8ts_with_diagnostics

__all__ = [
    "Cell",
    "CellColor",
    "CellValue",
    "MalformedPuzzleError",
    "Str8tsGrid",
    "cell_index",
    "index_to_cell",
    "load_puzzle",
    "save_puzzle",
    "parse_puzzle_text",
    "format_puzzle_text",
    "Compartment",
    "find_compartments",
    "Str8tsEncoding",
    "encode_grid",
    "SolverConfig",
    "LpSolution",
    "solve_constraints",
    "decode_solution",
    "SolveDiagnostics",
    "check_solution",
    "solve_str8ts",
    "solve_str8ts_with_diagnostics",
]

"""
Solution decoding from the variable vector back to a Str8ts grid.

Given:
  - the puzzle grid that was encoded
  - its Str8tsEncoding (x variable map)
  - the solved variable values

Returns:
  - a new Str8tsGrid with every white cell filled in and every black cell
    copied unchanged

Decoding: cell i holds the digit k with x[i,k] >= 0.5 (tolerates solver
floating-point slack).
"""

from typing import Dict

import numpy as np

from str8ts.core.grid_types import Cell, CellColor, CellValue, Str8tsGrid
from str8ts.constraints.encoder import Str8tsEncoding
from str8ts.constraints.indexing import NUM_DIGITS, x_index_to_wd, y_index_to_cd


def x_matrix(encoding: Str8tsEncoding, values: np.ndarray) -> np.ndarray:
    """
    Gather the x block into a (W, 9) array, one row per white cell in
    ascending flat-index order, column k-1 for digit k.
    """
    num_white = len(encoding.white_cells)
    x = np.zeros((num_white, NUM_DIGITS), dtype=float)
    for x_idx in range(num_white * NUM_DIGITS):
        w, k = x_index_to_wd(x_idx)
        x[w, k - 1] = values[x_idx]
    return x


def compartment_minimums(encoding: Str8tsEncoding, values: np.ndarray) -> Dict[int, int]:
    """
    Read the y block: compartment id -> chosen minimum digit.

    Example:
        >>> compartment_minimums(enc, values)
        {0: 1, 1: 4, ...}
    """
    num_white = len(encoding.white_cells)
    minimums = {}
    for y_idx in range(num_white * NUM_DIGITS, encoding.builder.num_variables):
        if values[y_idx] >= 0.5:
            comp_id, k = y_index_to_cd(y_idx, num_white)
            minimums[comp_id] = k
    return minimums


def decode_solution(
    grid: Str8tsGrid,
    encoding: Str8tsEncoding,
    values: np.ndarray
) -> Str8tsGrid:
    """
    Decode solved variable values into a completed grid.

    The input grid is not modified.

    Args:
        grid: The puzzle that was encoded
        encoding: Its encoding
        values: Variable values, indexed like encoding.builder.variables

    Returns:
        New Str8tsGrid with all white cells filled

    Raises:
        ValueError: If values has the wrong length
        AssertionError: If a white cell ends up empty, which means the
                        encoding broke its own guarantees
    """
    values = np.asarray(values, dtype=float)
    if values.shape != (encoding.builder.num_variables,):
        raise ValueError(
            f"values shape {values.shape} does not match "
            f"({encoding.builder.num_variables},) variables"
        )

    solved = grid.copy()
    white = encoding.white_cells
    if white:
        x = x_matrix(encoding, values)
        chosen = x >= 0.5
        for row, index in enumerate(white):
            digits = np.flatnonzero(chosen[row]) + 1
            value = CellValue(int(digits[-1])) if digits.size else CellValue.EMPTY
            solved.set_cell_by_index(index, Cell(CellColor.WHITE, value))

    # Sanity check: every white cell got a digit
    empty_whites = [
        int(i) for i in np.flatnonzero(
            (solved.colors == CellColor.WHITE) & (solved.values == CellValue.EMPTY)
        )
    ]
    if empty_whites:
        raise AssertionError(f"White cells left empty after decoding: {empty_whites}")

    return solved

"""
Compartment detection for Str8ts grids.

A compartment is a maximal run of white cells inside one row or one column,
bounded by black cells or the grid edge. Every white cell belongs to exactly
one row compartment and exactly one column compartment (possibly of length 1).

Runs are found with scipy.ndimage.label over the white mask using a 1-D
structuring element, so horizontal and vertical neighbours are never mixed.
"""

from dataclasses import dataclass
from typing import List, Literal

import numpy as np
from scipy import ndimage as ndi

from str8ts.core.grid_types import GRID_SIZE, Str8tsGrid, cell_index


Axis = Literal["row", "col"]

# Only left/right neighbours connect
_HORIZONTAL = np.array([[0, 0, 0],
                        [1, 1, 1],
                        [0, 0, 0]], dtype=int)


@dataclass
class Compartment:
    """
    A maximal run of white cells in one row or column.

    Attributes:
        id: Dense id across all compartments of a grid (0, 1, 2, ...)
        axis: "row" or "col"
        line: Row number for row compartments, column number for column ones
        cells: Flat cell indices, by increasing column (row compartments)
               or increasing row (column compartments)
    """
    id: int
    axis: Axis
    line: int
    cells: List[int]

    def __len__(self) -> int:
        return len(self.cells)


def _label_runs(mask: np.ndarray) -> List[List[tuple]]:
    """
    Split each row of a boolean mask into maximal runs of True.

    Returns runs ordered by row then starting column; each run is a list of
    (row, col) pairs by increasing column.
    """
    labels, num_runs = ndi.label(mask, structure=_HORIZONTAL)

    runs = []
    for label_id in range(1, num_runs + 1):
        # argwhere is row-major, so a horizontal run comes out left to right
        coords = np.argwhere(labels == label_id)
        runs.append([(int(r), int(c)) for r, c in coords])
    return runs


def find_row_compartments(grid: Str8tsGrid, start_id: int = 0) -> List[Compartment]:
    """
    Find all row compartments, ordered by row then starting column.

    Args:
        grid: Puzzle grid
        start_id: Id given to the first compartment

    Example:
        >>> # row 0 = W B W B W B W B W, everything else black
        >>> comps = find_row_compartments(grid)
        >>> [c.cells for c in comps]
        [[0], [2], [4], [6], [8]]
    """
    compartments = []
    for run in _label_runs(grid.white_mask()):
        row = run[0][0]
        compartments.append(Compartment(
            id=start_id + len(compartments),
            axis="row",
            line=row,
            cells=[cell_index(r, c) for r, c in run],
        ))
    return compartments


def find_column_compartments(grid: Str8tsGrid, start_id: int = 0) -> List[Compartment]:
    """
    Find all column compartments, ordered by column then starting row.

    The white mask is transposed so columns become rows for labelling.
    """
    compartments = []
    for run in _label_runs(grid.white_mask().T):
        col = run[0][0]
        compartments.append(Compartment(
            id=start_id + len(compartments),
            axis="col",
            line=col,
            cells=[cell_index(r, c) for c, r in run],
        ))
    return compartments


def find_compartments(grid: Str8tsGrid) -> List[Compartment]:
    """
    Find every compartment of the grid: row compartments first, then column
    compartments, with ids 0..M-1 in that order.

    An all-black grid yields no compartments; an all-white grid yields 18
    compartments of length 9.

    Args:
        grid: Puzzle grid

    Returns:
        List of Compartment objects
    """
    row_comps = find_row_compartments(grid)
    col_comps = find_column_compartments(grid, start_id=len(row_comps))
    return row_comps + col_comps


def describe_compartments(compartments: List[Compartment]) -> List[str]:
    """
    Render compartments as "(row,col), (row,col), ..." strings for logging.
    """
    lines = []
    for comp in compartments:
        coords = ", ".join(f"({i // GRID_SIZE},{i % GRID_SIZE})" for i in comp.cells)
        lines.append(f"{comp.axis} {comp.line} #{comp.id}: {coords}")
    return lines

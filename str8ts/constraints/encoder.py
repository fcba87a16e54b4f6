"""
Str8ts -> binary linear model encoding.

Builds a ConstraintBuilder whose feasible integral points are exactly the
valid completions of a Str8ts grid.

Variables:
  - x[i,k] = 1 iff white cell i holds digit k. Clues are baked into bounds:
    [1,1] for the clue digit, [0,0] for the other digits, [0,1] if empty.
  - y[c,k] = 1 iff compartment c has minimum k. Bounds [0,1] when a straight
    of len(c) fits starting at k, else [0,0].

Constraints:
  c_1    each white cell holds exactly one digit
  c_2a   each digit at most once among the white cells of a row
  c_2b   no white cell repeats a black clue of its row
  c_3a   each digit at most once among the white cells of a column
  c_3b   no white cell repeats a black clue of its column
  c_4    each compartment has exactly one minimum
  c_5    if y[c,k] = 1, every digit k..k+len(c)-1 occurs in c

The objective is zero: this is a feasibility problem.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from str8ts.core.grid_types import (
    GRID_SIZE,
    CellColor,
    CellValue,
    MalformedPuzzleError,
    Str8tsGrid,
    cell_index,
)
from str8ts.constraints.builder import ConstraintBuilder
from str8ts.constraints.indexing import num_variables, straight_fits, x_index, y_index
from str8ts.features.compartments import Compartment, find_compartments


logger = logging.getLogger(__name__)

DIGITS = [int(v) for v in CellValue.values(with_empty=False)]


@dataclass
class Str8tsEncoding:
    """
    The model for one grid plus the maps needed to read a solution back.

    Attributes:
        builder: Variables and constraints
        compartments: Compartments the model was built from
        x: (flat cell index, digit) -> variable index, white cells only
        y: (compartment id, digit) -> variable index
    """
    builder: ConstraintBuilder
    compartments: List[Compartment]
    x: Dict[Tuple[int, int], int] = field(default_factory=dict)
    y: Dict[Tuple[int, int], int] = field(default_factory=dict)

    @property
    def white_cells(self) -> List[int]:
        return sorted({i for i, _ in self.x})


def black_clues(grid: Str8tsGrid, axis: str, line: int) -> List[int]:
    """
    Non-empty digits on the black cells of one row or column.

    Raises:
        MalformedPuzzleError: If a digit appears on two black cells of the line
    """
    if axis == "row":
        colors, values = grid.colors[line, :], grid.values[line, :]
    else:
        colors, values = grid.colors[:, line], grid.values[:, line]

    digits = [int(v) for c, v in zip(colors, values)
              if int(c) == CellColor.BLACK and int(v) != CellValue.EMPTY]

    duplicates = sorted(d for d, n in Counter(digits).items() if n > 1)
    if duplicates:
        raise MalformedPuzzleError(
            f"Duplicate black clue(s) {duplicates} in {axis} {line}"
        )
    return digits


def _add_cell_variables(grid: Str8tsGrid, enc: Str8tsEncoding) -> None:
    for pos, index in enumerate(grid.white_indices()):
        clue = int(grid.values.flat[index])
        for k in DIGITS:
            if clue == CellValue.EMPTY:
                lower, upper = 0, 1
            elif clue == k:
                lower, upper = 1, 1
            else:
                lower, upper = 0, 0
            var = enc.builder.add_variable(f"x_{index}_{k}", lower, upper)
            assert var == x_index(pos, k), f"x_{index}_{k} landed at {var}"
            enc.x[(index, k)] = var


def _add_compartment_variables(enc: Str8tsEncoding, num_white: int) -> None:
    for comp in enc.compartments:
        for k in DIGITS:
            upper = 1 if straight_fits(len(comp), k) else 0
            var = enc.builder.add_variable(f"y_{comp.id}_{k}", 0, upper)
            assert var == y_index(comp.id, k, num_white), f"y_{comp.id}_{k} landed at {var}"
            enc.y[(comp.id, k)] = var


def _add_line_constraints(
    grid: Str8tsGrid,
    enc: Str8tsEncoding,
    axis: str,
    clues: Dict[Tuple[str, int], List[int]]
) -> None:
    """Uniqueness and black-clue exclusion along every row (or column)."""
    tag = "2" if axis == "row" else "3"
    for line in range(GRID_SIZE):
        if axis == "row":
            cells = [cell_index(line, j) for j in range(GRID_SIZE)]
        else:
            cells = [cell_index(j, line) for j in range(GRID_SIZE)]
        whites = [i for i in cells if grid.colors.flat[i] == CellColor.WHITE]

        for k in DIGITS:
            enc.builder.add_at_most_one(
                [enc.x[(i, k)] for i in whites], name=f"c_{tag}a_{line}_{k}"
            )

        for k in clues[(axis, line)]:
            for i in whites:
                enc.builder.forbid(enc.x[(i, k)], name=f"c_{tag}b_{line}_{k}_{i}")


def _add_straight_constraints(enc: Str8tsEncoding) -> None:
    for comp in enc.compartments:
        length = len(comp)
        enc.builder.add_exactly_one(
            [enc.y[(comp.id, k)] for k in DIGITS], name=f"c_4_{comp.id}"
        )

        for k in DIGITS:
            if not straight_fits(length, k):
                break
            y_ck = enc.y[(comp.id, k)]
            for v in range(k, k + length):
                indices = [enc.x[(i, v)] for i in comp.cells] + [y_ck]
                coeffs = [1.0] * length + [-1.0]
                enc.builder.add_ge(indices, coeffs, 0.0, name=f"c_5_{comp.id}_{k}_{v}")


def encode_grid(
    grid: Str8tsGrid,
    compartments: Optional[List[Compartment]] = None
) -> Str8tsEncoding:
    """
    Build the binary model for a Str8ts grid.

    Args:
        grid: Puzzle to encode (not modified)
        compartments: Precomputed compartments; found from the grid if None

    Returns:
        Str8tsEncoding with the builder and the x / y variable maps

    Raises:
        MalformedPuzzleError: If a row or column repeats a black clue

    Example:
        >>> enc = encode_grid(Str8tsGrid())   # all white, all empty
        >>> len(enc.x), len(enc.y)
        (729, 162)
    """
    if compartments is None:
        compartments = find_compartments(grid)
    assert [comp.id for comp in compartments] == list(range(len(compartments))), \
        "Compartment ids must be 0..M-1 in list order"

    # Validate black clues before building anything
    clues = {
        (axis, line): black_clues(grid, axis, line)
        for axis in ("row", "col")
        for line in range(GRID_SIZE)
    }

    enc = Str8tsEncoding(builder=ConstraintBuilder(), compartments=compartments)

    _add_cell_variables(grid, enc)
    _add_compartment_variables(enc, num_white=len(grid.white_indices()))

    # 1. Each white cell holds exactly one digit
    for index in grid.white_indices():
        enc.builder.add_exactly_one([enc.x[(index, k)] for k in DIGITS], name=f"c_1_{index}")

    # 2-3. Row and column rules
    _add_line_constraints(grid, enc, "row", clues)
    _add_line_constraints(grid, enc, "col", clues)

    # 4-5. Compartment minimum and consecutiveness
    _add_straight_constraints(enc)

    num_white = len(grid.white_indices())
    assert enc.builder.num_variables == num_variables(num_white, len(compartments))
    logger.debug(
        "Encoded grid: %d white cells, %d compartments, %d variables (%d fixed), %d constraints",
        num_white, len(compartments), enc.builder.num_variables,
        sum(spec.is_fixed for spec in enc.builder.variables), enc.builder.num_constraints,
    )
    return enc

"""
Core grid types for the Str8ts solver.

This module defines the 9x9 Str8ts grid representation and the cell indexing
functions shared by the compartment finder, the encoder and the decoder.

Grid: two numpy arrays of shape (9, 9), dtype=int
  - colors: CellColor per cell (0 = white, 1 = black)
  - values: CellValue per cell (0 = empty, 1..9 = digit)
Cells: indexed as (row, col) tuples or as flat indices in [0, 80]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple, TypeAlias

import numpy as np


GRID_SIZE = 9
NUM_CELLS = GRID_SIZE * GRID_SIZE

Position: TypeAlias = Tuple[int, int]  # (row, col) in {0..8} x {0..8}


class MalformedPuzzleError(ValueError):
    """Raised when a puzzle contradicts itself before any solving happens."""
    pass


class CellColor(IntEnum):
    WHITE = 0
    BLACK = 1

    def __str__(self) -> str:
        return self.name.capitalize()


class CellValue(IntEnum):
    """
    Digit held by a cell. EMPTY sorts below ONE.

    Anything outside 1..9 converts to EMPTY, so free-form input ("", "0",
    "x") simply clears a cell.
    """
    EMPTY = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9

    @classmethod
    def values(cls, with_empty: bool = False) -> List["CellValue"]:
        """
        All cell values in ascending order.

        Args:
            with_empty: If True, EMPTY is included as the first element

        Returns:
            [EMPTY, ONE, ..., NINE] or [ONE, ..., NINE]
        """
        members = list(cls)
        return members if with_empty else members[1:]

    @classmethod
    def from_int(cls, value: int) -> "CellValue":
        if 1 <= int(value) <= 9:
            return cls(int(value))
        return cls.EMPTY

    @classmethod
    def from_char(cls, ch: str) -> "CellValue":
        if len(ch) == 1 and ch in "123456789":
            return cls(int(ch))
        return cls.EMPTY

    def to_char(self) -> str:
        return " " if self is CellValue.EMPTY else str(int(self))

    def __str__(self) -> str:
        return self.to_char()


@dataclass(frozen=True)
class Cell:
    """
    A single grid cell.

    Attributes:
        color: WHITE (solved for) or BLACK (wall, never solved)
        value: Digit or EMPTY. On a white cell a digit is a clue the solution
               must reproduce; on a black cell it excludes that digit from the
               cell's row and column.
    """
    color: CellColor = CellColor.WHITE
    value: CellValue = CellValue.EMPTY

    def __post_init__(self) -> None:
        # Accept plain ints from callers
        object.__setattr__(self, "color", CellColor(self.color))
        object.__setattr__(self, "value", CellValue(self.value))

    def __str__(self) -> str:
        return f"{self.color.name.capitalize()}({self.value.to_char()})"


def cell_index(row: int, col: int) -> int:
    """
    Map (row, col) to a flat index in [0, 80], row-major.

    Formula: index = row * 9 + col

    Raises:
        ValueError: If row or col is outside [0, 8]

    Example:
        >>> cell_index(1, 2)
        11
    """
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise ValueError(f"Cell coordinates out of range, got row={row}, col={col}")
    return row * GRID_SIZE + col


def index_to_cell(index: int) -> Position:
    """
    Inverse of cell_index: flat index -> (row, col).

    Raises:
        ValueError: If index is outside [0, 80]

    Example:
        >>> index_to_cell(11)
        (1, 2)
    """
    if not 0 <= index < NUM_CELLS:
        raise ValueError(f"Cell index out of range, got index={index}")
    return (index // GRID_SIZE, index % GRID_SIZE)


class Str8tsGrid:
    """
    Mutable 9x9 Str8ts grid.

    A new grid is all white and empty. The solver never mutates the grid it is
    given; it returns a fresh Str8tsGrid, and a front-end that wants to show
    the result calls copy_from().
    """

    def __init__(self) -> None:
        self.colors = np.full((GRID_SIZE, GRID_SIZE), int(CellColor.WHITE), dtype=int)
        self.values = np.full((GRID_SIZE, GRID_SIZE), int(CellValue.EMPTY), dtype=int)

    @classmethod
    def from_arrays(cls, colors: np.ndarray, values: np.ndarray) -> "Str8tsGrid":
        """
        Build a grid from (9, 9) color and value arrays.

        Raises:
            ValueError: If shapes are wrong or entries are out of range
        """
        colors = np.asarray(colors, dtype=int)
        values = np.asarray(values, dtype=int)
        if colors.shape != (GRID_SIZE, GRID_SIZE) or values.shape != (GRID_SIZE, GRID_SIZE):
            raise ValueError(
                f"Expected (9, 9) arrays, got colors {colors.shape} and values {values.shape}"
            )
        if not np.isin(colors, [int(CellColor.WHITE), int(CellColor.BLACK)]).all():
            raise ValueError("Colors must be 0 (white) or 1 (black)")
        if ((values < 0) | (values > 9)).any():
            raise ValueError("Values must lie in 0..9 (0 = empty)")

        grid = cls()
        grid.colors = colors.copy()
        grid.values = values.copy()
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Str8tsGrid":
        """Build a grid from 9 rows of 9 Cell objects."""
        if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
            raise ValueError("Expected 9 rows of 9 cells")
        grid = cls()
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                grid.set_cell(r, c, cell)
        return grid

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_cell(self, row: int, col: int) -> Cell:
        cell_index(row, col)  # bounds check
        return Cell(CellColor(int(self.colors[row, col])), CellValue(int(self.values[row, col])))

    def get_cell_by_index(self, index: int) -> Cell:
        return self.get_cell(*index_to_cell(index))

    def set_cell(self, row: int, col: int, cell: Cell) -> None:
        self.set_cell_color(row, col, cell.color)
        self.set_cell_value(row, col, cell.value)

    def set_cell_by_index(self, index: int, cell: Cell) -> None:
        self.set_cell(*index_to_cell(index), cell)

    def set_cell_color(self, row: int, col: int, color: CellColor) -> None:
        cell_index(row, col)
        self.colors[row, col] = int(CellColor(color))

    def set_cell_color_by_index(self, index: int, color: CellColor) -> None:
        self.set_cell_color(*index_to_cell(index), color)

    def set_cell_value(self, row: int, col: int, value: CellValue) -> None:
        cell_index(row, col)
        self.values[row, col] = int(CellValue(value))

    def set_cell_value_by_index(self, index: int, value: CellValue) -> None:
        self.set_cell_value(*index_to_cell(index), value)

    # ------------------------------------------------------------------
    # Editing operations
    # ------------------------------------------------------------------

    def toggle_cell_color(self, row: int, col: int) -> None:
        """Flip a cell between white and black, keeping its value."""
        current = self.get_cell(row, col).color
        new_color = CellColor.BLACK if current is CellColor.WHITE else CellColor.WHITE
        self.set_cell_color(row, col, new_color)

    def toggle_cell_color_by_index(self, index: int) -> None:
        self.toggle_cell_color(*index_to_cell(index))

    def copy_from(self, other: "Str8tsGrid") -> None:
        """Overwrite every cell of this grid with the cells of another."""
        self.colors[:, :] = other.colors
        self.values[:, :] = other.values

    def clear_all(self) -> None:
        """Reset to an all-white, all-empty grid."""
        self.colors[:, :] = int(CellColor.WHITE)
        self.values[:, :] = int(CellValue.EMPTY)

    def clear_values(self) -> None:
        """Erase every digit, keeping the colour layout."""
        self.values[:, :] = int(CellValue.EMPTY)

    def copy(self) -> "Str8tsGrid":
        return Str8tsGrid.from_arrays(self.colors, self.values)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def white_mask(self) -> np.ndarray:
        """Boolean (9, 9) mask of white cells."""
        return self.colors == int(CellColor.WHITE)

    def white_indices(self) -> List[int]:
        """Flat indices of all white cells, ascending."""
        return [int(i) for i in np.flatnonzero(self.white_mask())]

    def __iter__(self) -> Iterator[Cell]:
        for index in range(NUM_CELLS):
            yield self.get_cell_by_index(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Str8tsGrid):
            return NotImplemented
        return bool(np.array_equal(self.colors, other.colors)
                    and np.array_equal(self.values, other.values))

    def __repr__(self) -> str:
        return f"Str8tsGrid(white={len(self.white_indices())}, filled={int((self.values > 0).sum())})"

    def __str__(self) -> str:
        lines = []
        for r in range(GRID_SIZE):
            lines.append(" ".join(str(self.get_cell(r, c)) for c in range(GRID_SIZE)))
        return "\n".join(lines)


def print_grid(grid: Str8tsGrid) -> None:
    """
    Print a compact ASCII view of the grid for debugging.

    White cells show their digit (or '.'), black cells show '#' or their
    digit in brackets.

    Example:
        >>> g = Str8tsGrid()
        >>> g.set_cell(0, 0, Cell(CellColor.BLACK, CellValue.FIVE))
        >>> print_grid(g)   # first row starts with "[5] .  . ..."
    """
    for r in range(GRID_SIZE):
        tokens = []
        for c in range(GRID_SIZE):
            cell = grid.get_cell(r, c)
            if cell.color is CellColor.BLACK:
                tokens.append("###" if cell.value is CellValue.EMPTY else f"[{int(cell.value)}]")
            else:
                tokens.append(" . " if cell.value is CellValue.EMPTY else f" {int(cell.value)} ")
        print("".join(tokens))

"""
Smoke tests for the grid model (Str8tsGrid, Cell, CellValue, indexing).

No solver involved; just data-model behaviour.
"""

import numpy as np
import pytest

from str8ts.core.grid_types import (
    Cell,
    CellColor,
    CellValue,
    Str8tsGrid,
    cell_index,
    index_to_cell,
)


def test_cell_index_roundtrip():
    """Corners and centre map to row-major flat indices and back."""
    print("\n" + "=" * 70)
    print("TEST: cell_index / index_to_cell roundtrip")
    print("=" * 70)

    for (r, c), expected in [((0, 0), 0), ((0, 8), 8), ((8, 0), 72), ((8, 8), 80), ((4, 4), 40)]:
        idx = cell_index(r, c)
        assert idx == expected, f"cell_index({r},{c}) = {idx}, expected {expected}"
        assert index_to_cell(idx) == (r, c), f"Roundtrip failed at {(r, c)}"

    with pytest.raises(ValueError):
        cell_index(9, 0)
    with pytest.raises(ValueError):
        index_to_cell(81)

    print("  ✓ test_cell_index_roundtrip: PASSED")


def test_cell_value_sequence_and_conversions():
    """values() with/without EMPTY; junk input maps to EMPTY; EMPTY sorts first."""
    print("\n" + "=" * 70)
    print("TEST: CellValue sequence and conversions")
    print("=" * 70)

    with_empty = CellValue.values(with_empty=True)
    without_empty = CellValue.values(with_empty=False)
    assert [int(v) for v in with_empty] == list(range(10))
    assert [int(v) for v in without_empty] == list(range(1, 10))

    assert CellValue.from_int(7) is CellValue.SEVEN
    assert CellValue.from_int(0) is CellValue.EMPTY
    assert CellValue.from_int(12) is CellValue.EMPTY
    assert CellValue.from_char("3") is CellValue.THREE
    assert CellValue.from_char("x") is CellValue.EMPTY
    assert CellValue.from_char("") is CellValue.EMPTY
    assert CellValue.NINE.to_char() == "9"
    assert CellValue.EMPTY.to_char() == " "
    assert CellValue.EMPTY < CellValue.ONE < CellValue.NINE

    print("  ✓ test_cell_value_sequence_and_conversions: PASSED")


def test_cell_accepts_plain_ints():
    cell = Cell(1, 4)
    assert cell.color is CellColor.BLACK
    assert cell.value is CellValue.FOUR
    assert str(cell) == "Black(4)"
    assert str(Cell()) == "White( )"


def test_new_grid_is_white_and_empty():
    grid = Str8tsGrid()
    cells = list(grid)
    assert len(cells) == 81, f"Expected 81 cells, got {len(cells)}"
    assert all(cell == Cell(CellColor.WHITE, CellValue.EMPTY) for cell in cells)
    assert grid.white_indices() == list(range(81))


def test_set_and_get_by_position_and_index():
    grid = Str8tsGrid()
    grid.set_cell(2, 3, Cell(CellColor.BLACK, CellValue.SIX))
    assert grid.get_cell_by_index(21) == Cell(CellColor.BLACK, CellValue.SIX)

    grid.set_cell_value_by_index(21, CellValue.TWO)
    grid.set_cell_color_by_index(21, CellColor.WHITE)
    assert grid.get_cell(2, 3) == Cell(CellColor.WHITE, CellValue.TWO)

    grid.set_cell_by_index(80, Cell(CellColor.BLACK, CellValue.EMPTY))
    assert grid.colors[8, 8] == CellColor.BLACK
    assert 80 not in grid.white_indices()


def test_editing_operations():
    """toggle, clear_values, clear_all, copy_from, copy."""
    print("\n" + "=" * 70)
    print("TEST: editing operations")
    print("=" * 70)

    grid = Str8tsGrid()
    grid.set_cell_value(0, 0, CellValue.FIVE)
    grid.toggle_cell_color(0, 0)
    assert grid.get_cell(0, 0) == Cell(CellColor.BLACK, CellValue.FIVE), \
        "Toggling colour must keep the value"
    grid.toggle_cell_color_by_index(0)
    assert grid.get_cell(0, 0).color is CellColor.WHITE

    grid.toggle_cell_color(4, 4)
    grid.set_cell_value(1, 1, CellValue.NINE)
    grid.clear_values()
    assert (grid.values == 0).all(), "clear_values must erase every digit"
    assert grid.get_cell(4, 4).color is CellColor.BLACK, "clear_values must keep colours"

    other = Str8tsGrid()
    other.copy_from(grid)
    assert other == grid

    duplicate = grid.copy()
    duplicate.set_cell_value(0, 1, CellValue.ONE)
    assert grid.get_cell(0, 1).value is CellValue.EMPTY, "copy() must be independent"

    grid.clear_all()
    assert grid == Str8tsGrid()

    print("  ✓ test_editing_operations: PASSED")


def test_from_arrays_validates_input():
    colors = np.zeros((9, 9), dtype=int)
    values = np.zeros((9, 9), dtype=int)
    values[0, 0] = 3
    grid = Str8tsGrid.from_arrays(colors, values)
    assert grid.get_cell(0, 0).value is CellValue.THREE

    with pytest.raises(ValueError):
        Str8tsGrid.from_arrays(np.zeros((8, 9), dtype=int), values)
    with pytest.raises(ValueError):
        Str8tsGrid.from_arrays(colors + 2, values)
    with pytest.raises(ValueError):
        Str8tsGrid.from_arrays(colors, values + 10)


def test_from_rows_and_str():
    rows = [[Cell() for _ in range(9)] for _ in range(9)]
    rows[0][8] = Cell(CellColor.BLACK, CellValue.ONE)
    grid = Str8tsGrid.from_rows(rows)

    first_line = str(grid).splitlines()[0]
    assert first_line.startswith("White( ) White( )")
    assert first_line.endswith("Black(1)")

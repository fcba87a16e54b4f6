"""
Smoke tests for the Str8ts encoder (grid -> variables and constraints).

No solver involved. Verifies variable bounds, the dense index layout,
constraint counts per family, and malformed-puzzle detection.
"""

from collections import Counter

import pytest

from str8ts.core.grid_types import (
    Cell,
    CellColor,
    CellValue,
    MalformedPuzzleError,
    Str8tsGrid,
    cell_index,
)
from str8ts.constraints import encoder
from str8ts.constraints.encoder import black_clues, encode_grid
from str8ts.constraints.indexing import x_index, y_index
from str8ts.features.compartments import find_compartments


def constraint_family_counts(enc) -> Counter:
    """Count constraints by family prefix (c_1, c_2a, ..., c_5)."""
    return Counter(lc.name.split("_")[0] + "_" + lc.name.split("_")[1]
                   for lc in enc.builder.constraints)


def bounds(enc, var):
    spec = enc.builder.variables[var]
    return (spec.lower, spec.upper)


def test_all_white_empty_grid():
    """Empty all-white grid: 729 x, 162 y, 423 constraints."""
    print("\n" + "=" * 70)
    print("TEST: encoding of an empty all-white grid")
    print("=" * 70)

    enc = encode_grid(Str8tsGrid())
    counts = constraint_family_counts(enc)

    print(f"  Variables: {enc.builder.num_variables}")
    print(f"  Constraints: {enc.builder.num_constraints}")
    print(f"  By family: {dict(counts)}")

    assert len(enc.x) == 729, f"Expected 729 x variables, got {len(enc.x)}"
    assert len(enc.y) == 162, f"Expected 162 y variables, got {len(enc.y)}"
    assert enc.builder.num_variables == 891
    assert all(bounds(enc, v) == (0, 1) for v in enc.x.values())

    assert counts["c_1"] == 81
    assert counts["c_2a"] == 81
    assert counts["c_3a"] == 81
    assert counts["c_4"] == 18
    # 18 compartments of length 9, only k=1 fits, 9 values each
    assert counts["c_5"] == 162
    assert counts["c_2b"] == 0 and counts["c_3b"] == 0
    assert enc.builder.num_constraints == 423

    print("  ✓ test_all_white_empty_grid: PASSED")


def test_length_nine_compartment_only_starts_at_one():
    enc = encode_grid(Str8tsGrid())
    for comp in enc.compartments:
        assert bounds(enc, enc.y[(comp.id, 1)]) == (0, 1)
        for k in range(2, 10):
            assert bounds(enc, enc.y[(comp.id, k)]) == (0, 0), \
                f"y_{comp.id}_{k} must be fixed to 0 for a length-9 compartment"


def test_clue_bounds():
    """A white clue forces its own digit on and every other digit off."""
    grid = Str8tsGrid()
    grid.set_cell_value(2, 4, CellValue.FIVE)
    enc = encode_grid(grid)

    idx = cell_index(2, 4)
    for k in range(1, 10):
        expected = (1, 1) if k == 5 else (0, 0)
        assert bounds(enc, enc.x[(idx, k)]) == expected, \
            f"x_{idx}_{k} bounds {bounds(enc, enc.x[(idx, k)])}, expected {expected}"

    # Neighbour stays free
    assert bounds(enc, enc.x[(idx + 1, 5)]) == (0, 1)


def test_singleton_compartment_keeps_all_minimums():
    grid = Str8tsGrid()
    grid.colors[:, :] = CellColor.BLACK
    for c in (0, 2, 4, 6, 8):
        grid.set_cell_color(0, c, CellColor.WHITE)
    enc = encode_grid(grid)

    assert len(enc.compartments) == 10
    for comp in enc.compartments:
        assert len(comp) == 1
        for k in range(1, 10):
            assert bounds(enc, enc.y[(comp.id, k)]) == (0, 1)

    # Length 1: 9 candidate minimums x 1 value each
    assert constraint_family_counts(enc)["c_5"] == 10 * 9


def test_straight_constraint_count_by_length():
    """A compartment of length L contributes L * (10 - L) linking constraints."""
    grid = Str8tsGrid()
    grid.colors[:, :] = CellColor.BLACK
    for c in range(3):
        grid.set_cell_color(0, c, CellColor.WHITE)  # row compartment of length 3
    enc = encode_grid(grid)

    row_comp = [c for c in enc.compartments if c.axis == "row"][0]
    assert len(row_comp) == 3
    links = [lc for lc in enc.builder.constraints if lc.name.startswith(f"c_5_{row_comp.id}_")]
    assert len(links) == 3 * 7, f"Expected 21 linking constraints, got {len(links)}"

    # Each link: x over the compartment cells at one value, minus y, >= 0
    lc = next(lc for lc in links if lc.name == f"c_5_{row_comp.id}_7_9")
    assert lc.indices == [enc.x[(i, 9)] for i in row_comp.cells] + [enc.y[(row_comp.id, 7)]]
    assert lc.coeffs == [1.0, 1.0, 1.0, -1.0]
    assert lc.sense == ">=" and lc.lower == 0.0

    assert bounds(enc, enc.y[(row_comp.id, 7)]) == (0, 1)
    assert bounds(enc, enc.y[(row_comp.id, 8)]) == (0, 0)


def test_black_clue_exclusions():
    """A black 3 at (0,0) forbids 3 for the 8 other cells of row 0 and column 0."""
    grid = Str8tsGrid()
    grid.set_cell(0, 0, Cell(CellColor.BLACK, CellValue.THREE))
    enc = encode_grid(grid)

    row_excl = [lc for lc in enc.builder.constraints if lc.name.startswith("c_2b_0_3_")]
    col_excl = [lc for lc in enc.builder.constraints if lc.name.startswith("c_3b_0_3_")]
    assert len(row_excl) == 8, f"Expected 8 row exclusions, got {len(row_excl)}"
    assert len(col_excl) == 8, f"Expected 8 column exclusions, got {len(col_excl)}"

    for lc in row_excl + col_excl:
        assert lc.sense == "<=" and lc.upper == 0.0 and lc.coeffs == [1.0]

    forbidden = {lc.indices[0] for lc in row_excl}
    assert forbidden == {enc.x[(cell_index(0, c), 3)] for c in range(1, 9)}

    # The black cell itself has no variables
    assert (0, 3) not in enc.x


def test_black_clues_helper():
    grid = Str8tsGrid()
    grid.set_cell(1, 2, Cell(CellColor.BLACK, CellValue.FOUR))
    grid.set_cell(1, 6, Cell(CellColor.BLACK, CellValue.EMPTY))
    grid.set_cell(1, 7, Cell(CellColor.WHITE, CellValue.EIGHT))  # white clues do not count
    assert black_clues(grid, "row", 1) == [4]
    assert black_clues(grid, "col", 2) == [4]
    assert black_clues(grid, "col", 7) == []


def test_duplicate_black_clues_rejected():
    """Duplicate black digits in a row or column are a malformed puzzle."""
    print("\n" + "=" * 70)
    print("TEST: duplicate black clues")
    print("=" * 70)

    grid = Str8tsGrid()
    grid.set_cell(4, 1, Cell(CellColor.BLACK, CellValue.SEVEN))
    grid.set_cell(4, 6, Cell(CellColor.BLACK, CellValue.SEVEN))
    with pytest.raises(MalformedPuzzleError, match="row 4"):
        encode_grid(grid)

    grid = Str8tsGrid()
    grid.set_cell(0, 5, Cell(CellColor.BLACK, CellValue.TWO))
    grid.set_cell(8, 5, Cell(CellColor.BLACK, CellValue.TWO))
    with pytest.raises(MalformedPuzzleError, match="col 5"):
        encode_grid(grid)

    print("  ✓ test_duplicate_black_clues_rejected: PASSED")


def test_variable_layout_matches_indexing():
    grid = Str8tsGrid()
    grid.set_cell_color(0, 0, CellColor.BLACK)
    enc = encode_grid(grid)

    whites = grid.white_indices()
    assert enc.white_cells == whites
    for pos, idx in enumerate(whites[:5]):
        for k in range(1, 10):
            assert enc.x[(idx, k)] == x_index(pos, k)
            assert enc.builder.variables[enc.x[(idx, k)]].name == f"x_{idx}_{k}"
    for comp in enc.compartments:
        assert enc.y[(comp.id, 1)] == y_index(comp.id, 1, num_white=len(whites))


def test_precomputed_compartments_and_input_untouched():
    grid = Str8tsGrid()
    grid.set_cell(3, 3, Cell(CellColor.BLACK, CellValue.ONE))
    before = grid.copy()

    comps = find_compartments(grid)
    enc = encode_grid(grid, comps)
    assert enc.compartments is comps
    assert grid == before, "encode_grid must not modify the grid"


def test_all_black_grid_has_no_variables():
    grid = Str8tsGrid()
    grid.colors[:, :] = CellColor.BLACK
    enc = encode_grid(grid)
    assert enc.builder.num_variables == 0
    assert enc.compartments == []
    assert all(not lc.indices for lc in enc.builder.constraints)


def test_black_clues_read_once_per_line(monkeypatch):
    """Each row and column is scanned for black clues exactly once."""
    calls = []
    real_black_clues = encoder.black_clues

    def counting_black_clues(grid, axis, line):
        calls.append((axis, line))
        return real_black_clues(grid, axis, line)

    monkeypatch.setattr(encoder, "black_clues", counting_black_clues)

    grid = Str8tsGrid()
    grid.set_cell(0, 0, Cell(CellColor.BLACK, CellValue.THREE))
    enc = encoder.encode_grid(grid)

    assert sorted(calls) == sorted((axis, line) for axis in ("row", "col") for line in range(9))
    assert len([lc for lc in enc.builder.constraints if lc.name.startswith("c_2b_0_3_")]) == 8


def test_line_constraints_skip_black_cells():
    grid = Str8tsGrid()
    grid.set_cell_color(0, 4, CellColor.BLACK)
    enc = encode_grid(grid)

    lc = next(lc for lc in enc.builder.constraints if lc.name == "c_2a_0_1")
    assert len(lc.indices) == 8
    assert lc.indices == [enc.x[(cell_index(0, c), 1)] for c in range(9) if c != 4]

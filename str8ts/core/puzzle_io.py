"""
Str8ts puzzle IO utilities.

Two on-disk formats are supported.

Text format (.txt), 9 lines of 9 cell characters, whitespace ignored:

    .   white cell, empty
    1-9 white cell with a clue
    #   black cell, empty
    a-i black cell carrying 1-9

    Example row:  "#12.a..#."

JSON format (.json):

    {
      "colors": [[0|1, ...], ...],   # 9x9, 0 = white, 1 = black
      "values": [[0-9, ...], ...]    # 9x9, 0 = empty
    }
"""

from pathlib import Path
from typing import Dict, List
import json

import numpy as np

from str8ts.core.grid_types import (
    GRID_SIZE,
    CellColor,
    CellValue,
    MalformedPuzzleError,
    Str8tsGrid,
)


WHITE_EMPTY = "."
BLACK_EMPTY = "#"
BLACK_DIGITS = "abcdefghi"


def parse_puzzle_text(text: str) -> Str8tsGrid:
    """
    Parse a puzzle from the text format.

    Blank lines and whitespace inside lines are ignored.

    Args:
        text: Puzzle text

    Returns:
        Str8tsGrid

    Raises:
        MalformedPuzzleError: If there are not 9 rows of 9 cells or a
                              character is not part of the format

    Example:
        >>> grid = parse_puzzle_text("\\n".join(["#" * 9] * 8 + ["a2......."]))
        >>> grid.get_cell(8, 0)
        Cell(color=<CellColor.BLACK: 1>, value=<CellValue.ONE: 1>)
    """
    rows = ["".join(line.split()) for line in text.splitlines()]
    rows = [row for row in rows if row]
    if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
        raise MalformedPuzzleError(
            f"Expected 9 rows of 9 cells, got row lengths {[len(row) for row in rows]}"
        )

    colors = np.zeros((GRID_SIZE, GRID_SIZE), dtype=int)
    values = np.zeros((GRID_SIZE, GRID_SIZE), dtype=int)
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            if ch == WHITE_EMPTY:
                continue
            elif ch in "123456789":
                values[r, c] = int(ch)
            elif ch == BLACK_EMPTY:
                colors[r, c] = CellColor.BLACK
            elif ch in BLACK_DIGITS:
                colors[r, c] = CellColor.BLACK
                values[r, c] = BLACK_DIGITS.index(ch) + 1
            else:
                raise MalformedPuzzleError(f"Unknown cell character {ch!r} at row {r}, col {c}")

    return Str8tsGrid.from_arrays(colors, values)


def format_puzzle_text(grid: Str8tsGrid) -> str:
    """
    Render a grid in the text format (inverse of parse_puzzle_text).
    """
    lines = []
    for r in range(GRID_SIZE):
        chars = []
        for c in range(GRID_SIZE):
            cell = grid.get_cell(r, c)
            if cell.color is CellColor.BLACK:
                chars.append(BLACK_EMPTY if cell.value is CellValue.EMPTY
                             else BLACK_DIGITS[int(cell.value) - 1])
            else:
                chars.append(WHITE_EMPTY if cell.value is CellValue.EMPTY
                             else str(int(cell.value)))
        lines.append("".join(chars))
    return "\n".join(lines) + "\n"


def grid_to_dict(grid: Str8tsGrid) -> Dict[str, List[List[int]]]:
    return {
        "colors": grid.colors.tolist(),
        "values": grid.values.tolist(),
    }


def grid_from_dict(data: Dict) -> Str8tsGrid:
    """
    Build a grid from the JSON structure.

    Raises:
        MalformedPuzzleError: If keys are missing or arrays are malformed
    """
    try:
        return Str8tsGrid.from_arrays(
            np.array(data["colors"], dtype=int),
            np.array(data["values"], dtype=int),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedPuzzleError(f"Invalid puzzle data: {e}") from e


def load_puzzle(path: Path) -> Str8tsGrid:
    """
    Load a puzzle from disk; ".json" files use the JSON format, anything
    else the text format.

    Raises:
        MalformedPuzzleError: If the file content is not a valid puzzle
        OSError: If the file cannot be read
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            content = f.read()
        except UnicodeDecodeError as e:
            raise MalformedPuzzleError(f"{path} is not UTF-8 text: {e}") from e

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedPuzzleError(f"{path} is not valid JSON: {e}") from e
        return grid_from_dict(data)
    return parse_puzzle_text(content)


def save_puzzle(grid: Str8tsGrid, path: Path) -> None:
    """
    Write a grid to disk in the format chosen by the file suffix.

    Parent directories are created if needed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            json.dump(grid_to_dict(grid), f, indent=2)
        else:
            f.write(format_puzzle_text(grid))

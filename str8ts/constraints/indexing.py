"""
Variable-vector indexing helpers for the Str8ts constraint system.

The model has one flat vector of binary variables laid out in two blocks:

  - x block: x[w, k] for white cell number w (0..W-1, in ascending flat-index
    order) and digit k (1..9). Layout: x_idx = w * 9 + (k - 1)
  - y block: y[c, k] for compartment c (0..M-1) and candidate minimum k
    (1..9). Layout: y_idx = W * 9 + c * 9 + (k - 1)

W is the number of white cells, M the number of compartments. Both blocks are
dense: every (cell, digit) and (compartment, digit) pair has a slot, even when
its bounds pin it to zero.

This is pure indexing math with no dependencies on constraints or solver.
"""

from typing import Tuple


NUM_DIGITS = 9


def x_index(white_pos: int, digit: int) -> int:
    """
    Convert (white cell number, digit) to a variable index.

    Args:
        white_pos: position of the cell among the white cells, 0 <= white_pos < W
        digit: digit, 1 <= digit <= 9

    Returns:
        x_idx = white_pos * 9 + (digit - 1)

    Example:
        >>> x_index(2, 4)
        21
    """
    assert 1 <= digit <= NUM_DIGITS, f"digit must be in 1..9, got {digit}"
    return white_pos * NUM_DIGITS + (digit - 1)


def x_index_to_wd(x_idx: int) -> Tuple[int, int]:
    """
    Inverse of x_index.

    Example:
        >>> x_index_to_wd(21)
        (2, 4)
    """
    return (x_idx // NUM_DIGITS, x_idx % NUM_DIGITS + 1)


def y_index(comp_id: int, digit: int, num_white: int) -> int:
    """
    Convert (compartment id, candidate minimum) to a variable index.

    The y block starts right after the x block, i.e. at num_white * 9.

    Args:
        comp_id: compartment id, 0 <= comp_id < M
        digit: candidate minimum, 1 <= digit <= 9
        num_white: number of white cells W

    Example:
        >>> # 3 white cells -> y block starts at 27
        >>> y_index(1, 2, num_white=3)
        37
    """
    assert 1 <= digit <= NUM_DIGITS, f"digit must be in 1..9, got {digit}"
    return num_white * NUM_DIGITS + comp_id * NUM_DIGITS + (digit - 1)


def y_index_to_cd(y_idx: int, num_white: int) -> Tuple[int, int]:
    """
    Inverse of y_index.

    Example:
        >>> y_index_to_cd(37, num_white=3)
        (1, 2)
    """
    offset = y_idx - num_white * NUM_DIGITS
    assert offset >= 0, f"index {y_idx} lies in the x block (W={num_white})"
    return (offset // NUM_DIGITS, offset % NUM_DIGITS + 1)


def num_variables(num_white: int, num_compartments: int) -> int:
    """Total length of the variable vector."""
    return (num_white + num_compartments) * NUM_DIGITS


def straight_fits(length: int, digit: int) -> bool:
    """
    True if a straight of `length` consecutive digits can start at `digit`
    without running past 9.

    Example:
        >>> straight_fits(3, 7)
        True
        >>> straight_fits(3, 8)
        False
    """
    return length <= NUM_DIGITS - digit + 1

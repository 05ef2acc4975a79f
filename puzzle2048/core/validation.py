"""
Structural validation of board snapshots: board size bounds, tile values and score.
"""

from numbers import Integral
from typing import Any

# ##>: Tile bounds. The cap is 2^17, the largest tile reachable on a 4x4 board.
MIN_TILE_VALUE = 2
MAX_TILE_VALUE = 2**17

# ##>: Supported board sizes (inclusive).
MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = 8


class InvalidBoardError(ValueError):
    """
    Raised when a board snapshot cannot be turned into a board state.

    Attributes
    ----------
    violations : list[str]
        Every violation found in the snapshot, in discovery order.
    """

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__(f'Invalid board: {"; ".join(self.violations)}')


def _is_integer(value: Any) -> bool:
    """Integral values only; booleans are rejected even though they subclass int."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def is_positive_integer(value: Any) -> bool:
    """Check that a count or bound is an integer of at least 1."""
    return _is_integer(value) and value >= 1


def is_valid_tile_value(value: Any) -> bool:
    """
    Check whether a cell value is acceptable.

    Parameters
    ----------
    value : Any
        The cell value.

    Returns
    -------
    bool
        True for 0 (empty) or a power of two in [MIN_TILE_VALUE, MAX_TILE_VALUE].
    """
    if not _is_integer(value):
        return False
    value = int(value)
    if value == 0:
        return True
    if value < MIN_TILE_VALUE or value > MAX_TILE_VALUE:
        return False
    return value & (value - 1) == 0


def is_valid_board_size(size: Any) -> bool:
    """Check whether a board size is an integer in [MIN_BOARD_SIZE, MAX_BOARD_SIZE]."""
    return _is_integer(size) and MIN_BOARD_SIZE <= int(size) <= MAX_BOARD_SIZE


def validate_grid(grid: Any, score: Any = 0) -> list[str]:
    """
    Collect every structural violation of a grid and score pair.

    Parameters
    ----------
    grid : Any
        A square sequence of rows (nested lists, tuples or a 2D array).
    score : Any, optional
        The accumulated score (default is 0).

    Returns
    -------
    list[str]
        Human readable violations; empty when the snapshot is valid.

    Notes
    -----
    - Validation never stops at the first problem.
    - Ragged rows are reported per row; their cells are still checked.
    """
    violations = []

    try:
        rows = [list(row) for row in grid]
    except TypeError:
        return [f'Board must be a sequence of rows, got {type(grid).__name__}'] + _validate_score(score)

    # ##: Board dimensions.
    size = len(rows)
    if not is_valid_board_size(size):
        violations.append(f'Invalid board size: {size}')

    for row_index, row in enumerate(rows):
        if len(row) != size:
            violations.append(f'Row {row_index} has {len(row)} cells, expected {size}')

    # ##: Tile values.
    for row_index, row in enumerate(rows):
        for col_index, value in enumerate(row):
            if not is_valid_tile_value(value):
                violations.append(f'Invalid tile value at ({row_index}, {col_index}): {value}')

    return violations + _validate_score(score)


def _validate_score(score: Any) -> list[str]:
    if not _is_integer(score):
        return [f'Invalid score: {score}']
    if score < 0:
        return [f'Invalid negative score: {score}']
    return []

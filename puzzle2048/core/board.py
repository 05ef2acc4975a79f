"""
Board state value types: directions, positions, board snapshots and move outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from numpy import argwhere, array, array_equal, count_nonzero, int64, ndarray, zeros

from .validation import InvalidBoardError, is_valid_board_size, validate_grid


class Direction(Enum):
    """The four sliding directions, in the order used for tie-breaking."""

    UP = 'UP'
    DOWN = 'DOWN'
    LEFT = 'LEFT'
    RIGHT = 'RIGHT'

    @property
    def rotation(self) -> int:
        """
        Number of counter-clockwise quarter turns that bring this direction to LEFT.

        Returns
        -------
        int
            The ``k`` argument for ``numpy.rot90`` (0: left, 1: up, 2: right, 3: down).
        """
        return _ROTATIONS[self]


_ROTATIONS = {Direction.LEFT: 0, Direction.UP: 1, Direction.RIGHT: 2, Direction.DOWN: 3}


class Position(NamedTuple):
    """A cell coordinate."""

    row: int
    col: int


@dataclass(frozen=True, eq=False)
class BoardState:
    """
    Immutable snapshot of a square grid and its accumulated score.

    Attributes
    ----------
    cells : ndarray
        A read-only ``size x size`` integer array; 0 denotes an empty cell.
    score : int
        The accumulated score.

    Notes
    -----
    - The grid is always copied on construction, so callers can never alias it.
    - Construction does not validate tile values; use ``from_grid`` for untrusted input.
    """

    cells: ndarray
    score: int = 0

    def __post_init__(self):
        cells = array(self.cells, dtype=int64)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f'Board must be a square grid, got shape {cells.shape}')
        cells.flags.writeable = False
        object.__setattr__(self, 'cells', cells)
        object.__setattr__(self, 'score', int(self.score))

    @classmethod
    def empty(cls, size: int = 4) -> BoardState:
        """
        Build an all-empty board with a zero score.

        Parameters
        ----------
        size : int, optional
            The side length of the grid (default is 4).

        Returns
        -------
        BoardState
            The empty board.

        Raises
        ------
        ValueError
            If the size is outside the supported range.
        """
        if not is_valid_board_size(size):
            raise ValueError(f'Invalid board size: {size}')
        return cls(zeros((size, size), dtype=int64), 0)

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def empty_cells(self) -> list[Position]:
        """Empty cells in row-major order."""
        return [Position(int(row), int(col)) for row, col in argwhere(self.cells == 0)]

    def count_empty(self) -> int:
        return int(self.cells.size - count_nonzero(self.cells))

    def max_tile(self) -> int:
        return int(self.cells.max())

    def with_tile(self, position: Position, value: int) -> BoardState:
        """
        Place a tile on a copy of this board.

        Parameters
        ----------
        position : Position
            The cell to fill.
        value : int
            The tile value.

        Returns
        -------
        BoardState
            A new board with the same score and the tile placed.
        """
        cells = self.cells.copy()
        cells[tuple(position)] = value
        return BoardState(cells, self.score)

    def to_list(self) -> list[list[int]]:
        return self.cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.score == other.score and array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes(), self.score))

    def __repr__(self) -> str:
        return f'BoardState(cells={self.to_list()}, score={self.score})'


class MoveOutcome(NamedTuple):
    """
    Result of sliding a board in one direction.

    Attributes
    ----------
    next_state : BoardState
        The board after the move (the input board itself when nothing changed).
    score_gained : int
        The sum of all tiles produced by merges during the move.
    changed : bool
        Whether any cell differs from the input board.
    """

    next_state: BoardState
    score_gained: int
    changed: bool


def from_grid(grid: Any, score: Any = 0) -> BoardState:
    """
    Ingest an externally observed board.

    Parameters
    ----------
    grid : Any
        A square sequence of rows of tile values.
    score : Any, optional
        The score shown alongside the board (default is 0).

    Returns
    -------
    BoardState
        The validated board.

    Raises
    ------
    InvalidBoardError
        If the snapshot has any violation; ``violations`` lists all of them.
    """
    violations = validate_grid(grid, score)
    if violations:
        raise InvalidBoardError(violations)
    return BoardState(grid, score)

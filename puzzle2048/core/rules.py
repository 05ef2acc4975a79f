"""
Game rules: legality of moves, terminal conditions, and structural checks of a board.
"""

from typing import NamedTuple

from numpy import any as np_any
from numpy import ndarray

from .board import BoardState, Direction
from .validation import MIN_TILE_VALUE, is_valid_board_size, is_valid_tile_value, validate_grid

# ##>: Default tile needed to win.
TARGET_TILE = 2048


class MergePair(NamedTuple):
    """A merge a line would perform: index of the leading tile, produced value and score."""

    index: int
    value: int
    score: int


def _can_move_direction(cells: ndarray, direction: Direction) -> bool:
    """
    Check if a move is possible in a specific direction without rotation.

    Parameters
    ----------
    cells : ndarray
        The grid to check.
    direction : Direction
        Direction to check.

    Returns
    -------
    bool
        True if the move changes at least one cell.
    """
    if direction is Direction.LEFT:  # Left: empty cell left of non-empty, or equal adjacent
        head, tail = cells[:, :-1], cells[:, 1:]
    elif direction is Direction.RIGHT:  # Right: empty cell right of non-empty, or equal adjacent
        head, tail = cells[:, 1:], cells[:, :-1]
    elif direction is Direction.UP:  # Up: empty cell above non-empty, or equal adjacent
        head, tail = cells[:-1, :], cells[1:, :]
    else:  # Down: empty cell below non-empty, or equal adjacent
        head, tail = cells[1:, :], cells[:-1, :]

    # ##>: Slide check first, merge check only if nothing can slide.
    if ((head == 0) & (tail != 0)).any():
        return True
    return bool(((head != 0) & (head == tail)).any())


def can_move(board: BoardState, direction: Direction) -> bool:
    """
    Check whether sliding in a direction would change the board.

    Parameters
    ----------
    board : BoardState
        The board to check.
    direction : Direction
        The direction to test.

    Returns
    -------
    bool
        True if the move is legal.

    Notes
    -----
    No score is accumulated and no new grid is built.
    """
    return _can_move_direction(board.cells, direction)


def legal_moves(board: BoardState) -> list[Direction]:
    """Legal directions in enumeration order (UP, DOWN, LEFT, RIGHT)."""
    return [direction for direction in Direction if can_move(board, direction)]


def possible_moves(board: BoardState) -> set[Direction]:
    """Directions that change the board; empty exactly when the game is over."""
    return set(legal_moves(board))


def is_game_over(board: BoardState) -> bool:
    """
    Check if the game has ended.

    Parameters
    ----------
    board : BoardState
        The board to check.

    Returns
    -------
    bool
        True if the board is full and no direction can move.

    Notes
    -----
    On a full board a direction can only move through a merge, so checking for equal
    neighbours is equivalent to testing every direction.
    """
    cells = board.cells
    if not cells.all():
        return False
    return not (np_any(cells[:-1] == cells[1:]) or np_any(cells[:, :-1] == cells[:, 1:]))


def has_won(board: BoardState, target_tile: int = TARGET_TILE) -> bool:
    """True if the largest tile reached the target; winning does not end the game."""
    return board.max_tile() >= target_tile


def can_continue_after_victory(board: BoardState, target_tile: int = TARGET_TILE) -> bool:
    """True if the board is won and moves remain."""
    return has_won(board, target_tile) and not is_game_over(board)


def moves_until_game_over(board: BoardState) -> int:
    """Number of directions still playable; 0 once the game is over."""
    if is_game_over(board):
        return 0
    return len(legal_moves(board))


def validate(board: BoardState) -> list[str]:
    """
    List all structural violations of a board.

    Parameters
    ----------
    board : BoardState
        The board to check.

    Returns
    -------
    list[str]
        Violations for board size, tile values and score.
    """
    return validate_grid(board.to_list(), board.score)


def merge_pairs(line: list[int]) -> list[MergePair]:
    """
    Describe the merges a line would perform when slid towards its head.

    Parameters
    ----------
    line : list[int]
        The values of one row or column, head first.

    Returns
    -------
    list[MergePair]
        One entry per merge, ``index`` being the original position of the leading tile.
    """
    non_zero = [(index, value) for index, value in enumerate(line) if value != 0]
    pairs = []

    i = 0
    while i < len(non_zero) - 1:
        index, value = non_zero[i]
        if value == non_zero[i + 1][1]:
            pairs.append(MergePair(index=index, value=value * 2, score=value * 2))
            i += 2
        else:
            i += 1
    return pairs


def corner_values(board: BoardState) -> list[int]:
    """Values of the four corners: top-left, top-right, bottom-left, bottom-right."""
    cells = board.cells
    return [int(cells[0, 0]), int(cells[0, -1]), int(cells[-1, 0]), int(cells[-1, -1])]


def is_optimal_board_state(board: BoardState) -> bool:
    """
    Check if the largest tile sits in any corner.

    Notes
    -----
    This is looser than the evaluator's preferred-corner bonus, which rewards a single
    specific corner. Risk assessment relies on this check.
    """
    return board.max_tile() in corner_values(board)


def board_density(board: BoardState) -> float:
    """Fraction of occupied cells."""
    total = board.size * board.size
    return (total - board.count_empty()) / total


def max_possible_score(target_tile: int = TARGET_TILE, size: int = 4) -> int:
    """
    Rough upper bound of the score needed to build every tile up to the target.

    Parameters
    ----------
    target_tile : int, optional
        The tile to reach (default is 2048).
    size : int, optional
        The board size (default is 4).

    Returns
    -------
    int
        Sum over each tile value from 4 to the target of ``value * size**2 / 2``.

    Raises
    ------
    ValueError
        If the target tile or size are not valid.
    """
    if not is_valid_board_size(size):
        raise ValueError(f'Invalid board size: {size}')
    if target_tile < MIN_TILE_VALUE or not is_valid_tile_value(target_tile):
        raise ValueError(f'Invalid target tile: {target_tile}')

    tiles_needed = size * size // 2
    score = 0
    tile = MIN_TILE_VALUE * 2
    while tile <= target_tile:
        score += tile * tiles_needed
        tile *= 2
    return score

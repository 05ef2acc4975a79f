"""
Move engine: compaction and merging of lines, and applying a direction to a board.
"""

from numpy import array, array_equal, ndarray, rot90, zeros_like

from .board import BoardState, Direction, MoveOutcome


def merge_line(line: ndarray) -> tuple[int, ndarray]:
    """
    Compact a line towards its head and merge adjacent equal values.

    Parameters
    ----------
    line : ndarray
        A 1D array representing one row or column, head first.

    Returns
    -------
    score : int
        The sum of the tiles produced by merges.
    merged_line : ndarray
        The compacted, merged values without padding.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - Merging is a single left-biased pass: a merged tile is never merged again,
      so ``[2, 2, 2, 2]`` gives ``[4, 4]`` and not ``[8]``.
    """
    non_zero = line[line != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    result = []
    score = 0

    # ##: Single pass over the compacted line.
    i = 0
    while i < len(non_zero):
        if i < len(non_zero) - 1 and non_zero[i] == non_zero[i + 1]:
            merged = int(non_zero[i]) * 2
            result.append(merged)
            score += merged
            i += 2
        else:
            result.append(int(non_zero[i]))
            i += 1

    return score, array(result, dtype=line.dtype)


def slide_and_merge(grid: ndarray) -> tuple[int, ndarray]:
    """
    Slide every row of a grid to the left, merging tiles.

    Parameters
    ----------
    grid : ndarray
        The 2D grid to slide.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_grid : ndarray
        A new grid, zero padded on the right of each row.

    Notes
    -----
    For other directions, rotate the grid before calling this function.
    """
    result = zeros_like(grid)
    score = 0

    for i, row in enumerate(grid):
        row_score, merged_row = merge_line(row)
        score += row_score
        result[i, : len(merged_row)] = merged_row

    return score, result


def apply_move(board: BoardState, direction: Direction) -> MoveOutcome:
    """
    Apply a direction to a board.

    Parameters
    ----------
    board : BoardState
        The board to move. It is never modified.
    direction : Direction
        The direction to slide the tiles.

    Returns
    -------
    MoveOutcome
        The new board, the score gained and whether anything changed.

    Notes
    -----
    - The grid is rotated so that the requested direction becomes LEFT, slid, then
      rotated back; this processes RIGHT and DOWN lines from their far end.
    - A move that changes nothing returns the input board with a score gain of 0.
    """
    rotated = rot90(board.cells, k=direction.rotation)
    score, updated = slide_and_merge(rotated)
    cells = rot90(updated, k=-direction.rotation)

    if array_equal(cells, board.cells):
        return MoveOutcome(board, 0, False)
    return MoveOutcome(BoardState(cells, board.score + score), score, True)

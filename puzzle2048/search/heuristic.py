"""
Heuristic evaluation of board states.

The evaluator is a weighted sum of independent terms. Every term is a plain function of
the board so that it can be inspected or tested on its own, and the weights live in a
frozen configuration so that strategies differ by configuration only.
"""

from __future__ import annotations

from dataclasses import dataclass

from numpy import abs as np_abs
from numpy import arange, fliplr, flipud, log2, ndarray, where
from numpy import sum as np_sum

from puzzle2048.core.board import BoardState

# ##: Corner names, mapped to (row, col) indices.
CORNERS: dict[str, tuple[int, int]] = {
    'top-left': (0, 0),
    'top-right': (0, -1),
    'bottom-left': (-1, 0),
    'bottom-right': (-1, -1),
}


@dataclass(frozen=True)
class EvaluatorWeights:
    """
    Named weights of the heuristic terms.

    A zero weight disables its term.
    """

    empty: float = 0.0
    empty_quadratic: bool = False  # Scale by the square of the empty count
    corner: float = 0.0  # Max tile in any corner
    preferred_corner: float = 0.0  # Max tile in ``corner_name``
    corner_name: str = 'bottom-left'
    monotonicity: float = 0.0
    smoothness: float = 0.0
    positional: float = 0.0  # Snake matrix peaking at ``corner_name``
    merge_potential: float = 0.0
    edge: float = 0.0
    max_tile: float = 0.0
    score: float = 0.0  # Raw accumulated score, as a tie-breaker

    def __post_init__(self):
        if self.corner_name not in CORNERS:
            raise ValueError(f'Unknown corner: {self.corner_name}, expected one of {sorted(CORNERS)}')


# ##: Preset configurations.
SIMPLE_WEIGHTS = EvaluatorWeights(empty=100.0, corner=1000.0, monotonicity=50.0)

CORNER_WEIGHTS = EvaluatorWeights(
    empty=1000.0,
    corner=10000.0,
    preferred_corner=5000.0,
    monotonicity=100.0,
    smoothness=10.0,
    edge=50.0,
    score=1.0,
)

EXPECTIMAX_WEIGHTS = EvaluatorWeights(
    empty=1000.0,
    empty_quadratic=True,
    corner=10000.0,
    preferred_corner=5000.0,
    monotonicity=100.0,
    smoothness=10.0,
    positional=1.0,
    merge_potential=1.0,
    max_tile=10.0,
    score=0.1,
)

PRESETS: dict[str, EvaluatorWeights] = {
    'simple': SIMPLE_WEIGHTS,
    'corner': CORNER_WEIGHTS,
    'expectimax': EXPECTIMAX_WEIGHTS,
}


def _log_cells(cells: ndarray) -> ndarray:
    """Base-2 logarithm of every tile, 0 for empty cells."""
    return log2(where(cells > 0, cells, 1)).astype(float)


def empty_term(board: BoardState, quadratic: bool = False) -> float:
    """Number of empty cells, squared if ``quadratic``."""
    count = board.count_empty()
    return float(count * count if quadratic else count)


def corner_term(board: BoardState) -> float:
    """1.0 if the largest tile sits in any corner, else 0.0."""
    cells = board.cells
    max_tile = cells.max()
    if max_tile == 0:
        return 0.0
    return float(any(cells[corner] == max_tile for corner in CORNERS.values()))


def preferred_corner_term(board: BoardState, corner_name: str = 'bottom-left') -> float:
    """1.0 if the largest tile sits in the named corner, else 0.0."""
    cells = board.cells
    max_tile = cells.max()
    if max_tile == 0:
        return 0.0
    return float(cells[CORNERS[corner_name]] == max_tile)


def _line_monotonicity(lines: ndarray) -> float:
    """
    Best orientation score over a set of lines.

    Zeros are skipped, so only consecutive tiles are compared. Every step against the
    orientation costs its log2 difference; the better orientation wins.
    """
    increasing = 0.0
    decreasing = 0.0
    for line in lines:
        values = log2(line[line != 0].astype(float))
        steps = values[1:] - values[:-1]
        increasing += steps[steps < 0].sum()
        decreasing -= steps[steps > 0].sum()
    return float(max(increasing, decreasing))


def monotonicity(board: BoardState) -> float:
    """
    Consistency of ordering along rows and columns.

    Returns
    -------
    float
        A non-positive value; 0 when every row and every column is sorted.
    """
    cells = board.cells
    return _line_monotonicity(cells) + _line_monotonicity(cells.T)


def smoothness(board: BoardState) -> float:
    """
    Negative sum of log2 differences between adjacent non-empty tiles.

    Returns
    -------
    float
        A non-positive value; empty cells contribute nothing.
    """
    cells = board.cells
    logs = _log_cells(cells)

    horizontal = (cells[:, :-1] != 0) & (cells[:, 1:] != 0)
    vertical = (cells[:-1, :] != 0) & (cells[1:, :] != 0)

    total = np_sum(np_abs(logs[:, :-1] - logs[:, 1:])[horizontal])
    total += np_sum(np_abs(logs[:-1, :] - logs[1:, :])[vertical])
    return -float(total)


def positional_matrix(size: int, corner_name: str = 'bottom-left') -> ndarray:
    """
    Snake-shaped weight matrix with its largest weight in the named corner.

    For a 4x4 board in the top-left corner::

        [[15, 14, 13, 12],
         [ 8,  9, 10, 11],
         [ 7,  6,  5,  4],
         [ 0,  1,  2,  3]]
    """
    weights = arange(size * size)[::-1].reshape(size, size).copy()
    weights[1::2] = weights[1::2, ::-1].copy()

    row, col = CORNERS[corner_name]
    if row == -1:
        weights = flipud(weights)
    if col == -1:
        weights = fliplr(weights)
    return weights


def positional_term(board: BoardState, corner_name: str = 'bottom-left') -> float:
    """Sum of ``weight * value * log2(value)`` over all tiles."""
    cells = board.cells
    weights = positional_matrix(board.size, corner_name)
    return float(np_sum(weights * cells * _log_cells(cells)))


def merge_potential(board: BoardState) -> float:
    """Sum of the values of adjacent equal tiles, horizontally and vertically."""
    cells = board.cells
    horizontal = (cells[:, :-1] != 0) & (cells[:, :-1] == cells[:, 1:])
    vertical = (cells[:-1, :] != 0) & (cells[:-1, :] == cells[1:, :])
    return float(cells[:, :-1][horizontal].sum() + cells[:-1, :][vertical].sum())


def edge_term(board: BoardState) -> float:
    """Sum of the tiles on the four edges, corners counted once per edge."""
    cells = board.cells
    return float(cells[0].sum() + cells[-1].sum() + cells[:, 0].sum() + cells[:, -1].sum())


class Evaluator:
    """
    Weighted heuristic scoring of boards; higher is better.

    The evaluator is pure: the same board always receives the same score.
    """

    def __init__(self, weights: EvaluatorWeights = EXPECTIMAX_WEIGHTS):
        """
        Initialize the evaluator.

        Parameters
        ----------
        weights : EvaluatorWeights, optional
            Term weights (default is ``EXPECTIMAX_WEIGHTS``).
        """
        self.weights = weights

    @classmethod
    def from_preset(cls, name: str) -> Evaluator:
        """
        Build an evaluator from a named preset.

        Raises
        ------
        ValueError
            If the preset does not exist.
        """
        if name not in PRESETS:
            raise ValueError(f'Unknown heuristic preset: {name}, expected one of {sorted(PRESETS)}')
        return cls(PRESETS[name])

    def breakdown(self, board: BoardState) -> dict[str, float]:
        """
        Weighted value of every enabled term.

        Parameters
        ----------
        board : BoardState
            The board to evaluate.

        Returns
        -------
        dict[str, float]
            Term name to weighted contribution; disabled terms are omitted.
        """
        weights = self.weights
        terms = {}

        if weights.empty:
            terms['empty'] = weights.empty * empty_term(board, weights.empty_quadratic)
        if weights.corner:
            terms['corner'] = weights.corner * corner_term(board)
        if weights.preferred_corner:
            terms['preferred_corner'] = weights.preferred_corner * preferred_corner_term(board, weights.corner_name)
        if weights.monotonicity:
            terms['monotonicity'] = weights.monotonicity * monotonicity(board)
        if weights.smoothness:
            terms['smoothness'] = weights.smoothness * smoothness(board)
        if weights.positional:
            terms['positional'] = weights.positional * positional_term(board, weights.corner_name)
        if weights.merge_potential:
            terms['merge_potential'] = weights.merge_potential * merge_potential(board)
        if weights.edge:
            terms['edge'] = weights.edge * edge_term(board)
        if weights.max_tile:
            terms['max_tile'] = weights.max_tile * board.max_tile()
        if weights.score:
            terms['score'] = weights.score * board.score
        return terms

    def score(self, board: BoardState) -> float:
        """
        Score a board.

        Parameters
        ----------
        board : BoardState
            The board to evaluate.

        Returns
        -------
        float
            The weighted sum of all enabled terms.
        """
        return float(sum(self.breakdown(board).values()))

    def __call__(self, board: BoardState) -> float:
        return self.score(board)

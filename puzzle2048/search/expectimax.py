"""
Expectimax search for the sliding-tile merge puzzle.

The search tree alternates between two kinds of nodes:

- decision nodes, where the player picks the direction with the highest value;
- chance nodes, where a new tile is placed on an empty cell, a 2 with probability 0.9
  and a 4 with probability 0.1.

The spawn distribution is used analytically: no random draw happens during search, so
the selected move depends only on the board, the depth, the sample cap and the
evaluator weights.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor

from puzzle2048.core.board import BoardState, Direction
from puzzle2048.core.gamemove import apply_move
from puzzle2048.core.rules import is_game_over, legal_moves
from puzzle2048.core.spawner import TILE_SPAWN_PROBS
from puzzle2048.core.validation import is_positive_integer

from .heuristic import Evaluator

# ##>: Module logger.
_logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 4


class ExpectimaxSearch:
    """
    Depth-bounded expectimax over board states.

    Depth counts plies: every decision and every chance node consumes one unit.
    """

    def __init__(
        self,
        depth: int = DEFAULT_DEPTH,
        evaluator: Evaluator | None = None,
        sample_cap: int | None = None,
        workers: int = 1,
    ):
        """
        Initialize the search.

        Parameters
        ----------
        depth : int, optional
            Number of plies explored from the root decision (default is 4).
        evaluator : Evaluator, optional
            Leaf evaluator (default uses ``EXPECTIMAX_WEIGHTS``).
        sample_cap : int, optional
            Maximum number of empty cells expanded at a chance node. When a board has
            more empty cells, only the first ``sample_cap`` in row-major order are
            averaged. This changes the computed expectation; None expands every cell.
        workers : int, optional
            Number of processes evaluating the root directions (default is 1, in-process).

        Raises
        ------
        ValueError
            If depth, sample cap or workers are not positive integers.
        """
        if not is_positive_integer(depth):
            raise ValueError(f'depth must be a positive integer, got {depth!r}')
        if sample_cap is not None and not is_positive_integer(sample_cap):
            raise ValueError(f'sample_cap must be a positive integer or None, got {sample_cap!r}')
        if not is_positive_integer(workers):
            raise ValueError(f'workers must be a positive integer, got {workers!r}')

        self.depth = depth
        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self.sample_cap = sample_cap
        self.workers = workers

    def decision_value(self, board: BoardState, depth: int) -> float:
        """
        Value of a board where the player is to move.

        Parameters
        ----------
        board : BoardState
            The board before the player's move.
        depth : int
            Remaining plies.

        Returns
        -------
        float
            The best child value, or the leaf evaluation when no move is possible.
        """
        if depth <= 0 or is_game_over(board):
            return self.evaluator.score(board)

        moves = legal_moves(board)
        if not moves:
            return self.evaluator.score(board)

        return max(self.chance_value(apply_move(board, move).next_state, depth - 1) for move in moves)

    def chance_value(self, board: BoardState, depth: int) -> float:
        """
        Expected value of a board waiting for a new tile.

        Parameters
        ----------
        board : BoardState
            The board after the player's move.
        depth : int
            Remaining plies.

        Returns
        -------
        float
            The spawn-weighted average over the considered empty cells, or the leaf
            evaluation when the board is full.
        """
        if depth <= 0 or is_game_over(board):
            return self.evaluator.score(board)

        cells = board.empty_cells()
        if not cells:
            return self.evaluator.score(board)
        if self.sample_cap is not None:
            cells = cells[: self.sample_cap]

        expected = 0.0
        for cell in cells:
            for value, probability in TILE_SPAWN_PROBS.items():
                expected += probability * self.decision_value(board.with_tile(cell, value), depth - 1)
        return expected / len(cells)

    def score_move(self, board: BoardState, direction: Direction) -> float | None:
        """
        Value of playing a direction from the root.

        Returns
        -------
        float | None
            The chance value of the resulting board, or None if the move is illegal.
        """
        outcome = apply_move(board, direction)
        if not outcome.changed:
            return None
        return self.chance_value(outcome.next_state, self.depth - 1)

    def score_moves(self, board: BoardState) -> dict[Direction, float]:
        """
        Value of every legal root direction.

        Parameters
        ----------
        board : BoardState
            The current board.

        Returns
        -------
        dict[Direction, float]
            Legal directions, in enumeration order, mapped to their values.
        """
        moves = legal_moves(board)
        if self.workers > 1 and len(moves) > 1:
            # ##>: Branches share no mutable state; map keeps the enumeration order.
            with ProcessPoolExecutor(max_workers=min(self.workers, len(moves))) as executor:
                values = list(executor.map(self.score_move, [board] * len(moves), moves))
        else:
            values = [self.score_move(board, move) for move in moves]
        return dict(zip(moves, values))

    def best_move(self, board: BoardState) -> Direction | None:
        """
        Choose the direction with the highest expected value.

        Parameters
        ----------
        board : BoardState
            The current board.

        Returns
        -------
        Direction | None
            The best direction; the first in enumeration order wins ties. None when no
            direction is legal.
        """
        best, best_value = None, None
        for direction, value in self.score_moves(board).items():
            _logger.debug('Direction %s scored %.3f', direction.value, value)
            if best_value is None or value > best_value:
                best, best_value = direction, value

        if best is None:
            _logger.debug('No legal move on board with score %d', board.score)
        return best

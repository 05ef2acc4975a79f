"""
Entry points for external controllers: ingest an observed board and query moves.
"""

from typing import Any

from puzzle2048.config import SolverConfig
from puzzle2048.core.board import BoardState, Direction, MoveOutcome, from_grid
from puzzle2048.core.gamemove import apply_move


def ingest(grid: Any, score: Any = 0) -> BoardState:
    """
    Turn an external board snapshot into a board state.

    Raises
    ------
    InvalidBoardError
        If the snapshot is malformed; ``violations`` lists every problem found.
    """
    return from_grid(grid, score)


def best_move(board: BoardState, config: SolverConfig | None = None) -> Direction | None:
    """
    Query the engine's chosen direction.

    Parameters
    ----------
    board : BoardState
        The current board.
    config : SolverConfig, optional
        Search options (default configuration when omitted).

    Returns
    -------
    Direction | None
        The chosen direction, or None when the game is over.
    """
    config = config if config is not None else SolverConfig()
    return config.build_search().best_move(board)


def play(board: BoardState, direction: Direction) -> MoveOutcome:
    """Apply a direction; check ``changed`` to detect a blocked move."""
    return apply_move(board, direction)

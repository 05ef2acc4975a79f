# -*- coding: utf-8 -*-
"""
Sliding-tile merge puzzle engine with expectimax move selection.
"""

from .api import best_move, ingest, play
from .config import SolverConfig
from .core import BoardState, Direction, InvalidBoardError, MoveOutcome, Position, apply_move, from_grid
from .envs import Game
from .search import Evaluator, EvaluatorWeights, ExpectimaxSearch

__all__ = [
    "best_move",
    "ingest",
    "play",
    "SolverConfig",
    "BoardState",
    "Direction",
    "InvalidBoardError",
    "MoveOutcome",
    "Position",
    "apply_move",
    "from_grid",
    "Game",
    "Evaluator",
    "EvaluatorWeights",
    "ExpectimaxSearch",
]

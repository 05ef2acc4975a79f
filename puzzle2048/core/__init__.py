# -*- coding: utf-8 -*-
"""
Core engine of the sliding-tile merge puzzle.

It provides the immutable board state, the move engine, the game rules, board validation
and the random tile spawner.
"""

from .board import BoardState, Direction, MoveOutcome, Position, from_grid
from .gamemove import apply_move, merge_line, slide_and_merge
from .rules import (
    TARGET_TILE,
    MergePair,
    board_density,
    can_continue_after_victory,
    can_move,
    has_won,
    is_game_over,
    is_optimal_board_state,
    legal_moves,
    max_possible_score,
    merge_pairs,
    moves_until_game_over,
    possible_moves,
    validate,
)
from .spawner import TILE_SPAWN_PROBS, TileSpawner
from .validation import InvalidBoardError, is_positive_integer, is_valid_board_size, is_valid_tile_value, validate_grid

__all__ = [
    "BoardState",
    "Direction",
    "MoveOutcome",
    "Position",
    "from_grid",
    "apply_move",
    "merge_line",
    "slide_and_merge",
    "TARGET_TILE",
    "MergePair",
    "board_density",
    "can_continue_after_victory",
    "can_move",
    "has_won",
    "is_game_over",
    "is_optimal_board_state",
    "legal_moves",
    "max_possible_score",
    "merge_pairs",
    "moves_until_game_over",
    "possible_moves",
    "validate",
    "TILE_SPAWN_PROBS",
    "TileSpawner",
    "InvalidBoardError",
    "is_positive_integer",
    "is_valid_board_size",
    "is_valid_tile_value",
    "validate_grid",
]

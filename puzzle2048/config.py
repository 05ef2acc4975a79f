# -*- coding: utf-8 -*-
"""
Solver configuration.
"""
from dataclasses import dataclass

from puzzle2048.core.rules import TARGET_TILE
from puzzle2048.core.validation import MIN_TILE_VALUE, is_positive_integer, is_valid_board_size, is_valid_tile_value
from puzzle2048.search.expectimax import DEFAULT_DEPTH, ExpectimaxSearch
from puzzle2048.search.heuristic import PRESETS, Evaluator


@dataclass(frozen=True)
class SolverConfig:
    """
    Recognized options of the engine.

    Attributes
    ----------
    board_size : int
        Side length of the board, 3 to 8.
    target_tile : int
        Tile value that wins the game, a power of two.
    search_depth : int
        Plies explored by expectimax. Search cost is exponential in this value.
    empty_cell_sample_cap : int | None
        Maximum empty cells expanded per chance node; None expands all of them.
    heuristic : str
        Name of the evaluator weight preset.
    workers : int
        Processes evaluating root directions in parallel.
    """

    board_size: int = 4
    target_tile: int = TARGET_TILE
    search_depth: int = DEFAULT_DEPTH
    empty_cell_sample_cap: int | None = None
    heuristic: str = 'expectimax'
    workers: int = 1

    def __post_init__(self):
        if not is_valid_board_size(self.board_size):
            raise ValueError(f'board_size must be an integer in [3, 8], got {self.board_size}')
        if not is_valid_tile_value(self.target_tile) or self.target_tile < MIN_TILE_VALUE:
            raise ValueError(f'target_tile must be a power of two, got {self.target_tile}')
        if not is_positive_integer(self.search_depth):
            raise ValueError(f'search_depth must be a positive integer, got {self.search_depth}')
        if self.empty_cell_sample_cap is not None and not is_positive_integer(self.empty_cell_sample_cap):
            raise ValueError(
                f'empty_cell_sample_cap must be a positive integer or None, got {self.empty_cell_sample_cap}'
            )
        if self.heuristic not in PRESETS:
            raise ValueError(f'heuristic must be one of {sorted(PRESETS)}, got {self.heuristic}')
        if not is_positive_integer(self.workers):
            raise ValueError(f'workers must be a positive integer, got {self.workers}')

    def build_search(self) -> ExpectimaxSearch:
        """Build the expectimax search described by this configuration."""
        return ExpectimaxSearch(
            depth=self.search_depth,
            evaluator=Evaluator.from_preset(self.heuristic),
            sample_cap=self.empty_cell_sample_cap,
            workers=self.workers,
        )

# -*- coding: utf-8 -*-
"""
Agents choosing a direction for a board.
"""
from abc import ABC, abstractmethod

from puzzle2048.core.board import BoardState, Direction
from puzzle2048.core.gamemove import apply_move
from puzzle2048.core.rules import is_optimal_board_state, legal_moves

from .expectimax import DEFAULT_DEPTH, ExpectimaxSearch
from .heuristic import CORNER_WEIGHTS, Evaluator


class Agent(ABC):
    """
    Base class for agents.

    Methods
    -------
    choose_action(board: BoardState)
        Choose a direction, or None when no direction is legal.
    """

    @abstractmethod
    def choose_action(self, board: BoardState) -> Direction | None:
        """Choose a direction for the given board."""


class PriorityAgent(Agent):
    """
    Play the first legal direction of a fixed preference order.
    """

    DEFAULT_ORDER = (Direction.LEFT, Direction.DOWN, Direction.RIGHT, Direction.UP)

    def __init__(self, order: tuple[Direction, ...] = DEFAULT_ORDER):
        if len(order) != len(Direction) or set(order) != set(Direction):
            raise ValueError(f'order must contain every direction exactly once, got {order}')
        self._order = order

    def choose_action(self, board: BoardState) -> Direction | None:
        moves = set(legal_moves(board))
        return next((direction for direction in self._order if direction in moves), None)


class GreedyAgent(Agent):
    """
    Play the direction whose resulting board scores best, without lookahead.
    """

    def __init__(self, evaluator: Evaluator | None = None):
        self._evaluator = evaluator if evaluator is not None else Evaluator(CORNER_WEIGHTS)

    def choose_action(self, board: BoardState) -> Direction | None:
        """
        Choose the direction maximizing the evaluation of the moved board.

        The first direction in enumeration order wins ties.
        """
        best, best_value = None, None
        for direction in legal_moves(board):
            value = self._evaluator.score(apply_move(board, direction).next_state)
            if best_value is None or value > best_value:
                best, best_value = direction, value
        return best

    @staticmethod
    def is_risky_move(board: BoardState, direction: Direction) -> bool:
        """
        Flag moves that leave almost no room or pull the largest tile out of its corner.

        Parameters
        ----------
        board : BoardState
            The board before the move.
        direction : Direction
            The move to assess.

        Returns
        -------
        bool
            True if the moved board has at most one empty cell, or if the largest tile
            did not grow and is no longer in any corner.
        """
        moved = apply_move(board, direction).next_state
        if moved.count_empty() <= 1:
            return True
        return moved.max_tile() == board.max_tile() and not is_optimal_board_state(moved)


class ExpectimaxAgent(Agent):
    """
    Play the direction selected by expectimax search.
    """

    def __init__(self, search: ExpectimaxSearch | None = None, depth: int = DEFAULT_DEPTH):
        """
        Initialize the agent.

        Parameters
        ----------
        search : ExpectimaxSearch, optional
            A configured search; built with ``depth`` when omitted.
        depth : int, optional
            Search depth used when no search is given (default is 4).
        """
        self._search = search if search is not None else ExpectimaxSearch(depth=depth)

    def choose_action(self, board: BoardState) -> Direction | None:
        return self._search.best_move(board)

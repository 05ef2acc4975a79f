"""
Tests for the agents and the evaluation loop.
"""

from unittest import TestCase, main

import numpy as np

from puzzle2048.config import SolverConfig
from puzzle2048.core.board import BoardState, Direction
from puzzle2048.envs import Game
from puzzle2048.evaluate import build_agent, evaluate, play_game
from puzzle2048.search.agents import ExpectimaxAgent, GreedyAgent, PriorityAgent
from puzzle2048.search.expectimax import ExpectimaxSearch

CHECKERBOARD = BoardState([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])


class CountingAgent(PriorityAgent):
    """Priority agent recording how many directions it was asked for."""

    def __init__(self):
        super().__init__()
        self.calls = 0

    def choose_action(self, board):
        self.calls += 1
        return super().choose_action(board)


class TestAgents(TestCase):
    """Direction choice of each agent."""

    def test_priority_order(self):
        """LEFT is preferred, then DOWN."""
        agent = PriorityAgent()
        self.assertEqual(agent.choose_action(BoardState([[0, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4])), Direction.LEFT)
        self.assertEqual(agent.choose_action(BoardState([[2, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])), Direction.DOWN)
        self.assertIsNone(agent.choose_action(CHECKERBOARD))

    def test_priority_order_validated(self):
        with self.assertRaises(ValueError):
            PriorityAgent(order=(Direction.LEFT, Direction.LEFT, Direction.UP, Direction.DOWN))

    def test_greedy(self):
        """Merging into the preferred bottom-left corner beats every other move."""
        board = BoardState([[0] * 4, [0] * 4, [0] * 4, [2, 2, 0, 0]])
        self.assertEqual(GreedyAgent().choose_action(board), Direction.LEFT)
        self.assertIsNone(GreedyAgent().choose_action(CHECKERBOARD))

    def test_is_risky_move(self):
        crowded = BoardState([[2, 4, 8, 16], [32, 64, 128, 256], [4, 8, 16, 32], [0, 2, 4, 8]])
        self.assertTrue(GreedyAgent.is_risky_move(crowded, Direction.LEFT))

        corner = BoardState([[0, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [64, 4, 0, 0]])
        self.assertFalse(GreedyAgent.is_risky_move(corner, Direction.DOWN))
        self.assertTrue(GreedyAgent.is_risky_move(corner, Direction.RIGHT))

    def test_expectimax_agent(self):
        board = BoardState([[2, 2, 4, 8], [0, 4, 0, 2], [0, 0, 2, 0], [0, 0, 0, 4]])
        search = ExpectimaxSearch(depth=2)
        self.assertEqual(ExpectimaxAgent(search=search).choose_action(board), search.best_move(board))


class TestEvaluate(TestCase):
    """Headless evaluation loop."""

    def test_play_game_until_over(self):
        game = play_game(PriorityAgent(), Game(seed=3))
        self.assertTrue(game.is_finished)
        self.assertGreater(game.score, 0)

    def test_play_game_max_moves(self):
        """Each legal move spawns one tile, so five moves leave at most seven tiles."""
        agent = CountingAgent()
        game = play_game(agent, Game(seed=3), max_moves=5)
        self.assertEqual(agent.calls, 5)
        self.assertLessEqual(np.count_nonzero(game.board.cells), 2 + 5)
        self.assertFalse(game.is_finished)

    def test_evaluate(self):
        result = evaluate(method='priority', length=2, seed=0)
        self.assertEqual(sum(result.values()), 2)

    def test_build_agent(self):
        config = SolverConfig(search_depth=2)
        self.assertIsInstance(build_agent('greedy', config), GreedyAgent)
        self.assertIsInstance(build_agent('expectimax', config), ExpectimaxAgent)
        with self.assertRaises(ValueError):
            build_agent('unknown', config)


if __name__ == '__main__':
    main()

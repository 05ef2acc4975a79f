"""
Tests for expectimax search (node values, sample cap, tie-breaking and determinism).
"""

from unittest import TestCase, main

from puzzle2048.core.board import BoardState, Direction
from puzzle2048.core.rules import legal_moves
from puzzle2048.search.agents import GreedyAgent
from puzzle2048.search.expectimax import ExpectimaxSearch
from puzzle2048.search.heuristic import Evaluator, EvaluatorWeights

CHECKERBOARD = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]


class TestNodeValues(TestCase):
    """Decision and chance node values on handcrafted boards."""

    def test_chance_value_uses_spawn_probabilities(self):
        """One empty cell: 0.9 * value with a 2 plus 0.1 * value with a 4."""
        cells = [[2] * 4 for _ in range(4)]
        cells[0][0] = 0
        search = ExpectimaxSearch(depth=2, evaluator=Evaluator(EvaluatorWeights(max_tile=1.0)))
        self.assertAlmostEqual(search.chance_value(BoardState(cells), 1), 0.9 * 2 + 0.1 * 4)

    def test_sample_cap_changes_expectation(self):
        """Only the first empty cells in row-major order are averaged under a cap."""
        cells = [[2] * 4 for _ in range(4)]
        cells[0][0] = 0
        cells[1][1] = 0
        board = BoardState(cells)
        evaluator = Evaluator(EvaluatorWeights(edge=1.0))

        full = ExpectimaxSearch(depth=2, evaluator=evaluator)
        capped = ExpectimaxSearch(depth=2, evaluator=evaluator, sample_cap=1)

        # ##>: Edge sum is 28; a tile in the top-left corner counts on two edges.
        self.assertAlmostEqual(full.chance_value(board, 1), 28 + (2 * 2.2) / 2)
        self.assertAlmostEqual(capped.chance_value(board, 1), 28 + 2 * 2.2)

    def test_terminal_board_evaluated_directly(self):
        """Game-over boards never leak an infinite sentinel."""
        board = BoardState(CHECKERBOARD)
        evaluator = Evaluator()
        search = ExpectimaxSearch(depth=3, evaluator=evaluator)
        self.assertEqual(search.decision_value(board, 3), evaluator.score(board))
        self.assertEqual(search.chance_value(board, 3), evaluator.score(board))

    def test_depth_zero(self):
        board = BoardState([[2, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        evaluator = Evaluator()
        search = ExpectimaxSearch(depth=1, evaluator=evaluator)
        self.assertEqual(search.decision_value(board, 0), evaluator.score(board))


class TestBestMove(TestCase):
    """Root move selection."""

    def setUp(self):
        self.board = BoardState([[2, 2, 4, 8], [0, 4, 0, 2], [0, 0, 2, 0], [0, 0, 0, 4]], 48)

    def test_no_legal_move(self):
        self.assertIsNone(ExpectimaxSearch(depth=2).best_move(BoardState(CHECKERBOARD)))

    def test_returns_legal_move(self):
        move = ExpectimaxSearch(depth=2).best_move(self.board)
        self.assertIn(move, legal_moves(self.board))

    def test_deterministic(self):
        search = ExpectimaxSearch(depth=2)
        first = search.best_move(self.board)
        for _ in range(3):
            self.assertEqual(search.best_move(self.board), first)

    def test_first_direction_wins_ties(self):
        """With a constant evaluator the first legal direction is chosen."""
        board = BoardState([[2, 0, 0, 0], [0] * 4, [0] * 4, [0] * 4])
        search = ExpectimaxSearch(depth=2, evaluator=Evaluator(EvaluatorWeights()))
        self.assertEqual(search.best_move(board), Direction.DOWN)

    def test_depth_one_is_greedy(self):
        """A single ply scores each moved board directly."""
        evaluator = Evaluator()
        search = ExpectimaxSearch(depth=1, evaluator=evaluator)
        self.assertEqual(search.best_move(self.board), GreedyAgent(evaluator).choose_action(self.board))

    def test_score_moves(self):
        search = ExpectimaxSearch(depth=2)
        scores = search.score_moves(self.board)
        self.assertEqual(list(scores), legal_moves(self.board))
        self.assertIsNone(search.score_move(BoardState(CHECKERBOARD), Direction.LEFT))

    def test_parallel_matches_sequential(self):
        sequential = ExpectimaxSearch(depth=2, sample_cap=4)
        parallel = ExpectimaxSearch(depth=2, sample_cap=4, workers=2)
        self.assertEqual(sequential.score_moves(self.board), parallel.score_moves(self.board))
        self.assertEqual(sequential.best_move(self.board), parallel.best_move(self.board))

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            ExpectimaxSearch(depth=0)
        with self.assertRaises(ValueError):
            ExpectimaxSearch(sample_cap=0)
        with self.assertRaises(ValueError):
            ExpectimaxSearch(workers=0)

    def test_non_integer_parameters(self):
        """Floats and booleans are not accepted as depth, sample cap or worker count."""
        for options in (
            {'depth': 2.5},
            {'depth': True},
            {'sample_cap': 1.5},
            {'sample_cap': True},
            {'workers': 1.0},
            {'workers': False},
        ):
            with self.subTest(options=options), self.assertRaises(ValueError):
                ExpectimaxSearch(**options)


if __name__ == '__main__':
    main()

# -*- coding: utf-8 -*-
"""
Evaluate an agent over a batch of headless games.
"""
import logging
from collections import Counter

from tqdm import trange

from puzzle2048.config import SolverConfig
from puzzle2048.envs import Game
from puzzle2048.search.agents import Agent, ExpectimaxAgent, GreedyAgent, PriorityAgent
from puzzle2048.search.expectimax import DEFAULT_DEPTH
from puzzle2048.search.heuristic import Evaluator

_logger = logging.getLogger(__name__)

AGENTS = ('priority', 'greedy', 'expectimax')


def build_agent(method: str, config: SolverConfig) -> Agent:
    """
    Build an agent by name.

    Raises
    ------
    ValueError
        If the method is unknown.
    """
    if method == 'priority':
        return PriorityAgent()
    if method == 'greedy':
        return GreedyAgent(Evaluator.from_preset(config.heuristic))
    if method == 'expectimax':
        return ExpectimaxAgent(search=config.build_search())
    raise ValueError(f'Unknown method: {method}, expected one of {AGENTS}')


def play_game(agent: Agent, game: Game, max_moves: int | None = None) -> Game:
    """
    Play one game until no move is left.

    Parameters
    ----------
    agent : Agent
        The agent choosing directions.
    game : Game
        A freshly reset game.
    max_moves : int, optional
        Stop after this many moves.

    Returns
    -------
    Game
        The game in its final state.
    """
    moves = 0
    while not game.is_finished and (max_moves is None or moves < max_moves):
        direction = agent.choose_action(game.board)
        if direction is None:
            break
        game.step(direction)
        moves += 1
    _logger.debug('Game ended after %d moves with score %d', moves, game.score)
    return game


def evaluate(
    method: str = 'expectimax', length: int = 10, config: SolverConfig | None = None, seed: int | None = None
) -> dict[int, int]:
    """
    Evaluate a move selection method.

    Parameters
    ----------
    method : str, optional
        The name of the agent to evaluate (default is ``expectimax``).
    length : int, optional
        The number of games to play (default is 10).
    config : SolverConfig, optional
        Engine options (default configuration when omitted).
    seed : int, optional
        Seed of the first game; game ``n`` uses ``seed + n``.

    Returns
    -------
    dict[int, int]
        Frequency of the maximum tile reached per game.
    """
    config = config if config is not None else SolverConfig()
    agent = build_agent(method, config)
    max_tiles = []

    with trange(length) as period:
        for num in period:
            game = Game(size=config.board_size, target_tile=config.target_tile, seed=None if seed is None else seed + num)
            play_game(agent, game)

            # ##: Log.
            period.set_description(f'Evaluation: {num + 1}')
            period.set_postfix(score=game.score, max=game.board.max_tile())

            max_tiles.append(game.board.max_tile())

    return dict(Counter(max_tiles))


if __name__ == '__main__':
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument('--method', type=str, default='expectimax', choices=AGENTS)
    parser.add_argument('--games', type=int, default=10)
    parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH)
    parser.add_argument('--cap', type=int, default=None)
    parser.add_argument('--size', type=int, default=4)
    parser.add_argument('--heuristic', type=str, default='expectimax')
    parser.add_argument('--seed', type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    solver_config = SolverConfig(
        board_size=args.size, search_depth=args.depth, empty_cell_sample_cap=args.cap, heuristic=args.heuristic
    )
    result = evaluate(method=args.method, length=args.games, config=solver_config, seed=args.seed)
    print(f'Evaluation of method {args.method}, max tiles: {result}')

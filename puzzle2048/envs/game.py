"""Headless game session driving the engine with random tile spawns."""

import logging

from puzzle2048.core.board import BoardState, Direction
from puzzle2048.core.gamemove import apply_move
from puzzle2048.core.rules import TARGET_TILE, has_won, is_game_over
from puzzle2048.core.spawner import TileSpawner

# ##>: Module logger.
_logger = logging.getLogger(__name__)


class Game:
    """
    A single game of the sliding-tile merge puzzle.

    This class keeps the current board, spawns a tile after every move that changes the
    board and reports the game state.
    """

    # ##: All Actions.
    ACTIONS = {'left': Direction.LEFT, 'up': Direction.UP, 'right': Direction.RIGHT, 'down': Direction.DOWN}

    def __init__(self, size: int = 4, target_tile: int = TARGET_TILE, seed: int | None = None):
        """
        Initialize the game.

        Parameters
        ----------
        size : int, optional
            The size of the square grid (default is 4).
        target_tile : int, optional
            The tile that wins the game (default is 2048).
        seed : int, optional
            Seed of the tile spawner, for reproducible games.
        """
        self.size = size
        self.target_tile = target_tile
        self._won_logged = False
        self.reset(seed=seed)

    @property
    def board(self) -> BoardState:
        return self._board

    @property
    def score(self) -> int:
        return self._board.score

    @property
    def is_finished(self) -> bool:
        """True if no direction can change the board."""
        return is_game_over(self._board)

    @property
    def has_won(self) -> bool:
        """True once the target tile is on the board; the game may still go on."""
        return has_won(self._board, self.target_tile)

    def reset(self, seed: int | None = None, board: BoardState | None = None) -> BoardState:
        """
        Start a new game.

        Parameters
        ----------
        seed : int, optional
            Seed of a new tile spawner; the current spawner is kept when omitted.
        board : BoardState, optional
            A starting board; an empty board with two random tiles is used when omitted.

        Returns
        -------
        BoardState
            The starting board.

        Raises
        ------
        ValueError
            If the given board does not match the game size.
        """
        if seed is not None or not hasattr(self, '_spawner'):
            self._spawner = TileSpawner(seed=seed)

        if board is None:
            board = BoardState.empty(self.size)
            board = self._spawner.spawn(self._spawner.spawn(board))
        elif board.size != self.size:
            raise ValueError(f'Board size {board.size} does not match game size {self.size}')

        self._board = board
        self._won_logged = False
        return self._board

    def step(self, direction: Direction) -> tuple[BoardState, int, bool]:
        """
        Apply a direction to the board.

        Parameters
        ----------
        direction : Direction
            The direction to slide.

        Returns
        -------
        tuple[BoardState, int, bool]
            A tuple containing:
            - The updated board
            - The score gained by this move
            - Whether the game has finished after this move

        Notes
        -----
        A move that changes nothing gains 0 and spawns no tile.
        """
        outcome = apply_move(self._board, direction)
        if outcome.changed:
            self._board = self._spawner.spawn(outcome.next_state)

        if self.has_won and not self._won_logged:
            _logger.info('Reached tile %d with score %d', self._board.max_tile(), self._board.score)
            self._won_logged = True

        return self._board, outcome.score_gained, self.is_finished

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        for row in self._board.to_list():
            print(' \t'.join(map(str, row)))

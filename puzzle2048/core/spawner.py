"""
Random tile generation: value of the next tile and the empty cell receiving it.
"""

from numpy.random import PCG64DXSM, Generator, default_rng

from .board import BoardState, Position

# ##: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


class TileSpawner:
    """
    Probabilistic generator of new tiles.

    The spawner owns the only source of randomness of the engine. Passing a seed or a
    generator makes every draw reproducible.
    """

    def __init__(self, seed: int | None = None, generator: Generator | None = None):
        """
        Initialize the spawner.

        Parameters
        ----------
        seed : int, optional
            Seed for a fresh generator, ignored when ``generator`` is given.
        generator : Generator, optional
            An existing NumPy generator to draw from.
        """
        if generator is not None:
            self._generator = generator
        elif seed is not None:
            self._generator = default_rng(seed)
        else:
            self._generator = default_rng(PCG64DXSM())

    def sample_value(self) -> int:
        """
        Draw the value of the next tile.

        Returns
        -------
        int
            2 with probability 0.9, 4 with probability 0.1.
        """
        draw = self._generator.random()
        cumulative = 0.0
        for value, probability in TILE_SPAWN_PROBS.items():
            cumulative += probability
            if draw < cumulative:
                return value
        # ##>: Guard against rounding of the cumulative sum.
        return next(iter(TILE_SPAWN_PROBS))

    def sample_position(self, board: BoardState) -> Position | None:
        """
        Draw a uniformly chosen empty cell.

        Parameters
        ----------
        board : BoardState
            The board to inspect.

        Returns
        -------
        Position | None
            An empty cell, or None when the board is full.
        """
        empty = board.empty_cells()
        if not empty:
            return None
        return empty[int(self._generator.integers(len(empty)))]

    def spawn(self, board: BoardState) -> BoardState:
        """
        Place one new tile on a random empty cell.

        Parameters
        ----------
        board : BoardState
            The board to fill.

        Returns
        -------
        BoardState
            A new board with one more tile, or the same board if it is full.
        """
        position = self.sample_position(board)
        if position is None:
            return board
        return board.with_tile(position, self.sample_value())

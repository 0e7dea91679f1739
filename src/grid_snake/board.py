"""Board bounds for the snake game."""

from __future__ import annotations

import numpy as np

from grid_snake.snake import Position


class Board:
    """Fixed-size rectangular board.

    Coordinates use (x, y) ordering: ``x`` is the column in ``[0, width)``
    and ``y`` the row in ``[0, height)``.
    """

    def __init__(self, width: int = 25, height: int = 25) -> None:
        if width < 2 or height < 2:
            raise ValueError("Board dimensions must be at least 2×2.")
        self.width = width
        self.height = height

    @property
    def center(self) -> Position:
        return Position(self.width // 2, self.height // 2)

    def in_bounds(self, position: Position) -> bool:
        """Check whether a coordinate lies on the board."""
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def random_cell(self, rng: np.random.Generator) -> Position:
        """Draw a uniformly random cell from *rng*."""
        x = int(rng.integers(0, self.width))
        y = int(rng.integers(0, self.height))
        return Position(x, y)

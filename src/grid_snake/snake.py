"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from typing import NamedTuple


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, so ``UP`` decrements it.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        """Return the direction that would cause a 180° reversal."""
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Position(NamedTuple):
    """An (x, y) board cell."""

    x: int
    y: int

    def moved(self, direction: Direction) -> Position:
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)


class Snake:
    """A snake represented as an ordered deque of positions.

    The head is ``body[0]``; the tail is ``body[-1]``. A new snake is a
    single segment; it only gets longer by eating.
    """

    def __init__(
        self,
        start: Position,
        direction: Direction = Direction.DOWN,
    ) -> None:
        self.body: deque[Position] = deque([Position(*start)])
        self.direction = direction

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    def is_reversal(self, direction: Direction) -> bool:
        """Check whether *direction* points straight back into the neck."""
        return direction is self.direction.opposite

    def next_head(self) -> Position:
        """Compute the next head position without moving."""
        return self.head.moved(self.direction)

    def advance(self, grow: bool = False) -> None:
        """Move the snake one step forward, keeping the tail if *grow*."""
        self.body.appendleft(self.next_head())
        if not grow:
            self.body.pop()

    def body_contains(self, position: Position) -> bool:
        """Check whether a non-head segment sits on *position*."""
        return any(seg == position for seg in list(self.body)[1:])

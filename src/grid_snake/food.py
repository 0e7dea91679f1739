"""Food spawning logic."""

from __future__ import annotations

import enum
import logging
from collections.abc import Container
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.snake import Position

if TYPE_CHECKING:
    from grid_snake.board import Board
    from grid_snake.config import GameConfig

logger = logging.getLogger(__name__)


class FoodKind(str, enum.Enum):
    """Food variants; gold is rarer and worth more."""

    REGULAR = "regular"
    GOLD = "gold"


@dataclass(frozen=True)
class Food:
    """A consumable item sitting on one board cell."""

    position: Position
    kind: FoodKind
    points: int

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "kind": self.kind.value,
            "points": self.points,
        }


class FoodSpawner:
    """Places food on cells the snake does not occupy.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Placement is rejection sampling with a bounded number of attempts. On a
    nearly full board the last sample is accepted even when occupied, so the
    no-overlap guarantee is best effort only.
    """

    def __init__(
        self,
        board: Board,
        config: GameConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.board = board
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, occupied: Container[Position]) -> Food:
        """Return a new food item placed off the *occupied* cells."""
        attempts = 0
        while True:
            position = self.board.random_cell(self.rng)
            attempts += 1
            if position not in occupied:
                break
            if attempts >= self.config.max_spawn_attempts:
                logger.warning(
                    "No free cell found after %d attempts; placing food on "
                    "occupied cell %s.",
                    attempts, position,
                )
                break

        if self.rng.random() < self.config.gold_probability:
            food = Food(position, FoodKind.GOLD, self.config.gold_points)
        else:
            food = Food(position, FoodKind.REGULAR, self.config.regular_points)
        logger.debug("Spawned %s food at %s.", food.kind.value, position)
        return food

"""Immutable game state snapshots handed to presentation layers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from grid_snake.food import Food
from grid_snake.snake import Direction, Position


class GamePhase(str, enum.Enum):
    """Lifecycle phase derived from the started / over flags."""

    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameState:
    """Read-only view of the engine at one point in time."""

    snake: tuple[Position, ...]
    direction: Direction
    pending_direction: Direction
    food: Food | None
    score: int
    game_over: bool
    game_started: bool
    speed: int
    board_width: int
    board_height: int
    cell_size: int

    @property
    def phase(self) -> GamePhase:
        if self.game_over:
            return GamePhase.GAME_OVER
        if self.game_started:
            return GamePhase.PLAYING
        return GamePhase.NOT_STARTED

    @property
    def head(self) -> Position:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Return the snapshot as a JSON-serializable dict."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "direction": self.direction.name,
            "pending_direction": self.pending_direction.name,
            "food": self.food.to_dict() if self.food is not None else None,
            "score": self.score,
            "game_over": self.game_over,
            "game_started": self.game_started,
            "phase": self.phase.value,
            "speed": self.speed,
            "board": {
                "width": self.board_width,
                "height": self.board_height,
                "cell_size": self.cell_size,
            },
        }

"""Grid Snake: single-player snake game engine."""

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.food import Food, FoodKind
from grid_snake.scheduler import (
    Action,
    AsyncioFrameSource,
    KeyboardInput,
    KeyEvent,
    TickScheduler,
)
from grid_snake.snake import Direction, Position, Snake
from grid_snake.state import GamePhase, GameState

__all__ = [
    "Action",
    "AsyncioFrameSource",
    "Direction",
    "Food",
    "FoodKind",
    "GameConfig",
    "GameEngine",
    "GamePhase",
    "GameState",
    "KeyEvent",
    "KeyboardInput",
    "Position",
    "Snake",
    "TickScheduler",
]

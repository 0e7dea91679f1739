"""Tick-based game engine composing board, snake, and food logic."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from grid_snake.board import Board
from grid_snake.config import GameConfig
from grid_snake.food import Food, FoodSpawner
from grid_snake.snake import Direction, Position, Snake
from grid_snake.state import GameState

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


class GameEngine:
    """Single-player snake engine and sole mutator of the game state.

    The engine owns the board, snake, and food spawner. Every public
    operation that changes state publishes a fresh :class:`GameState`
    snapshot to the listeners registered with :meth:`subscribe`.
    Rule violations never raise: a collision ends the game and an illegal
    reversal or a tick outside play is silently ignored.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.board = Board(self.config.board_width, self.config.board_height)
        self.rng = np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(self.board, self.config, rng=self.rng)
        self._listeners: list[StateListener] = []
        self._restore_defaults()

    def _restore_defaults(self) -> None:
        self.snake = Snake(self.board.center, self.config.initial_direction)
        self.pending_direction: Direction = self.config.initial_direction
        self.food: Food | None = None
        self.score = 0
        self.speed = self.config.initial_speed_ms
        self.game_over = False
        self.game_started = False

    @property
    def direction(self) -> Direction:
        """The direction applied on the most recent tick."""
        return self.snake.direction

    # -- observation ------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* for state changes.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed.", listener)

    def snapshot(self) -> GameState:
        """Return an immutable view of the current state."""
        return GameState(
            snake=tuple(self.snake.body),
            direction=self.snake.direction,
            pending_direction=self.pending_direction,
            food=self.food,
            score=self.score,
            game_over=self.game_over,
            game_started=self.game_started,
            speed=self.speed,
            board_width=self.board.width,
            board_height=self.board.height,
            cell_size=self.config.cell_size,
        )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return self.snapshot().to_dict()

    # -- lifecycle --------------------------------------------------------

    def start(self) -> None:
        """Begin play and place the first food item.

        Calling this mid-game re-spawns the food; callers guard against it.
        """
        self.game_started = True
        self.game_over = False
        self._spawn_food()
        logger.info("Game started.")
        self._notify()

    def reset(self) -> None:
        """Restore the initial defaults and place fresh food."""
        self._restore_defaults()
        self._spawn_food()
        logger.info("Game reset.")
        self._notify()

    # -- rules ------------------------------------------------------------

    def set_direction(self, direction: Direction) -> None:
        """Buffer *direction* for the next tick unless it reverses the snake."""
        if self.snake.is_reversal(direction):
            return
        if direction is self.pending_direction:
            return
        self.pending_direction = direction
        self._notify()

    def advance(self) -> None:
        """Advance the game by one tick."""
        if self.game_over or not self.game_started:
            return

        self.snake.direction = self.pending_direction
        new_head = self.snake.next_head()

        if self.check_collision(new_head):
            self.game_over = True
            logger.info(
                "Game over at %s with score %d (length %d).",
                new_head, self.score, len(self.snake),
            )
            self._notify()
            return

        ate = self.check_food_collision(new_head)
        if ate:
            assert self.food is not None  # noqa: S101
            self.score += self.food.points
        self.snake.advance(grow=ate)
        if ate:
            self._spawn_food()
            self._increase_speed()
        self._notify()

    def check_collision(self, position: Position | None = None) -> bool:
        """Check *position* (default: the head) against walls and body.

        The head itself is excluded, so the check is made against the body
        as it stands before the new head is prepended.
        """
        if position is None:
            position = self.snake.head
        if not self.board.in_bounds(position):
            return True
        return self.snake.body_contains(position)

    def check_food_collision(self, position: Position | None = None) -> bool:
        """Check whether *position* (default: the head) holds the food."""
        if self.food is None:
            return False
        if position is None:
            position = self.snake.head
        return position == self.food.position

    def spawn_food(self) -> Food:
        """Replace the current food with a freshly spawned item."""
        food = self._spawn_food()
        self._notify()
        return food

    def _spawn_food(self) -> Food:
        self.food = self.food_spawner.spawn(self.snake.body)
        return self.food

    def increase_speed(self) -> None:
        """Shorten the tick interval by one step, down to the floor."""
        if self._increase_speed():
            self._notify()

    def _increase_speed(self) -> bool:
        if self.speed <= self.config.min_speed_ms:
            return False
        self.speed = max(
            self.config.min_speed_ms, self.speed - self.config.speed_step_ms,
        )
        logger.debug("Tick interval now %d ms.", self.speed)
        return True

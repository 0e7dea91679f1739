"""Frame-driven tick scheduling and keyboard input translation."""

from __future__ import annotations

import asyncio
import enum
import functools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from grid_snake.engine import GameEngine
from grid_snake.snake import Direction
from grid_snake.state import GameState

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameSource(Protocol):
    """Something that calls back once per display frame with a timestamp.

    Timestamps are milliseconds and must increase monotonically.
    """

    def request_frame(self, callback: FrameCallback) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


@dataclass
class KeyEvent:
    """A raw key press, named with DOM ``KeyboardEvent.key`` values."""

    key: str
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


KeyListener = Callable[[KeyEvent], None]


class InputSource(Protocol):
    def add_listener(self, listener: KeyListener) -> None: ...

    def remove_listener(self, listener: KeyListener) -> None: ...


class Action(enum.Enum):
    """What a key press asks the game to do."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"


_ACTION_DIRECTIONS: dict[Action, Direction] = {
    Action.UP: Direction.UP,
    Action.DOWN: Direction.DOWN,
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
}

DEFAULT_KEY_BINDINGS: dict[str, Action] = {
    "ArrowUp": Action.UP,
    "ArrowDown": Action.DOWN,
    "ArrowLeft": Action.LEFT,
    "ArrowRight": Action.RIGHT,
    " ": Action.CONFIRM,
}


class AsyncioFrameSource:
    """Frame source backed by the running asyncio event loop."""

    def __init__(
        self,
        interval_ms: float = 1000 / 60,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self.interval_ms = interval_ms
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        loop = self.loop
        return loop.call_later(
            self.interval_ms / 1000.0, lambda: callback(loop.time() * 1000.0),
        )

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class KeyboardInput:
    """In-process input source; :meth:`dispatch` plays the keyboard."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, key: str) -> KeyEvent:
        """Deliver a key press to every listener and return the event."""
        event = KeyEvent(key)
        for listener in list(self._listeners):
            listener(event)
        return event


class TickScheduler:
    """Drives :meth:`GameEngine.advance` from display frames.

    The frame loop only runs while the game is being played and is re-armed
    whenever the started / over flags or the speed change. Frames may arrive
    far more often than ticks; a tick is applied once the elapsed time since
    the previous tick reaches the engine's current speed.
    """

    def __init__(
        self,
        engine: GameEngine,
        frames: FrameSource,
        inputs: InputSource | None = None,
        key_bindings: Mapping[str, Action] | None = None,
    ) -> None:
        self.engine = engine
        self.frames = frames
        self.inputs = inputs
        self.key_bindings = dict(
            key_bindings if key_bindings is not None else DEFAULT_KEY_BINDINGS,
        )
        self.last_tick: float | None = None
        self._handle: Any = None
        self._generation = 0
        self._disposed = False
        self._watched = self._watch_key(engine.snapshot())

        self._unsubscribe = engine.subscribe(self._on_state_change)
        if inputs is not None:
            inputs.add_listener(self.handle_key)
        if self._watched[0]:
            self._arm()

    @property
    def running(self) -> bool:
        """Whether a frame callback is currently scheduled."""
        return self._handle is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    @staticmethod
    def _watch_key(state: GameState) -> tuple[bool, int]:
        playing = state.game_started and not state.game_over
        return playing, state.speed

    def _is_playing(self) -> bool:
        return self.engine.game_started and not self.engine.game_over

    # -- frame loop -------------------------------------------------------

    def _arm(self) -> None:
        self._disarm()
        self._handle = self.frames.request_frame(
            functools.partial(self._on_frame, self._generation),
        )

    def _disarm(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self.frames.cancel_frame(self._handle)
            self._handle = None

    def _on_state_change(self, state: GameState) -> None:
        watched = self._watch_key(state)
        if watched == self._watched:
            return
        was_playing = self._watched[0]
        self._watched = watched
        if self._disposed:
            return
        if watched[0]:
            if not was_playing:
                self.last_tick = None
                logger.debug("Frame loop started.")
            self._arm()
        else:
            self._disarm()
            logger.debug("Frame loop stopped.")

    def _on_frame(self, generation: int, timestamp: float) -> None:
        if generation != self._generation or self._disposed:
            return
        self._handle = None
        if not self._is_playing():
            return

        if self.last_tick is None:
            self.last_tick = timestamp
        elif timestamp - self.last_tick >= self.engine.speed:
            self.engine.advance()
            self.last_tick = timestamp

        # advance() may already have re-armed the loop via a speed change.
        if self._handle is None and self._is_playing() and not self._disposed:
            self._arm()

    # -- input ------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> None:
        """Translate a key press into an engine call."""
        if self._disposed:
            return
        action = self.key_bindings.get(event.key)
        if action is None:
            return
        event.prevent_default()

        engine = self.engine
        if action is Action.CONFIRM:
            if engine.game_over:
                engine.reset()
            elif not engine.game_started:
                engine.start()
            return

        if engine.game_started and not engine.game_over:
            engine.set_direction(_ACTION_DIRECTIONS[action])

    # -- teardown ---------------------------------------------------------

    def dispose(self) -> None:
        """Cancel the frame loop and detach from the engine and input."""
        if self._disposed:
            return
        self._disposed = True
        self._disarm()
        self._unsubscribe()
        if self.inputs is not None:
            self.inputs.remove_listener(self.handle_key)
        logger.debug("Scheduler disposed.")

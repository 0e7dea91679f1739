"""In-memory session registry and per-connection game composition."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.scheduler import AsyncioFrameSource, KeyboardInput, TickScheduler
from grid_snake.server.models import SessionSummary

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 100


@dataclass
class GameSession:
    """One engine, its scheduler and its keyboard, bound to one client."""

    session_id: str
    engine: GameEngine
    keyboard: KeyboardInput
    scheduler: TickScheduler

    def summary(self) -> SessionSummary:
        state = self.engine.snapshot()
        return SessionSummary(
            session_id=self.session_id,
            phase=state.phase,
            score=state.score,
            speed=state.speed,
            snake_length=len(state.snake),
        )


class SessionManager:
    """Central registry managing all live game sessions."""

    def __init__(
        self,
        config: GameConfig | None = None,
        max_sessions: int = _MAX_SESSIONS,
        frame_interval_ms: float = 1000 / 60,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self.config = config if config is not None else GameConfig()
        self.max_sessions = max_sessions
        self.frame_interval_ms = frame_interval_ms
        self._sessions: dict[str, GameSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def open_session(self, seed: int | None = None) -> GameSession:
        """Compose a fresh engine + scheduler and register it.

        Must be called from within a running event loop.
        """
        if len(self._sessions) >= self.max_sessions:
            raise ValueError("Session limit reached. Try again later.")

        engine = GameEngine(self.config, seed=seed)
        keyboard = KeyboardInput()
        scheduler = TickScheduler(
            engine,
            AsyncioFrameSource(self.frame_interval_ms),
            inputs=keyboard,
        )
        session_id = uuid.uuid4().hex[:12]
        session = GameSession(
            session_id=session_id,
            engine=engine,
            keyboard=keyboard,
            scheduler=scheduler,
        )
        self._sessions[session_id] = session
        logger.info("Session %s opened.", session_id)
        return session

    def get_session(self, session_id: str) -> GameSession:
        """Return the live session with *session_id*."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    def close_session(self, session_id: str) -> None:
        """Dispose a session's scheduler and forget the session."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        session.scheduler.dispose()
        logger.info(
            "Session %s closed (score %d).",
            session_id, session.engine.score,
        )

    def cleanup(self) -> None:
        """Dispose every session."""
        for session_id in list(self._sessions):
            self.close_session(session_id)
        logger.info("SessionManager cleanup complete.")

"""REST API route handlers for configuration and session inspection."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.server.models import ConfigResponse, SessionSummary
from grid_snake.server.session_manager import SessionManager

router = APIRouter()


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@router.get("/config", tags=["config"])
async def get_config(request: Request) -> ConfigResponse:
    """Return the game constants in effect."""
    return ConfigResponse(**_get_manager(request).config.to_dict())


@router.get("/sessions", tags=["sessions"])
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List live sessions."""
    return _get_manager(request).list_sessions()


@router.get("/sessions/{session_id}", tags=["sessions"])
async def get_session(session_id: str, request: Request) -> dict:
    """Get a session's full game state."""
    try:
        session = _get_manager(request).get_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc
    return {
        "session_id": session.session_id,
        "state": session.engine.get_state(),
    }

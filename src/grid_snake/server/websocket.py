"""WebSocket handler for real-time single-player sessions."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from grid_snake.server.session_manager import SessionManager
from grid_snake.state import GameState

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _encode(state: dict) -> str:
    return json.dumps(state, separators=(",", ":"))


class StateStream:
    """Forwards state dicts to one client in the order they were pushed.

    Once :meth:`run` exits, the stream is closed: the backlog is dropped
    and further pushes are ignored.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.closed = False
        self._queue: asyncio.Queue[dict] = asyncio.Queue()

    @property
    def backlog(self) -> int:
        return self._queue.qsize()

    def push(self, state: dict) -> None:
        if not self.closed:
            self._queue.put_nowait(state)

    def on_state(self, state: GameState) -> None:
        self.push(state.to_dict())

    async def run(self) -> None:
        try:
            while True:
                state = await self._queue.get()
                if self.websocket.client_state != WebSocketState.CONNECTED:
                    return
                await self.websocket.send_text(_encode(state))
        finally:
            self.closed = True
            while not self._queue.empty():
                self._queue.get_nowait()


@ws_router.websocket("/play")
async def play(websocket: WebSocket) -> None:
    """Player WebSocket: send key presses, receive state after each change."""
    manager = _get_manager(websocket)
    await websocket.accept()
    try:
        session = manager.open_session()
    except ValueError as exc:
        await websocket.close(code=1013, reason=str(exc))
        return

    stream = StateStream(websocket)
    # Initial snapshot first so the client can draw the board at once.
    stream.push(session.engine.get_state())
    unsubscribe = session.engine.subscribe(stream.on_state)
    sender = asyncio.create_task(stream.run())

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            key = msg.get("key")
            if not isinstance(key, str):
                continue
            session.keyboard.dispatch(key)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session.session_id)
    finally:
        unsubscribe()
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.warning(
                "State sender failed for session %s.", session.session_id,
            )
        # Shutdown cleanup may already have closed the session.
        if session.session_id in manager:
            manager.close_session(session.session_id)

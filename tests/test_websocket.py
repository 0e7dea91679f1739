"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import asyncio
import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect, WebSocketState

from grid_snake.server.app import create_app
from grid_snake.server.session_manager import SessionManager
from grid_snake.server.websocket import StateStream


@pytest.fixture()
def manager():
    return SessionManager()


@pytest.fixture()
def tc(manager):
    """Starlette sync TestClient sharing one event loop for REST and WS."""
    application = create_app()
    application.state.session_manager = manager
    return TestClient(application)


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        with tc.websocket_connect("/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["snake"] == [[12, 12]]
            assert state["phase"] == "not_started"
            assert state["food"] is None
            assert state["speed"] == 500

    def test_space_starts_game(self, tc):
        with tc.websocket_connect("/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": " "}))
            state = json.loads(ws.receive_text())
            assert state["game_started"] is True
            assert state["phase"] == "playing"
            assert state["food"] is not None

    def test_direction_change_is_streamed(self, tc):
        with tc.websocket_connect("/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": " "}))
            ws.receive_text()
            ws.send_text(json.dumps({"key": "ArrowLeft"}))
            state = json.loads(ws.receive_text())
            assert state["pending_direction"] == "LEFT"

    def test_session_visible_while_connected(self, tc, manager):
        with tc.websocket_connect("/play") as ws:
            ws.receive_text()
            resp = tc.get("/sessions")
            assert len(resp.json()) == 1

    def test_invalid_messages_ignored(self, tc):
        with tc.websocket_connect("/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text("123")
            ws.send_text(json.dumps({"key": 5}))
            ws.send_text(json.dumps({"no_key": True}))
            ws.send_text(json.dumps({"key": "Enter"}))
            ws.send_text(json.dumps({"key": " "}))
            state = json.loads(ws.receive_text())
            assert state["phase"] == "playing"


class TestSessionLifecycle:
    def test_disconnect_closes_session(self, tc, manager):
        with tc.websocket_connect("/play") as ws:
            ws.receive_text()
            assert len(manager) == 1
        resp = tc.get("/sessions")
        assert resp.json() == []

    def test_session_limit_rejects_connection(self):
        application = create_app()
        application.state.session_manager = SessionManager(max_sessions=1)
        client = TestClient(application)
        with client.websocket_connect("/play") as ws:
            ws.receive_text()
            with pytest.raises(WebSocketDisconnect), client.websocket_connect(
                "/play",
            ) as rejected:
                rejected.receive_text()


class _RecordingSocket:
    def __init__(self, state: WebSocketState = WebSocketState.CONNECTED):
        self.client_state = state
        self.sent: list[str] = []

    async def send_text(self, text: str) -> None:
        self.sent.append(text)


class TestStateStream:
    async def test_sends_in_push_order(self):
        socket = _RecordingSocket()
        stream = StateStream(socket)
        stream.push({"score": 0})
        stream.push({"score": 10})
        task = asyncio.create_task(stream.run())
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert [json.loads(t)["score"] for t in socket.sent] == [0, 10]
        assert stream.closed

    async def test_stops_buffering_after_client_leaves(self):
        socket = _RecordingSocket(WebSocketState.DISCONNECTED)
        stream = StateStream(socket)
        stream.push({"score": 0})
        stream.push({"score": 10})
        await stream.run()
        assert stream.closed
        assert stream.backlog == 0
        stream.push({"score": 20})
        assert stream.backlog == 0
        assert socket.sent == []

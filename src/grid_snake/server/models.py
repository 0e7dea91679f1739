"""Pydantic models for API response schemas."""

from __future__ import annotations

from pydantic import BaseModel

from grid_snake.state import GamePhase


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: GamePhase
    score: int
    speed: int
    snake_length: int


class ConfigResponse(BaseModel):
    """Game constants a client needs to lay out the board."""

    board_width: int
    board_height: int
    cell_size: int
    initial_direction: str
    initial_speed_ms: int
    min_speed_ms: int
    speed_step_ms: int
    regular_points: int
    gold_points: int
    gold_probability: float
    max_spawn_attempts: int

"""Game tuning constants."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from grid_snake.snake import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board size, pacing and scoring constants.

    Supports JSON serialization so a tuned setup can be shared.
    """

    # Board
    board_width: int = 25
    board_height: int = 25
    cell_size: int = 20  # presentation only
    initial_direction: Direction = Direction.DOWN

    # Pacing (tick interval in milliseconds; smaller is faster)
    initial_speed_ms: int = 500
    min_speed_ms: int = 50
    speed_step_ms: int = 5

    # Food
    regular_points: int = 10
    gold_points: int = 50
    gold_probability: float = 0.2
    max_spawn_attempts: int = 100

    def __post_init__(self) -> None:
        if self.board_width < 2 or self.board_height < 2:
            raise ValueError("Board dimensions must be at least 2×2.")
        if self.min_speed_ms <= 0:
            raise ValueError("min_speed_ms must be positive.")
        if self.initial_speed_ms < self.min_speed_ms:
            raise ValueError("initial_speed_ms must be >= min_speed_ms.")
        if self.speed_step_ms < 0:
            raise ValueError("speed_step_ms must be >= 0.")
        if not 0.0 <= self.gold_probability <= 1.0:
            raise ValueError("gold_probability must be within [0, 1].")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")
        if self.regular_points < 0 or self.gold_points < 0:
            raise ValueError("Food points must be >= 0.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict (directions become their names)."""
        data = asdict(self)
        data["initial_direction"] = self.initial_direction.name
        return data

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if "initial_direction" in raw:
            raw["initial_direction"] = Direction[raw["initial_direction"]]
        return cls(**raw)

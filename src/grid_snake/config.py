"""Startup configuration for the simulation."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from grid_snake.snake import Direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Arena bounds, tick cadences, spawn layout and render defaults.

    All values are fixed for the lifetime of an engine. Supports JSON
    serialization for reproducible runs.
    """

    # Arena, in grid cells
    arena_width: int = 40
    arena_height: int = 40

    # Timers
    move_interval_ms: int = 150
    food_interval_ms: int = 1000

    # Initial snake
    head_start: tuple[int, int] = (10, 10)
    segment_start: tuple[int, int] = (10, 9)
    initial_direction: str = "up"

    # Sizes relative to one cell
    head_size: float = 0.8
    segment_size: float = 0.65
    food_size: float = 0.8

    # Render surface, in pixels
    window_width: int = 1000
    window_height: int = 1000

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.arena_width < 1 or self.arena_height < 1:
            raise ValueError("arena_width and arena_height must be at least 1.")
        if self.move_interval_ms <= 0 or self.food_interval_ms <= 0:
            raise ValueError("Timer intervals must be positive.")
        if self.window_width <= 0 or self.window_height <= 0:
            raise ValueError("Window dimensions must be positive.")
        if Direction.from_key(self.initial_direction) is None:
            raise ValueError(
                f"Unknown initial_direction {self.initial_direction!r}."
            )
        if len(self.head_start) != 2 or len(self.segment_start) != 2:
            raise ValueError("Start positions must be (x, y) pairs.")
        if tuple(self.head_start) == tuple(self.segment_start):
            raise ValueError("head_start and segment_start must differ.")
        for x, y in (self.head_start, self.segment_start):
            if not (0 <= x <= self.arena_width and 0 <= y <= self.arena_height):
                raise ValueError("Start positions must lie inside the arena.")

    @property
    def direction(self) -> Direction:
        return Direction.from_key(self.initial_direction)

    @property
    def move_interval(self) -> float:
        """Movement cadence in seconds."""
        return self.move_interval_ms / 1000.0

    @property
    def food_interval(self) -> float:
        """Food spawn cadence in seconds."""
        return self.food_interval_ms / 1000.0

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        d = asdict(self)
        d["head_start"] = list(self.head_start)
        d["segment_start"] = list(self.segment_start)
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        data = dict(raw)
        for key in ("head_start", "segment_start"):
            if key in data:
                data[key] = tuple(data[key])
        return cls(**data)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))

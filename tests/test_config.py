"""Tests for the game configuration dataclass."""

import json

import pytest

from grid_snake.config import GameConfig
from grid_snake.snake import Direction


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.arena_width == 40
        assert cfg.arena_height == 40
        assert cfg.move_interval_ms == 150
        assert cfg.food_interval_ms == 1000
        assert cfg.head_start == (10, 10)
        assert cfg.segment_start == (10, 9)
        assert cfg.direction == Direction.UP

    def test_intervals_in_seconds(self):
        cfg = GameConfig(move_interval_ms=200, food_interval_ms=500)
        assert cfg.move_interval == pytest.approx(0.2)
        assert cfg.food_interval == pytest.approx(0.5)

    def test_invalid_arena(self):
        with pytest.raises(ValueError, match="at least 1"):
            GameConfig(arena_width=0)

    def test_invalid_interval(self):
        with pytest.raises(ValueError, match="positive"):
            GameConfig(move_interval_ms=0)

    def test_invalid_direction(self):
        with pytest.raises(ValueError, match="initial_direction"):
            GameConfig(initial_direction="sideways")

    def test_overlapping_start(self):
        with pytest.raises(ValueError, match="differ"):
            GameConfig(head_start=(1, 1), segment_start=(1, 1))

    def test_to_dict_serializable(self):
        serialized = json.dumps(GameConfig().to_dict())
        assert isinstance(serialized, str)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(arena_width=20, head_start=(5, 5), segment_start=(5, 4), seed=3)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()

        loaded = GameConfig.load(path)
        assert loaded == cfg
        assert loaded.head_start == (5, 5)

    def test_start_outside_arena(self):
        with pytest.raises(ValueError, match="inside the arena"):
            GameConfig(arena_width=8, arena_height=8)

    def test_start_on_bound_is_allowed(self):
        cfg = GameConfig(
            arena_width=10, arena_height=10, head_start=(10, 10), segment_start=(10, 9),
        )
        assert cfg.head_start == (10, 10)

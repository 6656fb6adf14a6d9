"""Tests for the GameEngine module."""

import json

import pytest

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.snake import Direction

MOVE = 0.15


def _cells(engine):
    return [tuple(p.to_list()) for p in engine.snake_positions()]


class TestEngineInit:
    def test_default_init(self):
        engine = GameEngine(GameConfig(seed=0))
        assert engine.steps == 0
        assert engine.resets == 0
        assert engine.length == 2
        assert engine.direction == Direction.UP
        assert _cells(engine) == [(10, 10), (10, 9)]
        assert engine.food_positions() == []


class TestEngineMovement:
    def test_five_ticks_straight_up(self):
        engine = GameEngine(GameConfig(seed=0))
        for _ in range(5):
            engine.step((), MOVE)
        assert _cells(engine) == [(10, 15), (10, 14)]
        assert engine.resets == 0
        assert engine.moves == 5

    def test_movement_gated_by_timer(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.step((), 0.05)
        engine.step((), 0.05)
        assert _cells(engine)[0] == (10, 10)
        engine.step((), 0.05)
        assert _cells(engine)[0] == (10, 11)

    def test_direction_applies_between_ticks(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.step(["left"], 0.0)
        assert engine.direction == Direction.LEFT
        assert _cells(engine)[0] == (10, 10)
        engine.step((), MOVE)
        assert _cells(engine)[0] == (9, 10)

    def test_reverse_key_ignored(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.step([Direction.DOWN], MOVE)
        assert engine.direction == Direction.UP
        assert _cells(engine)[0] == (10, 11)

    def test_unknown_keys_ignored(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.step(["space", "enter"], MOVE)
        assert engine.direction == Direction.UP


class TestEngineFood:
    def test_food_spawns_on_food_timer(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.step((), 0.5)
        assert engine.food_positions() == []
        engine.step((), 0.5)
        assert len(engine.food_positions()) == 1

    def test_eating_food_grows_snake(self):
        engine = GameEngine(GameConfig(seed=0))
        food = engine.place_food(10, 11)
        engine.step((), MOVE)
        assert engine.length == 3
        assert not engine.world.is_alive(food)
        assert _cells(engine) == [(10, 11), (10, 10), (10, 9)]


class TestEngineGameOver:
    def test_wall_triggers_reset(self):
        engine = GameEngine(GameConfig(seed=0))
        for _ in range(30):
            engine.step((), MOVE)
        # y == arena_height is still inside.
        assert _cells(engine)[0] == (10, 40)
        assert engine.resets == 0

        engine.step((), MOVE)
        assert engine.resets == 1
        assert _cells(engine) == [(10, 10), (10, 9)]
        assert engine.direction == Direction.UP
        assert engine.food_positions() == []
        assert len(engine.world) == 2

    def test_self_collision_triggers_reset(self):
        engine = GameEngine(GameConfig(seed=0))
        for y in range(11, 15):
            engine.place_food(10, y)
            engine.step((), MOVE)
        assert engine.length == 6
        # Tight loop: right, down, left runs the head into its own body.
        for key in ("right", "down", "left", "up", "up"):
            engine.step([key], MOVE)
            if engine.resets:
                break
        assert engine.resets == 1
        assert engine.length == 2


class TestEngineSerialization:
    def test_state_is_json_serializable(self):
        engine = GameEngine(GameConfig(seed=42))
        engine.step((), 1.0)
        serialized = json.dumps(engine.get_state())
        assert isinstance(serialized, str)

    def test_state_structure(self):
        engine = GameEngine(GameConfig(seed=0))
        state = engine.get_state()
        assert state["snake"]["body"] == [[10, 10], [10, 9]]
        assert state["snake"]["direction"] == "up"
        assert state["arena"] == {"width": 40, "height": 40}
        kinds = sorted(e["kind"] for e in state["entities"])
        assert kinds == ["head", "segment"]

    def test_renderables_cover_every_entity(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.place_food(3, 3)
        assert len(engine.renderables()) == len(engine.world) == 3


class TestEngineDeterminism:
    @pytest.mark.parametrize("seed", [1, 123])
    def test_same_seed_same_outcome(self, seed):
        assert self._run(seed) == self._run(seed)

    def test_different_seeds_differ(self):
        assert self._run(1)["food"] != self._run(2)["food"]

    @staticmethod
    def _run(seed: int) -> dict:
        engine = GameEngine(GameConfig(seed=seed))
        keys = ["right", "", "up", "", "left", ""] * 3
        for key in keys:
            engine.step([key] if key else [], 0.5)
        return engine.get_state()


class TestEngineInput:
    def test_bare_key_string(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.step("left", MOVE)
        assert engine.direction == Direction.LEFT
        assert _cells(engine)[0] == (9, 10)

    def test_bare_direction(self):
        engine = GameEngine(GameConfig(seed=0))
        engine.step(Direction.RIGHT, MOVE)
        assert engine.direction == Direction.RIGHT

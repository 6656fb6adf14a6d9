"""Tests for the game-over controller and event queue."""

from grid_snake.config import GameConfig
from grid_snake.engine import SimulationContext
from grid_snake.events import EventQueue, GameOverEvent
from grid_snake.food import Food, FoodSpawner
from grid_snake.game_over import GameOverController, reset_world
from grid_snake.snake import (
    Direction,
    SnakeHead,
    SnakeSegment,
    chain_positions,
    spawn_initial_snake,
    spawn_segment,
)
from grid_snake.spatial import Position
from grid_snake.world import World


def _grown_world(config):
    world = World()
    head = spawn_initial_snake(world, config)
    first = world.get(head, SnakeHead).next_segment
    second = spawn_segment(world, Position(10, 8), config)
    world.get(first, SnakeSegment).next_segment = second
    world.get(head, SnakeHead).direction = Direction.LEFT
    world.get(head, Position).x = 30
    spawner = FoodSpawner(config)
    spawner.spawn(world, Position(1, 1))
    spawner.spawn(world, Position(2, 2))
    return world


class TestEventQueue:
    def test_fifo_drain(self):
        queue = EventQueue()
        queue.send("a")
        queue.send("b")
        assert len(queue) == 2
        assert queue.drain() == ["a", "b"]
        assert len(queue) == 0
        assert queue.drain() == []


class TestResetWorld:
    def test_reset_restores_initial_snake(self):
        config = GameConfig()
        world = _grown_world(config)
        head = reset_world(world, config)

        assert len(world) == 2
        assert world.query(Food) == []
        assert len(world.entities_with(SnakeHead)) == 1
        assert len(world.entities_with(SnakeSegment)) == 1
        assert world.get(head, SnakeHead).direction == Direction.UP
        assert [p.to_list() for p in chain_positions(world, head)] == [
            [10, 10], [10, 9],
        ]

    def test_reset_leaves_unrelated_entities(self):
        config = GameConfig()
        world = _grown_world(config)
        other = world.spawn(Position(0, 0))
        reset_world(world, config)
        assert world.is_alive(other)


class TestGameOverController:
    def test_no_event_no_reset(self):
        config = GameConfig()
        world = _grown_world(config)
        ctx = SimulationContext.from_config(config)
        controller = GameOverController()
        assert not controller.update(world, ctx)
        assert controller.resets == 0
        assert len(world.query(Food)) == 2

    def test_event_triggers_reset(self):
        config = GameConfig()
        world = _grown_world(config)
        ctx = SimulationContext.from_config(config)
        ctx.events.send(GameOverEvent())
        controller = GameOverController()
        assert controller.update(world, ctx)
        assert controller.resets == 1
        assert len(world) == 2

    def test_multiple_events_single_reset(self):
        config = GameConfig()
        world = _grown_world(config)
        ctx = SimulationContext.from_config(config)
        for _ in range(3):
            ctx.events.send(GameOverEvent())
        controller = GameOverController()
        controller.update(world, ctx)
        assert controller.resets == 1
        assert len(ctx.events) == 0
        # Drained events are not seen again.
        assert not controller.update(world, ctx)
        assert controller.resets == 1

    def test_stale_handles_invalid_after_reset(self):
        config = GameConfig()
        world = World()
        old_head = spawn_initial_snake(world, config)
        ctx = SimulationContext.from_config(config)
        ctx.events.send(GameOverEvent())
        GameOverController().update(world, ctx)
        new_head = world.entities_with(SnakeHead)[0]
        assert not world.is_alive(old_head)
        assert new_head != old_head

"""Per-tick snake movement, collision detection and growth."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

from grid_snake.events import GameOverEvent
from grid_snake.food import Food
from grid_snake.snake import Direction, SnakeHead, SnakeSegment, spawn_segment
from grid_snake.spatial import Position
from grid_snake.world import MissingComponent

if TYPE_CHECKING:
    from grid_snake.engine import SimulationContext
    from grid_snake.world import Entity, World

logger = logging.getLogger(__name__)

# Polling order; the first pressed direction wins.
INPUT_PRIORITY: tuple[Direction, ...] = (
    Direction.LEFT,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.UP,
)


class ChainCorrupted(RuntimeError):
    """A chain link points at an entity that is gone or is not a segment."""


def read_direction(
    pressed: Collection[Direction], current: Direction,
) -> Direction:
    """Pick the candidate direction from the currently pressed keys."""
    for direction in INPUT_PRIORITY:
        if direction in pressed:
            return direction
    return current


def commit_direction(current: Direction, candidate: Direction) -> Direction:
    """Return *candidate* unless it would reverse into the first segment."""
    if candidate == current.opposite():
        return current
    return candidate


def out_of_bounds(position: Position, width: int, height: int) -> bool:
    """Wall test; a coordinate equal to the bound is still inside."""
    return (
        position.x < 0
        or position.y < 0
        or position.x > width
        or position.y > height
    )


def snake_movement(
    world: World,
    ctx: SimulationContext,
    pressed: Collection[Direction],
    move_elapsed: bool,
) -> None:
    """Apply input to every head and, on an elapsed tick, move the chain.

    Direction changes are committed every call; positions only change when
    *move_elapsed* is true.
    """
    for _, head, head_pos in world.query(SnakeHead, Position):
        head.direction = commit_direction(
            head.direction, read_direction(pressed, head.direction),
        )
        if move_elapsed:
            _advance(world, ctx, head, head_pos)


def _advance(
    world: World,
    ctx: SimulationContext,
    head: SnakeHead,
    head_pos: Position,
) -> None:
    # Each segment takes the pre-tick position of the entity ahead of it.
    last_position = head_pos.copy()
    tail = head.next_segment
    while True:
        segment = _segment(world, tail)
        segment_pos = _segment_position(world, tail)
        previous = segment_pos.copy()
        segment_pos.x, segment_pos.y = last_position.x, last_position.y
        last_position = previous

        # Compared against the head before it moves.
        if head_pos == last_position:
            ctx.events.send(GameOverEvent())

        if segment.next_segment is None:
            break
        tail = segment.next_segment

    dx, dy = head.direction.value
    head_pos.x += dx
    head_pos.y += dy

    if out_of_bounds(head_pos, ctx.config.arena_width, ctx.config.arena_height):
        logger.debug("Head hit the wall at (%d, %d).", head_pos.x, head_pos.y)
        ctx.events.send(GameOverEvent())

    for food_entity, _, food_pos in world.query(Food, Position):
        if food_pos != head_pos:
            continue
        grown = spawn_segment(world, last_position, ctx.config)
        _segment(world, tail).next_segment = grown
        world.despawn(food_entity)
        ctx.food_eaten += 1
        logger.debug(
            "Food eaten at (%d, %d); segment %r appended.",
            food_pos.x, food_pos.y, grown,
        )


def _segment(world: World, entity: Entity) -> SnakeSegment:
    try:
        return world.get(entity, SnakeSegment)
    except MissingComponent as exc:
        raise ChainCorrupted(f"Broken chain link to {entity!r}.") from exc


def _segment_position(world: World, entity: Entity) -> Position:
    try:
        return world.get(entity, Position)
    except MissingComponent as exc:
        raise ChainCorrupted(f"Segment {entity!r} has no position.") from exc

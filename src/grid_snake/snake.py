"""Snake head and segment components forming a singly-linked chain."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from grid_snake.spatial import Material, Position, Size

if TYPE_CHECKING:
    from grid_snake.config import GameConfig
    from grid_snake.world import Entity, World


class Direction(enum.Enum):
    """Cardinal directions with (dx, dy) grid deltas; y grows upwards."""

    LEFT = (-1, 0)
    UP = (0, 1)
    RIGHT = (1, 0)
    DOWN = (0, -1)

    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_key(cls, key: str) -> Direction | None:
        """Map a key name such as ``"left"`` or ``"ArrowUp"`` to a direction."""
        name = key.strip().lower()
        if name.startswith("arrow"):
            name = name[len("arrow"):]
        try:
            return cls[name.upper()]
        except KeyError:
            return None


_OPPOSITES: dict[Direction, Direction] = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}


@dataclass
class SnakeHead:
    """Facing direction plus a non-owning handle to the first segment."""

    direction: Direction
    next_segment: Entity


@dataclass
class SnakeSegment:
    """Chain link; ``None`` marks the tail."""

    next_segment: Entity | None = None


def spawn_segment(world: World, position: Position, config: GameConfig) -> Entity:
    """Spawn a terminal segment at *position*."""
    return world.spawn(
        SnakeSegment(),
        position.copy(),
        Size.square(config.segment_size),
        Material.SEGMENT,
    )


def spawn_initial_snake(world: World, config: GameConfig) -> Entity:
    """Spawn the starting head and its single segment; return the head."""
    first = spawn_segment(world, Position(*config.segment_start), config)
    return world.spawn(
        SnakeHead(direction=config.direction, next_segment=first),
        Position(*config.head_start),
        Size.square(config.head_size),
        Material.HEAD,
    )


def chain(world: World, head: Entity) -> list[Entity]:
    """Return the segment handles reachable from *head*, head-side first."""
    segments: list[Entity] = []
    current: Entity | None = world.get(head, SnakeHead).next_segment
    while current is not None:
        segments.append(current)
        current = world.get(current, SnakeSegment).next_segment
    return segments


def chain_positions(world: World, head: Entity) -> list[Position]:
    """Positions of the head followed by every chained segment."""
    return [
        world.get(entity, Position)
        for entity in [head, *chain(world, head)]
    ]

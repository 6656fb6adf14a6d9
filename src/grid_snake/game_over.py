"""Event-driven teardown and respawn of the snake and all food."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from grid_snake.events import GameOverEvent
from grid_snake.food import Food
from grid_snake.snake import SnakeHead, SnakeSegment, spawn_initial_snake

if TYPE_CHECKING:
    from grid_snake.config import GameConfig
    from grid_snake.engine import SimulationContext
    from grid_snake.world import Entity, World

logger = logging.getLogger(__name__)


def reset_world(world: World, config: GameConfig) -> Entity:
    """Despawn every segment, food and head, then spawn the initial snake.

    Teardown completes before the new snake is created. Returns the new
    head handle.
    """
    removed = 0
    for component_type in (SnakeSegment, Food, SnakeHead):
        for entity in world.entities_with(component_type):
            world.despawn(entity)
            removed += 1
    head = spawn_initial_snake(world, config)
    logger.debug("Reset removed %d entities.", removed)
    return head


class GameOverController:
    """Performs at most one reset per step, however many events queued."""

    def __init__(self) -> None:
        self.resets = 0

    def update(self, world: World, ctx: SimulationContext) -> bool:
        """Drain pending events; reset if any were game-over events."""
        events = ctx.events.drain()
        if not any(isinstance(event, GameOverEvent) for event in events):
            return False
        length = len(world.entities_with(SnakeSegment)) + 1
        reset_world(world, ctx.config)
        self.resets += 1
        logger.info(
            "Game over (snake length %d); reset #%d.", length, self.resets,
        )
        return True

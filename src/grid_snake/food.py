"""Food marker and periodic random food placement."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.spatial import Material, Position, Size

if TYPE_CHECKING:
    from grid_snake.config import GameConfig
    from grid_snake.world import Entity, World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Food:
    """Marks an entity as edible."""


class FoodSpawner:
    """Places one food entity per elapsed food tick.

    Uses a seeded NumPy RNG for reproducible placement. Cells occupied by
    the snake or by other food are not avoided.
    """

    def __init__(
        self,
        config: GameConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

    def random_position(self) -> Position:
        """Draw a cell uniformly from ``[0, width) x [0, height)``."""
        x = int(self.rng.integers(0, self.config.arena_width))
        y = int(self.rng.integers(0, self.config.arena_height))
        return Position(x, y)

    def spawn(self, world: World, position: Position | None = None) -> Entity:
        """Spawn one food entity, at *position* or a random cell."""
        pos = position.copy() if position is not None else self.random_position()
        entity = world.spawn(
            Food(),
            pos,
            Size.square(self.config.food_size),
            Material.FOOD,
        )
        logger.debug("Food %r spawned at (%d, %d).", entity, pos.x, pos.y)
        return entity

    def update(self, world: World, food_elapsed: bool) -> Entity | None:
        """Run once per step; spawns only when the food timer elapsed."""
        if not food_elapsed:
            return None
        return self.spawn(world)

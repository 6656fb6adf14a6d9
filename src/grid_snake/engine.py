"""Step-based simulation composing timers, movement, food and resets."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.events import EventQueue
from grid_snake.food import Food, FoodSpawner
from grid_snake.game_over import GameOverController
from grid_snake.movement import snake_movement
from grid_snake.snake import (
    Direction,
    SnakeHead,
    chain,
    chain_positions,
    spawn_initial_snake,
)
from grid_snake.spatial import Material, Position, Size
from grid_snake.timer import TickScheduler, Ticks
from grid_snake.world import Entity, World

logger = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """Per-engine state threaded through every system call."""

    config: GameConfig
    scheduler: TickScheduler
    rng: np.random.Generator
    events: EventQueue = field(default_factory=EventQueue)
    food_eaten: int = 0

    @classmethod
    def from_config(cls, config: GameConfig) -> SimulationContext:
        return cls(
            config=config,
            scheduler=TickScheduler(config.move_interval, config.food_interval),
            rng=np.random.default_rng(config.seed),
        )


class GameEngine:
    """Single-snake simulation advanced one externally-timed step at a time.

    Each call to :meth:`step` feeds the elapsed seconds to both timers, then
    runs movement, food spawning and the game-over check, in that order,
    and returns the updated state dictionary.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config or GameConfig()
        self.world = World()
        self.ctx = SimulationContext.from_config(self.config)
        self.food_spawner = FoodSpawner(self.config, rng=self.ctx.rng)
        self.game_over = GameOverController()
        self.steps = 0
        self.moves = 0
        spawn_initial_snake(self.world, self.config)
        logger.debug(
            "Simulation ready on a %dx%d arena.",
            self.config.arena_width, self.config.arena_height,
        )

    def step(
        self,
        pressed: Iterable[Direction | str] = (),
        elapsed: float = 0.0,
    ) -> dict:
        """Advance the simulation by *elapsed* seconds of wall-clock time.

        *pressed* holds the directions (or key names) held down right now.
        """
        keys = _normalize_keys(pressed)
        ticks: Ticks = self.ctx.scheduler.advance(elapsed)
        snake_movement(self.world, self.ctx, keys, ticks.move)
        self.food_spawner.update(self.world, ticks.food)
        self.game_over.update(self.world, self.ctx)
        self.steps += 1
        if ticks.move:
            self.moves += 1
        return self.get_state()

    @property
    def head(self) -> Entity:
        heads = self.world.entities_with(SnakeHead)
        if len(heads) != 1:
            raise RuntimeError(f"Expected one snake head, found {len(heads)}.")
        return heads[0]

    @property
    def direction(self) -> Direction:
        return self.world.get(self.head, SnakeHead).direction

    @property
    def length(self) -> int:
        """Head plus every chained segment."""
        return 1 + len(chain(self.world, self.head))

    @property
    def resets(self) -> int:
        return self.game_over.resets

    def snake_positions(self) -> list[Position]:
        """Head position followed by each segment, head-side first."""
        return chain_positions(self.world, self.head)

    def food_positions(self) -> list[Position]:
        return [pos for _, _, pos in self.world.query(Food, Position)]

    def place_food(self, x: int, y: int) -> Entity:
        """Spawn food at a specific cell."""
        return self.food_spawner.spawn(self.world, Position(x, y))

    def renderables(self) -> list[tuple[Position, Size]]:
        """One ``(Position, Size)`` pair per live entity that has both."""
        return [
            (pos, size) for _, pos, size in self.world.query(Position, Size)
        ]

    def get_state(self) -> dict:
        """Return the full, serializable simulation state."""
        head = self.head
        head_component = self.world.get(head, SnakeHead)
        return {
            "step": self.steps,
            "moves": self.moves,
            "resets": self.resets,
            "food_eaten": self.ctx.food_eaten,
            "arena": {
                "width": self.config.arena_width,
                "height": self.config.arena_height,
            },
            "snake": {
                "direction": head_component.direction.name.lower(),
                "body": [pos.to_list() for pos in self.snake_positions()],
            },
            "food": [pos.to_list() for pos in self.food_positions()],
            "entities": [
                _entity_dict(entity, pos, size, material)
                for entity, pos, size, material
                in self.world.query(Position, Size, Material)
            ],
        }


def _normalize_keys(pressed: Iterable[Direction | str]) -> set[Direction]:
    if isinstance(pressed, (str, Direction)):
        pressed = (pressed,)
    keys: set[Direction] = set()
    for key in pressed:
        if isinstance(key, Direction):
            keys.add(key)
            continue
        direction = Direction.from_key(key)
        if direction is not None:
            keys.add(direction)
    return keys


def _entity_dict(
    entity: Entity, pos: Position, size: Size, material: Material,
) -> dict:
    return {
        "id": entity.index,
        "generation": entity.generation,
        "kind": material.name.lower(),
        "position": pos.to_list(),
        "size": [size.width, size.height],
        "color": material.hex,
    }

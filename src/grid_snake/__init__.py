"""Grid Snake: entity-based snake simulation core."""

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine, SimulationContext
from grid_snake.events import EventQueue, GameOverEvent
from grid_snake.food import Food, FoodSpawner
from grid_snake.game_over import GameOverController, reset_world
from grid_snake.movement import ChainCorrupted, snake_movement
from grid_snake.snake import Direction, SnakeHead, SnakeSegment
from grid_snake.spatial import Material, Position, Size
from grid_snake.timer import TickScheduler, Timer
from grid_snake.world import Entity, MissingComponent, NoSuchEntity, World

__all__ = [
    "ChainCorrupted",
    "Direction",
    "Entity",
    "EventQueue",
    "Food",
    "FoodSpawner",
    "GameConfig",
    "GameEngine",
    "GameOverController",
    "GameOverEvent",
    "Material",
    "MissingComponent",
    "NoSuchEntity",
    "Position",
    "SimulationContext",
    "Size",
    "SnakeHead",
    "SnakeSegment",
    "TickScheduler",
    "Timer",
    "World",
    "reset_world",
    "snake_movement",
]

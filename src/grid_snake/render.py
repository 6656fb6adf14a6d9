"""Mapping from grid cells to a pixel surface, plus text rendering.

The simulation never reads pixel coordinates back; everything here is
derived from ``Position`` and ``Size`` components on every call.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.food import Food
from grid_snake.snake import SnakeHead, SnakeSegment
from grid_snake.spatial import Material, Position, Size

if TYPE_CHECKING:
    from grid_snake.config import GameConfig
    from grid_snake.world import World


class CellType(enum.IntEnum):
    """Integer codes stored in the occupancy grid."""

    EMPTY = 0
    SEGMENT = 1
    HEAD = 2
    FOOD = 3


_GLYPHS: dict[CellType, str] = {
    CellType.EMPTY: ".",
    CellType.SEGMENT: "o",
    CellType.HEAD: "@",
    CellType.FOOD: "*",
}


def to_pixel(
    position: Position,
    window: tuple[float, float],
    arena: tuple[int, int],
) -> tuple[float, float]:
    """Translate a grid cell to surface coordinates centred on the origin."""
    return (
        _convert(position.x, window[0], arena[0]),
        _convert(position.y, window[1], arena[1]),
    )


def scale_size(
    size: Size,
    window: tuple[float, float],
    arena: tuple[int, int],
) -> tuple[float, float]:
    """Sprite extent in pixels for a cell-relative *size*."""
    return (
        size.width * window[0] / arena[0],
        size.height * window[1] / arena[1],
    )


def _convert(p: float, bound_window: float, bound_game: float) -> float:
    return p / bound_game * bound_window - bound_window / 2.0


@dataclass(frozen=True)
class Sprite:
    """Pixel rectangle for one entity."""

    x: float
    y: float
    width: float
    height: float
    color: str

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "color": self.color,
        }


class RenderAdapter:
    """Produces one sprite per live entity carrying a position and size."""

    def __init__(
        self,
        arena: tuple[int, int],
        window: tuple[float, float] = (1000.0, 1000.0),
    ) -> None:
        if arena[0] <= 0 or arena[1] <= 0:
            raise ValueError("Arena dimensions must be positive.")
        self.arena = arena
        self.window = window

    @classmethod
    def from_config(cls, config: GameConfig) -> RenderAdapter:
        return cls(
            arena=(config.arena_width, config.arena_height),
            window=(float(config.window_width), float(config.window_height)),
        )

    def frame(self, world: World) -> list[Sprite]:
        rows = world.query(Position, Size)
        if not rows:
            return []
        cells = np.array([[pos.x, pos.y] for _, pos, _ in rows], dtype=np.float64)
        extents = np.array(
            [[size.width, size.height] for _, _, size in rows], dtype=np.float64,
        )
        window = np.asarray(self.window, dtype=np.float64)
        arena = np.asarray(self.arena, dtype=np.float64)

        centres = cells / arena * window - window / 2.0
        pixels = extents * window / arena

        sprites: list[Sprite] = []
        for i, (entity, _, _) in enumerate(rows):
            material = (
                world.get(entity, Material)
                if world.has(entity, Material) else Material.SEGMENT
            )
            sprites.append(
                Sprite(
                    x=float(centres[i, 0]),
                    y=float(centres[i, 1]),
                    width=float(pixels[i, 0]),
                    height=float(pixels[i, 1]),
                    color=material.hex,
                )
            )
        return sprites


def cell_grid(world: World, config: GameConfig) -> np.ndarray:
    """Occupancy grid indexed ``[y, x]``; cells outside the arena are dropped.

    The grid has one extra row and column because a coordinate equal to the
    arena bound is still a legal head position.
    """
    grid = np.zeros(
        (config.arena_height + 1, config.arena_width + 1), dtype=np.int8,
    )
    layers = (
        (Food, CellType.FOOD),
        (SnakeSegment, CellType.SEGMENT),
        (SnakeHead, CellType.HEAD),
    )
    for marker, cell_type in layers:
        for _, _, pos in world.query(marker, Position):
            if 0 <= pos.y < grid.shape[0] and 0 <= pos.x < grid.shape[1]:
                grid[pos.y, pos.x] = cell_type
    return grid


def ascii_frame(world: World, config: GameConfig) -> str:
    """Render the arena as text, top row first."""
    grid = cell_grid(world, config)
    lines = [
        "".join(_GLYPHS[CellType(int(code))] for code in row)
        for row in grid[::-1]
    ]
    return "\n".join(lines)

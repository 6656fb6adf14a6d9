"""Grid positions and render-space sizes."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass
class Position:
    """Integer grid cell. Mutated in place by the movement engine."""

    x: int
    y: int

    def copy(self) -> Position:
        return Position(self.x, self.y)

    def to_list(self) -> list[int]:
        return [self.x, self.y]


@dataclass
class Size:
    """Scale factor relative to one grid cell; unrelated to collisions."""

    width: float
    height: float

    @classmethod
    def square(cls, side: float) -> Size:
        return cls(side, side)


class Material(enum.Enum):
    """Colour tag per entity kind, as (r, g, b) in [0, 1]."""

    HEAD = (0.7, 0.7, 0.7)
    SEGMENT = (0.3, 0.3, 0.3)
    FOOD = (1.0, 0.0, 1.0)

    @property
    def hex(self) -> str:
        r, g, b = (round(channel * 255) for channel in self.value)
        return f"#{r:02x}{g:02x}{b:02x}"

# src/roborex/primitives.py
# Grid-level value types shared by the engine and the render layer (no pygame).

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}

# Held-key resolution order for the keyboard.
KEY_PRIORITY = (Direction.RIGHT, Direction.LEFT, Direction.UP, Direction.DOWN)


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"grid position must be non-negative, got ({self.x}, {self.y})")

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def step(self, direction: Direction) -> "Position":
        """One cell towards `direction`; LEFT/UP saturate at 0 and return self."""
        dx, dy = direction.delta
        if self.x + dx < 0 or self.y + dy < 0:
            return self
        return Position(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Dimension:
    width: int
    height: int


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    def scaled_about_center(self, factor: float) -> "Rect":
        cx, cy = self.center
        w, h = self.w * factor, self.h * factor
        return Rect(cx - w / 2, cy - h / 2, w, h)

# src/roborex/engine/draw.py
# Draw commands the engine emits; the render layer executes them sorted by z.
# Image names are resolved by the renderer, so a missing asset never reaches the engine.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from ..primitives import Rect

# Z layers (higher draws later)
MAP_Z = 1
COLLECTIBLE_Z = 10
GATE_Z = 11
PLAYER_Z = 12
PUZZLE_TEXT_Z = 20
SCREEN_Z = 0

Color = Tuple[int, int, int]
BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)


class FontStyle(Enum):
    NORMAL = 24
    BIG = 42

    @property
    def size(self) -> int:
        return self.value


class SpriteKind(Enum):
    TILE = "tile"          # sub-rectangle of the level tileset
    GATE = "gate"          # gate tile from the level tileset
    PLAYER = "player"
    IMAGE = "image"        # whole standalone image (splash)


@dataclass(frozen=True)
class SpriteCommand:
    kind: SpriteKind
    image: str
    dest: Rect
    z: int
    source: Optional[Rect] = None
    flip_x: bool = False
    tile_id: int = 0


@dataclass(frozen=True)
class TextCommand:
    text: str
    style: FontStyle
    center: Tuple[float, float]
    z: int
    color: Color = WHITE


DrawCommand = Union[SpriteCommand, TextCommand]


def sort_commands(commands: Sequence[DrawCommand]) -> List[DrawCommand]:
    # sorted() is stable: equal-z commands keep emission order.
    return sorted(commands, key=lambda c: c.z)

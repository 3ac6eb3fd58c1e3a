# src/roborex/engine/game_map.py
# Layered tile map + merged walkability + the level's gate.
# Immutable after construction except for the gate state.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from ..grid import cell_rect
from ..mapdata.tmx import TileMapSource, TilesetImage
from ..primitives import Dimension, Position, Rect
from ..tiles import GATE_TILE_ID, PATH_TILE_IDS, ClassGrid, TileClass, build_class_grid, sprite_rect
from .draw import GATE_Z, MAP_Z, DrawCommand, SpriteCommand, SpriteKind
from .gate import Gate

logger = logging.getLogger(__name__)

DEFAULT_TILESET = TilesetImage(source="tileset.png", width=400, height=192, firstgid=1, columns=25)


@dataclass
class TileLayer:
    name: str
    tiles: List[List[int]]
    rects: List[List[Optional[Rect]]] = field(default_factory=list)


class GameMap:
    def __init__(
        self,
        layers: Sequence[TileLayer],
        tile_dim: Dimension,
        tileset: TilesetImage,
        gate_position: Position,
        path_ids=PATH_TILE_IDS,
    ) -> None:
        self.layers: List[TileLayer] = list(layers)
        self.tile_dim = tile_dim
        self.tileset = tileset
        self.image_dim = Dimension(tileset.width, tileset.height)
        self.grid: ClassGrid = build_class_grid([layer.tiles for layer in self.layers], path_ids)
        self.gate = Gate(gate_position)
        self.gate_rect = sprite_rect(GATE_TILE_ID, tile_dim, self.image_dim, tileset.firstgid, tileset.columns)
        for layer in self.layers:
            if not layer.rects:
                layer.rects = [
                    [sprite_rect(t, tile_dim, self.image_dim, tileset.firstgid, tileset.columns) for t in row]
                    for row in layer.tiles
                ]

    # ---- Construction ----
    @classmethod
    def from_source(cls, source: TileMapSource, gate_position: Position) -> "GameMap":
        layers = [TileLayer(name=l.name, tiles=[list(r) for r in l.tiles]) for l in source.layers]
        return cls(
            layers,
            Dimension(source.tile_width, source.tile_height),
            source.tileset,
            gate_position,
        )

    @classmethod
    def from_tiles(
        cls,
        layers: Iterable[Sequence[Sequence[int]]],
        gate_position: Position,
        *,
        tile_dim: Dimension = Dimension(16, 16),
        tileset: TilesetImage = DEFAULT_TILESET,
    ) -> "GameMap":
        """Build from bare gid arrays (layer names become layer0, layer1, ...)."""
        named = [TileLayer(name=f"layer{i}", tiles=[list(r) for r in t]) for i, t in enumerate(layers)]
        return cls(named, tile_dim, tileset, gate_position)

    # ---- Queries ----
    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.grid), default=0)

    def classification(self, p: Position) -> TileClass:
        if p.y >= len(self.grid) or p.x >= len(self.grid[p.y]):
            return TileClass.EMPTY
        return self.grid[p.y][p.x]

    def in_bounds(self, p: Position) -> bool:
        return p.y < len(self.grid) and p.x < len(self.grid[p.y])

    def walkable(self, p: Position) -> bool:
        if not self.in_bounds(p):
            return False
        if self.gate.occupies(p):
            return False
        return self.grid[p.y][p.x] is TileClass.PATH

    def gate_position(self) -> Position:
        return self.gate.position

    @property
    def gate_open(self) -> bool:
        return not self.gate.is_closed

    # ---- Mutation ----
    def open_gate(self) -> None:
        if self.gate.open():
            logger.info("gate at %s opened", self.gate.position.as_tuple())

    # ---- Rendering ----
    def draw(self) -> List[DrawCommand]:
        image = self.tileset.source
        out: List[DrawCommand] = []
        for layer in self.layers:
            for y, row in enumerate(layer.rects):
                for x, rect in enumerate(row):
                    if rect is None:
                        continue
                    out.append(SpriteCommand(
                        kind=SpriteKind.TILE, image=image, dest=cell_rect(Position(x, y)),
                        z=MAP_Z, source=rect, tile_id=layer.tiles[y][x],
                    ))
        if self.gate.is_closed:
            for p in self.gate.footprint():
                out.append(SpriteCommand(
                    kind=SpriteKind.GATE, image=image, dest=cell_rect(p),
                    z=GATE_Z, source=self.gate_rect, tile_id=GATE_TILE_ID,
                ))
        return out

    def describe(self) -> str:
        """Text dump: ' ' empty, '#' blocked, '=' path, 'G' closed gate."""
        lines = []
        for y, row in enumerate(self.grid):
            chars = []
            for x, cls in enumerate(row):
                chars.append("G" if self.gate.occupies(Position(x, y)) else cls.value)
            lines.append("".join(chars))
        return "\n".join(lines)

# src/roborex/tiles.py
# Raw tile gids -> walkability classes, layer merge, and tileset sub-rectangles.

from enum import Enum
from functools import reduce
from typing import List, Optional, Sequence

from .primitives import Dimension, Rect

EMPTY_TILE = 0
GATE_TILE_ID = 214

# Floor art of the bundled tileset; everything else non-zero is an obstacle.
PATH_TILE_IDS = frozenset({
    154, 155, 160, 161,
    196, 197, 221, 228, 229, 230, 231, 232, 233, 234,
    246, 248, 256, 268, 269, 270, 271, 277, 278, 279, 280,
})


class TileClass(Enum):
    PATH = "="
    NON_PATH = "#"
    EMPTY = " "


ClassGrid = List[List[TileClass]]


def classify_tile(tile: int, path_ids=PATH_TILE_IDS) -> TileClass:
    if tile == EMPTY_TILE:
        return TileClass.EMPTY
    if tile in path_ids:
        return TileClass.PATH
    return TileClass.NON_PATH


def merge_classes(a: TileClass, b: TileClass) -> TileClass:
    # NonPath dominates; Empty is the identity.
    if a is TileClass.NON_PATH or b is TileClass.NON_PATH:
        return TileClass.NON_PATH
    if a is TileClass.PATH or b is TileClass.PATH:
        return TileClass.PATH
    return TileClass.EMPTY


def classify_layer(tiles: Sequence[Sequence[int]], path_ids=PATH_TILE_IDS) -> ClassGrid:
    return [[classify_tile(t, path_ids) for t in row] for row in tiles]


def _cell(grid: ClassGrid, x: int, y: int) -> TileClass:
    if y < len(grid) and x < len(grid[y]):
        return grid[y][x]
    return TileClass.EMPTY


def merge_grids(a: ClassGrid, b: ClassGrid) -> ClassGrid:
    """Cellwise merge; missing cells count as EMPTY so ragged layers line up."""
    out: ClassGrid = []
    for y in range(max(len(a), len(b))):
        width = max(len(a[y]) if y < len(a) else 0, len(b[y]) if y < len(b) else 0)
        out.append([merge_classes(_cell(a, x, y), _cell(b, x, y)) for x in range(width)])
    return out


def build_class_grid(layers: Sequence[Sequence[Sequence[int]]], path_ids=PATH_TILE_IDS) -> ClassGrid:
    classified = [classify_layer(tiles, path_ids) for tiles in layers]
    return reduce(merge_grids, classified, [])


def sprite_rect(
    tile: int, tile_dim: Dimension, image_dim: Dimension, firstgid: int = 1, columns: int = 0
) -> Optional[Rect]:
    """Source rectangle of `tile` inside the tileset image, or None for the empty gid.
    `columns` is the tileset's declared column count; 0 derives it from the image width.
    """
    if tile == EMPTY_TILE:
        return None
    if columns <= 0:
        columns = max(1, image_dim.width // tile_dim.width)
    local = tile - firstgid
    col, row = local % columns, local // columns
    return Rect(col * tile_dim.width, row * tile_dim.height, tile_dim.width, tile_dim.height)

# src/roborex/render/preview.py
# Render a level's merged walkability to a PNG using Pillow (no pygame, no window).
# Letters are drawn on their cells; the closed gate is shaded.

from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..engine.collectible import Collectible
from ..engine.game_map import GameMap
from ..primitives import Position
from ..tiles import TileClass

RGBA = Tuple[int, int, int, int]

_CLASS_COLORS = {
    TileClass.PATH: (200, 180, 130, 255),
    TileClass.NON_PATH: (70, 70, 80, 255),
    TileClass.EMPTY: (0, 0, 0, 0),
}
GATE_COLOR: RGBA = (150, 90, 40, 255)
LETTER_COLOR: RGBA = (255, 255, 255, 255)
START_COLOR: RGBA = (80, 200, 120, 255)


def render_walk_grid(
    game_map: GameMap,
    collectibles: Iterable[Collectible] = (),
    start: Optional[Position] = None,
    cell_size: int = 16,
) -> Image.Image:
    w, h = game_map.width * cell_size, game_map.height * cell_size
    canvas = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(canvas)
    for y, row in enumerate(game_map.grid):
        for x, cls in enumerate(row):
            color = GATE_COLOR if game_map.gate.occupies(Position(x, y)) else _CLASS_COLORS[cls]
            x0, y0 = x * cell_size, y * cell_size
            # Use a 4-item box so Pillow never complains about region size
            draw.rectangle((x0, y0, x0 + cell_size - 1, y0 + cell_size - 1), fill=color)

    if start is not None:
        x0, y0 = start.x * cell_size, start.y * cell_size
        draw.ellipse((x0 + 2, y0 + 2, x0 + cell_size - 3, y0 + cell_size - 3), fill=START_COLOR)

    font = ImageFont.load_default()
    for c in collectibles:
        if c.collected:
            continue
        left, top, right, bottom = draw.textbbox((0, 0), c.letter, font=font)
        x0 = c.position.x * cell_size + (cell_size - (right - left)) / 2
        y0 = c.position.y * cell_size + (cell_size - (bottom - top)) / 2
        draw.text((x0, y0), c.letter, fill=LETTER_COLOR, font=font)
    return canvas


def save_walk_grid(out_png: str, *args, **kwargs) -> Image.Image:
    img = render_walk_grid(*args, **kwargs)
    out_dir = os.path.dirname(out_png)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    img.save(out_png)
    return img

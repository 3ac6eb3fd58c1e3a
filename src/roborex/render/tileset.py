# src/roborex/render/tileset.py
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

import pygame

from ..engine.draw import SpriteKind
from ..primitives import Rect
from ..tiles import GATE_TILE_ID, PATH_TILE_IDS

logger = logging.getLogger(__name__)

TILED_DIR = "tiled"


def _fallback_color(kind: SpriteKind, tile_id: int) -> Tuple[int, int, int, int]:
    if kind is SpriteKind.PLAYER:   return ( 80, 200, 120, 255)
    if tile_id == GATE_TILE_ID:     return (150,  90,  40, 255)   # gate
    if tile_id in PATH_TILE_IDS:    return (200, 180, 130, 255)   # floor
    return (70, 70, 80, 255)                                      # walls / decor


class Tileset:
    """
    Cached image loader rooted at the resource directory:
      - tile/gate sprites come from resources/tiled/<tileset image>
      - everything else from resources/<name> (e.g. images/DinoWalk1.png)
      - a missing file is logged once and yields None; callers decide on a fallback
    """
    def __init__(self, root: Path, tile_size: int):
        self.root = Path(root)
        self.tile_size = tile_size

    def path_for(self, kind: SpriteKind, name: str) -> Path:
        if kind in (SpriteKind.TILE, SpriteKind.GATE):
            return self.root / TILED_DIR / name
        return self.root / name

    @lru_cache(maxsize=64)
    def get(self, kind: SpriteKind, name: str) -> Optional[pygame.Surface]:
        path = self.path_for(kind, name)
        if not path.exists():
            logger.warning("asset not found: %s", path)
            return None
        try:
            return pygame.image.load(str(path)).convert_alpha()
        except pygame.error as e:
            logger.warning("cannot load %s: %s", path, e)
            return None

    @lru_cache(maxsize=2048)
    def view(self, kind: SpriteKind, name: str, source: Optional[Rect], size: Tuple[int, int], tile_id: int = 0) -> Optional[pygame.Surface]:
        base = self.get(kind, name)
        if base is None:
            if kind is SpriteKind.IMAGE:
                return None
            img = pygame.Surface(size, pygame.SRCALPHA)
            img.fill(_fallback_color(kind, tile_id))
            return img
        if source is not None:
            area = pygame.Rect(int(source.x), int(source.y), int(source.w), int(source.h))
            if not base.get_rect().contains(area):
                return None
            base = base.subsurface(area)
        if base.get_size() == size:
            return base
        return pygame.transform.scale(base, size)

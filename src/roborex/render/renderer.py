# src/roborex/render/renderer.py
# Executes engine draw commands on a pygame surface, strictly by z (stable).

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable

import pygame

from ..config import TILE_WIDTH
from ..engine.draw import BLACK, Color, DrawCommand, FontStyle, SpriteCommand, TextCommand, sort_commands
from .tileset import Tileset

logger = logging.getLogger(__name__)

FONT_FILE = Path("fonts") / "slkscr.ttf"


class PygameRenderer:
    def __init__(self, screen: pygame.Surface, resource_dir: Path):
        self.screen = screen
        self.resource_dir = Path(resource_dir)
        self.tileset = Tileset(self.resource_dir, TILE_WIDTH)
        self._fonts: Dict[FontStyle, pygame.font.Font] = {}

    def font(self, style: FontStyle) -> pygame.font.Font:
        if style not in self._fonts:
            path = self.resource_dir / FONT_FILE
            if path.exists():
                self._fonts[style] = pygame.font.Font(str(path), style.size)
            else:
                logger.warning("font not found: %s (using pygame default)", path)
                self._fonts[style] = pygame.font.Font(None, style.size)
        return self._fonts[style]

    def clear(self, color: Color = BLACK) -> None:
        self.screen.fill(color)

    def draw_sprite(self, cmd: SpriteCommand) -> None:
        size = (int(cmd.dest.w), int(cmd.dest.h))
        surf = self.tileset.view(cmd.kind, cmd.image, cmd.source, size, cmd.tile_id)
        if surf is None:
            return
        if cmd.flip_x:
            surf = pygame.transform.flip(surf, True, False)
        self.screen.blit(surf, (int(cmd.dest.x), int(cmd.dest.y)))

    def draw_text(self, cmd: TextCommand) -> None:
        img = self.font(cmd.style).render(cmd.text, True, cmd.color)
        cx, cy = cmd.center
        self.screen.blit(img, img.get_rect(center=(int(cx), int(cy))))

    def render(self, commands: Iterable[DrawCommand]) -> None:
        self.clear()
        for cmd in sort_commands(list(commands)):
            if isinstance(cmd, SpriteCommand):
                self.draw_sprite(cmd)
            else:
                self.draw_text(cmd)

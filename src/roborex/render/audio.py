# src/roborex/render/audio.py
# Fire-and-forget clip playback through pygame.mixer.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)

SOUND_DIR = "sounds"
SOUND_EXT = ".mp3"


class PygameAudio:
    """Plays resources/sounds/<name>.mp3; unresolved clips are skipped."""

    def __init__(self, resource_dir: Path) -> None:
        self.sound_dir = Path(resource_dir) / SOUND_DIR
        self._cache: Dict[str, Optional[pygame.mixer.Sound]] = {}
        self.enabled = True
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)
            self.enabled = False

    def _load(self, name: str) -> Optional[pygame.mixer.Sound]:
        if name not in self._cache:
            path = self.sound_dir / f"{name}{SOUND_EXT}"
            sound = None
            if not path.exists():
                logger.warning("sound not found: %s", path)
            else:
                try:
                    sound = pygame.mixer.Sound(str(path))
                except pygame.error as e:
                    logger.warning("cannot load %s: %s", path, e)
            self._cache[name] = sound
        return self._cache[name]

    def play(self, name: str) -> None:
        if not self.enabled:
            return
        sound = self._load(name)
        if sound is not None:
            sound.play()

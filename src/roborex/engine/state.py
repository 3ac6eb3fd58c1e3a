# src/roborex/engine/state.py
# GameState orchestrator: splash -> playing -> complete, level progression,
# and the single Player that outlives levels.

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Protocol

from ..ui.screens import complete_screen, splash_screen
from .draw import DrawCommand
from .inputs import NO_INPUT, InputFrame
from .level import Level, build_level
from .player import Player
from .timing import TimingModel

logger = logging.getLogger(__name__)

LevelFactory = Callable[[int], Optional[Level]]


class AudioSink(Protocol):
    def play(self, name: str) -> None: ...


class SilentAudio:
    def play(self, name: str) -> None:
        return None


class Screen(Enum):
    SPLASH = "splash"
    PLAYING = "playing"
    COMPLETE = "complete"


class GameState:
    def __init__(
        self,
        level_factory: Optional[LevelFactory] = None,
        *,
        timing: Optional[TimingModel] = None,
        audio: Optional[AudioSink] = None,
        first_level: int = 0,
        skip_splash: bool = False,
    ) -> None:
        self.timing = timing or TimingModel()
        self.level_factory: LevelFactory = level_factory or (lambda i: build_level(i, timing=self.timing))
        self.audio: AudioSink = audio or SilentAudio()

        # Construction errors (MapParseError) propagate: no level, no game.
        level = self.level_factory(first_level)
        if level is None:
            raise ValueError(f"no level with index {first_level}")
        self.level: Level = level
        self.player = Player(position=level.start_position, timing=self.timing)

        self.screen = Screen.PLAYING if skip_splash else Screen.SPLASH
        self.elapsed_ms = 0.0

    # ---- Lifecycle helpers ----
    def start_level(self, level: Level) -> None:
        self.level = level
        # Only the position is re-seeded; facing and animation carry over.
        self.player.position = level.start_position
        logger.info("level %d started at %s", level.index, level.start_position.as_tuple())

    def _advance(self) -> None:
        nxt = self.level_factory(self.level.index + 1)
        if nxt is None:
            self.screen = Screen.COMPLETE
            logger.info("game complete after level %d", self.level.index)
            return
        self.start_level(nxt)

    @property
    def complete(self) -> bool:
        return self.screen is Screen.COMPLETE

    # ---- Tick orchestration ----
    def update(self, dt_ms: float, inputs: InputFrame = NO_INPUT) -> None:
        self.elapsed_ms += dt_ms

        if self.screen is Screen.SPLASH:
            if inputs.mouse_released is not None or inputs.enter:
                self.screen = Screen.PLAYING
            return

        if self.screen is Screen.COMPLETE:
            return

        self.level.update(dt_ms, self.player, inputs, play=self.audio.play)
        if self.level.passing_the_gate(self.player):
            self._advance()

    def draw(self) -> List[DrawCommand]:
        if self.screen is Screen.SPLASH:
            return splash_screen()
        if self.screen is Screen.COMPLETE:
            return complete_screen()
        return self.level.draw(self.player)

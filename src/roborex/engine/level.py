# src/roborex/engine/level.py
# A level owns its map, puzzle and letters, and runs the fixed per-tick order:
#   1) player tick  2) letter collisions -> puzzle  3) gate opens once solved
# Completion (player on an open gate) is checked by GameState after update().

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ..config import RESOURCE_DIR
from ..mapdata.tmx import TileMapSource, load_tile_map
from ..primitives import Position
from ..ui.hud import puzzle_overlay
from .collectible import Collectible
from .draw import DrawCommand
from .game_map import GameMap
from .inputs import NO_INPUT, InputFrame
from .player import Player
from .puzzle import CollectResult, Puzzle
from .timing import TimingModel

logger = logging.getLogger(__name__)

MapLoader = Callable[[Path], TileMapSource]
ClipSink = Callable[[str], None]

P = Position


@dataclass(frozen=True)
class LevelSpec:
    map_file: str
    start_position: Position
    gate_position: Position
    word: str
    letters: Tuple[Tuple[str, Position], ...]


LEVELS: Tuple[LevelSpec, ...] = (
    LevelSpec(
        map_file="level1.tmx",
        start_position=P(0, 14),
        gate_position=P(24, 13),
        word="APPLE",
        letters=(("A", P(5, 7)), ("P", P(10, 12)), ("P", P(18, 7)), ("L", P(17, 11)), ("E", P(22, 11))),
    ),
    LevelSpec(
        map_file="level2.tmx",
        start_position=P(0, 14),
        gate_position=P(24, 13),
        word="JONATHAN",
        letters=(
            ("J", P(5, 14)), ("O", P(7, 14)), ("N", P(8, 14)), ("A", P(15, 14)),
            ("T", P(18, 14)), ("H", P(20, 14)), ("A", P(21, 14)), ("N", P(22, 14)),
        ),
    ),
)


class Level:
    def __init__(
        self,
        index: int,
        start_position: Position,
        game_map: GameMap,
        puzzle: Puzzle,
        collectibles: Sequence[Collectible],
    ) -> None:
        self.index = index
        self.start_position = start_position
        self.game_map = game_map
        self.puzzle = puzzle
        self.collectibles: List[Collectible] = list(collectibles)

    # ---- Tick orchestration ----
    def update(
        self,
        dt_ms: float,
        player: Player,
        inputs: InputFrame = NO_INPUT,
        play: Optional[ClipSink] = None,
    ) -> bool:
        """Run one tick; returns whether the puzzle is solved."""
        # 1) Player moves against current walkability
        player.tick(dt_ms, self.game_map.walkable, inputs)

        # 2) Collisions on the post-step cell
        for collectible in self.collectibles:
            if collectible.collides_with(player.position):
                if self.puzzle.collect(collectible.letter) is CollectResult.ACCEPTED:
                    collectible.collect()

        for clip in self.puzzle.update(dt_ms):
            if play is not None:
                play(clip)

        # 3) Gate follows the puzzle
        solved = self.puzzle.solved()
        if solved:
            self.game_map.open_gate()
        return solved

    def passing_the_gate(self, player: Player) -> bool:
        return self.game_map.gate_open and player.position == self.game_map.gate_position()

    def remaining(self) -> List[Collectible]:
        return [c for c in self.collectibles if not c.collected]

    # ---- Rendering ----
    def draw(self, player: Player) -> List[DrawCommand]:
        out: List[DrawCommand] = self.game_map.draw()
        for collectible in self.collectibles:
            cmd = collectible.draw()
            if cmd is not None:
                out.append(cmd)
        out.append(player.draw())
        out.extend(puzzle_overlay(self.puzzle.rendered_answer()))
        return out


# ---------- Factory ----------

def build_level(
    index: int,
    *,
    resource_dir: Path = RESOURCE_DIR,
    loader: MapLoader = load_tile_map,
    timing: Optional[TimingModel] = None,
) -> Optional[Level]:
    """Level `index` (0 is the entry level), or None past the last one.
    MapParseError from the loader propagates.
    """
    if not 0 <= index < len(LEVELS):
        return None
    spec = LEVELS[index]
    timing = timing or TimingModel()
    source = loader(Path(resource_dir) / "tiled" / spec.map_file)
    game_map = GameMap.from_source(source, spec.gate_position)
    puzzle = Puzzle(spec.word, word_clip_delay_ms=timing.word_clip_delay_ms)
    collectibles = [Collectible(letter, pos) for letter, pos in spec.letters]
    logger.info("level %d loaded: %s, word %s", index, spec.map_file, spec.word)
    return Level(index, spec.start_position, game_map, puzzle, collectibles)

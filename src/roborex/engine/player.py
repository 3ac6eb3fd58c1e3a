# src/roborex/engine/player.py
# Engine-only Player: Standing/Walking state machine, grid-quantised steps with a
# per-step timer, keyboard stepping and click-to-walk along the dominant axis.
# The map is never held here; every tick receives a walkability predicate.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Tuple, Union

from ..config import GRID_HEIGHT, GRID_WIDTH
from ..grid import cell_center, interpolated_center, walk_progress
from ..primitives import Direction, Position, Rect
from .draw import PLAYER_Z, SpriteCommand, SpriteKind
from .inputs import NO_INPUT, InputFrame
from .timing import TimingModel

logger = logging.getLogger(__name__)

Walkable = Callable[[Position], bool]

STANDING_SPRITES = ("images/DinoStill1.png", "images/DinoStill2.png", "images/DinoStill3.png")
WALKING_SPRITES = ("images/DinoWalk1.png", "images/DinoWalk2.png", "images/DinoWalk3.png")


@dataclass(frozen=True)
class Standing:
    facing: Direction


@dataclass
class Walking:
    facing: Direction
    remaining_steps: int
    step_timer_ms: float
    anim_idx: int = 0
    anim_tick_ms: float = 0.0


PlayerState = Union[Standing, Walking]


@dataclass
class Player:
    position: Position
    state: PlayerState = field(default_factory=lambda: Standing(Direction.RIGHT))
    timing: TimingModel = field(default_factory=TimingModel)

    # standing animation
    standing_anim_idx: int = 0
    standing_anim_tick_ms: float = 0.0

    # ------------- API expected by level/state -------------
    @property
    def facing(self) -> Direction:
        return self.state.facing

    @property
    def is_walking(self) -> bool:
        return isinstance(self.state, Walking)

    def stop(self) -> None:
        self.state = Standing(self.state.facing)

    def walk(self, direction: Direction, walkable: Walkable, steps: int = 1) -> bool:
        """Start walking `steps` cells towards `direction`; blocked or clamped -> Standing."""
        target = self.position.step(direction)
        if target == self.position or not walkable(target):
            self.state = Standing(direction)
            return False
        self.standing_anim_idx = 0
        self.standing_anim_tick_ms = 0.0
        self.state = Walking(
            facing=direction,
            remaining_steps=max(1, steps),
            step_timer_ms=self.timing.walking_duration_ms,
        )
        logger.debug("walk %s x%d from %s", direction.value, steps, self.position.as_tuple())
        return True

    def walk_to(self, target: Position, walkable: Walkable) -> bool:
        """Straight walk along the dominant axis; obstacles halt it via the preflight check."""
        dx = target.x - self.position.x
        dy = target.y - self.position.y
        if dx == 0 and dy == 0:
            self.stop()
            return False
        if abs(dx) >= abs(dy):
            direction = Direction.RIGHT if dx > 0 else Direction.LEFT
            return self.walk(direction, walkable, steps=abs(dx))
        direction = Direction.DOWN if dy > 0 else Direction.UP
        return self.walk(direction, walkable, steps=abs(dy))

    # ------------- Core tick -------------
    def tick(self, dt_ms: float, walkable: Walkable, inputs: InputFrame = NO_INPUT) -> bool:
        """Advance one tick. Returns True when a step was committed this tick.
        Only the branch for the state the tick started in runs.
        """
        if isinstance(self.state, Walking):
            return self._tick_walking(self.state, dt_ms, walkable, inputs)
        self._tick_standing(dt_ms, walkable, inputs)
        return False

    # ------------- Helpers -------------
    def _tick_walking(self, st: Walking, dt_ms: float, walkable: Walkable, inputs: InputFrame) -> bool:
        # Preflight every tick, so a gate or wall ahead halts the walk in place.
        target = self.position.step(st.facing)
        if not walkable(target):
            self.state = Standing(st.facing)
            return False

        if st.step_timer_ms <= 0:
            self.position = target
            if st.remaining_steps > 1:
                st.remaining_steps -= 1
                st.step_timer_ms = self.timing.walking_duration_ms
                return True
            direction = inputs.direction()
            if direction is None:
                self.state = Standing(st.facing)
            else:
                self.walk(direction, walkable)
            return True

        st.step_timer_ms -= dt_ms
        st.anim_tick_ms += dt_ms
        if st.anim_tick_ms > self.timing.anim_frame_ms:
            st.anim_idx += 1
            st.anim_tick_ms = 0.0
        return False

    def _tick_standing(self, dt_ms: float, walkable: Walkable, inputs: InputFrame) -> None:
        self.standing_anim_tick_ms += dt_ms
        if self.standing_anim_tick_ms > self.timing.anim_frame_ms:
            self.standing_anim_idx += 1
            self.standing_anim_tick_ms = 0.0

        direction = inputs.direction()
        if direction is not None:
            self.walk(direction, walkable)
            return
        clicked = inputs.clicked_cell()
        if clicked is not None:
            self.walk_to(clicked, walkable)

    # ------------- Rendering queries -------------
    def progress(self) -> float:
        """Fraction of the current step already shown, in [0, 1]; 0 while standing."""
        if isinstance(self.state, Walking):
            return walk_progress(self.state.step_timer_ms, self.timing.walking_duration_ms)
        return 0.0

    def visual_center(self) -> Tuple[float, float]:
        if isinstance(self.state, Walking):
            return interpolated_center(self.position, self.state.facing, self.progress())
        return cell_center(self.position)

    def sprite_image(self) -> str:
        if isinstance(self.state, Walking):
            return WALKING_SPRITES[self.state.anim_idx % len(WALKING_SPRITES)]
        return STANDING_SPRITES[self.standing_anim_idx % len(STANDING_SPRITES)]

    def draw(self) -> SpriteCommand:
        cx, cy = self.visual_center()
        dest = Rect(cx - GRID_WIDTH / 2, cy - GRID_HEIGHT / 2, GRID_WIDTH, GRID_HEIGHT)
        return SpriteCommand(
            kind=SpriteKind.PLAYER,
            image=self.sprite_image(),
            dest=dest,
            z=PLAYER_Z,
            flip_x=self.facing is Direction.LEFT,
        )

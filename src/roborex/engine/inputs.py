# src/roborex/engine/inputs.py
# One frame of sampled input, already reduced to what the engine reads.

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from ..grid import from_coordinate
from ..primitives import KEY_PRIORITY, Direction, Position


@dataclass(frozen=True)
class InputFrame:
    held: FrozenSet[Direction] = frozenset()
    enter: bool = False
    # Pixel position of a left-button release this frame (edge-triggered).
    mouse_released: Optional[Tuple[float, float]] = None

    @classmethod
    def keys(cls, *directions: Direction) -> "InputFrame":
        return cls(held=frozenset(directions))

    @classmethod
    def click(cls, px: float, py: float) -> "InputFrame":
        return cls(mouse_released=(px, py))

    def direction(self) -> Optional[Direction]:
        for d in KEY_PRIORITY:
            if d in self.held:
                return d
        return None

    def clicked_cell(self) -> Optional[Position]:
        if self.mouse_released is None:
            return None
        return from_coordinate(*self.mouse_released)


NO_INPUT = InputFrame()

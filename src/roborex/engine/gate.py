# src/roborex/engine/gate.py
# Vertical 1x3 door. Closed blocks its three cells; opening is one-way.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..primitives import Position

GATE_HEIGHT = 3


class GateState(Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class Gate:
    position: Position
    state: GateState = GateState.CLOSED

    @property
    def is_closed(self) -> bool:
        return self.state is GateState.CLOSED

    def footprint(self) -> Tuple[Position, ...]:
        return tuple(self.position.offset(0, dy) for dy in range(GATE_HEIGHT))

    def occupies(self, p: Position) -> bool:
        return (
            self.is_closed
            and p.x == self.position.x
            and self.position.y <= p.y < self.position.y + GATE_HEIGHT
        )

    def open(self) -> bool:
        """Open the gate; returns True only on the Closed -> Open transition."""
        if self.state is GateState.OPEN:
            return False
        self.state = GateState.OPEN
        return True

# src/roborex/engine/collectible.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..grid import cell_center
from ..primitives import Position
from .draw import COLLECTIBLE_Z, FontStyle, TextCommand


class CollectStatus(Enum):
    NOT_COLLECTED = "not_collected"
    COLLECTED = "collected"


@dataclass
class Collectible:
    letter: str
    position: Position
    status: CollectStatus = CollectStatus.NOT_COLLECTED

    @property
    def collected(self) -> bool:
        return self.status is CollectStatus.COLLECTED

    def collides_with(self, p: Position) -> bool:
        return not self.collected and self.position == p

    def collect(self) -> None:
        self.status = CollectStatus.COLLECTED

    def draw(self) -> Optional[TextCommand]:
        if self.collected:
            return None
        return TextCommand(self.letter, FontStyle.NORMAL, cell_center(self.position), COLLECTIBLE_Z)

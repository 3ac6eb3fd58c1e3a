# src/roborex/engine/puzzle.py
# Ordered-letter answer. Only the first pending slot (the cursor) can be filled,
# so duplicate letters are taken strictly left to right.

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..config import WORD_CLIP_DELAY_MS

logger = logging.getLogger(__name__)

INSTRUCTIONS_CLIP = "instructions"
PENDING_GLYPH = "_"


class CollectResult(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class AnswerSlot:
    letter: str
    filled: bool = False

    def rendered(self) -> str:
        return self.letter if self.filled else PENDING_GLYPH


class Puzzle:
    def __init__(self, target: str, word_clip_delay_ms: float = WORD_CLIP_DELAY_MS) -> None:
        if not target:
            raise ValueError("puzzle target word must not be empty")
        self.target = target
        self.slots: List[AnswerSlot] = [AnswerSlot(c) for c in target]
        self.word_clip_delay_ms = word_clip_delay_ms
        self.elapsed_ms = 0.0
        self._instructions_at: Optional[float] = None
        self._word_at: Optional[float] = None

    # ---- Answer ----
    def cursor(self) -> Optional[int]:
        """Index of the first pending slot, or None once solved."""
        for i, slot in enumerate(self.slots):
            if not slot.filled:
                return i
        return None

    def collect(self, letter: str) -> CollectResult:
        i = self.cursor()
        if i is None or self.slots[i].letter != letter:
            logger.debug("puzzle %s rejected %r", self.target, letter)
            return CollectResult.REJECTED
        self.slots[i] = AnswerSlot(letter, filled=True)
        logger.debug("puzzle %s accepted %r -> %s", self.target, letter, self.rendered_answer())
        return CollectResult.ACCEPTED

    def solved(self) -> bool:
        return all(slot.filled for slot in self.slots)

    def rendered_answer(self) -> str:
        return "".join(slot.rendered() for slot in self.slots)

    @property
    def word_clip(self) -> str:
        return self.target.lower()

    # ---- Audio schedule ----
    def update(self, dt_ms: float) -> List[str]:
        """Advance the puzzle clock; returns the audio clips due this tick (each plays once)."""
        self.elapsed_ms += dt_ms
        due: List[str] = []
        if self._instructions_at is None:
            self._instructions_at = self.elapsed_ms
            due.append(INSTRUCTIONS_CLIP)
        if self._word_at is None and self.elapsed_ms - self._instructions_at >= self.word_clip_delay_ms:
            self._word_at = self.elapsed_ms
            due.append(self.word_clip)
        return due

# src/roborex/engine/timing.py
# Centralized timing knobs so pacing can be tuned without touching the runner.
# All durations are milliseconds of simulated time (the runner feeds frame deltas).

from __future__ import annotations

from dataclasses import dataclass

from ..config import ANIM_FPS, WALKING_DURATION_MS, WORD_CLIP_DELAY_MS


@dataclass
class TimingModel:
    walking_duration_ms: float = WALKING_DURATION_MS   # one grid step
    anim_fps: int = ANIM_FPS                           # walking + standing frame rate
    word_clip_delay_ms: float = WORD_CLIP_DELAY_MS     # instructions -> word clip

    # Global scalar to stretch/shrink time uniformly (runner --speed option)
    time_scalar_num: int = 1
    time_scalar_den: int = 1

    @property
    def anim_frame_ms(self) -> float:
        return 1000.0 / max(1, self.anim_fps)

    def scaled(self) -> "TimingModel":
        """Return a copy with durations scaled by time_scalar."""
        k = self.time_scalar_num / self.time_scalar_den
        return TimingModel(
            walking_duration_ms=max(1.0, self.walking_duration_ms * k),
            anim_fps=self.anim_fps,
            word_clip_delay_ms=max(0.0, self.word_clip_delay_ms * k),
        )


def timing_for(
    walking_duration_ms: float = WALKING_DURATION_MS,
    speed: float = 1.0,
    anim_fps: int = ANIM_FPS,
) -> TimingModel:
    # speed > 1 means faster stepping, so it divides the durations.
    if speed <= 0:
        raise ValueError(f"speed must be positive, got {speed}")
    if anim_fps <= 0:
        raise ValueError(f"anim_fps must be positive, got {anim_fps}")
    base = TimingModel(walking_duration_ms=walking_duration_ms, anim_fps=anim_fps)
    base.time_scalar_num, base.time_scalar_den = 100, max(1, int(round(speed * 100)))
    return base.scaled()

# src/roborex/config.py
# Process-wide constants and the runner-facing Settings record.

from dataclasses import dataclass, replace
from pathlib import Path

TILE_WIDTH = 16
TILE_HEIGHT = 16
SCALING_FACTOR = 2
GRID_WIDTH = TILE_WIDTH * SCALING_FACTOR
GRID_HEIGHT = TILE_HEIGHT * SCALING_FACTOR
GRID_X_OFFSET = TILE_WIDTH // 2
GRID_Y_OFFSET = TILE_HEIGHT // 2

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600

# One grid step takes this long; tests express timing in multiples of it.
WALKING_DURATION_MS = 100.0
ANIM_FPS = 10
WORD_CLIP_DELAY_MS = 3000.0

RESOURCE_DIR = Path(__file__).resolve().parent / "resources"


@dataclass(frozen=True)
class Settings:
    title: str = "RoboRex"
    window_width: int = WINDOW_WIDTH
    window_height: int = WINDOW_HEIGHT
    fps: int = 60
    resource_dir: Path = RESOURCE_DIR
    walking_duration_ms: float = WALKING_DURATION_MS
    anim_fps: int = ANIM_FPS
    first_level: int = 0

    def with_overrides(self, **changes) -> "Settings":
        # None means "keep the default" so argparse namespaces can be passed through.
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


# Default settings (the runner swaps in its own from argparse)
SETTINGS = Settings()

# tools/run_game.py
# Pygame window + main loop for RoboRex. The engine sees only InputFrame and
# frame deltas; everything drawn comes back as draw commands.

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import pygame

# Project imports
try:
    from roborex.config import SETTINGS
    from roborex.engine.inputs import InputFrame
    from roborex.engine.level import build_level
    from roborex.engine.state import GameState
    from roborex.engine.timing import timing_for
    from roborex.primitives import Direction
    from roborex.render.audio import PygameAudio
    from roborex.render.renderer import PygameRenderer
except Exception as e:  # pragma: no cover
    print("[run_game] Failed to import project modules:", e)
    print("Ensure you installed the package in editable mode: pip install -e .")
    raise

_KEYS = {
    Direction.LEFT: (pygame.K_LEFT, pygame.K_a),
    Direction.RIGHT: (pygame.K_RIGHT, pygame.K_d),
    Direction.UP: (pygame.K_UP, pygame.K_w),
    Direction.DOWN: (pygame.K_DOWN, pygame.K_s),
}


def sample_input(mouse_released: Optional[tuple]) -> InputFrame:
    pressed = pygame.key.get_pressed()
    held = frozenset(d for d, keys in _KEYS.items() if any(pressed[k] for k in keys))
    enter = bool(pressed[pygame.K_RETURN] or pressed[pygame.K_KP_ENTER])
    return InputFrame(held=held, enter=enter, mouse_released=mouse_released)


def _positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {text}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {text}")
    return value


# ---------- Main ----------

def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="RoboRex word-gate puzzle")
    parser.add_argument("--level", type=int, default=None, dest="first_level", help="start at level index (0 = first)")
    parser.add_argument("--fps", type=_positive_int, default=None)
    parser.add_argument("--walk-ms", type=_positive_float, default=None, dest="walking_duration_ms", help="milliseconds per grid step")
    parser.add_argument("--speed", type=_positive_float, default=1.0, help="time scalar (>1 = faster)")
    parser.add_argument("--anim-fps", type=_positive_int, default=None, dest="anim_fps", help="sprite animation frames per second")
    parser.add_argument("--resources", type=Path, default=None, dest="resource_dir")
    parser.add_argument("--skip-splash", action="store_true")
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = SETTINGS.with_overrides(
        first_level=args.first_level,
        fps=args.fps,
        walking_duration_ms=args.walking_duration_ms,
        anim_fps=args.anim_fps,
        resource_dir=args.resource_dir,
    )
    timing = timing_for(settings.walking_duration_ms, speed=args.speed, anim_fps=settings.anim_fps)

    if not pygame.get_init():
        pygame.init()
    screen = pygame.display.set_mode((settings.window_width, settings.window_height))
    pygame.display.set_caption(settings.title)
    clock = pygame.time.Clock()

    audio = None if args.mute else PygameAudio(settings.resource_dir)
    game = GameState(
        lambda i: build_level(i, resource_dir=settings.resource_dir, timing=timing),
        timing=timing,
        audio=audio,
        first_level=settings.first_level,
        skip_splash=args.skip_splash,
    )
    renderer = PygameRenderer(screen, settings.resource_dir)

    running = True
    dt_ms = 0.0
    # ---------- Main loop ----------
    while running:
        released = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                released = event.pos

        game.update(dt_ms, sample_input(released))
        renderer.render(game.draw())
        pygame.display.flip()
        dt_ms = float(clock.tick(settings.fps))

    pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

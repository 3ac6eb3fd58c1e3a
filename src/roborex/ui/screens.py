# src/roborex/ui/screens.py
# Full-window screens outside gameplay: the splash and the end-of-game card.

from typing import List

from ..config import WINDOW_HEIGHT, WINDOW_WIDTH
from ..engine.draw import SCREEN_Z, DrawCommand, FontStyle, SpriteCommand, SpriteKind, TextCommand
from ..primitives import Rect

SPLASH_IMAGE = "images/splash.png"
SPLASH_HINT = "Click or press Enter to start"
COMPLETE_TITLE = "Well done!"
COMPLETE_HINT = "Every word is spelled. Close the window to quit."


def splash_screen(width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> List[DrawCommand]:
    # The hint sits above the image so it still reads if the splash art is missing.
    return [
        SpriteCommand(SpriteKind.IMAGE, SPLASH_IMAGE, Rect(0, 0, width, height), SCREEN_Z),
        TextCommand(SPLASH_HINT, FontStyle.NORMAL, (width / 2, height - 2 * FontStyle.NORMAL.size), SCREEN_Z + 1),
    ]


def complete_screen(width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> List[DrawCommand]:
    return [
        TextCommand(COMPLETE_TITLE, FontStyle.BIG, (width / 2, height / 2 - FontStyle.BIG.size), SCREEN_Z),
        TextCommand(COMPLETE_HINT, FontStyle.NORMAL, (width / 2, height / 2 + FontStyle.NORMAL.size), SCREEN_Z),
    ]

# src/roborex/ui/hud.py
from typing import List, Tuple

from ..config import WINDOW_HEIGHT, WINDOW_WIDTH
from ..engine.draw import PUZZLE_TEXT_Z, FontStyle, TextCommand

INSTRUCTION_TEXT = "Collect all the letters for the word:"


def overlay_anchors(width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Centres of the instruction line and the answer line, stacked at the bottom
    of the window. Line heights are approximated by the font point sizes.
    """
    instruction_h = FontStyle.NORMAL.size
    answer_h = FontStyle.BIG.size
    instruction = (width / 2, height - (instruction_h + answer_h))
    answer = (width / 2, height - (answer_h * 2 / 3))
    return instruction, answer


def puzzle_overlay(rendered_answer: str, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> List[TextCommand]:
    """
    Two text commands: the instruction and the answer with pending slots as '_'
    (e.g. 'A____'). Drawn above all gameplay sprites.
    """
    instruction_at, answer_at = overlay_anchors(width, height)
    return [
        TextCommand(INSTRUCTION_TEXT, FontStyle.NORMAL, instruction_at, PUZZLE_TEXT_Z),
        TextCommand(rendered_answer, FontStyle.BIG, answer_at, PUZZLE_TEXT_Z),
    ]

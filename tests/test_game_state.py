# tests/test_game_state.py
import pytest

from roborex.engine.draw import SpriteKind, TextCommand
from roborex.engine.inputs import NO_INPUT, InputFrame
from roborex.engine.level import build_level
from roborex.engine.player import Standing
from roborex.engine.puzzle import INSTRUCTIONS_CLIP
from roborex.engine.state import GameState, Screen
from roborex.engine.timing import TimingModel
from roborex.mapdata.tmx import MapParseError
from roborex.primitives import Direction, Position

D = 100.0
GATE = Position(24, 13)


class RecordingAudio:
    def __init__(self):
        self.played = []

    def play(self, name):
        self.played.append(name)


def new_game(**kw):
    kw.setdefault("skip_splash", True)
    return GameState(timing=TimingModel(walking_duration_ms=D), **kw)


def solve_current_level(gs):
    for c in list(gs.level.collectibles):
        gs.player.position = c.position
        gs.update(D)
    assert gs.level.puzzle.solved()


def test_splash_waits_for_click_or_enter():
    gs = new_game(skip_splash=False)
    assert gs.screen is Screen.SPLASH
    for _ in range(5):
        gs.update(D, NO_INPUT)
    assert gs.screen is Screen.SPLASH
    assert gs.level.puzzle.elapsed_ms == 0.0          # gameplay is not ticked
    assert gs.draw()[0].kind is SpriteKind.IMAGE

    gs.update(D, InputFrame.click(10, 10))
    assert gs.screen is Screen.PLAYING
    assert gs.player.position == Position(0, 14)      # the dismissing click does not walk

    gs = new_game(skip_splash=False)
    gs.update(D, InputFrame(enter=True))
    assert gs.screen is Screen.PLAYING


def test_playing_ticks_level_and_plays_clips():
    audio = RecordingAudio()
    gs = new_game(audio=audio)
    gs.update(D)
    assert audio.played == [INSTRUCTIONS_CLIP]
    for _ in range(30):
        gs.update(D)
    assert audio.played == [INSTRUCTIONS_CLIP, "apple"]
    assert gs.elapsed_ms == pytest.approx(31 * D)


def test_level_transition_resets_position_and_keeps_facing():
    gs = new_game()
    assert gs.level.index == 0
    solve_current_level(gs)

    gs.player.position = GATE
    gs.player.state = Standing(Direction.UP)
    gs.update(D)

    assert gs.level.index == 1
    assert gs.level.puzzle.target == "JONATHAN"
    assert gs.player.position == Position(0, 14)
    assert gs.player.state == Standing(Direction.UP)
    assert not gs.level.game_map.gate_open


def test_standing_on_closed_gate_cell_does_not_advance():
    gs = new_game()
    gs.player.position = GATE
    gs.update(D)
    assert gs.level.index == 0


def test_finishing_last_level_shows_complete_screen():
    gs = new_game()
    for _ in range(2):
        solve_current_level(gs)
        gs.player.position = GATE
        gs.update(D)
    assert gs.complete and gs.screen is Screen.COMPLETE

    texts = [c.text for c in gs.draw() if isinstance(c, TextCommand)]
    assert texts[0] == "Well done!"
    gs.update(D, InputFrame.keys(Direction.LEFT))
    assert gs.complete


def test_first_level_out_of_range_is_an_error():
    with pytest.raises(ValueError):
        new_game(first_level=7)


def test_start_at_second_level():
    gs = new_game(first_level=1)
    assert gs.level.puzzle.target == "JONATHAN"


def test_missing_map_propagates_parse_error(tmp_path):
    with pytest.raises(MapParseError):
        GameState(level_factory=lambda i: build_level(i, resource_dir=tmp_path))

# tests/test_level.py
from roborex.engine.collectible import CollectStatus
from roborex.engine.draw import COLLECTIBLE_Z, GATE_Z, MAP_Z, PLAYER_Z, PUZZLE_TEXT_Z, SpriteKind, TextCommand, sort_commands
from roborex.engine.inputs import InputFrame
from roborex.engine.level import LEVELS, build_level
from roborex.engine.player import Player, Standing
from roborex.engine.puzzle import INSTRUCTIONS_CLIP
from roborex.engine.timing import TimingModel
from roborex.primitives import Direction, Position

D = 100.0
GATE_CELLS = [Position(24, 13), Position(24, 14), Position(24, 15)]


def load(index=0):
    level = build_level(index, timing=TimingModel(walking_duration_ms=D))
    player = Player(level.start_position, timing=TimingModel(walking_duration_ms=D))
    return level, player


def land_on(level, player, pos, play=None):
    # Place the player directly on a cell and run one quiet tick
    player.position = pos
    return level.update(D, player, play=play)


def slots(level):
    return "".join("F" if s.filled else "P" for s in level.puzzle.slots)


def test_level_one_loads_closed_gate_and_letters():
    level, player = load()
    assert player.position == Position(0, 14)
    assert level.puzzle.target == "APPLE"
    assert [level.game_map.walkable(p) for p in GATE_CELLS] == [False, False, False]
    assert slots(level) == "PPPPP"
    assert len(level.remaining()) == 5
    assert all(c.status is CollectStatus.NOT_COLLECTED for c in level.collectibles)


def test_every_letter_and_start_is_reachable_ground():
    for index, spec in enumerate(LEVELS):
        level = build_level(index)
        assert level.game_map.walkable(spec.start_position)
        for _, pos in spec.letters:
            assert level.game_map.walkable(pos), (index, pos)


def test_correct_order_solves_and_opens_gate():
    level, player = load()
    letters = [c.position for c in level.collectibles]

    assert land_on(level, player, letters[0]) is False
    assert slots(level) == "FPPPP"
    for pos in letters[1:4]:
        land_on(level, player, pos)
    assert slots(level) == "FFFFP"
    assert not level.game_map.gate_open

    assert land_on(level, player, letters[4]) is True
    assert level.puzzle.solved()
    assert level.game_map.gate_open
    assert all(level.game_map.walkable(p) for p in GATE_CELLS)
    assert level.remaining() == []


def test_letter_collected_in_the_tick_the_step_lands():
    level, player = load()
    a_tile = next(c for c in level.collectibles if c.letter == "A")
    player.position = Position(4, 7)
    right = InputFrame.keys(Direction.RIGHT)

    ticks = 0
    while player.position == Position(4, 7):
        assert not a_tile.collected and slots(level) == "PPPPP"
        level.update(D, player, right)
        ticks += 1
        assert ticks <= 3
    # Same update call that committed the step onto (5,7)
    assert player.position == Position(5, 7)
    assert ticks == 3
    assert a_tile.status is CollectStatus.COLLECTED
    assert slots(level) == "FPPPP"


def test_out_of_order_letter_stays_on_the_map():
    level, player = load()
    land_on(level, player, Position(5, 7))          # A
    land_on(level, player, Position(17, 11))        # L, but P is expected
    l_tile = next(c for c in level.collectibles if c.letter == "L")
    assert not l_tile.collected
    assert slots(level) == "FPPPP"
    assert len(level.remaining()) == 4


def test_second_p_cell_before_first_p_fills_slot_in_order():
    level, player = load()
    land_on(level, player, Position(5, 7))          # A
    land_on(level, player, Position(18, 7))         # either P fills the next slot
    assert level.puzzle.rendered_answer() == "AP___"
    remaining = [c.letter for c in level.remaining()]
    assert remaining == ["P", "L", "E"]


def test_closed_gate_blocks_walk_right():
    level, player = load()
    player.position = Position(23, 13)
    assert level.game_map.walkable(Position(23, 13))
    level.update(D, player, InputFrame.keys(Direction.RIGHT))
    assert player.state == Standing(Direction.RIGHT)
    assert player.position == Position(23, 13)
    assert not level.passing_the_gate(player)


def test_walking_through_open_gate_completes_level():
    level, player = load()
    for c in list(level.collectibles):
        land_on(level, player, c.position)
    assert level.game_map.gate_open

    player.position = Position(23, 13)
    right = InputFrame.keys(Direction.RIGHT)
    for _ in range(3):
        level.update(D, player, right)
    assert player.position == Position(24, 13)
    assert level.passing_the_gate(player)


def test_audio_cues_reach_the_sink():
    level, player = load()
    heard = []
    level.update(16, player, play=heard.append)
    assert heard == [INSTRUCTIONS_CLIP]
    for _ in range(30):
        level.update(100, player, play=heard.append)
    assert heard == [INSTRUCTIONS_CLIP, "apple"]


def test_draw_layers_and_hidden_letters():
    level, player = load()
    cmds = sort_commands(level.draw(player))
    zs = [c.z for c in cmds]
    assert zs == sorted(zs)
    assert zs[0] == MAP_Z and zs[-1] == PUZZLE_TEXT_Z
    assert len([c for c in cmds if c.z == GATE_Z]) == 3
    assert len([c for c in cmds if c.z == PLAYER_Z]) == 1

    letters = [c.text for c in cmds if isinstance(c, TextCommand) and c.z == COLLECTIBLE_Z]
    assert letters == ["A", "P", "P", "L", "E"]

    land_on(level, player, Position(5, 7))
    cmds = level.draw(player)
    letters = [c.text for c in cmds if isinstance(c, TextCommand) and c.z == COLLECTIBLE_Z]
    assert letters == ["P", "P", "L", "E"]
    overlay = [c.text for c in cmds if isinstance(c, TextCommand) and c.z == PUZZLE_TEXT_Z]
    assert overlay == ["Collect all the letters for the word:", "A____"]


def test_gate_sprites_disappear_once_open():
    level, player = load()
    for c in list(level.collectibles):
        land_on(level, player, c.position)
    assert not [c for c in level.draw(player) if getattr(c, "kind", None) is SpriteKind.GATE]


def test_build_level_past_the_end_is_none():
    assert build_level(len(LEVELS)) is None
    assert build_level(-1) is None

# tests/test_player_walk.py
from roborex.engine.game_map import GameMap
from roborex.engine.inputs import NO_INPUT, InputFrame
from roborex.engine.player import Player, Standing, Walking
from roborex.engine.timing import TimingModel
from roborex.grid import cell_center
from roborex.primitives import Direction, Position

D = 100.0  # walking duration used throughout; one tick of D drains a step timer
FLOOR, WALL = 197, 50
R, L, U, DOWN = Direction.RIGHT, Direction.LEFT, Direction.UP, Direction.DOWN


# 20x10 open floor, optional wall cells, gate parked off-map
def make_map(walls=()):
    ground = [[FLOOR] * 20 for _ in range(10)]
    overlay = [[0] * 20 for _ in range(10)]
    for x, y in walls:
        overlay[y][x] = WALL
    return GameMap.from_tiles([ground, overlay], Position(19, 0)).walkable


def make_player(x, y, **timing):
    return Player(Position(x, y), timing=TimingModel(walking_duration_ms=D, **timing))


def run(player, walkable, n, inputs=NO_INPUT, dt=D):
    for _ in range(n):
        player.tick(dt, walkable, inputs)


def test_key_press_steps_one_cell_after_one_duration():
    walkable = make_map()
    p = make_player(3, 5)
    assert p.state == Standing(R)

    p.tick(D, walkable, InputFrame.keys(R))
    assert isinstance(p.state, Walking) and p.state.remaining_steps == 1
    assert p.position == Position(3, 5)          # logical position waits for the commit

    p.tick(D, walkable)                            # timer drains
    assert p.position == Position(3, 5)
    assert p.tick(D, walkable) is True             # commit
    assert p.position == Position(4, 5)
    assert p.state == Standing(R)


def test_held_key_keeps_walking():
    walkable = make_map()
    p = make_player(3, 5)
    run(p, walkable, 5, InputFrame.keys(R))
    assert p.position == Position(5, 5)
    assert p.is_walking and p.facing is R


def test_key_priority_right_left_up_down():
    walkable = make_map()
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame.keys(L, U, R, DOWN))
    assert p.facing is R
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame.keys(DOWN, U))
    assert p.facing is U
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame.keys(DOWN, L))
    assert p.facing is L


def test_walk_left_at_column_zero_is_noop():
    walkable = make_map()
    p = make_player(0, 3)
    p.tick(D, walkable, InputFrame.keys(L))
    assert p.state == Standing(L)
    assert p.position == Position(0, 3)
    p = make_player(2, 0)
    assert p.walk(U, walkable) is False
    assert p.state == Standing(U) and p.position == Position(2, 0)


def test_blocked_key_turns_without_moving():
    walkable = make_map(walls=[(4, 5)])
    p = make_player(3, 5)
    run(p, walkable, 4, InputFrame.keys(R))
    assert p.state == Standing(R)
    assert p.position == Position(3, 5)


def test_preflight_halts_when_cell_ahead_becomes_blocked():
    blocked = set()
    walkable = lambda pos: pos not in blocked and pos.x < 20
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame.keys(R))
    blocked.add(Position(4, 5))                    # e.g. something closes mid-step
    assert p.tick(D, walkable) is False
    assert p.state == Standing(R) and p.position == Position(3, 5)


def test_click_walks_dominant_axis_and_stops_at_wall():
    walkable = make_map(walls=[(7, 5)])
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame.click(*cell_center(Position(10, 6))))
    assert isinstance(p.state, Walking)
    assert p.state.facing is R and p.state.remaining_steps == 7

    seen = []
    for _ in range(7):
        p.tick(D, walkable)
        seen.append(p.position.as_tuple())
    assert seen == [(3, 5), (4, 5), (4, 5), (5, 5), (5, 5), (6, 5), (6, 5)]

    p.tick(D, walkable)                             # preflight on (7,5) fails
    assert p.state == Standing(R)
    run(p, walkable, 10)
    assert p.position == Position(6, 5)


def test_click_vertical_when_dy_dominates():
    walkable = make_map()
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame.click(*cell_center(Position(4, 9))))
    assert p.facing is DOWN and p.state.remaining_steps == 4
    run(p, walkable, 20)
    assert p.position == Position(3, 9)
    assert p.state == Standing(DOWN)


def test_click_on_own_cell_stays_standing():
    walkable = make_map()
    p = make_player(3, 5)
    p.state = Standing(U)
    p.tick(D, walkable, InputFrame.click(*cell_center(Position(3, 5))))
    assert p.state == Standing(U)
    assert p.position == Position(3, 5)


def test_keys_win_over_click():
    walkable = make_map()
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame(held=frozenset({U}), mouse_released=cell_center(Position(10, 5))))
    assert p.facing is U and p.state.remaining_steps == 1


def test_click_ignored_while_walking():
    walkable = make_map()
    p = make_player(3, 5)
    p.tick(D, walkable, InputFrame.keys(R))
    p.tick(D, walkable, InputFrame.click(*cell_center(Position(3, 9))))
    assert p.facing is R and p.state.remaining_steps == 1


def test_visual_progress_stays_in_unit_interval():
    walkable = make_map()
    p = make_player(3, 5)
    p.tick(30, walkable, InputFrame.keys(R))
    assert p.progress() == 0.0
    last_x = p.visual_center()[0]
    while p.is_walking:
        p.tick(30, walkable)
        assert 0.0 <= p.progress() <= 1.0
        x = p.visual_center()[0]
        assert x >= last_x
        last_x = x
    assert p.visual_center() == cell_center(Position(4, 5))


def test_walking_animation_frames_advance():
    walkable = make_map()
    p = Player(Position(3, 5), timing=TimingModel(walking_duration_ms=1000, anim_fps=10))
    p.tick(60, walkable, InputFrame.keys(R))
    p.tick(60, walkable)
    assert p.state.anim_idx == 0
    p.tick(60, walkable)                              # 120 ms > 100 ms frame
    assert p.state.anim_idx == 1 and p.state.anim_tick_ms == 0.0
    assert p.sprite_image().endswith("DinoWalk2.png")


def test_standing_animation_cycles_and_resets_on_walk():
    walkable = make_map()
    p = make_player(3, 5, anim_fps=10)
    p.tick(150, walkable)
    assert p.standing_anim_idx == 1
    p.tick(150, walkable)
    assert p.standing_anim_idx == 2
    p.tick(10, walkable, InputFrame.keys(R))
    assert p.standing_anim_idx == 0 and p.standing_anim_tick_ms == 0.0


def test_player_sprite_mirrors_when_facing_left():
    p = make_player(3, 5)
    assert p.draw().flip_x is False
    p.state = Standing(L)
    assert p.draw().flip_x is True

import random
from dataclasses import replace

import pytest

from gridsnake.config import (
    GRID_SIZE, INITIAL_FOOD, INITIAL_SNAKE, INITIAL_SPEED,
    STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from gridsnake.model import Direction, FOOD_EATEN, LEVEL_UP, GAME_OVER
from gridsnake.session import (
    SessionController,
    MOVE_UP, MOVE_DOWN, MOVE_LEFT, MOVE_RIGHT,
    TOGGLE_PAUSE, START, RESTART,
)
from helpers import FakeStore, ScriptedRandom, serpentine


def playing_session(store=None, rng=None, now=0):
    session = SessionController(store or FakeStore(), rng or random.Random(0))
    session.handle_event(START)
    session.frame(now)
    return session


def crash(session, now):
    """Point the snake at the left wall and let it hit."""
    session.data = replace(
        session.data,
        snake=((0, 5),),
        direction=Direction.LEFT,
        next_direction=Direction.LEFT,
    )
    return session.frame(now + session.data.speed)


def test_initial_session():
    session = SessionController(FakeStore(75), random.Random(0))
    state, data = session.snapshot()
    assert state == STATE_MENU
    assert data.snake == tuple(INITIAL_SNAKE)
    assert data.food == INITIAL_FOOD
    assert data.high_score == 75


def test_negative_stored_score_reads_as_zero():
    session = SessionController(FakeStore(-5), random.Random(0))
    assert session.data.high_score == 0


def test_no_ticks_in_menu():
    session = SessionController(FakeStore(), random.Random(0))
    before = session.data
    for now in (0, 1000, 5000):
        assert session.frame(now) == []
    assert session.data is before


def test_tick_admission():
    session = playing_session(now=1000)
    head = session.data.head

    session.frame(1000 + INITIAL_SPEED - 1)
    assert session.data.head == head

    session.frame(1000 + INITIAL_SPEED)
    assert session.data.head == (head[0] + 1, head[1])


def test_stalled_clock_fires_a_single_tick():
    session = playing_session(now=0)
    session.frame(10_000)
    assert session.data.head == (11, 10)
    session.frame(10_001)
    assert session.data.head == (11, 10)


def test_toggle_pause_twice_is_identity():
    session = playing_session()
    before = session.snapshot()

    session.handle_event(TOGGLE_PAUSE)
    assert session.state == STATE_PAUSED
    session.handle_event(TOGGLE_PAUSE)

    after = session.snapshot()
    assert after.state == before.state
    assert after.data is before.data


def test_no_ticks_while_paused():
    session = playing_session()
    session.handle_event(TOGGLE_PAUSE)
    before = session.data
    assert session.frame(50_000) == []
    assert session.data is before


def test_resume_resets_the_baseline():
    session = playing_session(now=0)
    session.handle_event(TOGGLE_PAUSE)
    session.handle_event(TOGGLE_PAUSE)
    head = session.data.head

    session.frame(20_000)
    assert session.data.head == head
    session.frame(20_000 + INITIAL_SPEED)
    assert session.data.head != head


def test_direction_commands_only_while_playing():
    session = SessionController(FakeStore(), random.Random(0))
    session.handle_event(MOVE_UP)
    assert session.data.next_direction == Direction.RIGHT

    session.handle_event(START)
    session.handle_event(MOVE_UP)
    assert session.data.next_direction == Direction.UP

    session.handle_event(TOGGLE_PAUSE)
    session.handle_event(MOVE_DOWN)
    assert session.data.next_direction == Direction.UP


def test_reverse_command_ignored():
    session = playing_session()
    session.handle_event(MOVE_LEFT)
    assert session.data.next_direction == Direction.RIGHT
    session.handle_event(MOVE_RIGHT)
    assert session.data.next_direction == Direction.RIGHT


@pytest.mark.parametrize("command", [RESTART, TOGGLE_PAUSE, "bogus"])
def test_invalid_commands_in_menu(command):
    session = SessionController(FakeStore(), random.Random(0))
    before = session.snapshot()
    session.handle_event(command)
    assert session.snapshot() == before


def test_start_and_restart_ignored_while_playing():
    session = playing_session()
    before = session.snapshot()
    session.handle_event(START)
    session.handle_event(RESTART)
    assert session.snapshot() == before


def test_food_signal_from_frame():
    session = playing_session(rng=ScriptedRandom([(2, 2)]), now=0)
    session.data = replace(session.data, food=(11, 10))
    signals = session.frame(INITIAL_SPEED)
    assert signals == [FOOD_EATEN]
    assert session.data.score == 10
    assert session.data.food == (2, 2)


def test_level_up_signal_from_frame():
    session = playing_session(rng=ScriptedRandom([(2, 2)]), now=0)
    session.data = replace(session.data, food=(11, 10), score=40)
    assert session.frame(INITIAL_SPEED) == [FOOD_EATEN, LEVEL_UP]
    assert session.data.level == 2


def test_collision_ends_game_and_saves_best():
    store = FakeStore(20)
    session = playing_session(store=store)
    session.data = replace(session.data, score=50)

    assert crash(session, 0) == [GAME_OVER]
    assert session.state == STATE_OVER
    assert session.final_score == 50
    assert session.data.high_score == 50
    assert store.saves == [50]


def test_collision_below_best_does_not_save():
    store = FakeStore(120)
    session = playing_session(store=store)
    session.data = replace(session.data, score=80)
    crash(session, 0)
    assert session.data.high_score == 120
    assert store.saves == []


def test_no_ticks_after_game_over():
    session = playing_session()
    crash(session, 0)
    before = session.data
    for now in (1_000, 2_000, 3_000):
        assert session.frame(now) == []
    assert session.data is before


def test_restart_from_game_over():
    store = FakeStore(120)
    session = playing_session(store=store)
    session.data = replace(session.data, score=80, level=2, speed=135)
    crash(session, 0)

    session.handle_event(RESTART)

    state, data = session.snapshot()
    assert state == STATE_MENU
    assert data.score == 0
    assert data.level == 1
    assert data.speed == INITIAL_SPEED
    assert data.snake == tuple(INITIAL_SNAKE)
    assert data.direction == Direction.RIGHT
    assert data.food not in data.snake
    assert data.high_score == 120
    assert store.saves == []


def test_restart_keeps_new_best():
    store = FakeStore(10)
    session = playing_session(store=store)
    session.data = replace(session.data, score=90)
    crash(session, 0)
    session.handle_event(RESTART)
    assert session.data.high_score == 90

    session.handle_event(START)
    assert session.state == STATE_PLAYING


def test_full_grid_win_reports_last_bite_and_saves():
    store = FakeStore(100)
    session = playing_session(store=store, now=0)
    path = serpentine(GRID_SIZE)
    session.data = replace(
        session.data,
        snake=tuple(reversed(path[:-1])),
        direction=Direction.LEFT,
        next_direction=Direction.LEFT,
        food=path[-1],
        score=500,
        level=3,
    )

    signals = session.frame(INITIAL_SPEED)

    assert signals == [FOOD_EATEN, LEVEL_UP, GAME_OVER]
    assert session.state == STATE_OVER
    assert session.final_score == 530
    assert session.data.score == 530
    assert session.data.high_score == 530
    assert store.saves == [530]


def test_plain_collision_only_patches_best_score():
    session = playing_session(store=FakeStore(0))
    session.data = replace(
        session.data,
        snake=((0, 5),),
        direction=Direction.LEFT,
        next_direction=Direction.LEFT,
        score=40,
    )
    before = session.data

    session.frame(INITIAL_SPEED)

    assert session.state == STATE_OVER
    assert session.data == replace(before, high_score=40)

# src/tests/test_session.py
import pytest

from src.skyline.config import MSG_BUILDING, MSG_GROUND, JUMP_VY
from src.skyline.render import NullRenderer
from src.skyline.screens import HeadlessDisplay, START, RUNNING, GAME_OVER
from src.skyline.session import GameSession, SessionState


def make_session(**kw) -> GameSession:
    kw.setdefault("display", HeadlessDisplay())
    return GameSession(960, 540, seed=42, **kw)


def frame(s: GameSession, n: int = 1):
    for _ in range(n):
        s.scheduler.run_pending()


def hover(s: GameSession, below: float = 280.0, max_frames: int = 5000):
    """Keep the player in a narrow band by jumping whenever it falls past `below`."""
    scores = []
    for _ in range(max_frames):
        if s.player.y > below and s.player.vy > 0:
            s.jump_pressed()
            s.jump_released()
        frame(s)
        scores.append(s.score)
        if not s.running:
            break
    return scores


def test_idle_until_started():
    s = make_session()
    assert s.state is SessionState.IDLE
    assert not s.running
    assert s.display.screen == START
    assert s.scheduler.pending() == 0
    assert s.jump_pressed() is False
    assert s.player.vy == 0.0


def test_start_resets_and_schedules_one_tick():
    s = make_session()
    s.start()
    assert s.state is SessionState.RUNNING
    assert s.display.screen == RUNNING
    assert s.score == 0
    assert s.ticks == 1
    assert s.scheduler.pending() == 1
    s.start()
    assert s.scheduler.pending() == 1   # old chain cancelled, not doubled


def test_jump_is_edge_triggered():
    s = make_session()
    s.start()
    assert s.jump_pressed() is True
    assert s.player.vy == JUMP_VY
    frame(s)
    assert s.jump_pressed() is False        # still held (key repeat)
    assert s.player.vy != JUMP_VY
    s.jump_released()
    assert s.jump_pressed() is True
    assert s.player.vy == JUMP_VY


def test_falling_ends_on_ground():
    s = make_session()
    s.start()
    frame(s, 200)
    assert s.state is SessionState.OVER
    assert s.last_message == MSG_GROUND
    assert s.display.screen == GAME_OVER
    assert s.display.message == MSG_GROUND
    assert s.display.score == 0
    assert s.player.y + s.player.height == s.floor


def test_frozen_after_game_over_but_still_ticking():
    s = make_session()
    s.start()
    frame(s, 200)
    xs = [b.x for b in s.buildings]
    ticks = s.ticks
    frame(s, 10)
    assert [b.x for b in s.buildings] == xs
    assert s.ticks == ticks
    assert s.scheduler.pending() == 1
    assert s.jump_pressed() is False


def test_building_crash_keeps_earned_score():
    s = make_session()
    s.start()
    scores = hover(s)
    assert s.last_message == MSG_BUILDING
    assert s.score == 4
    assert s.display.score == 4
    assert scores == sorted(scores)


def test_terminate_is_one_way():
    s = make_session()
    s.start()
    s.terminate("first")
    s.terminate("second")
    assert s.last_message == "first"
    assert s.display.message == "first"
    assert s.state is SessionState.OVER


def test_restart_round_trip():
    s = make_session()
    s.start()
    hover(s)
    assert not s.running

    s.start()
    fresh = make_session()
    fresh.start()
    assert s.score == 0
    assert (s.player.y, s.player.vy) == (fresh.player.y, fresh.player.vy)
    assert [(b.x, b.y, b.passed) for b in s.buildings] == \
           [(b.x, b.y, b.passed) for b in fresh.buildings]
    assert s.display.screen == RUNNING


class ExplodingRenderer(NullRenderer):
    def fill_rect(self, x, y, w, h, color):
        raise RuntimeError("boom")


def test_faulty_frame_does_not_stop_the_loop():
    s = make_session(renderer=ExplodingRenderer())
    s.start()
    frame(s, 5)
    assert s.running
    assert s.scheduler.pending() == 1
    assert s.ticks == 6


def test_invalid_viewport():
    with pytest.raises(ValueError):
        GameSession(0, 540)
    with pytest.raises(ValueError):
        GameSession(960, 540, speed=0)


def test_each_input_source_has_its_own_edge():
    s = make_session()
    s.start()
    assert s.jump_pressed("key") is True
    frame(s, 10)
    vy = s.player.vy
    assert s.jump_pressed("key") is False           # key still held
    assert s.player.vy == vy
    assert s.jump_pressed("pointer") is True        # separate physical press
    assert s.player.vy == JUMP_VY
    s.jump_released("pointer")
    frame(s)
    assert s.jump_pressed("key") is False
    s.jump_released("key")
    assert s.jump_pressed("key") is True


class CountingRenderer(NullRenderer):
    def __init__(self):
        self.rects = 0

    def fill_rect(self, x, y, w, h, color):
        self.rects += 1


def test_buildings_still_drawn_after_contact_and_game_over():
    r = CountingRenderer()
    s = make_session(renderer=r)
    s.start()
    hover(s)
    assert s.last_message == MSG_BUILDING
    xs = [b.x for b in s.buildings]

    r.rects = 0
    frame(s)
    assert r.rects == len(s.buildings)

    r.rects = 0
    frame(s, 5)
    assert r.rects == 5 * len(s.buildings)
    assert [b.x for b in s.buildings] == xs


def test_contact_tick_draws_every_building():
    r = CountingRenderer()
    s = make_session(renderer=r)
    s.start()
    drawn = []
    while s.running:
        if s.player.y > 280 and s.player.vy > 0:
            s.jump_pressed()
            s.jump_released()
        r.rects = 0
        frame(s)
        drawn.append(r.rects)
    assert s.last_message == MSG_BUILDING
    assert drawn[-1] == len(s.buildings)

# src/tests/test_collision.py
from src.skyline.buildings import Building
from src.skyline.collision import evaluate, overlaps_strict
from src.skyline.config import MSG_BUILDING
from src.skyline.player import Player


def make_player(x=100.0, y=100.0, w=50.0, h=40.0) -> Player:
    return Player(x=x, y=y, width=w, height=h, start_y=y)


def test_overlap_on_all_axes_is_contact():
    out = evaluate(make_player(), [Building(120, 80, 90, 200)])
    assert out.crash == MSG_BUILDING
    assert out.passed == 0


def test_touching_edges_do_not_count():
    p = make_player()
    assert not overlaps_strict(p, Building(150, 80, 90, 200))   # left edge on player's right edge
    assert not overlaps_strict(p, Building(10, 80, 90, 200))    # right edge on player's left edge
    assert not overlaps_strict(p, Building(120, 140, 90, 200))  # top on player's bottom
    assert overlaps_strict(p, Building(149.5, 139.5, 90, 200))


def test_pass_scores_once():
    b = Building(0, 300, 90, 1400)     # right edge 90 < player.x 100
    p = make_player()
    first = evaluate(p, [b])
    assert first.passed == 1 and b.passed
    second = evaluate(p, [b])
    assert second.passed == 0


def test_right_edge_on_player_x_not_yet_passed():
    b = Building(10, 300, 90, 1400)    # right edge == player.x
    assert evaluate(make_player(), [b]).passed == 0
    assert not b.passed


def test_scoring_continues_after_contact():
    hit = Building(120, 80, 90, 200)
    also_hit = Building(130, 80, 90, 200)
    behind = Building(-50, 300, 90, 1400)
    out = evaluate(make_player(), [hit, also_hit, behind])
    assert out.crash == MSG_BUILDING
    assert out.passed == 1
    assert behind.passed

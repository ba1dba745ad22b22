# src/skyline/collision.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from .buildings import Building
from .config import MSG_BUILDING
from .player import Player


def overlaps_strict(a, b) -> bool:
    """AABB overlap on float boxes (x, y, width, height). Touching edges do not count."""
    return (
        a.x < b.x + b.width and
        a.x + a.width > b.x and
        a.y < b.y + b.height and
        a.y + a.height > b.y
    )


@dataclass
class TickOutcome:
    passed: int = 0               # buildings cleared this tick
    crash: Optional[str] = None   # crash message, first contact only


def evaluate(player: Player, buildings: Iterable[Building]) -> TickOutcome:
    """One tick of contact + scoring, in pool order.

    After the first contact no more collision tests run, but every building
    still gets its pass check so points earned this tick are kept.
    """
    out = TickOutcome()
    for b in buildings:
        if out.crash is None and overlaps_strict(player, b):
            out.crash = MSG_BUILDING
        if not b.passed and b.right < player.x:
            b.passed = True
            out.passed += 1
    return out

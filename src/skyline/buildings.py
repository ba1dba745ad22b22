# src/skyline/buildings.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import (
    BUILDING_W, BUILDING_H, BUILDING_LAYOUT, POOL_SIZE,
    GAP_MIN_W, GAP_MAX_W, SCROLL_PX_PER_TICK, COLOR_BUILDING
)
from .render import Renderer, Color
from .scaling import proportional_size

logger = logging.getLogger(__name__)


@dataclass
class Building:
    x: float
    y: float
    width: float
    height: float
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    def draw(self, renderer: Renderer, color: Color = COLOR_BUILDING):
        renderer.fill_rect(self.x, self.y, self.width, self.height, color)


class BuildingPool:
    """
    Fixed ring of buildings scrolling left.
    Slots are never reallocated: when the front building leaves the screen
    it is moved behind the last one by advancing the head index.
    """
    def __init__(self, viewport_h: float,
                 layout: Sequence[Tuple[float, float]] = BUILDING_LAYOUT,
                 rng: Optional[random.Random] = None):
        if len(layout) != POOL_SIZE:
            raise ValueError(f"expected {POOL_SIZE} buildings in layout, got {len(layout)}")
        xs = [x for x, _ in layout]
        if xs != sorted(xs):
            raise ValueError("building layout must be sorted by x")

        self.viewport_h = viewport_h
        self.rng = rng if rng is not None else random.Random()
        width = proportional_size(BUILDING_W, viewport_h)
        height = proportional_size(BUILDING_H, viewport_h)
        # x stays as authored, only y follows the viewport
        self._layout: List[Tuple[float, float]] = [
            (x, proportional_size(y, viewport_h)) for x, y in layout
        ]
        self._slots: List[Building] = [Building(x, y, width, height) for x, y in self._layout]
        self._head = 0

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Building]:
        n = len(self._slots)
        for i in range(n):
            yield self._slots[(self._head + i) % n]

    def __getitem__(self, i: int) -> Building:
        n = len(self._slots)
        if not -n <= i < n:
            raise IndexError(i)
        return self._slots[(self._head + i) % n]

    @property
    def front(self) -> Building:
        return self._slots[self._head]

    @property
    def back(self) -> Building:
        return self._slots[(self._head - 1) % len(self._slots)]

    def next_gap(self) -> float:
        return proportional_size(self.rng.uniform(GAP_MIN_W, GAP_MAX_W), self.viewport_h)

    def advance(self, active: bool, speed: float = SCROLL_PX_PER_TICK) -> Optional[Building]:
        """Scroll every building left and recycle the front one if it is off-screen.

        Frozen when inactive. Returns the recycled building, if any.
        """
        if not active:
            return None
        for b in self._slots:
            b.x -= speed

        front = self.front
        if front.right >= 0:
            return None
        front.x = self.back.x + self.next_gap()
        front.passed = False
        self._head = (self._head + 1) % len(self._slots)
        logger.debug("Recycled building to x=%.1f", front.x)
        return front

    def reset_all(self):
        for b, (x, y) in zip(self._slots, self._layout):
            b.x, b.y = x, y
            b.passed = False
        self._head = 0

    def draw(self, renderer: Renderer, color: Color = COLOR_BUILDING):
        for b in self:
            b.draw(renderer, color)

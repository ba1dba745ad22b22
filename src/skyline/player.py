# src/skyline/player.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import pygame

from .config import (
    PLAYER_X, PLAYER_Y, PLAYER_W, PLAYER_H, GRAVITY, JUMP_VY, MSG_GROUND
)
from .render import Renderer
from .scaling import proportional_size


@dataclass
class Player:
    """
    Flying player at a fixed x; only the buildings scroll.
    - y is TOP-based (screen coordinates, grows downward)
    - vx stays 0 for the whole run
    """
    x: float
    y: float
    width: float
    height: float
    start_y: float
    vx: float = 0.0
    vy: float = 0.0
    image: Optional[pygame.Surface] = None

    @classmethod
    def for_viewport(cls, viewport_h: float, image: Optional[pygame.Surface] = None) -> "Player":
        y = proportional_size(PLAYER_Y, viewport_h)
        return cls(
            x=proportional_size(PLAYER_X, viewport_h),
            y=y,
            width=proportional_size(PLAYER_W, viewport_h),
            height=proportional_size(PLAYER_H, viewport_h),
            start_y=y,
            image=image,
        )

    def draw(self, renderer: Renderer):
        renderer.draw_sprite(self.image, self.x, self.y, self.width, self.height)

    def update(self, renderer: Renderer, active: bool, floor: float) -> Optional[str]:
        """Draw, then integrate one tick of gravity.

        Returns the crash message when the player hits the floor, else None.
        """
        self.draw(renderer)
        if not active:
            return None

        crash = None
        self.y += self.vy
        if self.y + self.height + self.vy <= floor:
            self.vy += GRAVITY
        else:
            self.vy = 0.0
            self.y = floor - self.height
            crash = MSG_GROUND

        # Ceiling: pin and push back down, never fatal
        if self.y <= 0:
            self.y = 0.0
            self.vy = GRAVITY
        return crash

    def apply_impulse(self, active: bool) -> bool:
        if not active:
            return False
        self.vy = JUMP_VY
        return True

    def reset(self):
        self.y = self.start_y
        self.vy = 0.0

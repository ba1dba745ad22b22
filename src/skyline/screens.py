# src/skyline/screens.py
from __future__ import annotations
from typing import Optional, Protocol

import pygame

from .config import (
    OVERLAY_FONT, COLOR_FG, COLOR_PANEL, COLOR_BUTTON, COLOR_BUTTON_EDGE
)
from .render import SurfaceRenderer

START, RUNNING, GAME_OVER = "start", "running", "game_over"


class Display(Protocol):
    def show_start(self) -> None: ...
    def show_running(self) -> None: ...
    def show_game_over(self, score: int, message: str) -> None: ...


class HeadlessDisplay:
    """Remembers which screen would be visible. Enough for agents and tests."""

    def __init__(self):
        self.screen: Optional[str] = None
        self.score: Optional[int] = None
        self.message: Optional[str] = None

    def show_start(self):
        self.screen = START

    def show_running(self):
        self.screen = RUNNING
        self.score = None
        self.message = None

    def show_game_over(self, score: int, message: str):
        self.screen = GAME_OVER
        self.score = score
        self.message = message


class ScreenOverlay(HeadlessDisplay):
    """Start and game-over screens drawn on top of the game frame."""

    def __init__(self, width: int, height: int):
        super().__init__()
        btn_w, btn_h = 180, 56
        self.button = pygame.Rect((width - btn_w) // 2, height // 2 + 30, btn_w, btn_h)
        self.width = width
        self.height = height

    def button_hit(self, pos) -> bool:
        return self.screen in (START, GAME_OVER) and self.button.collidepoint(pos)

    def draw(self, renderer: SurfaceRenderer):
        if self.screen == RUNNING or self.screen is None:
            return
        panel = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        panel.fill((*COLOR_PANEL, 170))
        renderer.surface.blit(panel, (0, 0))

        if self.screen == START:
            lines = ["Skyline Flyer", "SPACE or click to fly up, dodge the buildings"]
            label = "Start (Enter)"
        else:
            lines = [self.message or "", f"Score: {self.score}"]
            label = "Try Again (Enter)"

        font = renderer.font(OVERLAY_FONT)
        y = self.height // 2 - 70
        for msg in lines:
            txt = font.render(msg, True, COLOR_FG)
            renderer.surface.blit(txt, (self.width // 2 - txt.get_width() // 2, y))
            y += txt.get_height() + 8

        pygame.draw.rect(renderer.surface, COLOR_BUTTON, self.button, border_radius=10)
        pygame.draw.rect(renderer.surface, COLOR_BUTTON_EDGE, self.button, width=2, border_radius=10)
        txt = font.render(label, True, COLOR_FG)
        renderer.surface.blit(txt, (self.button.centerx - txt.get_width() // 2,
                                    self.button.centery - txt.get_height() // 2))

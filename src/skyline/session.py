# src/skyline/session.py
from __future__ import annotations
import enum
import logging
import random
from typing import Optional, Set

import pygame

from .buildings import BuildingPool
from .collision import evaluate
from .config import (
    SCROLL_PX_PER_TICK, HUD_FONT, HUD_POS, COLOR_FG, COLOR_BUILDING
)
from .player import Player
from .render import Renderer, NullRenderer
from .scheduler import FrameScheduler
from .screens import Display, HeadlessDisplay

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


class GameSession:
    """
    Owns everything mutable about one game: player, building ring, score,
    state and the single outstanding frame handle.
    Only start() and terminate() change the running flag.
    """
    def __init__(self,
                 viewport_w: int,
                 viewport_h: int,
                 scheduler: Optional[FrameScheduler] = None,
                 renderer: Optional[Renderer] = None,
                 display: Optional[Display] = None,
                 sprite: Optional[pygame.Surface] = None,
                 seed: Optional[int] = None,
                 speed: float = SCROLL_PX_PER_TICK):
        if viewport_w <= 0 or viewport_h <= 0:
            raise ValueError(f"viewport must be positive, got {viewport_w}x{viewport_h}")
        if speed <= 0:
            raise ValueError(f"speed must be positive, got {speed}")

        self.viewport_w = viewport_w
        self.viewport_h = viewport_h
        self.floor = float(viewport_h)
        self.speed = speed
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.display = display if display is not None else HeadlessDisplay()
        self.seed = seed
        self.rng = random.Random(seed)

        self.player = Player.for_viewport(viewport_h, image=sprite)
        self.buildings = BuildingPool(viewport_h, rng=self.rng)

        self.state = SessionState.IDLE
        self.score = 0
        self.ticks = 0
        self.last_message: Optional[str] = None
        self._frame_handle: Optional[int] = None
        self._held: Set[str] = set()

        self.display.show_start()

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    # -------------------- Lifecycle --------------------

    def start(self):
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
            self._frame_handle = None

        self.state = SessionState.RUNNING
        self.score = 0
        self.ticks = 0
        self.last_message = None
        self._held.clear()
        self.player.reset()
        self.buildings.reset_all()
        self.display.show_running()
        logger.info("Session started (seed=%s)", self.seed)

        self.tick()

    def terminate(self, message: str):
        if not self.running:
            return
        self.state = SessionState.OVER
        self.last_message = message
        logger.info("Game over after %d ticks: %s (score=%d)", self.ticks, message, self.score)
        self.display.show_game_over(self.score, message)

    # -------------------- Input --------------------

    def jump_pressed(self, source: str = "key") -> bool:
        """Impulse on the press edge of each input source (key, pointer, ...).

        A source that is already held (key repeat) does nothing until released.
        """
        if source in self._held:
            return False
        self._held.add(source)
        return self.player.apply_impulse(self.running)

    def jump_released(self, source: str = "key"):
        self._held.discard(source)

    # -------------------- Frame --------------------

    def tick(self):
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
        self._frame_handle = self.scheduler.request(self.tick)

        try:
            self._step()
        except Exception:
            logger.exception("Tick %d failed; skipping frame", self.ticks)

    def _step(self):
        r = self.renderer
        r.clear()

        crash = self.player.update(r, self.running, self.floor)
        if crash is not None:
            self.terminate(crash)

        if self.running:
            self.ticks += 1
            self.buildings.advance(True, self.speed)
            outcome = evaluate(self.player, self.buildings)
            self.score += outcome.passed
            if outcome.crash is not None:
                self.terminate(outcome.crash)

        self.buildings.draw(r, COLOR_BUILDING)
        r.draw_text(f"Score: {self.score}", HUD_POS[0], HUD_POS[1], HUD_FONT, COLOR_FG)

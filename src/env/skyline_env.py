# src/env/skyline_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.skyline.config import WIDTH, HEIGHT, FPS, CAPTION
from src.skyline.render import NullRenderer, SurfaceRenderer, player_sprite
from src.skyline.scheduler import FrameScheduler
from src.skyline.screens import HeadlessDisplay
from src.skyline.session import GameSession
from src.env.observations import build_observation, OBS_SIZE


class SkylineEnv(gym.Env):
    """
    Skyline Flyer Gymnasium environment (vector observations).
    - One simulation frame == one game tick (the game has no dt).
    - Agent acts every `frame_skip` frames (default 4).
    - Observation: shape (6,), float32, see build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 viewport: tuple = (WIDTH, HEIGHT),
                 max_decisions: Optional[int] = 2000):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.viewport = (int(viewport[0]), int(viewport[1]))
        self.max_decisions = max_decisions

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.session: Optional[GameSession] = None
        self.scheduler: Optional[FrameScheduler] = None
        self.display = HeadlessDisplay()
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self._canvas: Optional[pygame.Surface] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Course spacing follows the env RNG so seeded resets are reproducible
        self.current_seed = int(self.np_random.integers(0, 2**31 - 1))

        renderer = NullRenderer()
        sprite = None
        if self.render_mode is not None:
            self._canvas = pygame.Surface(self.viewport)
            renderer = SurfaceRenderer(self._canvas)
            sprite = player_sprite(self.viewport[1])

        self.scheduler = FrameScheduler()
        self.display = HeadlessDisplay()
        self.session = GameSession(
            self.viewport[0], self.viewport[1],
            scheduler=self.scheduler,
            renderer=renderer,
            display=self.display,
            sprite=sprite,
            seed=self.current_seed,
        )
        self.session.start()
        self.timestep = 0

        obs = build_observation(self.session)
        info = {"seed": self.current_seed, "score": 0}
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None and self.scheduler is not None

        s = self.session
        score_before = s.score

        # Jump is an edge: press now, release right away
        if action == 1:
            s.jump_pressed()
            s.jump_released()

        for _ in range(self.frame_skip):
            self.scheduler.run_pending()
            if not s.running:
                break

        passed = s.score - score_before
        self.timestep += 1
        terminated = not s.running
        truncated = (self.max_decisions is not None) and (self.timestep >= self.max_decisions) and not terminated

        # Reward: small bonus for surviving, +1 per building, -1 on crash
        reward = 0.1 + float(passed)
        if terminated:
            reward = -1.0 + float(passed)

        obs = build_observation(s)
        info = {
            "score": s.score,
            "ticks": s.ticks,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": s.last_message,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self._canvas is None:
            return None

        if self.render_mode == "rgb_array":
            # Return an (H, W, 3) uint8 array
            arr = pygame.surfarray.array3d(self._canvas)  # (W, H, 3)
            return np.transpose(arr, (1, 0, 2))

        if self.screen is None:
            pygame.init()
            self.screen = pygame.display.set_mode(self.viewport)
            pygame.display.set_caption(f"{CAPTION} - Gym Env")
            self.clock = pygame.time.Clock()

        # Pump minimal event queue so the OS doesn't think we're hung
        pygame.event.pump()
        self.screen.blit(self._canvas, (0, 0))
        pygame.display.flip()
        if self.clock is not None:
            self.clock.tick(self.metadata.get("render_fps", FPS))
        return None

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None

# src/skyline/render.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple

import pygame

from .config import COLOR_BG, COLOR_ACCENT, SPRITE_PATH, PLAYER_W, PLAYER_H
from .scaling import proportional_size

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
FontSpec = Tuple[str, int]   # (system font name, point size)


class Renderer(Protocol):
    """The four drawing primitives the game core needs."""

    def clear(self) -> None: ...

    def draw_sprite(self, image: Optional[pygame.Surface],
                    x: float, y: float, w: float, h: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: ...

    def draw_text(self, text: str, x: float, y: float, font: FontSpec, color: Color) -> None: ...


class NullRenderer:
    """Draws nothing. Used for headless simulation."""

    def clear(self) -> None:
        pass

    def draw_sprite(self, image, x, y, w, h) -> None:
        pass

    def fill_rect(self, x, y, w, h, color) -> None:
        pass

    def draw_text(self, text, x, y, font, color) -> None:
        pass


class SurfaceRenderer:
    """Renderer backed by a pygame Surface (the window or an offscreen buffer)."""

    def __init__(self, surface: pygame.Surface, background: Color = COLOR_BG):
        self.surface = surface
        self.background = background
        self._fonts: Dict[FontSpec, pygame.font.Font] = {}
        self._scaled: Dict[Tuple[int, int, int], pygame.Surface] = {}

    def clear(self) -> None:
        self.surface.fill(self.background)

    def draw_sprite(self, image, x, y, w, h) -> None:
        if image is None:
            return
        size = (int(w), int(h))
        # cache keyed on the source surface so a resized sprite is built once
        key = (id(image), size[0], size[1])
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.scale(image, size) if image.get_size() != size else image
            self._scaled[key] = scaled
        self.surface.blit(scaled, (int(x), int(y)))

    def fill_rect(self, x, y, w, h, color) -> None:
        pygame.draw.rect(self.surface, color, pygame.Rect(int(x), int(y), int(w), int(h)))

    def draw_text(self, text, x, y, font, color) -> None:
        self.surface.blit(self.font(font).render(text, True, color), (int(x), int(y)))

    def font(self, spec: FontSpec) -> pygame.font.Font:
        f = self._fonts.get(spec)
        if f is None:
            if not pygame.font.get_init():
                pygame.font.init()
            f = pygame.font.SysFont(*spec)
            self._fonts[spec] = f
        return f


def load_sprite(path: Path) -> Optional[pygame.Surface]:
    """Load an image, or return None (drawn as nothing) if it can't be read."""
    try:
        image = pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError) as e:
        logger.warning("Could not load sprite '%s': %s", path, e)
        return None
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def player_sprite(viewport_h: float, path: Path = SPRITE_PATH) -> pygame.Surface:
    """The player image, or a flat accent-coloured block sized for the viewport."""
    sprite = load_sprite(path)
    if sprite is not None:
        return sprite
    logger.warning("Using placeholder sprite")
    size = (int(proportional_size(PLAYER_W, viewport_h)), int(proportional_size(PLAYER_H, viewport_h)))
    sprite = pygame.Surface(size)
    sprite.fill(COLOR_ACCENT)
    return sprite

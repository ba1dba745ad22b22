# src/skyline/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_RETURN, K_r
from .config import (
    WIDTH, HEIGHT, FPS, CAPTION
)
from .render import SurfaceRenderer, player_sprite
from .scheduler import FrameScheduler
from .screens import ScreenOverlay
from .session import GameSession


def parse_args(argv=None):
    p = argparse.ArgumentParser(description=CAPTION)
    p.add_argument("--width", type=int, default=WIDTH, help="Window width in px.")
    p.add_argument("--height", type=int, default=HEIGHT,
                   help="Window height in px. Below 500 every size shrinks proportionally.")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for building spacing. Omit for a different course each launch.")
    p.add_argument("--fps", type=int, default=FPS)
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption(CAPTION)
    screen = pygame.display.set_mode((args.width, args.height))
    clock = pygame.time.Clock()

    renderer = SurfaceRenderer(screen)
    overlay = ScreenOverlay(args.width, args.height)
    scheduler = FrameScheduler()
    session = GameSession(
        args.width, args.height,
        scheduler=scheduler,
        renderer=renderer,
        display=overlay,
        sprite=player_sprite(args.height),
        seed=args.seed,
    )

    while True:
        clock.tick(args.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    session.jump_pressed()
                if event.key in (K_RETURN, K_r) and not session.running:
                    session.start()
            if event.type == pygame.KEYUP and event.key == K_SPACE:
                session.jump_released()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                # left click doubles as the touch "jump" when playing
                if session.running:
                    session.jump_pressed("pointer")
                elif overlay.button_hit(event.pos):
                    session.start()
            if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                session.jump_released("pointer")

        if scheduler.run_pending() == 0:
            renderer.clear()   # nothing scheduled before the first start

        overlay.draw(renderer)
        pygame.display.flip()


if __name__ == "__main__":
    run()

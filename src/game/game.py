# src/game/game.py
# command is python -m src.game.game
import argparse
import logging
import sys
from pathlib import Path

import pygame
from pygame import K_SPACE, K_ESCAPE, K_r

from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT, ASSETS_DIR, BEST_SCORE_PATH
from .audio import SoundBank
from .render import Renderer
from .scoreboard import BestScoreStore
from .simulation import Simulation, GamePhase

logger = logging.getLogger(__name__)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Spawn seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--assets", type=Path, default=ASSETS_DIR,
                   help="Folder holding beard.png, coin.png, jump.mp3, collision.mp3")
    p.add_argument("--best-file", type=Path, default=BEST_SCORE_PATH)
    p.add_argument("--log-level", default="INFO")
    return p.parse_args()


def handle_event(sim: Simulation, event, restart_rect: pygame.Rect, size=None) -> bool:
    """
    Map one pygame event onto the simulation. Returns False to quit.
    `size` is the window size used to place finger events (normalised 0..1);
    it defaults to the current display surface.
    """
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == K_ESCAPE:
            return False
        if event.key == K_SPACE:
            sim.press()
        elif event.key == K_r and sim.phase is GamePhase.GAME_OVER:
            sim.reset_game()
    elif event.type == pygame.KEYUP and event.key == K_SPACE:
        sim.release()
    elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and getattr(event, "touch", False):
        # emulated from a finger event, already handled below
        pass
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        if sim.phase is GamePhase.GAME_OVER and restart_rect.collidepoint(event.pos):
            sim.reset_game()
        else:
            sim.press()
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        sim.release()
    elif event.type == pygame.FINGERDOWN:
        if sim.phase is GamePhase.GAME_OVER and restart_rect.collidepoint(_finger_pos(event, size)):
            sim.reset_game()
        else:
            sim.press()
    elif event.type == pygame.FINGERUP:
        sim.release()
    elif event.type == pygame.VIDEORESIZE:
        sim.resize(event.w, event.h)
    return True


def _finger_pos(event, size=None):
    if size is None:
        surf = pygame.display.get_surface()
        size = surf.get_size() if surf is not None else (WIDTH, HEIGHT)
    w, h = size
    return int(event.x * w), int(event.y * h)


def run():
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Beard Dash")
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    sounds = SoundBank(args.assets)
    store = BestScoreStore(args.best_file)
    best = store.load()

    def on_game_over(score: int):
        nonlocal best
        best = store.record(score)

    sim = Simulation(WIDTH, HEIGHT, seed=launch_seed,
                     on_jump=sounds.play_jump, on_hit=sounds.play_hit,
                     on_game_over=on_game_over)
    renderer = Renderer(args.assets)
    if renderer.sprite_aspect is not None:
        sim.set_sprite_aspect(renderer.sprite_aspect)
    logger.info("seed=%s best=%d", sim.seed, best)

    while True:
        clock.tick(FPS)
        for event in pygame.event.get():
            if not handle_event(sim, event, renderer.restart_rect):
                pygame.quit(); sys.exit()

        sim.step()
        renderer.draw(screen, sim, best)
        pygame.display.flip()


if __name__ == "__main__":
    run()

# src/game/render.py
from __future__ import annotations
import logging
import math
from pathlib import Path
from typing import Optional, Tuple

import pygame

from .config import (
    ASSETS_DIR, PLAYER_SPRITE, COIN_SPRITE, SKY_STEP,
    COLOR_GROUND, COLOR_FG, COLOR_ACCENT, COLOR_PILLAR, COLOR_COIN, COLOR_DANGER, COLOR_PANEL,
)
from .simulation import Simulation, GamePhase

logger = logging.getLogger(__name__)


class SkyCycle:
    """Day/night background: a slow sine sweep over grey-blue tones."""

    def __init__(self):
        self.t = 0.0

    def advance(self):
        self.t += SKY_STEP
        if self.t > math.pi * 2:
            self.t = 0.0

    def color(self) -> Tuple[int, int, int]:
        v = math.floor(128 + math.sin(self.t) * 100)
        return (v, min(255, v + 20), min(255, v + 30))


def load_sprite(path: Path) -> Optional[pygame.Surface]:
    if not path.exists():
        logger.info("sprite %s not found, drawing rects", path)
        return None
    try:
        img = pygame.image.load(str(path))
    except pygame.error as e:
        logger.warning("could not load %s: %s", path, e)
        return None
    if pygame.display.get_surface() is not None:
        img = img.convert_alpha()
    return img


class Renderer:
    """Reads the simulation once per frame; never mutates it."""

    def __init__(self, assets_dir: Path = ASSETS_DIR):
        self.player_img = load_sprite(Path(assets_dir) / PLAYER_SPRITE)
        self.coin_img = load_sprite(Path(assets_dir) / COIN_SPRITE)
        self.sky = SkyCycle()
        self.font = pygame.font.SysFont("arial", 20)
        self.big_font = pygame.font.SysFont("arial", 40)
        self.restart_rect = pygame.Rect(0, 0, 180, 56)

    @property
    def sprite_aspect(self) -> Optional[float]:
        if self.player_img is None:
            return None
        w, h = self.player_img.get_size()
        return w / h if h else None

    def _blit_scaled(self, surf: pygame.Surface, img, rect: pygame.Rect, fallback_color):
        if img is None:
            pygame.draw.rect(surf, fallback_color, rect)
            return
        surf.blit(pygame.transform.smoothscale(img, (max(1, rect.w), max(1, rect.h))), rect.topleft)

    def draw(self, surf: pygame.Surface, sim: Simulation, best: int = 0):
        if sim.state.running:
            self.sky.advance()
        surf.fill(self.sky.color())

        W, H = surf.get_size()
        ground = int(sim.ground_y)
        pygame.draw.rect(surf, COLOR_GROUND, (0, ground, W, H - ground))

        self._blit_scaled(surf, self.player_img, sim.player.rect, COLOR_ACCENT)
        # Pillars reuse the player sprite
        for p in sim.pillars:
            self._blit_scaled(surf, self.player_img, p.rect, COLOR_PILLAR)
        for c in sim.visible_coins():
            if self.coin_img is None:
                pygame.draw.circle(surf, COLOR_COIN, (int(c.x), int(c.y)), int(c.r))
            else:
                self._blit_scaled(surf, self.coin_img, c.rect, COLOR_COIN)

        surf.blit(self.font.render(f"Lives: {sim.player.lives}", True, COLOR_FG), (10, 28))
        hud = f"Score: {sim.score}   Best: {best}"
        txt = self.font.render(hud, True, COLOR_FG)
        surf.blit(txt, (W - txt.get_width() - 12, 28))

        if sim.phase is GamePhase.NOT_STARTED:
            self._panel(surf, ["Beard Dash", "Tap / click / SPACE to start"])
        elif sim.phase is GamePhase.GAME_OVER:
            self._panel(surf, [f"Game Over - Score: {sim.score}", f"Best: {best}"])
            self.restart_rect.center = (W // 2, H // 2 + 60)
            pygame.draw.rect(surf, (40, 60, 90), self.restart_rect, border_radius=10)
            pygame.draw.rect(surf, (90, 130, 180), self.restart_rect, width=2, border_radius=10)
            btn = self.font.render("Restart (R)", True, COLOR_FG)
            surf.blit(btn, (self.restart_rect.centerx - btn.get_width() // 2,
                            self.restart_rect.centery - btn.get_height() // 2))

    def _panel(self, surf: pygame.Surface, lines):
        W, H = surf.get_size()
        panel = pygame.Surface((420, 110), pygame.SRCALPHA)
        panel.fill((*COLOR_PANEL, 180))
        surf.blit(panel, ((W - 420) // 2, H // 2 - 90))
        for i, msg in enumerate(lines):
            font = self.big_font if i == 0 else self.font
            color = COLOR_DANGER if (i == 0 and "Over" in msg) else COLOR_FG
            t = font.render(msg, True, color)
            surf.blit(t, (W // 2 - t.get_width() // 2, H // 2 - 80 + i * 52))

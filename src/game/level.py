# src/game/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple
import pygame
from .config import (
    PILLAR_MIN_H, PILLAR_H_RANGE, PILLAR_MIN_W, PILLAR_W_RANGE,
    SPAWN_OFFSET_X, OFFSCREEN_MARGIN,
    COIN_CHANCE, COIN_RADIUS, COIN_LIFT,
)

logger = logging.getLogger(__name__)


@dataclass
class Pillar:
    x: float
    y: float
    w: float
    h: float
    passed: bool = False

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))

    def offscreen(self) -> bool:
        return self.x + self.w < -OFFSCREEN_MARGIN


@dataclass
class Coin:
    """Bonus pickup; (x, y) is the centre."""
    x: float
    y: float
    r: float = COIN_RADIUS
    collected: bool = False

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x - self.r), int(self.y - self.r),
                           int(self.r * 2), int(self.r * 2))

    def offscreen(self) -> bool:
        return self.x + self.r < -OFFSCREEN_MARGIN


def hits_pillar(player, p: Pillar) -> bool:
    """Strict AABB overlap: touching edges do not count."""
    return (player.x < p.x + p.w and player.x + player.w > p.x and
            player.y < p.y + p.h and player.y + player.h > p.y)


def hits_coin(player, c: Coin) -> bool:
    """Circle approximated by its bounding square."""
    return (player.x < c.x + c.r and player.x + player.w > c.x - c.r and
            player.y < c.y + c.r and player.y + player.h > c.y - c.r)


class Spawner:
    """
    Procedural pillar/coin generator.
    Every random draw goes through self.rng so a seed replays the same run.
    """
    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng

    def spawn(self, viewport_w: float, ground_y: float) -> Tuple[Pillar, Optional[Coin]]:
        height = self.rng.random() * PILLAR_H_RANGE + PILLAR_MIN_H
        width = self.rng.random() * PILLAR_W_RANGE + PILLAR_MIN_W
        pillar = Pillar(x=viewport_w + SPAWN_OFFSET_X, y=ground_y - height, w=width, h=height)

        coin = None
        if self.rng.random() < COIN_CHANCE:
            coin = Coin(x=pillar.x + width / 2, y=pillar.y - COIN_LIFT)

        logger.debug("spawned pillar w=%.1f h=%.1f coin=%s", width, height, coin is not None)
        return pillar, coin

    def maybe_spawn(self, timer: int, interval: int,
                    viewport_w: float, ground_y: float) -> Optional[Tuple[Pillar, Optional[Coin]]]:
        """Spawn only once the tick counter exceeds the interval; caller resets the counter."""
        if timer > interval:
            return self.spawn(viewport_w, ground_y)
        return None

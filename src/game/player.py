# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional
import pygame
from .config import (
    GRAVITY, JUMP_IMPULSE, JUMP_SUSTAIN, MAX_JUMPS, START_LIVES,
    PLAYER_PLACEHOLDER_W, PLAYER_PLACEHOLDER_H,
)

@dataclass
class Player:
    """
    Runner with a double jump:
    - vy > 0 means falling, vy < 0 means rising
    - jumps_left is restored to MAX_JUMPS on every ground contact
    """
    x: float
    y: float
    w: float = PLAYER_PLACEHOLDER_W
    h: float = PLAYER_PLACEHOLDER_H
    vy: float = 0.0
    gravity: float = GRAVITY
    jump_strength: float = JUMP_IMPULSE
    jumps_left: int = MAX_JUMPS
    lives: int = START_LIVES
    on_jump: Optional[Callable[[], None]] = None

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))

    def apply_gravity(self, ground_y: float):
        """Integrate one tick of gravity, then clamp to the ground line."""
        self.vy += self.gravity
        self.y += self.vy
        if self.y + self.h > ground_y:
            self.y = ground_y - self.h
            self.vy = 0.0
            self.jumps_left = MAX_JUMPS

    def jump(self) -> bool:
        """Spend one jump from the budget. Returns True if performed."""
        if self.jumps_left <= 0:
            return False
        self.vy = self.jump_strength
        self.jumps_left -= 1
        if self.on_jump is not None:
            self.on_jump()
        return True

    def sustain_jump(self, is_held: bool):
        # Bias added while held and rising: the climb stops sooner, a tap peaks higher
        if is_held and self.vy < 0:
            self.vy += JUMP_SUSTAIN

    def fit_to_viewport(self, height: float, ground_y: float, aspect: float,
                        h_ratio: float, w_shrink: float, gap: float):
        """Resize from the sprite aspect (w/h) and rest just above the ground."""
        self.h = height * h_ratio
        self.w = self.h * aspect * w_shrink
        self.y = ground_y - self.h - gap

    def reset(self, y: float):
        self.y = y
        self.vy = 0.0
        self.jumps_left = MAX_JUMPS
        self.lives = START_LIVES

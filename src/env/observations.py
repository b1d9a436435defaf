# src/env/observations.py
from __future__ import annotations
from typing import List, Optional, Tuple
import numpy as np

from src.game.config import (
    JUMP_IMPULSE, MAX_JUMPS, START_LIVES,
    PILLAR_MIN_W, PILLAR_W_RANGE, PILLAR_MIN_H, PILLAR_H_RANGE,
)

OBS_SIZE = 13
VY_SCALE = abs(JUMP_IMPULSE) * 1.5   # falls after a double jump exceed the jump impulse
SPEED_SCALE = 20.0
MAX_PILLAR_W = PILLAR_MIN_W + PILLAR_W_RANGE
MAX_PILLAR_H = PILLAR_MIN_H + PILLAR_H_RANGE

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0] + [0.0, 0.0, 0.0] * 2 + [0.0, -1.0], dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def _pillars_ahead(sim, n: int = 2) -> List:
    """Pillars whose right edge hasn't passed the player's left edge, nearest first."""
    px = sim.player.x
    ahead = [p for p in sim.pillars if p.x + p.w >= px]
    ahead.sort(key=lambda p: p.x)
    return ahead[:n]


def _next_coin(sim) -> Optional[object]:
    px = sim.player.x
    coins = [c for c in sim.visible_coins() if c.x + c.r >= px]
    return min(coins, key=lambda c: c.x) if coins else None


def _pillar_features(sim, p) -> Tuple[float, float, float]:
    # sentinel: nothing ahead -> far away, zero size
    if p is None:
        return 1.0, 0.0, 0.0
    front = sim.player.x + sim.player.w
    dx = _clamp((p.x - front) / sim.width, 0.0, 1.0)
    return dx, _clamp(p.w / MAX_PILLAR_W, 0.0, 1.0), _clamp(p.h / MAX_PILLAR_H, 0.0, 1.0)


def build_observation(sim) -> np.ndarray:
    """
    Returns a fixed (13,) float32 vector:
      [ y_norm, vy_norm, jumps_norm, lives_norm, speed_norm,
        dx@p1, w@p1, h@p1,
        dx@p2, w@p2, h@p2,
        coin_dx, coin_dy ]
    - y_norm in [0,1] (1 = standing on the ground)
    - vy_norm in [-1,1]
    - dx normalized by viewport width; sentinel dx=1.0 when nothing is ahead
    - coin_dy in [-1,1], positive when the coin is below the player's top
    """
    pl = sim.player
    y_norm = _clamp(pl.y / max(1.0, sim.ground_y - pl.h), 0.0, 1.0)
    vy_norm = _clamp(pl.vy / VY_SCALE, -1.0, 1.0)
    feats: List[float] = [
        y_norm,
        vy_norm,
        _clamp(pl.jumps_left / MAX_JUMPS, 0.0, 1.0),
        _clamp(pl.lives / START_LIVES, 0.0, 1.0),
        _clamp(sim.state.speed / SPEED_SCALE, 0.0, 1.0),
    ]

    ahead = _pillars_ahead(sim)
    for i in range(2):
        feats.extend(_pillar_features(sim, ahead[i] if i < len(ahead) else None))

    coin = _next_coin(sim)
    if coin is None:
        feats.extend([1.0, 0.0])
    else:
        feats.append(_clamp((coin.x - (pl.x + pl.w)) / sim.width, 0.0, 1.0))
        feats.append(_clamp((coin.y - pl.y) / sim.height, -1.0, 1.0))

    return np.asarray(feats, dtype=np.float32)

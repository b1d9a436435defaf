# src/game/simulation.py
"""
Headless core of the runner: physics, spawning, collisions, scoring and the
game phase. Rendering, sound and storage hang off the on_* listeners and
never mutate the simulation.

Typical driver loop (one call per display frame):

    sim = Simulation(width, height, seed=123)
    sim.start_if_needed()
    while True:
        sim.step(held)
        draw(sim)
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .config import (
    WIDTH, HEIGHT, GROUND_RATIO,
    PLAYER_X_RATIO, PLAYER_START_Y_RATIO, PLAYER_H_RATIO, PLAYER_W_SHRINK, PLAYER_GROUND_GAP,
    START_SPEED, SPEED_RAMP, SPAWN_INTERVAL,
    PASS_POINTS, COIN_POINTS,
)
from .level import Spawner, Pillar, Coin, hits_pillar, hits_coin
from .player import Player

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class WorldState:
    score: int = 0
    speed: float = START_SPEED
    spawn_timer: int = 0
    spawn_interval: int = SPAWN_INTERVAL
    phase: GamePhase = GamePhase.NOT_STARTED

    @property
    def running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    @property
    def started(self) -> bool:
        return self.phase is not GamePhase.NOT_STARTED


class Simulation:
    """
    Owns the player, the world state and both entity streams.

    Listeners (on_jump, on_hit, on_game_over) are fire-and-forget: an exception
    raised by one is logged and the tick carries on.
    """
    def __init__(self,
                 width: float = WIDTH,
                 height: float = HEIGHT,
                 *,
                 seed: int | None = None,
                 rng: random.Random | None = None,
                 speed_ramp: float = SPEED_RAMP,
                 spawn_interval: int = SPAWN_INTERVAL,
                 on_jump: Optional[Callable[[], None]] = None,
                 on_hit: Optional[Callable[[], None]] = None,
                 on_game_over: Optional[Callable[[int], None]] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        self.speed_ramp = float(speed_ramp)
        self.spawner = Spawner(seed, rng=rng)
        self.state = WorldState(spawn_interval=int(spawn_interval))
        self.player = Player(x=self.width * PLAYER_X_RATIO, y=self.height * PLAYER_START_Y_RATIO)
        self.player.on_jump = lambda: self._notify(self.on_jump)
        self.pillars: List[Pillar] = []
        self.coins: List[Coin] = []
        self.sprite_aspect: Optional[float] = None
        self.jump_held = False

        self.on_jump = on_jump
        self.on_hit = on_hit
        self.on_game_over = on_game_over

    # -------------------- Viewport --------------------

    @property
    def ground_y(self) -> float:
        return self.height * GROUND_RATIO

    @property
    def seed(self) -> int | None:
        return self.spawner.seed

    def resize(self, width: float, height: float):
        """Viewport changed: ground moves with it, player is refit if the sprite is known."""
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)
        self._fit_player()

    def set_sprite_aspect(self, aspect: float):
        """Sprite loaded: aspect is its width / height."""
        if aspect <= 0:
            raise ValueError(f"sprite aspect must be positive, got {aspect}")
        self.sprite_aspect = float(aspect)
        self._fit_player()

    def _fit_player(self):
        if self.sprite_aspect is None:
            return
        self.player.fit_to_viewport(self.height, self.ground_y, self.sprite_aspect,
                                    PLAYER_H_RATIO, PLAYER_W_SHRINK, PLAYER_GROUND_GAP)

    # -------------------- Input --------------------

    def start_if_needed(self) -> bool:
        """First input of the session. Returns True if it started the run."""
        if self.state.phase is not GamePhase.NOT_STARTED:
            return False
        self.state.phase = GamePhase.RUNNING
        logger.info("run started (seed=%s)", self.seed)
        return True

    def jump(self) -> bool:
        if not self.state.running:
            return False
        return self.player.jump()

    def set_jump_held(self, held: bool):
        self.jump_held = bool(held)

    def press(self) -> bool:
        """Tap / click / space: the first press starts the run, later ones jump."""
        self.jump_held = True
        if self.start_if_needed():
            return False
        return self.jump()

    def release(self):
        self.jump_held = False

    def reset_game(self):
        self.pillars = []
        self.coins = []
        self.state.spawn_timer = 0
        self.state.score = 0
        self.state.speed = START_SPEED
        self.player.reset(self.height * PLAYER_START_Y_RATIO)
        self.state.phase = GamePhase.RUNNING
        logger.info("run reset (seed=%s)", self.seed)

    # -------------------- Update --------------------

    def step(self, held: Optional[bool] = None):
        """One display frame: jump sustain (always) then the gated tick."""
        if held is not None:
            self.jump_held = bool(held)
        self.sustain_jump()
        self.tick()

    def sustain_jump(self):
        self.player.sustain_jump(self.jump_held)

    def tick(self):
        if not self.state.running:
            return

        st = self.state
        self.player.apply_gravity(self.ground_y)

        # Speed curve (gradual increase)
        st.speed += self.speed_ramp

        st.spawn_timer += 1
        spawned = self.spawner.maybe_spawn(st.spawn_timer, st.spawn_interval, self.width, self.ground_y)
        if spawned is not None:
            pillar, coin = spawned
            self.pillars.append(pillar)
            if coin is not None:
                self.coins.append(coin)
            st.spawn_timer = 0

        self._update_pillars()
        self._update_coins()

        # Reported after the full pass so coins taken this tick are included
        if st.phase is GamePhase.GAME_OVER:
            logger.info("game over, score=%d", st.score)
            self._notify(self.on_game_over, st.score)

    def _update_pillars(self):
        player = self.player
        # Reverse order so removals don't shift unvisited entries
        for i in range(len(self.pillars) - 1, -1, -1):
            p = self.pillars[i]
            p.x -= self.state.speed

            if not p.passed and p.x + p.w < player.x:
                p.passed = True
                self.state.score += PASS_POINTS

            if p.offscreen():
                del self.pillars[i]
                continue

            if hits_pillar(player, p):
                del self.pillars[i]
                self._on_pillar_hit()

    def _on_pillar_hit(self):
        self._notify(self.on_hit)
        self.player.lives = max(0, self.player.lives - 1)
        logger.debug("hit, lives=%d", self.player.lives)
        if self.player.lives == 0:
            self.state.phase = GamePhase.GAME_OVER

    def _update_coins(self):
        player = self.player
        for i in range(len(self.coins) - 1, -1, -1):
            c = self.coins[i]
            c.x -= self.state.speed
            if not c.collected and hits_coin(player, c):
                c.collected = True
                self.state.score += COIN_POINTS
            if c.offscreen():
                del self.coins[i]

    # -------------------- Read-only views --------------------

    def visible_coins(self) -> List[Coin]:
        return [c for c in self.coins if not c.collected]

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def _notify(self, listener, *args):
        if listener is None:
            return
        try:
            listener(*args)
        except Exception:
            logger.warning("listener %r failed", listener, exc_info=True)

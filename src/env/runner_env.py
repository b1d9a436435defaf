# src/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS
from src.game.simulation import Simulation, GamePhase
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH


class RunnerEnv(gym.Env):
    """
    Beard Dash Gymnasium environment (vector observations).
    - Simulation ticks once per frame at 60 Hz (internal).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Actions: 0 = release, 1 = press/hold (jumps on the rising edge; holding adds the
      sustain bias while rising, so a quick release gives the full hop).
    - Observation: shape (13,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Invalid render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.sim_fps = FPS

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = sim_fps / frame_skip
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        self.sim: Optional[Simulation] = None
        self.timestep: int = 0
        self.prev_action: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Without an explicit seed, derive one from np_random so runs stay reproducible
        if seed is not None:
            spawn_seed = int(seed)
        else:
            spawn_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.sim = Simulation(WIDTH, HEIGHT, seed=spawn_seed)
        self.sim.start_if_needed()
        self.timestep = 0
        self.prev_action = 0
        self.current_seed = spawn_seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0, "lives": self.sim.player.lives}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() before step()"
        action = int(action)
        sim = self.sim

        if action == 1 and self.prev_action == 0:
            sim.jump()
        self.prev_action = action

        score_before = sim.score
        lives_before = sim.player.lives
        for _ in range(self.frame_skip):
            sim.step(held=(action == 1))
            if sim.phase is GamePhase.GAME_OVER:
                break

        # Reward: points gained minus lives lost during this decision
        reward = float(sim.score - score_before) - float(lives_before - sim.player.lives)

        self.timestep += 1
        terminated = sim.phase is GamePhase.GAME_OVER
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "score": sim.score,
            "lives": sim.player.lives,
            "speed": sim.state.speed,
            "grounded": sim.player.y + sim.player.h >= sim.ground_y,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            # Imported lazily so headless training never touches fonts or images
            from src.game.render import Renderer
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Beard Dash - Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            # Physics keeps the placeholder size so rendering never changes a rollout
            self.renderer = Renderer()

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()

        self.renderer.draw(self.screen, self.sim)

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata.get("render_fps", FPS))
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None

"""
Replay tool for RunnerEnv — quick command cheat sheet

# Typical usage (run from REPO ROOT so `src/...` imports work)

# Replay a HEURISTIC episode by seed (uses experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --frame-skip 4

# Controls during replay
SPACE = pause/resume
R     = restart episode
ESC   = quit

# Notes
- Deterministic: same seed, frame_skip and action sequence reproduce the original run.
- With --trace the meta sidecar is not read; pass --frame-skip if it differs from 4.
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pygame

from src.env.runner_env import RunnerEnv

logger = logging.getLogger(__name__)

DEFAULT_OUT_DIR = "experiments/runs"


def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p


def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta


def _draw_overlay(env: RunnerEnv, step_idx: int, action: Optional[int]):
    surf = pygame.display.get_surface()
    if surf is None or env.sim is None:
        return
    font = pygame.font.SysFont("jetbrainsmono", 16)
    obs = env._get_obs()
    label = "-" if action is None else ("PRESS" if action == 1 else "RELEASE")
    lines = [
        f"Step={step_idx}  Action={label}",
        f"Speed={env.sim.state.speed:.2f}  next dx={obs[5]:.2f}  jumps={env.sim.player.jumps_left}",
    ]
    panel = pygame.Surface((360, 20 * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (12, 56))
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (20, 62 + i * 20))
    pygame.display.flip()


def replay_episode(seed: int, actions: np.ndarray, frame_skip: int):
    env = RunnerEnv(render_mode="human", frame_skip=frame_skip)
    env.reset(seed=seed)
    env.render()

    paused = False
    step_idx = 0
    clock = pygame.time.Clock()
    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused:
                env.render()
                _draw_overlay(env, step_idx, None)
                clock.tick(30)
                continue

            action = int(actions[step_idx])
            _, _, term, trunc, info = env.step(action)
            _draw_overlay(env, step_idx, action)
            step_idx += 1

            if term or trunc:
                logger.info("episode ended at step %d, score=%d", step_idx, info["score"])
                pygame.time.delay(600)
                break
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser(description="Replay a recorded RunnerEnv episode.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / heuristic")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR)
    ap.add_argument("--frame-skip", type=int, default=-1,
                    help="Override frame_skip. If <0, use meta or default=4")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    out_dir = Path(args.out_dir)
    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        if args.seed is None:
            # <seed>_actions.npy
            args.seed = int(trace_path.stem.split("_")[0])
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    fs = args.frame_skip
    if fs < 0:
        fs = 4
        if not args.trace:
            meta = _read_meta(out_dir, args.policy, args.seed)
            if "frame_skip" in meta:
                fs = int(meta["frame_skip"])

    logger.info("replaying seed=%s policy=%s steps=%d frame_skip=%d",
                args.seed, args.policy, len(actions), fs)
    replay_episode(seed=args.seed, actions=actions, frame_skip=fs)


if __name__ == "__main__":
    main()

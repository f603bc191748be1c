# experiments/replay.py
"""
Watch a Flappy Dragon run recorded by experiments.sanity_rollout again.

# Typical usage (run from REPO ROOT so `src/...` imports work)

# Replay a HEURISTIC episode by seed (uses actions at experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file (bypasses --policy lookup)
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy

# Controls during replay
SPACE = pause/resume
R     = restart episode
ESC   = quit

# Notes
- Deterministic: given the same seed and action sequence, replay matches the recorded run.
- Expected trace layout from sanity rollouts: experiments/runs/traces/<policy>/<seed>_actions.npy
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import pygame

from src.env.flappy_env import FlappyEnv
from src.game.terminal import Print

DEFAULT_OUT_DIR = "experiments/runs"

def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _draw_overlay(env: FlappyEnv, step_idx: int, action: Optional[int]):
    # Status line on row 2, under the score
    if env.terminal is None or env.state is None:
        return
    label = "-" if action is None else ("FLAP" if action == 1 else "NOOP")
    env.buffer.apply([Print(0, 2, f"Step={step_idx} Action={label} Dist={env.state.player.x}")])
    env.terminal.draw(env.buffer)

def replay_episode(seed: int, actions: np.ndarray):
    """
    Replays an episode deterministically with an on-screen status line.
    Controls: SPACE pause/resume, R restart, ESC quit
    """
    env = FlappyEnv(render_mode="human", max_steps=None)
    obs, info = env.reset(seed=seed)
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
                        obs, info = env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused:
                env.render()
                _draw_overlay(env, step_idx, action=None)
                clock.tick(30)
                continue

            action = int(actions[step_idx])
            obs, r, term, trunc, info = env.step(action)
            _draw_overlay(env, step_idx, action)
            step_idx += 1

            if term or trunc:
                print(f"[DONE] score={info['score']} dist={info['distance']} cause={info['death_cause']}")
                pygame.time.delay(600)
                break
    finally:
        env.close()

def resolve_trace(seed: Optional[int], policy: str, trace: str, out_dir: str) -> Tuple[int, Path]:
    """
    An explicit --trace wins; its seed comes from the <seed>_actions.npy name
    unless --seed is given. Otherwise look the seed up under <out_dir>/traces/<policy>/.
    """
    if trace:
        path = Path(trace)
        if not path.exists():
            raise FileNotFoundError(f"Trace file not found: {path}")
        return (seed if seed is not None else int(path.stem.split("_")[0])), path
    if seed is None:
        raise SystemExit("Need --seed (with --policy) or --trace")
    return seed, _find_trace(Path(out_dir), policy, seed)

def main():
    ap = argparse.ArgumentParser(description="Watch a recorded Flappy Dragon run again.")
    ap.add_argument("--seed", type=int, help="Level seed the run was recorded with")
    ap.add_argument("--policy", default="random", choices=["random", "heuristic"],
                    help="Which rollout policy's traces to look in")
    ap.add_argument("--trace", default="", help="Path to a <seed>_actions.npy file")
    ap.add_argument("--out-dir", default=DEFAULT_OUT_DIR,
                    help="Folder sanity_rollout wrote traces/ into")
    args = ap.parse_args()

    seed, trace_path = resolve_trace(args.seed, args.policy, args.trace, args.out_dir)
    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected a flat flap sequence, got shape {actions.shape}")

    print(f"Replaying seed={seed} from {trace_path} ({len(actions)} steps)")
    print("Controls: SPACE pause/resume | R restart | ESC quit")
    replay_episode(seed=seed, actions=actions)

if __name__ == "__main__":
    main()

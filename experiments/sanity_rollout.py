# /experiments/sanity_rollout.py
"""
Sanity rollouts for FlappyEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for exact replay

Usage examples (from repo root):
  # Run both policies over 20 default seeds, save traces:
  python -m experiments.sanity_rollout --policies both --save-traces

  # Only heuristic, custom seeds:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from src.env.flappy_env import FlappyEnv


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, flap_prob: float = 0.15):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < flap_prob)
    return act

def tiny_heuristic_policy_init():
    """
    Very small rule: flap when the dragon sits below the middle of the
    upcoming gap and is not already rising.
    """
    def act(obs: np.ndarray) -> int:
        y, vel = obs[0], obs[1]
        gap_mid = 0.5 * (obs[3] + obs[4])
        return 1 if (y > gap_mid and vel >= 0.0) else 0
    return act


# ------------------------ Episode records ------------------------

EPISODE_FIELDS = [
    "policy", "seed", "steps", "return_sum",
    "score", "distance", "terminated", "truncated", "death_cause",
]

def append_episode(csv_path: Path, episode: Dict):
    """One row per finished run; the header is written with the first row."""
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=EPISODE_FIELDS)
        if new_file:
            w.writeheader()
        w.writerow(episode)

def save_trace(out_dir: Path, policy_name: str, seed: int, actions: List[int], action_seed: int):
    """<out_dir>/traces/<policy>/<seed>_actions.npy, what experiments.replay reads back."""
    trace_dir = out_dir / "traces" / policy_name
    trace_dir.mkdir(parents=True, exist_ok=True)
    np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
    (trace_dir / f"{seed}_meta.txt").write_text(
        f"seed={seed}\npolicy={policy_name}\naction_rng_seed={action_seed}\n", encoding="utf-8"
    )


# ------------------------ Rollout core ------------------------

def make_policy(policy_name: str, seed: int):
    """Returns (policy, action_seed); the random policy's flaps are tied to the level seed."""
    if policy_name == "random":
        action_seed = 10_000 + seed
        return random_policy_init(action_seed), action_seed
    if policy_name == "heuristic":
        return tiny_heuristic_policy_init(), -1
    raise ValueError(f"Unknown policy: {policy_name}")

def run_one_episode(policy_name: str, seed: int, steps_limit: int,
                    traces_root: Optional[Path] = None) -> Dict:
    """Play one FlappyEnv run until death or the step cap; returns an episode record."""
    policy, action_seed = make_policy(policy_name, seed)
    env = FlappyEnv(max_steps=steps_limit)

    actions: List[int] = []
    ret_sum = 0.0
    term = trunc = False
    try:
        obs, info = env.reset(seed=seed)
        while not (term or trunc):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
    finally:
        env.close()

    if traces_root is not None:
        save_trace(traces_root, policy_name, seed, actions, action_seed)

    return {
        "policy": policy_name,
        "seed": seed,
        "steps": len(actions),
        "return_sum": f"{ret_sum:.1f}",
        "score": int(info["score"]),
        "distance": int(info["distance"]),
        "terminated": int(term),
        "truncated": int(trunc),
        "death_cause": info.get("death_cause") or "",
    }


def main():
    ap = argparse.ArgumentParser(description="Random / heuristic Flappy Dragon rollouts.")
    ap.add_argument("--policies", default="both", choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", default="",
                    help="Comma-separated level seeds (default 101..120)")
    ap.add_argument("--steps", type=int, default=2000,
                    help="Step cap per run; FlappyEnv truncates there")
    ap.add_argument("--out-dir", default="experiments/runs",
                    help="Where episodes.csv and traces/ go")
    ap.add_argument("--save-traces", action="store_true",
                    help="Keep each run's flap sequence for experiments.replay")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    episodes_csv = out_dir / "episodes.csv"
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds (steps<={args.steps}) -> {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep = run_one_episode(policy_name, seed, args.steps,
                                 traces_root=out_dir if args.save_traces else None)
            append_episode(episodes_csv, ep)
            print(f"[{policy_name}] seed={seed}  steps={ep['steps']}  score={ep['score']}  "
                  f"dist={ep['distance']}  cause={ep['death_cause'] or '-'}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()

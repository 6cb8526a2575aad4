# /experiments/sanity_rollout.py
"""
Sanity rollouts for RunnerEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis

Usage examples (from repo root):
  # Run both policies over 20 default seeds, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic, custom seeds:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333

  # Quick random-only smoke with fewer steps and debug logs:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity --log-level DEBUG
"""

from __future__ import annotations
import argparse
import csv
import logging
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from src.env.runner_env import RunnerEnv, MOVE_RIGHT


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> np.ndarray:
        return rng.randint(0, [3, 2, 2])
    return act

def tiny_heuristic_policy_init():
    """
    Very small rule:
      - Always run right.
      - Jump when the near probe (+60) shows no floor, or when falling with
        no floor ahead and a jump left.
      - Glide while falling.
    """
    def act(obs: np.ndarray) -> np.ndarray:
        vy, jumps, grounded = obs[2], obs[3], obs[5]
        floor_near = obs[6]
        no_floor = floor_near >= 0.999   # no-floor sentinel
        jump = 0
        if no_floor and (grounded == 1.0 or (vy > 0.0 and jumps > 0.0)):
            jump = 1
        glide = 1 if (vy > 0.0 and grounded == 0.0) else 0
        return np.array([MOVE_RIGHT, jump, glide])
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int) -> Tuple[int, float, float, int, bool, bool, float]:
    """
    Returns: (ep_len, ret_sum, distance_px, score, terminated, truncated, grounded_ratio)
    """
    # Let env carry its own time limit (30s default).
    env = RunnerEnv(frame_skip=frame_skip)

    if policy_name == "random":
        # Make action RNG seed a function of seed for determinism
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    ret_sum = 0.0
    grounded_count = 0
    ep_len = 0
    term = trunc = False

    try:
        obs, info = env.reset(seed=seed)

        for _ in range(steps_limit):
            obs, r, term, trunc, info = env.step(policy(obs))
            ret_sum += float(r)
            ep_len += 1
            grounded_count += int(bool(info.get("grounded", False)))
            if term or trunc:
                break

        distance_px = float(info.get("distance_px", 0.0))
        score = int(info.get("score", 0))
        grounded_ratio = grounded_count / max(1, ep_len)

    finally:
        env.close()

    return ep_len, ret_sum, distance_px, score, bool(term), bool(trunc), grounded_ratio


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim frames per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv")
    ap.add_argument("--log-level", type=str, default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))  # 20 fixed eval seeds by default

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "policy_name", "seed",
        "frame_skip", "decision_hz",
        "episode_len_decisions", "return_sum", "distance_px", "score",
        "terminated", "truncated", "grounded_ratio"
    ]
    env_name = "RunnerEnv"
    decision_hz = 60 / max(1, args.frame_skip)

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds "
          f"(frame_skip={args.frame_skip}, decision_hz≈{decision_hz:.1f})")
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, dist, score, terminated, truncated, g_ratio = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
            )

            row = [
                env_name, policy_name, seed,
                args.frame_skip, decision_hz,
                ep_len, f"{ret_sum:.2f}", f"{dist:.1f}", score,
                int(terminated), int(truncated), f"{g_ratio:.3f}",
            ]
            write_episode_row(episodes_csv, header, row)

            print(f"[{policy_name}] seed={seed}  len={ep_len}  dist={dist:.1f}  score={score}  "
                  f"ret={ret_sum:.2f}  term={terminated} trunc={truncated}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()

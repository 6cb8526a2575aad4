# src/tests/test_runner_env.py
"""
Quick tests for RunnerEnv (Gymnasium environment).

Usage (from repo root):
  python -m src.tests.test_runner_env
  python -m src.tests.test_runner_env --render
  python -m src.tests.test_runner_env --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import List, Tuple

import numpy as np

try:
    from gymnasium.utils.env_checker import check_env
except ImportError:
    print("ERROR: gymnasium not installed. `pip install gymnasium`", file=sys.stderr)
    raise

from src.env.runner_env import RunnerEnv, MOVE_RIGHT
from src.game.config import WIDTH, HEIGHT
from src.game.world import GamePhase


def test_api_check(frame_skip: int = 4) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = RunnerEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()
    print("✓ API check ok")


def test_smoke(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = RunnerEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed

        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Smoke test ok")


def test_determinism(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = RunnerEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(a)
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    # Fixed action sequence using a local RNG (not numpy global)
    rng = np.random.RandomState(42)
    action_seq = [rng.randint(0, [3, 2, 2]) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")

    print("✓ Determinism ok")


def test_running_right_earns_progress(seed: int = 7) -> None:
    env = RunnerEnv(frame_skip=4)
    try:
        env.reset(seed=seed)
        _, r, term, _, info = env.step(np.array([MOVE_RIGHT, 0, 0]))
        assert not term
        assert r > 0.0, "moving right is rewarded"
        assert info["distance_px"] > 0.0
    finally:
        env.close()
    print("✓ Progress reward ok")


def test_fall_terminates(seed: int = 7) -> None:
    env = RunnerEnv(frame_skip=4)
    try:
        env.reset(seed=seed)
        env.world.player.y = HEIGHT + 150
        _, r, term, trunc, _ = env.step(np.array([0, 0, 0]))
        assert term and not trunc
        assert env.world.phase is GamePhase.GAME_OVER
        assert r < 0.0, "game over is penalized"
    finally:
        env.close()
    print("✓ Termination ok")


def test_time_limit_truncates(seed: int = 7) -> None:
    env = RunnerEnv(frame_skip=4, time_limit_seconds=0.5)
    try:
        env.reset(seed=seed)
        trunc = False
        for t in range(env.time_limit_decisions):
            _, _, term, trunc, _ = env.step(np.array([0, 0, 0]))
            assert not term
        assert trunc and t + 1 == env.time_limit_decisions
    finally:
        env.close()
    print("✓ Truncation ok")


def test_rgb_array_render(seed: int = 7) -> None:
    """Off-screen frame with the glide effect and the game-over overlay on top."""
    prev_driver = os.environ.get("SDL_VIDEODRIVER")
    os.environ["SDL_VIDEODRIVER"] = "dummy"
    env = RunnerEnv(render_mode="rgb_array")
    try:
        env.reset(seed=seed)
        player = env.world.player
        player.gliding = True
        player.vel_y = 3.0
        assert player.glide_active
        env.world.phase = GamePhase.GAME_OVER

        frame = env.render()
        assert isinstance(frame, np.ndarray)
        assert frame.shape == (HEIGHT, WIDTH, 3) and frame.dtype == np.uint8

        # a second frame reuses the surface and fonts
        again = env.render()
        assert np.array_equal(frame, again)
    finally:
        env.close()
        if prev_driver is None:
            os.environ.pop("SDL_VIDEODRIVER", None)
        else:
            os.environ["SDL_VIDEODRIVER"] = prev_driver
    assert env.screen is None and env.big_font is None
    print("✓ rgb_array render ok")


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run right so you can visually verify behavior."""
    env = RunnerEnv(render_mode="human", frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps):
            obs, r, term, trunc, info = env.step(np.array([MOVE_RIGHT, 0, 0]))
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=4, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            test_api_check(frame_skip=args.frame_skip)
        if not args.no_smoke:
            test_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        if not args.no_determinism:
            test_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        test_running_right_earns_progress()
        test_fall_terminates()
        test_time_limit_truncates()
        test_rgb_array_render()
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()

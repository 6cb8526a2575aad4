# src/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS, MOVE_SPEED, COIN_POINTS, PLAYER_SPAWN
from src.game.world import World, GamePhase
from src.game.game import draw_scene
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH

# action[0]: horizontal intent
MOVE_NONE, MOVE_LEFT, MOVE_RIGHT = 0, 1, 2

PROGRESS_REWARD = 0.01   # per MOVE_SPEED px of new rightmost progress
COIN_REWARD = 1.0
DEATH_REWARD = -1.0


class RunnerEnv(gym.Env):
    """
    Glide Runner Gymnasium environment (vector observations).
    - Simulation advances one world frame per sub-step (60 per second).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Action: MultiDiscrete([3, 2, 2]) = (move none/left/right, jump, glide).
      Move and glide are held for the whole decision, jump fires once.
    - Observation: shape (11,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width = width
        self.height = height

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.MultiDiscrete([3, 2, 2])
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.world: Optional[World] = None
        self.timestep: int = 0
        self.best_x: float = 0.0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None
        self.big_font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # A given seed pins the layout; otherwise the level picks a random one.
        level_seed = int(seed) if seed is not None else None
        self.world = World(level_seed, self.width, self.height)

        self.timestep = 0
        self.best_x = self.world.player.x
        self.current_seed = self.world.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0, "distance_px": 0.0}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(np.asarray(action, dtype=np.int64)), f"Invalid action {action}"
        assert self.world is not None
        world = self.world
        move, jump, glide = (int(a) for a in action)

        if move == MOVE_LEFT:
            world.move(-1)
        elif move == MOVE_RIGHT:
            world.move(+1)
        else:
            world.stop()
        world.set_gliding(bool(glide))
        if jump:
            world.jump()

        score_before = world.score
        progress = 0.0
        for _ in range(self.frame_skip):
            world.step()
            if world.player.x > self.best_x:
                progress += world.player.x - self.best_x
                self.best_x = world.player.x
            if world.phase is GamePhase.GAME_OVER:
                break

        terminated = world.phase is GamePhase.GAME_OVER
        coins = (world.score - score_before) // COIN_POINTS
        reward = COIN_REWARD * coins + PROGRESS_REWARD * progress / MOVE_SPEED
        if terminated:
            reward += DEATH_REWARD

        self.timestep += 1
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "seed": self.current_seed,
            "timestep": self.timestep,
            "score": world.score,
            "distance_px": self.best_x - PLAYER_SPAWN[0],
            "grounded": world.player.grounded,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.world is not None
        return build_observation(self.world)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None:
            return

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption("Glide Runner — Gym Env")
            else:
                self.screen = pygame.Surface((self.width, self.height))
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("jetbrainsmono", 18)
            self.big_font = pygame.font.SysFont(None, 64)

        if self.world is not None:
            draw_scene(self.screen, self.world, self.font, big_font=self.big_font)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
            self.big_font = None

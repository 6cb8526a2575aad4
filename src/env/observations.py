# src/env/observations.py
from __future__ import annotations
from typing import Iterable, Optional, Sequence, Tuple
import numpy as np

from src.game.config import MOVE_SPEED, MAX_JUMPS, JUMP_FORCE

# Probe positions ahead of the player's front edge (world space)
PROBE_OFFSETS: Tuple[int, int, int] = (60, 180, 300)
VY_SCALE = abs(JUMP_FORCE) * 1.5
OBS_SIZE = 6 + len(PROBE_OFFSETS) + 2

OBS_LOW = np.array([0.0, -1.0, -1.0, 0.0, 0.0, 0.0]
                   + [0.0] * len(PROBE_OFFSETS) + [-1.0, -1.0], dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def _floor_at_x(platforms: Iterable, x: float, feet_y: float) -> Optional[float]:
    """
    Top of the highest platform covering x whose top is not above the feet.
    None if nothing would catch the player there.
    """
    best: Optional[float] = None
    for p in platforms:
        if p.x <= x < p.x + p.w and p.y >= feet_y - 1.0:
            if best is None or p.y < best:
                best = p.y
    return best


def _nearest_coin_ahead(coins: Sequence, x: float):
    best = None
    for c in coins:
        if c.collected or c.x < x:
            continue
        if best is None or c.x < best.x:
            best = c
    return best


def build_observation(world) -> np.ndarray:
    """
    Returns a fixed (11,) float32 vector:
      [ y_norm, vx_norm, vy_norm, jumps_norm, gliding, grounded,
        floor@60, floor@180, floor@300,
        coin_dx, coin_dy ]
    - y_norm in [0,1] (screen space, clamped)
    - vx_norm, vy_norm in [-1,1]
    - floors normalized by height; sentinel 1.0 if no floor under the probe
    - coin_dx in [0,1] (by width), coin_dy in [-1,1] (by height);
      sentinel (1.0, 0.0) if no uncollected coin ahead
    """
    p = world.player
    w, h = float(world.width), float(world.height)

    feats = [
        _clamp(p.y / max(1.0, h - p.size), 0.0, 1.0),
        _clamp(p.vel_x / MOVE_SPEED, -1.0, 1.0),
        _clamp(p.vel_y / VY_SCALE, -1.0, 1.0),
        p.jumps_remaining / MAX_JUMPS,
        1.0 if p.gliding else 0.0,
        1.0 if p.grounded else 0.0,
    ]

    front = p.x + p.size
    feet = p.y + p.size
    for dx in PROBE_OFFSETS:
        floor_y = _floor_at_x(world.platforms, front + dx, feet)
        feats.append(1.0 if floor_y is None else _clamp(floor_y / h, 0.0, 1.0))

    cx, cy = p.center
    coin = _nearest_coin_ahead(world.coins, cx)
    if coin is None:
        feats.extend([1.0, 0.0])
    else:
        feats.extend([
            _clamp((coin.x - cx) / w, 0.0, 1.0),
            _clamp((coin.y - cy) / h, -1.0, 1.0),
        ])

    return np.asarray(feats, dtype=np.float32)

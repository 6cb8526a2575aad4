# src/game/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Optional
import pygame
from .config import (
    WIDTH, HEIGHT,
    PLATFORM_WIDTH, PLATFORM_HEIGHT, PLATFORM_GAP, PLATFORM_GAP_JITTER,
    PLATFORM_BAND_TOP, PLATFORM_BAND_BOTTOM, INITIAL_PLATFORMS,
    GROUND_X, GROUND_W, GROUND_H, TERRAIN_LOOKAHEAD, PLATFORM_PRUNE_MARGIN,
    COIN_SIZE, COIN_ABOVE_PLATFORM, COIN_EDGE_INSET, INITIAL_COIN_CHANCE,
    INITIAL_SCATTERED_COINS, PLATFORM_COIN_CHANCE, COIN_SPAWN_CHANCE,
    MAX_ACTIVE_COINS, COIN_SPAWN_AHEAD, COIN_PRUNE_MARGIN,
    COLOR_PLAT, COLOR_COIN
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Platform:
    """Axis-aligned rectangle, anchored at its top-left corner."""
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    def screen_rect(self, camera_x: float) -> pygame.Rect:
        return pygame.Rect(int(self.x - camera_x), int(self.y), int(self.w), int(self.h))


@dataclass
class Coin:
    """Coin anchored at its centre."""
    x: float
    y: float
    size: float = COIN_SIZE
    collected: bool = False


class LevelGen:
    """
    Endless strip of platforms and coins generated ahead of the camera.
    Owns the only random source of the world: same seed -> same layout.
    """
    def __init__(self, seed: int | None, width: int = WIDTH, height: int = HEIGHT):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.width = width
        self.height = height
        self.platforms: List[Platform] = []
        self.coins: List[Coin] = []
        self._init_start()

    def reseed(self, seed: int):
        self.seed = seed
        self.rng.seed(seed)

    def regenerate(self):
        """Throw away the current layout and build the starting one."""
        self._init_start()

    def _init_start(self):
        """Ground + INITIAL_PLATFORMS elevated platforms, coins on some of them, scattered coins."""
        self.platforms = [Platform(GROUND_X, self.height - GROUND_H, GROUND_W, GROUND_H)]
        self.coins = []

        x = 0.0
        for _ in range(INITIAL_PLATFORMS):
            x += self._rand_gap()
            self.platforms.append(self._create_platform(x))

        for p in self.platforms:
            # draw first so the stream does not depend on the platform height
            lucky = self.rng.random() > 1.0 - INITIAL_COIN_CHANCE
            if lucky and p.y < self.height - PLATFORM_BAND_BOTTOM:
                self.coins.append(self._coin_above(p))

        for _ in range(INITIAL_SCATTERED_COINS):
            self.coins.append(Coin(
                x=self.rng.uniform(0, self.width * 2),
                y=self.rng.uniform(100, self.height - 150),
            ))

    def _rand_gap(self) -> float:
        return self.rng.uniform(PLATFORM_GAP - PLATFORM_GAP_JITTER, PLATFORM_GAP + PLATFORM_GAP_JITTER)

    def _create_platform(self, x: float) -> Platform:
        y = self.rng.uniform(self.height * PLATFORM_BAND_TOP, self.height - PLATFORM_BAND_BOTTOM)
        return Platform(x, y, PLATFORM_WIDTH, PLATFORM_HEIGHT)

    def _coin_above(self, p: Platform) -> Coin:
        return Coin(
            x=p.x + self.rng.uniform(COIN_EDGE_INSET, p.w - COIN_EDGE_INSET),
            y=p.y - COIN_ABOVE_PLATFORM,
        )

    @property
    def last_platform(self) -> Optional[Platform]:
        return self.platforms[-1] if self.platforms else None

    def active_coin_count(self) -> int:
        return sum(1 for c in self.coins if not c.collected)

    def generate_terrain(self, camera_x: float) -> Optional[Platform]:
        """
        Append at most one platform when the last one ends inside the lookahead
        window, then drop platforms far behind the camera.
        Returns the new platform, if any.
        """
        last = self.last_platform
        anchor = last.right if last is not None else camera_x
        new_platform = None
        if anchor < camera_x + self.width + TERRAIN_LOOKAHEAD:
            new_platform = self._create_platform(anchor + self._rand_gap())
            self.platforms.append(new_platform)
            if self.rng.random() > 1.0 - PLATFORM_COIN_CHANCE:
                self.coins.append(self._coin_above(new_platform))
            logger.debug("platform at x=%.1f y=%.1f", new_platform.x, new_platform.y)

        limit = camera_x - PLATFORM_PRUNE_MARGIN
        self.platforms = [p for p in self.platforms if p.right > limit]
        return new_platform

    def generate_coins(self, camera_x: float) -> Optional[Coin]:
        """
        Occasionally spawn a free coin ahead of the camera (capped by the number
        of uncollected coins), then drop collected coins left behind.
        """
        coin = None
        if self.rng.random() < COIN_SPAWN_CHANCE and self.active_coin_count() < MAX_ACTIVE_COINS:
            lo, hi = COIN_SPAWN_AHEAD
            coin = Coin(
                x=camera_x + self.width + self.rng.uniform(lo, hi),
                y=self.rng.uniform(100, self.height - 200),
            )
            self.coins.append(coin)

        limit = camera_x - COIN_PRUNE_MARGIN
        self.coins = [c for c in self.coins if not c.collected or c.x > limit]
        return coin

    def update_and_generate(self, camera_x: float):
        self.generate_terrain(camera_x)
        self.generate_coins(camera_x)

    def draw(self, surf: pygame.Surface, camera_x: float):
        """Draw platforms and uncollected coins, shifted by the camera."""
        for p in self.platforms:
            pygame.draw.rect(surf, COLOR_PLAT, p.screen_rect(camera_x))

        for c in self.coins:
            if not c.collected:
                center = (int(c.x - camera_x), int(c.y))
                pygame.draw.circle(surf, COLOR_COIN, center, max(1, int(c.size / 2)))

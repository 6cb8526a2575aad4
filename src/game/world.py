# src/game/world.py
from __future__ import annotations
import enum
import logging
import math
from typing import Callable, List, Optional

from .config import (
    WIDTH, HEIGHT, MIN_WIDTH, MIN_HEIGHT, MOVE_SPEED, FALL_MARGIN, CAMERA_LEAD,
    PLAYER_SPAWN, COIN_POINTS
)
from .level import LevelGen, Coin
from .player import Player

logger = logging.getLogger(__name__)


class GamePhase(enum.Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


class World:
    """
    Whole session state: player, level, score, camera and phase.

    One call to `step()` is one frame:
    physics & collision -> coin collection -> terrain/coin generation.
    Input methods (`jump`, `move`, `stop`, `set_gliding`, `restart`) may be
    called between frames.
    """

    def __init__(self, seed: int | None = None, width: int = WIDTH, height: int = HEIGHT):
        self._check_viewport(width, height)
        self.width = width
        self.height = height
        self.level = LevelGen(seed, width, height)
        self.score_listeners: List[Callable[[int], None]] = []
        self.frame = 0
        self.reset(seed=self.level.seed)

    # -------------------- Lifecycle --------------------

    def reset(self, seed: Optional[int] = None):
        """Fresh session. A seed reseeds the level RNG, otherwise the stream continues."""
        if seed is not None:
            self.level.reseed(seed)
        self.level.width, self.level.height = self.width, self.height
        self.level.regenerate()

        x, y = PLAYER_SPAWN
        self.player = Player(x=x, y=y)
        self.score = 0
        self.camera_x = 0.0
        self.phase = GamePhase.PLAYING
        self.frame = 0
        logger.info("world reset (seed=%s, %dx%d)", self.level.seed, self.width, self.height)
        self._notify_score()

    def restart(self) -> bool:
        """Restart after a game over. Ignored while playing."""
        if self.phase is not GamePhase.GAME_OVER:
            return False
        self.reset()
        return True

    @property
    def platforms(self):
        return self.level.platforms

    @property
    def coins(self):
        return self.level.coins

    @property
    def seed(self) -> int:
        return self.level.seed

    @property
    def playing(self) -> bool:
        return self.phase is GamePhase.PLAYING

    # -------------------- Input --------------------

    def jump(self) -> bool:
        return self.playing and self.player.try_jump()

    def set_gliding(self, on: bool):
        if on and not self.playing:
            return
        self.player.gliding = bool(on)

    def move(self, direction: int):
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        if self.playing:
            self.player.vel_x = direction * MOVE_SPEED

    def stop(self):
        self.player.vel_x = 0.0

    def resize(self, width: int, height: int):
        self._check_viewport(width, height)
        self.width, self.height = width, height
        self.level.width, self.level.height = width, height

    # -------------------- Frame --------------------

    def step(self):
        """Advance one frame. Does nothing once the game is over."""
        if not self.playing:
            return
        self.frame += 1

        self.player.update_physics()
        self.camera_x = self.player.x - self.width * CAMERA_LEAD
        self.player.resolve_collisions(self.level.platforms)
        if self.player.y > self.height + FALL_MARGIN:
            self.phase = GamePhase.GAME_OVER
            logger.info("game over at frame %d, x=%.0f, score=%d", self.frame, self.player.x, self.score)

        self.collect_coins()
        self.level.update_and_generate(self.camera_x)

    def collect_coins(self) -> List[Coin]:
        """Mark every uncollected coin touching the player and score it."""
        px, py = self.player.center
        reach = self.player.size / 2
        picked = []
        for c in self.level.coins:
            if c.collected:
                continue
            if math.hypot(px - c.x, py - c.y) < reach + c.size / 2:
                c.collected = True
                self.score += COIN_POINTS
                picked.append(c)
                logger.debug("coin at (%.0f, %.0f), score=%d", c.x, c.y, self.score)
                self._notify_score()
        return picked

    def _notify_score(self):
        for listener in self.score_listeners:
            listener(self.score)

    @staticmethod
    def _check_viewport(width: int, height: int):
        if width < MIN_WIDTH or height < MIN_HEIGHT:
            raise ValueError(
                f"viewport {width}x{height} is smaller than {MIN_WIDTH}x{MIN_HEIGHT}"
            )

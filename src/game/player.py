# src/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Optional, Sequence
from .config import (
    PLAYER_SIZE, GRAVITY, GLIDE_GRAVITY, GLIDE_DRAG, JUMP_FORCE, MOVE_SPEED, MAX_JUMPS
)

@dataclass
class Player:
    """
    Square runner with a double jump and a glide:
    - jumps_remaining is refilled to MAX_JUMPS on every landing
    - gliding only changes the physics while falling (vel_y > 0)
    """
    x: float
    y: float
    vel_x: float = 0.0
    vel_y: float = 0.0
    size: float = PLAYER_SIZE
    jumps_remaining: int = MAX_JUMPS
    jumping: bool = True     # True while airborne
    gliding: bool = False

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.size), int(self.size))

    @property
    def center(self):
        half = self.size / 2
        return self.x + half, self.y + half

    @property
    def grounded(self) -> bool:
        return not self.jumping

    @property
    def glide_active(self) -> bool:
        return self.gliding and self.vel_y > 0

    def try_jump(self) -> bool:
        """Jump if a jump is left (ground or mid-air). Returns True if performed."""
        if self.jumps_remaining <= 0:
            return False
        self.vel_y = JUMP_FORCE
        self.jumps_remaining -= 1
        self.gliding = False
        return True

    def update_physics(self):
        """Apply gravity (or glide gravity + drag) and integrate one frame."""
        if self.glide_active:
            self.vel_y += GLIDE_GRAVITY
            self.vel_x *= GLIDE_DRAG
        else:
            self.vel_y += GRAVITY

        self.x += self.vel_x
        self.y += self.vel_y

    def _overlaps(self, p) -> bool:
        return (self.y + self.size >= p.y and
                self.y <= p.y + p.h and
                self.x + self.size > p.x and
                self.x < p.x + p.w)

    def landing_platform(self, platforms: Sequence) -> Optional[object]:
        """
        Platform the player lands on this frame, or None.
        Only a falling player lands. When several platforms overlap the one
        with the smallest penetration (feet below its top) wins, first in
        list order on ties.
        """
        if self.vel_y <= 0:
            return None
        best = None
        best_depth = 0.0
        for p in platforms:
            if not self._overlaps(p):
                continue
            depth = self.y + self.size - p.y
            if best is None or depth < best_depth:
                best, best_depth = p, depth
        return best

    def resolve_collisions(self, platforms: Sequence) -> bool:
        """Snap onto the landing platform if any. Returns True when grounded."""
        p = self.landing_platform(platforms)
        if p is not None:
            self.y = p.y - self.size
            self.vel_y = 0.0
            self.jumps_remaining = MAX_JUMPS
            self.gliding = False
            # landing cancels glide drag: back to walking speed
            if self.vel_x != 0:
                self.vel_x = MOVE_SPEED if self.vel_x > 0 else -MOVE_SPEED

        self.jumping = p is None
        return p is not None

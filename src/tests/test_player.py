# src/tests/test_player.py
"""
Physics & collision checks for Player.

Usage (from repo root):
  python -m src.tests.test_player
"""
import math

from src.game.config import GRAVITY, GLIDE_GRAVITY, GLIDE_DRAG, JUMP_FORCE, MOVE_SPEED, MAX_JUMPS
from src.game.level import Platform
from src.game.player import Player


def test_gravity_integration():
    p = Player(x=10.0, y=20.0, vel_x=3.0, vel_y=1.0)
    p.update_physics()
    assert math.isclose(p.vel_y, 1.0 + GRAVITY)
    assert math.isclose(p.y, 20.0 + 1.0 + GRAVITY)
    assert math.isclose(p.x, 13.0)
    assert p.vel_x == 3.0, "no drag without glide"


def test_glide_only_while_falling():
    p = Player(x=0.0, y=0.0, vel_x=5.0, vel_y=3.0, gliding=True)
    p.update_physics()
    assert math.isclose(p.vel_y, 3.0 + GLIDE_GRAVITY)
    assert math.isclose(p.vel_x, 5.0 * GLIDE_DRAG)

    # rising: full gravity, no drag
    up = Player(x=0.0, y=0.0, vel_x=5.0, vel_y=-3.0, gliding=True)
    up.update_physics()
    assert math.isclose(up.vel_y, -3.0 + GRAVITY)
    assert up.vel_x == 5.0


def test_landing_on_platform():
    p = Player(x=0.0, y=0.0, vel_y=5.0)
    plat = Platform(-10, 40, 100, 25)
    p.jumps_remaining = 0
    p.update_physics()
    grounded = p.resolve_collisions([plat])
    assert grounded and p.grounded and not p.jumping
    assert p.y == plat.y - p.size
    assert p.vel_y == 0.0
    assert p.jumps_remaining == MAX_JUMPS


def test_no_landing_while_rising():
    p = Player(x=0.0, y=10.0, vel_y=-5.0)
    plat = Platform(-10, 40, 100, 25)
    grounded = p.resolve_collisions([plat])
    assert not grounded and p.jumping
    assert p.y == 10.0


def test_no_landing_without_horizontal_overlap():
    p = Player(x=100.0, y=0.0, vel_y=5.0)   # left edge exactly at platform right edge
    plat = Platform(0, 40, 100, 25)
    p.update_physics()
    assert not p.resolve_collisions([plat])


def test_landing_snaps_walk_speed_and_clears_glide():
    p = Player(x=0.0, y=0.0, vel_x=2.0, vel_y=5.0, gliding=True)
    p.update_physics()
    p.resolve_collisions([Platform(-10, 40, 100, 25)])
    assert p.vel_x == MOVE_SPEED
    assert not p.gliding

    q = Player(x=0.0, y=0.0, vel_x=-0.5, vel_y=5.0)
    q.update_physics()
    q.resolve_collisions([Platform(-10, 40, 100, 25)])
    assert q.vel_x == -MOVE_SPEED

    still = Player(x=0.0, y=0.0, vel_y=5.0)
    still.update_physics()
    still.resolve_collisions([Platform(-10, 40, 100, 25)])
    assert still.vel_x == 0.0


def test_shallowest_platform_wins():
    deep = Platform(-10, 40, 100, 25)     # feet 5.7 px below its top
    shallow = Platform(-10, 44, 100, 25)  # feet 1.7 px below its top
    for order in ([deep, shallow], [shallow, deep]):
        p = Player(x=0.0, y=0.0, vel_y=5.0)
        p.update_physics()
        assert p.landing_platform(order) is shallow
        p.resolve_collisions(order)
        assert p.y == shallow.y - p.size


def test_double_jump():
    p = Player(x=0.0, y=0.0, gliding=True)
    assert p.try_jump()
    assert p.vel_y == JUMP_FORCE and p.jumps_remaining == 1 and not p.gliding
    p.vel_y = 2.0
    assert p.try_jump()
    assert p.jumps_remaining == 0
    p.vel_y = 2.0
    assert not p.try_jump(), "third jump must be refused"
    assert p.vel_y == 2.0 and p.jumps_remaining == 0


def main():
    test_gravity_integration()
    test_glide_only_while_falling()
    test_landing_on_platform()
    test_no_landing_while_rising()
    test_no_landing_without_horizontal_overlap()
    test_landing_snaps_walk_speed_and_clears_glide()
    test_shallowest_platform_wins()
    test_double_jump()
    print("✓ player physics checks passed")


if __name__ == "__main__":
    main()

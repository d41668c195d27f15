from __future__ import annotations

from pygame.math import Vector2
from pytest import approx

from flocksim.boid import Boid, BorderLocation, build_borders
from flocksim.collision import Collision, boid_collision, reflect_velocity, resolve_collisions
from flocksim.geometry import Aabb, BoundingCircle


def _borders(width: float = 100.0, height: float = 100.0, thickness: float = 10.0):
    return build_borders(width, height, thickness)


def _border(location: BorderLocation, width: float = 100.0, height: float = 100.0):
    return next(border for border in _borders(width, height) if border.location is location)


def test_no_collision_when_apart():
    box = _border(BorderLocation.RIGHT).aabb()
    assert boid_collision(BoundingCircle(Vector2(0.0, 0.0), 2.5), box) is None


def test_collision_side_from_dominant_offset_axis():
    right_wall = _border(BorderLocation.RIGHT).aabb()
    left_wall = _border(BorderLocation.LEFT).aabb()
    top_wall = _border(BorderLocation.TOP).aabb()
    bottom_wall = _border(BorderLocation.BOTTOM).aabb()

    # The arena sits to the left of the right wall, so the wall's left face is hit.
    assert boid_collision(BoundingCircle(Vector2(49.0, 0.0), 2.5), right_wall) is Collision.LEFT
    assert boid_collision(BoundingCircle(Vector2(-49.0, 0.0), 2.5), left_wall) is Collision.RIGHT
    assert boid_collision(BoundingCircle(Vector2(0.0, 49.0), 2.5), top_wall) is Collision.BOTTOM
    assert boid_collision(BoundingCircle(Vector2(0.0, -49.0), 2.5), bottom_wall) is Collision.TOP


def test_center_inside_box_resolves_to_bottom():
    box = Aabb(Vector2(0.0, 0.0), Vector2(5.0, 5.0))
    assert boid_collision(BoundingCircle(Vector2(1.0, 1.0), 1.0), box) is Collision.BOTTOM


def test_reflect_only_when_moving_into_the_side():
    moving_left = Vector2(-3.0, 2.0)
    assert reflect_velocity(moving_left, Collision.RIGHT)
    assert moving_left == Vector2(3.0, 2.0)

    moving_right = Vector2(3.0, 2.0)
    assert not reflect_velocity(moving_right, Collision.RIGHT)
    assert moving_right == Vector2(3.0, 2.0)

    falling = Vector2(1.0, -4.0)
    assert reflect_velocity(falling, Collision.TOP)
    assert falling == Vector2(1.0, 4.0)

    rising = Vector2(1.0, 4.0)
    assert reflect_velocity(rising, Collision.BOTTOM)
    assert rising == Vector2(1.0, -4.0)
    assert not reflect_velocity(rising, Collision.BOTTOM)


def test_left_border_reflects_leftward_boid_once():
    borders = _borders()
    boid = Boid(position=Vector2(-49.0, 0.0), velocity=Vector2(-120.0, 5.0), radius=2.5)

    assert resolve_collisions([boid], borders) == 1
    assert boid.velocity.x == approx(120.0)
    assert boid.velocity.y == approx(5.0)

    # Already moving away: a second pass must leave it alone.
    assert resolve_collisions([boid], borders) == 0
    assert boid.velocity.x == approx(120.0)


def test_corner_reflects_both_axes_and_keeps_position():
    borders = _borders()
    boid = Boid(position=Vector2(49.0, 49.0), velocity=Vector2(10.0, 20.0), radius=2.5)

    assert resolve_collisions([boid], borders) == 2
    assert boid.velocity == Vector2(-10.0, -20.0)
    assert boid.position == Vector2(49.0, 49.0)

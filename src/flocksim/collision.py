from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from pygame.math import Vector2

from .boid import Boid, Border
from .geometry import Aabb, BoundingCircle, aabb_circle_intersect, closest_point_on_aabb


class Collision(str, Enum):
    """Side of the box that the circle touched."""

    LEFT = "Left"
    RIGHT = "Right"
    TOP = "Top"
    BOTTOM = "Bottom"


def boid_collision(circle: BoundingCircle, aabb: Aabb) -> Optional[Collision]:
    if not aabb_circle_intersect(circle, aabb):
        return None

    closest = closest_point_on_aabb(aabb, circle.center)
    offset = circle.center - closest
    if abs(offset.x) > abs(offset.y):
        return Collision.LEFT if offset.x < 0.0 else Collision.RIGHT
    if offset.y > 0.0:
        return Collision.TOP
    return Collision.BOTTOM


def reflect_velocity(velocity: Vector2, side: Collision) -> bool:
    """Negate the axis of `side` in place, only while still moving into the box."""
    if side is Collision.LEFT:
        reflect = velocity.x > 0.0
    elif side is Collision.RIGHT:
        reflect = velocity.x < 0.0
    elif side is Collision.TOP:
        reflect = velocity.y < 0.0
    else:
        reflect = velocity.y > 0.0

    if not reflect:
        return False
    if side in (Collision.LEFT, Collision.RIGHT):
        velocity.x = -velocity.x
    else:
        velocity.y = -velocity.y
    return True


def resolve_collisions(boids: Sequence[Boid], borders: Sequence[Border]) -> int:
    # Only velocity changes; a boid whose center already sits inside a border stays there.
    reflections = 0
    boxes = [border.aabb() for border in borders]
    for boid in boids:
        circle = boid.bounding_circle()
        for box in boxes:
            side = boid_collision(circle, box)
            if side is not None and reflect_velocity(boid.velocity, side):
                reflections += 1
    return reflections

from __future__ import annotations

import math
from dataclasses import dataclass

from pygame.math import Vector2


def normalize_or_zero(vector: Vector2) -> Vector2:
    return _normalize_or_zero_xy(vector.x, vector.y)


def _normalize_or_zero_xy(x: float, y: float) -> Vector2:
    magnitude_sq = x * x + y * y
    if magnitude_sq < 1e-12:
        return Vector2()
    inv = 1.0 / math.sqrt(magnitude_sq)
    return Vector2(x * inv, y * inv)


def clamp_length_max(vector: Vector2, max_length: float) -> Vector2:
    if max_length <= 0:
        return Vector2()
    magnitude_sq = vector.length_squared()
    if magnitude_sq <= max_length * max_length:
        return Vector2(vector)
    inv = max_length / math.sqrt(magnitude_sq)
    return Vector2(vector.x * inv, vector.y * inv)


def heading_from_velocity(vector: Vector2) -> float:
    if vector.length_squared() < 1e-12:
        return 0.0
    return math.atan2(vector.y, vector.x)


@dataclass(frozen=True)
class Aabb:
    """Axis-aligned box described by its center and half size."""

    center: Vector2
    half_extent: Vector2

    @property
    def min(self) -> Vector2:
        return self.center - self.half_extent

    @property
    def max(self) -> Vector2:
        return self.center + self.half_extent


@dataclass(frozen=True)
class BoundingCircle:
    center: Vector2
    radius: float


def closest_point_on_aabb(aabb: Aabb, point: Vector2) -> Vector2:
    low = aabb.min
    high = aabb.max
    return Vector2(
        min(max(point.x, low.x), high.x),
        min(max(point.y, low.y), high.y),
    )


def aabb_circle_intersect(circle: BoundingCircle, aabb: Aabb) -> bool:
    closest = closest_point_on_aabb(aabb, circle.center)
    dx = circle.center.x - closest.x
    dy = circle.center.y - closest.y
    return dx * dx + dy * dy <= circle.radius * circle.radius

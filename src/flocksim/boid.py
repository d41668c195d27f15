from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from pygame.math import Vector2

from .geometry import Aabb, BoundingCircle, heading_from_velocity


@dataclass(slots=True)
class Boid:
    position: Vector2 = field(default_factory=Vector2)
    velocity: Vector2 = field(default_factory=Vector2)
    radius: float = 2.5

    @property
    def orientation(self) -> float:
        return heading_from_velocity(self.velocity)

    def bounding_circle(self) -> BoundingCircle:
        return BoundingCircle(Vector2(self.position), self.radius)


class BorderLocation(str, Enum):
    LEFT = "Left"
    RIGHT = "Right"
    BOTTOM = "Bottom"
    TOP = "Top"

    def size(self, width: float, height: float, thickness: float) -> Vector2:
        if self in (BorderLocation.LEFT, BorderLocation.RIGHT):
            return Vector2(thickness, height)
        return Vector2(width, thickness)

    def center(self, width: float, height: float, thickness: float) -> Vector2:
        # Inner face sits on the arena edge, so the center is half a thickness outside it.
        if self is BorderLocation.LEFT:
            return Vector2(-width / 2.0 - thickness / 2.0, 0.0)
        if self is BorderLocation.RIGHT:
            return Vector2(width / 2.0 + thickness / 2.0, 0.0)
        if self is BorderLocation.BOTTOM:
            return Vector2(0.0, -height / 2.0 - thickness / 2.0)
        return Vector2(0.0, height / 2.0 + thickness / 2.0)


@dataclass(frozen=True)
class Border:
    location: BorderLocation
    center: Vector2
    half_extent: Vector2

    @classmethod
    def build(cls, location: BorderLocation, width: float, height: float, thickness: float) -> "Border":
        return cls(
            location=location,
            center=location.center(width, height, thickness),
            half_extent=location.size(width, height, thickness) / 2.0,
        )

    def aabb(self) -> Aabb:
        return Aabb(self.center, self.half_extent)


def build_borders(width: float, height: float, thickness: float) -> Tuple[Border, ...]:
    return tuple(Border.build(location, width, height, thickness) for location in BorderLocation)

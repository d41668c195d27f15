from __future__ import annotations

import random

from pygame.math import Vector2


class DeterministicRng:
    def __init__(self, seed: int):
        self._random = random.Random(seed)

    def next_float(self) -> float:
        return self._random.random()

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_point_in_rect(self, width: float, height: float) -> Vector2:
        """Uniform sample from a `width` x `height` rectangle centred on the origin."""
        return Vector2(
            self.next_float() * width - width / 2.0,
            self.next_float() * height - height / 2.0,
        )

    def next_box_velocity(self, speed: float) -> Vector2:
        return Vector2(
            self.next_range(-speed, speed),
            self.next_range(-speed, speed),
        )

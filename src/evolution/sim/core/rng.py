from __future__ import annotations

import math
import random

from pygame.math import Vector2


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_range(self, low: float, high: float) -> float:
        # Samples stay in [low, high) even when rounding lands on `high`.
        value = low + (high - low) * self._random.random()
        if high > low and value >= high:
            return math.nextafter(high, low)
        return value

    def next_angle(self) -> float:
        return self.next_range(0.0, 2.0 * math.pi)

    def next_point(self, width: float, height: float) -> Vector2:
        return Vector2(self.next_range(0.0, width), self.next_range(0.0, height))

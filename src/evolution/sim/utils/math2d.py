from __future__ import annotations

import math

from pygame.math import Vector2


def map_range(value: float, range1: tuple[float, float], range2: tuple[float, float]) -> float:
    return range2[0] + (range2[1] - range2[0]) * ((value - range1[0]) / (range1[1] - range1[0]))


def _safe_normalize(vector: Vector2) -> Vector2:
    return _safe_normalize_xy(vector.x, vector.y)


def _safe_normalize_xy(x: float, y: float) -> Vector2:
    magnitude_sq = x * x + y * y
    if magnitude_sq < 1e-10:
        return Vector2()
    inv = 1.0 / math.sqrt(magnitude_sq)
    return Vector2(x * inv, y * inv)


def _clamp_length(vector: Vector2, max_length: float) -> Vector2:
    if max_length <= 0:
        return Vector2()
    magnitude_sq = vector.length_squared()
    if magnitude_sq <= max_length * max_length:
        return Vector2(vector)
    return vector * (max_length / math.sqrt(magnitude_sq))


def _heading_from_velocity(vector: Vector2, previous: float) -> float:
    if vector.length_squared() <= 0.0:
        return previous
    return math.atan2(vector.y, vector.x)

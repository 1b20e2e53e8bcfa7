from __future__ import annotations

import math

import pytest
from pygame.math import Vector2
from pytest import approx

from evolution.sim.utils.math2d import _clamp_length, _heading_from_velocity, _safe_normalize, map_range


def test_map_range_endpoints_and_decreasing_ranges():
    assert map_range(10.0, (10.0, 20.0), (4.0, 1.5)) == approx(4.0)
    assert map_range(20.0, (10.0, 20.0), (4.0, 1.5)) == approx(1.5)
    assert map_range(15.0, (10.0, 20.0), (0.1, 0.3)) == approx(0.2)


@pytest.mark.parametrize(
    ("value", "source", "target"),
    [
        (3.7, (1.0, 9.0), (-2.0, 40.0)),
        (-12.5, (-20.0, 0.0), (100.0, 0.5)),
        (0.001, (0.0, 1.0), (1e-3, 1e3)),
    ],
)
def test_map_range_inverts(value, source, target):
    mapped = map_range(value, source, target)
    assert map_range(mapped, target, source) == approx(value)


def test_safe_normalize_zero_vector():
    assert _safe_normalize(Vector2()) == Vector2()
    assert _safe_normalize(Vector2(0.0, 3.0)) == Vector2(0.0, 1.0)


def test_clamp_length():
    assert _clamp_length(Vector2(3.0, 4.0), 10.0) == Vector2(3.0, 4.0)
    assert _clamp_length(Vector2(3.0, 4.0), 1.0).length() == approx(1.0)
    assert _clamp_length(Vector2(3.0, 4.0), 0.0) == Vector2()
    assert _clamp_length(Vector2(), 2.0) == Vector2()


def test_clamp_length_returns_a_new_vector():
    original = Vector2(1.0, 0.0)
    clamped = _clamp_length(original, 5.0)
    clamped.x = 9.0
    assert original.x == 1.0


def test_heading_from_velocity():
    assert _heading_from_velocity(Vector2(0.0, -2.0), 0.3) == approx(-math.pi / 2)
    assert _heading_from_velocity(Vector2(), 0.3) == approx(0.3)

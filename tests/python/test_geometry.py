from __future__ import annotations

import math

from pygame.math import Vector2
from pytest import approx

from flocksim.geometry import (
    Aabb,
    BoundingCircle,
    aabb_circle_intersect,
    clamp_length_max,
    closest_point_on_aabb,
    heading_from_velocity,
    normalize_or_zero,
)


def test_normalize_or_zero_returns_zero_for_degenerate_vector():
    assert normalize_or_zero(Vector2()) == Vector2()
    assert normalize_or_zero(Vector2(1e-9, -1e-9)) == Vector2()


def test_normalize_or_zero_unit_length():
    result = normalize_or_zero(Vector2(3.0, 4.0))
    assert result.x == approx(0.6)
    assert result.y == approx(0.8)


def test_clamp_length_max_only_shortens():
    short = Vector2(1.0, 1.0)
    clamped_short = clamp_length_max(short, 10.0)
    assert clamped_short == short
    assert clamped_short is not short

    clamped = clamp_length_max(Vector2(300.0, 400.0), 100.0)
    assert clamped.length() == approx(100.0)
    assert clamped.x == approx(60.0)
    assert clamped.y == approx(80.0)


def test_clamp_length_max_non_positive_limit_is_zero():
    assert clamp_length_max(Vector2(5.0, 0.0), 0.0) == Vector2()


def test_heading_from_velocity():
    assert heading_from_velocity(Vector2(0.0, 2.0)) == approx(math.pi / 2)
    assert heading_from_velocity(Vector2()) == 0.0


def test_closest_point_clamps_to_box():
    box = Aabb(Vector2(0.0, 0.0), Vector2(5.0, 2.0))
    assert closest_point_on_aabb(box, Vector2(10.0, 1.0)) == Vector2(5.0, 1.0)
    assert closest_point_on_aabb(box, Vector2(-8.0, -9.0)) == Vector2(-5.0, -2.0)
    inside = Vector2(1.0, -1.0)
    assert closest_point_on_aabb(box, inside) == inside


def test_aabb_circle_intersect_edges():
    box = Aabb(Vector2(55.0, 0.0), Vector2(5.0, 50.0))
    assert aabb_circle_intersect(BoundingCircle(Vector2(48.0, 0.0), 2.5), box)
    # touching counts as intersecting
    assert aabb_circle_intersect(BoundingCircle(Vector2(47.5, 0.0), 2.5), box)
    assert not aabb_circle_intersect(BoundingCircle(Vector2(47.0, 0.0), 2.5), box)
    # corner region uses the euclidean distance, not per-axis overlap
    assert not aabb_circle_intersect(BoundingCircle(Vector2(48.0, 52.0), 2.5), box)

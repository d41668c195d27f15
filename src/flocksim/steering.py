from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence

from pygame.math import Vector2

from .config import SteeringConfig
from .geometry import _normalize_or_zero_xy


class FlockingForces(NamedTuple):
    alignment: Vector2
    cohesion: Vector2
    separation: Vector2
    neighbors: int


def neighbors_brute_force(
    index: int,
    positions: Sequence[Vector2],
    view_radius: float,
    out: List[int],
) -> List[int]:
    out.clear()
    position = positions[index]
    pos_x = position.x
    pos_y = position.y
    radius_sq = view_radius * view_radius
    append = out.append
    for other, other_pos in enumerate(positions):
        if other == index:
            continue
        offset_x = other_pos.x - pos_x
        offset_y = other_pos.y - pos_y
        dist_sq = offset_x * offset_x + offset_y * offset_y
        if 0.0 < dist_sq < radius_sq:
            append(other)
    return out


def flocking_forces(
    position: Vector2,
    neighbors: Sequence[int],
    positions: Sequence[Vector2],
    velocities: Sequence[Vector2],
    steering: SteeringConfig,
) -> FlockingForces:
    """Alignment, cohesion and separation for one boid against the snapshot.

    `neighbors` holds snapshot indices already filtered to the view radius.
    Separation weights each neighbour by 1/d (offset over squared distance) so
    closer boids push harder.
    """
    count = len(neighbors)
    if count == 0:
        return FlockingForces(Vector2(), Vector2(), Vector2(), 0)

    align_x = 0.0
    align_y = 0.0
    center_x = 0.0
    center_y = 0.0
    sep_x = 0.0
    sep_y = 0.0
    pos_x = position.x
    pos_y = position.y
    for other in neighbors:
        other_pos = positions[other]
        other_vel = velocities[other]
        diff_x = other_pos.x - pos_x
        diff_y = other_pos.y - pos_y
        inv_dist_sq = 1.0 / (diff_x * diff_x + diff_y * diff_y)
        align_x += other_vel.x
        align_y += other_vel.y
        center_x += other_pos.x
        center_y += other_pos.y
        sep_x -= diff_x * inv_dist_sq
        sep_y -= diff_y * inv_dist_sq

    inv = 1.0 / count
    alignment = _normalize_or_zero_xy(align_x * inv, align_y * inv) * steering.align_weight
    cohesion = _normalize_or_zero_xy(center_x * inv - pos_x, center_y * inv - pos_y) * steering.cohesion_weight
    separation = _normalize_or_zero_xy(sep_x, sep_y) * steering.separation_weight
    return FlockingForces(alignment, cohesion, separation, count)


def border_avoidance(position: Vector2, width: float, height: float, steering: SteeringConfig) -> Vector2:
    margin = steering.avoidance_distance
    if margin <= 0.0:
        return Vector2()
    left_edge = -width / 2.0
    right_edge = width / 2.0
    bottom_edge = -height / 2.0
    top_edge = height / 2.0
    x = position.x
    y = position.y

    push_x = 0.0
    push_y = 0.0
    distance = x - left_edge
    if distance < margin:
        push_x += max(0.0, 1.0 - distance / margin)
    distance = right_edge - x
    if distance < margin:
        push_x -= max(0.0, 1.0 - distance / margin)
    distance = y - bottom_edge
    if distance < margin:
        push_y += max(0.0, 1.0 - distance / margin)
    distance = top_edge - y
    if distance < margin:
        push_y -= max(0.0, 1.0 - distance / margin)

    return _normalize_or_zero_xy(push_x, push_y) * steering.avoidance_weight


def attraction(position: Vector2, point: Optional[Vector2], steering: SteeringConfig) -> Vector2:
    if point is None:
        return Vector2()
    dx = point.x - position.x
    dy = point.y - position.y
    capture = steering.capture_distance
    if dx * dx + dy * dy >= capture * capture:
        return Vector2()
    return _normalize_or_zero_xy(dx, dy) * steering.attraction_weight


def combine_forces(
    flocking: FlockingForces,
    avoidance: Vector2,
    pull: Vector2,
) -> Vector2:
    return flocking.alignment + flocking.cohesion + flocking.separation + avoidance + pull

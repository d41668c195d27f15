from __future__ import annotations

import logging
import math
from dataclasses import replace
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pygame.math import Vector2

from .boid import Boid, Border, build_borders
from .collision import resolve_collisions
from .config import SimulationConfig
from .geometry import clamp_length_max
from .rng import DeterministicRng
from .spatial_grid import SpatialGrid
from .steering import attraction, border_avoidance, combine_forces, flocking_forces, neighbors_brute_force
from .types.metrics import TickMetrics
from .types.snapshot import Snapshot, SnapshotArena, SnapshotMetadata

logger = logging.getLogger(__name__)

PointLike = Optional[Sequence[float]]


class SimulationContractError(ValueError):
    """Raised when a caller breaks a precondition; the world is left untouched."""


def _require_arena(width: float, height: float) -> None:
    if width <= 0 or height <= 0:
        raise SimulationContractError(f"arena must have positive size, got {width} x {height}")


class World:
    """Explicitly owned flock state advanced one tick at a time.

    Every tick reads a copy of all positions and velocities before any boid is
    written, so the order in which boids are visited never biases the flock.
    """

    def __init__(self, config: SimulationConfig, boids: Optional[List[Boid]] = None):
        _require_arena(config.arena_width, config.arena_height)
        if boids is None and config.boid_count < 0:
            raise SimulationContractError(f"boid_count must be non-negative, got {config.boid_count}")
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._width = float(config.arena_width)
        self._height = float(config.arena_height)
        self._borders: Tuple[Border, ...] = build_borders(self._width, self._height, config.border_thickness)
        steering = config.steering
        self._grid: SpatialGrid | None = SpatialGrid(steering.cell_size) if steering.use_spatial_grid else None
        self._grid_offsets = (
            self._grid.build_neighbor_cell_offsets(steering.view_radius) if self._grid is not None else []
        )
        self._neighbor_scratch: List[int] = []
        self._in_tick = False
        self._tick = 0
        self._metrics: TickMetrics | None = None
        if boids is None:
            self._boids: List[Boid] = []
            self._bootstrap_boids()
        else:
            self._boids = boids
        self._boid_count = len(self._boids)
        logger.info(
            "Flock initialized: %d boids in %.1f x %.1f arena (seed=%d, grid=%s)",
            self._boid_count,
            self._width,
            self._height,
            config.seed,
            steering.use_spatial_grid,
        )

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def boids(self) -> List[Boid]:
        return self._boids

    @property
    def borders(self) -> Tuple[Border, ...]:
        return self._borders

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def positions(self) -> List[Vector2]:
        return [Vector2(boid.position) for boid in self._boids]

    def orientations(self) -> List[float]:
        return [boid.orientation for boid in self._boids]

    def step(self, delta_time: float, attraction_point: PointLike = None) -> TickMetrics:
        if self._in_tick:
            raise SimulationContractError("step() called while a tick is already running")
        if delta_time < 0:
            raise SimulationContractError(f"delta_time must be non-negative, got {delta_time}")
        if len(self._boids) != self._boid_count:
            raise SimulationContractError(
                f"boid list changed size outside a tick: expected {self._boid_count}, found {len(self._boids)}"
            )
        if delta_time == 0:
            logger.debug("Tick %d paused (delta_time == 0)", self._tick)
            metrics = self._create_metrics(0, 0, 0.0)
            self._metrics = metrics
            return metrics

        start = perf_counter()
        point = None if attraction_point is None else Vector2(attraction_point)
        self._in_tick = True
        try:
            neighbor_checks, collisions = self._advance(delta_time, point)
        finally:
            self._in_tick = False
        self._tick += 1
        elapsed_ms = (perf_counter() - start) * 1000.0
        metrics = self._create_metrics(neighbor_checks, collisions, elapsed_ms)
        self._metrics = metrics
        return metrics

    def resize(self, width: float, height: float) -> None:
        if self._in_tick:
            raise SimulationContractError("resize() called while a tick is running")
        _require_arena(width, height)
        self._width = float(width)
        self._height = float(height)
        self._borders = build_borders(self._width, self._height, self._config.border_thickness)
        logger.info("Arena resized to %.1f x %.1f", self._width, self._height)

    def snapshot(self) -> Snapshot:
        metrics = self._metrics if self._metrics is not None else self._create_metrics(0, 0, 0.0)
        steering = self._config.steering
        return Snapshot(
            tick=self._tick,
            metrics=metrics,
            boids=[self._boid_snapshot(index, boid) for index, boid in enumerate(self._boids)],
            arena=SnapshotArena(
                width=self._width,
                height=self._height,
                border_thickness=self._config.border_thickness,
            ),
            metadata=SnapshotMetadata(
                max_speed=steering.max_speed,
                view_radius=steering.view_radius,
                seed=self._config.seed,
                config_version=self._config.config_version,
            ),
        )

    def _advance(self, dt: float, point: Vector2 | None) -> tuple[int, int]:
        steering = self._config.steering
        boids = self._boids
        width = self._width
        height = self._height
        positions = [Vector2(boid.position) for boid in boids]
        velocities = [Vector2(boid.velocity) for boid in boids]
        neighbors = self._neighbor_scratch
        grid = self._grid
        if grid is not None:
            grid.rebuild(positions)

        neighbor_checks = 0
        new_velocities: List[Vector2] = []
        for index, position in enumerate(positions):
            if grid is not None:
                grid.collect_neighbors(index, self._grid_offsets, steering.view_radius, neighbors)
            else:
                neighbors_brute_force(index, positions, steering.view_radius, neighbors)
            neighbor_checks += len(neighbors)
            forces = flocking_forces(position, neighbors, positions, velocities, steering)
            avoidance = border_avoidance(position, width, height, steering)
            pull = attraction(position, point, steering)
            new_velocities.append(clamp_length_max(combine_forces(forces, avoidance, pull), steering.max_speed))

        for boid, velocity in zip(boids, new_velocities):
            boid.velocity = velocity
        collisions = resolve_collisions(boids, self._borders)
        for boid in boids:
            boid.position.update(
                boid.position.x + boid.velocity.x * dt,
                boid.position.y + boid.velocity.y * dt,
            )

        if grid is not None:
            grid.clear()
        neighbors.clear()
        return neighbor_checks, collisions

    def _bootstrap_boids(self) -> None:
        config = self._config
        spawn_width = max(0.0, self._width - config.boid_diameter * 2.0)
        spawn_height = max(0.0, self._height - config.boid_diameter * 2.0)
        for _ in range(config.boid_count):
            self._boids.append(
                Boid(
                    position=self._rng.next_point_in_rect(spawn_width, spawn_height),
                    velocity=self._rng.next_box_velocity(config.initial_speed),
                    radius=config.boid_radius,
                )
            )

    def _create_metrics(self, neighbor_checks: int, collisions: int, duration_ms: float) -> TickMetrics:
        speed_sum = 0.0
        top_speed = 0.0
        for boid in self._boids:
            speed = math.hypot(boid.velocity.x, boid.velocity.y)
            speed_sum += speed
            if speed > top_speed:
                top_speed = speed
        count = len(self._boids)
        return TickMetrics(
            tick=self._tick,
            boids=count,
            neighbor_checks=neighbor_checks,
            collisions=collisions,
            average_speed=0.0 if count == 0 else speed_sum / count,
            max_speed=top_speed,
            tick_duration_ms=duration_ms,
        )

    @staticmethod
    def _boid_snapshot(index: int, boid: Boid) -> Dict[str, Any]:
        return {
            "id": index,
            "x": boid.position.x,
            "y": boid.position.y,
            "vx": boid.velocity.x,
            "vy": boid.velocity.y,
            "speed": boid.velocity.length(),
            "orientation": boid.orientation,
            "radius": boid.radius,
        }


def initialize(
    arena_width: float,
    arena_height: float,
    boid_count: int,
    config: SimulationConfig | None = None,
) -> World:
    base = config if config is not None else SimulationConfig()
    return World(replace(base, arena_width=arena_width, arena_height=arena_height, boid_count=boid_count))


def tick(world: World, delta_time: float, attraction_point: PointLike = None) -> TickMetrics:
    return world.step(delta_time, attraction_point)


def resize(world: World, new_width: float, new_height: float) -> None:
    world.resize(new_width, new_height)

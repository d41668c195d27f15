from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class SteeringConfig:
    max_speed: float = 300.0
    view_radius: float = 50.0
    align_weight: float = 15.0
    cohesion_weight: float = 15.0
    separation_weight: float = 17.0
    # Edge avoidance starts inside this distance from the visible arena boundary
    avoidance_distance: float = 10.0
    avoidance_weight: float = 30.0
    attraction_weight: float = 30.0
    capture_distance: float = 100.0
    use_spatial_grid: bool = False
    cell_size: float = 50.0


@dataclass
class SimulationConfig:
    arena_width: float = 800.0
    arena_height: float = 600.0
    boid_count: int = 1000
    boid_diameter: float = 5.0
    border_thickness: float = 10.0
    initial_speed: float = 200.0
    time_step: float = 1.0 / 60.0
    seed: int = 42
    config_version: str = "v1"
    steering: SteeringConfig = field(default_factory=SteeringConfig)

    @property
    def boid_radius(self) -> float:
        return self.boid_diameter / 2.0

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


def load_config(raw: dict) -> SimulationConfig:
    steering = SteeringConfig(**raw.get("steering", {}))
    sim_values = {k: v for k, v in raw.items() if k != "steering"}
    return SimulationConfig(steering=steering, **sim_values)

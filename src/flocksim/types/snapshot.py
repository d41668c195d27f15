from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .metrics import TickMetrics


@dataclass(slots=True)
class Snapshot:
    tick: int
    metrics: TickMetrics
    boids: List[Dict[str, Any]]
    arena: "SnapshotArena"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotArena:
    width: float
    height: float
    border_thickness: float


@dataclass(slots=True)
class SnapshotMetadata:
    max_speed: float
    view_radius: float
    seed: int
    config_version: str

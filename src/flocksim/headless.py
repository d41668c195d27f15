from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional, Sequence

from .config import SimulationConfig
from .logging_config import setup_logging
from .types.metrics import TickMetrics
from .world import World

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "boids",
    "neighbor_checks",
    "collisions",
    "avg_speed",
    "max_speed",
    "tick_ms",
]


def _format_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.boids,
        metrics.neighbor_checks,
        metrics.collisions,
        f"{metrics.average_speed:.4f}",
        f"{metrics.max_speed:.4f}",
        f"{tick_ms:.3f}",
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    config_path: Optional[Path] = None,
    attraction_point: Optional[Sequence[float]] = None,
    summary_path: Optional[Path] = None,
    summary_window: int = 500,
    time_step: Optional[float] = None,
) -> World:
    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    if time_step is not None:
        config.time_step = time_step
    world = World(config)

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    tick_ms_series: list[float] = []
    neighbor_series: list[float] = []
    collision_series: list[float] = []
    speed_series: list[float] = []

    try:
        for _ in range(steps):
            metrics = world.step(config.time_step, attraction_point)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            if summary_path:
                tick_ms_series.append(tick_ms)
                neighbor_series.append(float(metrics.neighbor_checks))
                collision_series.append(float(metrics.collisions))
                speed_series.append(metrics.average_speed)
            if writer:
                writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        window = max(1, int(summary_window))
        tail_slice = slice(max(0, len(tick_ms_series) - window), len(tick_ms_series))
        summary = {
            "steps": steps,
            "seed": config.seed,
            "boids": len(world.boids),
            "time_step": config.time_step,
            "deterministic_log": deterministic_log,
            "tick_ms": _summary_stats(tick_ms_series),
            "neighbor_checks": _summary_stats(neighbor_series),
            "collisions": _summary_stats(collision_series),
            "average_speed": _summary_stats(speed_series),
            "tail_window": {
                "window": window,
                "tick_ms": _summary_stats(tick_ms_series[tail_slice]),
                "average_speed": _summary_stats(speed_series[tail_slice]),
            },
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    logger.info("Headless run finished after %d ticks", world.tick_count)
    return world


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Headless boids simulation")
    parser.add_argument("--steps", type=int, default=600)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML file with simulation settings")
    parser.add_argument("--dt", type=float, default=None, help="Fixed delta time per tick (seconds)")
    parser.add_argument(
        "--attract",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Hold an attraction point at X Y for the whole run.",
    )
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-tick metrics")
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--summary-window",
        type=int,
        default=500,
        help="Tail window size (ticks) for summary stats.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    setup_logging(getattr(logging, args.log_level))
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        config_path=args.config,
        attraction_point=args.attract,
        summary_path=args.summary,
        summary_window=args.summary_window,
        time_step=args.dt,
    )


if __name__ == "__main__":
    main()

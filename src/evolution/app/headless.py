from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from ..sim.core.config import SimulationConfig
from ..sim.core.errors import ConfigError
from ..sim.core.world import World
from ..sim.types.metrics import TickMetrics

log = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "vehicles",
    "food",
    "poison",
    "food_eaten",
    "poison_eaten",
    "avg_speed",
    "avg_food_gene",
    "avg_poison_gene",
    "tick_ms",
]


def _format_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.vehicles,
        metrics.food,
        metrics.poison,
        metrics.food_eaten,
        metrics.poison_eaten,
        f"{metrics.average_speed:.4f}",
        f"{metrics.average_food_gene:.4f}",
        f"{metrics.average_poison_gene:.4f}",
        f"{tick_ms:.3f}",
    ]


def _tick_ms_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0}
    return {"min": min(values), "max": max(values), "avg": sum(values) / len(values)}


def load_simulation_config(config_path: Optional[Path]) -> SimulationConfig:
    if config_path is None:
        return SimulationConfig()
    return SimulationConfig.from_yaml(config_path)


def run_headless(
    steps: int,
    seed: Optional[int] = None,
    log_path: Optional[Path] = None,
    deterministic_log: bool = False,
    summary_path: Optional[Path] = None,
    config_path: Optional[Path] = None,
    config: Optional[SimulationConfig] = None,
) -> World:
    if config is None:
        config = load_simulation_config(config_path)
    if seed is not None:
        config.seed = seed
    world = World(config)

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    tick_ms_series: list[float] = []
    try:
        for tick in range(steps):
            metrics = world.step(tick)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            tick_ms_series.append(tick_ms)
            if writer:
                writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    log.info("ran %d ticks: %d food and %d poison left", steps, len(world.food), len(world.poison))

    if summary_path:
        totals = world.totals()
        summary = {
            "steps": steps,
            "seed": config.seed,
            "deterministic_log": deterministic_log,
            "vehicles": len(world.vehicles),
            "food_remaining": len(world.food),
            "poison_remaining": len(world.poison),
            "food_eaten": totals["food_eaten"],
            "poison_eaten": totals["poison_eaten"],
            "tick_ms": _tick_ms_stats(tick_ms_series),
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
    return world


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Headless evolution simulation")
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument("--summary", type=Path, default=None, help="Optional JSON file to write summary stats for the run.")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        config = load_simulation_config(args.config)
    except (ConfigError, OSError) as exc:
        log.error("Failed to load configuration: %s", exc)
        sys.exit(1)
    try:
        run_headless(
            args.steps,
            args.seed,
            args.log,
            deterministic_log=args.deterministic_log,
            summary_path=args.summary,
            config=config,
        )
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        sys.exit(1)
    except OSError as exc:
        log.error("Failed to write run output: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()

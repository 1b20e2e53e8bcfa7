from __future__ import annotations

import logging
from typing import Any, Dict, List
from time import perf_counter

from .config import SimulationConfig
from .rng import DeterministicRng
from .stimulus import Stimulus, StimulusKind
from .vehicle import Vehicle
from ..systems import boundary, lifecycle, metrics as metrics_system
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotWorld

log = logging.getLogger(__name__)


class World:
    """Owns the vehicles and both stimulus lists and advances them tick by tick."""

    def __init__(self, config: SimulationConfig):
        config.validate()
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._vehicles: List[Vehicle] = []
        self._food: List[Stimulus] = []
        self._poison: List[Stimulus] = []
        self._metrics: TickMetrics | None = None
        self._ticks = 0
        self._food_eaten = 0
        self._poison_eaten = 0
        self._bootstrap()
        log.info(
            "world created: %d vehicles, %d food, %d poison (seed=%d)",
            len(self._vehicles),
            len(self._food),
            len(self._poison),
            config.seed,
        )

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def vehicles(self) -> List[Vehicle]:
        return self._vehicles

    @property
    def food(self) -> List[Stimulus]:
        return self._food

    @property
    def poison(self) -> List[Stimulus]:
        return self._poison

    @property
    def bounds(self) -> tuple[float, float]:
        return self._config.window_size

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def _bootstrap(self) -> None:
        config = self._config
        self._vehicles = lifecycle.spawn_vehicles(config, self._rng)
        self._food = lifecycle.spawn_stimuli(StimulusKind.FOOD, config.food, config.window_size, self._rng)
        self._poison = lifecycle.spawn_stimuli(StimulusKind.POISON, config.poison, config.window_size, self._rng)

    def reset(self) -> None:
        self._rng.reset()
        self._metrics = None
        self._ticks = 0
        self._food_eaten = 0
        self._poison_eaten = 0
        self._bootstrap()
        log.info("world reset (seed=%d)", self._config.seed)

    def tick(self) -> None:
        food = self._food
        poison = self._poison
        for vehicle in self._vehicles:
            eaten_food, eaten_poison = vehicle.behaviors(food, poison)
            vehicle.update()
            if eaten_food is not None:
                self._food_eaten += 1
                log.debug("vehicle %d ate food at (%.1f, %.1f)", vehicle.id, eaten_food.position.x, eaten_food.position.y)
            if eaten_poison is not None:
                self._poison_eaten += 1
                log.debug(
                    "vehicle %d ate poison at (%.1f, %.1f)", vehicle.id, eaten_poison.position.x, eaten_poison.position.y
                )
        boundary.apply_boundary(self._config.boundary_mode, self._vehicles, self.bounds)
        self._ticks += 1

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        food_before = self._food_eaten
        poison_before = self._poison_eaten
        self.tick()
        duration_ms = (perf_counter() - start) * 1000.0
        self._metrics = metrics_system.create_metrics(
            tick,
            self._vehicles,
            self._food,
            self._poison,
            self._food_eaten - food_before,
            self._poison_eaten - poison_before,
            duration_ms,
        )
        return self._metrics

    def totals(self) -> Dict[str, int]:
        return {"food_eaten": self._food_eaten, "poison_eaten": self._poison_eaten}

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics
        if metrics is None or metrics.tick != tick:
            metrics = metrics_system.create_metrics(tick, self._vehicles, self._food, self._poison, 0, 0, 0.0)
        width, height = self.bounds
        return Snapshot(
            tick=tick,
            metrics=metrics,
            vehicles=[self._vehicle_payload(vehicle) for vehicle in self._vehicles],
            food=[self._stimulus_payload(stimulus) for stimulus in self._food],
            poison=[self._stimulus_payload(stimulus) for stimulus in self._poison],
            world=SnapshotWorld(width=width, height=height),
            metadata=SnapshotMetadata(
                seed=self._config.seed,
                desired_fps=self._config.desired_fps,
                boundary_mode=self._config.boundary_mode,
                top_speed=self._config.vehicle.max_speed_range[1],
            ),
        )

    @staticmethod
    def _vehicle_payload(vehicle: Vehicle) -> Dict[str, Any]:
        return {
            "id": vehicle.id,
            "x": vehicle.position.x,
            "y": vehicle.position.y,
            "vx": vehicle.velocity.x,
            "vy": vehicle.velocity.y,
            "heading": vehicle.angle,
            "size": vehicle.size,
            "speed": vehicle.speed,
            "dna": [vehicle.dna[0], vehicle.dna[1]],
            "food_eaten": vehicle.food_eaten,
            "poison_eaten": vehicle.poison_eaten,
        }

    @staticmethod
    def _stimulus_payload(stimulus: Stimulus) -> Dict[str, Any]:
        return {"x": stimulus.position.x, "y": stimulus.position.y, "size": stimulus.size}

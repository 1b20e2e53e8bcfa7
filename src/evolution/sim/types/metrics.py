from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    vehicles: int
    food: int
    poison: int
    food_eaten: int
    poison_eaten: int
    average_speed: float
    average_food_gene: float
    average_poison_gene: float
    tick_duration_ms: float = 0.0

from __future__ import annotations

from typing import List, Tuple

from ..core.stimulus import Stimulus
from ..core.vehicle import Vehicle
from ..types.metrics import TickMetrics


def population_stats(vehicles: List[Vehicle]) -> Tuple[float, float, float]:
    count = len(vehicles)
    if count == 0:
        return 0.0, 0.0, 0.0
    speed_sum = 0.0
    food_gene_sum = 0.0
    poison_gene_sum = 0.0
    for vehicle in vehicles:
        speed_sum += vehicle.velocity.length()
        food_gene_sum += vehicle.dna[0]
        poison_gene_sum += vehicle.dna[1]
    return speed_sum / count, food_gene_sum / count, poison_gene_sum / count


def create_metrics(
    tick: int,
    vehicles: List[Vehicle],
    food: List[Stimulus],
    poison: List[Stimulus],
    food_eaten: int,
    poison_eaten: int,
    duration_ms: float,
) -> TickMetrics:
    avg_speed, avg_food_gene, avg_poison_gene = population_stats(vehicles)
    return TickMetrics(
        tick=tick,
        vehicles=len(vehicles),
        food=len(food),
        poison=len(poison),
        food_eaten=food_eaten,
        poison_eaten=poison_eaten,
        average_speed=avg_speed,
        average_food_gene=avg_food_gene,
        average_poison_gene=avg_poison_gene,
        tick_duration_ms=duration_ms,
    )

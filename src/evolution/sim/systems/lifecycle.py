from __future__ import annotations

from typing import List

from ..core.config import SimulationConfig, StimulusConfig
from ..core.rng import DeterministicRng
from ..core.stimulus import Stimulus, StimulusKind
from ..core.vehicle import Vehicle
from ..utils.math2d import map_range


def spawn_vehicle(config: SimulationConfig, rng: DeterministicRng, vehicle_id: int) -> Vehicle:
    vehicle_config = config.vehicle
    size = rng.next_range(*vehicle_config.size_range)
    max_speed = map_range(size, vehicle_config.size_range, vehicle_config.max_speed_range)
    max_steering_force = map_range(size, vehicle_config.size_range, vehicle_config.max_steering_force_range)
    angle = rng.next_angle()
    position = rng.next_point(*config.window_size)
    dna = (
        rng.next_range(*vehicle_config.dna_range),
        rng.next_range(*vehicle_config.dna_range),
    )
    return Vehicle(
        id=vehicle_id,
        size=size,
        max_speed=max_speed,
        max_steering_force=max_steering_force,
        position=position,
        angle=angle,
        dna=dna,
        perception_food=vehicle_config.perception.food,
        perception_poison=vehicle_config.perception.poison,
    )


def spawn_vehicles(config: SimulationConfig, rng: DeterministicRng) -> List[Vehicle]:
    return [spawn_vehicle(config, rng, vehicle_id) for vehicle_id in range(config.vehicle.quantity)]


def spawn_stimuli(
    kind: StimulusKind,
    stimulus_config: StimulusConfig,
    window_size: tuple[float, float],
    rng: DeterministicRng,
) -> List[Stimulus]:
    stimuli: List[Stimulus] = []
    for _ in range(stimulus_config.quantity):
        size = rng.next_range(*stimulus_config.size_range)
        stimuli.append(Stimulus(size=size, position=rng.next_point(*window_size), kind=kind))
    return stimuli

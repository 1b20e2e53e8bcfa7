from __future__ import annotations

import math
from typing import List, TYPE_CHECKING

from pygame.math import Vector2

from ..core.stimulus import Stimulus
from ..utils.math2d import _clamp_length, _safe_normalize_xy

if TYPE_CHECKING:
    from ..core.vehicle import Vehicle


def nearest_stimulus(position: Vector2, stimuli: List[Stimulus]) -> tuple[int, float] | None:
    """Index of and distance to the closest stimulus, or None for an empty list.

    Ties go to the lower index.
    """
    best_index = -1
    best_dist_sq = math.inf
    pos_x = position.x
    pos_y = position.y
    for index, stimulus in enumerate(stimuli):
        offset_x = stimulus.position.x - pos_x
        offset_y = stimulus.position.y - pos_y
        dist_sq = offset_x * offset_x + offset_y * offset_y
        if dist_sq < best_dist_sq:
            best_dist_sq = dist_sq
            best_index = index
    if best_index < 0:
        return None
    return best_index, math.sqrt(best_dist_sq)


def seek(vehicle: Vehicle, target: Vector2) -> Vector2:
    position = vehicle.position
    desired = _safe_normalize_xy(target.x - position.x, target.y - position.y) * vehicle.max_speed
    steer = desired - vehicle.velocity
    return _clamp_length(steer, vehicle.max_steering_force)


def in_contact(vehicle: Vehicle, stimulus: Stimulus, distance: float) -> bool:
    return distance <= vehicle.size / 2.0 + stimulus.size / 2.0


def eat(
    vehicle: Vehicle,
    stimuli: List[Stimulus],
    weight: float,
    perception: float,
) -> tuple[Vector2, Stimulus | None]:
    """Consume the nearest stimulus on contact, otherwise steer toward it.

    Returns the weighted steering contribution and the consumed stimulus. A
    consumption never produces steering in the same call.
    """
    found = nearest_stimulus(vehicle.position, stimuli)
    if found is None:
        return Vector2(), None
    index, distance = found
    target = stimuli[index]
    if in_contact(vehicle, target, distance):
        # Scan is finished before the list is touched; only `index` is removed.
        return Vector2(), stimuli.pop(index)
    if distance <= perception:
        return seek(vehicle, target.position) * weight, None
    return Vector2(), None

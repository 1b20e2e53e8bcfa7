from __future__ import annotations

from typing import Iterable

from ..core.vehicle import Vehicle


def wrap_position(vehicle: Vehicle, width: float, height: float) -> None:
    vehicle.position.x %= width
    vehicle.position.y %= height


def clamp_position(vehicle: Vehicle, width: float, height: float) -> None:
    position = vehicle.position
    if position.x < 0.0 or position.x > width:
        position.x = min(max(position.x, 0.0), width)
        vehicle.velocity.x = 0.0
    if position.y < 0.0 or position.y > height:
        position.y = min(max(position.y, 0.0), height)
        vehicle.velocity.y = 0.0


def apply_boundary(mode: str, vehicles: Iterable[Vehicle], bounds: tuple[float, float]) -> None:
    if mode == "none":
        return
    width, height = bounds
    handler = wrap_position if mode == "wrap" else clamp_position
    for vehicle in vehicles:
        handler(vehicle, width, height)

from __future__ import annotations

import math

import pytest
from pygame.math import Vector2
from pytest import approx

from evolution.sim.core.config import PerceptionConfig, SimulationConfig, StimulusConfig, VehicleConfig
from evolution.sim.core.stimulus import Stimulus, StimulusKind
from evolution.sim.core.world import World
from evolution.sim.systems.steering import nearest_stimulus
from evolution.sim.utils.math2d import map_range


def _config(**overrides) -> SimulationConfig:
    values = dict(
        seed=1234,
        window_size=(400.0, 300.0),
        vehicle=VehicleConfig(
            quantity=12,
            size_range=(8.0, 16.0),
            max_speed_range=(3.0, 1.5),
            max_steering_force_range=(0.1, 0.3),
            perception=PerceptionConfig(food=80.0, poison=60.0),
        ),
        food=StimulusConfig(quantity=60, size_range=(4.0, 8.0)),
        poison=StimulusConfig(quantity=20, size_range=(4.0, 8.0)),
    )
    values.update(overrides)
    return SimulationConfig(**values)


def _state(world: World):
    return (
        [(v.position.x, v.position.y, v.velocity.x, v.velocity.y, v.angle) for v in world.vehicles],
        [(s.position.x, s.position.y, s.size) for s in world.food],
        [(s.position.x, s.position.y, s.size) for s in world.poison],
    )


def test_spawns_exact_quantities():
    world = World(_config())
    assert len(world.vehicles) == 12
    assert len(world.food) == 60
    assert len(world.poison) == 20
    assert all(s.kind is StimulusKind.FOOD for s in world.food)
    assert all(s.kind is StimulusKind.POISON for s in world.poison)


def test_spawned_vehicles_respect_ranges_and_derivations():
    config = _config()
    world = World(config)
    vehicle_config = config.vehicle
    width, height = config.window_size
    for vehicle in world.vehicles:
        assert vehicle_config.size_range[0] <= vehicle.size < vehicle_config.size_range[1]
        assert 0.0 <= vehicle.position.x < width
        assert 0.0 <= vehicle.position.y < height
        assert 0.0 <= vehicle.angle < 2.0 * math.pi
        assert all(-5.0 <= gene < 5.0 for gene in vehicle.dna)
        assert vehicle.max_speed == approx(map_range(vehicle.size, vehicle_config.size_range, vehicle_config.max_speed_range))
        assert vehicle.max_steering_force == approx(
            map_range(vehicle.size, vehicle_config.size_range, vehicle_config.max_steering_force_range)
        )
        assert vehicle.perception_food == 80.0
        assert vehicle.perception_poison == 60.0
        assert vehicle.velocity == Vector2()
    for stimulus in world.food + world.poison:
        assert 4.0 <= stimulus.size < 8.0


def test_deterministic_ticks():
    world_a = World(_config())
    world_b = World(_config())
    for _ in range(50):
        world_a.tick()
        world_b.tick()
    assert _state(world_a) == _state(world_b)


def test_reset_matches_fresh_world():
    world = World(_config())
    fresh = _state(world)
    for tick in range(30):
        world.step(tick)
    world.reset()
    assert world.ticks == 0
    assert world.metrics is None
    assert _state(world) == fresh


def test_serialized_consumption_first_vehicle_wins():
    world = World(_config(vehicle=VehicleConfig(quantity=2), food=StimulusConfig(quantity=0), poison=StimulusConfig(quantity=0)))
    first, second = world.vehicles
    for vehicle in (first, second):
        vehicle.position = Vector2(100.0, 100.0)
        vehicle.velocity = Vector2()
        vehicle.size = 10.0
        vehicle.dna = (1.0, 1.0)
    world.food.append(Stimulus(size=4.0, position=Vector2(102.0, 100.0), kind=StimulusKind.FOOD))

    world.tick()

    assert world.food == []
    assert first.food_eaten == 1
    assert second.food_eaten == 0
    # Neither vehicle had anything to steer toward once the food was gone.
    assert first.velocity == Vector2()
    assert second.velocity == Vector2()


def test_stimulus_counts_never_increase_and_speed_stays_bounded():
    world = World(_config())
    food_count = len(world.food)
    poison_count = len(world.poison)
    for _ in range(200):
        world.tick()
        assert len(world.food) <= food_count
        assert len(world.poison) <= poison_count
        food_count = len(world.food)
        poison_count = len(world.poison)
        for vehicle in world.vehicles:
            assert vehicle.velocity.length() <= vehicle.max_speed + 1e-9


def test_first_vehicle_consumes_nearest_food_in_contact():
    world = World(_config())
    for _ in range(300):
        leader = world.vehicles[0]
        found = nearest_stimulus(leader.position, world.food)
        target = None
        if found is not None:
            index, distance = found
            candidate = world.food[index]
            if distance <= leader.size / 2 + candidate.size / 2:
                target = candidate
        world.tick()
        if target is not None:
            assert all(stimulus is not target for stimulus in world.food)


def test_step_reports_metrics():
    world = World(_config(food=StimulusConfig(quantity=0), poison=StimulusConfig(quantity=0)))
    metrics = world.step(0)
    assert metrics.tick == 0
    assert metrics.vehicles == 12
    assert metrics.food == 0
    assert metrics.poison == 0
    assert metrics.food_eaten == 0
    assert metrics.average_speed == approx(0.0)
    assert metrics.average_food_gene == approx(sum(v.dna[0] for v in world.vehicles) / 12)
    assert metrics.tick_duration_ms >= 0.0
    assert world.metrics is metrics


def test_step_counts_consumption_per_tick():
    world = World(_config(vehicle=VehicleConfig(quantity=1), food=StimulusConfig(quantity=0), poison=StimulusConfig(quantity=0)))
    vehicle = world.vehicles[0]
    world.food.append(Stimulus(size=4.0, position=Vector2(vehicle.position), kind=StimulusKind.FOOD))
    world.poison.append(Stimulus(size=4.0, position=Vector2(vehicle.position), kind=StimulusKind.POISON))

    metrics = world.step(0)

    assert (metrics.food_eaten, metrics.poison_eaten) == (1, 1)
    assert world.totals() == {"food_eaten": 1, "poison_eaten": 1}
    assert world.step(1).food_eaten == 0


def test_snapshot_contains_entities_and_metadata():
    world = World(_config(seed=7))
    world.step(0)
    snapshot = world.snapshot(0)

    assert snapshot.world.width == approx(400.0)
    assert snapshot.world.height == approx(300.0)
    assert snapshot.metadata.seed == 7
    assert snapshot.metadata.boundary_mode == "none"
    assert snapshot.metadata.top_speed == approx(1.5)
    assert snapshot.metrics.vehicles == len(world.vehicles)
    assert len(snapshot.food) == len(world.food)
    assert len(snapshot.poison) == len(world.poison)
    payload = snapshot.vehicles[0]
    for key in ["id", "x", "y", "vx", "vy", "heading", "size", "speed", "dna"]:
        assert key in payload
    assert payload["speed"] == approx(Vector2(payload["vx"], payload["vy"]).length())


def test_vehicles_may_drift_out_of_bounds_by_default():
    world = World(_config(vehicle=VehicleConfig(quantity=1), food=StimulusConfig(quantity=0), poison=StimulusConfig(quantity=0)))
    vehicle = world.vehicles[0]
    vehicle.position = Vector2(399.0, 10.0)
    vehicle.velocity = Vector2(vehicle.max_speed, 0.0)
    for _ in range(10):
        world.tick()
    assert vehicle.position.x > 400.0


@pytest.mark.parametrize(
    ("mode", "expected_x"),
    [("wrap", 1.0), ("clamp", 400.0)],
)
def test_boundary_modes(mode, expected_x):
    config = _config(
        boundary_mode=mode,
        vehicle=VehicleConfig(quantity=1, max_speed_range=(2.0, 2.0)),
        food=StimulusConfig(quantity=0),
        poison=StimulusConfig(quantity=0),
    )
    world = World(config)
    vehicle = world.vehicles[0]
    vehicle.position = Vector2(399.0, 10.0)
    vehicle.velocity = Vector2(2.0, 0.0)

    world.tick()

    assert vehicle.position.x == approx(expected_x)
    assert vehicle.position.y == approx(10.0)


@pytest.mark.slow
def test_long_run_consumes_food():
    world = World(SimulationConfig())
    food_start = len(world.food)
    for tick in range(5000):
        world.step(tick)
    assert len(world.food) < food_start

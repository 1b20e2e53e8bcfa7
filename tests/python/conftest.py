import sys
from pathlib import Path

import pytest
from pygame.math import Vector2

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from evolution.sim.core.vehicle import Vehicle  # noqa: E402


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run long simulations that are skipped by default",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "slow: marks long-running simulation tests",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-slow"):
        return

    skip_marker = pytest.mark.skip(
        reason="Long simulation (use --run-slow)",
    )

    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_marker)


def make_vehicle(
    position: tuple[float, float] = (50.0, 50.0),
    velocity: tuple[float, float] = (0.0, 0.0),
    dna: tuple[float, float] = (1.0, 0.0),
    size: float = 0.0,
    max_speed: float = 1.0,
    max_steering_force: float = 0.5,
    perception_food: float = 1000.0,
    perception_poison: float = 1000.0,
    vehicle_id: int = 0,
) -> Vehicle:
    return Vehicle(
        id=vehicle_id,
        size=size,
        max_speed=max_speed,
        max_steering_force=max_steering_force,
        position=Vector2(position),
        angle=0.0,
        dna=dna,
        perception_food=perception_food,
        perception_poison=perception_poison,
        velocity=Vector2(velocity),
    )


@pytest.fixture
def vehicle_factory():
    return make_vehicle

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

BOUNDARY_MODES = ("none", "wrap", "clamp")


@dataclass
class PerceptionConfig:
    food: float = 100.0
    poison: float = 100.0


@dataclass
class VehicleConfig:
    quantity: int = 20
    size_range: tuple[float, float] = (12.0, 28.0)
    max_speed_range: tuple[float, float] = (4.0, 1.5)
    max_steering_force_range: tuple[float, float] = (0.1, 0.3)
    dna_range: tuple[float, float] = (-5.0, 5.0)
    perception: PerceptionConfig = field(default_factory=PerceptionConfig)


@dataclass
class StimulusConfig:
    quantity: int = 50
    size_range: tuple[float, float] = (4.0, 10.0)


@dataclass
class SimulationConfig:
    fullscreen: bool = False
    window_size: tuple[float, float] = (1280.0, 720.0)
    desired_fps: int = 60
    show_fps: bool = True
    seed: int = 42
    # Positions are not wrapped or reflected unless a mode is chosen here.
    boundary_mode: str = "none"
    vehicle: VehicleConfig = field(default_factory=VehicleConfig)
    food: StimulusConfig = field(default_factory=StimulusConfig)
    poison: StimulusConfig = field(default_factory=lambda: StimulusConfig(quantity=20))

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        try:
            data = yaml.safe_load(Path(path).read_text())
        except yaml.YAMLError as exc:
            raise ConfigError(str(path), "valid YAML") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(str(path), "a YAML mapping at the top level")
        return load_config(data)

    def validate(self) -> None:
        width, height = self.window_size
        _require(width > 0, "window_size.0", "> 0")
        _require(height > 0, "window_size.1", "> 0")
        _require(self.desired_fps > 0, "desired_fps", "> 0")
        _require(self.boundary_mode in BOUNDARY_MODES, "boundary_mode", f"one of {', '.join(BOUNDARY_MODES)}")

        vehicle = self.vehicle
        _require(vehicle.quantity >= 0, "vehicle.quantity", ">= 0")
        _check_size_range(vehicle.size_range, "vehicle.size_range")
        for name in ("max_speed_range", "max_steering_force_range"):
            low, high = getattr(vehicle, name)
            _require(low >= 0 and high >= 0, f"vehicle.{name}", "both endpoints >= 0")
        _require(vehicle.dna_range[0] <= vehicle.dna_range[1], "vehicle.dna_range", "lo <= hi")
        _require(vehicle.perception.food >= 0, "vehicle.perception.food", ">= 0")
        _require(vehicle.perception.poison >= 0, "vehicle.perception.poison", ">= 0")

        for name in ("food", "poison"):
            stimulus = getattr(self, name)
            _require(stimulus.quantity >= 0, f"{name}.quantity", ">= 0")
            _check_size_range(stimulus.size_range, f"{name}.size_range")


def _require(condition: bool, field_name: str, predicate: str) -> None:
    if not condition:
        raise ConfigError(field_name, predicate)


def _check_size_range(value: tuple[float, float], field_name: str) -> None:
    low, high = value
    _require(low > 0, field_name, "lo > 0")
    _require(low < high, field_name, "lo < hi")


def _pair(value: Any, field_name: str) -> tuple[float, float]:
    if isinstance(value, (tuple, list)) and len(value) == 2:
        try:
            return (float(value[0]), float(value[1]))
        except (TypeError, ValueError) as exc:
            raise ConfigError(field_name, "a pair of numbers") from exc
    raise ConfigError(field_name, "a pair of numbers")


def _number(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(field_name, "a number") from exc


def _integer(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(field_name, "an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ConfigError(field_name, "an integer")


def _flag(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(field_name, "true or false")
    return value


def _section(raw: Any, field_name: str) -> dict:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(field_name, "a mapping")
    return raw


def _check_keys(raw: dict, cls: type, field_name: str) -> None:
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(raw) - known)
    if unknown:
        prefix = f"{field_name}." if field_name else ""
        raise ConfigError(f"{prefix}{unknown[0]}", "a recognized field")


def _load_stimulus(raw: Any, field_name: str, default: StimulusConfig) -> StimulusConfig:
    values = _section(raw, field_name)
    _check_keys(values, StimulusConfig, field_name)
    return StimulusConfig(
        quantity=_integer(values.get("quantity", default.quantity), f"{field_name}.quantity"),
        size_range=_pair(values["size_range"], f"{field_name}.size_range")
        if "size_range" in values
        else default.size_range,
    )


def _load_vehicle(raw: Any) -> VehicleConfig:
    default = VehicleConfig()
    values = _section(raw, "vehicle")
    _check_keys(values, VehicleConfig, "vehicle")
    perception_raw = _section(values.get("perception"), "vehicle.perception")
    _check_keys(perception_raw, PerceptionConfig, "vehicle.perception")
    perception = PerceptionConfig(
        **{k: _number(v, f"vehicle.perception.{k}") for k, v in perception_raw.items()}
    )
    ranges = {
        name: _pair(values[name], f"vehicle.{name}") if name in values else getattr(default, name)
        for name in ("size_range", "max_speed_range", "max_steering_force_range", "dna_range")
    }
    return VehicleConfig(
        quantity=_integer(values.get("quantity", default.quantity), "vehicle.quantity"),
        perception=perception,
        **ranges,
    )


def load_config(raw: dict) -> SimulationConfig:
    _check_keys(raw, SimulationConfig, "")
    default = SimulationConfig()
    sim_values: dict[str, Any] = {}
    for name in ("fullscreen", "show_fps"):
        if name in raw:
            sim_values[name] = _flag(raw[name], name)
    for name in ("desired_fps", "seed"):
        if name in raw:
            sim_values[name] = _integer(raw[name], name)
    if "boundary_mode" in raw:
        if not isinstance(raw["boundary_mode"], str):
            raise ConfigError("boundary_mode", "a string")
        sim_values["boundary_mode"] = raw["boundary_mode"]
    window_size = _pair(raw["window_size"], "window_size") if "window_size" in raw else default.window_size
    return SimulationConfig(
        window_size=window_size,
        vehicle=_load_vehicle(raw.get("vehicle")),
        food=_load_stimulus(raw.get("food"), "food", default.food),
        poison=_load_stimulus(raw.get("poison"), "poison", default.poison),
        **sim_values,
    )

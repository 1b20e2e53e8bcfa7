from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from pygame.math import Vector2

from .stimulus import Stimulus
from ..systems import steering
from ..utils.math2d import _clamp_length, _heading_from_velocity


@dataclass(slots=True, eq=False)
class Vehicle:
    """A steering agent with a two-gene weight vector.

    ``dna[0]`` scales the pull toward food and ``dna[1]`` the pull toward
    poison; a negative weight turns attraction into repulsion.
    """

    id: int
    size: float
    max_speed: float
    max_steering_force: float
    position: Vector2
    angle: float
    dna: tuple[float, float]
    perception_food: float
    perception_poison: float
    velocity: Vector2 = field(default_factory=Vector2)
    acceleration: Vector2 = field(default_factory=Vector2)
    food_eaten: int = 0
    poison_eaten: int = 0

    @property
    def speed(self) -> float:
        return self.velocity.length()

    def apply_force(self, force: Vector2) -> None:
        self.acceleration += force

    def behaviors(
        self, food: List[Stimulus], poison: List[Stimulus]
    ) -> tuple[Stimulus | None, Stimulus | None]:
        """Eat or steer for food, then for poison.

        Mutates ``food`` and ``poison`` in place and returns whatever was
        consumed from each.
        """
        food_steer, eaten_food = steering.eat(self, food, self.dna[0], self.perception_food)
        self.apply_force(food_steer)
        poison_steer, eaten_poison = steering.eat(self, poison, self.dna[1], self.perception_poison)
        self.apply_force(poison_steer)
        if eaten_food is not None:
            self.food_eaten += 1
        if eaten_poison is not None:
            self.poison_eaten += 1
        return eaten_food, eaten_poison

    def update(self) -> None:
        self.velocity = _clamp_length(self.velocity + self.acceleration, self.max_speed)
        self.position += self.velocity
        self.angle = _heading_from_velocity(self.velocity, self.angle)
        self.acceleration = Vector2()

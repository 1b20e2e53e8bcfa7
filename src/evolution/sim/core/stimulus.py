from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pygame.math import Vector2


class StimulusKind(str, Enum):
    FOOD = "food"
    POISON = "poison"


STIMULUS_COLORS = {
    StimulusKind.FOOD: (0.0, 1.0, 0.0, 0.8),
    StimulusKind.POISON: (1.0, 0.0, 0.0, 0.8),
}


@dataclass(slots=True, eq=False)
class Stimulus:
    """A static disc that vehicles perceive and consume.

    Compared by identity: two stimuli at the same spot are still distinct.
    """

    size: float
    position: Vector2
    kind: StimulusKind

    @property
    def radius(self) -> float:
        return self.size / 2.0

    @property
    def color(self) -> tuple[float, float, float, float]:
        return STIMULUS_COLORS[self.kind]

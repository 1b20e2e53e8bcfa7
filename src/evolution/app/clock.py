from __future__ import annotations


class FixedStepClock:
    """Turns elapsed wall time into a whole number of simulation ticks.

    Leftover time carries over to the next frame. When a frame would need
    more than ``max_catch_up`` ticks the backlog is dropped instead.
    """

    def __init__(self, desired_fps: int, max_catch_up: int = 10):
        if desired_fps <= 0:
            raise ValueError("desired_fps must be positive")
        self._step = 1.0 / desired_fps
        self._max_catch_up = max(1, max_catch_up)
        self._residual = 0.0

    @property
    def step_seconds(self) -> float:
        return self._step

    @property
    def residual(self) -> float:
        return self._residual

    def advance(self, elapsed_seconds: float) -> int:
        self._residual += max(0.0, elapsed_seconds)
        ticks = 0
        while self._residual >= self._step:
            self._residual -= self._step
            ticks += 1
            if ticks >= self._max_catch_up:
                self._residual = 0.0
                break
        return ticks

from __future__ import annotations

import argparse
import logging
import math
import os
import sys
from pathlib import Path
from typing import List, Optional

import pygame
from pygame.math import Vector2

from .clock import FixedStepClock
from ..sim.core.config import SimulationConfig
from ..sim.core.errors import ConfigError
from ..sim.core.stimulus import Stimulus
from ..sim.core.vehicle import Vehicle
from ..sim.core.world import World

log = logging.getLogger(__name__)

BACKGROUND = (26, 51, 77)
VEHICLE_COLOR = (240, 240, 240)
DEFAULT_ASSETS_DIR = Path(__file__).resolve().parents[3] / "assets"


def to_rgba(color: tuple[float, float, float, float]) -> tuple[int, int, int, int]:
    return tuple(int(round(channel * 255)) for channel in color)  # type: ignore[return-value]


def frame_index(speed: float, top_speed: float, frame_count: int) -> int:
    """Pick an atlas frame: faster vehicles show later frames.

    `top_speed` is the upper endpoint of `vehicle.max_speed_range`, which is not
    the fastest vehicle when that range decreases with size.
    """
    if frame_count <= 1 or top_speed <= 0:
        return 0
    ratio = max(0.0, min(1.0, speed / top_speed))
    return min(int(ratio * frame_count), frame_count - 1)


def vehicle_polygon(vehicle: Vehicle) -> List[tuple[float, float]]:
    half = vehicle.size / 2.0
    points = [Vector2(half, 0.0), Vector2(-half, half * 0.6), Vector2(-half, -half * 0.6)]
    degrees = math.degrees(vehicle.angle)
    return [tuple(vehicle.position + point.rotate(degrees)) for point in points]  # type: ignore[misc]


def load_sprite_atlas(path: Path) -> List[pygame.Surface]:
    """Split a horizontal strip of square frames; empty when the file is missing."""
    if not path.is_file():
        log.warning("sprite atlas %s not found, drawing vehicles as triangles", path)
        return []
    atlas = pygame.image.load(str(path))
    height = atlas.get_height()
    count = max(1, atlas.get_width() // max(1, height))
    return [atlas.subsurface(pygame.Rect(i * height, 0, height, height)).copy() for i in range(count)]


class Viewer:
    def __init__(self, config: SimulationConfig, assets_dir: Path = DEFAULT_ASSETS_DIR):
        self.config = config
        self.world = World(config)
        self.clock = FixedStepClock(config.desired_fps)
        self.assets_dir = assets_dir
        self.top_speed = config.vehicle.max_speed_range[1]
        self._frames: List[pygame.Surface] = []
        self._font: Optional[pygame.font.Font] = None
        self._screen: Optional[pygame.Surface] = None

    def _open_window(self) -> pygame.Surface:
        pygame.init()
        pygame.display.set_caption("Evolution!")
        if self.config.fullscreen:
            screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            width, height = self.config.window_size
            screen = pygame.display.set_mode((int(width), int(height)))
        self._frames = [frame.convert_alpha() for frame in load_sprite_atlas(self.assets_dir / "frames.png")]
        self._font = pygame.font.Font(None, 24)
        return screen

    def _draw_stimuli(self, overlay: pygame.Surface, stimuli: List[Stimulus]) -> None:
        for stimulus in stimuli:
            radius = max(1, int(round(stimulus.radius)))
            pygame.draw.circle(overlay, to_rgba(stimulus.color), stimulus.position, radius)

    def _draw_vehicle(self, screen: pygame.Surface, vehicle: Vehicle) -> None:
        if not self._frames:
            pygame.draw.polygon(screen, VEHICLE_COLOR, vehicle_polygon(vehicle))
            return
        frame = self._frames[frame_index(vehicle.speed, self.top_speed, len(self._frames))]
        scale = max(1, int(round(vehicle.size)))
        sprite = pygame.transform.scale(frame, (scale, scale))
        # Atlas frames face right; pygame rotates counter-clockwise with y pointing down.
        sprite = pygame.transform.rotate(sprite, -math.degrees(vehicle.angle))
        screen.blit(sprite, sprite.get_rect(center=(vehicle.position.x, vehicle.position.y)))

    def draw(self, fps: float) -> None:
        screen = self._screen
        if screen is None:
            return
        screen.fill(BACKGROUND)
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        self._draw_stimuli(overlay, self.world.poison)
        self._draw_stimuli(overlay, self.world.food)
        screen.blit(overlay, (0, 0))
        for vehicle in self.world.vehicles:
            self._draw_vehicle(screen, vehicle)
        if self.config.show_fps and self._font is not None:
            text = self._font.render(f"FPS: {fps:.1f}", True, (255, 255, 255))
            screen.blit(text, (5, 5))
        pygame.display.flip()

    def run(self) -> None:
        self._screen = self._open_window()
        frame_clock = pygame.time.Clock()
        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False
                elapsed = frame_clock.tick() / 1000.0
                for _ in range(self.clock.advance(elapsed)):
                    self.world.tick()
                self.draw(frame_clock.get_fps())
        finally:
            pygame.quit()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Windowed evolution simulation")
    parser.add_argument("--config", type=Path, default=Path("config.yaml"), help="YAML configuration file")
    parser.add_argument("--assets", type=Path, default=DEFAULT_ASSETS_DIR, help="Directory holding frames.png")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    try:
        config = SimulationConfig.from_yaml(args.config)
        viewer = Viewer(config, assets_dir=args.assets)
    except (ConfigError, OSError) as exc:
        log.error("Failed to load `%s`: %s", args.config, exc)
        sys.exit(1)
    viewer.run()


if __name__ == "__main__":
    main()

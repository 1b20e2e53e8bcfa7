from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pygame

from evolution.app.viewer import load_sprite_atlas

ROOT = Path(__file__).resolve().parents[2]


def test_generate_sprite_atlas(tmp_path: Path) -> None:
    script_path = ROOT / "scripts" / "generate_sprite_atlas.py"
    result = subprocess.run(
        [
            sys.executable,
            str(script_path),
            "--output-dir",
            str(tmp_path),
            "--frame-size",
            "8",
            "--frames",
            "3",
        ],
        check=True,
        capture_output=True,
        text=True,
    )
    assert "Generated sprite atlas" in result.stdout

    atlas_path = tmp_path / "frames.png"
    assert atlas_path.is_file()

    frames = load_sprite_atlas(atlas_path)
    assert len(frames) == 3
    assert all(frame.get_size() == (8, 8) for frame in frames)
    assert isinstance(frames[0], pygame.Surface)

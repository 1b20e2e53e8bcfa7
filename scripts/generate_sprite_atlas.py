#!/usr/bin/env python3
"""Generate a placeholder vehicle sprite atlas (frames.png)."""
from __future__ import annotations

import argparse
import struct
import zlib
from pathlib import Path

Pixel = tuple[int, int, int, int]

BODY: Pixel = (235, 235, 235, 255)
FLAME: Pixel = (255, 150, 40, 255)
CLEAR: Pixel = (0, 0, 0, 0)


def build_png(width: int, height: int, pixels: list[list[Pixel]]) -> bytes:
    raw = b"".join(b"\x00" + b"".join(bytes(p) for p in row) for row in pixels)
    compressed = zlib.compress(raw)

    def chunk(chunk_type: bytes, data: bytes) -> bytes:
        return (
            struct.pack(">I", len(data))
            + chunk_type
            + data
            + struct.pack(">I", zlib.crc32(chunk_type + data) & 0xFFFFFFFF)
        )

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IDAT", compressed) + chunk(
        b"IEND", b""
    )


def frame_pixel(x: int, y: int, size: int, frame: int) -> Pixel:
    """A right-facing triangle with an exhaust flame that grows per frame."""
    center = (size - 1) / 2.0
    body_start = size // 4
    if x >= body_start:
        half_width = (size - 1 - x) * center / (size - 1 - body_start)
        if abs(y - center) <= half_width:
            return BODY
        return CLEAR
    flame_length = body_start * frame // 3
    if body_start - x <= flame_length and abs(y - center) <= 1:
        return FLAME
    return CLEAR


def build_atlas(frame_size: int, frame_count: int) -> bytes:
    width = frame_size * frame_count
    rows = [
        [frame_pixel(x % frame_size, y, frame_size, x // frame_size) for x in range(width)]
        for y in range(frame_size)
    ]
    return build_png(width, frame_size, rows)


def write_asset(path: Path, data: bytes, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} already exists. Use --overwrite to replace.")
    path.write_bytes(data)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a placeholder vehicle sprite atlas.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("assets"),
        help="Directory to write frames.png into.",
    )
    parser.add_argument("--frame-size", type=int, default=16)
    parser.add_argument("--frames", type=int, default=4)
    parser.add_argument(
        "--overwrite", action="store_true", help="Overwrite existing files."
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    write_asset(output_dir / "frames.png", build_atlas(args.frame_size, args.frames), args.overwrite)

    print(f"Generated sprite atlas in {output_dir}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Generate a placeholder 5x1 source strip for blob47.

Output: examples/road_strip.png  (80x16, 5 tiles in a row)
  0: isolated    lone paving stone
  1: surrounded  solid paving
  2: horizontal  left-right road
  3: vertical    top-bottom road
  4: crossing    paving with the four corners notched out

Usage:
    python scripts/gen_sources.py
    blob47 generate examples/road_strip.png --sheet
"""

import random
from pathlib import Path
from typing import Callable

from PIL import Image

TILE = 16
MARGIN = 3
random.seed(42)  # deterministic output

# ── Palette ───────────────────────────────────────────────
ROAD_BASE = [(150, 142, 128), (160, 151, 136), (142, 134, 120)]
ROAD_SPECK = [(120, 113, 101), (176, 168, 152)]
ROAD_EDGE = [(88, 82, 72), (80, 74, 66)]

Shape = Callable[[int, int], bool]


def pick(palette: list[tuple]) -> tuple:
    return random.choice(palette)


def _low(v: int) -> bool:
    return v < MARGIN


def _high(v: int) -> bool:
    return v >= TILE - MARGIN


SHAPES: list[tuple[str, Shape]] = [
    ("isolated", lambda x, y: not (_low(x) or _high(x) or _low(y) or _high(y))),
    ("surrounded", lambda x, y: True),
    ("horizontal", lambda x, y: not (_low(y) or _high(y))),
    ("vertical", lambda x, y: not (_low(x) or _high(x))),
    ("crossing", lambda x, y: not ((_low(x) or _high(x)) and (_low(y) or _high(y)))),
]


def paint(img: Image.Image, ox: int, inside: Shape):
    """Fill the cells of one tile where *inside* holds, outlining its border.

    *inside* is also asked about the ring just outside the tile, so open
    sides continue seamlessly into the neighbouring tile.
    """
    px = img.load()
    for y in range(TILE):
        for x in range(TILE):
            if not inside(x, y):
                continue
            around = [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]
            if all(inside(nx, ny) for nx, ny in around):
                colour = pick(ROAD_SPECK) if random.random() < 0.08 else pick(ROAD_BASE)
            else:
                colour = pick(ROAD_EDGE)
            px[ox + x, y] = colour + (255,)


def main():
    strip = Image.new("RGBA", (TILE * len(SHAPES), TILE), (0, 0, 0, 0))
    for i, (_, inside) in enumerate(SHAPES):
        paint(strip, i * TILE, inside)

    out = Path(__file__).resolve().parent.parent / "examples" / "road_strip.png"
    out.parent.mkdir(parents=True, exist_ok=True)
    strip.save(out)
    print(f"Saved {out}  ({strip.width}x{strip.height})")


if __name__ == "__main__":
    main()

from __future__ import annotations

import pytest
from PIL import Image

from blob47.composer import ROLES, SourceSet

TILE = 4

# One solid colour per source role, so every output pixel tells where it
# was cropped from.
COLOURS = {
    "isolated": (255, 0, 0, 255),
    "surrounded": (0, 255, 0, 255),
    "horizontal": (0, 0, 255, 255),
    "vertical": (255, 255, 0, 255),
    "crossing": (0, 255, 255, 255),
}


def solid(colour: tuple[int, int, int, int], size: int = TILE) -> Image.Image:
    return Image.new("RGBA", (size, size), colour)


@pytest.fixture
def sources() -> SourceSet:
    return SourceSet(
        name="test",
        tile_size=TILE,
        **{role: solid(COLOURS[role]) for role in ROLES},
    )


@pytest.fixture
def strip_path(tmp_path):
    strip = Image.new("RGBA", (TILE * len(ROLES), TILE), (0, 0, 0, 0))
    for i, role in enumerate(ROLES):
        strip.paste(solid(COLOURS[role]), (i * TILE, 0))
    path = tmp_path / "road_strip.png"
    strip.save(path)
    return path

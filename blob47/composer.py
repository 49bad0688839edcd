"""Synthesise the 47 blob textures from five source tiles.

Sources (all the same even size):

    isolated    a lone tile, no neighbours
    surrounded  a tile fully enclosed on all 8 sides
    horizontal  a tile inside a left-right run
    vertical    a tile inside a top-bottom run
    crossing    a tile where four runs meet without filling the diagonals

Every output texture is four quadrants, one per corner, each cropped from the
source selected by that corner's slice ID.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from .codec import TEXTURE_COUNT, decode_all
from .directions import Aggregate, Compass, horizontal_of, vertical_of
from .errors import InvalidDirectionOperand
from .slices import CornerSliceMap, SliceID, edge_axis, require_corner

logger = logging.getLogger(__name__)

ROLES = ("isolated", "surrounded", "horizontal", "vertical", "crossing")

# Names used by older manifests
ROLE_ALIASES = {
    "standalone": "isolated",
    "intersection": "crossing",
}

TRANSPARENT = (0, 0, 0, 0)

# ---------------------------------------------------------------------------
# Source loading
# ---------------------------------------------------------------------------


@dataclass
class SourceSet:
    """The five source tiles a tileset is generated from."""

    name: str
    tile_size: int
    isolated: Image.Image
    surrounded: Image.Image
    horizontal: Image.Image
    vertical: Image.Image
    crossing: Image.Image

    def __post_init__(self) -> None:
        _check_tile_size(self.tile_size)
        for role in ROLES:
            w, h = getattr(self, role).size
            if w != self.tile_size or h != self.tile_size:
                raise ValueError(
                    f"Source '{role}': expected {self.tile_size}x{self.tile_size}, "
                    f"got {w}x{h}"
                )

    def image(self, role: str) -> Image.Image:
        return getattr(self, role)


def _check_tile_size(tile_size: int) -> None:
    if tile_size < 2 or tile_size % 2 != 0:
        raise ValueError(f"tile_size must be a positive even number, got {tile_size}")


def _open_rgba(path: Path) -> Image.Image:
    img = Image.open(path)
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    img.load()  # read pixels into memory, release file handle
    return img


def load_manifest(path: Path) -> SourceSet:
    """Load a JSON manifest naming one PNG per role.

    ``{"name": "road", "tile_size": 16, "sources": {"isolated": "a.png", ...}}``
    File paths are relative to the manifest.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if "tile_size" not in data:
        raise ValueError(f"Missing 'tile_size' in {path}")
    if "sources" not in data or not isinstance(data["sources"], dict):
        raise ValueError(f"Missing 'sources' mapping in {path}")

    tile_size = int(data["tile_size"])
    _check_tile_size(tile_size)

    images: dict[str, Image.Image] = {}
    for raw_role, file_rel in data["sources"].items():
        role = ROLE_ALIASES.get(raw_role.lower(), raw_role.lower())
        if role not in ROLES:
            raise ValueError(f"Unknown role '{raw_role}'. Valid: {list(ROLES)}")
        if role in images:
            raise ValueError(f"Role '{role}' given more than once in {path}")

        file_path = path.parent / file_rel
        if not file_path.exists():
            raise FileNotFoundError(f"Source '{role}': file not found: {file_path}")
        images[role] = _open_rgba(file_path)

    missing = [r for r in ROLES if r not in images]
    if missing:
        raise ValueError(f"Missing required roles: {missing}")

    name = str(data.get("name") or path.stem)
    return SourceSet(name=name, tile_size=tile_size, **images)


def load_strip(path: Path, tile_size: int | None = None) -> SourceSet:
    """Load a 5x1 PNG strip holding the sources in ``ROLES`` order."""
    if not path.exists():
        raise FileNotFoundError(f"Strip not found: {path}")

    img = _open_rgba(path)
    w, h = img.size
    if tile_size is None:
        tile_size = h
    _check_tile_size(tile_size)

    expected = (tile_size * len(ROLES), tile_size)
    if (w, h) != expected:
        raise ValueError(
            f"Strip {w}x{h} doesn't match 5x1 grid of {tile_size}x{tile_size} "
            f"(expected {expected[0]}x{expected[1]})"
        )

    images = {
        role: img.crop((i * tile_size, 0, (i + 1) * tile_size, tile_size))
        for i, role in enumerate(ROLES)
    }
    return SourceSet(name=path.stem, tile_size=tile_size, **images)


def load_sources(path: Path, tile_size: int | None = None) -> SourceSet:
    """Dispatch on the file suffix: ``.json`` manifest or ``.png`` strip."""
    suffix = path.suffix.lower()
    if suffix == ".json":
        if not path.exists():
            raise FileNotFoundError(f"Manifest not found: {path}")
        return load_manifest(path)
    if suffix == ".png":
        return load_strip(path, tile_size)
    raise ValueError(f"Unsupported input format: {suffix} (expected .json or .png)")


def validate_sources(sources: SourceSet) -> list[str]:
    """Return warnings about loaded sources."""
    warnings: list[str] = []
    for role in ROLES:
        alpha = sources.image(role).getchannel("A")
        if alpha.getextrema()[1] == 0:
            warnings.append(f"Source '{role}' is fully transparent")
    return warnings


# ---------------------------------------------------------------------------
# Crop & merge
# ---------------------------------------------------------------------------


def crop(image: Image.Image, corner: Compass) -> Image.Image:
    """Cut the quadrant of *image* owned by a diagonal *corner*."""
    corner = require_corner(corner)
    w, h = image.size
    half_w, half_h = w // 2, h // 2
    x = half_w if horizontal_of(corner) is Compass.RIGHT else 0
    y = half_h if vertical_of(corner) is Compass.BOTTOM else 0
    return image.crop((x, y, x + half_w, y + half_h))


def merge(base: Image.Image, other: Image.Image, direction: Compass) -> Image.Image:
    """Adjoin *other* on the *direction* side of *base*.

    The narrower of the two is centred on the cross axis; the gap stays
    transparent.
    """
    if not isinstance(direction, Compass):
        raise InvalidDirectionOperand(f"expected a compass direction, got {direction!r}")
    bw, bh = base.size
    ow, oh = other.size

    if direction in (Compass.LEFT, Compass.RIGHT):
        size = (bw + ow, max(bh, oh))
        bx, ox = (0, bw) if direction is Compass.RIGHT else (ow, 0)
        by, oy = (size[1] - bh) // 2, (size[1] - oh) // 2
    elif direction in (Compass.TOP, Compass.BOTTOM):
        size = (max(bw, ow), bh + oh)
        by, oy = (0, bh) if direction is Compass.BOTTOM else (oh, 0)
        bx, ox = (size[0] - bw) // 2, (size[0] - ow) // 2
    else:
        raise InvalidDirectionOperand(
            f"merge direction must be orthogonal, got {direction!r}"
        )

    out = Image.new("RGBA", size, TRANSPARENT)
    out.paste(base, (bx, by))
    out.paste(other, (ox, oy))
    return out


# ---------------------------------------------------------------------------
# Tile composition
# ---------------------------------------------------------------------------


def source_for(sources: SourceSet, corner: Compass, slice_id: SliceID) -> Image.Image:
    """Source tile a corner's quadrant is cut from."""
    if slice_id is SliceID.ISOLATED:
        return sources.isolated
    if slice_id is SliceID.FULLY_ENCLOSED:
        return sources.surrounded
    if slice_id is SliceID.CROSSING:
        return sources.crossing
    if edge_axis(corner, slice_id) is Aggregate.VERTICAL:
        return sources.vertical
    return sources.horizontal


def compose_tile(corner_slices: CornerSliceMap, sources: SourceSet) -> Image.Image:
    """Build one texture from the slice ID of each of its four corners."""
    quads = {}
    for corner in (
        Compass.TOP_LEFT,
        Compass.TOP_RIGHT,
        Compass.BOTTOM_LEFT,
        Compass.BOTTOM_RIGHT,
    ):
        if corner not in corner_slices:
            raise ValueError(f"Missing slice for corner {corner.name}")
        slice_id = SliceID(corner_slices[corner])
        quads[corner] = crop(source_for(sources, corner, slice_id), corner)

    top = merge(quads[Compass.TOP_LEFT], quads[Compass.TOP_RIGHT], Compass.RIGHT)
    bottom = merge(
        quads[Compass.BOTTOM_LEFT], quads[Compass.BOTTOM_RIGHT], Compass.RIGHT
    )
    return merge(top, bottom, Compass.BOTTOM)


def generate_textures(sources: SourceSet) -> list[Image.Image]:
    """All 47 textures, list position == texture index."""
    tiles: list[Image.Image] = []
    for index in range(TEXTURE_COUNT):
        slices = decode_all(index)
        logger.debug(
            "texture %d: %s",
            index,
            " ".join(f"{c.short}={s.pattern}" for c, s in slices.items()),
        )
        tiles.append(compose_tile(slices, sources))
    return tiles


def verify_output(tiles: list[Image.Image], sources: SourceSet) -> list[str]:
    """Run automatic sanity checks on generated tiles."""
    messages: list[str] = []

    expected = {0: "isolated", 15: "surrounded", 32: "crossing"}
    for index, role in expected.items():
        if tiles[index].tobytes() == sources.image(role).tobytes():
            messages.append(f"✓ texture {index} matches {role.upper()}")
        else:
            messages.append(
                f"⚠ texture {index} differs from {role.upper()}: check sources"
            )

    empty = [i for i, t in enumerate(tiles) if t.getchannel("A").getextrema()[1] == 0]
    if empty:
        messages.append(f"⚠ {len(empty)} textures fully transparent: {empty[:10]}")
    else:
        messages.append(f"✓ All {len(tiles)} textures have non-transparent pixels")
    return messages


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def layout_spritesheet(
    tiles: list[Image.Image],
    tile_size: int,
    columns: int = 8,
) -> Image.Image:
    """Arrange tiles row-major, ``columns`` per row, in index order."""
    if columns < 1:
        raise ValueError(f"columns must be >= 1, got {columns}")
    rows = (len(tiles) + columns - 1) // columns
    out = Image.new("RGBA", (columns * tile_size, rows * tile_size), TRANSPARENT)
    for index, tile in enumerate(tiles):
        c, r = index % columns, index // columns
        out.paste(tile, (c * tile_size, r * tile_size))
    return out


def save_textures(tiles: list[Image.Image], out_dir: Path, name: str) -> list[Path]:
    """Write ``{name}_{index}.png`` for every tile; return the paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    paths: list[Path] = []
    for index, tile in enumerate(tiles):
        path = out_dir / f"{name}_{index}.png"
        tile.save(path)
        paths.append(path)
    return paths


def load_textures(out_dir: Path, name: str) -> list[Image.Image]:
    """Read back ``{name}_{index}.png`` for all 47 indices.

    The list is indexed by texture index, so ``tiles[encode(n)]`` is the
    artwork for neighbourhood *n*.
    """
    if not out_dir.is_dir():
        raise FileNotFoundError(f"Texture directory not found: {out_dir}")

    missing = [
        i for i in range(TEXTURE_COUNT) if not (out_dir / f"{name}_{i}.png").exists()
    ]
    if missing:
        raise FileNotFoundError(
            f"Expected {TEXTURE_COUNT} textures in {out_dir}, "
            f"missing indices: {missing[:10]}"
        )

    tiles = [_open_rgba(out_dir / f"{name}_{i}.png") for i in range(TEXTURE_COUNT)]
    sizes = {t.size for t in tiles}
    if len(sizes) != 1:
        raise ValueError(f"Textures in {out_dir} differ in size: {sorted(sizes)}")
    logger.debug("loaded %d textures from %s", len(tiles), out_dir)
    return tiles

"""A minimal host tile map that feeds the codec.

Each cell holds a tile-class tag (any hashable, usually a string) or None.
Neighbours count as occupied when they carry the same class as the cell
being classified; everything outside the map is empty.
"""

from __future__ import annotations

from collections.abc import Hashable

from .codec import encode
from .directions import Compass, offset_of
from .slices import Neighborhood

EMPTY_CHARS = frozenset(". ")

TileClass = Hashable


class TileMap:
    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"map size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: list[list[TileClass | None]] = [
            [None] * width for _ in range(height)
        ]

    @classmethod
    def from_text(cls, text: str) -> TileMap:
        """Parse a character grid; ``.`` and spaces are empty cells.

        Short rows are padded with empty cells.
        """
        rows = [line.rstrip("\n") for line in text.splitlines()]
        while rows and not rows[-1].strip():
            rows.pop()
        if not rows:
            raise ValueError("pattern is empty")

        tile_map = cls(max(len(r) for r in rows), len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch not in EMPTY_CHARS:
                    tile_map.set_tile(x, y, ch)
        return tile_map

    # ---- cell access ----

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> TileClass | None:
        if not self.in_bounds(x, y):
            return None
        return self._cells[y][x]

    def set_tile(self, x: int, y: int, tile_class: TileClass) -> None:
        if tile_class is None:
            raise ValueError("use remove_tile() to clear a cell")
        self._require_in_bounds(x, y)
        self._cells[y][x] = tile_class

    def remove_tile(self, x: int, y: int) -> None:
        self._require_in_bounds(x, y)
        self._cells[y][x] = None

    def same_class(self, x: int, y: int, tile_class: TileClass | None) -> bool:
        """True when cell (x, y) exists and carries *tile_class*."""
        if tile_class is None:
            return False
        return self.get_tile(x, y) == tile_class

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} map")

    # ---- classification ----

    def neighborhood(self, x: int, y: int) -> Neighborhood:
        """Snapshot the 8 neighbours of (x, y) against its own tile class."""
        tile_class = self.get_tile(x, y)

        def occupied(d: Compass) -> bool:
            dx, dy = offset_of(d)
            return self.same_class(x + dx, y + dy, tile_class)

        return Neighborhood.sample(occupied)

    def texture_index(self, x: int, y: int) -> int | None:
        """Texture index of cell (x, y), or None for an empty cell."""
        if self.get_tile(x, y) is None:
            return None
        return encode(self.neighborhood(x, y))

    def texture_indices(self) -> list[list[int | None]]:
        return [
            [self.texture_index(x, y) for x in range(self.width)]
            for y in range(self.height)
        ]

    def refresh_window(
        self,
        x: int,
        y: int,
        previous: TileClass | None = None,
    ) -> list[tuple[int, int]]:
        """Cells around (x, y) whose texture index depends on that cell.

        Call after changing (x, y).  The list covers the cell itself and every
        neighbour in its 3x3 window sharing either its new class or the
        *previous* one it replaced.
        """
        tile_class = self.get_tile(x, y)
        cells: list[tuple[int, int]] = []
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                nx, ny = x + dx, y + dy
                if (dx, dy) == (0, 0):
                    if self.in_bounds(nx, ny):
                        cells.append((nx, ny))
                elif self.same_class(nx, ny, tile_class) or self.same_class(
                    nx, ny, previous
                ):
                    cells.append((nx, ny))
        return cells

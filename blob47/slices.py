"""Per-corner slice classification.

Every tile texture is cut into four quadrants, one per diagonal corner.  The
shape of a quadrant only depends on three neighbours: the orthogonal one a
step counter-clockwise of the corner, the corner itself and the orthogonal
one a step clockwise.  Slice patterns are written in that order, so ``1X0``
reads "counter-clockwise neighbour present, diagonal ignored, clockwise
neighbour absent".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Union

from .directions import DIAGONALS, ORTHOGONALS, Aggregate, Compass, kind_of, rotate
from .errors import InvalidDirectionOperand

# ---------------------------------------------------------------------------
# Slice IDs
# ---------------------------------------------------------------------------


class SliceID(IntEnum):
    ISOLATED = 0  # 0X0
    EDGE_FROM_CW = 1  # 0X1
    EDGE_FROM_CCW = 2  # 1X0
    FULLY_ENCLOSED = 3  # 111
    CROSSING = 4  # 101

    @property
    def pattern(self) -> str:
        return _PATTERNS[self]


_PATTERNS = {
    SliceID.ISOLATED: "0X0",
    SliceID.EDGE_FROM_CW: "0X1",
    SliceID.EDGE_FROM_CCW: "1X0",
    SliceID.FULLY_ENCLOSED: "111",
    SliceID.CROSSING: "101",
}

CornerSliceMap = dict[Compass, SliceID]

# ---------------------------------------------------------------------------
# Neighbourhood snapshot
# ---------------------------------------------------------------------------

OccupancyQuery = Callable[[Compass], bool]

FULL_MASK = 0xFF


@dataclass(frozen=True)
class Neighborhood:
    """Occupancy of the 8 neighbours of one cell, bit ``1 << compass``.

    Bit values match the usual blob bitmask: N=1, NE=2, E=4, SE=8, S=16,
    SW=32, W=64, NW=128.
    """

    mask: int

    def __post_init__(self) -> None:
        if isinstance(self.mask, bool) or not isinstance(self.mask, int):
            raise TypeError(f"mask must be an int, got {self.mask!r}")
        if not 0 <= self.mask <= FULL_MASK:
            raise ValueError(f"mask must be in [0, 255], got {self.mask}")

    @classmethod
    def from_mask(cls, mask: int) -> Neighborhood:
        return cls(mask)

    @classmethod
    def from_directions(cls, directions: Iterable[Compass]) -> Neighborhood:
        mask = 0
        for d in directions:
            if not isinstance(d, Compass):
                raise InvalidDirectionOperand(f"expected a compass direction, got {d!r}")
            mask |= 1 << d
        return cls(mask)

    @classmethod
    def sample(cls, occupied: OccupancyQuery) -> Neighborhood:
        """Snapshot a host query, asking it exactly once per direction."""
        return cls.from_directions(d for d in Compass if occupied(d))

    def occupied(self, d: Compass) -> bool:
        if not isinstance(d, Compass):
            raise InvalidDirectionOperand(f"expected a compass direction, got {d!r}")
        return bool(self.mask & (1 << d))

    @property
    def lateral(self) -> int:
        """Number of occupied orthogonal neighbours."""
        return sum(self.occupied(d) for d in ORTHOGONALS)

    @property
    def diagonal(self) -> int:
        """Number of occupied diagonal neighbours."""
        return sum(self.occupied(d) for d in DIAGONALS)

    def __str__(self) -> str:
        present = [d.short for d in Compass if self.occupied(d)]
        return "+".join(present) if present else "isolated"


Occupancy = Union[Neighborhood, int, OccupancyQuery]


def as_neighborhood(occupancy: Occupancy) -> Neighborhood:
    """Coerce a snapshot, a bit mask or a host query into a Neighborhood."""
    if isinstance(occupancy, Neighborhood):
        return occupancy
    if isinstance(occupancy, int) and not isinstance(occupancy, bool):
        return Neighborhood.from_mask(occupancy)
    if callable(occupancy):
        return Neighborhood.sample(occupancy)
    raise TypeError(f"cannot read neighbour occupancy from {occupancy!r}")


# ---------------------------------------------------------------------------
# Corner classification
# ---------------------------------------------------------------------------


def require_corner(corner: object) -> Compass:
    if not isinstance(corner, Compass) or kind_of(corner) is not Aggregate.DIAGONAL:
        raise InvalidDirectionOperand(f"expected a diagonal corner, got {corner!r}")
    return corner


def classify_corner(neighborhood: Neighborhood, corner: Compass) -> SliceID:
    """Slice ID of the quadrant owned by *corner*."""
    corner = require_corner(corner)
    ccw = neighborhood.occupied(rotate(corner, -1))
    cw = neighborhood.occupied(rotate(corner, 1))

    if ccw and cw:
        if neighborhood.occupied(corner):
            return SliceID.FULLY_ENCLOSED
        return SliceID.CROSSING
    if ccw:
        return SliceID.EDGE_FROM_CCW
    if cw:
        return SliceID.EDGE_FROM_CW
    return SliceID.ISOLATED


def corner_slices(neighborhood: Neighborhood) -> CornerSliceMap:
    return {corner: classify_corner(neighborhood, corner) for corner in DIAGONALS}


def edge_axis(corner: Compass, slice_id: SliceID) -> Aggregate:
    """Axis of the edge texture an edge slice is cut from.

    The occupied neighbour of an edge slice sits above/below the tile for a
    vertical run and left/right of it for a horizontal one.
    """
    corner = require_corner(corner)
    if slice_id is SliceID.EDGE_FROM_CCW:
        side = rotate(corner, -1)
    elif slice_id is SliceID.EDGE_FROM_CW:
        side = rotate(corner, 1)
    else:
        raise ValueError(f"{slice_id.name} is not an edge slice")
    if side in (Compass.TOP, Compass.BOTTOM):
        return Aggregate.VERTICAL
    return Aggregate.HORIZONTAL

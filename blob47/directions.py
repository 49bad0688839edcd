"""Eight-point compass algebra used by the blob codec.

Compass points are numbered clockwise from TOP = 0.  Aggregates (CENTER,
VERTICAL, ...) live in their own enum so they can never be rotated by
accident.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Union

from .errors import InvalidDirectionOperand

# ---------------------------------------------------------------------------
# Direction types
# ---------------------------------------------------------------------------


class Compass(IntEnum):
    TOP = 0
    TOP_RIGHT = 1
    RIGHT = 2
    BOTTOM_RIGHT = 3
    BOTTOM = 4
    BOTTOM_LEFT = 5
    LEFT = 6
    TOP_LEFT = 7

    @property
    def short(self) -> str:
        """Compact label, e.g. ``TR`` for TOP_RIGHT."""
        return "".join(part[0] for part in self.name.split("_"))


class Aggregate(Enum):
    CENTER = "center"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    ORTHOGONAL = "orthogonal"
    DIAGONAL = "diagonal"


Direction = Union[Compass, Aggregate]

ORTHOGONALS: tuple[Compass, ...] = (
    Compass.TOP,
    Compass.RIGHT,
    Compass.BOTTOM,
    Compass.LEFT,
)
DIAGONALS: tuple[Compass, ...] = (
    Compass.TOP_RIGHT,
    Compass.BOTTOM_RIGHT,
    Compass.BOTTOM_LEFT,
    Compass.TOP_LEFT,
)

_RING = len(Compass)

# ---------------------------------------------------------------------------
# Ring arithmetic
# ---------------------------------------------------------------------------


def _require_compass(d: object) -> Compass:
    # IntEnum members are ints too; plain ints are rejected on purpose.
    if not isinstance(d, Compass):
        raise InvalidDirectionOperand(f"expected a compass direction, got {d!r}")
    return d


def rotate(d: Compass, steps: int = 1) -> Compass:
    """Move *steps* positions clockwise (negative goes counter-clockwise)."""
    d = _require_compass(d)
    return Compass((d + steps) % _RING)


def opposite(d: Compass) -> Compass:
    return rotate(d, _RING // 2)


def angular_distance(from_: Compass, to: Compass) -> int:
    """Signed shortest rotation from *from_* to *to*, clockwise positive.

    The result lies in [-4, 4]; a half turn keeps the sign of the raw
    difference, so the function is antisymmetric.
    """
    steps = _require_compass(to) - _require_compass(from_)
    if steps > _RING // 2:
        return steps - _RING
    if steps < -(_RING // 2):
        return steps + _RING
    return steps


# ---------------------------------------------------------------------------
# Projections between compass points and aggregates
# ---------------------------------------------------------------------------


def kind_of(d: Compass) -> Aggregate:
    """ORTHOGONAL or DIAGONAL, depending on the parity of *d*."""
    return Aggregate.DIAGONAL if _require_compass(d) % 2 else Aggregate.ORTHOGONAL


_MEMBERS: dict[Aggregate, tuple[Compass, ...]] = {
    Aggregate.CENTER: (),
    Aggregate.VERTICAL: (Compass.TOP, Compass.BOTTOM),
    Aggregate.HORIZONTAL: (Compass.LEFT, Compass.RIGHT),
    Aggregate.ORTHOGONAL: ORTHOGONALS,
    Aggregate.DIAGONAL: DIAGONALS,
}


def members(a: Aggregate) -> tuple[Compass, ...]:
    """Compass points covered by an aggregate."""
    if not isinstance(a, Aggregate):
        raise InvalidDirectionOperand(f"expected an aggregate direction, got {a!r}")
    return _MEMBERS[a]


def vertical_of(d: Direction) -> Direction:
    """Project *d* on the vertical axis: TOP, BOTTOM or VERTICAL (level)."""
    if d is Aggregate.VERTICAL:
        return Aggregate.VERTICAL
    d = _require_compass(d)
    if d in (Compass.TOP_LEFT, Compass.TOP, Compass.TOP_RIGHT):
        return Compass.TOP
    if d in (Compass.BOTTOM_LEFT, Compass.BOTTOM, Compass.BOTTOM_RIGHT):
        return Compass.BOTTOM
    return Aggregate.VERTICAL


def horizontal_of(d: Direction) -> Direction:
    """Project *d* on the horizontal axis: LEFT, RIGHT or HORIZONTAL (level)."""
    if d is Aggregate.HORIZONTAL:
        return Aggregate.HORIZONTAL
    d = _require_compass(d)
    if d in (Compass.TOP_LEFT, Compass.LEFT, Compass.BOTTOM_LEFT):
        return Compass.LEFT
    if d in (Compass.TOP_RIGHT, Compass.RIGHT, Compass.BOTTOM_RIGHT):
        return Compass.RIGHT
    return Aggregate.HORIZONTAL


def axis_of(d: Direction, axis: Aggregate) -> Direction:
    """Project *d* on *axis* (VERTICAL or HORIZONTAL)."""
    if axis is Aggregate.VERTICAL:
        return vertical_of(d)
    if axis is Aggregate.HORIZONTAL:
        return horizontal_of(d)
    raise InvalidDirectionOperand(f"axis must be VERTICAL or HORIZONTAL, got {axis!r}")


# ---------------------------------------------------------------------------
# Grid helpers
# ---------------------------------------------------------------------------


def offset_of(d: Direction) -> tuple[int, int]:
    """Grid step ``(dx, dy)`` for *d*; y grows downwards."""
    if d is Aggregate.CENTER:
        return 0, 0
    h, v = horizontal_of(d), vertical_of(d)
    dx = 1 if h is Compass.RIGHT else -1 if h is Compass.LEFT else 0
    dy = -1 if v is Compass.TOP else 1 if v is Compass.BOTTOM else 0
    return dx, dy


_BY_OFFSET: dict[tuple[int, int], Direction] = {
    offset_of(d): d for d in Compass
}
_BY_OFFSET[(0, 0)] = Aggregate.CENTER


def direction_between(from_pos: tuple[int, int], to_pos: tuple[int, int]) -> Direction:
    """Direction in which *to_pos* lies as seen from *from_pos*."""
    dx = (to_pos[0] > from_pos[0]) - (to_pos[0] < from_pos[0])
    dy = (to_pos[1] > from_pos[1]) - (to_pos[1] < from_pos[1])
    return _BY_OFFSET[(dx, dy)]

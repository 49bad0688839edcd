"""Texture index encoder/decoder for the 47-tile blob scheme.

A cell's 8-neighbour pattern collapses into one of four cases.  Each case is
a small frozen dataclass that knows its packed texture index and the slice of
every corner, so ``classify`` (encode side) and ``unpack`` (decode side) only
convert between flat integers and case values.

Index layout::

    0-15   LateralCase       [0 0] [left bottom right top]
    16-27  ThreeLateralCase  [0 1] [ccw cw] [gap code]       (ccw, cw) != (1, 1)
    28-31  BentPathCase      [0 1 1 1] [elbow code]
    32-46  InteriorCase      [1 0] [TL BL BR TR]             47 is redundant

Gap codes are TOP=00, RIGHT=01, BOTTOM=10, LEFT=11; elbow codes are
TOP_RIGHT=00, BOTTOM_RIGHT=01, BOTTOM_LEFT=10, TOP_LEFT=11.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Union

from .directions import (
    DIAGONALS,
    ORTHOGONALS,
    Compass,
    angular_distance,
    rotate,
)
from .errors import DecoderRangeError, EncoderInvariantViolation, InvalidDirectionOperand
from .slices import (
    CornerSliceMap,
    Neighborhood,
    Occupancy,
    SliceID,
    as_neighborhood,
    corner_slices,
    require_corner,
)

logger = logging.getLogger(__name__)

TEXTURE_COUNT = 47

# All four interior corners enclosed looks exactly like LateralCase 15.  The
# encoder never produces it and the decoder rejects it.
REDUNDANT_INDEX = 47

_THREE_LATERAL_BASE = 16
_BENT_PATH_BASE = 28
_INTERIOR_BASE = 32

_GAP_CODES: dict[Compass, int] = {d: code for code, d in enumerate(ORTHOGONALS)}
_ELBOW_CODES: dict[Compass, int] = {d: code for code, d in enumerate(DIAGONALS)}


def _bit(flag: bool, weight: int) -> int:
    return weight if flag else 0


def _enclosed(flag: bool) -> SliceID:
    return SliceID.FULLY_ENCLOSED if flag else SliceID.CROSSING


# ---------------------------------------------------------------------------
# Cases
# ---------------------------------------------------------------------------


class _Case(ABC):
    kind: ClassVar[str]

    @property
    @abstractmethod
    def index(self) -> int: ...

    @abstractmethod
    def slice_at(self, corner: Compass) -> SliceID: ...

    def slices(self) -> CornerSliceMap:
        return {corner: self.slice_at(corner) for corner in DIAGONALS}

    def describe(self) -> str:
        parts = " ".join(
            f"{corner.short}={slice_id.pattern}"
            for corner, slice_id in self.slices().items()
        )
        return f"{self.kind} {parts}"


@dataclass(frozen=True)
class LateralCase(_Case):
    """No crossing corner: only the four orthogonal neighbours matter."""

    kind: ClassVar[str] = "lateral"

    top: bool
    right: bool
    bottom: bool
    left: bool

    @property
    def index(self) -> int:
        return (
            _bit(self.left, 8)
            + _bit(self.bottom, 4)
            + _bit(self.right, 2)
            + _bit(self.top, 1)
        )

    def _has(self, d: Compass) -> bool:
        return {
            Compass.TOP: self.top,
            Compass.RIGHT: self.right,
            Compass.BOTTOM: self.bottom,
            Compass.LEFT: self.left,
        }[d]

    def slice_at(self, corner: Compass) -> SliceID:
        corner = require_corner(corner)
        ccw = self._has(rotate(corner, -1))
        cw = self._has(rotate(corner, 1))
        if ccw:
            return SliceID.FULLY_ENCLOSED if cw else SliceID.EDGE_FROM_CCW
        return SliceID.EDGE_FROM_CW if cw else SliceID.ISOLATED


@dataclass(frozen=True)
class ThreeLateralCase(_Case):
    """Three orthogonal neighbours; *missing* is the empty one.

    ``ccw_enclosed``/``cw_enclosed`` are the occupancy of the diagonals three
    steps counter-clockwise/clockwise of the gap.  At least one of them is a
    crossing, otherwise the pattern would be a LateralCase.
    """

    kind: ClassVar[str] = "three-lateral"

    missing: Compass
    ccw_enclosed: bool
    cw_enclosed: bool

    def __post_init__(self) -> None:
        if not isinstance(self.missing, Compass) or self.missing not in _GAP_CODES:
            raise InvalidDirectionOperand(
                f"gap must be an orthogonal direction, got {self.missing!r}"
            )
        if self.ccw_enclosed and self.cw_enclosed:
            raise ValueError("three-lateral case needs at least one crossing corner")

    @property
    def index(self) -> int:
        return (
            _THREE_LATERAL_BASE
            + _bit(self.ccw_enclosed, 8)
            + _bit(self.cw_enclosed, 4)
            + _GAP_CODES[self.missing]
        )

    def slice_at(self, corner: Compass) -> SliceID:
        steps = angular_distance(self.missing, require_corner(corner))
        if steps == -3:
            return _enclosed(self.ccw_enclosed)
        if steps == -1:
            return SliceID.EDGE_FROM_CCW
        if steps == 1:
            return SliceID.EDGE_FROM_CW
        return _enclosed(self.cw_enclosed)


@dataclass(frozen=True)
class BentPathCase(_Case):
    """Two adjacent orthogonal neighbours meeting at an empty diagonal *elbow*."""

    kind: ClassVar[str] = "bent-path"

    elbow: Compass

    def __post_init__(self) -> None:
        if not isinstance(self.elbow, Compass) or self.elbow not in _ELBOW_CODES:
            raise InvalidDirectionOperand(
                f"elbow must be a diagonal direction, got {self.elbow!r}"
            )

    @property
    def index(self) -> int:
        return _BENT_PATH_BASE + _ELBOW_CODES[self.elbow]

    def slice_at(self, corner: Compass) -> SliceID:
        steps = angular_distance(self.elbow, require_corner(corner))
        if steps == -2:
            return SliceID.EDGE_FROM_CW
        if steps == 0:
            return SliceID.CROSSING
        if steps == 2:
            return SliceID.EDGE_FROM_CCW
        return SliceID.ISOLATED


@dataclass(frozen=True)
class InteriorCase(_Case):
    """All four orthogonals present; each flag marks an enclosed corner."""

    kind: ClassVar[str] = "interior"

    top_right: bool
    bottom_right: bool
    bottom_left: bool
    top_left: bool

    @property
    def index(self) -> int:
        return (
            _INTERIOR_BASE
            + _bit(self.top_left, 8)
            + _bit(self.bottom_left, 4)
            + _bit(self.bottom_right, 2)
            + _bit(self.top_right, 1)
        )

    @property
    def is_redundant(self) -> bool:
        return self.index == REDUNDANT_INDEX

    def slice_at(self, corner: Compass) -> SliceID:
        flags = {
            Compass.TOP_RIGHT: self.top_right,
            Compass.BOTTOM_RIGHT: self.bottom_right,
            Compass.BOTTOM_LEFT: self.bottom_left,
            Compass.TOP_LEFT: self.top_left,
        }
        return _enclosed(flags[require_corner(corner)])


Configuration = Union[LateralCase, ThreeLateralCase, BentPathCase, InteriorCase]


# ---------------------------------------------------------------------------
# Encoder
# ---------------------------------------------------------------------------


def classify(neighborhood: Neighborhood) -> Configuration:
    """Reduce an 8-neighbour snapshot to its canonical case."""
    slices = corner_slices(neighborhood)
    crossings = [c for c, s in slices.items() if s is SliceID.CROSSING]
    lateral = neighborhood.lateral
    has = neighborhood.occupied

    if not crossings:
        return LateralCase(
            top=has(Compass.TOP),
            right=has(Compass.RIGHT),
            bottom=has(Compass.BOTTOM),
            left=has(Compass.LEFT),
        )

    if lateral == 3:
        missing = next(d for d in ORTHOGONALS if not has(d))
        return ThreeLateralCase(
            missing=missing,
            ccw_enclosed=has(rotate(missing, -3)),
            cw_enclosed=has(rotate(missing, 3)),
        )

    if lateral == 2 and len(crossings) == 1:
        return BentPathCase(elbow=crossings[0])

    interior = (SliceID.FULLY_ENCLOSED, SliceID.CROSSING)
    if all(s in interior for s in slices.values()):
        return InteriorCase(
            top_right=slices[Compass.TOP_RIGHT] is SliceID.FULLY_ENCLOSED,
            bottom_right=slices[Compass.BOTTOM_RIGHT] is SliceID.FULLY_ENCLOSED,
            bottom_left=slices[Compass.BOTTOM_LEFT] is SliceID.FULLY_ENCLOSED,
            top_left=slices[Compass.TOP_LEFT] is SliceID.FULLY_ENCLOSED,
        )

    logger.error(
        "no texture case for neighbours %s (mask=%d, lateral=%d, diagonal=%d)",
        neighborhood,
        neighborhood.mask,
        lateral,
        neighborhood.diagonal,
    )
    raise EncoderInvariantViolation(
        f"neighbour mask {neighborhood.mask} matched no texture case"
    )


def encode(occupancy: Occupancy) -> int:
    """Texture index in [0, 46] for a neighbour snapshot, bit mask or query."""
    return classify(as_neighborhood(occupancy)).index


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


def _check_index(index: object) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise DecoderRangeError(f"texture index must be an int, got {index!r}")
    if not 0 <= index < TEXTURE_COUNT:
        raise DecoderRangeError(
            f"texture index must be in [0, {TEXTURE_COUNT - 1}], got {index}"
        )
    return index


def unpack(index: int) -> Configuration:
    """Inverse of ``Configuration.index``."""
    index = _check_index(index)
    b3, b2, b1, b0 = (bool(index & (1 << i)) for i in (3, 2, 1, 0))
    group = index >> 4

    if group == 0:
        return LateralCase(top=b0, right=b1, bottom=b2, left=b3)
    if group == 1:
        code = index & 0b11
        if b3 and b2:
            return BentPathCase(elbow=DIAGONALS[code])
        return ThreeLateralCase(missing=ORTHOGONALS[code], ccw_enclosed=b3, cw_enclosed=b2)
    return InteriorCase(top_right=b0, bottom_right=b1, bottom_left=b2, top_left=b3)


def decode(index: int, corner: Compass) -> SliceID:
    """Slice ID of *corner* in the texture identified by *index*."""
    return unpack(index).slice_at(corner)


def decode_all(index: int) -> CornerSliceMap:
    return unpack(index).slices()


def describe(index: int) -> str:
    """Human-readable label, e.g. ``'19 three-lateral TR=101 BR=101 ...'``."""
    return f"{index} {unpack(index).describe()}"

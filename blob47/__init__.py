"""47-tile blob autotiling: neighbour classification and texture synthesis."""

from .codec import (
    REDUNDANT_INDEX,
    TEXTURE_COUNT,
    BentPathCase,
    Configuration,
    InteriorCase,
    LateralCase,
    ThreeLateralCase,
    classify,
    decode,
    decode_all,
    describe,
    encode,
    unpack,
)
from .directions import (
    DIAGONALS,
    ORTHOGONALS,
    Aggregate,
    Compass,
    angular_distance,
    axis_of,
    opposite,
    rotate,
)
from .errors import (
    Blob47Error,
    DecoderRangeError,
    EncoderInvariantViolation,
    InvalidDirectionOperand,
)
from .slices import Neighborhood, SliceID, classify_corner, corner_slices

__version__ = "0.1.0"

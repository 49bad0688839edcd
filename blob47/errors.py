"""Exceptions raised by the blob47 codec."""

from __future__ import annotations


class Blob47Error(Exception):
    """Base class for every error raised by blob47."""


class InvalidDirectionOperand(Blob47Error, ValueError):
    """A direction operation received a value it cannot work with.

    Rotating or measuring an aggregate (CENTER, VERTICAL, ...) is always a
    caller bug.
    """


class DecoderRangeError(Blob47Error, ValueError):
    """A texture index outside [0, 46] was handed to the decoder."""


class EncoderInvariantViolation(Blob47Error, RuntimeError):
    """No classification case matched a neighbour pattern.

    The four cases partition all 256 patterns, so this signals a defect in
    the encoder rather than bad input.
    """

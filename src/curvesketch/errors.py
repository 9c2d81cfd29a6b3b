"""Exceptions raised by curvesketch.

Degenerate geometry (too few points, zero denominators) is not an error
in the evaluators: they return ``None`` or an empty result instead.  The
classes below cover the cases that are genuinely caller mistakes.
"""


class CurveSketchError(Exception):
    """Base class for curvesketch errors."""


class InvalidParameterError(CurveSketchError, ValueError):
    """A parameter lies outside the range an operation is defined for."""


class InsufficientInputError(CurveSketchError, ValueError):
    """Not enough data to produce a result where one is required."""


__all__ = [
    "CurveSketchError",
    "InvalidParameterError",
    "InsufficientInputError",
]

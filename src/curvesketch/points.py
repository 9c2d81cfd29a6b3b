"""Control point helpers shared by the curve evaluators."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence, Tuple, Union

from curvesketch.errors import InvalidParameterError

Point2D = Tuple[float, float]
Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class ControlPoint:
    """A 2D control point with a strictly positive weight."""

    x: float
    y: float
    weight: float = 1.0

    def __post_init__(self) -> None:
        w = float(self.weight)
        if not math.isfinite(w) or w <= 0.0:
            raise InvalidParameterError(f"control point weight must be > 0, got {self.weight!r}")

    @property
    def xy(self) -> Point2D:
        return (float(self.x), float(self.y))


PointLike = Union[ControlPoint, Sequence[float], Mapping[str, float]]


def control_point(value: PointLike) -> ControlPoint:
    """Coerce ``value`` into a :class:`ControlPoint`.

    Accepts an existing control point, an ``(x, y)`` or ``(x, y, w)``
    sequence, or a mapping with ``x``, ``y`` and an optional ``weight``
    (or ``w``) key.
    """

    if isinstance(value, ControlPoint):
        return value
    if isinstance(value, Mapping):
        try:
            x, y = value["x"], value["y"]
        except KeyError as exc:
            raise InvalidParameterError(f"control point mapping is missing {exc}") from None
        coords = (x, y, value.get("weight", value.get("w", 1.0)))
    else:
        try:
            size = len(value)
        except TypeError:
            raise InvalidParameterError(f"cannot interpret {value!r} as a control point") from None
        if size not in (2, 3):
            raise InvalidParameterError(f"cannot interpret {value!r} as a control point")
        coords = tuple(value)
    try:
        numbers = [float(c) for c in coords]
    except (TypeError, ValueError):
        raise InvalidParameterError(f"control point {value!r} has a non-numeric value") from None
    return ControlPoint(*numbers)


def as_control_points(values: Iterable[PointLike]) -> List[ControlPoint]:
    """Return a fresh list of control points built from ``values``."""

    return [control_point(v) for v in values]


def with_unit_weights(points: Iterable[PointLike]) -> List[ControlPoint]:
    """Copy ``points`` dropping any weights (all set to 1.0)."""

    return [ControlPoint(p.x, p.y) for p in as_control_points(points)]


def weights_of(points: Iterable[PointLike]) -> List[float]:
    return [p.weight for p in as_control_points(points)]


__all__ = [
    "ControlPoint",
    "Point2D",
    "PointLike",
    "Vec3",
    "as_control_points",
    "control_point",
    "weights_of",
    "with_unit_weights",
]

"""Spline helpers for curvesketch.

Provides evaluation and sampling routines for clamped uniform B-splines
(used for sketch profiles) and open Catmull-Rom splines (used to smooth
flight trajectories).
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from curvesketch.errors import InvalidParameterError
from curvesketch.points import Point2D, PointLike, Vec3, as_control_points

logger = logging.getLogger(__name__)

# Denominators at or below this magnitude make a basis term vanish (0/0 := 0).
KNOT_EPSILON = 1e-10
# Inward nudge for the last sample; the top knot span is half-open.
DOMAIN_EPSILON = 1e-6
MIN_SAMPLES = 200


def clamped_knot_vector(count: int, degree: int) -> List[float]:
    """Return the clamped uniform knot vector for ``count`` control points.

    The vector has ``count + degree + 1`` entries; the first and last
    ``degree + 1`` knots equal the domain ends ``0`` and ``count - degree``.
    """

    knots: List[float] = []
    for i in range(count + degree + 1):
        if i <= degree:
            knots.append(0.0)
        elif i > count:
            knots.append(float(count - degree))
        else:
            knots.append(float(i - degree))
    return knots


def bspline_domain(count: int, degree: int) -> Tuple[float, float]:
    """Return ``(u_min, u_max)`` of the clamped B-spline parameter domain."""

    return 0.0, float(count - degree)


def basis_function(i: int, p: int, u: float, knots: Sequence[float]) -> float:
    """Cox-de Boor basis ``N_{i,p}(u)`` computed recursively."""

    if p == 0:
        return 1.0 if knots[i] <= u < knots[i + 1] else 0.0

    left = 0.0
    denom = knots[i + p] - knots[i]
    if abs(denom) > KNOT_EPSILON:
        left = (u - knots[i]) / denom * basis_function(i, p - 1, u, knots)

    right = 0.0
    denom = knots[i + p + 1] - knots[i + 1]
    if abs(denom) > KNOT_EPSILON:
        right = (knots[i + p + 1] - u) / denom * basis_function(i + 1, p - 1, u, knots)

    return left + right


def basis_functions(degree: int, u: float, knots: Sequence[float], count: int) -> List[float]:
    """Return ``[N_{0,p}(u), ..., N_{count-1,p}(u)]``.

    Same values as :func:`basis_function` but built bottom-up as a
    triangular table, so each lower-degree term is computed once.
    """

    spans = len(knots) - 1
    row = [1.0 if knots[i] <= u < knots[i + 1] else 0.0 for i in range(spans)]
    for p in range(1, degree + 1):
        nxt = []
        for i in range(spans - p):
            left = 0.0
            denom = knots[i + p] - knots[i]
            if abs(denom) > KNOT_EPSILON:
                left = (u - knots[i]) / denom * row[i]

            right = 0.0
            denom = knots[i + p + 1] - knots[i + 1]
            if abs(denom) > KNOT_EPSILON:
                right = (knots[i + p + 1] - u) / denom * row[i + 1]

            nxt.append(left + right)
        row = nxt
    return row[:count]


def evaluate_bspline(points: Iterable[PointLike], degree: int, u: float) -> Optional[Point2D]:
    """Evaluate the clamped uniform B-spline through ``points`` at ``u``.

    Weights on the control points are ignored.  Returns ``None`` when
    there are too few points for ``degree`` or the result is not finite.
    """

    ctrl = as_control_points(points)
    n = len(ctrl)
    if n == 0 or degree < 0:
        return None
    if n == 1:
        return ctrl[0].xy
    if n < degree + 1:
        logger.debug('evaluate_bspline: %d points cannot carry degree %d', n, degree)
        return None

    knots = clamped_knot_vector(n, degree)
    basis = basis_functions(degree, float(u), knots, n)

    x = 0.0
    y = 0.0
    for b, p in zip(basis, ctrl):
        if not math.isfinite(b):
            return None
        x += b * p.x
        y += b * p.y

    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return (x, y)


def sample_bspline(points: Iterable[PointLike], degree: int = 3, step: float = 0.01) -> List[Point2D]:
    """Sample a clamped B-spline across its whole parameter domain.

    ``step`` is the preferred parameter spacing; at least
    :data:`MIN_SAMPLES` intervals are always used.  Returns an empty list
    when fewer than ``degree + 2`` points are given.
    """

    if step <= 0:
        raise InvalidParameterError('step must be > 0')
    ctrl = as_control_points(points)
    n = len(ctrl)
    if degree < 0 or degree >= n or n < degree + 2:
        logger.debug('sample_bspline: %d points is too few for degree %d', n, degree)
        return []

    u_min, u_max = bspline_domain(n, degree)
    # rounding keeps e.g. 3 / 0.01 from landing one interval high
    intervals = max(MIN_SAMPLES, int(math.ceil(round((u_max - u_min) / step, 9))))

    samples: List[Point2D] = []
    for i in range(intervals + 1):
        if i == intervals:
            u = u_max - DOMAIN_EPSILON
        else:
            u = u_min + (u_max - u_min) * (i / intervals)
        pt = evaluate_bspline(ctrl, degree, u)
        if pt is not None:
            samples.append(pt)
    return samples


def evaluate_catmullrom(points: Sequence[Sequence[float]], u: float, tension: float = 0.5) -> Vec3:
    """Evaluate an open uniform Catmull-Rom spline at ``u`` in ``[0, 1]``.

    The missing neighbours at either end are reflected through the end
    points.  ``tension`` scales the tangents (0.5 is the classic curve).
    """

    ctrl = [_vec3(p) for p in points]
    count = len(ctrl)
    if count == 0:
        raise ValueError('Catmull-Rom spline has no control points')
    if count == 1:
        return ctrl[0]

    u_clamped = max(0.0, min(1.0, float(u)))
    span = (count - 1) * u_clamped
    idx = int(math.floor(span))
    tau = span - idx
    if idx >= count - 1:
        idx = count - 2
        tau = 1.0

    p1 = ctrl[idx]
    p2 = ctrl[idx + 1]
    if idx > 0:
        p0 = ctrl[idx - 1]
    else:
        p0 = _reflect(ctrl[0], ctrl[1])
    if idx + 2 < count:
        p3 = ctrl[idx + 2]
    else:
        p3 = _reflect(ctrl[-1], ctrl[-2])

    return (
        _catmull_cubic(p0[0], p1[0], p2[0], p3[0], tension, tau),
        _catmull_cubic(p0[1], p1[1], p2[1], p3[1], tension, tau),
        _catmull_cubic(p0[2], p1[2], p2[2], p3[2], tension, tau),
    )


def sample_catmullrom(points: Sequence[Sequence[float]], divisions: int, *, tension: float = 0.5) -> List[Vec3]:
    """Sample ``divisions + 1`` points evenly spaced in the global parameter."""

    if divisions < 1:
        raise InvalidParameterError('divisions must be >= 1')
    ctrl = [_vec3(p) for p in points]
    if len(ctrl) < 2:
        raise ValueError('Catmull-Rom spline needs at least 2 control points')
    return [evaluate_catmullrom(ctrl, d / divisions, tension) for d in range(divisions + 1)]


def _vec3(p: Sequence[float]) -> Vec3:
    if len(p) < 3:
        raise ValueError('value must have at least three components')
    return float(p[0]), float(p[1]), float(p[2])


def _reflect(end: Vec3, inner: Vec3) -> Vec3:
    return (
        2.0 * end[0] - inner[0],
        2.0 * end[1] - inner[1],
        2.0 * end[2] - inner[2],
    )


def _catmull_cubic(x0: float, x1: float, x2: float, x3: float, tension: float, t: float) -> float:
    # Hermite cubic from x1 to x2 with tangents tension*(x2-x0), tension*(x3-x1).
    t0 = tension * (x2 - x0)
    t1 = tension * (x3 - x1)
    c0 = x1
    c1 = t0
    c2 = -3.0 * x1 + 3.0 * x2 - 2.0 * t0 - t1
    c3 = 2.0 * x1 - 2.0 * x2 + t0 + t1
    return c0 + c1 * t + c2 * t * t + c3 * t * t * t


__all__ = [
    'KNOT_EPSILON',
    'DOMAIN_EPSILON',
    'MIN_SAMPLES',
    'clamped_knot_vector',
    'bspline_domain',
    'basis_function',
    'basis_functions',
    'evaluate_bspline',
    'sample_bspline',
    'evaluate_catmullrom',
    'sample_catmullrom',
]

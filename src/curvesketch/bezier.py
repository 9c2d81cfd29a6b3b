"""Rational Bézier curves evaluated with the weighted de Casteljau scheme.

Each control point is lifted to homogeneous form ``(x*w, y*w, w)`` and
adjacent triples are blended until one remains; dividing through by the
final weight yields the curve point.  With all weights equal to 1 this is
the ordinary polynomial Bézier curve.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from curvesketch.errors import InvalidParameterError
from curvesketch.points import Point2D, PointLike, as_control_points

logger = logging.getLogger(__name__)


def evaluate_bezier(points: Iterable[PointLike], t: float) -> Optional[Point2D]:
    """Evaluate the rational Bézier curve defined by ``points`` at ``t``.

    Returns ``None`` for an empty point sequence.  A single point is
    returned as-is regardless of ``t`` or its weight.
    """

    ctrl = as_control_points(points)
    if not ctrl:
        return None
    if len(ctrl) == 1:
        return ctrl[0].xy

    t = float(t)
    s = 1.0 - t
    hom = [(p.x * p.weight, p.y * p.weight, p.weight) for p in ctrl]
    while len(hom) > 1:
        hom = [
            (s * a[0] + t * b[0], s * a[1] + t * b[1], s * a[2] + t * b[2])
            for a, b in zip(hom, hom[1:])
        ]

    x, y, w = hom[0]
    return (x / w, y / w)


def sample_bezier(points: Iterable[PointLike], steps: int = 100) -> List[Point2D]:
    """Sample ``steps + 1`` evenly spaced parameters ``t = i/steps``."""

    if steps < 1:
        raise InvalidParameterError('steps must be >= 1')
    ctrl = as_control_points(points)
    if not ctrl:
        logger.debug('sample_bezier: no control points')
        return []

    samples: List[Point2D] = []
    for i in range(steps + 1):
        pt = evaluate_bezier(ctrl, i / steps)
        if pt is not None:
            samples.append(pt)
    return samples


__all__ = [
    'evaluate_bezier',
    'sample_bezier',
]

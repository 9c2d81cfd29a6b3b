"""Profile curves feeding the surface-of-revolution builder."""

from __future__ import annotations

import logging
from typing import Iterable, List

from curvesketch.bezier import sample_bezier
from curvesketch.errors import InvalidParameterError
from curvesketch.points import Point2D, PointLike, as_control_points, with_unit_weights
from curvesketch.spline import sample_bspline

logger = logging.getLogger(__name__)

CURVE_TYPES = ('bezier', 'bspline')


def generate_profile(points: Iterable[PointLike],
                     curve_type: str = 'bezier',
                     *,
                     bezier_steps: int = 100,
                     degree: int = 3,
                     step: float = 0.01,
                     fallback: bool = False) -> List[Point2D]:
    """Turn sketch control points into a profile polyline.

    ``'bezier'`` profiles ignore point weights.  A ``'bspline'`` profile
    with too few points for ``degree`` is empty unless ``fallback`` is set,
    in which case the Bézier profile is returned instead.
    """

    if curve_type not in CURVE_TYPES:
        raise InvalidParameterError(f"curve_type must be one of {CURVE_TYPES}, got {curve_type!r}")

    ctrl = as_control_points(points)
    if len(ctrl) < 2:
        return []

    if curve_type == 'bspline':
        profile = sample_bspline(ctrl, degree, step)
        if profile or not fallback:
            return profile
        logger.debug('generate_profile: %d points too few for degree %d, using Bezier',
                     len(ctrl), degree)

    return sample_bezier(with_unit_weights(ctrl), bezier_steps)


__all__ = [
    'CURVE_TYPES',
    'generate_profile',
]

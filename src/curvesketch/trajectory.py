"""Golden-angle spiral flight trajectories.

A trajectory starts as a handful of control points laid out like a
sunflower head: each step turns by the golden angle and moves outwards
along a square-rooted Fibonacci envelope.  The first half of the steps
climbs, the second half descends (never below the ground plane).  The
control points are then smoothed with an open Catmull-Rom spline.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from curvesketch.errors import InvalidParameterError
from curvesketch.points import Vec3
from curvesketch.spline import sample_catmullrom

logger = logging.getLogger(__name__)

PHI = (1.0 + math.sqrt(5.0)) / 2.0
DEFAULT_SCALE = 20.0
DEFAULT_TENSION = 0.5
DEFAULT_SAMPLES_PER_SPAN = 20
MIN_SMOOTH_POINTS = 4

_DIRECTIONS = {'left': 1, 'right': -1, '+1': 1, '1': 1, '-1': -1, 1: 1, -1: -1}


@dataclass(frozen=True)
class Trajectory:
    """A smoothed flight path and the control points it was built from.

    ``parameters`` holds the cumulative arc length of ``points``
    normalised to ``[0, 1]``; it is non-decreasing.
    """

    control_points: Tuple[Vec3, ...]
    points: Tuple[Vec3, ...]
    parameters: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.points)

    @property
    def length(self) -> float:
        return _polyline_length(self.points)


def golden_angle() -> float:
    """Return the golden angle ``2*pi/phi**2`` in radians (about 137.5 deg)."""

    return 2.0 * math.pi / (PHI * PHI)


def parse_direction(direction: Union[str, int]) -> int:
    """Map ``'left'``/``'right'`` or ``+1``/``-1`` to a turn sign."""

    key = direction.lower() if isinstance(direction, str) else direction
    # True == 1 and 1.0 == 1 would otherwise hit the int keys
    if type(key) not in (str, int):
        key = None
    try:
        return _DIRECTIONS[key]
    except (KeyError, TypeError):
        raise InvalidParameterError(
            f"direction must be 'left', 'right', 1 or -1, got {direction!r}") from None


def fibonacci_radii(count: int, scale: float = DEFAULT_SCALE) -> List[float]:
    """Return ``count + 1`` radii ``sqrt(F_k / F_count) * scale``.

    ``F`` is the Fibonacci sequence seeded ``0, 1``.
    """

    if count < 1:
        return [0.0] * max(count + 1, 0)
    fib = [0, 1]
    while len(fib) < count + 1:
        fib.append(fib[-1] + fib[-2])
    top = float(fib[count])
    return [math.sqrt(f / top) * scale for f in fib[:count + 1]]


def spiral_control_points(cycles: int,
                          direction: Union[str, int] = 1,
                          climb_rate: float = 0.5,
                          descent_rate: float = 0.5,
                          *,
                          scale: float = DEFAULT_SCALE) -> List[Vec3]:
    """Lay out ``cycles`` control points along the golden-angle spiral.

    Point ``i`` sits at radius ``fibonacci_radii(cycles)[i + 1]`` and
    angle ``i * golden_angle() * direction``.  The first ``cycles // 2``
    points each climb by ``climb_rate``; the rest each descend by
    ``descent_rate`` with the altitude floored at zero.
    """

    sign = parse_direction(direction)
    if cycles < 1:
        logger.debug('spiral_control_points: no cycles requested')
        return []

    climb = cycles // 2
    radii = fibonacci_radii(cycles, scale)
    step = golden_angle() * sign

    points: List[Vec3] = []
    altitude = 0.0
    for i in range(cycles):
        if i < climb:
            altitude += climb_rate
        else:
            altitude = max(0.0, altitude - descent_rate)
        radius = radii[i + 1]
        theta = i * step
        points.append((radius * math.cos(theta), altitude, radius * math.sin(theta)))
    return points


def smooth_trajectory(points: Sequence[Sequence[float]],
                      tension: float = DEFAULT_TENSION,
                      samples_per_span: int = DEFAULT_SAMPLES_PER_SPAN) -> List[Vec3]:
    """Resample ``points`` along an open Catmull-Rom spline.

    ``len(points) * samples_per_span`` divisions are used.  With fewer
    than four points the input is returned unchanged.
    """

    if samples_per_span < 1:
        raise InvalidParameterError('samples_per_span must be >= 1')
    ctrl = [(float(p[0]), float(p[1]), float(p[2])) for p in points]
    if len(ctrl) < MIN_SMOOTH_POINTS:
        logger.debug('smooth_trajectory: %d points, returning them unsmoothed', len(ctrl))
        return ctrl
    return sample_catmullrom(ctrl, len(ctrl) * samples_per_span, tension=tension)


def generate_trajectory(cycles: int,
                        direction: Union[str, int] = 1,
                        climb_rate: float = 0.5,
                        descent_rate: float = 0.5,
                        *,
                        scale: float = DEFAULT_SCALE,
                        tension: float = DEFAULT_TENSION,
                        samples_per_span: int = DEFAULT_SAMPLES_PER_SPAN) -> Trajectory:
    """Build control points and their smoothed path in one call."""

    ctrl = spiral_control_points(cycles, direction, climb_rate, descent_rate, scale=scale)
    smooth = smooth_trajectory(ctrl, tension, samples_per_span)
    return Trajectory(
        control_points=tuple(ctrl),
        points=tuple(smooth),
        parameters=tuple(_arc_parameters(smooth)),
    )


def _polyline_length(points: Sequence[Vec3]) -> float:
    return sum(math.dist(a, b) for a, b in zip(points, points[1:]))


def _arc_parameters(points: Sequence[Vec3]) -> List[float]:
    if not points:
        return []
    acc = [0.0]
    for a, b in zip(points, points[1:]):
        acc.append(acc[-1] + math.dist(a, b))
    total = acc[-1]
    if total <= 0.0:
        if len(points) == 1:
            return [0.0]
        return [i / (len(points) - 1) for i in range(len(points))]
    return [d / total for d in acc]


__all__ = [
    'PHI',
    'Trajectory',
    'golden_angle',
    'parse_direction',
    'fibonacci_radii',
    'spiral_control_points',
    'smooth_trajectory',
    'generate_trajectory',
]

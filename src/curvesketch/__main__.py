#!/usr/bin/env python3
"""
Command line front end for curvesketch.

Usage:
    python -m curvesketch bezier POINTS.yaml [--steps N]
    python -m curvesketch bspline POINTS.yaml [--degree P] [--step S]
    python -m curvesketch revolve POINTS.yaml --output FILE.obj [--axis y] [--angle 360] [--segments 32]
    python -m curvesketch trajectory [--cycles N] [--direction left|right]

POINTS.yaml holds the control points, either as a bare list or under a
``points`` key.  Each point is ``[x, y]``, ``[x, y, weight]`` or a
mapping with ``x``, ``y`` and ``weight``::

    points:
      - [0, 0]
      - [1, 2, 0.5]
      - {x: 3, y: 0}

Every command accepts ``--config FILE.yaml`` (see :mod:`curvesketch.config`);
flags given on the command line override the configured values.

Examples:
    # Sample a rational Bezier curve at 51 parameters
    python -m curvesketch bezier profile.yaml --steps 50

    # Revolve a B-spline profile a quarter turn about x and save it
    python -m curvesketch revolve profile.yaml --curve bspline \
        --axis x --angle 90 --segments 16 --output quarter.obj
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

import yaml

from curvesketch.bezier import sample_bezier
from curvesketch.config import load_config, with_overrides
from curvesketch.errors import CurveSketchError, InsufficientInputError
from curvesketch.io.obj import write_obj
from curvesketch.mesh import AXES, revolve_profile
from curvesketch.points import ControlPoint, as_control_points
from curvesketch.profile import CURVE_TYPES, generate_profile
from curvesketch.spline import sample_bspline
from curvesketch.trajectory import generate_trajectory

logger = logging.getLogger('curvesketch')


def read_points(path: Path) -> List[ControlPoint]:
    """Read control points from a YAML file."""
    with path.open('r', encoding='utf-8') as fp:
        data = yaml.safe_load(fp)
    if isinstance(data, dict):
        data = data.get('points')
    if not data:
        raise InsufficientInputError(f"no control points in {path}")
    return as_control_points(data)


def format_points(points: Sequence[Sequence[float]]) -> str:
    return '\n'.join(' '.join(f"{c:.6f}" for c in p) for p in points)


def _emit(text: str, output) -> None:
    if output:
        Path(output).write_text(text + '\n', encoding='utf-8')
        logger.info('wrote %s', output)
    else:
        print(text)


def cmd_bezier(args, config):
    config = with_overrides(config, 'bezier', steps=args.steps)
    points = read_points(Path(args.file))
    _emit(format_points(sample_bezier(points, config.bezier.steps)), args.output)
    return 0


def cmd_bspline(args, config):
    config = with_overrides(config, 'bspline', degree=args.degree, step=args.step)
    points = read_points(Path(args.file))
    curve = sample_bspline(points, config.bspline.degree, config.bspline.step)
    if not curve:
        print(f"Error: need at least {config.bspline.degree + 2} points for degree "
              f"{config.bspline.degree}, got {len(points)}", file=sys.stderr)
        return 1
    _emit(format_points(curve), args.output)
    return 0


def cmd_revolve(args, config):
    config = with_overrides(config, 'revolution', curve_type=args.curve, axis=args.axis,
                            angle=args.angle, segments=args.segments)
    rev = config.revolution
    points = read_points(Path(args.file))
    profile = generate_profile(
        points,
        rev.curve_type,
        bezier_steps=config.bezier.steps,
        degree=config.bspline.degree,
        step=config.bspline.step,
    )
    if len(profile) < 2:
        print(f"Error: {rev.curve_type} profile is empty for {len(points)} point(s)", file=sys.stderr)
        return 1

    mesh = revolve_profile(profile, rev.axis, rev.angle, rev.segments, fold=rev.fold)
    write_obj(mesh, args.output)
    print(f"{args.output}: {mesh.vertex_count} vertices, {mesh.face_count} faces")
    return 0


def cmd_trajectory(args, config):
    config = with_overrides(config, 'trajectory', cycles=args.cycles, direction=args.direction,
                            climb_rate=args.climb_rate, descent_rate=args.descent_rate)
    traj = config.trajectory
    result = generate_trajectory(
        traj.cycles,
        traj.direction,
        traj.climb_rate,
        traj.descent_rate,
        scale=traj.scale,
        tension=traj.tension,
        samples_per_span=traj.samples_per_span,
    )
    points = result.control_points if args.control else result.points
    _emit(format_points(points), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='python -m curvesketch',
        description='Curve, surface-of-revolution and flight-path geometry',
    )
    parser.add_argument('-c', '--config', metavar='FILE', help='YAML configuration file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    bezier_parser = subparsers.add_parser('bezier', help='Sample a rational Bezier curve')
    bezier_parser.add_argument('file', help='YAML control point file')
    bezier_parser.add_argument('--steps', type=int, help='Number of parameter steps')
    bezier_parser.add_argument('-o', '--output', metavar='FILE', help='Write points to FILE')

    bspline_parser = subparsers.add_parser('bspline', help='Sample a clamped uniform B-spline')
    bspline_parser.add_argument('file', help='YAML control point file')
    bspline_parser.add_argument('--degree', type=int, help='Spline degree')
    bspline_parser.add_argument('--step', type=float, help='Parameter step')
    bspline_parser.add_argument('-o', '--output', metavar='FILE', help='Write points to FILE')

    revolve_parser = subparsers.add_parser('revolve', help='Revolve a profile into an OBJ mesh')
    revolve_parser.add_argument('file', help='YAML control point file')
    revolve_parser.add_argument('--curve', choices=CURVE_TYPES, help='Profile curve type')
    revolve_parser.add_argument('--axis', choices=AXES, help='Axis of revolution')
    revolve_parser.add_argument('--angle', type=float, help='Sweep angle in degrees')
    revolve_parser.add_argument('--segments', type=int, help='Angular segments')
    revolve_parser.add_argument('-o', '--output', metavar='FILE', required=True, help='OBJ output file')

    traj_parser = subparsers.add_parser('trajectory', help='Generate a spiral flight path')
    traj_parser.add_argument('--cycles', type=int, help='Number of spiral control points')
    traj_parser.add_argument('--direction', choices=('left', 'right'), help='Turn direction')
    traj_parser.add_argument('--climb-rate', type=float, help='Altitude gained per climb step')
    traj_parser.add_argument('--descent-rate', type=float, help='Altitude lost per descent step')
    traj_parser.add_argument('--control', action='store_true',
                             help='Print the control points instead of the smoothed path')
    traj_parser.add_argument('-o', '--output', metavar='FILE', help='Write points to FILE')

    return parser


_COMMANDS = {
    'bezier': cmd_bezier,
    'bspline': cmd_bspline,
    'revolve': cmd_revolve,
    'trajectory': cmd_trajectory,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = load_config(args.config)
        return _COMMANDS[args.action](args, config)
    except (CurveSketchError, FileNotFoundError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

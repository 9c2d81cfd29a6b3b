"""YAML configuration for curve sampling, revolution and trajectories.

A configuration file has up to four top-level sections; any section or
key left out keeps its default::

    bezier:
      steps: 100
    bspline:
      degree: 3
      step: 0.01
    revolution:
      curve_type: bezier
      axis: y
      angle: 360
      segments: 32
      fold: true
    trajectory:
      cycles: 50
      direction: left
      climb_rate: 0.5
      descent_rate: 0.5
      scale: 20.0
      tension: 0.5
      samples_per_span: 20
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from curvesketch.errors import InvalidParameterError
from curvesketch.mesh import AXES
from curvesketch.profile import CURVE_TYPES
from curvesketch.trajectory import parse_direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BezierConfig:
    steps: int = 100


@dataclass(frozen=True)
class BSplineConfig:
    degree: int = 3
    step: float = 0.01


@dataclass(frozen=True)
class RevolutionConfig:
    curve_type: str = 'bezier'
    axis: str = 'y'
    angle: float = 360.0
    segments: int = 32
    fold: bool = True


@dataclass(frozen=True)
class TrajectoryConfig:
    cycles: int = 50
    direction: str = 'left'
    climb_rate: float = 0.5
    descent_rate: float = 0.5
    scale: float = 20.0
    tension: float = 0.5
    samples_per_span: int = 20

    @property
    def sign(self) -> int:
        return parse_direction(self.direction)


@dataclass(frozen=True)
class SketchConfig:
    """All tunable parameters, grouped by operation."""

    bezier: BezierConfig = field(default_factory=BezierConfig)
    bspline: BSplineConfig = field(default_factory=BSplineConfig)
    revolution: RevolutionConfig = field(default_factory=RevolutionConfig)
    trajectory: TrajectoryConfig = field(default_factory=TrajectoryConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_SECTIONS = {
    'bezier': BezierConfig,
    'bspline': BSplineConfig,
    'revolution': RevolutionConfig,
    'trajectory': TrajectoryConfig,
}


def _build_section(name: str, cls, data: Any):
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise InvalidParameterError(f"config section {name!r} must be a mapping")
    known = {f.name: f for f in fields(cls)}
    unknown = set(data) - set(known)
    if unknown:
        raise InvalidParameterError(
            f"unknown key(s) in section {name!r}: {', '.join(sorted(map(str, unknown)))}")
    defaults = cls()
    kwargs = {key: _coerce(f"{name}.{key}", getattr(defaults, key), value)
              for key, value in data.items()}
    return cls(**kwargs)


def _coerce(label: str, default: Any, value: Any) -> Any:
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise InvalidParameterError(f"{label}: expected true or false, got {value!r}")
        return value
    # true/false must not pass for 1/0 in numeric fields
    if isinstance(value, bool):
        raise InvalidParameterError(f"{label}: expected {type(default).__name__}, got {value!r}")
    if isinstance(default, int):
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if not isinstance(value, int):
            raise InvalidParameterError(f"{label}: expected an integer, got {value!r}")
        return value
    try:
        return type(default)(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(
            f"{label}: expected {type(default).__name__}, got {value!r}") from None


def config_from_dict(data: Mapping[str, Any] | None) -> SketchConfig:
    """Build a validated :class:`SketchConfig` from a parsed document."""

    data = data or {}
    if not isinstance(data, Mapping):
        raise InvalidParameterError('configuration document must be a mapping')
    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise InvalidParameterError(f"unknown config section(s): {', '.join(sorted(map(str, unknown)))}")

    sections = {name: _build_section(name, cls, data.get(name)) for name, cls in _SECTIONS.items()}
    config = SketchConfig(**sections)
    _validate(config)
    return config


def _validate(config: SketchConfig) -> None:
    if config.bezier.steps < 1:
        raise InvalidParameterError('bezier.steps must be >= 1')
    if config.bspline.degree < 1:
        raise InvalidParameterError('bspline.degree must be >= 1')
    if config.bspline.step <= 0:
        raise InvalidParameterError('bspline.step must be > 0')
    if config.revolution.curve_type not in CURVE_TYPES:
        raise InvalidParameterError(f"revolution.curve_type must be one of {CURVE_TYPES}")
    if config.revolution.axis not in AXES:
        raise InvalidParameterError(f"revolution.axis must be one of {AXES}")
    if config.revolution.segments < 1:
        raise InvalidParameterError('revolution.segments must be >= 1')
    if config.trajectory.samples_per_span < 1:
        raise InvalidParameterError('trajectory.samples_per_span must be >= 1')
    parse_direction(config.trajectory.direction)


def load_config(path: Union[str, Path, None] = None) -> SketchConfig:
    """Load configuration from a YAML file, or the defaults if ``path`` is None."""

    if path is None:
        return SketchConfig()
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config not found: {config_path}")
    with config_path.open('r', encoding='utf-8') as fp:
        data = yaml.safe_load(fp) or {}
    logger.debug('loaded config from %s', config_path)
    return config_from_dict(data)


def save_config(config: SketchConfig, path: Union[str, Path]) -> None:
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open('w', encoding='utf-8') as fp:
        yaml.safe_dump(config.to_dict(), fp, sort_keys=False)


def with_overrides(config: SketchConfig, section: str, **values: Any) -> SketchConfig:
    """Return a copy of ``config`` with keys of one section replaced.

    ``None`` values are ignored so command-line flags that were not given
    leave the configured value alone.
    """

    if section not in _SECTIONS:
        raise InvalidParameterError(f"unknown config section {section!r}")
    changes = {k: v for k, v in values.items() if v is not None}
    if not changes:
        return config
    updated = replace(config, **{section: replace(getattr(config, section), **changes)})
    _validate(updated)
    return updated


__all__ = [
    'BezierConfig',
    'BSplineConfig',
    'RevolutionConfig',
    'TrajectoryConfig',
    'SketchConfig',
    'config_from_dict',
    'load_config',
    'save_config',
    'with_overrides',
]

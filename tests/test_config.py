import pytest
import yaml

from curvesketch.config import (
    RevolutionConfig,
    SketchConfig,
    config_from_dict,
    load_config,
    save_config,
    with_overrides,
)
from curvesketch.errors import InvalidParameterError


def test_defaults():
    config = load_config()
    assert config == SketchConfig()
    assert config.bezier.steps == 100
    assert config.bspline.degree == 3
    assert config.bspline.step == 0.01
    assert config.revolution == RevolutionConfig('bezier', 'y', 360.0, 32, True)
    assert config.trajectory.cycles == 50
    assert config.trajectory.sign == 1
    assert config.trajectory.scale == 20.0


def test_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / 'sketch.yaml'
    path.write_text(
        'revolution:\n'
        '  axis: x\n'
        '  segments: 12\n'
        'trajectory:\n'
        '  direction: right\n'
        '  climb_rate: 1\n',
        encoding='utf-8',
    )
    config = load_config(path)
    assert config.revolution.axis == 'x'
    assert config.revolution.segments == 12
    assert config.revolution.angle == 360.0
    assert config.trajectory.sign == -1
    assert config.trajectory.climb_rate == 1.0
    assert isinstance(config.trajectory.climb_rate, float)
    assert config.bezier.steps == 100


def test_empty_file_is_default(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('', encoding='utf-8')
    assert load_config(path) == SketchConfig()


def test_save_and_reload(tmp_path):
    config = with_overrides(SketchConfig(), 'bspline', degree=2, step=0.05)
    path = tmp_path / 'nested' / 'out.yaml'
    save_config(config, path)
    doc = yaml.safe_load(path.read_text(encoding='utf-8'))
    assert doc['bspline'] == {'degree': 2, 'step': 0.05}
    assert load_config(path) == config


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / 'absent.yaml')


@pytest.mark.parametrize('doc', [
    {'colour': {}},
    {'bezier': {'stepz': 3}},
    {'bezier': []},
    {'bezier': {'steps': 0}},
    {'bspline': {'step': -1}},
    {'bspline': {'degree': 'cubic'}},
    {'revolution': {'axis': 'w'}},
    {'revolution': {'curve_type': 'nurbs'}},
    {'revolution': {'segments': 0}},
    {'revolution': {'fold': 'no'}},
    {'revolution': {'segments': 12.9}},
    {'trajectory': {'cycles': True}},
    {'bspline': {'step': False}},
    {'bezier': {'steps': '100'}},
    {'trajectory': {'direction': 'up'}},
])
def test_invalid_documents(doc):
    with pytest.raises(InvalidParameterError):
        config_from_dict(doc)


def test_overrides_ignore_none():
    config = SketchConfig()
    assert with_overrides(config, 'revolution', axis=None) is config
    updated = with_overrides(config, 'revolution', axis='z', angle=180.0)
    assert updated.revolution.axis == 'z'
    assert updated.revolution.angle == 180.0
    assert config.revolution.axis == 'y'
    with pytest.raises(InvalidParameterError):
        with_overrides(config, 'revolution', segments=-2)


def test_integral_floats_accepted_for_int_fields():
    config = config_from_dict({'revolution': {'segments': 12.0}})
    assert config.revolution.segments == 12
    assert isinstance(config.revolution.segments, int)

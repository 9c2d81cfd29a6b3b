import pytest

from curvesketch.__main__ import main
from curvesketch.io.obj import read_obj


@pytest.fixture
def points_file(tmp_path):
    path = tmp_path / 'points.yaml'
    path.write_text(
        'points:\n'
        '  - [1, 0]\n'
        '  - [2, 1, 0.5]\n'
        '  - {x: 1.5, y: 2}\n'
        '  - [0.5, 3]\n'
        '  - [1, 4]\n',
        encoding='utf-8',
    )
    return path


def test_bezier_command(points_file, capsys):
    assert main(['bezier', str(points_file), '--steps', '4']) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 5
    assert lines[0] == '1.000000 0.000000'
    assert lines[-1] == '1.000000 4.000000'


def test_bspline_command_to_file(points_file, tmp_path):
    out = tmp_path / 'curve.txt'
    assert main(['bspline', str(points_file), '--degree', '2', '-o', str(out)]) == 0
    lines = out.read_text(encoding='utf-8').strip().splitlines()
    assert len(lines) == 301
    assert lines[0] == '1.000000 0.000000'


def test_bspline_command_too_few_points(points_file, capsys):
    assert main(['bspline', str(points_file), '--degree', '4']) == 1
    assert 'need at least 6 points' in capsys.readouterr().err


def test_revolve_command(points_file, tmp_path, capsys):
    out = tmp_path / 'surface.obj'
    code = main(['revolve', str(points_file), '--curve', 'bspline',
                 '--segments', '8', '--output', str(out)])
    assert code == 0
    mesh = read_obj(out)
    assert mesh.vertex_count == 9 * 201
    assert mesh.face_count == 2 * 8 * 200
    assert 'faces' in capsys.readouterr().out


def test_trajectory_command_with_config(tmp_path, capsys):
    cfg = tmp_path / 'sketch.yaml'
    cfg.write_text('trajectory:\n  cycles: 6\n  samples_per_span: 4\n', encoding='utf-8')
    assert main(['--config', str(cfg), 'trajectory']) == 0
    assert len(capsys.readouterr().out.strip().splitlines()) == 6 * 4 + 1

    assert main(['--config', str(cfg), 'trajectory', '--control', '--cycles', '8']) == 0
    assert len(capsys.readouterr().out.strip().splitlines()) == 8


def test_errors_are_reported(tmp_path, capsys):
    assert main(['bezier', str(tmp_path / 'missing.yaml')]) == 1
    assert 'Error' in capsys.readouterr().err

    bad = tmp_path / 'bad.yaml'
    bad.write_text('points: [[0, 0, -1]]\n', encoding='utf-8')
    assert main(['bezier', str(bad)]) == 1
    assert 'weight' in capsys.readouterr().err


@pytest.mark.parametrize('body', [
    'points: [5, [2, 3]]\n',
    'points: [[a, 1], [2, 3]]\n',
    'points: [{x: a, y: 1}, [2, 3]]\n',
])
def test_malformed_points_file(tmp_path, capsys, body):
    bad = tmp_path / 'bad.yaml'
    bad.write_text(body, encoding='utf-8')
    assert main(['bezier', str(bad)]) == 1
    assert capsys.readouterr().err.startswith('Error: ')

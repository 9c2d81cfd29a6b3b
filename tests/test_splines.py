import math

import pytest

from curvesketch.errors import InvalidParameterError
from curvesketch.points import ControlPoint
from curvesketch.spline import (
    DOMAIN_EPSILON,
    MIN_SAMPLES,
    basis_function,
    basis_functions,
    bspline_domain,
    clamped_knot_vector,
    evaluate_bspline,
    evaluate_catmullrom,
    sample_bspline,
    sample_catmullrom,
)


def _close(a, b, tol=1e-6):
    assert math.dist(a, b) <= tol


CTRL = [(0, 0), (1, 2), (3, 3), (4, 1), (6, 2), (7, 0)]


def test_clamped_knot_vector():
    assert clamped_knot_vector(6, 3) == [0, 0, 0, 0, 1, 2, 3, 3, 3, 3]
    assert clamped_knot_vector(3, 2) == [0, 0, 0, 1, 1, 1]
    knots = clamped_knot_vector(8, 2)
    assert len(knots) == 8 + 2 + 1
    assert knots == sorted(knots)
    assert bspline_domain(8, 2) == (0.0, 6.0)


def test_basis_zero_denominators_contribute_zero():
    knots = clamped_knot_vector(4, 3)
    for i in range(4):
        value = basis_function(i, 3, 0.0, knots)
        assert math.isfinite(value)
    assert basis_function(0, 3, 0.0, knots) == 1.0


def test_basis_partition_of_unity():
    knots = clamped_knot_vector(len(CTRL), 3)
    for k in range(30):
        u = 3.0 * k / 30
        assert math.isclose(sum(basis_functions(3, u, knots, len(CTRL))), 1.0, abs_tol=1e-12)


@pytest.mark.parametrize('degree', [1, 2, 3, 4])
def test_tabulated_basis_matches_recursion(degree):
    n = 7
    knots = clamped_knot_vector(n, degree)
    u_max = n - degree
    for k in range(25):
        u = u_max * k / 25
        table = basis_functions(degree, u, knots, n)
        rec = [basis_function(i, degree, u, knots) for i in range(n)]
        assert table == rec


def test_evaluate_interpolates_first_point():
    assert evaluate_bspline(CTRL, 3, 0.0) == (0.0, 0.0)


def test_evaluate_approaches_last_point_near_domain_end():
    _, u_max = bspline_domain(len(CTRL), 3)
    _close(evaluate_bspline(CTRL, 3, u_max - DOMAIN_EPSILON), (7.0, 0.0), tol=1e-4)


def test_evaluate_at_domain_end_is_degenerate_but_finite():
    # the top knot span is half-open, so every basis vanishes exactly at u_max
    _, u_max = bspline_domain(len(CTRL), 3)
    assert evaluate_bspline(CTRL, 3, u_max) == (0.0, 0.0)


def test_evaluate_rejects_too_few_points():
    assert evaluate_bspline([], 3, 0.0) is None
    assert evaluate_bspline([(1, 1), (2, 2)], 3, 0.5) is None
    assert evaluate_bspline([(5, 6)], 3, 0.5) == (5.0, 6.0)


def test_evaluate_reports_non_finite_as_absent():
    ctrl = [(0, 0), (float('inf'), 1), (2, 0), (3, 1), (4, 0)]
    assert evaluate_bspline(ctrl, 3, 1.0) is None


def test_degree_one_is_polyline():
    ctrl = [(0, 0), (2, 2), (4, 0)]
    _close(evaluate_bspline(ctrl, 1, 0.5), (1.0, 1.0), tol=1e-12)
    _close(evaluate_bspline(ctrl, 1, 1.5), (3.0, 1.0), tol=1e-12)


def test_weights_are_ignored():
    plain = [ControlPoint(x, y) for x, y in CTRL]
    weighted = [ControlPoint(x, y, 1.0 + i) for i, (x, y) in enumerate(CTRL)]
    assert evaluate_bspline(plain, 3, 1.3) == evaluate_bspline(weighted, 3, 1.3)


def test_sample_endpoints_and_density():
    samples = sample_bspline(CTRL, 3, 0.01)
    assert len(samples) == 301
    _close(samples[0], CTRL[0], tol=1e-12)
    _close(samples[-1], CTRL[-1], tol=1e-4)
    assert all(math.isfinite(c) for p in samples for c in p)


def test_sample_uses_minimum_density():
    samples = sample_bspline(CTRL, 3, 0.5)
    assert len(samples) == MIN_SAMPLES + 1


@pytest.mark.parametrize('count,degree', [(0, 3), (1, 3), (3, 3), (4, 3), (2, 1), (3, 2)])
def test_sample_too_few_points_is_empty(count, degree):
    ctrl = [(i, i * i) for i in range(count)]
    assert sample_bspline(ctrl, degree) == []


def test_sample_minimum_valid_count():
    samples = sample_bspline([(0, 0), (1, 1), (2, 0)], 1)
    assert samples
    _close(samples[-1], (2.0, 0.0), tol=1e-5)


def test_sample_rejects_bad_step():
    with pytest.raises(InvalidParameterError):
        sample_bspline(CTRL, 3, 0.0)


def test_catmullrom_passes_through_control_points():
    ctrl = [(0, 0, 0), (1, 2, 0), (3, 3, 1), (4, 0, 2), (6, 1, 0)]
    segments = len(ctrl) - 1
    for i, p in enumerate(ctrl):
        _close(evaluate_catmullrom(ctrl, i / segments), p, tol=1e-9)


def test_catmullrom_samples_match_evaluator():
    ctrl = [(0, 0, 0), (1, 1, 0), (2, 0, 1), (3, 1, 1)]
    samples = sample_catmullrom(ctrl, 12, tension=0.5)
    assert len(samples) == 13
    for d, pt in enumerate(samples):
        _close(pt, evaluate_catmullrom(ctrl, d / 12, 0.5), tol=1e-12)


def test_catmullrom_collinear_points_stay_on_line():
    ctrl = [(0, 0, 0), (1, 1, 1), (2, 2, 2), (3, 3, 3)]
    for x, y, z in sample_catmullrom(ctrl, 30):
        assert math.isclose(x, y, abs_tol=1e-12)
        assert math.isclose(y, z, abs_tol=1e-12)


def test_catmullrom_requires_points():
    with pytest.raises(ValueError):
        evaluate_catmullrom([], 0.5)
    with pytest.raises(ValueError):
        sample_catmullrom([(0, 0, 0)], 4)

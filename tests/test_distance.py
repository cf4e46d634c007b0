"""Tests for the per-model distance metrics."""

import math

import numpy as np
import pytest

from hggen.graph.distance import (
    MAX_DIRECT_ARGUMENT,
    PrecomputedTrig,
    _log_space_distance,
    angular_distance,
    distance,
    distances_from,
    hyperbolic_distance,
    hyperbolic_distance_array,
    hyperbolic_distance_polar,
)
from hggen.graph.types import ModelType, NodeCoordinate

ALL_MODELS = list(ModelType)


def _random_nodes(count: int, seed: int = 0) -> list[NodeCoordinate]:
    rng = np.random.default_rng(seed)
    return [
        NodeCoordinate(r=float(rng.random() * 15.0), theta=float(rng.random() * 2 * math.pi))
        for _ in range(count)
    ]


class TestAngularDistance:
    def test_wraps_around(self):
        assert angular_distance(0.1, 2 * math.pi - 0.1) == pytest.approx(0.2)

    def test_at_most_pi(self):
        assert angular_distance(0.0, math.pi) == pytest.approx(math.pi)
        assert angular_distance(0.0, 4.0) <= math.pi


class TestHyperbolicDistance:
    def test_collinear_points(self):
        a = NodeCoordinate(r=3.0, theta=1.2)
        b = NodeCoordinate(r=7.5, theta=1.2)
        assert hyperbolic_distance(a, b, 1.0) == 4.5

    def test_opposite_points_pass_through_origin(self):
        a = NodeCoordinate(r=2.0, theta=0.0)
        b = NodeCoordinate(r=3.0, theta=math.pi)
        assert hyperbolic_distance(a, b, 1.0) == pytest.approx(5.0)

    def test_law_of_cosines(self):
        a = NodeCoordinate(r=1.0, theta=0.0)
        b = NodeCoordinate(r=2.0, theta=1.0)
        expected = math.acosh(
            math.cosh(1.0) * math.cosh(2.0) - math.sinh(1.0) * math.sinh(2.0) * math.cos(1.0)
        )
        assert hyperbolic_distance(a, b, 1.0) == pytest.approx(expected)

    def test_curvature_scaling(self):
        a = NodeCoordinate(r=1.0, theta=0.0)
        b = NodeCoordinate(r=2.0, theta=1.0)
        # zeta scales coordinates and distance alike
        assert hyperbolic_distance(a, b, 2.0) < hyperbolic_distance(
            NodeCoordinate(2.0, 0.0), NodeCoordinate(4.0, 1.0), 1.0
        )

    def test_large_radii_not_nan(self):
        a = NodeCoordinate(r=300.0, theta=0.1)
        b = NodeCoordinate(r=300.0, theta=0.1 + 1e-12)
        d = hyperbolic_distance(a, b, 1.0)
        assert not math.isnan(d)
        assert d >= 0.0


class TestFarFromOrigin:
    """Large zeta * r goes through the log-space form instead of overflowing."""

    def test_no_overflow(self):
        a = NodeCoordinate(r=40.0, theta=0.0)
        b = NodeCoordinate(r=40.0, theta=1.0)
        d = distance(ModelType.HYPERBOLIC_RGG, a, b, 20.0)
        assert d == pytest.approx(80.0 + 0.1 * math.log(math.sin(0.5)), rel=1e-12)

    def test_agrees_with_law_of_cosines(self):
        rng = np.random.default_rng(3)
        r1 = rng.random(200) * 15.0
        r2 = rng.random(200) * 15.0
        dtheta = rng.random(200) * math.pi
        direct = hyperbolic_distance_array(
            np.cosh(r1), np.sinh(r1), np.cosh(r2), np.sinh(r2), dtheta, 1.0
        )
        np.testing.assert_allclose(
            _log_space_distance(r1, r2, dtheta, 1.0), direct, rtol=1e-7, atol=1e-7
        )

    def test_continuous_across_threshold(self):
        zeta = 10.0
        below = (MAX_DIRECT_ARGUMENT - 1e-6) / zeta
        above = (MAX_DIRECT_ARGUMENT + 1e-6) / zeta
        d_below = distance(
            ModelType.HYPERBOLIC_STANDARD,
            NodeCoordinate(below, 0.0), NodeCoordinate(below, 2.0), zeta,
        )
        d_above = distance(
            ModelType.HYPERBOLIC_STANDARD,
            NodeCoordinate(above, 0.0), NodeCoordinate(above, 2.0), zeta,
        )
        assert d_above == pytest.approx(d_below, abs=1e-6)

    def test_same_radius_small_angle(self):
        d = hyperbolic_distance(NodeCoordinate(100.0, 0.0), NodeCoordinate(100.0, 1e-9), 5.0)
        assert math.isfinite(d)
        assert d >= 0.0

    def test_row_matches_scalar(self):
        r = np.array([40.0, 40.0, 5.0, 39.0])
        theta = np.array([0.0, 1.0, 2.0, 0.0])
        nodes = [NodeCoordinate(float(a), float(b)) for a, b in zip(r, theta)]
        row = distances_from(ModelType.HYPERBOLIC_RGG, 0, r, theta, 20.0)
        expected = [distance(ModelType.HYPERBOLIC_RGG, nodes[0], n, 20.0) for n in nodes[1:]]
        assert np.all(np.isfinite(row))
        np.testing.assert_allclose(row, expected, rtol=1e-12)
        assert row[2] == pytest.approx(1.0)

    def test_polar_mixes_both_paths(self):
        d = hyperbolic_distance_polar(
            np.array([1.0, 50.0]), np.array([2.0, 50.0]), np.array([0.5, 0.5]), 10.0
        )
        assert np.all(np.isfinite(d))
        assert d[1] == pytest.approx(100.0 + 0.2 * math.log(math.sin(0.25)), rel=1e-12)

    def test_trig_table_limit(self):
        assert PrecomputedTrig.fits(np.array([1.0, 30.0]), 10.0)
        assert not PrecomputedTrig.fits(np.array([1.0, 40.0]), 10.0)


class TestDistanceProperties:
    """Metric axioms every model distance satisfies."""

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_symmetric(self, model):
        nodes = _random_nodes(20)
        for a, b in zip(nodes, nodes[1:]):
            assert distance(model, a, b, 1.3) == distance(model, b, a, 1.3)

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_zero_for_identical(self, model):
        for a in _random_nodes(10):
            assert distance(model, a, a, 1.0) == 0.0

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_positive_for_distinct(self, model):
        nodes = _random_nodes(20, seed=4)
        for a, b in zip(nodes, nodes[1:]):
            assert distance(model, a, b, 1.0) > 0.0

    def test_model_specific_values(self):
        a = NodeCoordinate(r=2.0, theta=0.5)
        b = NodeCoordinate(r=3.0, theta=1.5)
        assert distance(ModelType.SOFT_CONFIGURATION_MODEL, a, b) == 5.0
        assert distance(ModelType.ANGULAR_RGG, a, b) == pytest.approx(1.0)
        assert distance(ModelType.SOFT_RGG, a, b) == pytest.approx(1.0)
        assert distance(ModelType.ERDOS_RENYI, a, b) == 1.0

    def test_rejects_unknown_model(self):
        a, b = _random_nodes(2)
        with pytest.raises(ValueError):
            distance("hyperbolic_rgg", a, b)  # type: ignore[arg-type]


class TestVectorizedDistances:
    """Row form agrees with the scalar metric."""

    @pytest.mark.parametrize("model", ALL_MODELS)
    def test_matches_scalar(self, model):
        nodes = _random_nodes(25, seed=7)
        r = np.array([c.r for c in nodes])
        theta = np.array([c.theta for c in nodes])
        for i in (0, 5, 23):
            row = distances_from(model, i, r, theta, 0.8)
            expected = [distance(model, nodes[i], nodes[j], 0.8) for j in range(i + 1, 25)]
            np.testing.assert_allclose(row, expected, rtol=1e-9, atol=1e-9)

    def test_last_row_empty(self):
        r = np.array([1.0, 2.0])
        theta = np.array([0.0, 1.0])
        assert distances_from(ModelType.HYPERBOLIC_RGG, 1, r, theta).shape == (0,)

    def test_precomputed_trig_equivalent(self):
        nodes = _random_nodes(30, seed=9)
        r = np.array([c.r for c in nodes])
        theta = np.array([c.theta for c in nodes])
        trig = PrecomputedTrig.from_radii(r, 1.0)
        for i in range(29):
            np.testing.assert_allclose(
                distances_from(ModelType.HYPERBOLIC_STANDARD, i, r, theta, 1.0, trig),
                distances_from(ModelType.HYPERBOLIC_STANDARD, i, r, theta, 1.0),
                rtol=1e-9,
            )

    def test_collinear_and_coincident(self):
        r = np.array([2.0, 5.0, 2.0])
        theta = np.array([1.0, 1.0, 1.0])
        row = distances_from(ModelType.HYPERBOLIC_RGG, 0, r, theta)
        np.testing.assert_array_equal(row, [3.0, 0.0])

    def test_trig_values(self):
        trig = PrecomputedTrig.from_radii(np.array([0.0, 1.0, 1.0]), 2.0)
        assert trig.sinh[1] == math.sinh(2.0)
        assert trig.cosh[2] == math.cosh(2.0)
        assert trig.cosh[0] == 1.0

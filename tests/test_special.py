"""Tests for the hypergeometric evaluation outside the unit disk."""

import math

import pytest
from scipy.integrate import quad

from hggen.graph.special import hypergeometric_f


def _euler_integral(b: float, z: float) -> float:
    """2F1(1, b; 1 + b; z) = b * int_0^1 t^(b-1) / (1 - z t) dt."""
    value, _ = quad(lambda t: b * t ** (b - 1.0) / (1.0 - z * t), 0.0, 1.0)
    return value


class TestHypergeometricF:
    def test_b_one_closed_form(self):
        assert hypergeometric_f(1.0, 1.0, 2.0, -3.0) == pytest.approx(math.log(4.0) / 3.0)

    def test_b_half_at_minus_one(self):
        assert hypergeometric_f(1.0, 0.5, 1.5, -1.0) == pytest.approx(math.pi / 4.0)

    @pytest.mark.parametrize("lam", [1.0, 4.0, 100.0, 1e6])
    def test_b_half_arctan(self, lam):
        expected = math.atan(math.sqrt(lam)) / math.sqrt(lam)
        assert hypergeometric_f(1.0, 0.5, 1.5, -lam) == pytest.approx(expected, rel=1e-9)

    @pytest.mark.parametrize("b", [1.5, 2.7, 4.2])
    @pytest.mark.parametrize("lam", [1.0, 9.0, 250.0])
    def test_matches_euler_integral(self, b, lam):
        expected = _euler_integral(b, -lam)
        assert hypergeometric_f(1.0, b, 1.0 + b, -lam) == pytest.approx(expected, rel=1e-6)

    @pytest.mark.parametrize("b", [2.0, 3.0])
    def test_integer_b_perturbed(self, b):
        expected = _euler_integral(b, -5.0)
        value = hypergeometric_f(1.0, b, 1.0 + b, -5.0)
        assert math.isfinite(value)
        assert value == pytest.approx(expected, rel=1e-3)

    def test_decreasing_in_lambda(self):
        values = [hypergeometric_f(1.0, 0.7, 1.7, -lam) for lam in (1.0, 10.0, 100.0, 1e4)]
        assert values == sorted(values, reverse=True)

    def test_injectable_evaluator(self):
        calls = []

        def fake(a, b, c, w):
            calls.append((a, b, c, w))
            return 1.0

        hypergeometric_f(1.0, 0.5, 1.5, -3.0, hyp2f1=fake)
        assert calls == [(1.0, 1.0, 1.5, 0.25)]

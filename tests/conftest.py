"""Shared fixtures for generator tests."""

import math

import numpy as np
import pytest

from hggen.graph.integration import IntegralEstimate


class ExponentialDegreeEstimator:
    """Deterministic stand-in for the Monte Carlo estimator.

    Ignores the integrand and reports n * I(R) = k_bar * exp(-(R - root) / 2),
    so radius calibration converges to exactly `root`.
    """

    def __init__(self, n: int, k_bar: float, root: float = 8.0) -> None:
        self.n = n
        self.k_bar = k_bar
        self.root = root
        self.calls = 0

    def integrate(self, f, lower: np.ndarray, upper: np.ndarray) -> IntegralEstimate:
        self.calls += 1
        radius = float(upper[0])
        degree = self.k_bar * math.exp(-(radius - self.root) / 2.0)
        return IntegralEstimate(value=degree / self.n, error=0.0)


@pytest.fixture
def exact_estimator():
    """Factory for ExponentialDegreeEstimator instances."""
    return ExponentialDegreeEstimator

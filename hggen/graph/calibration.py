"""Calibration of internal model parameters against the target average degree.

Two root-finding procedures, both plain bisection on a monotone function:

1. Radius R (hyperbolic RGG, hyperbolic standard, soft configuration model).
   The expected degree is n times the probability that two random nodes
   connect, a 3-D (or, for the SCM, 2-D) integral over both radial densities
   rho(r) = alpha exp(alpha (r - R)) and the angular separation. The integral
   is estimated by Monte Carlo at each bisection midpoint. Larger R means
   sparser graphs.
2. Interaction strength lambda (soft RGG). The expected degree is
   n * 2F1(1, 1/beta; 1 + 1/beta; -lambda), known in closed form. Larger
   lambda means sparser graphs.

The Monte Carlo stream is seeded from CalibrationConfig.mc_seed and is
separate from the graph's generation stream, so calibrating never shifts the
draws that place nodes and edges.
"""

import logging
import math
import sys

import numpy as np
import scipy.special

from hggen.config.parameters import CalibrationConfig, GraphParameters
from hggen.graph.distance import hyperbolic_distance_polar
from hggen.graph.errors import CalibrationError
from hggen.graph.integration import IntegralEstimator, Integrand, MiserIntegrator
from hggen.graph.special import Hyp2f1, hypergeometric_f
from hggen.graph.types import ModelType

log = logging.getLogger(__name__)

# Relative step applied to R or lambda after a NaN estimate
NAN_RETRY_FACTOR = 1.00001


def radial_density(alpha: float, radius: float, r: np.ndarray) -> np.ndarray:
    """rho(r) = alpha * exp(alpha * (r - R)), the large-R radial density."""
    return alpha * np.exp(alpha * (r - radius))


def heaviside_integrand(alpha: float, radius: float, zeta: float) -> Integrand:
    """Integrand over (r1, r2, dtheta) for the hyperbolic RGG."""

    def f(x: np.ndarray) -> np.ndarray:
        connected = hyperbolic_distance_polar(x[:, 0], x[:, 1], x[:, 2], zeta) < radius
        return (
            (1.0 / math.pi)
            * radial_density(alpha, radius, x[:, 0])
            * radial_density(alpha, radius, x[:, 1])
            * connected
        )

    return f


def fermi_dirac_integrand(
    alpha: float, radius: float, zeta: float, beta: float
) -> Integrand:
    """Integrand over (r1, r2, dtheta) for the hyperbolic standard model."""

    def f(x: np.ndarray) -> np.ndarray:
        d = hyperbolic_distance_polar(x[:, 0], x[:, 1], x[:, 2], zeta)
        p = scipy.special.expit(-beta * zeta / 2.0 * (d - radius))
        return (
            (1.0 / math.pi)
            * radial_density(alpha, radius, x[:, 0])
            * radial_density(alpha, radius, x[:, 1])
            * p
        )

    return f


def configuration_integrand(alpha: float, radius: float, eta: float) -> Integrand:
    """Integrand over (r1, r2) for the soft configuration model."""

    def f(x: np.ndarray) -> np.ndarray:
        r1, r2 = x[:, 0], x[:, 1]
        p = scipy.special.expit(-(eta / 2.0) * (r1 + r2 - radius))
        return radial_density(alpha, radius, r1) * radial_density(alpha, radius, r2) * p

    return f


def search_upper_bound(n: int, beta: float | None = None) -> float:
    """Upper end of the radius bracket.

    max(50, ln(n)^2.5), narrowed to max(50, ln(n)^2) only for the cold
    standard model (beta = 1/T >= 1). The hot standard model, the soft
    configuration model and the RGG at small zeta all calibrate to radii
    that can exceed 50.

    Args:
        n: Number of nodes.
        beta: Inverse temperature of the hyperbolic standard model; None
            for the other radius-calibrated models.
    """
    exponent = 2.0 if beta is not None and beta >= 1 else 2.5
    return max(50.0, math.log(n) ** exponent)


def expected_degree(
    model: ModelType,
    params: GraphParameters,
    alpha: float,
    radius: float,
    estimator: IntegralEstimator,
) -> float:
    """Monte Carlo estimate of the expected average degree at a given radius.

    Args:
        model: One of the three radius-calibrated models.
        params: Graph parameters (n, temperature, zeta_eta).
        alpha: Radial decay rate of the model.
        radius: Candidate disk radius R.
        estimator: Definite integral estimator.

    Returns:
        n * I(R); NaN when the estimate is numerically degenerate.
    """
    if model is ModelType.SOFT_CONFIGURATION_MODEL:
        f = configuration_integrand(alpha, radius, params.zeta_eta)
        lower = np.zeros(2)
        upper = np.array([radius, radius])
    elif model is ModelType.HYPERBOLIC_STANDARD:
        f = fermi_dirac_integrand(
            alpha, radius, params.zeta_eta, 1.0 / params.temperature
        )
        lower = np.zeros(3)
        upper = np.array([radius, radius, math.pi])
    elif model is ModelType.HYPERBOLIC_RGG:
        f = heaviside_integrand(alpha, radius, params.zeta_eta)
        lower = np.zeros(3)
        upper = np.array([radius, radius, math.pi])
    else:
        raise ValueError(f"Model {model.value} is not calibrated by radius")

    with np.errstate(over="ignore", invalid="ignore"):
        estimate = estimator.integrate(f, lower, upper)
    return params.n * estimate.value


def calibrate_radius(
    params: GraphParameters,
    alpha: float,
    config: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> float:
    """Find the disk radius R whose expected average degree is params.k_bar.

    Bisection on [0, search_upper_bound]: an estimate below k_bar means R is
    too large, so the upper bound moves down; otherwise the lower bound moves
    up. A NaN estimate leaves the bracket untouched and retries at a slightly
    larger R.

    Args:
        params: Graph parameters; the model is inferred from them.
        alpha: Radial decay rate of the model.
        config: Tolerance, iteration cap and Monte Carlo budget.
        estimator: Integral estimator (default: MISER on the mc_seed stream).

    Returns:
        The calibrated radius.

    Raises:
        CalibrationError: If no radius within tolerance is found within
            max_iterations, or the bracket collapses to zero.
    """
    config = config or CalibrationConfig()
    if estimator is None:
        estimator = MiserIntegrator(
            calls=config.mc_calls, rng=np.random.default_rng(config.mc_seed)
        )
    model = params.model
    beta = 1.0 / params.temperature if model is ModelType.HYPERBOLIC_STANDARD else None

    low = 0.0
    high = search_upper_bound(params.n, beta)
    retry_mid: float | None = None
    estimate = math.nan

    for iteration in range(config.max_iterations):
        mid = retry_mid if retry_mid is not None else (high + low) / 2.0
        retry_mid = None
        estimate = expected_degree(model, params, alpha, mid, estimator)

        if math.isnan(estimate):
            retry_mid = mid * NAN_RETRY_FACTOR
            continue

        log.debug(
            "Radius bisection %d: R=%.6f, expected degree=%.4f",
            iteration, mid, estimate,
        )
        if abs(estimate - params.k_bar) <= config.tolerance:
            log.info(
                "Calibrated radius R=%.6f after %d iterations (expected degree %.4f)",
                mid, iteration + 1, estimate,
            )
            return mid

        if estimate < params.k_bar:
            high = mid
        else:
            low = mid
        if high < sys.float_info.min:
            break

    raise CalibrationError(
        f"Network cannot be generated with n={params.n}, k_bar={params.k_bar}, "
        f"gamma={params.gamma}, T={params.temperature}: radius calibration did "
        f"not converge (last expected degree {estimate:.4f}). "
        f"Try different parameters."
    )


def soft_rgg_expected_degree(
    params: GraphParameters, lam: float, hyp2f1: Hyp2f1 = scipy.special.hyp2f1
) -> float:
    """n * 2F1(1, 1/beta; 1 + 1/beta; -lambda) for the soft RGG."""
    beta = 1.0 / params.temperature
    b = 1.0 / beta
    return params.n * hypergeometric_f(1.0, b, 1.0 + b, -lam, hyp2f1=hyp2f1)


def calibrate_lambda(
    params: GraphParameters,
    config: CalibrationConfig | None = None,
    hyp2f1: Hyp2f1 = scipy.special.hyp2f1,
) -> float:
    """Find the soft RGG interaction strength lambda matching params.k_bar.

    Bisection on [1, DBL_MAX] with the same narrowing rule as the radius
    search and config.lambda_tolerance as stopping criterion. A NaN value
    of the hypergeometric function is retried at a slightly larger lambda.

    Raises:
        CalibrationError: If no lambda within tolerance is found within
            max_iterations (e.g. k_bar above n * 2F1(...; -1)).
    """
    config = config or CalibrationConfig()
    low = 1.0
    high = sys.float_info.max
    estimate = math.nan

    retry_mid: float | None = None

    for iteration in range(config.max_iterations):
        mid = retry_mid if retry_mid is not None else low + (high - low) / 2.0
        retry_mid = None
        estimate = soft_rgg_expected_degree(params, mid, hyp2f1)

        if math.isnan(estimate):
            retry_mid = mid * NAN_RETRY_FACTOR
            continue

        if abs(estimate - params.k_bar) <= config.lambda_tolerance:
            log.info(
                "Calibrated lambda=%.6f after %d iterations (expected degree %.4f)",
                mid, iteration + 1, estimate,
            )
            return mid
        if estimate < params.k_bar:
            high = mid
        else:
            low = mid

    raise CalibrationError(
        f"Network cannot be generated with n={params.n}, k_bar={params.k_bar}, "
        f"T={params.temperature}: lambda calibration did not converge "
        f"(last expected degree {estimate:.4f}). Try different parameters."
    )

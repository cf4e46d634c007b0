"""Distance metrics of the six model families.

Hyperbolic RGG and standard models use the hyperbolic law of cosines with
curvature -zeta^2:

    cosh(zeta d) = cosh(zeta r1) cosh(zeta r2) - sinh(zeta r1) sinh(zeta r2) cos(dtheta)

The soft configuration model is its zeta -> infinity limit (d = r1 + r2),
the angular models only see dtheta, and Erdos-Renyi has no geometry at all
(constant 1). Coincident points are at distance 0 in every model.

Once zeta r grows past a few hundred the cosh / sinh products overflow, so
far from the origin the same law is evaluated in log space through the
equivalent form

    cosh(zeta d) = cosh(zeta (r1 - r2)) + 2 sinh(zeta r1) sinh(zeta r2) sin^2(dtheta / 2)

which tends to d = r1 + r2 + (2 / zeta) ln(sin(dtheta / 2)) for large radii.
"""

import math
from dataclasses import dataclass

import numpy as np

from hggen.graph.types import ModelType, NodeCoordinate

_HYPERBOLIC_MODELS = (ModelType.HYPERBOLIC_RGG, ModelType.HYPERBOLIC_STANDARD)
_ANGULAR_MODELS = (ModelType.ANGULAR_RGG, ModelType.SOFT_RGG)

# Largest zeta * r for which products of cosh(zeta r) stay finite
MAX_DIRECT_ARGUMENT = 350.0
_LN2 = math.log(2.0)


@dataclass(frozen=True)
class PrecomputedTrig:
    """sinh(zeta r) and cosh(zeta r) for every node, aligned with node ids.

    Built once per generation run; values are computed with the same scalar
    functions as the uncached path, one evaluation per distinct radius.
    Only valid while zeta * r stays within MAX_DIRECT_ARGUMENT (see fits()).
    """

    sinh: np.ndarray
    cosh: np.ndarray

    @staticmethod
    def fits(r: np.ndarray, zeta: float) -> bool:
        return r.size == 0 or zeta * float(r.max()) <= MAX_DIRECT_ARGUMENT

    @classmethod
    def from_radii(cls, r: np.ndarray, zeta: float) -> "PrecomputedTrig":
        table: dict[float, tuple[float, float]] = {}
        for radius in r.tolist():
            if radius not in table:
                table[radius] = (math.sinh(zeta * radius), math.cosh(zeta * radius))
        pairs = [table[radius] for radius in r.tolist()]
        sinh = np.array([p[0] for p in pairs], dtype=np.float64)
        cosh = np.array([p[1] for p in pairs], dtype=np.float64)
        return cls(sinh=sinh, cosh=cosh)


def angular_distance(theta1: float, theta2: float) -> float:
    """Shortest angular separation, in [0, pi]."""
    return math.pi - abs(math.pi - abs(theta1 - theta2))


def hyperbolic_distance(
    node1: NodeCoordinate, node2: NodeCoordinate, zeta: float
) -> float:
    """Hyperbolic distance between two points of the disk with curvature -zeta^2."""
    if node1.r == node2.r and node1.theta == node2.theta:
        return 0.0
    # Collinear points: acosh(1 + rounding) would be unreliable
    if node1.theta == node2.theta:
        return abs(node1.r - node2.r)
    dtheta = angular_distance(node1.theta, node2.theta)
    if zeta * max(node1.r, node2.r) > MAX_DIRECT_ARGUMENT:
        d = _log_space_distance(
            np.array([node1.r]), np.array([node2.r]), np.array([dtheta]), zeta
        )
        return float(d[0])
    part1 = math.cosh(zeta * node1.r) * math.cosh(zeta * node2.r)
    part2 = math.sinh(zeta * node1.r) * math.sinh(zeta * node2.r) * math.cos(dtheta)
    return math.acosh(max(part1 - part2, 1.0)) / zeta


def distance(
    model: ModelType,
    node1: NodeCoordinate,
    node2: NodeCoordinate,
    zeta: float = 1.0,
) -> float:
    """Distance between two coordinates under the given model's metric.

    Args:
        model: Model family whose metric to use.
        node1: First coordinate.
        node2: Second coordinate.
        zeta: Square root of minus the curvature (hyperbolic models only).

    Returns:
        Non-negative distance; 0 exactly when the coordinates coincide.
    """
    if node1.r == node2.r and node1.theta == node2.theta:
        return 0.0
    if model in _HYPERBOLIC_MODELS:
        return hyperbolic_distance(node1, node2, zeta)
    if model is ModelType.SOFT_CONFIGURATION_MODEL:
        return node1.r + node2.r
    if model in _ANGULAR_MODELS:
        return angular_distance(node1.theta, node2.theta)
    if model is ModelType.ERDOS_RENYI:
        return 1.0
    raise ValueError(f"Unknown model type: {model!r}")


def hyperbolic_distance_array(
    cosh1: np.ndarray | float,
    sinh1: np.ndarray | float,
    cosh2: np.ndarray | float,
    sinh2: np.ndarray | float,
    dtheta: np.ndarray,
    zeta: float,
) -> np.ndarray:
    """Vectorized law of cosines from precomputed hyperbolic functions.

    The acosh argument is clamped to 1 against rounding below the domain.
    """
    arg = cosh1 * cosh2 - sinh1 * sinh2 * np.cos(dtheta)
    return np.arccosh(np.maximum(arg, 1.0)) / zeta


def _log_sinh(x: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore"):
        return x + np.log1p(-np.exp(-2.0 * x)) - _LN2


def _log_space_distance(
    r1: np.ndarray, r2: np.ndarray, dtheta: np.ndarray, zeta: float
) -> np.ndarray:
    x1, x2 = zeta * r1, zeta * r2
    spread = np.abs(x1 - x2)
    log_cosh_spread = spread + np.log1p(np.exp(-2.0 * spread)) - _LN2
    with np.errstate(divide="ignore"):
        log_sin = np.log(np.sin(dtheta / 2.0))
    log_cross = _LN2 + _log_sinh(x1) + _log_sinh(x2) + 2.0 * log_sin
    log_arg = np.maximum(np.logaddexp(log_cosh_spread, log_cross), 0.0)
    # acosh(a) = ln(a) + ln(1 + sqrt(1 - a^-2))
    return (log_arg + np.log1p(np.sqrt(-np.expm1(-2.0 * log_arg)))) / zeta


def hyperbolic_distance_polar(
    r1: np.ndarray | float,
    r2: np.ndarray | float,
    dtheta: np.ndarray | float,
    zeta: float,
) -> np.ndarray:
    """Vectorized hyperbolic distance from polar coordinates.

    Pairs with zeta * r above MAX_DIRECT_ARGUMENT go through the log-space
    form; the rest use hyperbolic_distance_array().
    """
    r1, r2, dtheta = (
        np.array(a, dtype=np.float64)
        for a in np.broadcast_arrays(r1, r2, dtheta)
    )
    far = zeta * np.maximum(r1, r2) > MAX_DIRECT_ARGUMENT
    d = np.empty(r1.shape, dtype=np.float64)
    near = ~far
    d[near] = hyperbolic_distance_array(
        np.cosh(zeta * r1[near]), np.sinh(zeta * r1[near]),
        np.cosh(zeta * r2[near]), np.sinh(zeta * r2[near]),
        dtheta[near], zeta,
    )
    d[far] = _log_space_distance(r1[far], r2[far], dtheta[far], zeta)
    return d


def distances_from(
    model: ModelType,
    i: int,
    r: np.ndarray,
    theta: np.ndarray,
    zeta: float = 1.0,
    trig: PrecomputedTrig | None = None,
) -> np.ndarray:
    """Distances from node i to every node j > i, in ascending j order.

    Row form of distance() used by the pairwise edge-sampling loop.

    Args:
        model: Model family whose metric to use.
        i: Source node id.
        r: Radial coordinates of all nodes.
        theta: Angular coordinates of all nodes.
        zeta: Square root of minus the curvature (hyperbolic models only).
        trig: Optional per-node sinh/cosh table for the hyperbolic metric.

    Returns:
        Float array of length n - i - 1.
    """
    r_i, theta_i = r[i], theta[i]
    r_j, theta_j = r[i + 1 :], theta[i + 1 :]

    if model in _HYPERBOLIC_MODELS:
        dtheta = np.pi - np.abs(np.pi - np.abs(theta_i - theta_j))
        if trig is not None:
            d = hyperbolic_distance_array(
                trig.cosh[i], trig.sinh[i], trig.cosh[i + 1 :], trig.sinh[i + 1 :],
                dtheta, zeta,
            )
        else:
            d = hyperbolic_distance_polar(r_i, r_j, dtheta, zeta)
        d = np.where(theta_j == theta_i, np.abs(r_i - r_j), d)
    elif model is ModelType.SOFT_CONFIGURATION_MODEL:
        d = r_i + r_j
    elif model in _ANGULAR_MODELS:
        d = np.pi - np.abs(np.pi - np.abs(theta_i - theta_j))
    elif model is ModelType.ERDOS_RENYI:
        d = np.ones(r_j.shape[0])
    else:
        raise ValueError(f"Unknown model type: {model!r}")

    d = np.asarray(d, dtype=np.float64)
    d[(r_j == r_i) & (theta_j == theta_i)] = 0.0
    return d

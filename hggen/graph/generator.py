"""Hyperbolic graph generators for the six model families.

Every generator follows the same pipeline:
1. Pin the parameters to the model's regime (e.g. T = 0 for the RGG)
2. Compute internal parameters (calibrated radius / lambda, or constants)
3. Seed the generation stream and sample all node coordinates
4. For every pair i < j, ascending i then j, draw u and add the edge
   iff u < p(i, j)

Connection probabilities (Krioukov et al. 2010, Phys. Rev. E 82, 036106):

| model                    | p(i, j)                                   |
|--------------------------|-------------------------------------------|
| hyperbolic RGG           | 1 if d <= R else 0                        |
| hyperbolic standard      | 1 / (exp((1/T)(zeta/2)(d - R)) + 1)       |
| soft configuration model | 1 / (exp((eta/2)(r_i + r_j - R)) + 1)     |
| angular RGG              | 1 if dtheta <= pi k_bar / n else 0        |
| soft RGG                 | 1 / (1 + lambda (dtheta / pi)^(1/T))      |
| Erdos-Renyi              | 1 / (1 + n / k_bar)                       |
"""

import logging
import math
from collections.abc import Callable
from dataclasses import replace

import numpy as np
import scipy.sparse
import scipy.special

from hggen.config.parameters import CalibrationConfig, GraphParameters
from hggen.graph.calibration import calibrate_lambda, calibrate_radius
from hggen.graph.distance import PrecomputedTrig, distance, distances_from
from hggen.graph.errors import GraphGenerationError
from hggen.graph.integration import IntegralEstimator
from hggen.graph.models import INF_GAMMA, INF_RADIUS, INF_TEMPERATURE
from hggen.graph.sampling import sample_coordinates
from hggen.graph.types import (
    AngularParameters,
    ConfigurationParameters,
    HyperbolicGraph,
    HyperbolicParameters,
    InternalParameters,
    ModelType,
    NodeCoordinate,
    SoftAngularParameters,
)
from hggen.reproducibility.seed import make_rng

log = logging.getLogger(__name__)


def connection_probability(
    params: GraphParameters,
    internal: InternalParameters,
    node1: NodeCoordinate,
    node2: NodeCoordinate,
) -> float:
    """Probability that two nodes are linked under the model of params.

    Args:
        params: Graph parameters (model, n, k_bar, temperature, zeta_eta).
        internal: Internal parameters of that model.
        node1: First node coordinate.
        node2: Second node coordinate.

    Returns:
        Probability in [0, 1].
    """
    model = params.model
    d = distance(model, node1, node2, params.zeta_eta)

    if model is ModelType.HYPERBOLIC_RGG:
        return 1.0 if d <= internal.radius else 0.0
    if model is ModelType.HYPERBOLIC_STANDARD:
        if node1.r == node2.r and node1.theta == node2.theta:
            return 0.0
        x = (1.0 / params.temperature) * params.zeta_eta / 2.0 * (d - internal.radius)
        return float(scipy.special.expit(-x))
    if model is ModelType.SOFT_CONFIGURATION_MODEL:
        return float(scipy.special.expit(-internal.eta / 2.0 * (d - internal.radius)))
    if model is ModelType.ANGULAR_RGG:
        return 1.0 if d <= math.pi * params.k_bar / params.n else 0.0
    if model is ModelType.SOFT_RGG:
        return 1.0 / (1.0 + internal.lam * (d / math.pi) ** (1.0 / params.temperature))
    if model is ModelType.ERDOS_RENYI:
        return 1.0 / (1.0 + params.n / params.k_bar)
    raise ValueError(f"Unknown model type: {model!r}")


def connection_probabilities_from(
    params: GraphParameters,
    internal: InternalParameters,
    i: int,
    r: np.ndarray,
    theta: np.ndarray,
    trig: PrecomputedTrig | None = None,
) -> np.ndarray:
    """Row form of connection_probability(): p(i, j) for every j > i."""
    model = params.model
    d = distances_from(model, i, r, theta, params.zeta_eta, trig)

    if model is ModelType.HYPERBOLIC_RGG:
        return (d <= internal.radius).astype(np.float64)
    if model is ModelType.HYPERBOLIC_STANDARD:
        x = (1.0 / params.temperature) * params.zeta_eta / 2.0 * (d - internal.radius)
        p = scipy.special.expit(-x)
        p[(r[i + 1 :] == r[i]) & (theta[i + 1 :] == theta[i])] = 0.0
        return p
    if model is ModelType.SOFT_CONFIGURATION_MODEL:
        return scipy.special.expit(-internal.eta / 2.0 * (d - internal.radius))
    if model is ModelType.ANGULAR_RGG:
        return (d <= math.pi * params.k_bar / params.n).astype(np.float64)
    if model is ModelType.SOFT_RGG:
        return 1.0 / (1.0 + internal.lam * (d / math.pi) ** (1.0 / params.temperature))
    if model is ModelType.ERDOS_RENYI:
        return np.full(d.shape[0], 1.0 / (1.0 + params.n / params.k_bar))
    raise ValueError(f"Unknown model type: {model!r}")


def sample_edges(
    params: GraphParameters,
    internal: InternalParameters,
    r: np.ndarray,
    theta: np.ndarray,
    rng: np.random.Generator,
    trig: PrecomputedTrig | None = None,
) -> scipy.sparse.csr_matrix:
    """Sample the undirected edge set by independent Bernoulli draws.

    Row i draws n - i - 1 uniforms at once; with ascending i this consumes
    the stream in the same (i, j) order as a double loop over i < j.

    Returns:
        Symmetric CSR adjacency with unit entries and an empty diagonal.
    """
    n = r.shape[0]
    sources: list[np.ndarray] = []
    targets: list[np.ndarray] = []
    for i in range(n - 1):
        p = connection_probabilities_from(params, internal, i, r, theta, trig)
        u = rng.random(n - i - 1)
        linked = np.flatnonzero(u < p) + i + 1
        sources.append(np.full(linked.shape[0], i, dtype=np.int64))
        targets.append(linked.astype(np.int64))

    rows = np.concatenate(sources) if sources else np.zeros(0, dtype=np.int64)
    cols = np.concatenate(targets) if targets else np.zeros(0, dtype=np.int64)
    data = np.ones(2 * rows.shape[0], dtype=np.float64)
    adjacency = scipy.sparse.coo_matrix(
        (data, (np.concatenate([rows, cols]), np.concatenate([cols, rows]))),
        shape=(n, n),
    ).tocsr()
    adjacency.sort_indices()
    return adjacency


def _build_graph(
    params: GraphParameters, internal: InternalParameters
) -> HyperbolicGraph:
    """Sample coordinates and edges for already computed internal parameters."""
    model = params.model
    rng = make_rng(params.seed)
    try:
        r, theta = sample_coordinates(model, internal, params.n, rng)
        trig = None
        if model in (
            ModelType.HYPERBOLIC_RGG, ModelType.HYPERBOLIC_STANDARD
        ) and PrecomputedTrig.fits(r, params.zeta_eta):
            trig = PrecomputedTrig.from_radii(r, params.zeta_eta)
        adjacency = sample_edges(params, internal, r, theta, rng, trig)
    except MemoryError as exc:
        raise GraphGenerationError(
            f"Unable to allocate memory for a graph with n={params.n}"
        ) from exc

    graph = HyperbolicGraph(
        params=params, r=r, theta=theta, adjacency=adjacency, internal=internal
    )
    log.info(
        "Generated %s graph: n=%d, edges=%d, average degree=%.3f",
        model.value,
        graph.num_vertices,
        graph.num_edges,
        2.0 * graph.num_edges / graph.num_vertices,
    )
    return graph


def generate_hyperbolic_rgg(
    params: GraphParameters,
    calibration: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> HyperbolicGraph:
    """Hyperbolic random geometric graph (finite gamma, T = 0)."""
    params = replace(params, temperature=0.0)
    alpha = 0.5 * params.zeta_eta * (params.gamma - 1.0)
    radius = calibrate_radius(params, alpha, calibration, estimator)
    log.debug("Internal parameters: alpha=%f, R=%f", alpha, radius)
    return _build_graph(params, HyperbolicParameters(radius=radius, alpha=alpha))


def generate_hyperbolic_standard(
    params: GraphParameters,
    calibration: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> HyperbolicGraph:
    """Hyperbolic standard model (finite gamma, 0 < T < INF_TEMPERATURE)."""
    zeta, t = params.zeta_eta, params.temperature
    # Cold (T <= 1) and hot (T > 1) regimes differ in the radial decay
    if t <= 1:
        alpha = 0.5 * zeta * (params.gamma - 1.0)
    else:
        alpha = 0.5 * zeta / t * (params.gamma - 1.0)
    radius = calibrate_radius(params, alpha, calibration, estimator)
    log.debug("Internal parameters: alpha=%f, R=%f", alpha, radius)
    return _build_graph(params, HyperbolicParameters(radius=radius, alpha=alpha))


def generate_soft_configuration_model(
    params: GraphParameters,
    calibration: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> HyperbolicGraph:
    """Soft configuration model (finite gamma, T >= INF_TEMPERATURE).

    zeta_eta holds eta = zeta / T; curvature itself is infinite.
    """
    params = replace(params, temperature=float(INF_TEMPERATURE))
    eta = params.zeta_eta
    alpha = 0.5 * eta * (params.gamma - 1.0)
    radius = calibrate_radius(params, alpha, calibration, estimator)
    log.debug("Internal parameters: alpha=%f, eta=%f, R=%f", alpha, eta, radius)
    return _build_graph(
        params, ConfigurationParameters(radius=radius, alpha=alpha, eta=eta)
    )


def generate_angular_rgg(
    params: GraphParameters,
    calibration: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> HyperbolicGraph:
    """Angular random geometric graph (infinite gamma, T = 0)."""
    params = replace(params, gamma=float(INF_GAMMA), temperature=0.0)
    return _build_graph(params, AngularParameters(radius=INF_RADIUS))


def generate_soft_rgg(
    params: GraphParameters,
    calibration: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> HyperbolicGraph:
    """Soft random geometric graph (infinite gamma, 0 < T < INF_TEMPERATURE)."""
    params = replace(params, gamma=float(INF_GAMMA))
    lam = calibrate_lambda(params, calibration)
    log.debug("Internal parameters: lambda=%f", lam)
    return _build_graph(params, SoftAngularParameters(radius=INF_RADIUS, lam=lam))


def generate_erdos_renyi(
    params: GraphParameters,
    calibration: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> HyperbolicGraph:
    """Erdos-Renyi graph (infinite gamma, T >= INF_TEMPERATURE)."""
    params = replace(
        params, gamma=float(INF_GAMMA), temperature=float(INF_TEMPERATURE)
    )
    return _build_graph(params, AngularParameters(radius=INF_RADIUS))


GeneratorFn = Callable[
    [GraphParameters, CalibrationConfig | None, IntegralEstimator | None],
    HyperbolicGraph,
]

GENERATORS: dict[ModelType, GeneratorFn] = {
    ModelType.HYPERBOLIC_RGG: generate_hyperbolic_rgg,
    ModelType.HYPERBOLIC_STANDARD: generate_hyperbolic_standard,
    ModelType.SOFT_CONFIGURATION_MODEL: generate_soft_configuration_model,
    ModelType.ANGULAR_RGG: generate_angular_rgg,
    ModelType.SOFT_RGG: generate_soft_rgg,
    ModelType.ERDOS_RENYI: generate_erdos_renyi,
}


def generate_graph(
    params: GraphParameters,
    calibration: CalibrationConfig | None = None,
    estimator: IntegralEstimator | None = None,
) -> HyperbolicGraph:
    """Generate a hyperbolic graph, choosing the model from gamma and T.

    Args:
        params: Validated graph parameters.
        calibration: Calibration settings (default: CalibrationConfig()).
        estimator: Optional integral estimator for radius calibration.

    Returns:
        The generated graph.

    Raises:
        GraphGenerationError: If calibration fails to converge
            (CalibrationError) or graph storage cannot be allocated.
    """
    model = params.model
    log.info(
        "Generating %s graph (n=%d, k_bar=%.3f, gamma=%.3f, T=%.3f, "
        "zeta/eta=%.3f, seed=%d)",
        model.value,
        params.n,
        params.k_bar,
        params.gamma,
        params.temperature,
        params.zeta_eta,
        params.seed,
    )
    return GENERATORS[model](params, calibration, estimator)

"""Node coordinate sampling by inverse transform on a seeded uniform stream.

If U is uniform on [0, 1) and F is a continuous CDF, F^-1(U) is distributed
according to F. The radial laws below invert their CDFs in closed form:

- uniform in the hyperbolic disk of radius R:
  F(r) = (cosh(r) - 1) / (cosh(R) - 1)
- quasi-uniform with decay alpha:
  F(r) = (cosh(alpha r) - 1) / (cosh(alpha R) - 1)

Angles are uniform on [0, 2*pi).
"""

import logging
import math

import numpy as np

from hggen.graph.models import ANGULAR_MODELS
from hggen.graph.types import InternalParameters, ModelType

log = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def uniform_radial_coordinate(radius: float, rng: np.random.Generator) -> float:
    """Draw a radius uniformly distributed over the hyperbolic disk.

    Returns 0 (no draw taken) with a warning when radius is 0.
    """
    if radius == 0:
        log.warning("Radius = 0: radial coordinate set to 0")
        return 0.0
    u = rng.random()
    return math.acosh(1.0 + u * (math.cosh(radius) - 1.0))


def quasi_uniform_radial_coordinate(
    radius: float, alpha: float, rng: np.random.Generator
) -> float:
    """Draw a radius with density proportional to sinh(alpha r) on [0, radius].

    The law is undefined for radius = 0 or alpha = 0; in that case no draw is
    taken, a warning is logged, and 0 is returned.
    """
    if radius == 0 or alpha == 0:
        log.warning("Radius = 0 or alpha = 0: discontinuity, radial coordinate set to 0")
        return 0.0
    u = rng.random()
    return (1.0 / alpha) * math.acosh(1.0 + u * (math.cosh(alpha * radius) - 1.0))


def uniform_angular_coordinate(rng: np.random.Generator) -> float:
    """Draw an angle uniformly on [0, 2*pi)."""
    return rng.random() * TWO_PI


def sample_coordinates(
    model: ModelType,
    internal: InternalParameters,
    n: int,
    rng: np.random.Generator,
) -> tuple[np.ndarray, np.ndarray]:
    """Sample the coordinates of all n nodes.

    Vectorized, but consumes the stream exactly like the per-node loop
    "for id in range(n): draw r, draw theta": the (n, 2) uniform block is
    filled row-major, so column 0 holds the radial draws and column 1 the
    angular ones. Angular-only models place every node at internal.radius
    and draw only theta, as does the degenerate radial case.

    Args:
        model: Model family being generated.
        internal: Calibrated internal parameters of that model.
        n: Number of nodes.
        rng: Generation stream, freshly seeded for this run.

    Returns:
        (r, theta) float arrays of length n.
    """
    if model in ANGULAR_MODELS:
        r = np.full(n, float(internal.radius))
        theta = rng.random(n) * TWO_PI
        return r, theta

    radius, alpha = internal.radius, internal.alpha
    if radius == 0 or alpha == 0:
        log.warning("Radius = 0 or alpha = 0: discontinuity, radial coordinates set to 0")
        return np.zeros(n), rng.random(n) * TWO_PI

    u = rng.random((n, 2))
    r = (1.0 / alpha) * np.arccosh(1.0 + u[:, 0] * (math.cosh(alpha * radius) - 1.0))
    theta = u[:, 1] * TWO_PI
    return r, theta

"""Range checks and normalization applied to user parameters before generation.

The generation engine itself performs no input validation beyond model
dispatch; callers run these checks first.
"""

import logging
from dataclasses import replace

from hggen.config.parameters import GraphParameters
from hggen.graph.models import INF_GAMMA

log = logging.getLogger(__name__)


def validate_parameters(params: GraphParameters) -> list[str]:
    """Check graph parameters against the supported ranges.

    Checks:
    1. n >= 3
    2. 1 <= k_bar <= n - 1
    3. temperature >= 0
    4. gamma >= 2
    5. zeta_eta > 0

    Args:
        params: Parameters to check.

    Returns:
        List of error strings (empty = valid parameters).
    """
    errors: list[str] = []

    if params.n < 3:
        errors.append(f"Number of nodes must be n >= 3, got {params.n}")
    if params.k_bar < 1 or params.k_bar > params.n - 1:
        errors.append(
            f"Average degree must satisfy 1 <= k_bar <= n - 1, got "
            f"k_bar={params.k_bar} with n={params.n}"
        )
    if params.temperature < 0:
        errors.append(
            f"Temperature must be non-negative, got {params.temperature}"
        )
    if params.gamma < 2:
        errors.append(f"Gamma must be >= 2, got {params.gamma}")
    if params.zeta_eta <= 0:
        errors.append(f"zeta/eta must be positive, got {params.zeta_eta}")

    return errors


def normalize_parameters(
    params: GraphParameters, zeta_provided: bool = False
) -> GraphParameters:
    """Apply the non-fatal parameter corrections, warning for each.

    - zeta (or eta) only matters at finite gamma: an explicit value given
      with infinite gamma is reset to 1.
    - seed must be >= 1: smaller seeds are reset to 1.
    """
    if zeta_provided and params.gamma >= INF_GAMMA:
        log.warning(
            "zeta or eta make sense only at finite values of gamma; "
            "the provided value %s will be ignored",
            params.zeta_eta,
        )
        params = replace(params, zeta_eta=1.0)
    if params.seed < 1:
        log.warning("Seed has to be greater than 0, assuming seed = 1")
        params = replace(params, seed=1)
    return params

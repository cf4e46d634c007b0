"""Model dispatch from macroscopic parameters to one of six generative families."""

from hggen.graph.types import ModelType

# Thresholds at and above which gamma / temperature count as infinite
INF_GAMMA = 10
INF_TEMPERATURE = 10
# Fixed radius of every node in the angular-only models
INF_RADIUS = 1000

ANGULAR_MODELS = frozenset(
    {ModelType.ANGULAR_RGG, ModelType.SOFT_RGG, ModelType.ERDOS_RENYI}
)


def infer_model(gamma: float, temperature: float) -> ModelType:
    """Classify (gamma, temperature) into exactly one model family.

    | gamma      | temperature   | model                    |
    |------------|---------------|--------------------------|
    | < INF      | 0             | HYPERBOLIC_RGG           |
    | < INF      | (0, INF)      | HYPERBOLIC_STANDARD      |
    | < INF      | >= INF        | SOFT_CONFIGURATION_MODEL |
    | >= INF     | 0             | ANGULAR_RGG              |
    | >= INF     | (0, INF)      | SOFT_RGG                 |
    | >= INF     | >= INF        | ERDOS_RENYI              |

    Values are never rejected here; range validation happens before the
    generator is invoked.
    """
    if gamma < INF_GAMMA:
        if temperature == 0:
            return ModelType.HYPERBOLIC_RGG
        if temperature < INF_TEMPERATURE:
            return ModelType.HYPERBOLIC_STANDARD
        return ModelType.SOFT_CONFIGURATION_MODEL

    if temperature == 0:
        return ModelType.ANGULAR_RGG
    if temperature < INF_TEMPERATURE:
        return ModelType.SOFT_RGG
    return ModelType.ERDOS_RENYI


def uses_eta(gamma: float, temperature: float) -> bool:
    """True when zeta_eta holds eta = zeta / T (soft configuration model)."""
    return infer_model(gamma, temperature) is ModelType.SOFT_CONFIGURATION_MODEL

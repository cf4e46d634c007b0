"""Generator configuration dataclasses: all frozen and slotted for immutability."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hggen.graph.types import ModelType


@dataclass(frozen=True, slots=True)
class GraphParameters:
    """Macroscopic parameters of a hyperbolic graph.

    The model type is not stored: it is always inferred from gamma and
    temperature, so a graph loaded from disk cannot disagree with its own
    parameters.
    """

    n: int = 1000  # number of nodes
    k_bar: float = 10.0  # expected average degree
    gamma: float = 2.0  # expected power-law exponent (>= 10 means infinite)
    temperature: float = 0.0  # >= 10 means infinite
    zeta_eta: float = 1.0  # sqrt(-curvature), or eta = zeta/T in the SCM
    seed: int = 1

    @property
    def model(self) -> "ModelType":
        from hggen.graph.models import infer_model

        return infer_model(self.gamma, self.temperature)


@dataclass(frozen=True, slots=True)
class CalibrationConfig:
    """Numerical settings of the calibration engine."""

    tolerance: float = 0.01  # max |n * I(R) - k_bar|
    lambda_tolerance: float = 0.001  # max |n * f(lambda) - k_bar|
    max_iterations: int = 5000
    mc_calls: int = 100_000  # Monte Carlo integrand evaluations per estimate
    mc_seed: int = 0  # Monte Carlo stream, independent of the graph seed


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Top-level configuration composing graph and calibration settings."""

    graph: GraphParameters = field(default_factory=GraphParameters)
    calibration: CalibrationConfig = field(default_factory=CalibrationConfig)
    starting_id: int = 1  # first node id written to .hg files
    description: str = ""
    tags: tuple[str, ...] = ()

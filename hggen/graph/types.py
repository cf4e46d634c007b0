"""Graph data structures for hyperbolic graph generation and storage."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

import numpy as np
import scipy.sparse

if TYPE_CHECKING:
    from hggen.config.parameters import GraphParameters


class ModelType(Enum):
    """The six generative families, keyed by (gamma, temperature) regime."""

    HYPERBOLIC_RGG = "hyperbolic_rgg"
    HYPERBOLIC_STANDARD = "hyperbolic_standard"
    SOFT_CONFIGURATION_MODEL = "soft_configuration_model"
    ANGULAR_RGG = "angular_rgg"
    SOFT_RGG = "soft_rgg"
    ERDOS_RENYI = "erdos_renyi"


@dataclass(frozen=True, slots=True)
class NodeCoordinate:
    """Polar coordinates of a node in the hyperbolic disk."""

    r: float  # radial coordinate, distance from the origin
    theta: float  # angular coordinate in [0, 2*pi)


@dataclass(frozen=True, slots=True)
class HyperbolicParameters:
    """Internal parameters of the hyperbolic RGG and standard models."""

    radius: float
    alpha: float


@dataclass(frozen=True, slots=True)
class ConfigurationParameters:
    """Internal parameters of the soft configuration model."""

    radius: float
    alpha: float
    eta: float


@dataclass(frozen=True, slots=True)
class AngularParameters:
    """Internal parameters of the angular RGG and Erdos-Renyi models."""

    radius: float


@dataclass(frozen=True, slots=True)
class SoftAngularParameters:
    """Internal parameters of the soft RGG model."""

    radius: float
    lam: float  # interaction strength lambda


InternalParameters = Union[
    HyperbolicParameters,
    ConfigurationParameters,
    AngularParameters,
    SoftAngularParameters,
]


@dataclass(frozen=True)
class HyperbolicGraph:
    """Immutable container for a generated (or loaded) hyperbolic graph.

    Owns the node coordinates, the undirected edge set and the parameters
    the graph was generated with. The adjacency is stored symmetric with an
    empty diagonal, so every unordered pair appears at most once as an edge.
    Uses frozen=True but omits slots=True since numpy/scipy objects don't
    interact well with __slots__.
    """

    params: "GraphParameters"
    r: np.ndarray  # float array of length n, radial coordinates
    theta: np.ndarray  # float array of length n, angular coordinates
    adjacency: scipy.sparse.csr_matrix  # symmetric 0/1 adjacency (n x n)
    internal: InternalParameters | None = None  # None for loaded graphs

    @property
    def model(self) -> ModelType:
        return self.params.model

    @property
    def num_vertices(self) -> int:
        return int(self.r.shape[0])

    @property
    def num_edges(self) -> int:
        return int(self.adjacency.nnz // 2)

    def vertices(self) -> range:
        return range(self.num_vertices)

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield each undirected edge once as (i, j) with i < j, ascending."""
        upper = scipy.sparse.triu(self.adjacency, k=1, format="csr")
        indptr, indices = upper.indptr, upper.indices
        for i in range(upper.shape[0]):
            for j in np.sort(indices[indptr[i] : indptr[i + 1]]):
                yield i, int(j)

    def degree(self, node: int) -> int:
        return int(self.adjacency.indptr[node + 1] - self.adjacency.indptr[node])

    def degrees(self) -> np.ndarray:
        return np.diff(self.adjacency.indptr).astype(np.int64)

    def neighbors(self, node: int) -> np.ndarray:
        start, end = self.adjacency.indptr[node], self.adjacency.indptr[node + 1]
        return np.sort(self.adjacency.indices[start:end])

    def coordinate(self, node: int) -> NodeCoordinate:
        return NodeCoordinate(r=float(self.r[node]), theta=float(self.theta[node]))

    def distance(self, node1: int, node2: int) -> float:
        """Model distance between two nodes of this graph."""
        from hggen.graph.distance import distance

        return distance(
            self.model,
            self.coordinate(node1),
            self.coordinate(node2),
            self.params.zeta_eta,
        )

"""Per-node topological properties and their distributions.

Computed on nodes with nonzero degree only; isolated nodes carry no
neighbour or clustering information and would bias the averages toward 0.
All per-node maps are keyed by 0-based node id.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import scipy.sparse

from hggen.graph.types import HyperbolicGraph

log = logging.getLogger(__name__)

PROPERTY_FILES = ("degree", "knn", "cc", "radial", "angular")


@dataclass(frozen=True)
class GraphProperties:
    """Per-node property maps of the non-isolated nodes of a graph."""

    degree: dict[int, float]
    knn: dict[int, float]  # average neighbour degree
    cc: dict[int, float]  # local clustering coefficient
    radial: dict[int, float]
    angular: dict[int, float]

    @property
    def num_nodes(self) -> int:
        return len(self.degree)

    def mean(self, name: str) -> float:
        values = list(getattr(self, name).values())
        return float(np.mean(values)) if values else 0.0

    def std(self, name: str) -> float:
        values = list(getattr(self, name).values())
        return float(np.std(values)) if values else 0.0


def degree_map(graph: HyperbolicGraph) -> dict[int, float]:
    degrees = graph.degrees()
    return {int(i): float(degrees[i]) for i in np.flatnonzero(degrees)}


def average_neighbor_degree(graph: HyperbolicGraph) -> dict[int, float]:
    """Mean degree of the neighbours of each non-isolated node."""
    degrees = graph.degrees().astype(np.float64)
    neighbor_sum = graph.adjacency @ degrees
    return {
        int(i): float(neighbor_sum[i] / degrees[i]) for i in np.flatnonzero(degrees)
    }


def clustering_coefficients(graph: HyperbolicGraph) -> dict[int, float]:
    """Local clustering: closed triangles over possible neighbour pairs.

    Nodes of degree 1 have no neighbour pairs and get 0.
    """
    adjacency = graph.adjacency
    degrees = graph.degrees().astype(np.float64)
    # Row i of (A @ A) * A counts, for each neighbour j, the common neighbours of i and j
    closed = np.asarray(
        (adjacency @ adjacency).multiply(adjacency).sum(axis=1)
    ).ravel()
    possible = degrees * (degrees - 1.0)
    cc = np.divide(closed, possible, out=np.zeros_like(closed), where=possible > 0)
    return {int(i): float(cc[i]) for i in np.flatnonzero(degrees)}


def _frequencies(id_property: dict[int, float]) -> tuple[np.ndarray, np.ndarray]:
    values = np.fromiter(id_property.values(), dtype=np.float64, count=len(id_property))
    return np.unique(values, return_counts=True)


def pdf(id_property: dict[int, float]) -> dict[float, float]:
    """Empirical probability of each distinct value, keys ascending."""
    if not id_property:
        return {}
    values, counts = _frequencies(id_property)
    total = len(id_property)
    return {float(v): float(c) / total for v, c in zip(values, counts)}


def ccdf(id_property: dict[int, float]) -> dict[float, float]:
    """Fraction of entries strictly greater than each distinct value."""
    if not id_property:
        return {}
    values, counts = _frequencies(id_property)
    total = len(id_property)
    remaining = total - np.cumsum(counts)
    return {float(v): float(r) / total for v, r in zip(values, remaining)}


def average_over_degree(
    id_degree: dict[int, float], id_property: dict[int, float]
) -> dict[float, float]:
    """Average of a property over the nodes sharing each degree value.

    Nodes missing from id_property are skipped but still count toward the
    number of nodes of their degree.
    """
    sums: dict[float, float] = {}
    counts: dict[float, int] = {}
    for node, k in id_degree.items():
        counts[k] = counts.get(k, 0) + 1
        if node in id_property:
            sums[k] = sums.get(k, 0.0) + id_property[node]
    return {k: sums[k] / counts[k] for k in sorted(sums)}


def compute_properties(graph: HyperbolicGraph) -> GraphProperties:
    """Compute degree, knn, clustering and coordinates of non-isolated nodes."""
    degrees = degree_map(graph)
    props = GraphProperties(
        degree=degrees,
        knn=average_neighbor_degree(graph),
        cc=clustering_coefficients(graph),
        radial={i: float(graph.r[i]) for i in degrees},
        angular={i: float(graph.theta[i]) for i in degrees},
    )
    log.info(
        "Properties of %d non-isolated nodes (of %d): <k>=%.3f, <knn>=%.3f, <cc>=%.3f",
        props.num_nodes, graph.num_vertices,
        props.mean("degree"), props.mean("knn"), props.mean("cc"),
    )
    return props


def write_property_files(props: GraphProperties, output_dir: Path | str) -> list[Path]:
    """Write one "<id>\\t<value>" file per property.

    Returns:
        Paths of degree.txt, knn.txt, cc.txt, radial.txt and angular.txt.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in PROPERTY_FILES:
        path = output_dir / f"{name}.txt"
        with open(path, "w") as f:
            for node, value in sorted(getattr(props, name).items()):
                f.write(f"{node}\t{value:g}\n")
        paths.append(path)
    log.info("Property files written to %s", output_dir)
    return paths

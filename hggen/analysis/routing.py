"""Greedy routing over the embedding of a hyperbolic graph.

A message at node u is forwarded to the neighbour of u closest to the
destination under the graph's own metric. Routing fails as soon as it
returns to a node it already visited. The success ratio is measured over
random source/destination pairs that lie in the same connected component
and are not isolated.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np
from scipy.sparse.csgraph import connected_components

from hggen.graph.types import HyperbolicGraph

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoutingResult:
    """Outcome of a batch of greedy routing attempts."""

    attempts: int  # pairs drawn
    effective_attempts: int  # pairs actually routed
    successes: int

    @property
    def success_ratio(self) -> float:
        if self.effective_attempts == 0:
            return math.nan
        return self.successes / self.effective_attempts


def greedy_route(
    graph: HyperbolicGraph, src: int, dst: int, rng: np.random.Generator
) -> bool:
    """Route greedily from src to dst; True if dst is reached.

    Among equally close neighbours one is chosen at random; a uniform is
    drawn at every hop, even without ties.
    """
    visited: set[int] = set()
    current = src
    while current != dst:
        visited.add(current)
        best = math.inf
        candidates: list[int] = []
        for neighbor in graph.neighbors(current).tolist():
            d = graph.distance(neighbor, dst)
            if d < best:
                best, candidates = d, [neighbor]
            elif d == best:
                candidates.append(neighbor)
        current = candidates[math.floor(rng.random() * (len(candidates) - 1))]
        if current in visited:
            return False
    log.debug("Routed %d -> %d after %d hops", src, dst, len(visited))
    return True


def greedy_routing_success_ratio(
    graph: HyperbolicGraph, attempts: int = 10000, seed: int = 1
) -> RoutingResult:
    """Estimate the greedy routing success ratio.

    Args:
        graph: Graph with coordinates.
        attempts: Number of (src, dst) pairs to draw.
        seed: Seed of the pair and tie-break stream.

    Returns:
        RoutingResult; success_ratio is NaN when no pair qualified.
    """
    n = graph.num_vertices
    _, component = connected_components(graph.adjacency, directed=False)
    degrees = graph.degrees()
    rng = np.random.default_rng(seed)

    effective = 0
    successes = 0
    for _ in range(attempts):
        src = math.floor(rng.random() * (n - 1))
        dst = math.floor(rng.random() * (n - 1))
        if degrees[src] == 0 or degrees[dst] == 0:
            continue
        if component[src] != component[dst]:
            continue
        effective += 1
        if greedy_route(graph, src, dst, rng):
            successes += 1

    result = RoutingResult(
        attempts=attempts, effective_attempts=effective, successes=successes
    )
    if effective == 0:
        log.warning("0 effective routing attempts")
    else:
        log.info(
            "Greedy routing: %d/%d successful (ratio %.4f)",
            successes, effective, result.success_ratio,
        )
    return result

"""Topological properties and greedy routing analysis of generated graphs."""

from hggen.analysis.properties import (
    GraphProperties,
    average_neighbor_degree,
    average_over_degree,
    ccdf,
    clustering_coefficients,
    compute_properties,
    degree_map,
    pdf,
    write_property_files,
)
from hggen.analysis.routing import (
    RoutingResult,
    greedy_route,
    greedy_routing_success_ratio,
)

__all__ = [
    "GraphProperties",
    "RoutingResult",
    "average_neighbor_degree",
    "average_over_degree",
    "ccdf",
    "clustering_coefficients",
    "compute_properties",
    "degree_map",
    "greedy_route",
    "greedy_routing_success_ratio",
    "pdf",
    "write_property_files",
]

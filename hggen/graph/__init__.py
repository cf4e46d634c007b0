"""Hyperbolic graph generation: model dispatch, calibration, sampling and storage."""

from hggen.graph.errors import CalibrationError, GraphFormatError, GraphGenerationError
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
from hggen.graph.models import INF_GAMMA, INF_RADIUS, INF_TEMPERATURE, infer_model
from hggen.graph.distance import PrecomputedTrig, distance
from hggen.graph.calibration import calibrate_lambda, calibrate_radius
from hggen.graph.generator import (
    GENERATORS,
    connection_probability,
    generate_angular_rgg,
    generate_erdos_renyi,
    generate_graph,
    generate_hyperbolic_rgg,
    generate_hyperbolic_standard,
    generate_soft_configuration_model,
    generate_soft_rgg,
)
from hggen.graph.io import load_hg, save_hg
from hggen.graph.cache import (
    generate_or_load_graph,
    graph_cache_key,
    load_graph,
    save_graph,
)

__all__ = [
    "AngularParameters",
    "CalibrationError",
    "ConfigurationParameters",
    "GENERATORS",
    "GraphFormatError",
    "GraphGenerationError",
    "HyperbolicGraph",
    "HyperbolicParameters",
    "INF_GAMMA",
    "INF_RADIUS",
    "INF_TEMPERATURE",
    "InternalParameters",
    "ModelType",
    "NodeCoordinate",
    "PrecomputedTrig",
    "SoftAngularParameters",
    "calibrate_lambda",
    "calibrate_radius",
    "connection_probability",
    "distance",
    "generate_angular_rgg",
    "generate_erdos_renyi",
    "generate_graph",
    "generate_hyperbolic_rgg",
    "generate_hyperbolic_standard",
    "generate_or_load_graph",
    "generate_soft_configuration_model",
    "generate_soft_rgg",
    "graph_cache_key",
    "infer_model",
    "load_graph",
    "load_hg",
    "save_graph",
    "save_hg",
]

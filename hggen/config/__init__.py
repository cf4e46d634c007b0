"""Generator configuration system with frozen, hashable, serializable dataclasses."""

from hggen.config.parameters import (
    CalibrationConfig,
    GeneratorConfig,
    GraphParameters,
)
from hggen.config.defaults import DEFAULT_CONFIG
from hggen.config.hashing import config_hash, graph_params_hash, full_config_hash
from hggen.config.serialization import config_to_json, config_from_json
from hggen.config.validation import normalize_parameters, validate_parameters

__all__ = [
    "CalibrationConfig",
    "GeneratorConfig",
    "GraphParameters",
    "DEFAULT_CONFIG",
    "config_hash",
    "graph_params_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
    "normalize_parameters",
    "validate_parameters",
]

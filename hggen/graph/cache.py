"""Graph caching by config hash.

Calibration dominates generation time for the hyperbolic models (thousands
of Monte Carlo integrals), so graphs are cached on disk and reused across
runs that share graph parameters, calibration settings and seed.
"""

import json
import logging
from dataclasses import asdict, replace
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from hggen.config.hashing import graph_params_hash
from hggen.config.parameters import GeneratorConfig, GraphParameters
from hggen.graph.generator import generate_graph
from hggen.graph.io import load_hg, save_hg
from hggen.graph.types import (
    AngularParameters,
    ConfigurationParameters,
    HyperbolicGraph,
    HyperbolicParameters,
    InternalParameters,
    SoftAngularParameters,
)
from hggen.reproducibility.git_hash import get_git_hash

log = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".cache/graphs")

_INTERNAL_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        HyperbolicParameters,
        ConfigurationParameters,
        AngularParameters,
        SoftAngularParameters,
    )
}


def graph_cache_key(config: GeneratorConfig) -> str:
    """Compute cache key for a generator configuration.

    Key = graph_params_hash + seed. Same graph params + same seed = cache hit.
    Description, tags and starting id don't affect the key.

    Returns:
        Cache key string like "a1b2c3d4e5f6a7b8_s42".
    """
    return f"{graph_params_hash(config)}_s{config.graph.seed}"


def _cache_path(config: GeneratorConfig, cache_dir: Path = DEFAULT_CACHE_DIR) -> Path:
    return Path(cache_dir) / graph_cache_key(config)


def _internal_to_dict(internal: InternalParameters | None) -> dict | None:
    if internal is None:
        return None
    return {"type": type(internal).__name__, **asdict(internal)}


def _internal_from_dict(d: dict | None) -> InternalParameters | None:
    if d is None:
        return None
    d = dict(d)
    cls = _INTERNAL_TYPES[d.pop("type")]
    return cls(**d)


def save_graph(
    graph: HyperbolicGraph,
    config: GeneratorConfig,
    cache_dir: Path = DEFAULT_CACHE_DIR,
) -> Path:
    """Save a generated graph to the cache.

    Stores:
    - graph.hg: the graph in .hg format (ids from config.starting_id)
    - coordinates.npz: full-precision r and theta
    - metadata.json: parameters, internal parameters, hashes, provenance

    Returns:
        Path to the cache directory for this graph.
    """
    cache_path = _cache_path(config, cache_dir)
    cache_path.mkdir(parents=True, exist_ok=True)

    save_hg(graph, cache_path / "graph.hg", starting_id=config.starting_id)
    np.savez(cache_path / "coordinates.npz", r=graph.r, theta=graph.theta)

    metadata = {
        "model": graph.model.value,
        "params": asdict(graph.params),
        "internal": _internal_to_dict(graph.internal),
        "num_edges": graph.num_edges,
        "config_hash": graph_params_hash(config),
        "git_hash": get_git_hash(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    with open(cache_path / "metadata.json", "w") as f:
        json.dump(metadata, f, indent=2)

    log.info("Graph cached at %s", cache_path)
    return cache_path


def load_graph(
    config: GeneratorConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> HyperbolicGraph | None:
    """Load a cached graph if it exists.

    Returns:
        The cached HyperbolicGraph, or None on a cache miss.
    """
    cache_path = _cache_path(config, cache_dir)

    required_files = ["graph.hg", "coordinates.npz", "metadata.json"]
    for fname in required_files:
        if not (cache_path / fname).exists():
            return None

    with open(cache_path / "metadata.json") as f:
        metadata = json.load(f)
    with np.load(cache_path / "coordinates.npz") as coords:
        r, theta = coords["r"], coords["theta"]

    graph = load_hg(cache_path / "graph.hg")
    graph = replace(
        graph,
        params=GraphParameters(**metadata["params"]),
        r=r,
        theta=theta,
        internal=_internal_from_dict(metadata["internal"]),
    )

    log.info("Graph loaded from cache: %s", cache_path)
    return graph


def generate_or_load_graph(
    config: GeneratorConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> HyperbolicGraph:
    """Generate a graph or load it from cache if available.

    On cache miss: generates the graph and saves it to the cache.
    On cache hit: loads from disk without calibration or sampling.
    """
    key = graph_cache_key(config)

    cached = load_graph(config, cache_dir)
    if cached is not None:
        log.info("Cache hit for %s", key)
        return cached

    log.info("Cache miss for %s, generating...", key)
    graph = generate_graph(config.graph, config.calibration)
    save_graph(graph, config, cache_dir)
    return graph

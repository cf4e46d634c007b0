"""Reading and writing graphs in the tab-separated .hg text format.

Layout:

    N <n> T <t> G <gamma> K <k_bar> Z|eta <zeta_eta> S <seed> I <starting_id>
    <id> <r> <theta>          (n lines, ascending id)
    <id> <id>                 (one line per undirected edge)

Floats carry 5 fixed decimals. Ids are shifted by the starting id on output
and shifted back on input. The zeta key reads "eta" for the soft
configuration model, where the value is eta = zeta / T.
"""

import logging
from pathlib import Path

import numpy as np
import scipy.sparse

from hggen.config.parameters import GraphParameters
from hggen.graph.errors import GraphFormatError
from hggen.graph.models import uses_eta
from hggen.graph.types import HyperbolicGraph

log = logging.getLogger(__name__)

HEADER_KEYS = ("N", "T", "G", "K", "Z", "S", "I")


def format_header(params: GraphParameters, starting_id: int = 1) -> str:
    zeta_key = "eta" if uses_eta(params.gamma, params.temperature) else "Z"
    fields = [
        ("N", str(params.n)),
        ("T", f"{params.temperature:.5f}"),
        ("G", f"{params.gamma:.5f}"),
        ("K", f"{params.k_bar:.5f}"),
        (zeta_key, f"{params.zeta_eta:.5f}"),
        ("S", str(params.seed)),
        ("I", str(starting_id)),
    ]
    return "\t".join(f"{key}\t{value}" for key, value in fields)


def save_hg(graph: HyperbolicGraph, path: Path | str, starting_id: int = 1) -> Path:
    """Write a graph to an .hg file.

    Args:
        graph: Graph to write.
        path: Destination file; parent directories are created.
        starting_id: Id written for node 0.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        f.write(format_header(graph.params, starting_id) + "\n")
        for i in graph.vertices():
            f.write(f"{i + starting_id}\t{graph.r[i]:.5f}\t{graph.theta[i]:.5f}\n")
        for i, j in graph.edges():
            f.write(f"{i + starting_id}\t{j + starting_id}\n")

    log.info(
        "Graph written to %s (%d nodes, %d edges)",
        path, graph.num_vertices, graph.num_edges,
    )
    return path


def _parse_header(tokens: list[str]) -> tuple[GraphParameters, int]:
    if len(tokens) < 2 * len(HEADER_KEYS):
        raise GraphFormatError(
            f"Truncated header: expected {2 * len(HEADER_KEYS)} tokens, "
            f"got {len(tokens)}"
        )
    values = tokens[1 : 2 * len(HEADER_KEYS) : 2]
    try:
        n = int(values[0])
        temperature = float(values[1])
        gamma = float(values[2])
        k_bar = float(values[3])
        zeta_eta = float(values[4])
        seed = int(values[5])
        starting_id = int(values[6])
    except ValueError as exc:
        raise GraphFormatError(f"Malformed header value: {exc}") from exc

    params = GraphParameters(
        n=n,
        k_bar=k_bar,
        gamma=gamma,
        temperature=temperature,
        zeta_eta=zeta_eta,
        seed=seed,
    )
    return params, starting_id


def load_hg(path: Path | str) -> HyperbolicGraph:
    """Read a graph from an .hg file.

    The model is re-inferred from the header's gamma and temperature;
    calibrated internal parameters are not stored and come back as None.

    Raises:
        FileNotFoundError: If path does not exist.
        GraphFormatError: If the header, coordinate block or edge list is
            truncated or malformed.
    """
    path = Path(path)
    with open(path) as f:
        tokens = f.read().split()

    params, starting_id = _parse_header(tokens)
    n = params.n
    body = tokens[2 * len(HEADER_KEYS) :]

    if len(body) < 3 * n:
        raise GraphFormatError(
            f"Truncated coordinate block: expected {n} nodes in {path}"
        )
    try:
        coords = np.array(body[: 3 * n], dtype=np.float64).reshape(n, 3)
        links = np.array(body[3 * n :], dtype=np.int64)
    except ValueError as exc:
        raise GraphFormatError(f"Non-numeric value in {path}: {exc}") from exc
    if links.shape[0] % 2:
        raise GraphFormatError(f"Dangling node id at the end of the edge list in {path}")

    links = links.reshape(-1, 2) - starting_id
    if links.size and (links.min() < 0 or links.max() >= n):
        raise GraphFormatError(f"Edge endpoint outside [0, {n}) in {path}")
    links = links[links[:, 0] != links[:, 1]]

    rows = np.concatenate([links[:, 0], links[:, 1]])
    cols = np.concatenate([links[:, 1], links[:, 0]])
    adjacency = scipy.sparse.coo_matrix(
        (np.ones(rows.shape[0]), (rows, cols)), shape=(n, n)
    ).tocsr()
    # Repeated lines collapse to one edge
    adjacency.data[:] = 1.0
    adjacency.sort_indices()

    graph = HyperbolicGraph(
        params=params,
        r=coords[:, 1].copy(),
        theta=coords[:, 2].copy(),
        adjacency=adjacency,
    )
    log.info(
        "Graph loaded from %s: %s, %d nodes, %d edges",
        path, graph.model.value, graph.num_vertices, graph.num_edges,
    )
    return graph

"""Plots of a graph's hyperbolic embedding and its degree distribution."""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.collections import LineCollection

from hggen.analysis.properties import GraphProperties, ccdf
from hggen.graph.models import ANGULAR_MODELS
from hggen.graph.types import HyperbolicGraph
from hggen.visualization.style import apply_style

PALETTE = sns.color_palette("colorblind", n_colors=8)
NODE_COLOR = PALETTE[0]
HUB_COLOR = PALETTE[3]
EDGE_COLOR = (0.6, 0.6, 0.6)


def plot_embedding(
    graph: HyperbolicGraph,
    max_edges: int = 5000,
    ax: plt.Axes | None = None,
) -> plt.Figure:
    """Draw nodes at their native polar coordinates, edges as straight chords.

    Angular-only models put every node at the same radius, so nodes are
    drawn on the unit circle. Node size grows with degree.

    Args:
        graph: Graph to draw.
        max_edges: Draw at most this many edges (the first in edge order).
        ax: Optional axes to plot on.

    Returns:
        Matplotlib Figure.
    """
    apply_style(grid=False)

    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    r = np.ones_like(graph.r) if graph.model in ANGULAR_MODELS else graph.r
    x = r * np.cos(graph.theta)
    y = r * np.sin(graph.theta)

    segments = []
    for i, j in graph.edges():
        if len(segments) >= max_edges:
            break
        segments.append([(x[i], y[i]), (x[j], y[j])])
    if segments:
        ax.add_collection(
            LineCollection(segments, colors=[EDGE_COLOR], linewidths=0.3, alpha=0.5)
        )

    degrees = graph.degrees()
    hub = degrees >= np.percentile(degrees, 99)
    sizes = 2.0 + 4.0 * np.sqrt(degrees)
    ax.scatter(x[~hub], y[~hub], s=sizes[~hub], color=NODE_COLOR, zorder=2)
    ax.scatter(x[hub], y[hub], s=sizes[hub], color=HUB_COLOR, zorder=3, label="top 1% degree")

    ax.set_aspect("equal")
    ax.set_title(
        f"{graph.model.value}: n={graph.num_vertices}, edges={graph.num_edges}"
    )
    ax.set_xticks([])
    ax.set_yticks([])
    ax.legend(loc="upper right")
    return fig


def plot_degree_ccdf(props: GraphProperties, ax: plt.Axes | None = None) -> plt.Figure:
    """Log-log complementary cumulative degree distribution."""
    apply_style()

    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    dist = {k: p for k, p in ccdf(props.degree).items() if p > 0}
    ax.loglog(list(dist), list(dist.values()), marker="o", linestyle="none",
              color=NODE_COLOR, markersize=4)
    ax.set_xlabel("degree k")
    ax.set_ylabel("P(K > k)")
    ax.set_title("Degree distribution")
    return fig

"""Tests for the visualization module.

Tests cover: style application, dual-format save, palette constants,
embedding plots for hyperbolic and angular models, and the degree ccdf.
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.collections import PathCollection

from hggen.analysis.properties import compute_properties
from hggen.config.parameters import GraphParameters
from hggen.graph.generator import generate_graph


@pytest.fixture(scope="module")
def er_graph():
    return generate_graph(
        GraphParameters(n=60, k_bar=6.0, gamma=10.0, temperature=10.0, seed=2)
    )


def _node_offsets(ax) -> np.ndarray:
    return np.vstack(
        [c.get_offsets() for c in ax.collections if isinstance(c, PathCollection)]
    )


# ── Style and Save Tests ──────────────────────────────────────────────


def test_apply_style_sets_whitegrid():
    """apply_style() sets seaborn whitegrid and publication rcParams."""
    from hggen.visualization.style import apply_style

    apply_style()
    assert plt.rcParams["savefig.dpi"] == 300
    assert plt.rcParams["axes.grid"] is True
    assert tuple(plt.rcParams["figure.figsize"]) == (6.0, 4.5)


def test_apply_style_without_grid_is_square():
    from hggen.visualization.style import apply_style

    apply_style(grid=False)
    assert plt.rcParams["axes.grid"] is False
    assert tuple(plt.rcParams["figure.figsize"]) == (6.0, 6.0)
    apply_style()


def test_save_figure_creates_png_and_svg(tmp_path):
    """save_figure creates both PNG and SVG, closes figure."""
    from hggen.visualization.style import save_figure

    fig, ax = plt.subplots()
    ax.plot([1, 2, 3], [1, 2, 3])
    fig_num = fig.number

    png_path, svg_path = save_figure(fig, tmp_path, "test_plot")

    assert png_path.exists()
    assert svg_path.exists()
    assert png_path.stat().st_size > 0
    assert fig_num not in plt.get_fignums()


def test_save_figure_creates_directory(tmp_path):
    """save_figure creates output directory if it doesn't exist."""
    from hggen.visualization.style import save_figure

    fig, ax = plt.subplots()
    nested = tmp_path / "sub" / "dir"
    png_path, _ = save_figure(fig, nested, "test_nested")

    assert nested.exists()
    assert png_path.exists()


def test_save_figure_single_format(tmp_path):
    from hggen.visualization.style import save_figure

    fig, ax = plt.subplots()
    paths = save_figure(fig, tmp_path, "only_svg", formats=("svg",))

    assert paths == (tmp_path / "only_svg.svg",)
    assert paths[0].exists()
    assert not (tmp_path / "only_svg.png").exists()


def test_palette_colors_are_rgb():
    from hggen.visualization.embedding import EDGE_COLOR, HUB_COLOR, NODE_COLOR, PALETTE

    assert len(PALETTE) >= 8
    for color in (NODE_COLOR, EDGE_COLOR, HUB_COLOR):
        assert len(color) >= 3
        assert all(0 <= c <= 1 for c in color[:3])


# ── Embedding Tests ───────────────────────────────────────────────────


def test_plot_embedding_angular_model_on_unit_circle(er_graph):
    """Angular models are drawn on the unit circle, not at radius 1000."""
    from hggen.visualization.embedding import plot_embedding

    fig = plot_embedding(er_graph)
    ax = fig.axes[0]
    offsets = _node_offsets(ax)
    np.testing.assert_allclose(np.hypot(offsets[:, 0], offsets[:, 1]), 1.0, atol=1e-9)
    assert "erdos_renyi" in ax.get_title()
    plt.close(fig)


def test_plot_embedding_hyperbolic_uses_radii(exact_estimator):
    from hggen.config.parameters import CalibrationConfig
    from hggen.visualization.embedding import plot_embedding

    params = GraphParameters(n=80, k_bar=5.0, gamma=2.5, temperature=0.0, seed=4)
    graph = generate_graph(params, CalibrationConfig(), exact_estimator(80, 5.0))
    fig = plot_embedding(graph)
    offsets = _node_offsets(fig.axes[0])
    radii = np.sort(np.hypot(offsets[:, 0], offsets[:, 1]))
    np.testing.assert_allclose(radii, np.sort(graph.r), rtol=1e-9)
    plt.close(fig)


def test_plot_embedding_edge_cap(er_graph):
    from matplotlib.collections import LineCollection

    from hggen.visualization.embedding import plot_embedding

    fig = plot_embedding(er_graph, max_edges=10)
    lines = [c for c in fig.axes[0].collections if isinstance(c, LineCollection)]
    assert len(lines) == 1
    assert len(lines[0].get_segments()) == 10
    plt.close(fig)


def test_plot_embedding_on_given_axes(er_graph):
    from hggen.visualization.embedding import plot_embedding

    fig, ax = plt.subplots()
    assert plot_embedding(er_graph, ax=ax) is fig
    plt.close(fig)


# ── Distribution Tests ────────────────────────────────────────────────


def test_plot_degree_ccdf(er_graph, tmp_path):
    from hggen.visualization.embedding import plot_degree_ccdf
    from hggen.visualization.style import save_figure

    fig = plot_degree_ccdf(compute_properties(er_graph))
    ax = fig.axes[0]
    assert ax.get_xscale() == "log"
    assert ax.get_yscale() == "log"
    png_path, svg_path = save_figure(fig, tmp_path, "degree_ccdf")
    assert png_path.exists()
    assert svg_path.exists()

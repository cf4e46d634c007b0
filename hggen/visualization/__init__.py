"""Static figures of generated graphs."""

from hggen.visualization.embedding import plot_degree_ccdf, plot_embedding
from hggen.visualization.style import apply_style, save_figure

__all__ = [
    "apply_style",
    "plot_degree_ccdf",
    "plot_embedding",
    "save_figure",
]

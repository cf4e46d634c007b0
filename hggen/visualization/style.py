"""Figure theme and file output for generator plots.

Disk embeddings are drawn on a square canvas without grid lines, since the
axes carry no units; distribution plots keep seaborn's whitegrid look.
Every figure is written once per format in FIGURE_FORMATS.
"""

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for headless rendering

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

FIGURE_FORMATS = ("png", "svg")

_RC = {
    "figure.dpi": 150,
    "savefig.dpi": 300,
    "font.size": 10,
    "axes.titlesize": 11,
    "axes.labelsize": 10,
    "legend.fontsize": 8,
    "svg.fonttype": "none",  # Embed text as SVG text elements
}


def apply_style(grid: bool = True) -> None:
    """Set the seaborn theme. Idempotent.

    Args:
        grid: True for distribution plots (whitegrid, 6x4.5 in), False for
            disk embeddings (white, 6x6 in).
    """
    rc = dict(_RC, **{"figure.figsize": (6.0, 4.5) if grid else (6.0, 6.0)})
    sns.set_theme(style="whitegrid" if grid else "white", rc=rc)


def save_figure(
    fig: plt.Figure,
    output_dir: Path,
    name: str,
    formats: tuple[str, ...] = FIGURE_FORMATS,
) -> tuple[Path, ...]:
    """Write fig as <output_dir>/<name>.<ext> for every format, then close it.

    Returns:
        The written paths, in the order of formats.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = tuple(output_dir / f"{name}.{ext}" for ext in formats)
    for path in paths:
        fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
    return paths

"""Matplotlib H-R diagram renderer for auditing classification output."""

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from plutonian.models import StarRecord

_ROOT = Path(__file__).parent.parent.parent.parent


def _plottable(records: Sequence[StarRecord]) -> list[StarRecord]:
    return [
        s for s in records if s.temp is not None and s.temp > 0 and s.lum is not None and s.lum > 0
    ]


def render_hr_diagram(records: Sequence[StarRecord], chart_size: int = 10) -> Figure:
    """Render classified stars as a Hertzsprung-Russell diagram.

    Temperature runs hot to cool along x, luminosity up y, both log scale.
    Each point is drawn in the star's resolved color; stars with no color
    are drawn white.

    Args:
        records: Classified StarRecords. Stars without temperature are skipped.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    stars = _plottable(records)
    if stars:
        temps = np.array([s.temp for s in stars], dtype=float)
        lums = np.array([s.lum for s in stars], dtype=float)
        colors = np.array(
            [(s.r, s.g, s.b) if s.color is not None else (1.0, 1.0, 1.0) for s in stars],
            dtype=float,
        )
        ax.scatter(temps, lums, s=4, c=np.clip(colors, 0.0, 1.0), marker=".", linewidths=0)
        ax.set_xscale("log")
        ax.set_yscale("log")
        ax.invert_xaxis()

    ax.set_xlabel("Temperature (K)", color="white")
    ax.set_ylabel("Luminosity (L/Lsun)", color="white")
    ax.tick_params(colors="white", which="both")
    for spine in ax.spines.values():
        spine.set_color("#444444")
    ax.set_title(f"{len(stars)} stars", color="white")

    return fig


def save_hr_diagram(records: Sequence[StarRecord], output_path: Path | None = None) -> Path:
    """Save an H-R diagram of ``records`` as a PNG file.

    Args:
        records: Classified StarRecords.
        output_path: Destination path. Defaults to results/hr_diagram.png.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        output_path = _ROOT / "results" / "hr_diagram.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_hr_diagram(records)
    fig.savefig(output_path, facecolor="black")
    plt.close(fig)
    return output_path

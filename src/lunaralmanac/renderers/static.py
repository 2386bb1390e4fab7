"""Matplotlib static PNG renderer for a month of moon phases."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from lunaralmanac.models import MoonPhaseSample

_ROOT = Path(__file__).parent.parent.parent.parent
_BG = "#0d1b35"
_DARK_COLOR = "#1f2a44"
_LIT_COLOR = "#f0e0b0"
_TEXT_COLOR = "#e8e0cc"
_COLUMNS = 7


def render_static_calendar(
    samples: tuple[MoonPhaseSample, ...], cell_inches: float = 1.2
) -> Figure:
    """Render daily samples as a grid of moon disks.

    Args:
        samples: Daily samples, typically moonphase.month_calendar().
        cell_inches: Size of one grid cell in inches.

    Returns:
        matplotlib Figure object.
    """
    rows = max(1, int(np.ceil(len(samples) / _COLUMNS)))
    fig, ax = plt.subplots(figsize=(_COLUMNS * cell_inches, rows * cell_inches))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    for i, sample in enumerate(samples):
        col = i % _COLUMNS
        row = rows - 1 - i // _COLUMNS
        cx, cy = col + 0.5, row + 0.45

        ax.add_patch(Circle((cx, cy), 0.35, color=_DARK_COLOR))
        lit = Circle((cx, cy), 0.35, color=_LIT_COLOR)
        ax.add_patch(lit)
        # Lit band: width equals the illumination fraction of the disk diameter
        band_x = max(0.0, 0.5 - sample.illumination)
        band = Rectangle(
            (cx - 0.35 + band_x * 0.7, cy - 0.35),
            sample.illumination * 0.7,
            0.7,
            transform=ax.transData,
        )
        lit.set_clip_path(band)

        ax.text(
            col + 0.08,
            row + 0.92,
            str(sample.date.day),
            color=_TEXT_COLOR,
            fontsize=8,
            va="top",
        )

    ax.set_xlim(0, _COLUMNS)
    ax.set_ylim(0, rows)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_calendar(
    samples: tuple[MoonPhaseSample, ...], output_path: Path | None = None
) -> Path:
    """Save daily samples as a PNG file.

    Args:
        samples: Daily samples, typically moonphase.month_calendar().
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        first = samples[0].date if samples else None
        stem = first.strftime("%Y_%m") if first else "empty"
        output_path = _ROOT / "results" / f"moon_calendar__{stem}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_calendar(samples)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path

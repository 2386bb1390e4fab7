"""SVG moon disk and month calendar renderer.

Produces self-contained HTML for embedding via st.components.v1.html().
Each disk uses viewBox="0 0 1 1": a dark circle, with the lit part drawn as
the same circle clipped to a vertical band whose width equals the
illumination fraction.
"""

from __future__ import annotations

import html
from datetime import date

from lunaralmanac.models import MoonPhaseSample

_BG = "#0d1b35"
_DARK_COLOR = "#1f2a44"
_LIT_COLOR = "#f0e0b0"
_ACCENT_COLOR = "#c9a96e"


def _lit_band(illumination: float) -> tuple[float, float]:
    """(x, width) of the lit band in disk units."""
    # Same geometry as a clip-path polygon from (50 - i*100)% to 50% below half,
    # from 0% to (50 + (i - 0.5)*100)% above half.
    return max(0.0, 0.5 - illumination), illumination


def render_moon_svg(sample: MoonPhaseSample, size: int = 32) -> str:
    """Return an inline SVG of the moon disk for one sample.

    Args:
        sample: Computed moon phase.
        size: Rendered width/height in CSS pixels.

    Returns:
        SVG markup string.
    """
    x, width = _lit_band(sample.illumination)
    clip_id = f"lit-{sample.date.isoformat()}-{size}"
    title = html.escape(
        f"{sample.phase_name} ({sample.illumination * 100:.0f}%)", quote=True
    )
    return (
        f'<svg class="moon" width="{size}" height="{size}" viewBox="0 0 1 1"'
        f' xmlns="http://www.w3.org/2000/svg" role="img">'
        f"<title>{title}</title>"
        f'<defs><clipPath id="{clip_id}">'
        f'<rect x="{x:.4f}" y="0" width="{width:.4f}" height="1"/>'
        f"</clipPath></defs>"
        f'<circle cx="0.5" cy="0.5" r="0.48" fill="{_DARK_COLOR}"/>'
        f'<circle cx="0.5" cy="0.5" r="0.48" fill="{_LIT_COLOR}"'
        f' clip-path="url(#{clip_id})"/>'
        f"</svg>"
    )


def render_calendar_html(
    samples: tuple[MoonPhaseSample, ...],
    today: date | None = None,
    cell_size: int = 28,
) -> str:
    """Return a self-contained HTML page with a grid of daily moon disks.

    Args:
        samples: Daily samples, typically moonphase.month_calendar().
        today: Date to highlight, if present in ``samples``.
        cell_size: Moon disk size in CSS pixels.

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    cells: list[str] = []
    for sample in samples:
        classes = "cell today" if sample.date == today else "cell"
        label = html.escape(sample.phase_name)
        cells.append(
            f'<div class="{classes}" title="{label}">'
            f'<div class="day">{sample.date.day}</div>'
            f"{render_moon_svg(sample, cell_size)}"
            f"</div>"
        )
    cells_html = "\n    ".join(cells)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{
    background: {_BG};
    color: #e8e0cc;
    font-family: sans-serif;
}}
.grid {{
    display: grid;
    grid-template-columns: repeat(7, 1fr);
    gap: 0.4rem;
    padding: 0.6rem;
}}
.cell {{
    display: flex;
    flex-direction: column;
    align-items: center;
    padding: 0.3rem 0;
    border-radius: 6px;
}}
.cell.today {{
    border: 1px solid {_ACCENT_COLOR};
    background: rgba(201,169,110,0.12);
}}
.day {{
    font-size: 0.75rem;
    margin-bottom: 0.2rem;
}}
</style>
</head>
<body>
<div class="grid">
    {cells_html}
</div>
</body>
</html>"""

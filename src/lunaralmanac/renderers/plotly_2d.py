"""Plotly illumination curve renderer.

Plots the piecewise-linear illumination of consecutive daily samples, so
the flat quarter/new/full octants show up as plateaus.
"""

import plotly.graph_objects as go

from lunaralmanac.models import MoonPhaseSample

_BG = "#0d1b35"
_LINE_COLOR = "#c9a96e"
_MARKER_COLOR = "#f0e0b0"
_GRID_COLOR = "#334466"


def render_illumination_chart(
    samples: tuple[MoonPhaseSample, ...], today_index: int | None = None
) -> go.Figure:
    """Render daily illumination as a Plotly line chart.

    Args:
        samples: Consecutive daily samples (moonphase.phase_window / month_calendar).
        today_index: Index into ``samples`` to mark, or None.

    Returns:
        Plotly Figure object.
    """
    dates = [s.date.isoformat() for s in samples]
    percents = [round(s.illumination * 100, 1) for s in samples]

    curve = go.Scatter(
        x=dates,
        y=percents,
        mode="lines+markers",
        line=dict(color=_LINE_COLOR, width=2),
        marker=dict(size=5, color=_MARKER_COLOR),
        customdata=[s.phase_name for s in samples],
        hovertemplate="%{x}<br>%{customdata}<br>%{y:.1f}%<extra></extra>",
        name="illumination",
    )
    traces = [curve]

    if today_index is not None and 0 <= today_index < len(samples):
        traces.append(
            go.Scatter(
                x=[dates[today_index]],
                y=[percents[today_index]],
                mode="markers",
                marker=dict(size=12, color=_LINE_COLOR, symbol="circle-open"),
                hoverinfo="skip",
                name="today",
            )
        )

    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=40, r=10, t=10, b=30),
        height=260,
        font=dict(color="#e8e0cc"),
        xaxis=dict(gridcolor=_GRID_COLOR, fixedrange=True),
        yaxis=dict(
            gridcolor=_GRID_COLOR,
            range=[-5, 105],
            ticksuffix="%",
            fixedrange=True,
        ),
    )
    fig._config = {"displayModeBar": False}  # type: ignore[attr-defined]

    return fig

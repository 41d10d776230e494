"""Plotly rendering of a session frame.

Produces the same picture as the terminal chart (curve, bound markers, zero
line, fixed axis ranges) as a ``plotly.graph_objects.Figure``, for notebook
display or ``fig.write_html(...)`` export. The area is shown in the title.

Examples
--------
>>> from integraph import Session
>>> fig = frame_figure(Session().snapshot())  # doctest: +SKIP
>>> fig.show()  # doctest: +SKIP
"""

from __future__ import annotations

from typing import Any, Dict

import plotly.graph_objects as go

from .snapshot import FrameSnapshot

__all__ = ["TRACE_COLORS", "default_figure_layout", "frame_figure"]

TRACE_COLORS: Dict[str, str] = {
    "function": "#dc2626",
    "bound": "#ca8a04",
    "zero": "#c026d3",
}


def default_figure_layout() -> Dict[str, Any]:
    """Shared layout defaults for frame figures."""
    axis = dict(
        zeroline=False,
        showline=True,
        linecolor="#94a3b8",
        linewidth=1,
        mirror=True,
        ticks="outside",
        tickcolor="#94a3b8",
        ticklen=6,
        showgrid=True,
        gridcolor="rgba(148,163,184,0.25)",
    )
    return dict(
        autosize=True,
        template="plotly_white",
        showlegend=True,
        margin=dict(l=48, r=28, t=56, b=44),
        font=dict(
            family="Inter, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif",
            size=14,
            color="#1f2933",
        ),
        paper_bgcolor="#ffffff",
        plot_bgcolor="#f8fafc",
        legend=dict(
            bgcolor="rgba(255,255,255,0.7)",
            bordercolor="rgba(15,23,42,0.08)",
            borderwidth=1,
        ),
        xaxis=dict(axis, title="X Axis"),
        yaxis=dict(axis, title="Y Axis"),
    )


def frame_figure(frame: FrameSnapshot) -> go.Figure:
    """Build a Plotly figure from ``frame``.

    Traces, in drawing order: lower bound, upper bound, zero line, function.
    Axis ranges are pinned to the frame's window.
    """
    fig = go.Figure()
    fig.update_layout(**default_figure_layout())

    overlays = (
        ("Lower Bound Line", frame.lower_line, TRACE_COLORS["bound"], "dash"),
        ("Upper Bound Line", frame.upper_line, TRACE_COLORS["bound"], "dash"),
        ("X Axis Line", frame.zero_line, TRACE_COLORS["zero"], "dot"),
    )
    for name, line, color, dash in overlays:
        fig.add_scatter(
            x=line.xs,
            y=line.ys,
            mode="lines",
            name=name,
            line=dict(color=color, dash=dash, width=1.5),
        )
    fig.add_scatter(
        x=frame.samples.xs,
        y=frame.samples.ys,
        mode="lines",
        name=f"f(x) = {frame.function_text}",
        line=dict(color=TRACE_COLORS["function"], width=2),
    )

    fig.update_xaxes(range=list(frame.window.x_range))
    fig.update_yaxes(range=list(frame.window.y_range))
    fig.update_layout(title=dict(text=f"Area = {frame.area.format()}"))
    return fig

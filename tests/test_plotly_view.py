from __future__ import annotations

import numpy as np

from integraph import Session, SessionConfig
from integraph.plotly_view import TRACE_COLORS, frame_figure


def test_frame_figure_traces_and_ranges() -> None:
    session = Session(SessionConfig(function_text="x^2", bounds=(0.0, 2.0)))
    fig = frame_figure(session.snapshot())

    names = [trace.name for trace in fig.data]
    assert names == ["Lower Bound Line", "Upper Bound Line", "X Axis Line", "f(x) = x^2"]
    assert tuple(fig.layout.xaxis.range) == (-5.0, 5.0)
    assert tuple(fig.layout.yaxis.range) == (-10.0, 10.0)
    assert fig.data[3].line.color == TRACE_COLORS["function"]
    np.testing.assert_allclose(fig.data[3].x, session.samples.xs)


def test_title_shows_area() -> None:
    session = Session(SessionConfig(bounds=(0.0, 2.0)))
    fig = frame_figure(session.snapshot())
    assert fig.layout.title.text == f"Area = {session.area.format()}"


def test_title_shows_undefined_area() -> None:
    session = Session(SessionConfig(bounds=(3.0, 1.0)))
    fig = frame_figure(session.snapshot())
    assert fig.layout.title.text == "Area = undefined"

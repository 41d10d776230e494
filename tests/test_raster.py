from __future__ import annotations

import numpy as np
import pytest

from integraph.raster import BRAILLE_BASE, BrailleCanvas


def test_blank_canvas() -> None:
    canvas = BrailleCanvas(3, 2, (0.0, 1.0), (0.0, 1.0))
    assert canvas.lines() == ["   ", "   "]


def test_corner_points_map_to_corner_dots() -> None:
    canvas = BrailleCanvas(2, 2, (0.0, 1.0), (0.0, 1.0))
    placed = canvas.plot(np.array([0.0, 1.0]), np.array([1.0, 0.0]), "red")

    assert placed == 2
    # Top-left dot of the top-left cell, bottom-right dot of the bottom-right cell.
    assert canvas.cell(0, 0) == (chr(BRAILLE_BASE + 0x01), "red")
    assert canvas.cell(1, 1) == (chr(BRAILLE_BASE + 0x80), "red")
    assert canvas.cell(0, 1) == (" ", None)


def test_points_outside_bounds_or_non_finite_are_skipped() -> None:
    canvas = BrailleCanvas(4, 2, (-1.0, 1.0), (-1.0, 1.0))
    xs = np.array([-2.0, 0.0, 0.5, np.nan])
    ys = np.array([0.0, 5.0, np.inf, 0.0])
    assert canvas.plot(xs, ys) == 0
    assert all(ch == " " for line in canvas.lines() for ch in line)


def test_later_layer_colour_wins_and_dots_accumulate() -> None:
    canvas = BrailleCanvas(1, 1, (0.0, 1.0), (0.0, 1.0))
    canvas.plot(np.array([0.0]), np.array([1.0]), "yellow")
    canvas.plot(np.array([1.0]), np.array([1.0]), "red")

    ch, color = canvas.cell(0, 0)
    assert ord(ch) - BRAILLE_BASE == 0x01 | 0x08
    assert color == "red"


def test_horizontal_line_fills_one_dot_row() -> None:
    canvas = BrailleCanvas(5, 3, (-1.0, 1.0), (-1.0, 1.0))
    xs = np.linspace(-1.0, 1.0, 200)
    canvas.plot(xs, np.zeros_like(xs))

    rows_with_dots = [r for r, line in enumerate(canvas.lines()) if line.strip()]
    assert rows_with_dots == [1]
    assert " " not in canvas.lines()[1]


def test_degenerate_bounds_plot_nothing() -> None:
    canvas = BrailleCanvas(2, 2, (1.0, 1.0), (0.0, 1.0))
    assert canvas.plot(np.array([1.0]), np.array([0.5])) == 0


def test_canvas_size_is_validated() -> None:
    with pytest.raises(ValueError, match="at least 1x1"):
        BrailleCanvas(0, 3, (0.0, 1.0), (0.0, 1.0))

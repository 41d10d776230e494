"""Braille-dot rasterizer for terminal charts.

Each character cell holds a 2x4 grid of braille dots (U+2800 block), so a
``width x height`` cell canvas has a ``2*width x 4*height`` dot resolution.
Layers are plotted in order; a cell takes the colour of the last layer that
put a dot in it, and dots from all layers accumulate.
"""

from __future__ import annotations

from typing import Hashable, Optional

import numpy as np

__all__ = ["BRAILLE_BASE", "BrailleCanvas"]

BRAILLE_BASE = 0x2800

# Dot bit for (dot_row, dot_col) inside one cell.
_DOT_BITS = np.array(
    [
        [0x01, 0x08],
        [0x02, 0x10],
        [0x04, 0x20],
        [0x40, 0x80],
    ],
    dtype=np.int32,
)


class BrailleCanvas:
    """Character-cell canvas mapping data coordinates to braille dots.

    Parameters
    ----------
    width, height : int
        Canvas size in character cells.
    x_bounds, y_bounds : tuple[float, float]
        Data range shown on each axis; points outside are skipped.
    """

    def __init__(
        self,
        width: int,
        height: int,
        x_bounds: tuple[float, float],
        y_bounds: tuple[float, float],
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"canvas must be at least 1x1 cells, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.x_bounds = (float(x_bounds[0]), float(x_bounds[1]))
        self.y_bounds = (float(y_bounds[0]), float(y_bounds[1]))
        self._dots = np.zeros((self.height, self.width), dtype=np.int32)
        self._colors: list[list[Optional[Hashable]]] = [[None] * self.width for _ in range(self.height)]

    def plot(self, xs: np.ndarray, ys: np.ndarray, color: Optional[Hashable] = None) -> int:
        """Add one layer of points; return how many landed on the canvas."""
        x_lo, x_hi = self.x_bounds
        y_lo, y_hi = self.y_bounds
        if not (x_lo < x_hi and y_lo < y_hi):
            return 0

        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        inside = (
            np.isfinite(xs)
            & np.isfinite(ys)
            & (xs >= x_lo)
            & (xs <= x_hi)
            & (ys >= y_lo)
            & (ys <= y_hi)
        )
        if not inside.any():
            return 0

        dot_cols = 2 * self.width
        dot_rows = 4 * self.height
        px = np.round((xs[inside] - x_lo) / (x_hi - x_lo) * (dot_cols - 1)).astype(int)
        py = np.round((y_hi - ys[inside]) / (y_hi - y_lo) * (dot_rows - 1)).astype(int)

        rows, cols = py // 4, px // 2
        np.bitwise_or.at(self._dots, (rows, cols), _DOT_BITS[py % 4, px % 2])
        for r, c in set(zip(rows.tolist(), cols.tolist())):
            self._colors[r][c] = color
        return int(px.size)

    def cell(self, row: int, col: int) -> tuple[str, Optional[Hashable]]:
        bits = int(self._dots[row, col])
        if bits == 0:
            return " ", None
        return chr(BRAILLE_BASE + bits), self._colors[row][col]

    def rows(self) -> list[list[tuple[str, Optional[Hashable]]]]:
        """Canvas content as rows of ``(character, colour)`` cells."""
        return [[self.cell(r, c) for c in range(self.width)] for r in range(self.height)]

    def lines(self) -> list[str]:
        """Canvas content as plain strings (colours dropped)."""
        return ["".join(ch for ch, _ in row) for row in self.rows()]

"""Overlay polylines: vertical markers at the integration bounds and the zero line.

Each line is ``points`` evenly spaced samples from its start (inclusive) to its
end (exclusive), i.e. a step of ``span / points``.

Empty output is a normal result, not an error:

- a bound marker whose function value is below ``y_min`` (or not finite) has
  nothing to draw;
- a zero-width span raises :class:`~integraph.errors.DegenerateWindowError`
  inside :func:`line_positions`, which the generators turn into an empty line.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

import numpy as np

from .errors import DegenerateWindowError, EvaluationError
from .model import BoundLine, IntegrationBounds, PlotWindow

__all__ = ["DEFAULT_LINE_POINTS", "line_positions", "bound_line", "bound_lines", "zero_line"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_LINE_POINTS = 100


def line_positions(start: float, stop: float, points: int = DEFAULT_LINE_POINTS) -> np.ndarray:
    """Evenly spaced positions in ``[start, stop)``.

    Returns an empty array when ``stop < start`` or either end is not finite.

    Raises
    ------
    DegenerateWindowError
        If ``stop == start``.
    ValueError
        If ``points < 1``.
    """
    if points < 1:
        raise ValueError(f"points must be >= 1, got {points!r}")
    if not (math.isfinite(start) and math.isfinite(stop)) or stop < start:
        return np.empty(0)
    if stop == start:
        raise DegenerateWindowError(f"Cannot lay out a line over the zero-width span at {start:g}")
    return np.linspace(start, stop, points, endpoint=False)


def bound_line(
    function: Callable[[float], object],
    bound_x: float,
    window: PlotWindow,
    points: int = DEFAULT_LINE_POINTS,
) -> BoundLine:
    """Vertical marker at ``bound_x`` from ``y_min`` up to ``function(bound_x)``."""
    try:
        with np.errstate(all="ignore"):
            height = float(np.asarray(function(bound_x), dtype=float))
    except Exception as exc:
        raise EvaluationError(f"Function could not be evaluated at x={bound_x:g}: {exc}") from exc
    try:
        ys = line_positions(window.y_min, height, points)
    except DegenerateWindowError as exc:
        logger.debug("empty bound line at x=%g: %s", bound_x, exc)
        return BoundLine.empty()
    return BoundLine(xs=np.full(ys.shape, float(bound_x)), ys=ys)


def bound_lines(
    function: Callable[[float], object],
    window: PlotWindow,
    bounds: IntegrationBounds,
    points: int = DEFAULT_LINE_POINTS,
) -> tuple[BoundLine, BoundLine]:
    """Return the ``(lower, upper)`` bound markers."""
    return (
        bound_line(function, bounds.lower, window, points),
        bound_line(function, bounds.upper, window, points),
    )


def zero_line(window: PlotWindow, points: int = DEFAULT_LINE_POINTS) -> BoundLine:
    """Horizontal line at ``y = 0`` across ``[x_min, x_max)``."""
    try:
        xs = line_positions(window.x_min, window.x_max, points)
    except DegenerateWindowError as exc:
        logger.debug("empty zero line: %s", exc)
        return BoundLine.empty()
    return BoundLine(xs=xs, ys=np.zeros(xs.shape))

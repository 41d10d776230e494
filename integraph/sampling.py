"""Fixed-step sampling of the committed function over the plotting window.

The grid is ``x_k = x_min + k * step`` for every ``k`` with ``x_k < x_max``.
Computing each point from its index rather than accumulating ``x += step``
keeps the last samples from drifting across ``x_max`` on long windows.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np

from .errors import EvaluationError, InvalidWindowError
from .model import IntegrationBounds, PlotWindow, SampleSet

__all__ = ["DEFAULT_STEP", "DEFAULT_MAX_SAMPLES", "sample_count", "sample_grid", "sample_function"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_STEP = 0.001
DEFAULT_MAX_SAMPLES = 10**7

RealFunction = Callable[[np.ndarray], np.ndarray]


def sample_count(
    x_min: float, x_max: float, step: float, max_samples: Optional[int] = DEFAULT_MAX_SAMPLES
) -> int:
    """Number of grid points in ``[x_min, x_max)``, checked before anything is allocated.

    Raises
    ------
    InvalidWindowError
        If the count exceeds ``max_samples`` or the span is not finite.
    ValueError
        If ``step <= 0``.
    """
    if not step > 0:
        raise ValueError(f"step must be > 0, got {step!r}")
    if not x_min < x_max:
        return 0
    count = (x_max - x_min) / step
    if not math.isfinite(count) or (max_samples is not None and count > max_samples):
        raise InvalidWindowError(
            f"X range [{x_min:g}, {x_max:g}) needs {count:.3g} samples at step {step:g}; "
            f"the limit is {max_samples}"
        )
    return math.ceil(count)


def sample_grid(
    x_min: float, x_max: float, step: float, max_samples: Optional[int] = DEFAULT_MAX_SAMPLES
) -> np.ndarray:
    """Return the sample abscissae ``x_min, x_min + step, ...`` strictly below ``x_max``."""
    count = sample_count(x_min, x_max, step, max_samples)
    if count == 0:
        return np.empty(0)
    xs = x_min + step * np.arange(count, dtype=float)
    return xs[xs < x_max]


def _bound_index(xs: np.ndarray, bound: float, x_max: float) -> Optional[int]:
    # First index with xs[i] >= bound, only for bounds inside [x_min, x_max).
    if xs.size == 0 or not (xs[0] <= bound < x_max):
        return None
    index = int(np.searchsorted(xs, bound, side="left"))
    return index if index < xs.size else None


def sample_function(
    function: RealFunction,
    window: PlotWindow,
    bounds: IntegrationBounds,
    step: float = DEFAULT_STEP,
    max_samples: Optional[int] = DEFAULT_MAX_SAMPLES,
) -> SampleSet:
    """Evaluate ``function`` on the window grid and locate the bound indices.

    Parameters
    ----------
    function : callable
        Vectorised real function; receives the whole grid as one array.
    window : PlotWindow
        Only ``x_min``/``x_max`` are used.
    bounds : IntegrationBounds
        Integration limits to locate in the grid.
    step : float
        Grid spacing (``dx``).
    max_samples : int, optional
        Upper limit on the grid size; ``None`` disables the check.

    Returns
    -------
    SampleSet
        Points with ``x`` in ``[x_min, x_max)``. A bound outside that range
        leaves its index as ``None``.

    Raises
    ------
    EvaluationError
        If ``function`` raises while being evaluated.
    InvalidWindowError
        If the grid would hold more than ``max_samples`` points.
    ValueError
        If ``step <= 0``.
    """
    xs = sample_grid(window.x_min, window.x_max, step, max_samples)
    if xs.size == 0:
        return SampleSet.empty(step)

    try:
        with np.errstate(all="ignore"):
            ys = np.asarray(function(xs), dtype=float)
        if ys.shape != xs.shape:
            ys = np.broadcast_to(ys, xs.shape)
    except Exception as exc:
        raise EvaluationError(
            f"Function could not be evaluated on [{window.x_min:g}, {window.x_max:g}): {exc}"
        ) from exc

    lower_index = _bound_index(xs, bounds.lower, window.x_max)
    upper_index = _bound_index(xs, bounds.upper, window.x_max)
    logger.debug(
        "sampled %d points on [%g, %g) step=%g, bound indices=(%s, %s)",
        xs.size,
        window.x_min,
        window.x_max,
        step,
        lower_index,
        upper_index,
    )
    return SampleSet(xs=xs, ys=ys, step=step, lower_index=lower_index, upper_index=upper_index)

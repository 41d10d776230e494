"""Value types shared by the sampler, line generators, integrator and session.

Purpose
-------
Everything here is an immutable value. The session replaces whole objects on
commit instead of mutating them, which is what lets a failed commit leave the
previous state untouched. Array payloads are flagged read-only on
construction so a render adapter cannot modify session data in place.

Concepts
--------
- ``PlotWindow``: the committed axis ranges.
- ``IntegrationBounds``: the committed integration limits (unordered).
- ``SampleSet``: the sampled curve plus the bound indices into it.
- ``BoundLine``: a polyline overlay (bound markers and the zero line).
- ``AreaResult``: the integrator output, or an "undefined" sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .errors import InvalidWindowError
from .focus import InputField

__all__ = ["PlotWindow", "IntegrationBounds", "SampleSet", "BoundLine", "AreaResult"]


def _frozen_array(values: object) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


_WINDOW_FIELDS = {
    InputField.MIN_X: "x_min",
    InputField.MAX_X: "x_max",
    InputField.MIN_Y: "y_min",
    InputField.MAX_Y: "y_max",
}

_BOUND_FIELDS = {
    InputField.LOWER_BOUND: "lower",
    InputField.UPPER_BOUND: "upper",
}


@dataclass(frozen=True)
class PlotWindow:
    """Axis ranges of the chart.

    Parameters
    ----------
    x_min, x_max : float
        Horizontal range; also the sampling domain ``[x_min, x_max)``.
    y_min, y_max : float
        Vertical range; ``y_min`` is where bound lines start.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def x_range(self) -> tuple[float, float]:
        return (self.x_min, self.x_max)

    @property
    def y_range(self) -> tuple[float, float]:
        return (self.y_min, self.y_max)

    def is_valid(self) -> bool:
        return self.x_min < self.x_max and self.y_min < self.y_max

    def validated(self) -> "PlotWindow":
        """Return ``self`` or raise :class:`InvalidWindowError` when an axis is empty."""
        if not self.x_min < self.x_max:
            raise InvalidWindowError(
                f"Minimum X ({self.x_min:g}) must be less than Maximum X ({self.x_max:g})"
            )
        if not self.y_min < self.y_max:
            raise InvalidWindowError(
                f"Minimum Y ({self.y_min:g}) must be less than Maximum Y ({self.y_max:g})"
            )
        return self

    def replace_field(self, field: InputField, value: float) -> "PlotWindow":
        try:
            name = _WINDOW_FIELDS[field]
        except KeyError:
            raise ValueError(f"{field.name} is not a window field") from None
        return replace(self, **{name: float(value)})


@dataclass(frozen=True)
class IntegrationBounds:
    """Integration limits; ``lower > upper`` is allowed and integrates as undefined."""

    lower: float
    upper: float

    def replace_field(self, field: InputField, value: float) -> "IntegrationBounds":
        try:
            name = _BOUND_FIELDS[field]
        except KeyError:
            raise ValueError(f"{field.name} is not a bound field") from None
        return replace(self, **{name: float(value)})


@dataclass(frozen=True, eq=False)
class SampleSet:
    """Sampled curve ``(xs[i], ys[i])`` with the integration bound indices.

    ``lower_index``/``upper_index`` are the first sample indices with
    ``x >= lower`` / ``x >= upper``, or ``None`` when the bound lies outside the
    sampled domain.
    """

    xs: np.ndarray
    ys: np.ndarray
    step: float
    lower_index: Optional[int] = None
    upper_index: Optional[int] = None

    def __post_init__(self) -> None:
        xs = _frozen_array(self.xs)
        ys = _frozen_array(self.ys)
        if xs.shape != ys.shape or xs.ndim != 1:
            raise ValueError(f"xs and ys must be 1-D arrays of equal length, got {xs.shape} and {ys.shape}")
        object.__setattr__(self, "xs", xs)
        object.__setattr__(self, "ys", ys)

    @classmethod
    def empty(cls, step: float) -> "SampleSet":
        return cls(xs=np.empty(0), ys=np.empty(0), step=step)

    def __len__(self) -> int:
        return int(self.xs.shape[0])


@dataclass(frozen=True, eq=False)
class BoundLine:
    """Polyline overlay drawn on top of the curve."""

    xs: np.ndarray
    ys: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "xs", _frozen_array(self.xs))
        object.__setattr__(self, "ys", _frozen_array(self.ys))

    @classmethod
    def empty(cls) -> "BoundLine":
        return cls(xs=np.empty(0), ys=np.empty(0))

    def __len__(self) -> int:
        return int(self.xs.shape[0])

    @property
    def is_empty(self) -> bool:
        return len(self) == 0


@dataclass(frozen=True)
class AreaResult:
    """Signed integral over the bound range, or ``value=None`` with a reason."""

    value: Optional[float]
    error: Optional[str] = None

    @classmethod
    def of(cls, value: float) -> "AreaResult":
        return cls(value=float(value))

    @classmethod
    def undefined(cls, reason: str) -> "AreaResult":
        return cls(value=None, error=reason)

    @property
    def is_defined(self) -> bool:
        return self.value is not None

    def format(self, precision: int = 4) -> str:
        if self.value is None:
            return "undefined"
        return f"{self.value:.{precision}f}"

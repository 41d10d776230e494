"""Session defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .bound_lines import DEFAULT_LINE_POINTS
from .sampling import DEFAULT_MAX_SAMPLES, DEFAULT_STEP

__all__ = ["SessionConfig"]


@dataclass(frozen=True)
class SessionConfig:
    """Startup state of a :class:`~integraph.session.Session`.

    Parameters
    ----------
    function_text : str
        Initial function source.
    x_range, y_range : tuple[float, float]
        Initial plotting window; each must be strictly increasing.
    bounds : tuple[float, float]
        Initial ``(lower, upper)`` integration limits.
    dx : float
        Sampling step, also the trapezoid width.
    line_points : int
        Number of points in each overlay line.
    max_samples : int
        Largest sample grid a window commit may ask for; larger windows are
        rejected instead of allocated.
    """

    function_text: str = "x"
    x_range: tuple[float, float] = (-5.0, 5.0)
    y_range: tuple[float, float] = (-10.0, 10.0)
    bounds: tuple[float, float] = (0.0, 0.0)
    dx: float = DEFAULT_STEP
    line_points: int = DEFAULT_LINE_POINTS
    max_samples: int = DEFAULT_MAX_SAMPLES

    def __post_init__(self) -> None:
        if not self.dx > 0:
            raise ValueError(f"dx must be > 0, got {self.dx!r}")
        if self.line_points < 1:
            raise ValueError(f"line_points must be >= 1, got {self.line_points!r}")
        if self.max_samples < 1:
            raise ValueError(f"max_samples must be >= 1, got {self.max_samples!r}")
        for name in ("x_range", "y_range"):
            lo, hi = getattr(self, name)
            if not lo < hi:
                raise ValueError(f"{name} must satisfy min < max, got ({lo!r}, {hi!r})")

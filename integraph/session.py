"""Session state, recompute pipeline and input dispatch.

Purpose
-------
``Session`` owns everything the calculator knows: the committed function,
window and bounds, the derived plot data (samples, overlay lines, area), the
settings focus, the seven text buffers and the active screen. Render adapters
read it through :meth:`Session.snapshot`; input adapters feed it
:mod:`integraph.events` values through :meth:`Session.handle_event`.

Architecture notes
------------------
- Commits are transactional. The parsed value and the full recompute
  (sampler -> bound lines -> integrator) are built on the side and swapped in
  only when nothing raised. A rejected commit leaves every committed field
  untouched and sets :attr:`Session.status`.
- Text buffers are independent of committed values. A failed commit keeps
  the typed text so the user can fix it.
- ``RECALCULATE_AREA`` re-runs only the integrator on the existing samples.

Important gotchas
-----------------
- Character, backspace and confirm input only act on the Settings screen.
- The screen toggle only enters Settings. Toggling while on Settings does
  nothing; Cancel is the way back to Main.
- The status message is cleared at the start of every handled event.

Examples
--------
>>> from integraph.events import CharTyped, Confirm, ScreenToggle
>>> session = Session()
>>> session.handle_event(ScreenToggle())
>>> session.area.format()
'0.0000'
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .bound_lines import bound_lines, zero_line
from .config import SessionConfig
from .errors import IntegraphError, UndefinedRangeError
from .events import Arrow, Backspace, Cancel, CharTyped, Confirm, InputEvent, Screen, ScreenToggle
from .expression import ParsedFunction, parse_function
from .focus import FocusGrid, InputField
from .input_convert import parse_real
from .integrate import integrate_samples
from .model import AreaResult, BoundLine, IntegrationBounds, PlotWindow, SampleSet
from .sampling import DEFAULT_MAX_SAMPLES, sample_function
from .snapshot import FrameSnapshot, StatusMessage

__all__ = ["PlotData", "Session", "build_plot_data", "compute_area"]

# Module logger
# - NullHandler so importing never configures global logging.
# - The terminal adapter owns the screen; records only go where the host routes them.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True, eq=False)
class PlotData:
    """Everything derived from ``(function, window, bounds)``."""

    samples: SampleSet
    lower_line: BoundLine
    upper_line: BoundLine
    zero_line: BoundLine
    area: AreaResult


def compute_area(samples: SampleSet) -> AreaResult:
    """Run the integrator, mapping an undefined range to ``AreaResult.undefined``."""
    try:
        return AreaResult.of(integrate_samples(samples))
    except UndefinedRangeError as exc:
        logger.warning("area undefined: %s", exc)
        return AreaResult.undefined(str(exc))


def build_plot_data(
    function: ParsedFunction,
    window: PlotWindow,
    bounds: IntegrationBounds,
    *,
    step: float,
    line_points: int,
    max_samples: Optional[int] = DEFAULT_MAX_SAMPLES,
) -> PlotData:
    """Full recompute: sampler, then bound lines, then integrator."""
    t0 = time.perf_counter()
    samples = sample_function(function, window, bounds, step, max_samples)
    lower_line, upper_line = bound_lines(function, window, bounds, line_points)
    axis_line = zero_line(window, line_points)
    area = compute_area(samples)
    logger.debug(
        "recompute f=%r samples=%d area=%s in %.2f ms",
        function.text,
        len(samples),
        area.format(),
        1000.0 * (time.perf_counter() - t0),
    )
    return PlotData(
        samples=samples,
        lower_line=lower_line,
        upper_line=upper_line,
        zero_line=axis_line,
        area=area,
    )


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


class Session:
    """One calculator session, from startup defaults to user exit.

    Parameters
    ----------
    config : SessionConfig, optional
        Startup defaults; ``SessionConfig()`` when omitted.

    Raises
    ------
    ParseError
        If ``config.function_text`` does not parse.
    """

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.config = config if config is not None else SessionConfig()
        cfg = self.config

        self._function = parse_function(cfg.function_text, field=InputField.FUNCTION)
        self._window = PlotWindow(cfg.x_range[0], cfg.x_range[1], cfg.y_range[0], cfg.y_range[1]).validated()
        self._bounds = IntegrationBounds(float(cfg.bounds[0]), float(cfg.bounds[1]))
        self._plot = self._build(self._function, self._window, self._bounds)

        self._buffers: dict[InputField, str] = {
            InputField.FUNCTION: cfg.function_text,
            InputField.LOWER_BOUND: _format_number(self._bounds.lower),
            InputField.UPPER_BOUND: _format_number(self._bounds.upper),
            InputField.MIN_X: _format_number(self._window.x_min),
            InputField.MAX_X: _format_number(self._window.x_max),
            InputField.MIN_Y: _format_number(self._window.y_min),
            InputField.MAX_Y: _format_number(self._window.y_max),
        }
        self.focus = FocusGrid()
        self.screen = Screen.MAIN
        self.status: Optional[StatusMessage] = None
        self.exit_requested = False

    # ------------------------------------------------------------------
    # Committed and derived state
    # ------------------------------------------------------------------

    @property
    def function(self) -> ParsedFunction:
        return self._function

    @property
    def window(self) -> PlotWindow:
        return self._window

    @property
    def bounds(self) -> IntegrationBounds:
        return self._bounds

    @property
    def samples(self) -> SampleSet:
        return self._plot.samples

    @property
    def lower_line(self) -> BoundLine:
        return self._plot.lower_line

    @property
    def upper_line(self) -> BoundLine:
        return self._plot.upper_line

    @property
    def zero_line(self) -> BoundLine:
        return self._plot.zero_line

    @property
    def area(self) -> AreaResult:
        return self._plot.area

    @property
    def buffers(self) -> Mapping[InputField, str]:
        return MappingProxyType(self._buffers)

    def _build(self, function: ParsedFunction, window: PlotWindow, bounds: IntegrationBounds) -> PlotData:
        return build_plot_data(
            function,
            window,
            bounds,
            step=self.config.dx,
            line_points=self.config.line_points,
            max_samples=self.config.max_samples,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def commit(self, field: InputField) -> bool:
        """Parse ``field``'s buffer and, on success, recompute everything.

        Returns ``True`` when the value was committed. On failure the
        committed state is unchanged and :attr:`status` holds the error.
        """
        if not field.is_text:
            raise ValueError(f"{field.name} has no text to commit")

        text = self._buffers[field]
        function, window, bounds = self._function, self._window, self._bounds
        try:
            if field is InputField.FUNCTION:
                function = parse_function(text, field=field)
            elif field in (InputField.LOWER_BOUND, InputField.UPPER_BOUND):
                bounds = bounds.replace_field(field, parse_real(text, field=field))
            else:
                window = window.replace_field(field, parse_real(text, field=field)).validated()
            plot = self._build(function, window, bounds)
        except IntegraphError as exc:
            logger.warning("rejected %s commit %r: %s", field.name, text, exc)
            self.status = StatusMessage(str(exc), "error")
            return False

        self._function, self._window, self._bounds, self._plot = function, window, bounds, plot
        logger.info("committed %s = %r", field.name, text)
        if plot.area.is_defined:
            self.status = StatusMessage(f"{field.title} updated")
        else:
            self.status = StatusMessage(f"Area undefined: {plot.area.error}", "warning")
        return True

    def recalculate_area(self) -> AreaResult:
        """Re-run the integrator on the current samples (no resampling)."""
        area = compute_area(self._plot.samples)
        self._plot = replace(self._plot, area=area)
        if area.is_defined:
            self.status = StatusMessage(f"Area recalculated: {area.format()}")
        else:
            self.status = StatusMessage(f"Area undefined: {area.error}", "warning")
        return area

    def request_exit(self) -> None:
        logger.info("exit requested")
        self.exit_requested = True

    def snapshot(self) -> FrameSnapshot:
        return FrameSnapshot(
            function_text=self._function.text,
            samples=self._plot.samples,
            lower_line=self._plot.lower_line,
            upper_line=self._plot.upper_line,
            zero_line=self._plot.zero_line,
            window=self._window,
            area=self._plot.area,
            focus=self.focus.position,
            focused_field=self.focus.field,
            screen=self.screen,
            buffers=self._buffers,
            status=self.status,
        )

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    def handle_event(self, event: InputEvent) -> None:
        """Apply one input event to the session."""
        self.status = None
        if isinstance(event, CharTyped):
            self._edit_buffer(lambda text: text + event.char)
        elif isinstance(event, Backspace):
            self._edit_buffer(lambda text: text[:-1])
        elif isinstance(event, Confirm):
            self._confirm()
        elif isinstance(event, Arrow):
            if self.screen is Screen.SETTINGS:
                self.focus.move(event.direction)
        elif isinstance(event, Cancel):
            if self.screen is Screen.SETTINGS:
                self._set_screen(Screen.MAIN)
            else:
                self.request_exit()
        elif isinstance(event, ScreenToggle):
            if self.screen is Screen.MAIN:
                self._set_screen(Screen.SETTINGS)
        else:
            logger.debug("ignored event %r", event)

    def handle_events(self, events: Iterable[InputEvent]) -> None:
        """Apply events in order, stopping once an exit has been requested."""
        for event in events:
            if self.exit_requested:
                break
            self.handle_event(event)

    def _edit_buffer(self, edit) -> None:
        field = self.focus.field
        if self.screen is not Screen.SETTINGS or not field.is_text:
            return
        self._buffers[field] = edit(self._buffers[field])

    def _confirm(self) -> None:
        if self.screen is not Screen.SETTINGS:
            return
        field = self.focus.field
        if field is InputField.RECALCULATE_AREA:
            self.recalculate_area()
        else:
            self.commit(field)

    def _set_screen(self, screen: Screen) -> None:
        logger.info("screen %s -> %s", self.screen.name, screen.name)
        self.screen = screen

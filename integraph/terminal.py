"""Curses front end: draws session frames and turns key presses into events.

Screen layout (top to bottom)
-----------------------------
- a 3-row title bar,
- the chart: braille-dot plot of the function (red), the bound markers
  (yellow) and the zero line (magenta), with min/mid/max labels on both axes,
- a 3-row "Area" footer holding the area to four decimals and the status line.

On the Settings screen a centred popup (80 % x 25 % of the terminal) shows the
2x4 settings grid; the focused field's text is drawn in red.

Keys
----
Printable characters type into the focused field, Backspace deletes, Enter
confirms, arrows move the focus, Tab opens Settings and Esc closes Settings or
quits from the main screen.
"""

from __future__ import annotations

import curses
import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional, Union

from .events import (
    Arrow,
    Backspace,
    Cancel,
    CharTyped,
    Confirm,
    InputEvent,
    Other,
    Screen,
    ScreenToggle,
)
from .focus import SETTINGS_LAYOUT, Direction
from .raster import BrailleCanvas
from .session import Session
from .snapshot import FrameSnapshot

__all__ = ["TITLE", "decode_key", "popup_area", "axis_labels", "Palette", "draw", "run", "main"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

TITLE = "Numerical integration calculator"

MIN_ROWS = 12
MIN_COLS = 40

_ARROW_KEYS = {
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
}


def decode_key(key: Union[str, int]) -> InputEvent:
    """Map a ``window.get_wch()`` result to an input event."""
    if isinstance(key, str):
        if key == "\t":
            return ScreenToggle()
        if key in ("\n", "\r"):
            return Confirm()
        if key == "\x1b":
            return Cancel()
        if key in ("\x7f", "\b"):
            return Backspace()
        if len(key) == 1 and key.isprintable():
            return CharTyped(key)
        return Other(key)

    if key in _ARROW_KEYS:
        return Arrow(_ARROW_KEYS[key])
    if key == curses.KEY_BACKSPACE:
        return Backspace()
    if key == curses.KEY_ENTER:
        return Confirm()
    return Other(key)


def popup_area(rows: int, cols: int, percent_x: int = 80, percent_y: int = 25) -> tuple[int, int, int, int]:
    """Centred ``(top, left, height, width)`` rectangle, at least tall enough for two rows of boxes."""
    height = min(rows, max(rows * percent_y // 100, 8))
    width = min(cols, cols * percent_x // 100)
    return ((rows - height) // 2, (cols - width) // 2, height, width)


def _format_tick(value: float) -> str:
    return f"{value:g}"


def axis_labels(lo: float, hi: float) -> tuple[str, str, str]:
    """Labels for the min, midpoint and max of an axis."""
    return (_format_tick(lo), _format_tick((lo + hi) / 2.0), _format_tick(hi))


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


@dataclass
class Palette:
    """Curses attributes per colour name; empty means monochrome."""

    attrs: Dict[Hashable, int] = field(default_factory=dict)

    @classmethod
    def create(cls) -> "Palette":
        if not curses.has_colors():
            return cls()
        curses.start_color()
        curses.use_default_colors()
        colors = {
            "red": curses.COLOR_RED,
            "yellow": curses.COLOR_YELLOW,
            "magenta": curses.COLOR_MAGENTA,
            "green": curses.COLOR_GREEN,
        }
        attrs: Dict[Hashable, int] = {}
        for pair, (name, fg) in enumerate(colors.items(), start=1):
            curses.init_pair(pair, fg, -1)
            attrs[name] = curses.color_pair(pair)
        return cls(attrs=attrs)

    def __call__(self, name: Optional[Hashable]) -> int:
        return self.attrs.get(name, 0)


_STATUS_COLORS = {"info": None, "warning": "yellow", "error": "red"}


def _addstr(win, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        win.addstr(y, x, text, attr)
    except curses.error:
        # Writing the bottom-right cell raises after the character is drawn.
        pass


def _draw_box(win, top: int, left: int, height: int, width: int, title: Optional[str] = None, attr: int = 0) -> None:
    if height < 2 or width < 2:
        return
    _addstr(win, top, left, "┌" + "─" * (width - 2) + "┐", attr)
    for row in range(top + 1, top + height - 1):
        _addstr(win, row, left, "│", attr)
        _addstr(win, row, left + width - 1, "│", attr)
    _addstr(win, top + height - 1, left, "└" + "─" * (width - 2) + "┘", attr)
    if title and width > 4:
        _addstr(win, top, left + 1, title[: width - 2], attr)


def _draw_chart(win, top: int, left: int, height: int, width: int, frame: FrameSnapshot, palette: Palette) -> None:
    window = frame.window
    _draw_box(win, top, left, height, width, title=f"f(x) = {frame.function_text}")

    inner_top, inner_left = top + 1, left + 1
    inner_h, inner_w = height - 2, width - 2
    y_labels = axis_labels(window.y_min, window.y_max)
    x_labels = axis_labels(window.x_min, window.x_max)
    label_w = max(len(s) for s in y_labels) + 1
    canvas_h, canvas_w = inner_h - 1, inner_w - label_w
    if canvas_h < 1 or canvas_w < 1:
        return

    canvas = BrailleCanvas(canvas_w, canvas_h, window.x_range, window.y_range)
    canvas.plot(frame.lower_line.xs, frame.lower_line.ys, "yellow")
    canvas.plot(frame.upper_line.xs, frame.upper_line.ys, "yellow")
    canvas.plot(frame.zero_line.xs, frame.zero_line.ys, "magenta")
    canvas.plot(frame.samples.xs, frame.samples.ys, "red")

    plot_left = inner_left + label_w
    for r, row in enumerate(canvas.rows()):
        for c, (ch, color) in enumerate(row):
            if ch != " ":
                _addstr(win, inner_top + r, plot_left + c, ch, palette(color))

    y_max_label, y_mid_label, y_min_label = y_labels[2], y_labels[1], y_labels[0]
    _addstr(win, inner_top, inner_left, y_max_label.rjust(label_w - 1), curses.A_BOLD)
    _addstr(win, inner_top + (canvas_h - 1) // 2, inner_left, y_mid_label.rjust(label_w - 1))
    _addstr(win, inner_top + canvas_h - 1, inner_left, y_min_label.rjust(label_w - 1), curses.A_BOLD)

    x_row = inner_top + canvas_h
    _addstr(win, x_row, plot_left, x_labels[0], curses.A_BOLD)
    mid_col = plot_left + (canvas_w - len(x_labels[1])) // 2
    _addstr(win, x_row, mid_col, x_labels[1], curses.A_BOLD)
    _addstr(win, x_row, plot_left + canvas_w - len(x_labels[2]), x_labels[2], curses.A_BOLD)


def _draw_settings(win, area: tuple[int, int, int, int], frame: FrameSnapshot, palette: Palette) -> None:
    top, left, height, width = area
    for row in range(top, top + height):
        _addstr(win, row, left, " " * width)
    _draw_box(win, top, left, height, width, title="Settings")

    inner_top, inner_left = top + 1, left + 1
    cell_h = (height - 2) // len(SETTINGS_LAYOUT)
    cell_w = (width - 2) // len(SETTINGS_LAYOUT[0])
    for r, fields in enumerate(SETTINGS_LAYOUT):
        for c, input_field in enumerate(fields):
            cell_top = inner_top + r * cell_h
            cell_left = inner_left + c * cell_w
            _draw_box(win, cell_top, cell_left, cell_h, cell_w, title=input_field.title if input_field.is_text else None)
            text = frame.buffer(input_field)
            visible = text[-(cell_w - 2):] if cell_w > 2 else ""
            attr = palette("red") if (r, c) == frame.focus else 0
            _addstr(win, cell_top + 1, cell_left + 1, visible, attr)


def draw(win, frame: FrameSnapshot, palette: Optional[Palette] = None) -> None:
    """Draw one frame on ``win``."""
    palette = palette if palette is not None else Palette()
    win.erase()
    rows, cols = win.getmaxyx()
    if rows < MIN_ROWS or cols < MIN_COLS:
        _addstr(win, 0, 0, f"Terminal too small ({cols}x{rows}), need {MIN_COLS}x{MIN_ROWS}"[:cols])
        win.refresh()
        return

    _draw_box(win, 0, 0, 3, cols)
    _addstr(win, 1, 2, TITLE[: cols - 4], palette("green"))

    _draw_chart(win, 3, 0, rows - 6, cols, frame, palette)

    _draw_box(win, rows - 3, 0, 3, cols, title="Area")
    area_text = frame.area.format()
    _addstr(win, rows - 2, 2, area_text)
    if frame.status is not None:
        status_col = 2 + len(area_text) + 3
        _addstr(
            win,
            rows - 2,
            status_col,
            frame.status.text[: max(cols - status_col - 2, 0)],
            palette(_STATUS_COLORS[frame.status.level]),
        )

    if frame.screen is Screen.SETTINGS:
        _draw_settings(win, popup_area(rows, cols), frame, palette)

    win.refresh()


# ---------------------------------------------------------------------------
# Event loop
# ---------------------------------------------------------------------------


def run(stdscr, session: Session) -> None:
    """Draw, block for one key, dispatch; repeat until the session asks to exit."""
    curses.set_escdelay(25)
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)
    palette = Palette.create()

    while not session.exit_requested:
        draw(stdscr, session.snapshot(), palette)
        try:
            key = stdscr.get_wch()
        except curses.error:
            continue
        session.handle_event(decode_key(key))


def main() -> int:
    """Console entry point."""
    session = Session()
    try:
        curses.wrapper(run, session)
    except KeyboardInterrupt:
        logger.info("interrupted")
    return 0

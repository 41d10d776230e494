"""Top-level public API for the ``integraph`` package.

integraph plots a single-variable real function over a window and computes
its definite integral between two bounds with the trapezoidal rule. The core
is importable without a terminal, for example:

>>> from integraph import Session
>>> session = Session()
>>> session.area.format()
'0.0000'

The curses front end lives in :mod:`integraph.terminal` (``python -m
integraph``) and is not imported here.
"""

from .bound_lines import bound_line, bound_lines, line_positions, zero_line
from .config import SessionConfig
from .errors import (
    DegenerateWindowError,
    EvaluationError,
    IntegraphError,
    InvalidWindowError,
    ParseError,
    UndefinedRangeError,
)
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
from .expression import ParsedFunction, parse_function
from .focus import SETTINGS_LAYOUT, Direction, FocusGrid, InputField
from .input_convert import parse_real
from .integrate import integrate_samples
from .model import AreaResult, BoundLine, IntegrationBounds, PlotWindow, SampleSet
from .numpify import NumpifiedFunction, numpify
from .plotly_view import frame_figure
from .sampling import sample_count, sample_function
from .session import Session
from .snapshot import FrameSnapshot, StatusMessage

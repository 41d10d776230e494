"""Immutable per-frame view of a session, handed to render adapters.

A ``FrameSnapshot`` captures everything a renderer needs to draw one frame:
the sampled curve, the overlay lines, the axis window, the area, the settings
focus, the active screen, the text buffers and the status line. Array fields
are the session's read-only arrays; ``buffers`` is a read-only mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping, Optional

from .events import Screen
from .focus import InputField
from .model import AreaResult, BoundLine, PlotWindow, SampleSet

__all__ = ["StatusMessage", "FrameSnapshot"]


@dataclass(frozen=True)
class StatusMessage:
    """One-line message for the status area."""

    text: str
    level: Literal["info", "warning", "error"] = "info"


@dataclass(frozen=True)
class FrameSnapshot:
    """Immutable record of the render-relevant session state.

    Parameters
    ----------
    function_text : str
        Source text of the committed function.
    samples : SampleSet
        Sampled curve.
    lower_line, upper_line : BoundLine
        Vertical markers at the integration bounds.
    zero_line : BoundLine
        Horizontal ``y = 0`` line.
    window : PlotWindow
        Committed axis ranges.
    area : AreaResult
        Latest integrator output.
    focus : tuple[int, int]
        ``(row, col)`` of the focused settings cell.
    focused_field : InputField
        Field at ``focus``.
    screen : Screen
        Active screen.
    buffers : Mapping[InputField, str]
        Text buffers of the seven text fields.
    status : StatusMessage or None
        Transient message from the last handled event.
    """

    function_text: str
    samples: SampleSet
    lower_line: BoundLine
    upper_line: BoundLine
    zero_line: BoundLine
    window: PlotWindow
    area: AreaResult
    focus: tuple[int, int]
    focused_field: InputField
    screen: Screen
    buffers: Mapping[InputField, str]
    status: Optional[StatusMessage] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "buffers", MappingProxyType(dict(self.buffers)))

    def buffer(self, field: InputField) -> str:
        """Text shown in ``field``'s box (the title for the trigger field)."""
        if not field.is_text:
            return field.title
        return self.buffers[field]

    def __repr__(self) -> str:
        return (
            f"FrameSnapshot(function_text={self.function_text!r}, screen={self.screen.name}, "
            f"focus={self.focus}, area={self.area.format()!r}, samples={len(self.samples)})"
        )

"""Discrete input events consumed by :meth:`integraph.session.Session.handle_event`.

Render/input adapters translate their raw key codes into these values, so the
session never sees terminal-specific codes.

Examples
--------
>>> from integraph.focus import Direction
>>> Arrow(Direction.LEFT)
Arrow(direction=<Direction.LEFT: (0, -1)>)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .focus import Direction

__all__ = [
    "Screen",
    "CharTyped",
    "Backspace",
    "Confirm",
    "Arrow",
    "Cancel",
    "ScreenToggle",
    "Other",
    "InputEvent",
]


class Screen(Enum):
    MAIN = "main"
    SETTINGS = "settings"


@dataclass(frozen=True)
class CharTyped:
    """A printable character typed by the user."""

    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"CharTyped expects a single character, got {self.char!r}")


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Arrow:
    direction: Direction


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class ScreenToggle:
    pass


@dataclass(frozen=True)
class Other:
    """Any input the session ignores; ``raw`` keeps the adapter's value for logging."""

    raw: Any = None


InputEvent = Union[CharTyped, Backspace, Confirm, Arrow, Cancel, ScreenToggle, Other]

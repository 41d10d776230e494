"""Recoverable error types raised by the integraph core.

Every class derives from :class:`IntegraphError` so the session dispatcher can
turn any of them into a status message with a single ``except`` clause. Each
one also derives from the closest built-in exception, which keeps
``except ValueError`` style handling working for library callers.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "IntegraphError",
    "ParseError",
    "EvaluationError",
    "UndefinedRangeError",
    "DegenerateWindowError",
    "InvalidWindowError",
]


class IntegraphError(Exception):
    """Base class for errors the session recovers from."""


class ParseError(IntegraphError, ValueError):
    """Raised when field text cannot be turned into a function or a real number.

    Parameters
    ----------
    message : str
        Human-readable description, suitable for a status line.
    text : str, optional
        The offending input text.
    field : InputField, optional
        The input field the text came from, when known.
    """

    def __init__(self, message: str, *, text: Optional[str] = None, field: Any = None) -> None:
        super().__init__(message)
        self.text = text
        self.field = field


class EvaluationError(IntegraphError, ArithmeticError):
    """Raised when a compiled function fails while being sampled."""


class UndefinedRangeError(IntegraphError, ValueError):
    """Raised when the integration index range is unset or inverted."""


class DegenerateWindowError(IntegraphError, ValueError):
    """Raised when a line generator is handed a zero-width span."""


class InvalidWindowError(IntegraphError, ValueError):
    """Raised when a window edit would leave ``min >= max`` on an axis."""

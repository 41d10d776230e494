"""Text -> real number conversion for the numeric settings fields.

The six numeric fields (integration limits and window edges) take either a
plain float literal or a small SymPy expression such as ``pi/2`` or ``2^10``.
Expressions are parsed unevaluated and screened with
:func:`~integraph.expression.reject_oversized_numbers` first, so a literal like
``9^9^9`` is refused instead of being computed exactly.
"""

from __future__ import annotations

import math
from typing import Any, Optional

import sympy as sp

from .errors import ParseError
from .expression import reject_oversized_numbers

__all__ = ["parse_real"]


def parse_real(obj: Any, *, field: Optional[Any] = None) -> float:
    """
    Convert `obj` to a finite real number.

    Rules:
    - Numbers (except bool) are cast with float().
    - Strings are stripped, then:
        1) tried as a plain float literal ("2", "-0.5", "1e-3"),
        2) otherwise parsed as a SymPy expression and evaluated ("pi/2", "2*E").

    The result must be real and finite. Complex values are rejected rather
    than truncated, since a window edge or integration bound has no use for an
    imaginary part.

    Raises
    ------
    ParseError
        If the conversion fails, the value is not real, or it is not finite.
    """

    def _finite(value: float, source: Any) -> float:
        if not math.isfinite(value):
            raise ParseError(f"{source!r} is not a finite number", text=str(source), field=field)
        return value

    if isinstance(obj, bool):
        raise ParseError(f"Could not convert {obj!r} to a real number", text=str(obj), field=field)

    if isinstance(obj, (int, float)):
        return _finite(float(obj), obj)

    if isinstance(obj, str):
        s = obj.strip()
        if s == "":
            raise ParseError("Cannot convert empty text to a number", text=obj, field=field)

        # Plain literal first; this is what the fields hold almost always.
        try:
            literal = float(s)
        except ValueError:
            literal = None
        if literal is not None:
            return _finite(literal, obj)

        try:
            parsed = sp.sympify(s.replace("^", "**"), evaluate=False)
        except Exception as e:
            raise ParseError(f"Could not convert {obj!r} to a real number", text=obj, field=field) from e
        if isinstance(parsed, sp.Basic):
            reject_oversized_numbers(parsed, text=obj, field=field)
        try:
            value = complex(parsed.evalf())
        except Exception as e:
            raise ParseError(f"Could not convert {obj!r} to a real number", text=obj, field=field) from e
        if value.imag != 0:
            raise ParseError(f"{obj!r} is not a real number", text=obj, field=field)
        return _finite(value.real, obj)

    raise ParseError(f"Could not convert {obj!r} to a real number", text=str(obj), field=field)

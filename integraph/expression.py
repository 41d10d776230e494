"""Text -> real function of ``x`` adapter.

The function field accepts the calculator-style syntax users expect from a
terminal tool: ``^`` for powers, implicit multiplication (``2x``, ``3sin(x)``),
``ln``/``abs``/``ceil``/``signum`` aliases and the constants ``pi`` and ``e``.
Parsing goes through SymPy; evaluation goes through :mod:`integraph.numpify`,
so the returned callable is vectorised over NumPy arrays.

Any failure (syntax, unknown symbols, complex constants, functions without a
NumPy implementation, a compiled function that cannot run) is raised as
:class:`~integraph.errors.ParseError`.

Text is parsed twice. The first pass keeps SymPy from evaluating anything so
:func:`reject_oversized_numbers` can refuse literals such as ``9^9^9`` before
SymPy tries to compute them exactly; the second pass is the normal one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Optional

import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .errors import ParseError
from .numpify import NumpifiedFunction, numpify

__all__ = ["X", "MAX_LITERAL_DIGITS", "ParsedFunction", "parse_function", "reject_oversized_numbers"]

X = sp.Symbol("x", real=True)

# Largest power of ten a numeric literal may reach; floats stop near 1e308.
MAX_LITERAL_DIGITS = 300
_MAX_FACTORIAL = 1000

_TRANSFORMATIONS = standard_transformations + (convert_xor, implicit_multiplication_application)

_LOCALS: dict[str, Any] = {
    "x": X,
    "e": sp.E,
    "E": sp.E,
    "pi": sp.pi,
    "ln": sp.log,
    "log": sp.log,
    "abs": sp.Abs,
    "ceil": sp.ceiling,
    "signum": sp.sign,
}

_TRIAL_GRID = np.linspace(-1.0, 1.0, 5)


def _as_float(expr: sp.Basic) -> Optional[float]:
    try:
        return abs(complex(expr.evalf(15)))
    except (TypeError, ValueError, ArithmeticError):
        return None


def reject_oversized_numbers(expr: sp.Basic, *, text: str, field: Optional[Any] = None) -> None:
    """Raise :class:`ParseError` if ``expr`` holds a numeric power or factorial too large to evaluate.

    ``expr`` should be unevaluated (parsed with ``evaluate=False``). Nodes are
    visited innermost first, so every operand checked here has itself passed
    the check and is cheap to approximate.
    """
    for node in sp.postorder_traversal(expr):
        if isinstance(node, sp.Pow) and node.base.is_number and node.exp.is_number:
            base, exponent = _as_float(node.base), _as_float(node.exp)
            if base is None or exponent is None or base in (0.0, 1.0):
                continue
            too_large = exponent * abs(math.log10(base)) > MAX_LITERAL_DIGITS
        elif isinstance(node, sp.factorial) and node.args[0].is_number:
            n = _as_float(node.args[0])
            too_large = n is not None and n > _MAX_FACTORIAL
        else:
            continue
        if too_large:
            raise ParseError(f"{text.strip()!r} contains a number too large to evaluate", text=text, field=field)


@dataclass(frozen=True)
class ParsedFunction:
    """A committed function: its source text, SymPy form and compiled callable.

    Calling the object evaluates the function at ``x`` (scalar or array) and
    always returns float data, broadcasting constant expressions.
    """

    text: str
    expr: sp.Expr
    numeric: NumpifiedFunction = dataclass_field(repr=False, compare=False)

    def __call__(self, x: Any) -> np.ndarray:
        x_arr = np.asarray(x, dtype=float)
        values = np.asarray(self.numeric(x_arr), dtype=float)
        if values.shape != x_arr.shape:
            values = np.broadcast_to(values, x_arr.shape).copy()
        return values


def _parse(source: str, *, evaluate: bool) -> Any:
    return parse_expr(source, local_dict=dict(_LOCALS), transformations=_TRANSFORMATIONS, evaluate=evaluate)


def parse_function(text: str, *, field: Optional[Any] = None) -> ParsedFunction:
    """Parse ``text`` into a real function of ``x``.

    Parameters
    ----------
    text : str
        Function source such as ``"x^2 - 3x + 1"`` or ``"sin(x)/x"``.
    field : InputField, optional
        Attached to a raised :class:`ParseError` for status reporting.

    Raises
    ------
    ParseError
        If the text is empty, malformed, mentions symbols other than ``x``,
        holds an oversized numeric literal, or cannot be compiled and run as a
        real NumPy function.

    Examples
    --------
    >>> f = parse_function("x^2")
    >>> float(f(3.0))
    9.0
    >>> parse_function("x +")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    integraph.errors.ParseError: Could not parse function 'x +'
    """
    source = text.strip()
    if not source:
        raise ParseError("Function text is empty", text=text, field=field)

    try:
        unevaluated = _parse(source, evaluate=False)
    except Exception as exc:
        raise ParseError(f"Could not parse function {source!r}", text=text, field=field) from exc
    if isinstance(unevaluated, sp.Basic):
        reject_oversized_numbers(unevaluated, text=text, field=field)

    try:
        expr = _parse(source, evaluate=True)
    except Exception as exc:
        raise ParseError(f"Could not parse function {source!r}", text=text, field=field) from exc

    if not isinstance(expr, sp.Expr):
        raise ParseError(f"{source!r} is not an expression in x", text=text, field=field)

    unknown = sorted(s.name for s in expr.free_symbols if s != X)
    if unknown:
        raise ParseError(
            f"Unknown symbol(s) in function: {', '.join(unknown)} (only x is allowed)",
            text=text,
            field=field,
        )
    if expr.has(sp.I, sp.zoo, sp.nan):
        raise ParseError(f"{source!r} is not a real-valued function", text=text, field=field)

    try:
        function = ParsedFunction(text=source, expr=expr, numeric=numpify(expr, X))
        with np.errstate(all="ignore"):
            function(_TRIAL_GRID)
    except Exception as exc:
        raise ParseError(f"Cannot evaluate {source!r} numerically: {exc}", text=text, field=field) from exc
    return function

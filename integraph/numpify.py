"""
numpify: compile a SymPy expression in ``x`` to a vectorised NumPy function
==========================================================================

Purpose
-------
A plotting window holds ten thousand samples; evaluating them with
``subs``/``evalf`` one by one is far too slow for an interactive session. This
module prints the expression as Python source with SymPy's SciPy/NumPy code
printer, ``exec``s it once and returns a callable that evaluates a whole grid
in one call.

Special functions (``gamma``, ``erf``, ``factorial``, ...) print as
``scipy.special`` calls, so they stay vectorised too.

Examples
--------
>>> import numpy as np
>>> import sympy as sp
>>> x = sp.Symbol("x")
>>> numpify(x**2 + 1, x)(np.array([0.0, 2.0]))
array([1., 5.])
>>> numpify(sp.Integer(5), x)(np.zeros(3))
array([5., 5., 5.])

Logging
-------
Compile timings and cache misses are logged at DEBUG level.

Notes
-----
Code generation goes through ``exec``. The globals handed to it hold only the
modules the printer asked for, and only from :data:`ALLOWED_MODULES`.
"""

from __future__ import annotations

from functools import lru_cache
import importlib
import logging
import time
from typing import Any, Callable, Dict

import sympy as sp
from sympy.printing.numpy import SciPyPrinter

__all__ = ["ALLOWED_MODULES", "NumpifiedFunction", "numpify"]

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Top-level modules generated code may reference.
ALLOWED_MODULES = frozenset({"numpy", "scipy", "functools", "builtins", "math"})

_ARG = sp.Symbol("_x")


class NumpifiedFunction:
    """Compiled one-argument callable plus the expression and source it came from."""

    __slots__ = ("_fn", "symbolic", "var", "source")

    def __init__(self, fn: Callable[[Any], Any], symbolic: sp.Basic, var: sp.Symbol, source: str) -> None:
        self._fn = fn
        self.symbolic = symbolic
        self.var = var
        self.source = source

    def __call__(self, x: Any) -> Any:
        return self._fn(x)

    def __repr__(self) -> str:
        return f"NumpifiedFunction({self.symbolic!r}, var={self.var.name})"


def _module_globals(module_imports: Dict[str, Any]) -> Dict[str, Any]:
    """Import every module the printer referenced and bind its top-level name."""
    glb: Dict[str, Any] = {}
    for module in module_imports:
        top = module.split(".")[0]
        if top not in ALLOWED_MODULES:
            raise ValueError(f"Generated code needs module {module!r}, which is not available")
        importlib.import_module(module)
        glb[top] = importlib.import_module(top)
    glb.setdefault("numpy", importlib.import_module("numpy"))
    return glb


def _require_known_functions(expr: sp.Basic, code: str) -> None:
    # Undefined functions print as bare calls that nothing in the globals resolves.
    missing = set()
    for app in expr.atoms(sp.Function):
        name = app.func.__name__
        if f"{name}(" in code and f".{name}(" not in code:
            missing.add(name)
    if missing:
        raise ValueError(
            "Expression uses function(s) without a NumPy implementation: " + ", ".join(sorted(missing))
        )


@lru_cache(maxsize=128)
def numpify(expr: sp.Basic, var: sp.Symbol) -> NumpifiedFunction:
    """Compile ``expr`` into a NumPy function of ``var``.

    Results are cached on ``(expr, var)``, so re-committing the same function
    text compiles nothing. ``numpify.cache_clear()`` drops the cache.

    Parameters
    ----------
    expr : sympy.Basic
        Expression whose only free symbol may be ``var``.
    var : sympy.Symbol
        The argument of the compiled function.

    Raises
    ------
    ValueError
        If ``expr`` has other free symbols, cannot be printed as NumPy code,
        or needs a function or module with no vectorised implementation.
    """
    logger.debug("numpify: cache miss for %r", expr)
    t0 = time.perf_counter()

    unbound = sorted(s.name for s in expr.free_symbols if s != var)
    if unbound:
        raise ValueError(f"Expression contains unbound symbols: {', '.join(unbound)}")

    printer = SciPyPrinter(settings={"allow_unknown_functions": True})
    try:
        code = printer.doprint(expr.xreplace({var: _ARG}))
    except Exception as exc:
        raise ValueError(f"{expr} cannot be written as NumPy code: {exc}") from exc
    _require_known_functions(expr, code)

    if expr.free_symbols:
        body = f"    return {code}"
    else:
        body = f"    return ({code}) + numpy.zeros(numpy.shape({_ARG.name}))"
    src = "\n".join(
        [
            f"def _numpified({_ARG.name}):",
            f"    {_ARG.name} = numpy.asarray({_ARG.name})",
            body,
        ]
    )

    glb = _module_globals(printer.module_imports)
    loc: Dict[str, Any] = {}
    exec(src, glb, loc)
    logger.debug("numpify: compiled %r in %.2f ms", expr, 1000.0 * (time.perf_counter() - t0))
    return NumpifiedFunction(loc["_numpified"], expr, var, src)

from __future__ import annotations

import math

import numpy as np
import pytest

from integraph.errors import ParseError
from integraph.expression import X, parse_function
from integraph.focus import InputField


@pytest.mark.parametrize(
    ("text", "x", "expected"),
    [
        ("x", 2.0, 2.0),
        ("x^2", 3.0, 9.0),
        ("2x + 1", 2.0, 5.0),
        ("3sin(x)", math.pi / 2, 3.0),
        ("ln(e)", 7.0, 1.0),
        ("abs(x) - 1", -4.0, 3.0),
        ("sqrt(x)", 16.0, 4.0),
        ("ceil(x)", 1.2, 2.0),
        ("signum(x)", -0.5, -1.0),
        ("pi", 0.0, math.pi),
    ],
)
def test_calculator_syntax_evaluates(text: str, x: float, expected: float) -> None:
    f = parse_function(text)
    assert float(f(x)) == pytest.approx(expected)


def test_parsed_function_is_vectorized_and_float() -> None:
    f = parse_function("x^2 - 1")
    grid = np.array([-1.0, 0.0, 2.0])

    out = f(grid)

    assert out.dtype == float
    np.testing.assert_allclose(out, [0.0, -1.0, 3.0])


def test_constant_function_broadcasts_over_grid() -> None:
    f = parse_function("0")
    out = f(np.linspace(0.0, 1.0, 5))
    assert out.shape == (5,)
    assert not out.any()


def test_text_is_stripped_and_kept() -> None:
    f = parse_function("  x + 1 ")
    assert f.text == "x + 1"
    assert f.expr == X + 1


@pytest.mark.parametrize("text", ["x +", "", "   ", "(x", "x ** * 2"])
def test_malformed_text_raises_parse_error(text: str) -> None:
    with pytest.raises(ParseError):
        parse_function(text)


def test_other_variables_are_rejected() -> None:
    with pytest.raises(ParseError, match="Unknown symbol"):
        parse_function("x + y")


def test_complex_constants_are_rejected() -> None:
    with pytest.raises(ParseError, match="real-valued"):
        parse_function("sqrt(-1) * x")


def test_parse_error_carries_field_and_text() -> None:
    with pytest.raises(ParseError) as info:
        parse_function("x +", field=InputField.FUNCTION)

    assert info.value.field is InputField.FUNCTION
    assert info.value.text == "x +"
    assert isinstance(info.value, ValueError)


@pytest.mark.parametrize(("text", "expected"), [("gamma(x)", 24.0), ("x!", 120.0), ("erf(x)", math.erf(5.0))])
def test_special_functions_evaluate_through_scipy(text: str, expected: float) -> None:
    assert float(parse_function(text)(5.0)) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["foo(x)", "Integral(x, x)", "lambda: 1"])
def test_functions_without_numeric_form_raise_parse_error(text: str) -> None:
    with pytest.raises(ParseError):
        parse_function(text)


@pytest.mark.parametrize("text", ["9^9^9", "x + 10^10^10", "(10^9)!"])
def test_oversized_literals_are_rejected_before_evaluation(text: str) -> None:
    with pytest.raises(ParseError, match="too large"):
        parse_function(text)


def test_large_symbolic_exponent_is_allowed() -> None:
    f = parse_function("x^9^9")
    assert float(f(1.0)) == 1.0

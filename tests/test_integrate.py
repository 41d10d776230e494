from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.integrate import quad

from integraph.errors import UndefinedRangeError
from integraph.expression import parse_function
from integraph.integrate import integrate_samples
from integraph.model import IntegrationBounds, PlotWindow, SampleSet
from integraph.sampling import sample_function

WINDOW = PlotWindow(-5.0, 5.0, -10.0, 10.0)
STEP = 0.001


def _area(text: str, lower: float, upper: float, step: float = STEP) -> float:
    samples = sample_function(parse_function(text), WINDOW, IntegrationBounds(lower, upper), step)
    return integrate_samples(samples)


def test_identity_from_zero_to_two_is_about_two() -> None:
    assert _area("x", 0.0, 2.0) == pytest.approx(2.0, abs=5e-3)


@pytest.mark.parametrize(("a", "b"), [(-3.0, 4.0), (0.5, 1.5), (-4.0, -1.0)])
def test_identity_matches_closed_form(a: float, b: float) -> None:
    expected = (b**2 - a**2) / 2
    # The half-open index range drops the last step, so the error is O(step).
    assert _area("x", a, b) == pytest.approx(expected, abs=5 * STEP * max(abs(a), abs(b)))


def test_zero_function_has_zero_area() -> None:
    assert _area("0", -2.0, 3.0) == 0.0


def test_area_is_signed() -> None:
    assert _area("-1", 0.0, 2.0) == pytest.approx(-2.0, abs=5e-3)


def test_sine_matches_quad_reference() -> None:
    reference, _err = quad(math.sin, 0.0, math.pi)
    assert _area("sin(x)", 0.0, math.pi) == pytest.approx(reference, abs=5e-3)


def test_equal_bounds_integrate_to_zero() -> None:
    assert _area("x^2", 1.0, 1.0) == 0.0


def test_inverted_bounds_are_undefined_not_negated() -> None:
    samples = sample_function(parse_function("x"), WINDOW, IntegrationBounds(3.0, 1.0), STEP)
    with pytest.raises(UndefinedRangeError, match="greater than the upper"):
        integrate_samples(samples)


@pytest.mark.parametrize(("lower", "upper"), [(-6.0, 1.0), (1.0, 6.0)])
def test_bound_outside_window_is_undefined(lower: float, upper: float) -> None:
    samples = sample_function(parse_function("x"), WINDOW, IntegrationBounds(lower, upper), STEP)
    with pytest.raises(UndefinedRangeError, match="outside the plotted x range"):
        integrate_samples(samples)


def test_index_past_end_is_undefined() -> None:
    samples = SampleSet(xs=np.arange(3.0), ys=np.ones(3), step=1.0, lower_index=0, upper_index=4)
    with pytest.raises(UndefinedRangeError, match="past the end"):
        integrate_samples(samples)


def test_trapezoid_formula_on_hand_built_samples() -> None:
    ys = np.array([0.0, 1.0, 4.0, 9.0, 16.0])
    samples = SampleSet(xs=np.arange(5.0), ys=ys, step=0.5, lower_index=1, upper_index=4)
    # Pairs (1, 4) and (4, 9): 0.5 * (5 + 13) / 2
    assert integrate_samples(samples) == pytest.approx(4.5)


def test_repeated_integration_is_idempotent() -> None:
    samples = sample_function(parse_function("x^3 - x"), WINDOW, IntegrationBounds(-2.0, 1.5), STEP)
    assert integrate_samples(samples) == integrate_samples(samples)

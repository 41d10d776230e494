from __future__ import annotations

import math

import numpy as np
import pytest

from integraph.errors import EvaluationError, InvalidWindowError
from integraph.model import IntegrationBounds, PlotWindow
from integraph.sampling import DEFAULT_MAX_SAMPLES, DEFAULT_STEP, sample_count, sample_function, sample_grid

WINDOW = PlotWindow(-5.0, 5.0, -10.0, 10.0)


def identity(x):
    return np.asarray(x, dtype=float)


def test_default_window_has_ceil_span_over_step_samples() -> None:
    samples = sample_function(identity, WINDOW, IntegrationBounds(0.0, 2.0), DEFAULT_STEP)

    assert len(samples) == math.ceil(10.0 / DEFAULT_STEP) == 10000
    assert samples.xs[0] == -5.0
    assert samples.xs[-1] < 5.0
    np.testing.assert_allclose(samples.ys, samples.xs)


def test_bound_indices_are_first_samples_at_or_after_each_bound() -> None:
    samples = sample_function(identity, WINDOW, IntegrationBounds(0.0, 2.0), DEFAULT_STEP)

    lo, hi = samples.lower_index, samples.upper_index
    assert lo is not None and hi is not None
    assert samples.xs[lo] >= 0.0 > samples.xs[lo - 1]
    assert samples.xs[hi] >= 2.0 > samples.xs[hi - 1]


def test_equal_bounds_share_an_index() -> None:
    samples = sample_function(identity, WINDOW, IntegrationBounds(1.0, 1.0), 0.5)
    assert samples.lower_index == samples.upper_index == 12


def test_bounds_are_located_independently_of_order() -> None:
    samples = sample_function(identity, WINDOW, IntegrationBounds(3.0, 1.0), 0.5)
    assert samples.lower_index == 16
    assert samples.upper_index == 12


@pytest.mark.parametrize("bound", [-5.5, 5.0, 7.0])
def test_bound_outside_sampled_domain_leaves_index_unset(bound: float) -> None:
    samples = sample_function(identity, WINDOW, IntegrationBounds(bound, 0.0), 0.5)
    assert samples.lower_index is None
    assert samples.upper_index == 10


def test_bound_at_window_start_is_index_zero() -> None:
    samples = sample_function(identity, WINDOW, IntegrationBounds(-5.0, -5.0), 0.5)
    assert samples.lower_index == 0


def test_constant_function_is_broadcast() -> None:
    samples = sample_function(lambda x: 3.0, WINDOW, IntegrationBounds(0.0, 0.0), 0.5)
    assert len(samples) == 20
    assert np.all(samples.ys == 3.0)


def test_non_finite_values_are_kept_without_warnings() -> None:
    window = PlotWindow(-1.0, 1.0, -1.0, 1.0)
    with np.errstate(all="raise"):
        samples = sample_function(lambda x: 1.0 / x, window, IntegrationBounds(0.0, 0.5), 0.5)
    assert np.isinf(samples.ys[2])


def test_function_errors_become_evaluation_errors() -> None:
    def broken(x):
        raise TypeError("boom")

    with pytest.raises(EvaluationError, match="boom"):
        sample_function(broken, WINDOW, IntegrationBounds(0.0, 1.0), 0.5)


def test_sample_arrays_are_read_only() -> None:
    samples = sample_function(identity, WINDOW, IntegrationBounds(0.0, 1.0), 0.5)
    with pytest.raises(ValueError):
        samples.ys[0] = 1.0


def test_empty_window_gives_empty_samples() -> None:
    samples = sample_function(identity, PlotWindow(1.0, 1.0, -1.0, 1.0), IntegrationBounds(1.0, 1.0), 0.5)
    assert len(samples) == 0
    assert samples.lower_index is None and samples.upper_index is None


def test_non_positive_step_is_rejected() -> None:
    with pytest.raises(ValueError, match="step must be > 0"):
        sample_grid(0.0, 1.0, 0.0)


def test_sample_count_matches_grid_length() -> None:
    assert sample_count(-5.0, 5.0, 0.5) == len(sample_grid(-5.0, 5.0, 0.5)) == 20
    assert sample_count(1.0, 1.0, 0.5) == 0


@pytest.mark.parametrize(("x_min", "x_max"), [(0.0, 1e300), (-1e308, 1e308), (0.0, 1e6)])
def test_oversized_grid_is_refused_before_allocation(x_min: float, x_max: float) -> None:
    with pytest.raises(InvalidWindowError, match=f"the limit is {DEFAULT_MAX_SAMPLES}"):
        sample_grid(x_min, x_max, DEFAULT_STEP)


def test_sample_function_respects_max_samples() -> None:
    with pytest.raises(InvalidWindowError, match="the limit is 10"):
        sample_function(identity, WINDOW, IntegrationBounds(0.0, 1.0), 0.5, max_samples=10)

    samples = sample_function(identity, WINDOW, IntegrationBounds(0.0, 1.0), 0.5, max_samples=20)
    assert len(samples) == 20


def test_max_samples_none_disables_the_limit() -> None:
    assert sample_count(0.0, 1e8, 0.5, max_samples=None) == 2 * 10**8

"""Trapezoidal integration over the sampled bound range.

The area is the trapezoid sum over the samples ``ys[lower_index:upper_index]``
with the sampler's fixed step::

    sum(step * (y[i] + y[i + 1]) / 2)

which is exactly ``scipy.integrate.trapezoid(segment, dx=step)``. The result
is signed. Inverted ranges are reported as
:class:`~integraph.errors.UndefinedRangeError`, never swapped.
"""

from __future__ import annotations

import numpy as np
from scipy.integrate import trapezoid

from .errors import UndefinedRangeError
from .model import SampleSet

__all__ = ["integrate_samples"]


def integrate_samples(samples: SampleSet) -> float:
    """Integrate ``samples`` between its bound indices.

    Raises
    ------
    UndefinedRangeError
        If either index is unset, ``lower_index > upper_index``, or
        ``upper_index`` is past the end of the samples.

    Examples
    --------
    >>> import numpy as np
    >>> s = SampleSet(xs=np.arange(5.0), ys=np.ones(5), step=1.0, lower_index=0, upper_index=5)
    >>> integrate_samples(s)
    4.0
    """
    lower, upper = samples.lower_index, samples.upper_index
    if lower is None:
        raise UndefinedRangeError("Lower limit of integration is outside the plotted x range")
    if upper is None:
        raise UndefinedRangeError("Upper limit of integration is outside the plotted x range")
    if lower > upper:
        raise UndefinedRangeError("Lower limit of integration is greater than the upper limit")
    if upper > len(samples):
        raise UndefinedRangeError(
            f"Upper index {upper} is past the end of {len(samples)} samples"
        )

    segment = samples.ys[lower:upper]
    if segment.size < 2:
        return 0.0
    return float(trapezoid(np.asarray(segment), dx=samples.step))

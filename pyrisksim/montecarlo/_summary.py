"""
Summary statistics for a resampled distribution.

Point estimate (mean), standard error (Bessel-corrected standard
deviation) and an empirical confidence interval. Two interval types:

- percentile: the (1-c)/2 and 1-(1-c)/2 empirical quantiles, linear
  interpolation between order statistics (Hyndman & Fan type 7, the
  R and numpy default).
- normal: mean -/+ z_{1-(1-c)/2} * se.

Nothing here is random: the same distribution and confidence level
always give bit-identical output.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pyrisksim.core.exceptions import ValidationError
from pyrisksim.core.validation import (
    check_1d,
    check_array,
    check_conf_level,
    check_finite,
    check_min_samples,
)
from pyrisksim.montecarlo._common import SummaryResult

INTERVAL_TYPES = ("percentile", "normal")


def empirical_quantile(x: ArrayLike, probs: ArrayLike) -> NDArray:
    """
    Type 7 sample quantiles.

    For each q: h = (N-1) * q, lo = floor(h), hi = ceil(h),
    Q(q) = x[lo] + (h - lo) * (x[hi] - x[lo]) on the sorted sample.

    Parameters
    ----------
    x : array-like
        1D sample, any order, no NaN.
    probs : array-like
        Scalar or 1D probabilities in [0, 1].

    Returns
    -------
    NDArray
        Quantile values, one per probability (0-d for scalar probs).
    """
    arr = check_array(x, "x")
    check_1d(arr, "x")
    check_min_samples(arr, 1, "x")
    check_finite(arr, "x")

    q = np.asarray(probs, dtype=np.float64)
    if np.any(~np.isfinite(q)) or np.any(q < 0.0) or np.any(q > 1.0):
        raise ValidationError(f"probs: must be in [0, 1], got {probs!r}")

    xs = np.sort(arr)
    h = (len(xs) - 1) * q
    lo = np.floor(h).astype(np.intp)
    hi = np.ceil(h).astype(np.intp)
    return xs[lo] + (h - lo) * (xs[hi] - xs[lo])


def summarize(
    distribution: ArrayLike,
    conf_level: float = 0.95,
    *,
    interval: str = "percentile",
) -> SummaryResult:
    """
    Summarize a resampled distribution.

    Parameters
    ----------
    distribution : array-like
        1D sample of simulated statistics, N >= 2.
    conf_level : float
        Confidence level in (0, 1).
    interval : str
        "percentile" (default) or "normal".

    Returns
    -------
    SummaryResult

    Raises
    ------
    ValidationError
        Empty or single-value distribution, non-finite values, conf_level
        outside (0, 1), unknown interval type.
    """
    t = check_array(distribution, "distribution")
    check_1d(t, "distribution")
    if t.shape[0] == 0:
        raise ValidationError("distribution: must not be empty")
    # the standard error needs the N-1 divisor
    check_min_samples(t, 2, "distribution")
    check_finite(t, "distribution")
    conf_level = check_conf_level(conf_level)

    if interval not in INTERVAL_TYPES:
        raise ValidationError(
            f"interval must be one of {INTERVAL_TYPES}, got {interval!r}"
        )

    mean = float(np.mean(t))
    se = float(np.std(t, ddof=1))
    alpha = 1.0 - conf_level

    if interval == "percentile":
        lower, upper = empirical_quantile(t, [alpha / 2.0, 1.0 - alpha / 2.0])
        lower, upper = float(lower), float(upper)
    else:
        z = float(sp_stats.norm.ppf(1.0 - alpha / 2.0))
        lower = mean - z * se
        upper = mean + z * se

    return SummaryResult(
        mean=mean,
        standard_error=se,
        lower=lower,
        upper=upper,
        conf_level=conf_level,
        interval=interval,
    )

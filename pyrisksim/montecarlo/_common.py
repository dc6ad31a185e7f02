"""
Common data structures for Monte Carlo resampling.

ResampleParams is the payload wrapped by Result[P] and exposed through
ResampleSolution. SummaryResult is what summarize() returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class ResampleParams:
    """
    Parameter payload for a resampling run.

    - t: the resampled distribution, read-only, shape (R,)
    - t0: statistic at the observed proportions, None for user functions
    - R: number of replicates kept
    - n_skipped: draws discarded under on_error="skip"
    - statistic: name of the resampled statistic
    """
    t: NDArray[np.floating[Any]]               # shape (R,)
    t0: float | None
    R: int
    n_skipped: int
    statistic: str


@dataclass(frozen=True)
class SummaryResult:
    """
    Point estimate, standard error and confidence interval of a
    resampled distribution. Values are unrounded.
    """
    mean: float
    standard_error: float
    lower: float
    upper: float
    conf_level: float
    interval: str = "percentile"

    @property
    def bounds(self) -> tuple[float, float]:
        """(lower, upper)."""
        return (self.lower, self.upper)

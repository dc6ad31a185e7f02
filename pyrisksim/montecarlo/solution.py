"""
Solution wrapper for resampling results.

ResampleSolution wraps Result[ResampleParams] and provides convenient
accessors, summarize() and a text summary for reports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyrisksim.core.result import Result
from pyrisksim.montecarlo._common import ResampleParams, SummaryResult
from pyrisksim.montecarlo._summary import summarize

if TYPE_CHECKING:
    from pyrisksim.montecarlo.design import ResampleDesign


_STATISTIC_LABELS = {
    "efficacy": "Efficacy (1 - RR)",
    "relative_risk": "Relative risk",
    "risk_control": "Risk, control arm",
    "risk_treatment": "Risk, treatment arm",
}


@dataclass
class ResampleSolution:
    """
    User-facing resampling results.

    Holds the empirical distribution t of the resampled statistic, the
    statistic at the observed proportions (t0) when known, and run
    metadata. Interval estimates come from summarize().
    """
    _result: Result[ResampleParams]
    _design: 'ResampleDesign'

    # --- Core fields ---

    @property
    def t(self) -> NDArray[np.floating[Any]]:
        """Resampled distribution, shape (R,), read-only."""
        return self._result.params.t

    @property
    def t0(self) -> float | None:
        """Statistic at the observed proportions, or None."""
        return self._result.params.t0

    @property
    def R(self) -> int:
        """Number of replicates."""
        return self._result.params.R

    @property
    def n_skipped(self) -> int:
        """Draws discarded and redrawn under on_error='skip'."""
        return self._result.params.n_skipped

    @property
    def statistic(self) -> str:
        return self._result.params.statistic

    @property
    def mean(self) -> float:
        """Mean of the resampled distribution."""
        return float(np.mean(self.t))

    @property
    def se(self) -> float:
        """Standard error: sd(t) with divisor R - 1. NaN when R == 1."""
        if self.R < 2:
            return float("nan")
        return float(np.std(self.t, ddof=1))

    @property
    def bias(self) -> float | None:
        """mean(t) - t0, or None when t0 is unknown."""
        if self.t0 is None:
            return None
        return self.mean - self.t0

    # --- Metadata ---

    @property
    def seed(self):
        """Random seed (or Generator) used."""
        return self._design.seed

    @property
    def method(self) -> str | None:
        return self._design.method

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Summaries ---

    def summarize(
        self,
        conf_level: float = 0.95,
        *,
        interval: str = "percentile",
    ) -> SummaryResult:
        """Mean, standard error and confidence interval of t."""
        return summarize(self.t, conf_level, interval=interval)

    def summary(self, conf_level: float = 0.95) -> str:
        """
        Text report of the resampled statistic.

        Produces:
            MONTE CARLO RESAMPLE

            Statistic: Efficacy (1 - RR)    R = 1000    method = binomial

                         observed      mean   std. error
                 (%)       21.03      17.31        24.95
            95% percentile interval (%): (-34.19, 56.67)

        Percentages are rounded for display only.
        """
        res = self.summarize(conf_level)
        label = _STATISTIC_LABELS.get(self.statistic, self.statistic)
        observed = "NA" if self.t0 is None else f"{self.t0 * 100:.2f}"

        lines = [
            "\nMONTE CARLO RESAMPLE\n",
            f"Statistic: {label}    R = {self.R}    "
            f"method = {self.method or 'user function'}",
            "",
            f"{'':>8s} {'observed':>10s} {'mean':>10s} {'std. error':>12s}",
            f"{'(%)':>8s} {observed:>10s} {res.mean * 100:10.2f} "
            f"{res.standard_error * 100:12.2f}",
            f"{int(round(conf_level * 100))}% percentile interval (%): "
            f"({res.lower * 100:.2f}, {res.upper * 100:.2f})",
        ]
        if self.n_skipped:
            lines.append(f"Skipped draws: {self.n_skipped}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ResampleSolution(statistic={self.statistic!r}, R={self.R}, "
            f"backend={self.backend_name!r})"
        )

"""
PyRiskSim Monte Carlo methods.

Simulate group risks and two-arm ratio statistics, resample them into an
empirical distribution, and summarize that distribution.

Usage:
    from pyrisksim.montecarlo import TrialObservation, resample_trial

    obs = TrialObservation.from_counts(717, 23, 750, 19)
    result = resample_trial(obs, "efficacy", R=1000, seed=42)
    summary = result.summarize(conf_level=0.90)

    # Any statistic with the fn(*args, rng=...) contract
    result = resample(simulate_risk, 750, 0.025, R=1000, seed=42)
"""

from pyrisksim.montecarlo._common import SummaryResult
from pyrisksim.montecarlo._simulate import (
    simulate_efficacy,
    simulate_relative_risk,
    simulate_risk,
    simulate_trial,
)
from pyrisksim.montecarlo._summary import empirical_quantile, summarize
from pyrisksim.montecarlo.design import ResampleDesign, TrialArm, TrialObservation
from pyrisksim.montecarlo.solution import ResampleSolution
from pyrisksim.montecarlo.solvers import resample, resample_trial

__all__ = [
    "simulate_risk",
    "simulate_relative_risk",
    "simulate_efficacy",
    "simulate_trial",
    "resample",
    "resample_trial",
    "summarize",
    "empirical_quantile",
    "TrialArm",
    "TrialObservation",
    "ResampleDesign",
    "ResampleSolution",
    "SummaryResult",
]

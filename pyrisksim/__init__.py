"""
PyRiskSim: Monte Carlo uncertainty for epidemiological risk measures.

Quantifies the uncertainty of risk, relative risk and efficacy from
two-arm trial counts by resampling.

Submodules:
    montecarlo: Group and trial simulators, resampling engine, summaries
    core: Result envelope, exceptions, validation, compute utilities
"""

__version__ = "0.1.0"

from pyrisksim import montecarlo

__all__ = [
    "__version__",
    "montecarlo",
]

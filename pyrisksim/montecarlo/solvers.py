"""
Solver dispatch for Monte Carlo resampling.

Provides resample() for any statistic function following the
fn(*args, rng=Generator) -> float contract, and resample_trial() for the
built-in two-arm trial statistics.
"""

from __future__ import annotations

import warnings
from typing import Callable, Literal

from pyrisksim.core.compute.device import select_device
from pyrisksim.core.exceptions import ValidationError
from pyrisksim.montecarlo.design import ResampleDesign, TrialObservation
from pyrisksim.montecarlo.solution import ResampleSolution
from pyrisksim.montecarlo.backends.cpu import CPUResampleBackend


BackendChoice = Literal['auto', 'cpu', 'gpu']
OnError = Literal['raise', 'skip']


def _get_backend(backend: str):
    """
    Select backend based on preference.

    'cpu' is the default everywhere; 'auto' takes a GPU when torch sees one.
    """
    if backend == 'cpu':
        return CPUResampleBackend()

    if backend == 'auto':
        device = select_device('auto')
        if device.is_gpu:
            from pyrisksim.montecarlo.backends.gpu import GPUResampleBackend
            return GPUResampleBackend(device=device.device_type)
        return CPUResampleBackend()

    if backend == 'gpu':
        device = select_device('gpu')
        from pyrisksim.montecarlo.backends.gpu import GPUResampleBackend
        return GPUResampleBackend(device=device.device_type)

    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'auto', 'cpu' or 'gpu'."
    )


def _run(design: ResampleDesign, backend: str) -> ResampleSolution:
    be = _get_backend(backend)
    result = be.solve(design)

    if result.params.n_skipped:
        warnings.warn(
            f"{result.params.n_skipped} of {design.R + result.params.n_skipped} "
            f"draws of {design.name!r} had a zero denominator and were redrawn",
            RuntimeWarning,
            stacklevel=3,
        )

    return ResampleSolution(_result=result, _design=design)


def resample(
    statistic: Callable,
    *args,
    R: int = 1000,
    seed=None,
    on_error: OnError = 'raise',
    max_skips: int | None = None,
    n_workers: int = 1,
    backend: BackendChoice = 'cpu',
) -> ResampleSolution:
    """
    Repeat a random statistic R times with fixed parameters.

    Parameters
    ----------
    statistic : callable
        fn(*args, rng=Generator) -> float. simulate_risk (args n, p) and
        simulate_efficacy / simulate_relative_risk / simulate_trial
        (args n1, p1, n2, p2) qualify.
    *args
        Fixed parameters passed on every call.
    R : int
        Number of replicates. Default 1000.
    seed : int, SeedSequence, Generator or None
        Explicit random source. None seeds from the OS.
    on_error : str
        'raise' (default) aborts the run on the first
        DivisionUndefinedError. 'skip' redraws that replicate and counts it.
    max_skips : int, optional
        Redraw budget under on_error='skip'. Default 10 * R.
    n_workers : int
        Parallel threads, each on an independent child stream. The
        distribution depends on n_workers for a given seed.
    backend : str
        'cpu' (default), 'gpu' or 'auto'. User functions always run on CPU.

    Returns
    -------
    ResampleSolution
    """
    design = ResampleDesign.for_function(
        statistic,
        args,
        R,
        on_error=on_error,
        max_skips=max_skips,
        n_workers=n_workers,
        seed=seed,
    )
    return _run(design, backend)


def resample_trial(
    observation: TrialObservation | ResampleDesign,
    statistic: Literal['efficacy', 'relative_risk', 'risk_control', 'risk_treatment'] = 'efficacy',
    R: int = 1000,
    *,
    method: Literal['binomial', 'uniform'] = 'binomial',
    seed=None,
    on_error: OnError = 'raise',
    max_skips: int | None = None,
    n_workers: int = 1,
    backend: BackendChoice = 'cpu',
) -> ResampleSolution:
    """
    Resample a two-arm trial statistic at the observed risks.

    Each replicate draws a control risk and a treatment risk from
    Binomial(n, observed risk) / n and evaluates the statistic.

    Parameters
    ----------
    observation : TrialObservation or ResampleDesign
        Observed counts. A prebuilt ResampleDesign is run as is and the
        remaining arguments are ignored.
    statistic : str
        'efficacy' (1 - RR, default), 'relative_risk' (RR),
        'risk_control' or 'risk_treatment'.
    R : int
        Number of replicates. Default 1000.
    method : str
        'binomial' (default) or 'uniform' group draws.
    seed, on_error, max_skips, n_workers, backend
        See resample().

    Returns
    -------
    ResampleSolution

    Examples
    --------
    >>> obs = TrialObservation.from_counts(717, 23, 750, 19)
    >>> res = resample_trial(obs, 'efficacy', R=1000, seed=42)
    >>> res.summarize(0.90)
    """
    if isinstance(observation, ResampleDesign):
        design = observation
    else:
        design = ResampleDesign.for_trial(
            observation,
            statistic,
            R,
            method=method,
            on_error=on_error,
            max_skips=max_skips,
            n_workers=n_workers,
            seed=seed,
        )
    return _run(design, backend)

"""
Design classes for Monte Carlo resampling.

TrialArm and TrialObservation hold the observed counts of a two-arm
trial. ResampleDesign encapsulates everything a backend needs to run a
resample. All three are immutable and validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from numbers import Integral
from typing import Callable

import numpy as np

from pyrisksim.core.exceptions import DivisionUndefinedError, ValidationError
from pyrisksim.core.validation import check_count, check_positive_int
from pyrisksim.montecarlo._simulate import (
    SIM_METHODS,
    simulate_efficacy,
    simulate_relative_risk,
    simulate_risk,
)

TRIAL_STATISTICS = ("efficacy", "relative_risk", "risk_control", "risk_treatment")
ON_ERROR = ("raise", "skip")


@dataclass(frozen=True)
class TrialArm:
    """
    Observed counts for one arm.

    Attributes:
        n: Sample size, >= 1.
        positives: Subjects with a positive outcome, 0 <= positives <= n.
    """
    n: int
    positives: int

    @classmethod
    def from_counts(cls, n: int, positives: int) -> TrialArm:
        """Create a validated arm from raw counts."""
        n = check_positive_int(n, "n")
        positives = check_count(positives, n, "positives")
        return cls(n=n, positives=positives)

    @property
    def risk(self) -> float:
        """Proportion of the arm with a positive outcome."""
        return self.positives / self.n


@dataclass(frozen=True)
class TrialObservation:
    """
    Observed counts of a two-arm trial.

    The control arm is the comparator. Relative risk is
    risk_treatment / risk_control and efficacy is 1 - relative risk.
    """
    control: TrialArm
    treatment: TrialArm

    @classmethod
    def from_counts(
        cls,
        n_control: int,
        a_control: int,
        n_treatment: int,
        a_treatment: int,
    ) -> TrialObservation:
        """
        Create a validated observation from raw counts.

        Args:
            n_control: Control arm sample size, >= 1.
            a_control: Positive outcomes in the control arm.
            n_treatment: Treatment arm sample size, >= 1.
            a_treatment: Positive outcomes in the treatment arm.

        Raises:
            ValidationError: If any count is invalid.
        """
        n_control = check_positive_int(n_control, "n_control")
        a_control = check_count(a_control, n_control, "a_control")
        n_treatment = check_positive_int(n_treatment, "n_treatment")
        a_treatment = check_count(a_treatment, n_treatment, "a_treatment")
        return cls(
            control=TrialArm(n=n_control, positives=a_control),
            treatment=TrialArm(n=n_treatment, positives=a_treatment),
        )

    @property
    def risk_control(self) -> float:
        return self.control.risk

    @property
    def risk_treatment(self) -> float:
        return self.treatment.risk

    @property
    def relative_risk(self) -> float:
        """
        Observed risk_treatment / risk_control.

        Raises:
            DivisionUndefinedError: If the control arm has no positives.
        """
        if self.control.positives == 0:
            raise DivisionUndefinedError(
                "control risk is 0; relative risk is undefined",
                numerator_name="risk_treatment",
                denominator_name="risk_control",
            )
        return self.risk_treatment / self.risk_control

    @property
    def efficacy(self) -> float:
        """Observed 1 - relative risk."""
        return 1.0 - self.relative_risk


def _check_seed(seed) -> None:
    if seed is None or isinstance(seed, (np.random.Generator, np.random.SeedSequence)):
        return
    if isinstance(seed, Integral) and not isinstance(seed, bool) and seed >= 0:
        return
    raise ValidationError(
        f"seed must be None, a non-negative int, a SeedSequence or a "
        f"numpy Generator, got {seed!r}"
    )


def _check_policy(on_error: str, max_skips: int | None, R: int) -> int:
    if on_error not in ON_ERROR:
        raise ValidationError(
            f"on_error must be one of {ON_ERROR}, got {on_error!r}"
        )
    if max_skips is None:
        return 10 * R
    if isinstance(max_skips, bool) or not isinstance(max_skips, Integral) or max_skips < 0:
        raise ValidationError(
            f"max_skips must be a non-negative integer, got {max_skips!r}"
        )
    return int(max_skips)


@dataclass(frozen=True)
class ResampleDesign:
    """
    Frozen design for a resampling run.

    Attributes:
        statistic: fn(*args, rng=Generator) -> float, called once per replicate.
        args: Fixed positional parameters passed on every call.
        name: Statistic name used in results and summaries.
        kind: "risk", "relative_risk" or "efficacy" for the built-in
            trial statistics, None for a user function. Backends that
            vectorize (GPU) key off this.
        R: Number of replicates.
        method: Group draw mechanism for built-in statistics
            ("binomial" or "uniform"), None for user functions.
        on_error: "raise" aborts the run on the first DivisionUndefinedError;
            "skip" discards and redraws that replicate.
        max_skips: Redraw budget under on_error="skip".
        n_workers: Number of independent random substreams / threads.
        seed: None, int, SeedSequence or numpy Generator.
        observation: Observed counts for trial designs, else None.
    """
    statistic: Callable
    args: tuple
    name: str
    kind: str | None
    R: int
    method: str | None
    on_error: str
    max_skips: int
    n_workers: int
    seed: object
    observation: TrialObservation | None = None

    @classmethod
    def for_function(
        cls,
        statistic: Callable,
        args: tuple = (),
        R: int = 1000,
        *,
        on_error: str = "raise",
        max_skips: int | None = None,
        n_workers: int = 1,
        seed=None,
    ) -> ResampleDesign:
        """
        Create a design that resamples an arbitrary statistic function.

        Args:
            statistic: fn(*args, rng=Generator) -> float. simulate_risk,
                simulate_relative_risk, simulate_efficacy and
                simulate_trial all follow this contract.
            args: Fixed parameters, e.g. (n, p) or (n1, p1, n2, p2).
            R: Number of replicates. Must be >= 1.
            on_error: "raise" or "skip".
            max_skips: Redraw budget for on_error="skip" (default 10 * R).
            n_workers: Number of parallel substreams, >= 1.
            seed: Random seed or Generator.

        Raises:
            ValidationError: If inputs are invalid.
        """
        if not callable(statistic):
            raise ValidationError(
                f"statistic must be callable, got {type(statistic).__name__}"
            )
        R = check_positive_int(R, "R")
        n_workers = check_positive_int(n_workers, "n_workers")
        max_skips = _check_policy(on_error, max_skips, R)
        _check_seed(seed)

        name = getattr(statistic, "__name__", None)
        if name is None:
            name = getattr(getattr(statistic, "func", None), "__name__", "statistic")

        return cls(
            statistic=statistic,
            args=tuple(args),
            name=name,
            kind=None,
            R=R,
            method=None,
            on_error=on_error,
            max_skips=max_skips,
            n_workers=n_workers,
            seed=seed,
        )

    @classmethod
    def for_trial(
        cls,
        observation: TrialObservation,
        statistic: str = "efficacy",
        R: int = 1000,
        *,
        method: str = "binomial",
        on_error: str = "raise",
        max_skips: int | None = None,
        n_workers: int = 1,
        seed=None,
    ) -> ResampleDesign:
        """
        Create a design that resamples a trial statistic at the observed risks.

        The observed proportions are taken as the true probabilities of
        each arm.

        Args:
            observation: Observed counts.
            statistic: "efficacy", "relative_risk", "risk_control" or
                "risk_treatment".
            R: Number of replicates. Must be >= 1.
            method: "binomial" (default) or "uniform".
            on_error: "raise" or "skip".
            max_skips: Redraw budget for on_error="skip" (default 10 * R).
            n_workers: Number of parallel substreams, >= 1.
            seed: Random seed or Generator.

        Raises:
            ValidationError: If inputs are invalid.
        """
        if not isinstance(observation, TrialObservation):
            raise ValidationError(
                f"observation must be a TrialObservation, got "
                f"{type(observation).__name__}"
            )
        if statistic not in TRIAL_STATISTICS:
            raise ValidationError(
                f"statistic must be one of {TRIAL_STATISTICS}, got {statistic!r}"
            )
        if method not in SIM_METHODS:
            raise ValidationError(
                f"method must be one of {SIM_METHODS}, got {method!r}"
            )
        R = check_positive_int(R, "R")
        n_workers = check_positive_int(n_workers, "n_workers")
        max_skips = _check_policy(on_error, max_skips, R)
        _check_seed(seed)

        control = observation.control
        treatment = observation.treatment

        if statistic == "risk_control":
            fn, args, kind = simulate_risk, (control.n, control.risk), "risk"
        elif statistic == "risk_treatment":
            fn, args, kind = simulate_risk, (treatment.n, treatment.risk), "risk"
        else:
            fn = simulate_efficacy if statistic == "efficacy" else simulate_relative_risk
            args = (control.n, control.risk, treatment.n, treatment.risk)
            kind = statistic

        return cls(
            statistic=partial(fn, method=method),
            args=args,
            name=statistic,
            kind=kind,
            R=R,
            method=method,
            on_error=on_error,
            max_skips=max_skips,
            n_workers=n_workers,
            seed=seed,
            observation=observation,
        )

    def observed_statistic(self) -> float | None:
        """
        Statistic evaluated at the observed proportions.

        None for user functions, and for ratio statistics whose observed
        control risk is 0.
        """
        if self.observation is None:
            return None
        if self.name == "risk_control":
            return self.observation.risk_control
        if self.name == "risk_treatment":
            return self.observation.risk_treatment
        if self.observation.control.positives == 0:
            return None
        if self.name == "efficacy":
            return self.observation.efficacy
        return self.observation.relative_risk

"""
Single-draw simulators for group risk and two-arm ratio statistics.

simulate_risk draws one simulated risk for a group of n subjects with
true (or assumed) positive-outcome probability p. The two-arm simulators
compose two independent group draws into a relative risk or efficacy.

Arm 1 is the comparator (control), arm 2 the intervention (treatment):

    relative risk = risk2 / risk1
    efficacy      = 1 - risk2 / risk1

Efficacy is always the single-branch 1 - RR. There is no sign flip for
RR > 1, so a harmful intervention gives a negative efficacy.

None of these functions catch errors; ValidationError and
DivisionUndefinedError propagate to the caller.
"""

from __future__ import annotations

import numpy as np

from pyrisksim.core.exceptions import DivisionUndefinedError, ValidationError
from pyrisksim.core.validation import check_positive_int, check_probability

SIM_METHODS = ("binomial", "uniform")
RATIO_STATISTICS = ("efficacy", "relative_risk")


def _as_generator(rng) -> np.random.Generator:
    # default_rng returns a Generator unchanged and seeds anything else
    return np.random.default_rng(rng)


def simulate_risk(
    n: int,
    p: float,
    rng=None,
    *,
    method: str = "binomial",
) -> float:
    """
    Simulate the observed risk of one group.

    Args:
        n: Group sample size, >= 1.
        p: Probability of a positive outcome, in [0, 1].
        rng: numpy Generator, or anything np.random.default_rng accepts
            (int seed, SeedSequence). None draws a fresh OS-seeded stream.
        method: "binomial" draws the positive count directly from
            Binomial(n, p). "uniform" draws n uniforms in [0, 1) and counts
            those strictly below p. Both give the same distribution.

    Returns:
        Simulated risk, count / n, in [0, 1].

    Raises:
        ValidationError: If n is not a positive integer, p is outside
            [0, 1], or method is unknown.
    """
    n = check_positive_int(n, "n")
    p = check_probability(p, "p")
    gen = _as_generator(rng)

    if method == "binomial":
        count = int(gen.binomial(n, p))
    elif method == "uniform":
        count = int(np.count_nonzero(gen.random(n) < p))
    else:
        raise ValidationError(
            f"method must be one of {SIM_METHODS}, got {method!r}"
        )

    return count / n


def simulate_relative_risk(
    n1: int,
    p1: float,
    n2: int,
    p2: float,
    rng=None,
    *,
    method: str = "binomial",
) -> float:
    """
    Simulate one two-arm trial and return risk2 / risk1.

    Arm 1 is drawn before arm 2 from the same stream, so a fixed seed
    reproduces the same pair of draws.

    Raises:
        ValidationError: From either group simulation.
        DivisionUndefinedError: If the simulated risk1 is exactly 0.
    """
    gen = _as_generator(rng)
    risk1 = simulate_risk(n1, p1, gen, method=method)
    risk2 = simulate_risk(n2, p2, gen, method=method)

    if risk1 == 0.0:
        raise DivisionUndefinedError(
            f"simulated risk1 is 0 (n1={n1}, p1={p1}); "
            f"relative risk risk2/risk1 is undefined",
            numerator_name="risk2",
            denominator_name="risk1",
        )

    return risk2 / risk1


def simulate_efficacy(
    n1: int,
    p1: float,
    n2: int,
    p2: float,
    rng=None,
    *,
    method: str = "binomial",
) -> float:
    """
    Simulate one two-arm trial and return 1 - risk2 / risk1.

    Raises:
        ValidationError: From either group simulation.
        DivisionUndefinedError: If the simulated risk1 is exactly 0.
    """
    return 1.0 - simulate_relative_risk(n1, p1, n2, p2, rng, method=method)


def simulate_trial(
    n1: int,
    p1: float,
    n2: int,
    p2: float,
    rng=None,
    *,
    statistic: str = "efficacy",
    method: str = "binomial",
) -> float:
    """
    Simulate one two-arm trial and return the requested statistic.

    Args:
        n1, p1: Comparator (control) sample size and probability.
        n2, p2: Intervention (treatment) sample size and probability.
        rng: numpy Generator or seed.
        statistic: "efficacy" (1 - risk2/risk1) or "relative_risk"
            (risk2/risk1).
        method: Group draw mechanism, see simulate_risk.
    """
    if statistic == "efficacy":
        return simulate_efficacy(n1, p1, n2, p2, rng, method=method)
    if statistic == "relative_risk":
        return simulate_relative_risk(n1, p1, n2, p2, rng, method=method)
    raise ValidationError(
        f"statistic must be one of {RATIO_STATISTICS}, got {statistic!r}"
    )

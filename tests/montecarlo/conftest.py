"""
Shared fixtures for Monte Carlo tests.
"""

import pytest

from pyrisksim.montecarlo import TrialObservation


@pytest.fixture
def vaccine_trial():
    """Two-arm vaccine trial: 23/717 cases in control, 19/750 in treatment."""
    return TrialObservation.from_counts(
        n_control=717, a_control=23, n_treatment=750, a_treatment=19,
    )


@pytest.fixture
def zero_control_trial():
    """Control arm with no cases, so every ratio draw divides by zero."""
    return TrialObservation.from_counts(
        n_control=50, a_control=0, n_treatment=50, a_treatment=5,
    )


@pytest.fixture
def rare_control_trial():
    """Control risk small enough that zero draws are common (P ~ 0.13)."""
    return TrialObservation.from_counts(
        n_control=20, a_control=2, n_treatment=20, a_treatment=1,
    )

"""
Exception hierarchy for PyRiskSim.

All exceptions inherit from PyRiskSimError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyRiskSimError(Exception):
    """Base exception for all PyRiskSim errors."""
    pass


class ValidationError(PyRiskSimError):
    """
    Input validation failed.

    Raised when user-provided inputs are malformed or out of domain:
    non-positive sample sizes, probabilities outside [0, 1], confidence
    levels outside (0, 1), empty or too-short distributions.
    """
    pass


class NumericalError(PyRiskSimError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DivisionUndefinedError(NumericalError):
    """
    A ratio statistic was requested with a zero denominator.

    Raised when a (simulated or observed) group risk of exactly zero is
    used as the divisor of a relative risk or efficacy. Unlike
    ValidationError this follows from valid inputs combined with an
    unlucky random draw, so callers may choose to redraw.

    Attributes:
        numerator_name: Name of the quantity in the numerator
        denominator_name: Name of the quantity that was zero
        iteration: 0-based index of the failing replicate, if raised
            from inside a resampling run
    """

    def __init__(
        self,
        message: str,
        numerator_name: str | None = None,
        denominator_name: str | None = None,
        iteration: int | None = None,
    ):
        super().__init__(message)
        self.numerator_name = numerator_name
        self.denominator_name = denominator_name
        self.iteration = iteration

"""
Tests for PyRiskSim exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyRiskSimError)
    - DivisionUndefinedError is distinguishable from ValidationError
    - Diagnostic attributes and their defaults
"""

import pytest

from pyrisksim.core.exceptions import (
    DivisionUndefinedError,
    NumericalError,
    PyRiskSimError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyRiskSimError."""

    def test_validation_error_is_pyrisksim_error(self):
        with pytest.raises(PyRiskSimError):
            raise ValidationError("bad input")

    def test_division_undefined_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise DivisionUndefinedError("zero denominator")

    def test_division_undefined_is_not_validation_error(self):
        assert not issubclass(DivisionUndefinedError, ValidationError)
        assert not issubclass(ValidationError, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestDivisionUndefinedAttributes:

    def test_defaults_are_none(self):
        err = DivisionUndefinedError("zero")
        assert err.numerator_name is None
        assert err.denominator_name is None
        assert err.iteration is None

    def test_attributes_stored(self):
        err = DivisionUndefinedError(
            "risk1 is 0",
            numerator_name="risk2",
            denominator_name="risk1",
            iteration=17,
        )
        assert err.numerator_name == "risk2"
        assert err.denominator_name == "risk1"
        assert err.iteration == 17
        assert str(err) == "risk1 is 0"

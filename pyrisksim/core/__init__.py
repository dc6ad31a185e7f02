"""
Core infrastructure for PyRiskSim.

Shared abstractions used by the domain submodules.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Device detection and timing
"""

from pyrisksim.core.result import Result
from pyrisksim.core.exceptions import (
    PyRiskSimError,
    ValidationError,
    NumericalError,
    DivisionUndefinedError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyRiskSimError",
    "ValidationError",
    "NumericalError",
    "DivisionUndefinedError",
]

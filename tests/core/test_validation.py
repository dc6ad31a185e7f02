"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pyrisksim.core.exceptions import ValidationError
from pyrisksim.core.validation import (
    check_1d,
    check_array,
    check_conf_level,
    check_count,
    check_finite,
    check_min_samples,
    check_positive_int,
    check_probability,
)


# ═══════════════════════════════════════════════════════════════════════
# Scalars
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPositiveInt:

    def test_accepts_python_and_numpy_ints(self):
        assert check_positive_int(717, "n") == 717
        assert check_positive_int(np.int64(5), "n") == 5

    @pytest.mark.parametrize("value", [0, -3])
    def test_rejects_non_positive(self, value):
        with pytest.raises(ValidationError, match="n"):
            check_positive_int(value, "n")

    @pytest.mark.parametrize("value", [3.0, "3", True, None])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError):
            check_positive_int(value, "n")


class TestCheckCount:

    def test_bounds_inclusive(self):
        assert check_count(0, 10, "a") == 0
        assert check_count(10, 10, "a") == 10

    def test_above_upper(self):
        with pytest.raises(ValidationError, match=r"\[0, 10\]"):
            check_count(11, 10, "a")

    def test_negative(self):
        with pytest.raises(ValidationError):
            check_count(-1, 10, "a")


class TestCheckProbability:

    @pytest.mark.parametrize("p", [0, 0.0, 0.5, 1, 1.0])
    def test_valid(self, p):
        assert check_probability(p, "p") == float(p)

    @pytest.mark.parametrize("p", [-0.01, 1.01, float("nan"), float("inf")])
    def test_out_of_range(self, p):
        with pytest.raises(ValidationError):
            check_probability(p, "p")

    def test_non_number(self):
        with pytest.raises(ValidationError):
            check_probability("0.5", "p")


class TestCheckConfLevel:

    def test_valid(self):
        assert check_conf_level(0.9) == 0.9

    @pytest.mark.parametrize("c", [0.0, 1.0, -0.5, 1.5])
    def test_open_interval(self, c):
        with pytest.raises(ValidationError, match="conf_level"):
            check_conf_level(c)


# ═══════════════════════════════════════════════════════════════════════
# Arrays
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "t")
        assert result.dtype == np.float64

    def test_rejects_strings(self):
        with pytest.raises(ValidationError):
            check_array(["a", "b"], "t")

    def test_rejects_object(self):
        with pytest.raises(ValidationError):
            check_array([1, "a", None], "t")


class TestArrayChecks:

    def test_check_finite(self):
        check_finite(np.array([0.1, 0.2]), "t")
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([0.1, np.nan]), "t")

    def test_check_1d(self):
        check_1d(np.zeros(3), "t")
        with pytest.raises(ValidationError, match="1D"):
            check_1d(np.zeros((3, 2)), "t")

    def test_check_min_samples(self):
        check_min_samples(np.zeros(2), 2, "t")
        with pytest.raises(ValidationError, match="at least 2"):
            check_min_samples(np.zeros(1), 2, "t")

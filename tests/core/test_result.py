"""
Tests for the Result[P] envelope and the Timer.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - has_warning() method
    - Timer sections accumulate and require start/stop
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pyrisksim.core.compute.timing import Timer
from pyrisksim.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


class TestResultConstruction:

    def test_basic_creation(self):
        result = Result(
            params=FakeParams(value=0.21),
            info={"statistic": "efficacy"},
            timing={"total_seconds": 0.01},
            backend_name="cpu_resample",
        )
        assert result.params.value == 0.21
        assert result.info["statistic"] == "efficacy"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_resample"
        assert result.warnings == ()

    def test_frozen(self):
        result = Result(params=FakeParams(1.0), info={}, timing=None, backend_name="cpu")
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "gpu"


class TestHasWarning:

    def test_substring_match(self):
        result = Result(
            params=FakeParams(1.0),
            info={},
            timing=None,
            backend_name="cpu",
            warnings=("3 draw(s) discarded after DivisionUndefinedError and redrawn",),
        )
        assert result.has_warning("discarded")
        assert not result.has_warning("converge")


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section("replicates"):
            pass
        with timer.section("replicates"):
            pass
        timer.stop()
        out = timer.result()
        assert "total_seconds" in out
        assert "replicates" in out
        assert out["replicates"] >= 0.0

    def test_stop_before_start_raises(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop_raises(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

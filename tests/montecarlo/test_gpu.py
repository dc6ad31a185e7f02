"""
Tests for the GPU resampling backend.

Built-in trial statistics are drawn on the device; user functions fall
back to CPU. Tests verify:
1. GPU distributions agree with CPU in mean and spread
2. Fixed seeds reproduce the run on the device
3. Zero-denominator handling matches the CPU policy
4. Fallback is transparent for user functions

Skipped if no GPU (CUDA or MPS) is available.
"""

import numpy as np
import pytest

from pyrisksim.core.exceptions import DivisionUndefinedError
from pyrisksim.montecarlo import resample, resample_trial, simulate_risk


@pytest.fixture
def gpu_available():
    """Skip if no GPU is available."""
    try:
        import torch
        has_cuda = torch.cuda.is_available()
        has_mps = hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
        if not (has_cuda or has_mps):
            pytest.skip("No GPU available")
        return 'cuda' if has_cuda else 'mps'
    except ImportError:
        pytest.skip("PyTorch not installed")


class TestGPUTrial:

    def test_matches_cpu_distribution(self, gpu_available, vaccine_trial):
        cpu = resample_trial(vaccine_trial, "efficacy", R=20_000, seed=1, backend="cpu")
        gpu = resample_trial(vaccine_trial, "efficacy", R=20_000, seed=1, backend="gpu")

        assert gpu.backend_name == f"gpu_{gpu_available}_resample"
        assert gpu.t.shape == (20_000,)
        assert gpu.mean == pytest.approx(cpu.mean, abs=0.02)
        assert gpu.se == pytest.approx(cpu.se, rel=0.1)

    def test_seed_reproducibility(self, gpu_available, vaccine_trial):
        a = resample_trial(vaccine_trial, "relative_risk", R=500, seed=7, backend="gpu")
        b = resample_trial(vaccine_trial, "relative_risk", R=500, seed=7, backend="gpu")
        np.testing.assert_array_equal(a.t, b.t)

    def test_uniform_method(self, gpu_available, vaccine_trial):
        result = resample_trial(
            vaccine_trial, "risk_control", R=2000, seed=3, method="uniform", backend="gpu",
        )
        assert result.mean == pytest.approx(vaccine_trial.risk_control, abs=0.003)

    def test_zero_control_raises(self, gpu_available, zero_control_trial):
        with pytest.raises(DivisionUndefinedError) as exc_info:
            resample_trial(zero_control_trial, "efficacy", R=100, seed=1, backend="gpu")
        assert exc_info.value.iteration == 0

    def test_skip_policy(self, gpu_available, rare_control_trial):
        with pytest.warns(RuntimeWarning):
            result = resample_trial(
                rare_control_trial, "relative_risk", R=1000, seed=1,
                on_error="skip", backend="gpu",
            )
        assert np.all(np.isfinite(result.t))
        assert result.n_skipped > 0


class TestGPUFallback:

    def test_user_function_falls_back_to_cpu(self, gpu_available):
        gpu = resample(simulate_risk, 100, 0.3, R=200, seed=5, backend="gpu")
        cpu = resample(simulate_risk, 100, 0.3, R=200, seed=5, backend="cpu")
        assert "cpu_fallback" in gpu.backend_name
        np.testing.assert_array_equal(gpu.t, cpu.t)

"""
GPU backend for Monte Carlo resampling.

Built-in trial statistics (risk, relative risk, efficacy) vectorize
cleanly: all R group counts of an arm are drawn in one call and the
ratio is computed elementwise. User statistic functions are arbitrary
Python and fall back to the CPU backend.

Requires PyTorch with CUDA or MPS.
"""

from __future__ import annotations

import numpy as np

from pyrisksim.core.exceptions import DivisionUndefinedError
from pyrisksim.core.result import Result
from pyrisksim.core.compute.timing import Timer
from pyrisksim.montecarlo._common import ResampleParams
from pyrisksim.montecarlo.design import ResampleDesign

# uniform draws per batch for method="uniform"
_UNIFORM_BATCH_ELEMENTS = 1 << 22


class GPUResampleBackend:
    """
    GPU backend for resampling.

    A single torch.Generator on the device, seeded from the design's
    root stream, supplies every draw, so a fixed seed reproduces the
    run on the same device. n_workers does not apply.

    Args:
        device: 'cuda', 'mps', or 'auto'
    """

    def __init__(self, device: str = 'auto'):
        import torch

        self._torch = torch

        if device == 'auto':
            if torch.cuda.is_available():
                self._device = 'cuda'
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                self._device = 'mps'
            else:
                raise RuntimeError("No GPU available (need CUDA or MPS)")
        else:
            self._device = device

        # MPS has no float64
        self._dtype = torch.float32 if self._device == 'mps' else torch.float64

    @property
    def name(self) -> str:
        return f'gpu_{self._device}_resample'

    def solve(self, design: ResampleDesign) -> Result[ResampleParams]:
        """Vectorized resample for built-in statistics, CPU fallback otherwise."""
        if design.kind is None:
            from pyrisksim.montecarlo.backends.cpu import CPUResampleBackend
            cpu = CPUResampleBackend()
            result = cpu.solve(design)
            return Result(
                params=result.params,
                info=result.info,
                timing=result.timing,
                backend_name=self.name + " (cpu_fallback)",
                warnings=result.warnings,
            )

        torch = self._torch
        timer = Timer(sync_cuda=self._device == 'cuda')
        timer.start()

        rng = np.random.default_rng(design.seed)
        gen = torch.Generator(device=self._device)
        gen.manual_seed(int(rng.integers(0, 2**63 - 1)))

        with timer.section('observed_statistic'):
            t0 = design.observed_statistic()

        with timer.section('replicates'):
            if design.kind == "risk":
                n, p = design.args
                t_dev = self._draw_risk(n, p, design.R, design.method, gen)
                n_skipped = 0
            else:
                t_dev, n_skipped = self._draw_ratio(design, gen)

        with timer.section('transfer'):
            t = t_dev.cpu().numpy().astype(np.float64)

        t.flags.writeable = False
        timer.stop()

        warnings_list: list[str] = []
        if n_skipped:
            warnings_list.append(
                f"{n_skipped} draw(s) discarded after DivisionUndefinedError "
                f"and redrawn"
            )

        params = ResampleParams(
            t=t,
            t0=t0,
            R=design.R,
            n_skipped=n_skipped,
            statistic=design.name,
        )

        return Result(
            params=params,
            info={
                'statistic': design.name,
                'kind': design.kind,
                'method': design.method,
                'on_error': design.on_error,
                'n_workers': 1,
                'n_skipped': n_skipped,
                'device': self._device,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _draw_risk(self, n: int, p: float, size: int, method: str, gen):
        """Draw `size` simulated risks for one arm, shape (size,)."""
        torch = self._torch
        device = self._device
        dtype = self._dtype

        if method == "binomial":
            counts = torch.binomial(
                torch.full((size,), float(n), dtype=dtype, device=device),
                torch.full((size,), p, dtype=dtype, device=device),
                generator=gen,
            )
        else:
            rows = max(1, _UNIFORM_BATCH_ELEMENTS // n)
            parts = []
            for start in range(0, size, rows):
                m = min(rows, size - start)
                u = torch.rand((m, n), generator=gen, device=device, dtype=dtype)
                parts.append((u < p).sum(dim=1).to(dtype))
            counts = torch.cat(parts)

        return counts / n

    def _draw_ratio(self, design: ResampleDesign, gen):
        """
        Draw R ratio statistics.

        Replicates whose arm-1 risk is 0 are either reported (on_error
        "raise", first such index) or redrawn for both arms ("skip").
        """
        torch = self._torch
        n1, p1, n2, p2 = design.args
        R = design.R
        method = design.method

        risk1 = self._draw_risk(n1, p1, R, method, gen)
        risk2 = self._draw_risk(n2, p2, R, method, gen)

        n_skipped = 0
        zero = risk1 == 0
        while bool(zero.any()):
            idx = torch.nonzero(zero).flatten()
            first = int(idx[0].item())
            if design.on_error == "raise":
                raise DivisionUndefinedError(
                    f"simulated risk1 is 0 (n1={n1}, p1={p1}); "
                    f"relative risk risk2/risk1 is undefined",
                    numerator_name="risk2",
                    denominator_name="risk1",
                    iteration=first,
                )
            n_skipped += int(idx.numel())
            if n_skipped > design.max_skips:
                raise DivisionUndefinedError(
                    f"gave up after {n_skipped} undefined draws "
                    f"(max_skips={design.max_skips})",
                    numerator_name="risk2",
                    denominator_name="risk1",
                    iteration=first,
                )
            k = int(idx.numel())
            risk1[idx] = self._draw_risk(n1, p1, k, method, gen)
            risk2[idx] = self._draw_risk(n2, p2, k, method, gen)
            zero = risk1 == 0

        ratio = risk2 / risk1
        if design.kind == "efficacy":
            return 1.0 - ratio, n_skipped
        return ratio, n_skipped

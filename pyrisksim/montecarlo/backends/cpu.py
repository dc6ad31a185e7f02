"""
CPU backend for Monte Carlo resampling.

CPUResampleBackend calls the design's statistic R times with the same
fixed parameters and collects the results. With n_workers > 1 the root
generator is split into independent child streams (Generator.spawn),
R is cut into contiguous chunks and each chunk runs on its own stream
in a thread pool.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import NDArray

from pyrisksim.core.exceptions import DivisionUndefinedError
from pyrisksim.core.result import Result
from pyrisksim.core.compute.timing import Timer
from pyrisksim.montecarlo._common import ResampleParams
from pyrisksim.montecarlo.design import ResampleDesign


def _chunk_bounds(R: int, n_chunks: int) -> list[tuple[int, int]]:
    """Contiguous [start, stop) slices covering range(R), sizes differ by at most 1."""
    base, extra = divmod(R, n_chunks)
    bounds = []
    start = 0
    for i in range(n_chunks):
        stop = start + base + (1 if i < extra else 0)
        bounds.append((start, stop))
        start = stop
    return bounds


class CPUResampleBackend:
    """
    CPU backend for resampling.

    Failure policy follows design.on_error: "raise" aborts on the first
    DivisionUndefinedError, "skip" discards the draw and redraws until
    R values are collected or the skip budget runs out.
    """

    @property
    def name(self) -> str:
        return 'cpu_resample'

    def solve(self, design: ResampleDesign) -> Result[ResampleParams]:
        """Run the resample and return Result[ResampleParams]."""
        timer = Timer()
        timer.start()

        R = design.R
        rng = np.random.default_rng(design.seed)

        with timer.section('observed_statistic'):
            t0 = design.observed_statistic()

        t = np.empty(R, dtype=np.float64)
        n_chunks = min(design.n_workers, R)

        with timer.section('replicates'):
            if n_chunks == 1:
                n_skipped = self._fill(design, t, rng, 0, design.max_skips)
            else:
                n_skipped = self._fill_parallel(design, t, rng, n_chunks)

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
            R=R,
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
                'n_workers': n_chunks,
                'n_skipped': n_skipped,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _fill(
        self,
        design: ResampleDesign,
        out: NDArray,
        rng: np.random.Generator,
        offset: int,
        max_skips: int,
    ) -> int:
        """
        Fill out[:] with replicates drawn from rng.

        offset is the position of out[0] in the full distribution, used
        to report the failing iteration. Returns the number of skipped draws.
        """
        statistic = design.statistic
        args = design.args
        n_skipped = 0
        b = 0

        while b < len(out):
            try:
                out[b] = statistic(*args, rng=rng)
            except DivisionUndefinedError as e:
                if design.on_error == "raise":
                    e.iteration = offset + b
                    raise
                n_skipped += 1
                if n_skipped > max_skips:
                    raise DivisionUndefinedError(
                        f"gave up after {n_skipped} undefined draws "
                        f"(max_skips={max_skips}) at iteration {offset + b}: {e}",
                        numerator_name=e.numerator_name,
                        denominator_name=e.denominator_name,
                        iteration=offset + b,
                    ) from e
                continue
            b += 1

        return n_skipped

    def _fill_parallel(
        self,
        design: ResampleDesign,
        t: NDArray,
        rng: np.random.Generator,
        n_chunks: int,
    ) -> int:
        """
        Fill t across n_chunks threads, one child stream per chunk.

        Each chunk writes to its own slice of t, so arrival order does not
        matter. Errors are re-raised in chunk order: the lowest-numbered
        failing chunk wins, whatever finished first.
        """
        streams = rng.spawn(n_chunks)
        bounds = _chunk_bounds(design.R, n_chunks)

        with ThreadPoolExecutor(max_workers=n_chunks) as executor:
            futures = [
                executor.submit(
                    self._fill,
                    design,
                    t[start:stop],
                    stream,
                    start,
                    # skip budget shared out in proportion to chunk size
                    -(-design.max_skips * (stop - start) // design.R),
                )
                for (start, stop), stream in zip(bounds, streams)
            ]

        n_skipped = 0
        for future in futures:
            n_skipped += future.result()
        return n_skipped

"""
Generic result container for PyRiskSim computations.

Every backend returns a Result[P]: a domain-specific parameter payload
plus the metadata needed to reproduce and diagnose a run.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (replicates, skipped draws, workers)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for resampling computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (distribution, observed statistic)
        info: Structured metadata (method, workers, skipped draws)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=ResampleParams(t=t, t0=0.21, R=1000, ...),
        ...     info={'method': 'binomial', 'n_workers': 1},
        ...     timing={'total_seconds': 0.01, 'replicates': 0.009},
        ...     backend_name='cpu_resample'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

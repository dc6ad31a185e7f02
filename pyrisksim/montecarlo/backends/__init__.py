"""
Resampling backends.

Available backends:
    CPUResampleBackend: CPU reference implementation, optional thread substreams
    GPUResampleBackend: PyTorch implementation for built-in statistics
        (imported lazily, needs torch)
"""

from pyrisksim.montecarlo.backends.cpu import CPUResampleBackend

__all__ = [
    "CPUResampleBackend",
]

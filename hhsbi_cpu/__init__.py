"""
CPU Backend - NumPy reference and Numba-compiled HH simulators.

The Numba backend lives in hhsbi_cpu.numba_kernels and is imported on
demand, so the reference backend does not pay Numba's import cost.
"""

from .vectorized import VectorizedSimulator

__all__ = [
    'VectorizedSimulator'
]

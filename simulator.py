"""
Unified Simulator Interface for the HH model with slow K+ adaptation.

This module provides the single entry point used by inference code:
simulate() runs one parameter set and returns the voltage trace.
"""

import numpy as np
from typing import Optional, Sequence

from hhsbi_core.api import BaseSimulator, ParametersLike
from hhsbi_core.errors import InvalidArgumentError
from hhsbi_core.models import HHParameters, HHConstants
from hhsbi_core.utils import Stimulus


def Simulator(params: ParametersLike,
              constants: Optional[HHConstants] = None,
              backend: str = 'numpy') -> BaseSimulator:
    """
    Create an HH simulator with the specified backend.

    This is a factory function that returns the appropriate simulator
    implementation based on the backend selection.

    Args:
        params: HHParameters or ordered 8-element parameter vector
        constants: Physical constants (defaults if None)
        backend: 'numpy' (step-by-step reference) or 'numba' (compiled kernel)

    Returns:
        Simulator instance (VectorizedSimulator or NumbaSimulator)

    Examples:
        >>> sim = Simulator([50, 5, 0.07, 0.1, 600, -60, -70, 1], backend='numba')
        >>> V = sim.run(seed=0, V0=-70.0, I=np.zeros(1000), dt=0.1, tfin=100.0)
    """
    backend = backend.lower()

    if backend == 'numpy':
        from hhsbi_cpu import VectorizedSimulator
        return VectorizedSimulator(params, constants)

    elif backend == 'numba':
        from hhsbi_cpu.numba_kernels import NumbaSimulator
        return NumbaSimulator(params, constants)

    else:
        raise InvalidArgumentError(
            f"Unknown backend: '{backend}'. "
            f"Valid options are 'numpy' or 'numba'."
        )


def simulate(parameters: ParametersLike,
             seed: int,
             V0: float,
             I: Sequence[float],
             dt: float,
             tfin: float,
             constants: Optional[HHConstants] = None,
             backend: str = 'numpy') -> np.ndarray:
    """
    Simulate one voltage trace.

    Args:
        parameters: [gbar_Na, gbar_K, gbar_M, g_leak, tau_max, Vt, E_leak,
            rate_to_SS_factor] or HHParameters
        seed: Non-negative integer seed of the voltage noise
        V0: Initial membrane potential (mV)
        I: Injected current (uA/cm^2), at least floor(tfin / dt) samples
        dt: Time step (ms)
        tfin: Total duration (ms)
        constants: Physical constants (defaults if None)
        backend: 'numpy' or 'numba'

    Returns:
        Voltage trace (mV) of length floor(tfin / dt), V[0] == V0

    Raises:
        InvalidArgumentError: for invalid dt, tfin, seed, parameter vector,
            or a current trace shorter than the output
    """
    sim = Simulator(parameters, constants=constants, backend=backend)
    return sim.run(seed, V0, I, dt, tfin)


# Re-export core classes for convenience
__all__ = [
    'Simulator',
    'simulate',
    'HHParameters',
    'HHConstants',
    'Stimulus',
]

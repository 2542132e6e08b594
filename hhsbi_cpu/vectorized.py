"""
NumPy reference backend.

Drives the ExponentialEuler integrator one step at a time. Slow for long
traces but shares its kinetics with hhsbi_core, so it serves as the
reference the compiled kernel is checked against.
"""

import numpy as np
from typing import Optional

from hhsbi_core.api import BaseSimulator, ParametersLike
from hhsbi_core.integrators import ExponentialEuler
from hhsbi_core.models import HHConstants, HHState


class VectorizedSimulator(BaseSimulator):
    """Step-by-step simulator built on NumPy kinetics."""

    def __init__(self,
                 params: ParametersLike,
                 constants: Optional[HHConstants] = None):
        super().__init__(params, constants)
        self.integrator = ExponentialEuler(self.params, self.constants)

    def _integrate(self, V0: float, I_ext: np.ndarray, noise: np.ndarray,
                   dt: float, n_steps: int) -> np.ndarray:
        V = np.empty(n_steps, dtype=np.float64)
        V[0] = V0

        # Non-finite values propagate; BaseSimulator reports them once.
        with np.errstate(all='ignore'):
            state = HHState.steady_state(V0, self.params)
            for i in range(1, n_steps):
                state = self.integrator.step(state, dt, I_ext[i - 1], noise[i - 1])
                V[i] = state.V

        return V

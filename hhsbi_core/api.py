"""
Backend-independent simulator interface.

BaseSimulator validates the call, draws the noise sequence and allocates
nothing that outlives the call. Backends only implement the step loop.
"""

import numbers
import warnings
import numpy as np
from typing import Optional, Sequence, Union

from .errors import InvalidArgumentError, NumericDegeneracyWarning
from .models import HHParameters, HHConstants


ParametersLike = Union[HHParameters, Sequence[float], np.ndarray]


def as_parameters(parameters: ParametersLike) -> HHParameters:
    """Coerce an 8-element vector (or HHParameters) to HHParameters."""
    if isinstance(parameters, HHParameters):
        return parameters
    return HHParameters.from_array(parameters)


def n_output_steps(dt: float, tfin: float) -> int:
    """
    Number of output samples, floor(tfin / dt).

    Raises:
        InvalidArgumentError: for non-positive or non-finite dt/tfin, or a
            duration shorter than one step.
    """
    if not np.isfinite(dt) or dt <= 0:
        raise InvalidArgumentError(f"dt must be positive and finite, got {dt}")
    if not np.isfinite(tfin) or tfin <= 0:
        raise InvalidArgumentError(f"tfin must be positive and finite, got {tfin}")

    n_steps = int(np.floor(tfin / dt))
    if n_steps < 1:
        raise InvalidArgumentError(
            f"tfin ({tfin} ms) is shorter than one step (dt = {dt} ms)"
        )
    return n_steps


class BaseSimulator:
    """
    Single-trace simulator.

    Holds an immutable parameter snapshot and constants; every run() builds
    its own random generator from the seed, so instances can be shared
    across threads.
    """

    def __init__(self,
                 params: ParametersLike,
                 constants: Optional[HHConstants] = None):
        """
        Args:
            params: HHParameters or ordered 8-element parameter vector
            constants: Physical constants (defaults if None)
        """
        self.params = as_parameters(params)
        self.constants = constants if constants is not None else HHConstants()

    def run(self,
            seed: int,
            V0: float,
            I: Sequence[float],
            dt: float,
            tfin: float) -> np.ndarray:
        """
        Run one simulation.

        Args:
            seed: Non-negative integer seed of the voltage noise
            V0: Initial membrane potential (mV)
            I: Injected current, one value per step (uA/cm^2)
            dt: Time step (ms)
            tfin: Total duration (ms)

        Returns:
            Voltage trace of length floor(tfin / dt)
        """
        n_steps = n_output_steps(dt, tfin)

        if isinstance(seed, bool) or not isinstance(seed, numbers.Integral) or seed < 0:
            raise InvalidArgumentError(f"seed must be a non-negative integer, got {seed!r}")
        if not np.isfinite(V0):
            raise InvalidArgumentError(f"V0 must be finite, got {V0}")

        I_ext = np.asarray(I, dtype=np.float64)
        if I_ext.ndim != 1:
            raise InvalidArgumentError(f"I must be 1-D, got shape {I_ext.shape}")
        if I_ext.shape[0] < n_steps:
            raise InvalidArgumentError(
                f"I has {I_ext.shape[0]} samples but floor(tfin / dt) = {n_steps}"
            )

        if dt > 0.1:
            warnings.warn(f"Large dt ({dt} ms) reduces accuracy of the exponential "
                          f"Euler scheme. Recommended: dt <= 0.1 ms.")

        rng = np.random.default_rng(int(seed))
        noise = rng.standard_normal(n_steps - 1)

        V = self._integrate(float(V0), I_ext[:n_steps], noise, float(dt), n_steps)

        if not np.all(np.isfinite(V)):
            warnings.warn(
                f"Voltage trace contains non-finite values for parameters "
                f"{self.params.to_dict()}",
                NumericDegeneracyWarning
            )
        return V

    def _integrate(self, V0: float, I_ext: np.ndarray, noise: np.ndarray,
                   dt: float, n_steps: int) -> np.ndarray:
        """
        Step loop.

        Args:
            V0: Initial voltage
            I_ext: Current, exactly n_steps samples
            noise: Standard-normal draws, n_steps - 1 samples (one per step)
            dt: Time step
            n_steps: Output length

        Returns:
            Voltage array of length n_steps
        """
        raise NotImplementedError

"""
HH model with slow K+ adaptation: parameters, constants, state and gating kinetics.

Kinetics follow the Pospischil et al. (2008) parameterization of the
Hodgkin-Huxley formalism, with an M-type (slow, non-inactivating) potassium
channel for spike-frequency adaptation.
"""

import numpy as np
from typing import Dict, Sequence, Tuple
from dataclasses import dataclass, fields, asdict

from .errors import InvalidArgumentError


@dataclass(frozen=True)
class HHParameters:
    """
    Inference parameters of the model, in vector order.

    Values are not bounded here; callers (priors) decide what is sensible.
    """
    # Maximal conductances (mS/cm^2)
    gbar_Na: float = 50.0
    gbar_K: float = 5.0
    gbar_M: float = 0.07
    g_leak: float = 0.1

    # Adaptation time-constant scale (ms)
    tau_max: float = 600.0

    # Threshold voltage shifting all fast channels, leak reversal (mV)
    Vt: float = -60.0
    E_leak: float = -70.0

    # Global scaling of the fast gating time constants
    rate_to_SS_factor: float = 1.0

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        """Parameter names in vector order."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_array(cls, values: Sequence[float]) -> 'HHParameters':
        """Create parameters from an ordered 8-element vector."""
        arr = np.asarray(values, dtype=np.float64)
        if arr.ndim != 1 or arr.shape[0] != len(fields(cls)):
            raise InvalidArgumentError(
                f"Expected {len(fields(cls))} parameters, got shape {arr.shape}"
            )
        return cls(*(float(v) for v in arr))

    def to_array(self) -> np.ndarray:
        """Convert parameters to an ordered float64 vector."""
        return np.array([getattr(self, name) for name in self.names()],
                        dtype=np.float64)

    def to_dict(self) -> Dict[str, float]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> 'HHParameters':
        """Create parameters from dictionary."""
        return cls(**d)


@dataclass(frozen=True)
class HHConstants:
    """
    Fixed physical constants. Not inferred.

    The experiment was run at T_2 = 34 C while the kinetics are given for
    T_1 = 36 C; every gating time constant is rescaled by a Q10 factor.
    """
    # Voltage noise amplitude (uA/cm^2)
    noise_factor: float = 0.1

    # Membrane capacitance (uF/cm^2)
    C_m: float = 1.0

    # Reversal potentials (mV)
    E_Na: float = 53.0
    E_K: float = -90.0

    # Temperature
    Q10: float = 3.0
    T_1: float = 36.0
    T_2: float = 34.0

    @property
    def T_adj_factor(self) -> float:
        """Q10 temperature adjustment applied to all gating time constants."""
        return self.Q10 ** ((self.T_2 - self.T_1) / 10.0)

    def to_dict(self) -> Dict[str, float]:
        """Convert constants to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> 'HHConstants':
        """Create constants from dictionary."""
        return cls(**d)


@dataclass
class HHState:
    """
    State variables of the model.

    Layout: (5,) array [V, m, h, n, p]
    """
    data: np.ndarray

    @property
    def V(self) -> np.ndarray:
        """Membrane potential (mV)."""
        return self.data[..., 0]

    @property
    def m(self) -> np.ndarray:
        """Sodium activation gating variable."""
        return self.data[..., 1]

    @property
    def h(self) -> np.ndarray:
        """Sodium inactivation gating variable."""
        return self.data[..., 2]

    @property
    def n(self) -> np.ndarray:
        """Potassium activation gating variable."""
        return self.data[..., 3]

    @property
    def p(self) -> np.ndarray:
        """Slow (M-type) potassium activation gating variable."""
        return self.data[..., 4]

    @V.setter
    def V(self, value):
        self.data[..., 0] = value

    @m.setter
    def m(self, value):
        self.data[..., 1] = value

    @h.setter
    def h(self, value):
        self.data[..., 2] = value

    @n.setter
    def n(self, value):
        self.data[..., 3] = value

    @p.setter
    def p(self, value):
        self.data[..., 4] = value

    @staticmethod
    def steady_state(V0: float, params: HHParameters) -> 'HHState':
        """
        Create initial state at voltage V0.

        Gating variables start at their steady-state values at V0.
        """
        m_inf, h_inf, n_inf, p_inf = gating_steady_states(V0, params)
        data = np.array([V0, m_inf, h_inf, n_inf, p_inf], dtype=np.float64)
        return HHState(data)


def efun(z):
    """
    Numerically stable z / (exp(z) - 1).

    Uses the first-order Taylor expansion 1 - z/2 for |z| < 1e-4, where the
    direct form divides by a vanishing denominator.
    """
    z = np.asarray(z, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        direct = z / (np.exp(z) - 1.0)
    result = np.where(np.abs(z) < 1e-4, 1.0 - z / 2.0, direct)
    return result[()] if result.ndim == 0 else result


# Rate functions (alpha and beta), shifted by the threshold voltage Vt

def alpha_m_func(V, Vt: float):
    """Sodium activation rate (m gate)."""
    v1 = V - Vt - 13.0
    return 0.32 * efun(-0.25 * v1) / 0.25


def beta_m_func(V, Vt: float):
    """Sodium activation rate (m gate)."""
    v1 = V - Vt - 40.0
    return 0.28 * efun(0.2 * v1) / 0.2


def alpha_h_func(V, Vt: float):
    """Sodium inactivation rate (h gate)."""
    v1 = V - Vt - 17.0
    return 0.128 * np.exp(-v1 / 18.0)


def beta_h_func(V, Vt: float):
    """Sodium inactivation rate (h gate)."""
    v1 = V - Vt - 40.0
    return 4.0 / (1.0 + np.exp(-0.2 * v1))


def alpha_n_func(V, Vt: float):
    """Potassium activation rate (n gate)."""
    v1 = V - Vt - 15.0
    return 0.032 * efun(-0.2 * v1) / 0.2


def beta_n_func(V, Vt: float):
    """Potassium activation rate (n gate)."""
    v1 = V - Vt - 10.0
    return 0.5 * np.exp(-v1 / 40.0)


# Steady states and time constants.
# tau_x divides by alpha_x + beta_x, which is not guarded against zero.

def m_inf_func(V, Vt: float):
    a, b = alpha_m_func(V, Vt), beta_m_func(V, Vt)
    return a / (a + b)


def tau_m_func(V, Vt: float, rate_to_SS_factor: float):
    return rate_to_SS_factor / (alpha_m_func(V, Vt) + beta_m_func(V, Vt))


def h_inf_func(V, Vt: float):
    a, b = alpha_h_func(V, Vt), beta_h_func(V, Vt)
    return a / (a + b)


def tau_h_func(V, Vt: float, rate_to_SS_factor: float):
    return rate_to_SS_factor / (alpha_h_func(V, Vt) + beta_h_func(V, Vt))


def n_inf_func(V, Vt: float):
    a, b = alpha_n_func(V, Vt), beta_n_func(V, Vt)
    return a / (a + b)


def tau_n_func(V, Vt: float, rate_to_SS_factor: float):
    return rate_to_SS_factor / (alpha_n_func(V, Vt) + beta_n_func(V, Vt))


def p_inf_func(V):
    """Slow K+ activation steady state (Vt-independent)."""
    v1 = V + 35.0
    return 1.0 / (1.0 + np.exp(-0.1 * v1))


def tau_p_func(V, tau_max: float):
    """Slow K+ time constant, peaking near -35 mV at about tau_max / 2."""
    v1 = V + 35.0
    return tau_max / (3.3 * np.exp(0.05 * v1) + np.exp(-0.05 * v1))


def gating_steady_states(V, params: HHParameters):
    """Return (m_inf, h_inf, n_inf, p_inf) at voltage V."""
    return (
        m_inf_func(V, params.Vt),
        h_inf_func(V, params.Vt),
        n_inf_func(V, params.Vt),
        p_inf_func(V),
    )


def gating_time_constants(V, params: HHParameters):
    """Return (tau_m, tau_h, tau_n, tau_p) at voltage V, before Q10 scaling."""
    return (
        tau_m_func(V, params.Vt, params.rate_to_SS_factor),
        tau_h_func(V, params.Vt, params.rate_to_SS_factor),
        tau_n_func(V, params.Vt, params.rate_to_SS_factor),
        tau_p_func(V, params.tau_max),
    )

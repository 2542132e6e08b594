"""
Numba-accelerated kernels for HH simulation.

Scalar re-implementation of hhsbi_core.models kinetics and the exponential
Euler loop, compiled with Numba. Meant for the SBI use case of many long
single-neuron traces, where the per-step Python overhead of the reference
backend dominates.

Kernels use error_model='numpy' so that division by zero yields inf/nan
instead of raising ZeroDivisionError.
"""

import numpy as np
from numba import njit

from hhsbi_core.api import BaseSimulator


@njit(error_model='numpy')
def efun(z):
    """z / (exp(z) - 1), Taylor expanded near 0."""
    if abs(z) < 1e-4:
        return 1.0 - z / 2.0
    return z / (np.exp(z) - 1.0)


@njit(error_model='numpy')
def alpha_m(V, Vt):
    """Sodium activation rate (m gate)."""
    v1 = V - Vt - 13.0
    return 0.32 * efun(-0.25 * v1) / 0.25


@njit(error_model='numpy')
def beta_m(V, Vt):
    """Sodium activation rate (m gate)."""
    v1 = V - Vt - 40.0
    return 0.28 * efun(0.2 * v1) / 0.2


@njit(error_model='numpy')
def alpha_h(V, Vt):
    """Sodium inactivation rate (h gate)."""
    v1 = V - Vt - 17.0
    return 0.128 * np.exp(-v1 / 18.0)


@njit(error_model='numpy')
def beta_h(V, Vt):
    """Sodium inactivation rate (h gate)."""
    v1 = V - Vt - 40.0
    return 4.0 / (1.0 + np.exp(-0.2 * v1))


@njit(error_model='numpy')
def alpha_n(V, Vt):
    """Potassium activation rate (n gate)."""
    v1 = V - Vt - 15.0
    return 0.032 * efun(-0.2 * v1) / 0.2


@njit(error_model='numpy')
def beta_n(V, Vt):
    """Potassium activation rate (n gate)."""
    v1 = V - Vt - 10.0
    return 0.5 * np.exp(-v1 / 40.0)


@njit(error_model='numpy')
def p_inf(V):
    v1 = V + 35.0
    return 1.0 / (1.0 + np.exp(-0.1 * v1))


@njit(error_model='numpy')
def tau_p(V, tau_max):
    v1 = V + 35.0
    return tau_max / (3.3 * np.exp(0.05 * v1) + np.exp(-0.05 * v1))


@njit(error_model='numpy')
def relax_gate(x, a, b, dt_adj, rate_to_SS_factor):
    """
    Exponential relaxation of gate x with rates a, b.

    x_inf = a / (a + b), tau = rate_to_SS_factor / (a + b),
    dt_adj = dt * T_adj_factor.
    """
    x_inf = a / (a + b)
    tau = rate_to_SS_factor / (a + b)
    return x_inf + (x - x_inf) * np.exp(-dt_adj / tau)


@njit(error_model='numpy')
def simulate_single_neuron(V0, I_ext_array, noise, dt, n_steps,
                           gbar_Na, gbar_K, gbar_M, g_leak, tau_max,
                           Vt, E_leak, rate_to_SS_factor,
                           noise_factor, C_m, E_Na, E_K, T_adj_factor):
    """
    Simulate single neuron with Numba acceleration.

    Args:
        V0: Initial voltage
        I_ext_array: External current at each time step
        noise: Standard-normal draws, one per step (n_steps - 1)
        dt: Time step
        n_steps: Number of output samples
        gbar_Na ... rate_to_SS_factor: Model parameters
        noise_factor, C_m, E_Na, E_K, T_adj_factor: Physical constants

    Returns:
        Voltage array of length n_steps
    """
    V_out = np.empty(n_steps)
    V_out[0] = V0

    # Gates at steady state at V0
    V = V0
    a, b = alpha_m(V, Vt), beta_m(V, Vt)
    m = a / (a + b)
    a, b = alpha_h(V, Vt), beta_h(V, Vt)
    h = a / (a + b)
    a, b = alpha_n(V, Vt), beta_n(V, Vt)
    n = a / (a + b)
    p = p_inf(V)

    dt_adj = dt * T_adj_factor
    noise_scale = noise_factor / np.sqrt(dt)

    for i in range(1, n_steps):
        g_Na = m ** 3 * gbar_Na * h
        g_K = n ** 4 * gbar_K
        g_M = gbar_M * p

        tau_V_inv = (g_Na + g_K + g_leak + g_M) / C_m
        V_inf = (
            g_Na * E_Na
            + g_K * E_K
            + g_leak * E_leak
            + g_M * E_K
            + I_ext_array[i - 1]
            + noise_scale * noise[i - 1]
        ) / (tau_V_inv * C_m)
        V = V_inf + (V - V_inf) * np.exp(-dt * tau_V_inv)
        V_out[i] = V

        # Gates follow the new voltage
        m = relax_gate(m, alpha_m(V, Vt), beta_m(V, Vt), dt_adj, rate_to_SS_factor)
        h = relax_gate(h, alpha_h(V, Vt), beta_h(V, Vt), dt_adj, rate_to_SS_factor)
        n = relax_gate(n, alpha_n(V, Vt), beta_n(V, Vt), dt_adj, rate_to_SS_factor)
        p_ss = p_inf(V)
        p = p_ss + (p - p_ss) * np.exp(-dt_adj / tau_p(V, tau_max))

    return V_out


class NumbaSimulator(BaseSimulator):
    """
    Simulator using Numba-accelerated kernels.

    The first run() in a process triggers compilation.
    """

    def _integrate(self, V0: float, I_ext: np.ndarray, noise: np.ndarray,
                   dt: float, n_steps: int) -> np.ndarray:
        p, c = self.params, self.constants
        return simulate_single_neuron(
            V0, np.ascontiguousarray(I_ext), noise, dt, n_steps,
            p.gbar_Na, p.gbar_K, p.gbar_M, p.g_leak, p.tau_max,
            p.Vt, p.E_leak, p.rate_to_SS_factor,
            c.noise_factor, c.C_m, c.E_Na, c.E_K, c.T_adj_factor
        )

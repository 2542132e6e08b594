"""
Exponential Euler integration of the HH equations with slow K+ adaptation.
"""

import numpy as np
from .models import (
    HHState, HHParameters, HHConstants,
    gating_steady_states, gating_time_constants
)


class IntegratorBase:
    """Base class for one-step integrators."""

    def __init__(self, params: HHParameters, constants: HHConstants):
        self.params = params
        self.constants = constants

    def step(self, state: HHState, dt: float, I_ext: float, noise: float) -> HHState:
        """
        Advance state by one time step.

        Args:
            state: Current state
            dt: Time step (ms)
            I_ext: External current for this step (uA/cm^2)
            noise: Standard-normal draw for this step

        Returns:
            New state
        """
        raise NotImplementedError


class ExponentialEuler(IntegratorBase):
    """
    Exponential Euler step for voltage and gating variables.

    With conductances frozen at the previous step, dV/dt is linear in V and
    is solved exactly over dt:
        V(t+dt) = V_inf + (V(t) - V_inf) * exp(-dt * tau_V_inv)
    Each gate x is then relaxed towards x_inf at the *new* voltage:
        x(t+dt) = x_inf + (x(t) - x_inf) * exp(-dt * T_adj / tau_x)

    Voltage uses old gates, gates use the new voltage. Keep this order.
    """

    def __init__(self, params: HHParameters, constants: HHConstants):
        super().__init__(params, constants)
        self.T_adj_factor = constants.T_adj_factor

    def voltage_step(self, state: HHState, dt: float, I_ext: float, noise: float):
        """Return V at t+dt given the state at t."""
        p, c = self.params, self.constants

        g_Na = state.m ** 3 * p.gbar_Na * state.h
        g_K = state.n ** 4 * p.gbar_K
        g_M = p.gbar_M * state.p

        tau_V_inv = (g_Na + g_K + p.g_leak + g_M) / c.C_m
        V_inf = (
            g_Na * c.E_Na
            + g_K * c.E_K
            + p.g_leak * p.E_leak
            + g_M * c.E_K
            + I_ext
            + c.noise_factor * noise / np.sqrt(dt)
        ) / (tau_V_inv * c.C_m)

        return V_inf + (state.V - V_inf) * np.exp(-dt * tau_V_inv)

    def step(self, state: HHState, dt: float, I_ext: float, noise: float) -> HHState:
        V_new = self.voltage_step(state, dt, I_ext, noise)

        x_inf = gating_steady_states(V_new, self.params)
        tau_x = gating_time_constants(V_new, self.params)
        gates = (state.m, state.h, state.n, state.p)

        new_state = HHState(np.empty_like(state.data))
        new_state.V = V_new
        new_state.m, new_state.h, new_state.n, new_state.p = (
            inf + (x - inf) * np.exp(-dt * self.T_adj_factor / tau)
            for x, inf, tau in zip(gates, x_inf, tau_x)
        )
        return new_state

"""
HH SBI Core - Model kinetics and exponential Euler integration for the
Hodgkin-Huxley neuron with slow K+ adaptation.
"""

from .errors import (
    HHSimulatorError,
    InvalidArgumentError,
    NumericDegeneracyWarning
)

from .models import (
    HHParameters,
    HHConstants,
    HHState,
    efun,
    alpha_m_func,
    alpha_h_func,
    alpha_n_func,
    beta_m_func,
    beta_h_func,
    beta_n_func,
    m_inf_func,
    h_inf_func,
    n_inf_func,
    p_inf_func,
    tau_m_func,
    tau_h_func,
    tau_n_func,
    tau_p_func,
    gating_steady_states,
    gating_time_constants
)

from .integrators import (
    IntegratorBase,
    ExponentialEuler
)

from .utils import (
    Stimulus,
    detect_spikes,
    spike_times,
    compute_spike_statistics,
    compute_firing_rate
)

from .api import (
    BaseSimulator,
    as_parameters,
    n_output_steps
)

__all__ = [
    # Errors
    'HHSimulatorError',
    'InvalidArgumentError',
    'NumericDegeneracyWarning',

    # Models
    'HHParameters',
    'HHConstants',
    'HHState',
    'efun',
    'alpha_m_func',
    'alpha_h_func',
    'alpha_n_func',
    'beta_m_func',
    'beta_h_func',
    'beta_n_func',
    'm_inf_func',
    'h_inf_func',
    'n_inf_func',
    'p_inf_func',
    'tau_m_func',
    'tau_h_func',
    'tau_n_func',
    'tau_p_func',
    'gating_steady_states',
    'gating_time_constants',

    # Integrators
    'IntegratorBase',
    'ExponentialEuler',

    # Utils
    'Stimulus',
    'detect_spikes',
    'spike_times',
    'compute_spike_statistics',
    'compute_firing_rate',

    # API
    'BaseSimulator',
    'as_parameters',
    'n_output_steps',
]

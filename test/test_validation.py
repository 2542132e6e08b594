"""
Pytest-based validation tests for physiological behavior of the simulator.

Run with: pytest test/
"""

import numpy as np
import pytest

# Try to import scipy for root finding
try:
    from scipy.optimize import brentq
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False

from hhsbi_core import (
    HHParameters, HHConstants, Stimulus, gating_steady_states,
    detect_spikes, spike_times, compute_spike_statistics
)
from simulator import simulate


def membrane_current(V, params: HHParameters, constants: HHConstants):
    """Total ionic current with all gates at steady state at V."""
    m, h, n, p = gating_steady_states(V, params)
    return (
        params.gbar_Na * m ** 3 * h * (V - constants.E_Na)
        + params.gbar_K * n ** 4 * (V - constants.E_K)
        + params.gbar_M * p * (V - constants.E_K)
        + params.g_leak * (V - params.E_leak)
    )


@pytest.mark.physiological
class TestRestingBehavior:
    """Tests at zero injected current."""

    def test_leak_dominated_example(self, quiet_params, zero_current, no_noise):
        """Leak-dominated cell without adaptation stays near -65 mV."""
        V = simulate(quiet_params, 0, -65.0, zero_current, 0.1, 50.0, constants=no_noise)

        assert len(V) == 500
        assert V[0] == -65.0
        assert np.all(np.abs(V + 65.0) < 0.5)

    def test_leak_dominated_example_with_noise(self, backend, quiet_params, zero_current):
        V = simulate(quiet_params, 0, -65.0, zero_current, 0.1, 50.0, backend=backend)

        assert len(V) == 500
        assert V[0] == -65.0
        assert np.all(np.abs(V + 65.0) < 3.0)
        assert np.std(V) > 0

    def test_pure_leak_is_fixed_point(self, backend, zero_current, no_noise):
        params = [0.0, 0.0, 0.0, 0.1, 100.0, -60.0, -72.5, 1.0]
        V = simulate(params, 0, -72.5, zero_current, 0.1, 50.0,
                     constants=no_noise, backend=backend)
        np.testing.assert_allclose(V, -72.5, rtol=0, atol=1e-12)

    @pytest.mark.skipif(not SCIPY_AVAILABLE, reason="SciPy not available")
    def test_resting_potential_is_fixed_point(self, backend, spiking_params,
                                              zero_current, no_noise):
        """At the zero-current potential the update leaves V unchanged."""
        V_rest = brentq(membrane_current, -90.0, -60.0,
                        args=(spiking_params, no_noise), xtol=1e-13)

        V = simulate(spiking_params, 0, V_rest, zero_current, 0.1, 50.0,
                     constants=no_noise, backend=backend)

        assert -75.0 < V_rest < -65.0
        np.testing.assert_allclose(V, V_rest, rtol=0, atol=1e-6)

    def test_relaxes_towards_rest(self, spiking_params, no_noise):
        """Starting depolarized below threshold, V decays back."""
        I = np.zeros(4000)
        V = simulate(spiking_params, 0, -66.0, I, 0.05, 200.0, constants=no_noise)

        assert V.max() < -60.0
        assert abs(V[-1] + 70.0) < abs(V[0] + 70.0)


@pytest.mark.physiological
class TestSpiking:
    """Tests with depolarizing current injection."""

    dt = 0.05
    tfin = 200.0

    def run(self, params, amplitude, backend='numpy', constants=None):
        stim = Stimulus.step(amplitude, 20.0, 180.0, self.tfin, self.dt)
        return simulate(params, 42, -70.0, stim, self.dt, self.tfin,
                        constants=constants, backend=backend)

    def test_step_current_evokes_spikes(self, backend, spiking_params):
        V = self.run(spiking_params, 4.0, backend=backend)

        spikes = detect_spikes(V, threshold=0.0)
        assert len(spikes) >= 2, "Should fire repetitively"
        assert V.max() > 0.0

        # No spikes before the step starts
        times = spike_times(V, self.dt)
        assert np.all(times > 20.0)

    def test_no_spikes_without_current(self, spiking_params):
        V = self.run(spiking_params, 0.0)
        assert len(detect_spikes(V, threshold=0.0)) == 0

    def test_spike_count_backends_agree(self, spiking_params, no_noise):
        V_np = self.run(spiking_params, 4.0, backend='numpy', constants=no_noise)
        V_nb = self.run(spiking_params, 4.0, backend='numba', constants=no_noise)
        assert len(detect_spikes(V_np)) == len(detect_spikes(V_nb))

    def test_adaptation_current_reduces_firing(self, spiking_params, no_noise):
        no_adaptation = HHParameters.from_dict({**spiking_params.to_dict(), 'gbar_M': 0.0})
        strong_adaptation = HHParameters.from_dict({**spiking_params.to_dict(), 'gbar_M': 0.5})

        count_free = len(detect_spikes(self.run(no_adaptation, 4.0, constants=no_noise)))
        count_adapted = len(detect_spikes(self.run(strong_adaptation, 4.0, constants=no_noise)))

        assert count_free > 0
        assert count_adapted <= count_free

    def test_spike_statistics(self, spiking_params, no_noise):
        V = self.run(spiking_params, 4.0, constants=no_noise)
        stats = compute_spike_statistics(spike_times(V, self.dt))

        assert stats['count'] >= 2
        assert stats['isi_mean'] > 0
        assert stats['isi_cv'] >= 0

"""
Utility functions for stimulus generation, spike detection, and analysis.

Stimulus arrays have floor(duration / dt) samples, one per simulation step,
so a stimulus built with the same (duration, dt) as a simulation is exactly
long enough for it.
"""

import numpy as np
from typing import Optional


def _n_steps(duration: float, dt: float) -> int:
    return int(np.floor(duration / dt))


class Stimulus:
    """
    Stimulus generator for neuron simulations.

    Provides various types of current injection patterns (uA/cm^2).
    """

    @staticmethod
    def constant(amplitude: float, duration: float, dt: float) -> np.ndarray:
        """
        Generate constant current injection.

        Args:
            amplitude: Current amplitude (uA/cm^2)
            duration: Total duration (ms)
            dt: Time step (ms)

        Returns:
            Array of current values
        """
        return np.full(_n_steps(duration, dt), amplitude, dtype=np.float64)

    @staticmethod
    def step(amplitude: float, t_start: float, t_end: float,
             duration: float, dt: float) -> np.ndarray:
        """
        Generate step current (zero, then amplitude, then zero).

        Args:
            amplitude: Current amplitude during step (uA/cm^2)
            t_start: Time when step starts (ms)
            t_end: Time when step ends (ms)
            duration: Total duration (ms)
            dt: Time step (ms)

        Returns:
            Array of current values
        """
        time = np.arange(_n_steps(duration, dt)) * dt
        current = np.zeros_like(time)
        mask = (time >= t_start) & (time < t_end)
        current[mask] = amplitude
        return current

    @staticmethod
    def pulse_train(amplitude: float, pulse_duration: float,
                    pulse_period: float, n_pulses: int,
                    t_start: float, duration: float, dt: float) -> np.ndarray:
        """
        Generate train of current pulses.

        Args:
            amplitude: Pulse amplitude (uA/cm^2)
            pulse_duration: Duration of each pulse (ms)
            pulse_period: Period between pulse starts (ms)
            n_pulses: Number of pulses
            t_start: Time of first pulse (ms)
            duration: Total duration (ms)
            dt: Time step (ms)

        Returns:
            Array of current values
        """
        time = np.arange(_n_steps(duration, dt)) * dt
        current = np.zeros_like(time)

        for i in range(n_pulses):
            pulse_start = t_start + i * pulse_period
            pulse_end = pulse_start + pulse_duration
            mask = (time >= pulse_start) & (time < pulse_end)
            current[mask] = amplitude

        return current

    @staticmethod
    def ramp(start_amplitude: float, end_amplitude: float,
             duration: float, dt: float) -> np.ndarray:
        """Generate linearly ramping current."""
        return np.linspace(start_amplitude, end_amplitude, _n_steps(duration, dt))


def detect_spikes(voltage: np.ndarray, threshold: float = 0.0,
                  min_interval: Optional[int] = None) -> np.ndarray:
    """
    Detect spikes using threshold crossing.

    Detects upward crossings of the threshold (V[i] >= threshold and V[i-1] < threshold).

    Args:
        voltage: 1D voltage trace
        threshold: Spike detection threshold (mV)
        min_interval: Minimum samples between spikes (refractory period)

    Returns:
        Array of spike indices
    """
    voltage = np.asarray(voltage)
    crossings = (voltage[1:] >= threshold) & (voltage[:-1] < threshold)
    spike_indices = np.where(crossings)[0] + 1

    if min_interval is not None and len(spike_indices) > 0:
        filtered_spikes = [spike_indices[0]]
        for spike_idx in spike_indices[1:]:
            if spike_idx - filtered_spikes[-1] >= min_interval:
                filtered_spikes.append(spike_idx)
        spike_indices = np.array(filtered_spikes)

    return spike_indices


def spike_times(voltage: np.ndarray, dt: float, threshold: float = 0.0,
                min_interval: Optional[int] = None) -> np.ndarray:
    """
    Spike times (ms) with linear interpolation between samples.

    Sample i of a trace is at time i * dt.
    """
    voltage = np.asarray(voltage)
    spike_indices = detect_spikes(voltage, threshold, min_interval)
    times = np.zeros(len(spike_indices))

    for k, idx in enumerate(spike_indices):
        v0 = voltage[idx - 1]
        v1 = voltage[idx]
        t0 = (idx - 1) * dt
        if abs(v1 - v0) > 1e-10:
            times[k] = t0 + (threshold - v0) / (v1 - v0) * dt
        else:
            times[k] = t0

    return times


def compute_spike_statistics(spike_times: np.ndarray) -> dict:
    """
    Compute basic spike train statistics.

    Args:
        spike_times: Array of spike times (ms)

    Returns:
        Dictionary with:
            - 'count': number of spikes
            - 'isi_mean': mean inter-spike interval (ms)
            - 'isi_std': standard deviation of ISI (ms)
            - 'isi_cv': coefficient of variation of ISI
    """
    n_spikes = len(spike_times)

    stats = {'count': n_spikes}

    if n_spikes < 2:
        stats['isi_mean'] = np.nan
        stats['isi_std'] = np.nan
        stats['isi_cv'] = np.nan
    else:
        isis = np.diff(spike_times)
        stats['isi_mean'] = np.mean(isis)
        stats['isi_std'] = np.std(isis)
        stats['isi_cv'] = stats['isi_std'] / stats['isi_mean'] if stats['isi_mean'] > 0 else np.nan

    return stats


def compute_firing_rate(spike_times: np.ndarray, duration: float) -> float:
    """
    Compute mean firing rate.

    Args:
        spike_times: Array of spike times (ms)
        duration: Total duration of recording (ms)

    Returns:
        Mean firing rate (Hz)
    """
    if duration <= 0:
        return 0.0

    # ms -> s
    return len(spike_times) / (duration / 1000.0)

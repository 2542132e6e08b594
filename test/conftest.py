"""
Pytest fixtures and configuration for HH simulator tests.
"""

import pytest
import numpy as np
from hhsbi_core import HHParameters, HHConstants


# Leak-dominated cell without adaptation; stays near -65 mV at rest
QUIET_PARAMS = [50.0, 50.0, 0.0, 0.1, 100.0, -60.0, -65.0, 1.0]

# Regular-spiking cell with M-current adaptation
SPIKING_PARAMS = [50.0, 5.0, 0.07, 0.1, 600.0, -60.0, -70.0, 1.0]


@pytest.fixture
def quiet_params():
    """Fixture providing the leak-dominated parameter vector."""
    return list(QUIET_PARAMS)


@pytest.fixture
def spiking_params():
    """Fixture providing a regular-spiking parameter set."""
    return HHParameters.from_array(SPIKING_PARAMS)


@pytest.fixture
def no_noise():
    """Fixture providing physical constants with voltage noise disabled."""
    return HHConstants(noise_factor=0.0)


@pytest.fixture
def zero_current():
    """Fixture providing 1000 samples of zero current."""
    return np.zeros(1000)


@pytest.fixture(params=['numpy', 'numba'])
def backend(request):
    """Fixture providing all available backends."""
    return request.param


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "physiological: mark test as checking physiological behavior"
    )
    config.addinivalue_line(
        "markers", "numerical: mark test as checking numerical properties"
    )
    config.addinivalue_line(
        "markers", "numba: mark test as requiring the Numba backend"
    )

"""
Shared pytest fixtures for R2MedSim tests.
"""

import contextlib
import importlib.util
import io

import numpy as np
import pytest

from r2medsim.backends import reset_backend, set_backend, set_fallback_warning
from r2medsim.core import SimulationConfig
from tests.config import N_BOOT_CHECK, N_CHECK, N_REPS_CHECK

# Set random seed for reproducible tests
np.random.seed(42)

set_fallback_warning(False)

_BACKENDS = ["python"]
if importlib.util.find_spec("numba") is not None:
    _BACKENDS.append("jit")


@pytest.fixture(params=_BACKENDS)
def backend(request):
    """Run the test once per available compute backend."""
    set_backend(request.param)
    yield request.param
    reset_backend()


@pytest.fixture
def python_backend():
    """Force the pure Python backend (its random stream is NumPy's)."""
    set_backend("python")
    yield "python"
    reset_backend()


@pytest.fixture
def suppress_output():
    """Silence stdout and stderr (printed results and progress)."""
    with contextlib.redirect_stdout(io.StringIO()), contextlib.redirect_stderr(io.StringIO()):
        yield


@pytest.fixture
def small_config():
    """Cheap configuration: 3 chunks of replications on small datasets."""
    return SimulationConfig(n=N_CHECK, replications=N_REPS_CHECK, bootstrap_samples=N_BOOT_CHECK)


@pytest.fixture
def sample_dataset():
    """Fixed (3, 50) dataset drawn from NumPy's generator."""
    rng = np.random.default_rng(7)
    x = rng.standard_normal(50)
    m = 0.5 * x + rng.standard_normal(50)
    y = 0.5 * x + rng.standard_normal(50)
    return np.vstack([x, m, y])

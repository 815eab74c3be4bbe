"""
Tests for compute backend selection.
"""

import importlib.util
import warnings

import numpy as np
import pytest

from r2medsim.backends import (
    ComputeBackend,
    get_backend,
    get_backend_info,
    reset_backend,
    set_backend,
    set_fallback_warning,
)
from r2medsim.backends.python import PythonBackend

_HAS_NUMBA = importlib.util.find_spec("numba") is not None


@pytest.fixture(autouse=True)
def _reset():
    reset_backend()
    yield
    reset_backend()


class TestBackendSelection:
    """Test get/set/reset of the global backend."""

    def test_protocol(self):
        assert isinstance(PythonBackend(), ComputeBackend)

    def test_force_python(self):
        set_backend("python")
        info = get_backend_info()
        assert info["name"] == "PythonBackend"
        assert info["is_jit"] is False
        assert info["forced"] is True

    def test_case_insensitive(self):
        set_backend("  Python ")
        assert isinstance(get_backend(), PythonBackend)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            set_backend("cpp")

    def test_instance(self):
        instance = PythonBackend()
        set_backend(instance)
        assert get_backend() is instance

    def test_cached(self):
        assert get_backend() is get_backend()

    def test_reset_clears_forced(self):
        set_backend("python")
        reset_backend()
        assert get_backend_info()["forced"] is False

    def test_default(self):
        set_backend("default")
        assert get_backend_info()["forced"] is False

    @pytest.mark.skipif(not _HAS_NUMBA, reason="numba not installed")
    def test_auto_prefers_jit(self):
        assert get_backend_info()["is_jit"] is True

    @pytest.mark.skipif(_HAS_NUMBA, reason="numba installed")
    def test_fallback_warning(self):
        set_fallback_warning(True)
        try:
            with pytest.warns(UserWarning, match="pure Python"):
                get_backend()
        finally:
            set_fallback_warning(False)

    @pytest.mark.skipif(_HAS_NUMBA, reason="numba installed")
    def test_jit_unavailable(self):
        with pytest.raises(ImportError):
            set_backend("jit")

    def test_fallback_warning_disabled(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            set_backend("python")
            get_backend()


class TestPythonBackend:
    """Test the pure Python backend against the NumPy stream."""

    def test_dataset_uses_numpy_stream(self):
        backend = PythonBackend()
        data = backend.generate_dataset(10, 0.5, 0.5, 0.0, 1.0, 3)

        np.random.seed(3)
        u = np.random.random()
        v = np.random.random()
        assert data[0, 0] == np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)

    def test_bootstrap_returns_float(self, sample_dataset):
        x, m, y = sample_dataset
        value = PythonBackend().bootstrap_mean(x, m, y, 5, 1)
        assert isinstance(value, float)
        assert np.isfinite(value)


@pytest.mark.skipif(not _HAS_NUMBA, reason="numba not installed")
class TestJITBackend:
    """Test the compiled backend."""

    def test_reproducible(self, sample_dataset):
        from r2medsim.backends.jit import JITBackend

        backend = JITBackend()
        x, m, y = sample_dataset
        assert backend.bootstrap_mean(x, m, y, 20, 9) == backend.bootstrap_mean(x, m, y, 20, 9)
        np.testing.assert_array_equal(
            backend.generate_dataset(25, 0.5, 0.5, 0.0, 1.0, 9),
            backend.generate_dataset(25, 0.5, 0.5, 0.0, 1.0, 9),
        )

    def test_statistically_agrees_with_python(self):
        from r2medsim.backends.jit import JITBackend

        jit_data = JITBackend().generate_dataset(20000, 0.5, 0.5, 0.0, 1.0, 1)
        py_data = PythonBackend().generate_dataset(20000, 0.5, 0.5, 0.0, 1.0, 1)
        np.testing.assert_allclose(np.corrcoef(jit_data), np.corrcoef(py_data), atol=0.04)

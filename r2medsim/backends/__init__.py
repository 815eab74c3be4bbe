"""
Backend abstraction for R2MedSim.

This module provides a unified interface for compute backends,
allowing switching between the Numba JIT and pure Python implementations.

The automatic backend selection follows priority order:
1. JIT (Numba) - fast, requires numba
2. Python - slowest, always available

Users can override the selection via set_backend('jit' | 'python' | 'default').
"""

from typing import Protocol, Union, runtime_checkable

import numpy as np


@runtime_checkable
class ComputeBackend(Protocol):
    """Protocol defining the compute backend interface.

    All backends (Python, JIT) must implement these two methods.
    """

    def generate_dataset(
        self,
        n: int,
        a: float,
        c_prime: float,
        b: float,
        sigma_em: float,
        seed: int,
    ) -> np.ndarray:
        """Generate one structural-model dataset.

        Returns:
            2-D array of shape ``(3, n)`` with rows X, M, Y.
        """
        ...

    def bootstrap_mean(
        self,
        x: np.ndarray,
        m: np.ndarray,
        y: np.ndarray,
        n_bootstrap: int,
        seed: int,
    ) -> float:
        """Mean R²med over ``n_bootstrap`` resamples of one dataset."""
        ...


# Valid backend names for set_backend()
_BACKEND_NAMES = {"default", "jit", "python"}

# Global backend instance
_backend_instance = None
_backend_forced = False
_warn_on_fallback = True


def _create_backend(name: str) -> ComputeBackend:
    """
    Instantiate a backend by name.

    Args:
        name: 'jit' or 'python'

    Raises:
        ImportError: If the requested backend is not available.
    """
    if name == "jit":
        from .jit import JITBackend

        return JITBackend()

    if name == "python":
        from .python import PythonBackend

        return PythonBackend()

    raise ValueError(f"Unknown backend: {name!r}")


def _auto_select() -> ComputeBackend:
    """Auto-select the best available backend: JIT > Python."""
    try:
        return _create_backend("jit")
    except ImportError:
        pass

    if _warn_on_fallback:
        import warnings

        warnings.warn(
            "No Numba backend found, using pure Python (slower). "
            "Install Numba for better performance: pip install R2MedSim[JIT]",
            stacklevel=3,
        )
    return _create_backend("python")


def get_backend() -> ComputeBackend:
    """
    Get the active compute backend.

    On first call, auto-selects the best available backend (JIT > Python).
    Subsequent calls return the cached instance unless reset_backend() is called.
    """
    global _backend_instance

    if _backend_instance is not None:
        return _backend_instance

    _backend_instance = _auto_select()
    return _backend_instance


def set_backend(backend: Union[str, ComputeBackend]) -> None:
    """
    Set the compute backend.

    Args:
        backend: One of:
            - 'default': auto-select best available (JIT > Python)
            - 'jit': force Numba JIT backend
            - 'python': force pure Python backend
            - A ComputeBackend instance

    Raises:
        ImportError: If the requested backend is not available.
        ValueError: If the string is not recognized.
    """
    global _backend_instance, _backend_forced

    if isinstance(backend, str):
        name = backend.lower().strip()
        if name not in _BACKEND_NAMES:
            raise ValueError(f"Unknown backend {backend!r}. Choose from: {', '.join(sorted(_BACKEND_NAMES))}")
        if name == "default":
            _backend_instance = _auto_select()
            _backend_forced = False
        else:
            _backend_instance = _create_backend(name)
            _backend_forced = True
    else:
        _backend_instance = backend
        _backend_forced = True


def reset_backend() -> None:
    """Reset backend to automatic selection."""
    global _backend_instance, _backend_forced
    _backend_instance = None
    _backend_forced = False


def set_fallback_warning(enabled: bool = True) -> None:
    """Enable or disable the warning emitted when falling back to pure Python."""
    global _warn_on_fallback
    _warn_on_fallback = enabled


def get_backend_info() -> dict:
    """
    Get information about the current backend.

    Returns:
        Dictionary with backend name, whether it is JIT compiled, and
        whether it was forced.
    """
    backend = get_backend()
    name = type(backend).__name__
    return {
        "name": name,
        "is_jit": name == "JITBackend",
        "module": type(backend).__module__,
        "forced": _backend_forced,
    }


__all__ = [
    "ComputeBackend",
    "get_backend",
    "set_backend",
    "reset_backend",
    "get_backend_info",
    "set_fallback_warning",
]

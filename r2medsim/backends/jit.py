"""
Numba JIT compute backend for R2MedSim.

This module wraps the Numba JIT-compiled kernels from ``r2medsim.stats``.
"""

import numpy as np

try:
    from ..stats.data_generation import _USE_JIT as _DG_JIT
    from ..stats.data_generation import _generate_dataset_jit
    from ..stats.r2med import _USE_JIT as _R2_JIT
    from ..stats.r2med import _bootstrap_mean_jit

    if not (_DG_JIT and _R2_JIT):
        raise ImportError("Numba JIT compilation not available")

    _JIT_AVAILABLE = True
except ImportError:
    _JIT_AVAILABLE = False


class JITBackend:
    """Numba JIT compute backend.

    Delegates to ``@njit``-compiled versions of the dataset generator and
    bootstrap loop. Requires ``numba`` to be installed. Seeds apply to
    Numba's own random stream, so seeded output differs from the Python
    backend while staying reproducible.
    """

    def __init__(self):
        """Verify that Numba JIT compilation is available."""
        if not _JIT_AVAILABLE:
            raise ImportError("Numba JIT backend not available. Install numba: pip install numba")

    def generate_dataset(
        self,
        n: int,
        a: float,
        c_prime: float,
        b: float,
        sigma_em: float,
        seed: int,
    ) -> np.ndarray:
        """Generate one dataset using JIT-compiled code."""
        return _generate_dataset_jit(n, a, c_prime, b, sigma_em, seed)  # type: ignore[no-any-return]

    def bootstrap_mean(
        self,
        x: np.ndarray,
        m: np.ndarray,
        y: np.ndarray,
        n_bootstrap: int,
        seed: int,
    ) -> float:
        """Run the JIT-compiled bootstrap loop."""
        return float(_bootstrap_mean_jit(x, m, y, n_bootstrap, seed))

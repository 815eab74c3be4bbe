"""
Pure Python compute backend for R2MedSim.

This module provides a fallback implementation that uses no compiled
extensions. Always available.
"""

import numpy as np

from ..stats.data_generation import _generate_dataset_core
from ..stats.r2med import _bootstrap_mean_core


class PythonBackend:
    """Pure Python compute backend (no compiled extensions).

    Delegates to the uncompiled ``_generate_dataset_core`` and
    ``_bootstrap_mean_core`` functions. Slowest backend but always available.
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
        """Generate one ``(3, n)`` dataset with rows X, M, Y."""
        return _generate_dataset_core(n, a, c_prime, b, sigma_em, seed)  # type: ignore[no-any-return]

    def bootstrap_mean(
        self,
        x: np.ndarray,
        m: np.ndarray,
        y: np.ndarray,
        n_bootstrap: int,
        seed: int,
    ) -> float:
        """Mean R²med over ``n_bootstrap`` resamples."""
        return float(_bootstrap_mean_core(x, m, y, n_bootstrap, seed))

"""
R²med estimation and nested bootstrap for R2MedSim.

R²med is the share of variance in Y explained jointly by X and M that is
attributable to the mediated path, computed from the three pairwise
correlations:

    R²(Y.XM) = (r_yx² + r_ym² - 2 r_yx r_ym r_xm) / (1 - r_xm²)
    R²med    = (r_yx² + r_ym²) - R²(Y.XM)

Estimates are not clamped: negative values and values above 1 are the
sampling noise this package exists to study.

Performance: JIT compiled via numba when available, pure Python otherwise.
"""

from typing import Optional

import numpy as np

# |r_xm² - 1| below this counts as total X-M collinearity
COLLINEARITY_TOL = 1e-9


def pearson_correlation(a_values, b_values):
    """Pearson correlation via the raw-moment formula.

    Returns exactly ``0.0`` when either sequence has zero variance
    (denominator factor equal to zero).
    """
    n = a_values.shape[0]
    sum_a = 0.0
    sum_b = 0.0
    sum_a2 = 0.0
    sum_b2 = 0.0
    sum_ab = 0.0
    for i in range(n):
        va = a_values[i]
        vb = b_values[i]
        sum_a += va
        sum_b += vb
        sum_a2 += va * va
        sum_b2 += vb * vb
        sum_ab += va * vb

    numerator = n * sum_ab - sum_a * sum_b
    den_a = n * sum_a2 - sum_a * sum_a
    den_b = n * sum_b2 - sum_b * sum_b
    if den_a == 0.0 or den_b == 0.0:
        return 0.0
    return numerator / np.sqrt(den_a * den_b)


def r2med_from_correlations(r_yx, r_ym, r_xm):
    """R²med from the three pairwise correlations.

    Near-total X-M collinearity falls back to ``r_yx**2``.
    """
    r_yx2 = r_yx * r_yx
    r_ym2 = r_ym * r_ym
    r_xm2 = r_xm * r_xm

    if abs(r_xm2 - 1.0) < COLLINEARITY_TOL:
        return r_yx2

    r2_y_xm = (r_yx2 + r_ym2 - 2.0 * r_yx * r_ym * r_xm) / (1.0 - r_xm2)
    return (r_yx2 + r_ym2) - r2_y_xm


def compute_r2med(x, m, y):
    """R²med of one dataset given its X, M and Y columns."""
    r_yx = pearson_correlation(y, x)
    r_ym = pearson_correlation(y, m)
    r_xm = pearson_correlation(x, m)
    return r2med_from_correlations(r_yx, r_ym, r_xm)


def _bootstrap_mean_core(x, m, y, n_bootstrap, sim_seed):
    """Mean R²med over *n_bootstrap* resamples-with-replacement.

    The three scratch buffers are allocated once and every slot is
    overwritten on each iteration. Only the running sum is kept.

    Args:
        x, m, y: Equal-length 1-D arrays of one dataset.
        n_bootstrap: Number of resamples.
        sim_seed: Random seed (``-1`` for unseeded).

    Returns:
        Mean R²med across resamples.
    """
    if sim_seed >= 0:
        np.random.seed(sim_seed)

    n = x.shape[0]
    x_b = np.empty(n)
    m_b = np.empty(n)
    y_b = np.empty(n)

    total = 0.0
    for _ in range(n_bootstrap):
        for j in range(n):
            idx = int(np.random.random() * n)
            x_b[j] = x[idx]
            m_b[j] = m[idx]
            y_b[j] = y[idx]
        total += compute_r2med(x_b, m_b, y_b)
    return total / n_bootstrap


def bootstrap_r2med_mean(
    x: np.ndarray,
    m: np.ndarray,
    y: np.ndarray,
    n_bootstrap: int,
    seed: Optional[int] = None,
) -> float:
    """Bootstrap mean of R²med for one dataset using the active backend.

    Args:
        x, m, y: Dataset columns of equal length.
        n_bootstrap: Number of resamples (positive).
        seed: Optional seed; ``None`` continues the global stream.

    Raises:
        ValueError: If the columns differ in length or *n_bootstrap* < 1.
    """
    from ..backends import get_backend

    x = np.ascontiguousarray(x, dtype=np.float64)
    m = np.ascontiguousarray(m, dtype=np.float64)
    y = np.ascontiguousarray(y, dtype=np.float64)
    if not (x.shape == m.shape == y.shape) or x.ndim != 1:
        raise ValueError("x, m and y must be 1-D arrays of equal length")
    if n_bootstrap < 1:
        raise ValueError(f"n_bootstrap must be >= 1, got {n_bootstrap}")

    return get_backend().bootstrap_mean(x, m, y, int(n_bootstrap), -1 if seed is None else int(seed))


try:
    from numba import njit
    from numba.extending import register_jitable

    register_jitable(pearson_correlation)
    register_jitable(r2med_from_correlations)
    register_jitable(compute_r2med)

    _bootstrap_mean_jit = njit("f8(f8[:], f8[:], f8[:], i8, i8)", cache=True)(_bootstrap_mean_core)
    _USE_JIT = True
except ImportError:
    _bootstrap_mean_jit = _bootstrap_mean_core
    _USE_JIT = False

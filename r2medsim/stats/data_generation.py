"""
Dataset generator for the X -> M -> Y mediation model.

Each unit is drawn independently:

    x   ~ N(0, 1)
    m   = a * x + sigma_em * e_M,        e_M ~ N(0, 1)
    y   = c_prime * x + b * m + e_Y,     e_Y ~ N(0, 1)

The error SD of Y is fixed at 1. The module also exposes the
model-implied (population) correlations and R²med, which serve as the
reference value a simulation is compared against.

Performance: JIT compiled via numba when available, pure Python otherwise.
"""

from typing import Tuple

import numpy as np

from .distributions import _randn_core
from .r2med import r2med_from_correlations

# Row order of the generated (3, n) array
X_ROW, M_ROW, Y_ROW = 0, 1, 2


def _generate_dataset_core(n, a, c_prime, b, sigma_em, sim_seed):
    """Generate one ``(3, n)`` dataset with rows X, M, Y.

    Draw order per unit is ``x``, ``e_M``, ``e_Y``, so a fixed seed always
    maps to the same dataset on a given backend.

    Args:
        n: Number of units.
        a: X -> M path.
        c_prime: Direct X -> Y path.
        b: M -> Y path.
        sigma_em: SD of the M error term.
        sim_seed: Random seed (``-1`` for unseeded).

    Returns:
        Array of shape ``(3, n)``.
    """
    if sim_seed >= 0:
        np.random.seed(sim_seed)

    data = np.empty((3, n))
    for i in range(n):
        x = _randn_core()
        m = a * x + _randn_core() * sigma_em
        y = c_prime * x + b * m + _randn_core()
        data[0, i] = x
        data[1, i] = m
        data[2, i] = y
    return data


def population_correlations(a: float, c_prime: float, b: float, sigma_em: float) -> Tuple[float, float, float]:
    """Model-implied correlations ``(r_yx, r_ym, r_xm)``.

    Derived from the structural covariances with Var(X) = 1 and a unit
    Y error variance.
    """
    var_m = a * a + sigma_em * sigma_em
    cov_xy = c_prime + b * a
    cov_my = c_prime * a + b * var_m
    var_y = c_prime * c_prime + b * b * var_m + 2.0 * c_prime * b * a + 1.0

    r_yx = cov_xy / np.sqrt(var_y)
    r_ym = cov_my / np.sqrt(var_m * var_y)
    r_xm = a / np.sqrt(var_m)
    return float(r_yx), float(r_ym), float(r_xm)


def population_r2med(a: float, c_prime: float, b: float, sigma_em: float) -> float:
    """Model-implied R²med for the given structural parameters.

    With ``b = 0`` the indirect effect is null, yet this value is
    ``r_ym**2`` rather than zero whenever ``a`` and ``c_prime`` are both
    non-zero.
    """
    return r2med_from_correlations(*population_correlations(a, c_prime, b, sigma_em))


try:
    from numba import njit

    _generate_dataset_jit = njit("f8[:,:](i8, f8, f8, f8, f8, i8)", cache=True)(_generate_dataset_core)
    _USE_JIT = True
except ImportError:
    _generate_dataset_jit = _generate_dataset_core
    _USE_JIT = False

"""Standard-normal variate source for R2MedSim.

Draws N(0, 1) deviates with the Box–Muller transform from two uniform
draws on the open interval (0, 1). The uniform draws come from the
module-global NumPy stream (or Numba's own stream inside compiled code),
so callers seed with ``np.random.seed`` and pass ``-1`` for unseeded runs.

Usage:
    from r2medsim.stats.distributions import _randn_core
"""

from typing import Optional

import numpy as np

TWO_PI = 2.0 * np.pi


def _randn_core():
    """Return one standard-normal deviate.

    Zero is redrawn for both uniforms so the logarithm stays finite.
    """
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = np.random.random()
    while v == 0.0:
        v = np.random.random()
    return np.sqrt(-2.0 * np.log(u)) * np.cos(TWO_PI * v)


def _standard_normal_array_core(size, sim_seed):
    """Fill an array of *size* deviates, seeding first when ``sim_seed >= 0``."""
    if sim_seed >= 0:
        np.random.seed(sim_seed)
    out = np.empty(size)
    for i in range(size):
        out[i] = _randn_core()
    return out


def _standard_normal_array(size: int, seed: Optional[int] = None) -> np.ndarray:
    """Draw *size* standard-normal deviates.

    Args:
        size: Number of deviates.
        seed: Optional seed; ``None`` continues the global stream.

    Returns:
        1-D float64 array of length *size*.
    """
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    return _standard_normal_array_core(int(size), -1 if seed is None else int(seed))  # type: ignore[no-any-return]


# Make the scalar kernel callable from compiled code elsewhere in the package.
try:
    from numba.extending import register_jitable

    register_jitable(_randn_core)
    _USE_JIT = True
except ImportError:
    _USE_JIT = False

"""
Shared test configuration constants.

All test files should import from this module to ensure consistency
across the test suite.
"""

# Monte Carlo settings, 3-tier ladder
N_REPS_CHECK = 25
"""Smoke tests: 3 chunks of replications, just structure and API contract."""

N_BOOT_CHECK = 5
"""Bootstrap resamples for smoke tests."""

N_CHECK = 30
"""Sample size for smoke tests."""

N_REPS_SPEC = 100
"""Distributional checks (marked slow)."""

N_BOOT_SPEC = 50
"""Bootstrap resamples for distributional checks."""

SEED = 2137
"""Default random seed for reproducibility."""

TOL = 1e-9
"""Floating-point tolerance for closed-form checks."""

N_REPS_FULL = 1000
"""Full study scale: replications of the end-to-end null scenario (marked slow)."""

N_BOOT_FULL = 1000
"""Full study scale: bootstrap resamples per replication."""

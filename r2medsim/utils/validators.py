"""
Validation utilities for R2MedSim.

This module provides validation functions for simulation settings and
structural parameters. Every check runs before any simulation work.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import numpy as np

__all__ = ["InvalidConfiguration"]

# Below these counts results are flagged as imprecise
RECOMMENDED_REPLICATIONS = 1000
RECOMMENDED_BOOTSTRAP_SAMPLES = 1000
MIN_RECOMMENDED_N = 10


class InvalidConfiguration(ValueError):
    """Raised when a simulation configuration cannot be run."""

    pass


@dataclass
class _ValidationResult:
    """Outcome of a validation check, carrying errors and warnings.

    Attributes:
        is_valid: ``True`` if no errors were found.
        errors: List of error messages (empty when valid).
        warnings: List of non-fatal warning messages.
    """

    is_valid: bool
    errors: List[str]
    warnings: List[str]

    def raise_if_invalid(self):
        """Raise ``InvalidConfiguration`` if the validation failed."""
        if not self.is_valid:
            error_msg = "Validation failed:\n" + "\n".join(f"• {err}" for err in self.errors)
            raise InvalidConfiguration(error_msg)

    def merge(self, other: "_ValidationResult") -> "_ValidationResult":
        """Combine two results into one."""
        return _ValidationResult(
            self.is_valid and other.is_valid,
            self.errors + other.errors,
            self.warnings + other.warnings,
        )


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)


def _validate_count(value: Any, name: str) -> _ValidationResult:
    """Validate a strictly positive integer count."""
    if not _is_integer(value):
        return _ValidationResult(False, [f"{name} must be an integer, got {type(value).__name__}"], [])
    if value < 1:
        return _ValidationResult(False, [f"{name} must be a positive integer, got {value}"], [])
    return _ValidationResult(True, [], [])


def _validate_sample_size(n: Any) -> _ValidationResult:
    """Validate sample size (positive integer; small values warned)."""
    result = _validate_count(n, "n")
    if result.is_valid and n < MIN_RECOMMENDED_N:
        result.warnings.append(f"Very small sample size (n={n}). Correlations will be dominated by noise.")
    return result


def _validate_simulations(replications: Any, bootstrap_samples: Any) -> _ValidationResult:
    """Validate outer replication and inner bootstrap counts."""
    result = _validate_count(replications, "replications").merge(_validate_count(bootstrap_samples, "bootstrap_samples"))
    if not result.is_valid:
        return result

    if replications < RECOMMENDED_REPLICATIONS:
        result.warnings.append(
            f"Low replication count ({replications}). Consider using at least {RECOMMENDED_REPLICATIONS} for stable percentiles."
        )
    if bootstrap_samples < RECOMMENDED_BOOTSTRAP_SAMPLES:
        result.warnings.append(
            f"Low bootstrap count ({bootstrap_samples}). Consider using at least {RECOMMENDED_BOOTSTRAP_SAMPLES} resamples."
        )
    return result


def _validate_path(value: Any, name: str) -> _ValidationResult:
    """Validate a structural path coefficient (any finite real)."""
    if not _is_real(value):
        return _ValidationResult(False, [f"{name} must be a number, got {type(value).__name__}"], [])
    if not math.isfinite(value):
        return _ValidationResult(False, [f"{name} must be finite, got {value}"], [])
    return _ValidationResult(True, [], [])


def _validate_sigma_em(sigma_em: Any) -> _ValidationResult:
    """Validate the SD of the mediator error term (finite and > 0)."""
    result = _validate_path(sigma_em, "sigma_em")
    if result.is_valid and sigma_em <= 0:
        result = _ValidationResult(False, [f"sigma_em must be > 0, got {sigma_em}"], [])
    return result


def _validate_config(config) -> _ValidationResult:
    """Validate every field of a ``SimulationConfig``."""
    result = _validate_sample_size(config.n)
    result = result.merge(_validate_simulations(config.replications, config.bootstrap_samples))
    for name in ("a", "c_prime", "b"):
        result = result.merge(_validate_path(getattr(config, name), name))
    return result.merge(_validate_sigma_em(config.sigma_em))


def _validate_seed(seed: Any) -> Optional[str]:
    """Return an error message for an invalid seed, else ``None``."""
    if seed is None:
        return None
    if not _is_integer(seed):
        return "seed must be an integer or None"
    if seed < 0:
        return "seed must be non-negative"
    # np.random.seed accepts 32-bit seeds; leave room for per-replication offsets
    if seed > 3000000000:
        return "seed must be lower than 3,000,000,000"
    return None


def _validate_parallel_settings(enable: Any, n_cores: Optional[int]) -> Tuple[Tuple[bool, int], _ValidationResult]:
    """Validate parallel processing settings.

    Args:
        enable: True or False
        n_cores: Number of CPU cores (positive int or None for auto)

    Returns:
        ((enable, n_cores), ValidationResult)
    """
    import multiprocessing as mp

    errors = []

    if enable not in (True, False):
        errors.append(f"enable must be True or False, got {enable!r}")
        return (False, 1), _ValidationResult(False, errors, [])

    max_cores = mp.cpu_count()
    validated_n_cores = max(1, max_cores // 2)

    if n_cores is not None:
        if not _is_integer(n_cores) or n_cores <= 0:
            errors.append(f"n_cores must be a positive integer, got {n_cores}")
        else:
            validated_n_cores = min(int(n_cores), max_cores)

    return (bool(enable), validated_n_cores), _ValidationResult(len(errors) == 0, errors, [])


def _validate_chunk_size(chunk_size: Union[int, Any]) -> _ValidationResult:
    """Validate replications-per-chunk."""
    return _validate_count(chunk_size, "chunk_size")

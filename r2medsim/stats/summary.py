"""
Quantile and summary statistics over replication-level bootstrap means.

Quantiles use linear interpolation between order statistics (the R-7
convention). The reported 95% interval is a percentile interval over the
per-replication bootstrap means, not over individual resamples.
"""

import warnings
from dataclasses import asdict, dataclass
from typing import Dict, Sequence, Union

import numpy as np

# (field name, quantile) pairs reported in every summary
SUMMARY_QUANTILES = (
    ("min", 0.0),
    ("ci_lower", 0.025),
    ("p25", 0.25),
    ("median", 0.5),
    ("p75", 0.75),
    ("ci_upper", 0.975),
    ("max", 1.0),
)


class DegenerateSampleWarning(UserWarning):
    """Some replications produced a non-finite bootstrap mean."""

    pass


@dataclass(frozen=True)
class SummaryStatistics:
    """Order-statistic summary of the replication-level bootstrap means.

    Attributes:
        min, max: Extremes (quantiles 0 and 1).
        median, p25, p75: Quartiles.
        ci_lower, ci_upper: 2.5th and 97.5th percentiles.
        n_used: Number of finite means the summary was computed over.
    """

    min: float
    max: float
    median: float
    p25: float
    p75: float
    ci_lower: float
    ci_upper: float
    n_used: int

    def to_dict(self) -> Dict[str, Union[float, int]]:
        return asdict(self)

    def contains_zero(self) -> bool:
        """Whether the 95% percentile interval brackets zero."""
        return bool(self.ci_lower <= 0.0 <= self.ci_upper)


def _quantile_sorted(sorted_values: np.ndarray, q: float) -> float:
    """R-7 quantile of an already ascending array."""
    pos = (len(sorted_values) - 1) * q
    base = int(np.floor(pos))
    frac = pos - base
    if base + 1 < len(sorted_values):
        return float(sorted_values[base] + frac * (sorted_values[base + 1] - sorted_values[base]))
    return float(sorted_values[base])


def quantile(values: Union[Sequence[float], np.ndarray], q: float) -> float:
    """Quantile *q* of *values* by linear interpolation between order statistics.

    The input is copied before sorting and never mutated.

    Args:
        values: Non-empty sequence of numbers.
        q: Quantile in ``[0, 1]``.

    Raises:
        ValueError: If *values* is empty or *q* lies outside ``[0, 1]``.
    """
    if not 0.0 <= q <= 1.0:
        raise ValueError(f"q must be between 0 and 1, got {q}")
    arr = np.sort(np.asarray(values, dtype=np.float64))
    if arr.size == 0:
        raise ValueError("quantile requires at least one value")
    return _quantile_sorted(arr, q)


def summarize(values: Union[Sequence[float], np.ndarray]) -> SummaryStatistics:
    """Summary statistics over replication-level bootstrap means.

    Non-finite means are left out of every quantile and reported through a
    ``DegenerateSampleWarning``. When nothing finite remains, all fields
    are NaN.

    Args:
        values: Per-replication bootstrap means.

    Returns:
        ``SummaryStatistics`` for the finite values.

    Raises:
        ValueError: If *values* is empty.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise ValueError("summarize requires at least one value")

    finite = arr[np.isfinite(arr)]
    n_bad = arr.size - finite.size
    if n_bad:
        warnings.warn(
            f"{n_bad} of {arr.size} replication means are not finite and were excluded from the summary",
            DegenerateSampleWarning,
            stacklevel=2,
        )

    if finite.size == 0:
        stats = {name: float("nan") for name, _ in SUMMARY_QUANTILES}
        return SummaryStatistics(n_used=0, **stats)

    sorted_values = np.sort(finite)
    stats = {name: _quantile_sorted(sorted_values, q) for name, q in SUMMARY_QUANTILES}
    return SummaryStatistics(n_used=int(finite.size), **stats)

"""
Results processing for R2MedSim.

This module turns the collected replication means into a
``SimulationResult`` and provides tabular and histogram views of it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..stats.data_generation import population_r2med
from ..stats.summary import SummaryStatistics, summarize
from .config import SimulationConfig

HISTOGRAM_BINS = 40


@dataclass(frozen=True)
class SimulationResult:
    """Output of one orchestrated run.

    Attributes:
        config: The configuration that produced the result.
        boot_means: Per-replication bootstrap means, length
            ``config.replications``.
        summary: Statistics over ``boot_means``.
        seed: Base seed of the run (``None`` if unseeded).
        n_degenerate: Number of non-finite replication means.
    """

    config: SimulationConfig
    boot_means: np.ndarray
    summary: SummaryStatistics
    seed: Optional[int] = None
    n_degenerate: int = 0

    @property
    def population_r2med(self) -> float:
        """Model-implied R²med for the run's structural parameters."""
        cfg = self.config
        return population_r2med(cfg.a, cfg.c_prime, cfg.b, cfg.sigma_em)

    def histogram(self, bins: int = HISTOGRAM_BINS) -> Tuple[np.ndarray, np.ndarray]:
        """Counts and edges of *bins* equal-width bins over ``[min, max]``.

        Returns:
            ``(counts, edges)`` with ``len(edges) == bins + 1``.
        """
        lo, hi = self.summary.min, self.summary.max
        if not (np.isfinite(lo) and np.isfinite(hi)):
            raise ValueError("Cannot build a histogram without finite bootstrap means")
        if hi == lo:
            hi = lo + 1e-12
        edges = np.linspace(lo, hi, bins + 1)
        finite = self.boot_means[np.isfinite(self.boot_means)]
        counts, _ = np.histogram(finite, bins=edges)
        return counts, edges

    def to_frame(self):
        """Per-replication means as a pandas DataFrame."""
        import pandas as pd

        return pd.DataFrame(
            {
                "replication": np.arange(len(self.boot_means)),
                "boot_mean": self.boot_means,
            }
        )

    def to_dict(self) -> Dict[str, Any]:
        return build_result_dict(self)


def build_simulation_result(
    config: SimulationConfig,
    boot_means,
    seed: Optional[int] = None,
) -> SimulationResult:
    """
    Build a ``SimulationResult`` from collected replication means.

    Args:
        config: Configuration of the run
        boot_means: Sequence of per-replication bootstrap means
        seed: Base seed used for the run

    Returns:
        SimulationResult with summary statistics
    """
    means = np.asarray(boot_means, dtype=np.float64)
    if len(means) != config.replications:
        raise ValueError(f"Expected {config.replications} replication means, got {len(means)}")

    return SimulationResult(
        config=config,
        boot_means=means,
        summary=summarize(means),
        seed=seed,
        n_degenerate=int(np.sum(~np.isfinite(means))),
    )


def build_result_dict(result: SimulationResult) -> Dict[str, Any]:
    """
    Build a plain dictionary view of a result.

    Args:
        result: Simulation result

    Returns:
        Dictionary with ``"model"`` (settings) and ``"results"`` (statistics)
    """
    return {
        "model": {
            **result.config.to_dict(),
            "seed": result.seed,
        },
        "results": {
            "boot_means": result.boot_means.tolist(),
            "summary": result.summary.to_dict(),
            "population_r2med": result.population_r2med,
            "ci_contains_zero": result.summary.contains_zero(),
            "n_degenerate": result.n_degenerate,
        },
    }

"""R2MedSim - Monte Carlo bootstrap study of the R²med effect size.

A simulation framework that generates data from an X -> M -> Y mediation
model, bootstraps the R²med effect size within each dataset, and summarises
the distribution of bootstrap means across many replications, so that one
can check whether percentile intervals bracket zero under a null indirect
effect.

Example:
    >>> from r2medsim import R2MedSimulation
    >>>
    >>> sim = R2MedSimulation()
    >>> sim.set_paths("a=0.5, c_prime=0.5, b=0")
    >>> sim.set_simulations(1000, bootstrap_samples=1000)
    >>> result = sim.run()
    >>> result.summary.ci_lower, result.summary.ci_upper
"""

from importlib.metadata import version as _get_version

from .core import PRESETS, SimulationConfig, SimulationResult, SimulationRunner, get_preset
from .model import R2MedSimulation
from .progress import PrintReporter, ProgressReporter, SimulationCancelled, TqdmReporter
from .stats.r2med import bootstrap_r2med_mean, compute_r2med, pearson_correlation, r2med_from_correlations
from .stats.summary import DegenerateSampleWarning, SummaryStatistics, quantile, summarize
from .utils.validators import InvalidConfiguration

__version__ = _get_version("R2MedSim")
__author__ = "R2MedSim developers"

__all__ = [
    "R2MedSimulation",
    "SimulationConfig",
    "SimulationResult",
    "SimulationRunner",
    "SummaryStatistics",
    "PRESETS",
    "get_preset",
    "pearson_correlation",
    "r2med_from_correlations",
    "compute_r2med",
    "bootstrap_r2med_mean",
    "quantile",
    "summarize",
    "InvalidConfiguration",
    "DegenerateSampleWarning",
    "SimulationCancelled",
    "ProgressReporter",
    "PrintReporter",
    "TqdmReporter",
]

"""
Simulation configuration for R2MedSim.

``SimulationConfig`` is the immutable input to a run: sample size, the two
Monte Carlo counts, and the structural parameters of the mediation model.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from ..utils.validators import _validate_config

# Defaults used by the study presets
DEFAULT_N = 200
DEFAULT_REPLICATIONS = 1000
DEFAULT_BOOTSTRAP_SAMPLES = 1000


@dataclass(frozen=True)
class SimulationConfig:
    """Structural model and Monte Carlo settings for one run.

    Attributes:
        n: Sample size of every generated dataset.
        replications: Number of outer Monte Carlo replications.
        bootstrap_samples: Resamples drawn per replication.
        a: X -> M path.
        c_prime: Direct X -> Y path.
        b: M -> Y path (0 for a null indirect effect).
        sigma_em: SD of the M error term. Values near zero make M an
            almost deterministic function of X.
        id, name, description: Labels carried into printed results.
    """

    n: int = DEFAULT_N
    replications: int = DEFAULT_REPLICATIONS
    bootstrap_samples: int = DEFAULT_BOOTSTRAP_SAMPLES
    a: float = 0.5
    c_prime: float = 0.5
    b: float = 0.0
    sigma_em: float = 1.0
    id: str = "custom"
    name: str = "Custom"
    description: str = ""

    def validate(self) -> "SimulationConfig":
        """Fail fast on an unusable configuration.

        Advisory warnings (low counts, tiny samples) are printed.

        Returns:
            self, for chaining.

        Raises:
            InvalidConfiguration: If any field is out of range.
        """
        result = _validate_config(self)
        for warning in result.warnings:
            print(f"Warning: {warning}")
        result.raise_if_invalid()
        return self

    def with_updates(self, **changes: Any) -> "SimulationConfig":
        """Return a copy with *changes* applied (not validated)."""
        return replace(self, **changes)

    @property
    def paths(self) -> Dict[str, float]:
        return {"a": self.a, "c_prime": self.c_prime, "b": self.b}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

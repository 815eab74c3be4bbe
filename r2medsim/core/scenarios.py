"""
Study scenarios for R2MedSim.

This module holds the named presets from the R²med null-effect study and a
runner that simulates several of them in sequence and tabulates the
results side by side.
"""

from typing import Any, Callable, Dict, List, Optional

from .config import SimulationConfig

# Structural settings of the study scenarios. Every scenario holds the
# indirect effect at zero (b = 0). The "unrealistic" ones shrink SD(e_M) so
# that X and M are nearly collinear.
PRESETS: Dict[str, Dict[str, Any]] = {
    "s1": {"name": "Scenario 1 (Plausible)", "description": "a = 0.5, c' = 0.5, b = 0", "a": 0.5, "c_prime": 0.5, "b": 0.0, "sigma_em": 1.0},
    "s2": {"name": "Scenario 2 (Plausible)", "description": "a = 0.1, c' = 0.5, b = 0", "a": 0.1, "c_prime": 0.5, "b": 0.0, "sigma_em": 1.0},
    "s3": {"name": "Scenario 3 (Plausible)", "description": "a = 0.5, c' = 0.1, b = 0", "a": 0.5, "c_prime": 0.1, "b": 0.0, "sigma_em": 1.0},
    "s4": {"name": "Scenario 4 (Plausible)", "description": "a = -0.5, c' = 0.5, b = 0", "a": -0.5, "c_prime": 0.5, "b": 0.0, "sigma_em": 1.0},
    "s5": {"name": "Scenario 5 (Plausible)", "description": "a = -0.1, c' = 0.5, b = 0", "a": -0.1, "c_prime": 0.5, "b": 0.0, "sigma_em": 1.0},
    "s6": {"name": "Scenario 6 (Plausible)", "description": "a = -0.5, c' = 0.1, b = 0", "a": -0.5, "c_prime": 0.1, "b": 0.0, "sigma_em": 1.0},
    "u1": {
        "name": "Scenario U1 (Unrealistic)",
        "description": "a = 0.9, c' = 0.5, b = 0, Low SD(M)",
        "a": 0.9,
        "c_prime": 0.5,
        "b": 0.0,
        "sigma_em": 0.1,
    },
    "u2": {
        "name": "Scenario U2 (Unrealistic)",
        "description": "a = -0.9, c' = 0.5, b = 0, Low SD(M)",
        "a": -0.9,
        "c_prime": 0.5,
        "b": 0.0,
        "sigma_em": 0.1,
    },
}


def get_preset(preset_id: str, base: Optional[SimulationConfig] = None) -> SimulationConfig:
    """Apply a named preset on top of *base*.

    Only the structural parameters and labels change; ``n`` and the Monte
    Carlo counts are kept from *base*.

    Args:
        preset_id: Key of ``PRESETS`` (case-insensitive).
        base: Configuration to update; defaults to ``SimulationConfig()``.

    Raises:
        KeyError: If *preset_id* is unknown.
    """
    key = preset_id.lower().strip()
    if key not in PRESETS:
        raise KeyError(f"Unknown preset {preset_id!r}. Available: {', '.join(PRESETS)}")
    base = base if base is not None else SimulationConfig()
    return base.with_updates(id=key, **PRESETS[key])


class ScenarioRunner:
    """Runs a simulation for each selected preset.

    The Monte Carlo settings (``n``, replications, bootstrap samples) come
    from the base configuration so that scenarios are comparable.
    """

    def __init__(self, base_config: SimulationConfig, preset_ids: Optional[List[str]] = None):
        """Initialise the scenario runner.

        Args:
            base_config: Source of ``n`` and the Monte Carlo counts.
            preset_ids: Presets to run; defaults to all of ``PRESETS``.
        """
        self.base_config = base_config
        self.preset_ids = list(preset_ids) if preset_ids is not None else list(PRESETS)

    def get_configs(self) -> List[SimulationConfig]:
        """Configurations of the selected presets, in run order."""
        return [get_preset(pid, self.base_config) for pid in self.preset_ids]

    def run(self, run_func: Callable[[SimulationConfig], Any]) -> Dict[str, Any]:
        """
        Run every selected scenario.

        Args:
            run_func: Called with each scenario config; returns a
                ``SimulationResult``

        Returns:
            Dictionary mapping preset id to its result
        """
        return {cfg.id: run_func(cfg) for cfg in self.get_configs()}

    @staticmethod
    def comparison_table(results: Dict[str, Any]):
        """One row per scenario: paths, population value and summary statistics.

        Returns:
            pandas DataFrame indexed by preset id.
        """
        import pandas as pd

        rows = []
        for preset_id, result in results.items():
            cfg = result.config
            rows.append(
                {
                    "scenario": preset_id,
                    "a": cfg.a,
                    "c_prime": cfg.c_prime,
                    "b": cfg.b,
                    "sigma_em": cfg.sigma_em,
                    "population_r2med": result.population_r2med,
                    **result.summary.to_dict(),
                    "ci_contains_zero": result.summary.contains_zero(),
                }
            )
        return pd.DataFrame(rows).set_index("scenario")

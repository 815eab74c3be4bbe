"""Core components for the R2MedSim framework.

Re-exports the foundational building blocks:

- ``SimulationConfig``: immutable run configuration.
- ``SimulationRunner``, ``ChunkProgress``: chunked Monte Carlo execution.
- ``ScenarioRunner``, ``PRESETS``, ``get_preset``: study scenarios.
- ``SimulationResult``, ``build_simulation_result``: result assembly.
"""

from .config import SimulationConfig
from .results import SimulationResult, build_result_dict, build_simulation_result
from .scenarios import PRESETS, ScenarioRunner, get_preset
from .simulation import CHUNK_SIZE, ChunkProgress, SimulationRunner

__all__ = [
    # Config
    "SimulationConfig",
    # Simulation
    "SimulationRunner",
    "ChunkProgress",
    "CHUNK_SIZE",
    # Scenarios
    "ScenarioRunner",
    "PRESETS",
    "get_preset",
    # Results
    "SimulationResult",
    "build_simulation_result",
    "build_result_dict",
]

"""
R2MedSim - Monte Carlo study of the R²med mediation effect size.

This module provides the main R2MedSimulation class for configuring and
running the nested Monte Carlo / bootstrap simulation.
"""

from typing import Any, Callable, Dict, List, Optional

from .core import (
    CHUNK_SIZE,
    ScenarioRunner,
    SimulationConfig,
    SimulationResult,
    SimulationRunner,
    build_result_dict,
    get_preset,
)
from .progress import PrintReporter, ProgressReporter, compute_total_chunks
from .utils.formatters import _format_results
from .utils.parsers import _parser
from .utils.validators import (
    _validate_count,
    _validate_parallel_settings,
    _validate_seed,
    _validate_sigma_em,
)
from .utils.visualization import _create_histogram_plot

_PATH_NAMES = ["a", "c_prime", "b", "sigma_em"]


class R2MedSimulation:
    """Monte Carlo simulation of R²med under a mediation model.

    Generates datasets from ``X -> M -> Y`` with paths ``a``, ``c_prime``
    and ``b``, bootstraps R²med within each dataset, and summarises the
    distribution of the per-replication bootstrap means. With ``b = 0`` the
    indirect effect is null and the 95% interval of that distribution shows
    whether R²med is distinguishable from zero.

    Configuration methods (``set_*``, ``use_preset``) return ``self`` for
    method chaining and take effect on the next ``run``.

    Attributes:
        seed: Base random seed (default: 2137). ``None`` runs unseeded.
        parallel: Whether replications within a chunk run on a joblib pool.
        n_cores: Number of worker processes for parallel runs.

    Example:
        >>> sim = R2MedSimulation()
        >>> sim.use_preset("s1").set_simulations(200, bootstrap_samples=200)
        >>> result = sim.run()
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        """Initialise the simulation.

        Args:
            config: Starting configuration; defaults to
                ``SimulationConfig()`` (Scenario 1 paths, N=200,
                1000 replications x 1000 bootstraps).
        """
        self._config = config if config is not None else SimulationConfig()
        self.seed: Optional[int] = 2137
        self.parallel = False
        self.n_cores = 1
        self.chunk_size = CHUNK_SIZE

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> SimulationConfig:
        """Current configuration (immutable; replaced by the setters)."""
        return self._config

    # =========================================================================
    # Configuration methods
    # =========================================================================

    def set_paths(self, paths_string: str):
        """Set structural parameters from a ``name=value`` string.

        Recognised names: ``a``, ``c_prime`` (or ``c'``), ``b``,
        ``sigma_em``. Unspecified parameters keep their current values.

        Args:
            paths_string: e.g. ``"a=0.5, c_prime=0.5, b=0"``.

        Returns:
            self: For method chaining.

        Raises:
            TypeError: If *paths_string* is not a string.
            ValueError: If the string is empty or contains invalid
                assignments.
        """
        if not isinstance(paths_string, str):
            raise TypeError("paths_string must be a string")
        if not paths_string.strip():
            raise ValueError("paths_string cannot be empty")

        parsed, errors = _parser._parse(paths_string, _PATH_NAMES)
        if errors:
            raise ValueError("Error parsing paths:\n" + "\n".join(f"• {e}" for e in errors))
        if "sigma_em" in parsed:
            _validate_sigma_em(parsed["sigma_em"]).raise_if_invalid()

        self._config = self._config.with_updates(id="custom", name="Custom", description=paths_string.strip(), **parsed)
        return self

    def set_sigma_em(self, sigma_em: float):
        """Set the SD of the mediator error term (must be > 0).

        Returns:
            self: For method chaining.
        """
        _validate_sigma_em(sigma_em).raise_if_invalid()
        self._config = self._config.with_updates(sigma_em=float(sigma_em))
        return self

    def set_sample_size(self, n: int):
        """Set the sample size of every generated dataset.

        Returns:
            self: For method chaining.
        """
        _validate_count(n, "n").raise_if_invalid()
        self._config = self._config.with_updates(n=int(n))
        return self

    def set_simulations(self, replications: int, bootstrap_samples: Optional[int] = None):
        """Set the Monte Carlo counts.

        Args:
            replications: Number of outer replications.
            bootstrap_samples: Resamples per replication; unchanged if
                ``None``.

        Returns:
            self: For method chaining.
        """
        _validate_count(replications, "replications").raise_if_invalid()
        changes: Dict[str, Any] = {"replications": int(replications)}
        if bootstrap_samples is not None:
            _validate_count(bootstrap_samples, "bootstrap_samples").raise_if_invalid()
            changes["bootstrap_samples"] = int(bootstrap_samples)
        self._config = self._config.with_updates(**changes)
        return self

    def set_seed(self, seed: Optional[int] = None):
        """Set random seed for reproducibility.

        Args:
            seed: Non-negative integer up to 3,000,000,000.
                Pass ``None`` to enable fully random seeding.

        Returns:
            self: For method chaining.

        Raises:
            TypeError: If *seed* is not an integer or ``None``.
            ValueError: If *seed* is negative or exceeds the maximum.
        """
        error = _validate_seed(seed)
        if error == "seed must be an integer or None":
            raise TypeError(error)
        if error:
            raise ValueError(error)

        self.seed = seed
        if seed is not None:
            print(f"Seed set to: {seed}")
        else:
            print("Random seeding enabled")
        return self

    def set_parallel(self, enable: bool = True, n_cores: Optional[int] = None):
        """Enable or disable parallel processing of replications.

        Requires ``joblib`` to be installed. Falls back to sequential
        processing with a warning if ``joblib`` is unavailable.

        Args:
            enable: ``True`` for a joblib worker pool, ``False`` for
                sequential processing.
            n_cores: Number of CPU cores to use. Defaults to
                ``cpu_count // 2``.

        Returns:
            self: For method chaining.
        """
        if enable is False:
            self.parallel, self.n_cores = False, 1
            return self

        try:
            import joblib  # noqa: F401
        except ImportError:
            print("Warning: joblib not available. Install with: pip install joblib")
            print("Warning: Continuing with sequential processing.")
            self.parallel = False
            return self

        settings, result = _validate_parallel_settings(enable, n_cores)
        result.raise_if_invalid()
        self.parallel, self.n_cores = settings
        return self

    def use_preset(self, preset_id: str):
        """Load the structural parameters of a study preset.

        Sample size and Monte Carlo counts are kept.

        Args:
            preset_id: One of ``s1``–``s6`` or ``u1``–``u2``.

        Returns:
            self: For method chaining.
        """
        self._config = get_preset(preset_id, self._config)
        return self

    # =========================================================================
    # Running
    # =========================================================================

    def _resolve_reporter(self, progress_callback, print_results: bool, total_chunks: int) -> Optional[ProgressReporter]:
        if progress_callback is None:
            effective_cb = PrintReporter() if print_results else None
        elif progress_callback is False:
            effective_cb = None
        else:
            effective_cb = progress_callback
        return ProgressReporter(total_chunks, effective_cb) if effective_cb is not None else None

    def _run_config(
        self,
        config: SimulationConfig,
        progress_callback=None,
        cancel_check: Optional[Callable[[], bool]] = None,
        print_results: bool = False,
    ) -> SimulationResult:
        config.validate()
        runner = SimulationRunner(
            config,
            seed=self.seed,
            chunk_size=self.chunk_size,
            parallel=self.parallel,
            n_cores=self.n_cores,
        )
        reporter = self._resolve_reporter(progress_callback, print_results, compute_total_chunks(config.replications, self.chunk_size))
        return runner.run(progress=reporter, cancel_check=cancel_check)

    def run(
        self,
        print_results: bool = True,
        summary: str = "short",
        return_results: bool = True,
        progress_callback=None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> Optional[SimulationResult]:
        """
        Run the simulation for the current configuration.

        Args:
            print_results: Whether to print results
            summary: Output detail level ("short" or "long")
            return_results: Return the ``SimulationResult``
            progress_callback: Progress reporting control:
                - ``None`` (default): auto-use ``PrintReporter`` when
                  *print_results* is ``True``.
                - ``False``: explicitly disable progress.
                - callable ``(percent)``: custom callback, called once per
                  chunk of replications.
            cancel_check: Optional callable returning ``True`` to abort at
                the next chunk boundary.

        Returns:
            SimulationResult or None

        Raises:
            InvalidConfiguration: If the configuration is invalid.
            SimulationCancelled: If *cancel_check* requested cancellation.
        """
        result = self._run_config(self._config, progress_callback, cancel_check, print_results)

        if print_results:
            print(f"\n{'=' * 80}")
            print("R²MED MONTE CARLO BOOTSTRAP RESULTS")
            print(f"{'=' * 80}")
            print(_format_results("simulation", build_result_dict(result), summary))

        return result if return_results else None

    def run_scenarios(
        self,
        preset_ids: Optional[List[str]] = None,
        print_results: bool = True,
        return_results: bool = True,
        progress_callback=False,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> Optional[Dict[str, SimulationResult]]:
        """
        Run several study presets with the current N and Monte Carlo counts.

        Args:
            preset_ids: Presets to run (default: all).
            print_results: Print a comparison table.
            return_results: Return the results keyed by preset id.
            progress_callback: Per-scenario progress callback (disabled by
                default).
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            Dict of preset id to ``SimulationResult``, or None
        """
        runner = ScenarioRunner(self._config, preset_ids)
        results = runner.run(lambda cfg: self._run_config(cfg, progress_callback, cancel_check))

        if print_results:
            table = ScenarioRunner.comparison_table(results)
            print(f"\n{'=' * 80}")
            print("SCENARIO-BASED R²MED RESULTS")
            print(f"{'=' * 80}")
            print(_format_results("scenarios", table.reset_index().to_dict("records")))

        return results if return_results else None

    def plot_histogram(self, result: SimulationResult, bins: int = 40, show: bool = True):
        """Plot the distribution of bootstrap means of *result*.

        Returns:
            The matplotlib ``(fig, ax)`` pair.
        """
        return _create_histogram_plot(result, bins=bins, show=show)

    def __repr__(self):
        cfg = self._config
        return (
            f"R2MedSimulation(n={cfg.n}, replications={cfg.replications}, "
            f"bootstrap_samples={cfg.bootstrap_samples}, a={cfg.a}, c_prime={cfg.c_prime}, "
            f"b={cfg.b}, sigma_em={cfg.sigma_em}, seed={self.seed})"
        )

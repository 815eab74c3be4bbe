"""
Distributional checks of R²med under a null indirect effect.

Tests run on ALL available backends via the backend fixture.
"""

import contextlib
import io

import numpy as np
import pytest

from r2medsim.core import SimulationConfig, SimulationRunner, get_preset
from r2medsim.stats.data_generation import population_r2med
from tests.config import N_BOOT_FULL, N_BOOT_SPEC, N_REPS_FULL, N_REPS_SPEC, SEED

pytestmark = pytest.mark.slow


@pytest.fixture(autouse=True)
def _quiet():
    """Suppress stdout for all tests in this module."""
    with contextlib.redirect_stdout(io.StringIO()):
        yield


def _base():
    return SimulationConfig(n=200, replications=N_REPS_SPEC, bootstrap_samples=N_BOOT_SPEC)


class TestNullEffect:
    """Bootstrap means centre on the model-implied R²med."""

    def test_scenario_one_median(self, backend):
        """s1 has population R²med r_ym² = 0.04 even though b = 0."""
        config = get_preset("s1", _base())
        result = SimulationRunner(config, seed=SEED).run()
        s = result.summary

        assert s.min <= s.ci_lower <= s.p25 <= s.median <= s.p75 <= s.ci_upper <= s.max
        assert abs(s.median - population_r2med(0.5, 0.5, 0.0, 1.0)) < 0.03, f"[{backend}] median {s.median:.4f}"

    def test_zero_a_path_interval_brackets_zero(self, backend):
        """With a = 0 and b = 0 the population value is 0 and the interval contains it."""
        config = _base().with_updates(a=0.0)
        result = SimulationRunner(config, seed=SEED).run()
        s = result.summary

        assert s.ci_lower < 0 < s.ci_upper, f"[{backend}] interval [{s.ci_lower:.4f}, {s.ci_upper:.4f}]"
        assert abs(s.median) < 0.05

    @pytest.mark.parametrize("preset_id", ["s2", "s4", "s6"])
    def test_plausible_scenarios_track_population(self, backend, preset_id):
        config = get_preset(preset_id, _base())
        result = SimulationRunner(config, seed=SEED).run()
        assert abs(result.summary.median - result.population_r2med) < 0.04
        assert np.all(np.isfinite(result.boot_means))

    def test_unrealistic_scenario_finite(self, backend):
        """Near-collinear X and M still give finite bootstrap means."""
        config = get_preset("u1", _base())
        result = SimulationRunner(config, seed=SEED).run()
        assert result.n_degenerate == 0
        assert abs(result.summary.median - result.population_r2med) < 0.05


class TestStudyScaleNullScenario:
    """The study's default run: s1 paths, N = 200, 1000 x 1000."""

    def test_interval_brackets_zero(self, backend):
        """Median near zero and the 95% interval of bootstrap means contains 0."""
        if backend == "python":
            pytest.skip("10^6 resamples need the compiled backend")
        config = SimulationConfig(
            n=200,
            replications=N_REPS_FULL,
            bootstrap_samples=N_BOOT_FULL,
            a=0.5,
            c_prime=0.5,
            b=0.0,
            sigma_em=1.0,
        )
        result = SimulationRunner(config, seed=SEED).run()
        s = result.summary

        assert len(result.boot_means) == N_REPS_FULL
        assert abs(s.median) < 0.05, f"[{backend}] median {s.median:.4f}"
        assert s.ci_lower < 0 < s.ci_upper, f"[{backend}] interval [{s.ci_lower:.4f}, {s.ci_upper:.4f}]"

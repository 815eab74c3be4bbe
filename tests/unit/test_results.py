"""
Tests for simulation result assembly.
"""

import numpy as np
import pandas as pd
import pytest

from r2medsim.core import SimulationConfig, build_result_dict, build_simulation_result
from r2medsim.core.results import HISTOGRAM_BINS
from r2medsim.stats.summary import DegenerateSampleWarning


@pytest.fixture
def result():
    config = SimulationConfig(replications=100)
    rng = np.random.default_rng(11)
    return build_simulation_result(config, rng.normal(0.04, 0.02, 100), seed=5)


class TestBuildSimulationResult:
    """Test build_simulation_result."""

    def test_fields(self, result):
        assert len(result.boot_means) == 100
        assert result.seed == 5
        assert result.n_degenerate == 0
        assert result.summary.n_used == 100

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="Expected 10"):
            build_simulation_result(SimulationConfig(replications=10), np.zeros(9))

    def test_population_value(self, result):
        assert result.population_r2med == pytest.approx(0.04, abs=1e-9)

    def test_degenerate_counted(self):
        config = SimulationConfig(replications=4)
        with pytest.warns(DegenerateSampleWarning):
            res = build_simulation_result(config, [0.1, np.nan, 0.2, 0.3])
        assert res.n_degenerate == 1
        assert res.summary.n_used == 3
        assert np.isnan(res.boot_means[1])


class TestHistogram:
    """Test histogram binning."""

    def test_default_bins(self, result):
        counts, edges = result.histogram()
        assert len(counts) == HISTOGRAM_BINS == 40
        assert len(edges) == 41
        assert edges[0] == result.summary.min
        assert edges[-1] == pytest.approx(result.summary.max)
        assert counts.sum() == 100

    def test_equal_width(self, result):
        _, edges = result.histogram(10)
        widths = np.diff(edges)
        assert np.allclose(widths, widths[0])

    def test_constant_means(self):
        res = build_simulation_result(SimulationConfig(replications=3), [0.2, 0.2, 0.2])
        counts, edges = res.histogram(5)
        assert counts.sum() == 3
        assert edges[-1] > edges[0]

    def test_all_nan_raises(self):
        with pytest.warns(DegenerateSampleWarning):
            res = build_simulation_result(SimulationConfig(replications=2), [np.nan, np.nan])
        with pytest.raises(ValueError, match="finite"):
            res.histogram()


class TestResultViews:
    """Test DataFrame and dict views."""

    def test_to_frame(self, result):
        frame = result.to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ["replication", "boot_mean"]
        assert len(frame) == 100
        np.testing.assert_array_equal(frame["boot_mean"].to_numpy(), result.boot_means)

    def test_to_dict(self, result):
        d = build_result_dict(result)
        assert d == result.to_dict()
        assert d["model"]["seed"] == 5
        assert d["model"]["n"] == 200
        assert len(d["results"]["boot_means"]) == 100
        assert d["results"]["summary"]["median"] == result.summary.median
        assert d["results"]["ci_contains_zero"] == result.summary.contains_zero()

"""
Tests for progress reporting.
"""

import sys
from unittest.mock import MagicMock, patch

import pytest

from r2medsim.progress import (
    PrintReporter,
    ProgressReporter,
    SimulationCancelled,
    TqdmReporter,
    compute_total_chunks,
)


class TestComputeTotalChunks:
    """Test chunk count arithmetic."""

    @pytest.mark.parametrize(
        "replications, chunk_size, expected",
        [(25, 10, 3), (30, 10, 3), (1, 10, 1), (10, 10, 1), (1000, 10, 100), (7, 3, 3)],
    )
    def test_ceiling(self, replications, chunk_size, expected):
        assert compute_total_chunks(replications, chunk_size) == expected


class TestProgressReporter:
    """Test the chunk-counting wrapper."""

    def test_advance_reports_percent(self):
        seen = []
        reporter = ProgressReporter(4, seen.append)
        for _ in range(4):
            reporter.advance()
        assert seen == [25.0, 50.0, 75.0, 100.0]
        assert reporter.current == 4

    def test_advance_caps_at_total(self):
        seen = []
        reporter = ProgressReporter(2, seen.append)
        reporter.advance(5)
        assert reporter.current == 2
        assert seen == [100.0]

    def test_finish_fires_once(self):
        seen = []
        reporter = ProgressReporter(3, seen.append)
        reporter.advance()
        reporter.finish()
        reporter.finish()
        assert seen[-1] == 100.0
        assert seen.count(100.0) == 1

    def test_finish_after_complete_is_silent(self):
        callback = MagicMock()
        reporter = ProgressReporter(1, callback)
        reporter.advance()
        reporter.finish()
        callback.assert_called_once_with(100.0)


class TestPrintReporter:
    """Test console progress output."""

    def test_writes_to_stderr(self, capsys):
        reporter = PrintReporter()
        reporter(33.333)
        err = capsys.readouterr().err
        assert "Progress:  33.3%" in err
        assert not err.endswith("\n")

    def test_newline_at_completion(self, capsys):
        PrintReporter()(100.0)
        assert capsys.readouterr().err.endswith("\n")


class TestTqdmReporter:
    """Test the tqdm adapter with a mocked bar."""

    def test_updates_and_closes(self):
        bar = MagicMock()
        bar.n = 0.0

        def _update(delta):
            bar.n += delta

        bar.update.side_effect = _update
        mock_tqdm = MagicMock()
        mock_tqdm.tqdm.return_value = bar

        with patch.dict(sys.modules, {"tqdm": mock_tqdm}):
            reporter = TqdmReporter(desc="sim")
            reporter(50.0)
            reporter(100.0)

        mock_tqdm.tqdm.assert_called_once_with(total=100.0, unit="%", desc="sim")
        assert bar.update.call_count == 2
        bar.close.assert_called_once()


class TestSimulationCancelled:
    def test_is_exception(self):
        with pytest.raises(SimulationCancelled):
            raise SimulationCancelled("stop")

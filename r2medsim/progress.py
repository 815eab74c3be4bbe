"""
Progress reporting for R2MedSim simulations.

Provides a callback-based progress system that works from both Python scripts
and GUI applications. Progress is reported once per completed chunk of
replications as a percentage in ``(0, 100]``, ending at exactly ``100.0``.
"""

import sys
from typing import Callable


class SimulationCancelled(Exception):
    """Raised when a simulation is cancelled by the user."""

    pass


class ProgressReporter:
    """Wraps a ``percent`` callback with chunk counting.

    Tracks the number of completed chunks and fires the callback with
    ``completed / total * 100`` on every advance, so values strictly
    increase and the last one is exactly 100.

    Args:
        total: Total number of chunks.
        callback: Function called as ``callback(percent)``.
    """

    def __init__(self, total: int, callback: Callable[[float], None]):
        self.total = total
        self._callback = callback
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def advance(self, n: int = 1):
        """Advance the counter by *n* chunks and report the new percentage."""
        self._current = min(self._current + n, self.total)
        self._callback(self._current / self.total * 100)

    def finish(self):
        """Signal completion (fires a final 100.0 if not already there)."""
        if self._current < self.total:
            self._current = self.total
            self._callback(100.0)


class PrintReporter:
    """Console progress reporter; prints ``\\rProgress:  45.0%`` to stderr."""

    def __call__(self, percent: float):
        sys.stderr.write(f"\rProgress: {percent:5.1f}%")
        sys.stderr.flush()
        if percent >= 100.0:
            sys.stderr.write("\n")
            sys.stderr.flush()


class TqdmReporter:
    """Optional tqdm-based progress reporter (lazy import).

    Usage::

        from r2medsim.progress import TqdmReporter
        sim.run(progress_callback=TqdmReporter())
    """

    def __init__(self, **tqdm_kwargs):
        self._tqdm_kwargs = tqdm_kwargs
        self._bar = None

    def __call__(self, percent: float):
        from tqdm import tqdm

        if self._bar is None:
            self._bar = tqdm(total=100.0, unit="%", **self._tqdm_kwargs)

        delta = percent - self._bar.n
        if delta > 0:
            self._bar.update(delta)

        if percent >= 100.0:
            self._bar.close()
            self._bar = None


def compute_total_chunks(replications: int, chunk_size: int = 10) -> int:
    """Return the number of chunks needed for *replications*.

    Used to initialise ``ProgressReporter`` with an accurate total.

    Args:
        replications: Outer Monte Carlo replications.
        chunk_size: Replications per chunk.

    Returns:
        ``ceil(replications / chunk_size)``.
    """
    return -(-replications // chunk_size)

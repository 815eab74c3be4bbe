"""
Simulation execution for R2MedSim.

This module contains the Monte Carlo orchestrator: it drives many
independent generate-then-bootstrap replications in fixed-size chunks,
hands control back to the caller between chunks, and collects one
bootstrap mean per replication.
"""

from contextlib import ExitStack
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from ..backends import ComputeBackend, get_backend
from ..progress import ProgressReporter, SimulationCancelled, compute_total_chunks
from ..utils.validators import InvalidConfiguration, _validate_chunk_size, _validate_config, _validate_seed
from .config import SimulationConfig
from .results import SimulationResult, build_simulation_result

CHUNK_SIZE = 10
_SEED_MODULUS = 2**32


class ChunkProgress(NamedTuple):
    """State handed back after each completed chunk."""

    chunk: int
    total_chunks: int
    percent: float
    boot_means: List[float]


def _replication_seeds(seed: Optional[int], rep_id: int) -> Tuple[int, int]:
    """Dataset and bootstrap seeds for replication *rep_id* (``-1`` if unseeded)."""
    if seed is None:
        return -1, -1
    base = (seed + 4 * rep_id) % _SEED_MODULUS
    return base, (base + 1) % _SEED_MODULUS


def _run_replication(backend: ComputeBackend, config: SimulationConfig, data_seed: int, boot_seed: int) -> float:
    """One replication: generate a dataset, then bootstrap its R²med.

    The dataset lives only for the duration of this call.
    """
    data = backend.generate_dataset(
        int(config.n),
        float(config.a),
        float(config.c_prime),
        float(config.b),
        float(config.sigma_em),
        data_seed,
    )
    return float(backend.bootstrap_mean(data[0], data[1], data[2], int(config.bootstrap_samples), boot_seed))


class SimulationRunner:
    """Executes the nested Monte Carlo / bootstrap simulation.

    Replications are processed in chunks of ``chunk_size``. After each
    chunk the runner yields (see ``iter_chunks``), which is the only point
    where a host can interleave other work, poll for cancellation, or
    update a progress display. A replication is never split across chunks.

    With a seed, replication ``i`` draws its dataset from ``seed + 4*i``
    and its resample indices from ``seed + 4*i + 1``, so results do not
    depend on execution order or parallelism.
    """

    def __init__(
        self,
        config: SimulationConfig,
        seed: Optional[int] = None,
        chunk_size: int = CHUNK_SIZE,
        parallel: bool = False,
        n_cores: int = 1,
        backend: Optional[ComputeBackend] = None,
    ):
        """Initialise the simulation runner.

        Args:
            config: Validated simulation configuration.
            seed: Base random seed, or ``None`` to continue the global
                random stream.
            chunk_size: Replications per chunk.
            parallel: Dispatch each chunk's replications to a joblib pool.
            n_cores: Worker count when *parallel* is enabled.
            backend: Compute backend; defaults to ``get_backend()``.

        Raises:
            InvalidConfiguration: If the configuration, seed, or chunk size
                is invalid. Raised before any simulation work.
        """
        result = _validate_config(config).merge(_validate_chunk_size(chunk_size))
        result.raise_if_invalid()
        seed_error = _validate_seed(seed)
        if seed_error:
            raise InvalidConfiguration(seed_error)

        self.config = config
        self.seed = seed
        self.chunk_size = chunk_size
        self.parallel = parallel
        self.n_cores = n_cores
        self.backend = backend if backend is not None else get_backend()

    @property
    def total_chunks(self) -> int:
        return compute_total_chunks(self.config.replications, self.chunk_size)

    def _chunk_bounds(self, chunk: int) -> Tuple[int, int]:
        start = chunk * self.chunk_size
        return start, min(start + self.chunk_size, self.config.replications)

    def _run_chunk_sequential(self, start: int, end: int) -> List[float]:
        means = []
        for rep_id in range(start, end):
            data_seed, boot_seed = _replication_seeds(self.seed, rep_id)
            means.append(_run_replication(self.backend, self.config, data_seed, boot_seed))
        return means

    def _run_chunk_parallel(self, pool, start: int, end: int) -> List[float]:
        from joblib import delayed

        jobs = (delayed(_run_replication)(self.backend, self.config, *_replication_seeds(self.seed, rep_id)) for rep_id in range(start, end))
        return list(pool(jobs))

    def iter_chunks(self, cancel_check: Optional[Callable[[], bool]] = None) -> Iterator[ChunkProgress]:
        """Run the simulation lazily, one chunk per iteration.

        Args:
            cancel_check: Optional callable polled before every chunk;
                returning ``True`` aborts the run.

        Yields:
            ``ChunkProgress`` after each chunk, with
            ``percent = completed / total_chunks * 100``.

        Raises:
            SimulationCancelled: If *cancel_check* requests cancellation.
        """
        total = self.total_chunks
        with ExitStack() as stack:
            pool = self._open_pool(stack) if self.parallel else None

            for chunk in range(total):
                if cancel_check is not None and cancel_check():
                    raise SimulationCancelled("Simulation cancelled by user")

                start, end = self._chunk_bounds(chunk)
                if pool is not None:
                    try:
                        means = self._run_chunk_parallel(pool, start, end)
                    except Exception as e:
                        print(f"Warning: Parallel execution failed ({e}). Falling back to sequential.")
                        pool = None
                        means = self._run_chunk_sequential(start, end)
                else:
                    means = self._run_chunk_sequential(start, end)

                yield ChunkProgress(chunk, total, (chunk + 1) / total * 100, means)

    def _open_pool(self, stack: ExitStack):
        """Enter a reusable joblib pool for the lifetime of *stack*."""
        try:
            from joblib import Parallel
        except ImportError:
            print("Warning: joblib not available. Install with: pip install joblib")
            print("Warning: Continuing with sequential processing.")
            return None
        return stack.enter_context(Parallel(n_jobs=self.n_cores, backend="loky", verbose=0))

    def run(
        self,
        progress: Optional[Union[ProgressReporter, Callable[[float], None]]] = None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> SimulationResult:
        """Run every replication and summarise the collected means.

        Args:
            progress: Optional ``ProgressReporter`` (advanced once per
                chunk) or a plain ``callback(percent)``.
            cancel_check: Optional callable returning ``True`` to abort.

        Returns:
            ``SimulationResult`` with ``config.replications`` means.

        Raises:
            SimulationCancelled: If cancelled at a chunk boundary.
        """
        if progress is not None and not isinstance(progress, ProgressReporter):
            progress = ProgressReporter(self.total_chunks, progress)

        boot_means: List[float] = []
        for update in self.iter_chunks(cancel_check=cancel_check):
            boot_means.extend(update.boot_means)
            if progress is not None:
                progress.advance()

        if progress is not None:
            progress.finish()

        return build_simulation_result(self.config, np.asarray(boot_means), seed=self.seed)

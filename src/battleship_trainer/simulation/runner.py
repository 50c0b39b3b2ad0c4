"""
Parallel simulation runner.

Wraps a worker pool that plays batches of games on game instances. Two pool
flavours share one API:

- process pool (default): instances are pickled into the worker and the
  played instance is pickled back, so ownership moves with the job
- thread pool: the job holds the only live reference to its instance while
  it runs; numpy releases the GIL inside the scoring products
"""

from __future__ import annotations

import atexit
import logging
import multiprocessing as mp
import queue
from multiprocessing.pool import Pool, ThreadPool
from typing import List, Optional, Sequence, TYPE_CHECKING

from battleship_trainer.simulation.jobs import BatchJob, BatchResult
from battleship_trainer.simulation.worker import worker_init, play_batch

if TYPE_CHECKING:
    from battleship_trainer.games.battleship import BattleshipGame

logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = max(1, mp.cpu_count() - 1)

# ---------------------------------------------------------------------------
# Process cleanup
# ---------------------------------------------------------------------------

_active_runners: List["SimulationRunner"] = []


def _shutdown_all():
    for runner in _active_runners[:]:
        runner.shutdown(force=True)


if mp.current_process().name == 'MainProcess':
    atexit.register(_shutdown_all)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class SimulationRunner:
    """
    Manages the worker pool that plays game batches.

    run_wave() is the synchronous barrier used by epoch training; submit()
    is the asynchronous dispatch used by the self-feeding pipeline.
    """

    def __init__(self, num_workers: int = DEFAULT_WORKER_COUNT, use_threads: bool = False):
        if num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {num_workers}")
        self.num_workers = num_workers
        self.use_threads = use_threads
        self._pool: Optional[Pool] = None

        _active_runners.append(self)

    def __enter__(self):
        self._ensure_pool()
        return self

    def __exit__(self, exc_type, *_):
        self.shutdown(force=exc_type is not None)

    def _ensure_pool(self) -> Pool:
        if self._pool is None:
            if self.use_threads:
                self._pool = ThreadPool(processes=self.num_workers)
            else:
                self._pool = Pool(processes=self.num_workers, initializer=worker_init)
        return self._pool

    def shutdown(self, force: bool = False) -> None:
        if self in _active_runners:
            _active_runners.remove(self)

        if self._pool is None:
            return

        pool, self._pool = self._pool, None
        pool.terminate() if force else pool.close()
        pool.join()

    def run_wave(
        self,
        instances: Sequence["BattleshipGame"],
        games_per_instance: int,
    ) -> List[BatchResult]:
        """
        Play one batch on every instance and block until all have finished.

        Results come back in instance order.
        """
        if games_per_instance <= 0 or not instances:
            return []

        pool = self._ensure_pool()
        jobs = [
            BatchJob(index=i, instance=instance, games=games_per_instance)
            for i, instance in enumerate(instances)
        ]
        try:
            return pool.map(play_batch, jobs, chunksize=1)
        except KeyboardInterrupt:
            logger.info("Interrupted, wave abandoned")
            raise

    def submit(self, job: BatchJob, channel: "queue.Queue") -> None:
        """
        Dispatch one batch without waiting.

        The BatchResult (or the exception that escaped the worker) is put on
        ``channel`` when the batch completes.
        """
        pool = self._ensure_pool()
        pool.apply_async(
            play_batch,
            (job,),
            callback=channel.put,
            error_callback=channel.put,
        )

"""
Worker logic for parallel simulation.

Workers receive a BatchJob, play its games on the job's own instance and
return a BatchResult. A failure inside one game aborts the rest of that
instance's batch only; it is reported in the result instead of raised, so
the pool keeps serving every other instance.
"""

from __future__ import annotations

import logging
import signal
import time

from battleship_trainer.core.errors import BattleshipError
from battleship_trainer.simulation.jobs import BatchJob, BatchResult

logger = logging.getLogger(__name__)


def worker_init() -> None:
    """Process workers ignore SIGINT; only the main process handles Ctrl+C."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)


def play_batch(job: BatchJob) -> BatchResult:
    """Play ``job.games`` games on ``job.instance``."""
    game = job.instance
    wins = [0, 0]
    shots = 0
    played = 0
    error = None
    start = time.perf_counter()

    for _ in range(job.games):
        try:
            result = game.play()
        except BattleshipError as e:
            error = f"{type(e).__name__}: {e}"
            logger.warning(
                "Instance %d aborted after %d games: %s", job.index, played, error
            )
            break
        wins[result.winner] += 1
        shots += sum(result.shots)
        played += 1

    return BatchResult(
        index=job.index,
        instance=game,
        games_played=played,
        wins=(wins[0], wins[1]),
        shots=shots,
        elapsed=time.perf_counter() - start,
        error=error,
    )

"""
Job data structures for parallel simulation.

Defines the input (BatchJob) and output (BatchResult) types used by pool
workers, plus the TrainingReport handed to progress callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from battleship_trainer.games.battleship import BattleshipGame


@dataclass(frozen=True)
class BatchJob:
    """
    Self-contained job for a worker.

    The job carries its game instance; while the job is in flight nothing
    else holds that instance.
    """
    index: int                 # position of the instance in the orchestrator's pool
    instance: "BattleshipGame"
    games: int


@dataclass
class BatchResult:
    """
    Result from a completed (or aborted) batch.

    ``instance`` is the game after the batch ran. With process workers it is
    a different object from the one that was sent, so the orchestrator must
    always store it back.
    """
    index: int
    instance: "BattleshipGame"
    games_played: int
    wins: Tuple[int, int]
    shots: int
    elapsed: float
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class TrainingReport:
    """Progress snapshot after an epoch (or a pipeline completion)."""
    step: int
    games: int          # cumulative games played
    elapsed: float      # seconds since training started
    workers: int
    failures: int = 0   # cumulative aborted batches
    first_player_wins: int = 0

    @property
    def games_per_second(self) -> float:
        return self.games / self.elapsed if self.elapsed > 0 else 0.0

    @property
    def games_per_second_per_worker(self) -> float:
        return self.games_per_second / self.workers if self.workers else 0.0

"""
Configuration and player registry.
"""

from typing import Optional

from battleship_trainer.agent.heuristic import LEARNING_RATE, MIN_WEIGHT, WeightedHeuristicAgent
from battleship_trainer.agent.random_player import RandomPlayer
from battleship_trainer.games.layouts import LAYOUTS
from battleship_trainer.simulation import DEFAULT_WORKER_COUNT


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

PLAYERS = {
    "heuristic": WeightedHeuristicAgent,
    "random": RandomPlayer,
}

STRATEGIES = ("epoch", "pipeline")


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

DEFAULT_PARALLEL = 6
DEFAULT_EPOCHS = 10
DEFAULT_BATCH_SIZE = 200


def _require_positive(name: str, value: int) -> int:
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


class Config:
    """Training configuration with sensible defaults."""

    def __init__(
        self,
        parallel: int = DEFAULT_PARALLEL,
        epochs: int = DEFAULT_EPOCHS,
        batch_size: int = DEFAULT_BATCH_SIZE,
        num_workers: Optional[int] = None,
        strategy: str = "epoch",
        use_threads: bool = False,
        opponent: str = "heuristic",
        learning_rate: float = LEARNING_RATE,
        min_weight: float = MIN_WEIGHT,
        learn_hits: bool = True,
        learn_misses: bool = True,
        layout: str = "canonical",
        seed: Optional[int] = None,
    ):
        self.parallel = _require_positive("parallel", parallel)
        self.epochs = _require_positive("epochs", epochs)
        self.batch_size = _require_positive("batch_size", batch_size)
        self.num_workers = _require_positive(
            "num_workers",
            min(parallel, DEFAULT_WORKER_COUNT) if num_workers is None else num_workers,
        )

        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {strategy}. Available: {', '.join(STRATEGIES)}")
        if opponent not in PLAYERS:
            raise KeyError(f"Unknown opponent: {opponent}. Available: {', '.join(PLAYERS)}")
        if layout not in LAYOUTS:
            raise KeyError(f"Unknown layout: {layout}. Available: {', '.join(LAYOUTS)}")
        if learning_rate < 0:
            raise ValueError(f"learning_rate must be non-negative, got {learning_rate}")
        if min_weight <= 0:
            raise ValueError(f"min_weight must be positive, got {min_weight}")

        self.strategy = strategy
        self.use_threads = use_threads
        self.opponent = opponent
        self.learning_rate = learning_rate
        self.min_weight = min_weight
        self.learn_hits = learn_hits
        self.learn_misses = learn_misses
        self.layout = layout
        self.seed = seed

        # Derive dependent values
        self.total_batches = self.epochs * self.parallel
        self.total_games = self.total_batches * self.batch_size


# Default configuration
DEFAULT_CONFIG = Config()

"""
Simulation module - parallel game execution and training.

Provides the infrastructure for playing many independent games in parallel
and synchronising the learned models between them.
"""

from battleship_trainer.simulation.jobs import BatchJob, BatchResult, TrainingReport
from battleship_trainer.simulation.runner import SimulationRunner, DEFAULT_WORKER_COUNT
from battleship_trainer.simulation.training import (
    run_epochs,
    run_pipeline,
    synchronize,
    consensus_model,
    broadcast,
)

__all__ = [
    "BatchJob",
    "BatchResult",
    "TrainingReport",
    "SimulationRunner",
    "DEFAULT_WORKER_COUNT",
    "run_epochs",
    "run_pipeline",
    "synchronize",
    "consensus_model",
    "broadcast",
]

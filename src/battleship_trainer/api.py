"""
Public API for battleship self-play training.

Usage:
    from battleship_trainer import train, Config

    model = train(Config(parallel=4, epochs=5, batch_size=100))
    print(model.total_mass)
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from battleship_trainer.agent.model import WeightedModel
from battleship_trainer.simulation import (
    DEFAULT_WORKER_COUNT,
    SimulationRunner,
    TrainingReport,
    consensus_model,
    run_epochs,
    run_pipeline,
)
from battleship_trainer.utils.config import Config
from battleship_trainer.utils.factory import create_instances

logger = logging.getLogger(__name__)


def format_report(report: TrainingReport, label: str = "epoch") -> str:
    """One human-readable progress line."""
    line = (
        f"done {label} {report.step}, in {int(report.elapsed * 1000)}ms, "
        f"average games/s: {report.games_per_second:.1f}, "
        f"games/s/worker: {report.games_per_second_per_worker:.1f}"
    )
    if report.failures:
        line += f", aborted batches: {report.failures}"
    return line


def train(
    config: Optional[Config] = None,
    on_report: Optional[Callable[[TrainingReport], None]] = None,
) -> Optional[WeightedModel]:
    """
    Main entry point: build the instance pool and train it.

    Parameters
    ----------
    config : Config, optional
        Training configuration (defaults to Config()).
    on_report : callable, optional
        Receives every TrainingReport. Defaults to printing a progress line.

    Returns
    -------
    WeightedModel or None
        The final merged model; None only if no instance has a learning player.
    """
    config = config or Config()
    label = "batch" if config.strategy == "pipeline" else "epoch"
    if on_report is None:
        def on_report(report: TrainingReport) -> None:
            print(format_report(report, label))

    instances = create_instances(config)
    runner = SimulationRunner(config.num_workers, use_threads=config.use_threads)

    print(
        f"Running {config.parallel} games on {config.num_workers} "
        f"{'threads' if config.use_threads else 'workers'}, "
        f"batch of {config.batch_size}, for {config.epochs} epochs ({config.strategy})"
    )

    try:
        with runner:
            if config.strategy == "pipeline":
                return run_pipeline(
                    runner, instances,
                    batches=config.total_batches,
                    batch_size=config.batch_size,
                    on_report=on_report,
                )
            return run_epochs(
                runner, instances,
                epochs=config.epochs,
                batch_size=config.batch_size,
                on_report=on_report,
            )

    except KeyboardInterrupt:
        print("\nInterrupted - shutting down...")
        runner.shutdown(force=True)
        return consensus_model(instances)
    except Exception:
        logger.exception("Fatal error in training loop")
        raise


__all__ = [
    "train",
    "format_report",
    "Config",
    "SimulationRunner",
    "DEFAULT_WORKER_COUNT",
]

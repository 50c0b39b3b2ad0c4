"""
Training orchestration.

Two scheduling strategies over the same pool of game instances:

- Epoch/barrier: every instance plays a batch, all wait at the barrier, the
  learned models of all instances are averaged and broadcast back.
- Self-feeding pipeline: each completed batch is reported through a
  completion channel and its instance is immediately redispatched; models
  are folded into a running consensus as results arrive.

Instances are only ever touched by the orchestrator between batches, so
merge and broadcast need no locks.
"""

from __future__ import annotations

import queue
import time
from typing import Callable, Collection, List, MutableSequence, Optional, TYPE_CHECKING

from battleship_trainer.agent.model import WeightedModel
from battleship_trainer.simulation.jobs import BatchJob, BatchResult, TrainingReport

if TYPE_CHECKING:
    from battleship_trainer.games.battleship import BattleshipGame
    from battleship_trainer.simulation.runner import SimulationRunner

ReportCallback = Callable[[TrainingReport], None]


# ---------------------------------------------------------------------------
# Model synchronisation
# ---------------------------------------------------------------------------

def consensus_model(
    instances: List["BattleshipGame"],
    skip: Collection[int] = (),
) -> Optional[WeightedModel]:
    """Uniform average of every learning player's model, or None if there are none."""
    models = [
        player.model
        for i, instance in enumerate(instances)
        if i not in skip
        for player in instance.learners()
    ]
    if not models:
        return None
    return WeightedModel.mean(models)


def broadcast(instances: List["BattleshipGame"], model: WeightedModel) -> None:
    """Every learning player adopts ``model``."""
    for instance in instances:
        for player in instance.learners():
            player.model.adopt(model)


def synchronize(
    instances: List["BattleshipGame"],
    skip: Collection[int] = (),
) -> Optional[WeightedModel]:
    """
    Merge the models of all instances not in ``skip`` and broadcast the
    result to all instances, skipped ones included.
    """
    merged = consensus_model(instances, skip)
    if merged is not None:
        broadcast(instances, merged)
    return merged


def _fold(consensus: Optional[WeightedModel], instance: "BattleshipGame") -> Optional[WeightedModel]:
    """
    Merge one instance into the running consensus, then let it adopt the result.

    Each merge is a pairwise average, so the consensus is an exponentially
    weighted fold: the most recently merged model counts for half. Once a
    consensus exists, seat 1 of a self-play instance is merged last and
    weighs twice as much as seat 0. ``synchronize`` gives the uniform mean
    instead.
    """
    learners = instance.learners()
    for player in learners:
        if consensus is None:
            consensus = player.model.copy()
        else:
            consensus.merge(player.model)
    for player in learners:
        player.model.adopt(consensus)
    return consensus


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def run_epochs(
    runner: "SimulationRunner",
    instances: MutableSequence["BattleshipGame"],
    epochs: int,
    batch_size: int,
    on_report: Optional[ReportCallback] = None,
) -> Optional[WeightedModel]:
    """
    Epoch/barrier training.

    Each epoch every instance plays ``batch_size`` games in parallel. After
    the barrier, instances whose batch did not abort are merged and every
    instance adopts the merged model.

    Returns:
        The final merged model (None if no instance has a learning player).
    """
    start = time.perf_counter()
    games = failures = first_player_wins = 0
    merged: Optional[WeightedModel] = None

    for epoch in range(1, epochs + 1):
        results = runner.run_wave(instances, batch_size)

        failed = set()
        for result in results:
            instances[result.index] = result.instance
            games += result.games_played
            first_player_wins += result.wins[0]
            if result.failed:
                failed.add(result.index)
        failures += len(failed)

        merged = synchronize(instances, skip=failed)

        if on_report is not None:
            on_report(TrainingReport(
                step=epoch,
                games=games,
                elapsed=time.perf_counter() - start,
                workers=runner.num_workers,
                failures=failures,
                first_player_wins=first_player_wins,
            ))

    if merged is None:
        merged = consensus_model(instances)
    return merged


def run_pipeline(
    runner: "SimulationRunner",
    instances: MutableSequence["BattleshipGame"],
    batches: int,
    batch_size: int,
    sync: bool = True,
    on_report: Optional[ReportCallback] = None,
) -> Optional[WeightedModel]:
    """
    Self-feeding pipeline training.

    Dispatches one batch per instance, then waits on the completion channel.
    Every completed instance is folded into the running consensus (when
    ``sync`` is set) and redispatched until ``batches`` batches have been
    dispatched in total. Reports are cumulative, one per completion.

    Returns:
        The consensus model (None if no instance has a learning player).
    """
    if not instances or batches <= 0:
        return consensus_model(instances)

    channel: "queue.Queue[BatchResult | BaseException]" = queue.Queue()
    start = time.perf_counter()
    dispatched = pending = completed = 0
    games = failures = first_player_wins = 0
    consensus: Optional[WeightedModel] = None

    for index in range(min(len(instances), batches)):
        runner.submit(BatchJob(index, instances[index], batch_size), channel)
        dispatched += 1
        pending += 1

    while pending:
        result = channel.get()
        pending -= 1
        if isinstance(result, BaseException):
            raise result

        instances[result.index] = result.instance
        completed += 1
        games += result.games_played
        first_player_wins += result.wins[0]

        if result.failed:
            failures += 1
        elif sync:
            consensus = _fold(consensus, result.instance)

        if on_report is not None:
            on_report(TrainingReport(
                step=completed,
                games=games,
                elapsed=time.perf_counter() - start,
                workers=runner.num_workers,
                failures=failures,
                first_player_wins=first_player_wins,
            ))

        if dispatched < batches:
            runner.submit(
                BatchJob(result.index, instances[result.index], batch_size), channel
            )
            dispatched += 1
            pending += 1

    if consensus is not None:
        broadcast(instances, consensus)
        return consensus
    return consensus_model(instances)

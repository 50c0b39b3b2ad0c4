"""
Factory functions for creating players and game instances.
"""

from typing import List

import numpy as np

from battleship_trainer.agent.heuristic import WeightedHeuristicAgent
from battleship_trainer.agent.player import Player
from battleship_trainer.games.battleship import BattleshipGame
from battleship_trainer.utils.config import PLAYERS, Config


def create_player(kind: str, config: Config, rng: np.random.Generator) -> Player:
    """
    Create a player of a registered kind.

    Args:
        kind: Key from PLAYERS registry (e.g., "heuristic")
        config: Supplies the learning hyper-parameters
        rng: Generator owned exclusively by the new player

    Returns:
        Configured player
    """
    if kind not in PLAYERS:
        available = ", ".join(PLAYERS.keys())
        raise KeyError(f"Unknown player: {kind}. Available: {available}")

    if PLAYERS[kind] is WeightedHeuristicAgent:
        return WeightedHeuristicAgent(
            learning_rate=config.learning_rate,
            min_weight=config.min_weight,
            learn_hits=config.learn_hits,
            learn_misses=config.learn_misses,
            layout=config.layout,
            rng=rng,
        )
    return PLAYERS[kind](rng=rng)


def create_game(config: Config, seed: np.random.SeedSequence) -> BattleshipGame:
    """
    Create one game instance: a heuristic agent in seat 0 and the configured
    opponent in seat 1.
    """
    first, second = seed.spawn(2)
    return BattleshipGame(
        create_player("heuristic", config, np.random.default_rng(first)),
        create_player(config.opponent, config, np.random.default_rng(second)),
    )


def create_instances(config: Config) -> List[BattleshipGame]:
    """
    Create ``config.parallel`` independent game instances.

    All seeds derive from one SeedSequence, so a fixed ``config.seed`` makes
    the initial instances reproducible.
    """
    root = np.random.SeedSequence(config.seed)
    return [create_game(config, s) for s in root.spawn(config.parallel)]

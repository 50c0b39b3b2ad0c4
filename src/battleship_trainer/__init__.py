"""
Battleship Trainer - heuristic battleship agents trained by parallel self-play.

This package simulates two-player battleship games between weighted-heuristic
agents and trains them by playing many independent games concurrently,
periodically averaging the agents' learned weights.

Quick Start:
    from battleship_trainer import train, Config

    model = train(Config(parallel=4, epochs=5, batch_size=100))

Modules:
    core       - Constants, enums and the error taxonomy
    games      - Grid geometry, boards and the game state machine
    agent      - Player interface, weighted model and the heuristic agent
    simulation - Parallel batch execution and training strategies
    utils      - Configuration and factories
"""

from battleship_trainer.api import (
    train,
    format_report,
    SimulationRunner,
    DEFAULT_WORKER_COUNT,
)
from battleship_trainer.agent.heuristic import WeightedHeuristicAgent
from battleship_trainer.agent.model import WeightedModel
from battleship_trainer.agent.player import LearningPlayer, Player
from battleship_trainer.games import BattleshipGame, GameResult
from battleship_trainer.utils.config import Config

__version__ = "1.0.0"

__all__ = [
    # Main API
    "train",
    "format_report",
    "Config",
    "SimulationRunner",
    "DEFAULT_WORKER_COUNT",
    # Game & agents
    "BattleshipGame",
    "GameResult",
    "Player",
    "LearningPlayer",
    "WeightedHeuristicAgent",
    "WeightedModel",
]

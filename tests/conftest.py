"""
Shared test fixtures for battleship_trainer tests.

Design principles:
- Deterministic: every random source is a seeded Generator
- Scripted players for exact state-machine checks
- Thread pools for orchestration tests (no pickling, fast start-up)
"""

from typing import Iterable, List, Optional

import numpy as np
import pytest

from battleship_trainer.agent.heuristic import WeightedHeuristicAgent
from battleship_trainer.agent.player import Player
from battleship_trainer.games.aiming_board import AimingBoard
from battleship_trainer.games.battleship import BattleshipGame
from battleship_trainer.games.layouts import canonical_layout
from battleship_trainer.games.target_board import TargetBoard


# =============================================================================
# Helper Players
# =============================================================================

class ScriptedPlayer(Player):
    """Fires at a fixed sequence of cells and remembers its outcomes."""

    def __init__(self, shots: Iterable[int], board: Optional[TargetBoard] = None):
        self.shots = list(shots)
        self.board = board
        self.outcomes: List[bool] = []
        self.new_games = 0
        self._next = 0

    def new_game(self) -> None:
        self.new_games += 1
        self._next = 0

    def place_ships(self) -> TargetBoard:
        return self.board if self.board is not None else canonical_layout()

    def take_shot(self, aiming_board: AimingBoard) -> int:
        shot = self.shots[self._next]
        self._next += 1
        return shot

    def finish_game(self, won: bool) -> None:
        self.outcomes.append(won)


# Cells covered by the canonical layout (columns 0-4 from row 0)
CANONICAL_CELLS = sorted(canonical_layout().cells())
# Cells in rows 5-9, never covered by the canonical layout
OPEN_WATER = list(range(50, 100))


# =============================================================================
# Random Fixtures
# =============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


# =============================================================================
# Board Fixtures
# =============================================================================

@pytest.fixture
def target_board() -> TargetBoard:
    """Empty board requiring the standard fleet."""
    return TargetBoard()


@pytest.fixture
def aiming_board() -> AimingBoard:
    return AimingBoard()


# =============================================================================
# Agent & Game Fixtures
# =============================================================================

@pytest.fixture
def agent() -> WeightedHeuristicAgent:
    """Heuristic agent with a seeded generator."""
    return WeightedHeuristicAgent(rng=np.random.default_rng(7))


@pytest.fixture
def agent_pair() -> List[WeightedHeuristicAgent]:
    return [
        WeightedHeuristicAgent(rng=np.random.default_rng(11)),
        WeightedHeuristicAgent(rng=np.random.default_rng(12)),
    ]


@pytest.fixture
def heuristic_game(agent_pair) -> BattleshipGame:
    """Self-play game between two fresh heuristic agents."""
    return BattleshipGame(*agent_pair)


def make_instances(count: int, seed: int = 0) -> List[BattleshipGame]:
    """Independent self-play instances, each with its own generators."""
    root = np.random.SeedSequence(seed)
    instances = []
    for s in root.spawn(count):
        a, b = s.spawn(2)
        instances.append(BattleshipGame(
            WeightedHeuristicAgent(rng=np.random.default_rng(a)),
            WeightedHeuristicAgent(rng=np.random.default_rng(b)),
        ))
    return instances


@pytest.fixture
def instances() -> List[BattleshipGame]:
    return make_instances(3)

"""
WeightedHeuristicAgent - the learning shot-selection policy.

Each shot:
    1. score every cell from the WeightedModel and the agent's aiming board
    2. zero cells that were already fired upon
    3. sample a cell proportionally to its score
    4. record (hits, misses, cell) as a decision

At game end every recorded decision is credited uniformly: the chosen cell's
base weight and its rows in the participating matrices move by
+learning_rate after a win and -learning_rate after a loss. Touched entries
are floored at ``min_weight`` so every score stays strictly positive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from battleship_trainer.agent.model import BASE_WEIGHT, INITIAL_WEIGHT, WeightedModel
from battleship_trainer.agent.player import LearningPlayer
from battleship_trainer.agent.sampling import sample_cell
from battleship_trainer.core.types import SHIP_LENGTHS
from battleship_trainer.games.aiming_board import AimingBoard
from battleship_trainer.games.layouts import LAYOUTS
from battleship_trainer.games.target_board import TargetBoard

LEARNING_RATE = 0.01
MIN_WEIGHT = 0.001


@dataclass
class Decision:
    """Snapshot of what the agent saw when it chose a cell."""
    hits: np.ndarray
    misses: np.ndarray
    shot: int


class WeightedHeuristicAgent(LearningPlayer):
    """Samples shots from a learned linear scoring model."""

    def __init__(
        self,
        learning_rate: float = LEARNING_RATE,
        min_weight: float = MIN_WEIGHT,
        learn_hits: bool = True,
        learn_misses: bool = True,
        layout: str = "canonical",
        ship_lengths=SHIP_LENGTHS,
        rng: Optional[np.random.Generator] = None,
        model: Optional[WeightedModel] = None,
        base_weight: float = BASE_WEIGHT,
        initial_weight: float = INITIAL_WEIGHT,
    ):
        if layout not in LAYOUTS:
            raise KeyError(f"Unknown layout: {layout}. Available: {', '.join(LAYOUTS)}")
        if min_weight <= 0:
            raise ValueError(f"min_weight must be positive, got {min_weight}")

        self.learning_rate = learning_rate
        self.min_weight = min_weight
        self.learn_hits = learn_hits
        self.learn_misses = learn_misses
        self.layout = layout
        self.ship_lengths = tuple(ship_lengths)
        self.rng = rng if rng is not None else np.random.default_rng()
        self._model = model if model is not None else WeightedModel.initial(
            base_weight=base_weight,
            hit_weight=initial_weight,
            miss_weight=initial_weight,
        )
        self.decisions: List[Decision] = []

    @property
    def model(self) -> WeightedModel:
        return self._model

    def new_game(self) -> None:
        self.decisions = []

    def place_ships(self) -> TargetBoard:
        return LAYOUTS[self.layout](self.rng, self.ship_lengths)

    def take_shot(self, aiming_board: AimingBoard) -> int:
        scores = self._model.scores(aiming_board.hits, aiming_board.misses)
        scores *= aiming_board.targetable
        shot = sample_cell(scores, self.rng)
        self.decisions.append(
            Decision(aiming_board.hits.copy(), aiming_board.misses.copy(), shot)
        )
        return shot

    def finish_game(self, won: bool) -> None:
        if not self.decisions:
            return

        step = self.learning_rate if won else -self.learning_rate
        shots = np.fromiter((d.shot for d in self.decisions), dtype=np.intp,
                            count=len(self.decisions))
        m = self._model

        np.add.at(m.base_weights, shots, step)
        np.maximum(m.base_weights, self.min_weight, out=m.base_weights)

        if self.learn_hits:
            hits = np.stack([d.hits for d in self.decisions])
            self._nudge_rows(m.hits_weights, shots, step * hits)
        if self.learn_misses:
            misses = np.stack([d.misses for d in self.decisions])
            self._nudge_rows(m.misses_weights, shots, step * misses)

    def _nudge_rows(self, weights: np.ndarray, rows: np.ndarray, delta: np.ndarray) -> None:
        np.add.at(weights, rows, delta)
        weights[rows] = np.maximum(weights[rows], self.min_weight)

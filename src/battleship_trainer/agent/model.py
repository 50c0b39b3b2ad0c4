"""
WeightedModel - the learnable scoring model of a heuristic agent.

    score = base_weights + hits_weights @ hits + misses_weights @ misses

Row j of each matrix holds how much having hit (or missed) every other cell
adds to the desirability of cell j. The learning update in
WeightedHeuristicAgent nudges exactly those rows, so scoring and learning
share one axis convention.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from battleship_trainer.core.types import CELL_COUNT

# Starting weights of a fresh model
BASE_WEIGHT = 10.0
INITIAL_WEIGHT = 1000.0


@dataclass(eq=False)
class WeightedModel:
    base_weights: np.ndarray    # (CELL_COUNT,)
    hits_weights: np.ndarray    # (CELL_COUNT, CELL_COUNT)
    misses_weights: np.ndarray  # (CELL_COUNT, CELL_COUNT)

    @classmethod
    def initial(
        cls,
        cell_count: int = CELL_COUNT,
        base_weight: float = BASE_WEIGHT,
        hit_weight: float = INITIAL_WEIGHT,
        miss_weight: float = INITIAL_WEIGHT,
    ) -> "WeightedModel":
        return cls(
            base_weights=np.full(cell_count, base_weight, dtype=np.float64),
            hits_weights=np.full((cell_count, cell_count), hit_weight, dtype=np.float64),
            misses_weights=np.full((cell_count, cell_count), miss_weight, dtype=np.float64),
        )

    def scores(self, hits: np.ndarray, misses: np.ndarray) -> np.ndarray:
        """Per-cell desirability before masking out fired-upon cells."""
        return self.base_weights + self.hits_weights @ hits + self.misses_weights @ misses

    def copy(self) -> "WeightedModel":
        return WeightedModel(
            self.base_weights.copy(),
            self.hits_weights.copy(),
            self.misses_weights.copy(),
        )

    def merge(self, other: "WeightedModel") -> None:
        """In-place elementwise average with ``other``."""
        for mine, theirs in self._pairs(other):
            mine += theirs
            mine *= 0.5

    def adopt(self, other: "WeightedModel") -> None:
        """In-place copy of ``other``'s weights."""
        for mine, theirs in self._pairs(other):
            np.copyto(mine, theirs)

    def _pairs(self, other: "WeightedModel"):
        return (
            (self.base_weights, other.base_weights),
            (self.hits_weights, other.hits_weights),
            (self.misses_weights, other.misses_weights),
        )

    @staticmethod
    def mean(models: Iterable["WeightedModel"]) -> "WeightedModel":
        """Uniform average of any number of models."""
        models = list(models)
        if not models:
            raise ValueError("Cannot average zero models")

        total = models[0].copy()
        for m in models[1:]:
            for mine, theirs in total._pairs(m):
                mine += theirs
        if len(models) > 1:
            scale = 1.0 / len(models)
            for arr in (total.base_weights, total.hits_weights, total.misses_weights):
                arr *= scale
        return total

    def equals(self, other: "WeightedModel") -> bool:
        """Bit-for-bit equality of all three tensors."""
        return all(np.array_equal(a, b) for a, b in self._pairs(other))

    @property
    def total_mass(self) -> float:
        """Sum of the base weights."""
        return float(self.base_weights.sum())

    @property
    def cell_count(self) -> int:
        return self.base_weights.shape[0]

"""
Proportional shot sampling.

Cells are drawn with probability proportional to their score. Cells scored
zero (already fired upon) occupy a zero-width slice of the cumulative sum and
can never be drawn.
"""

from __future__ import annotations

import numpy as np

from battleship_trainer.core.errors import InvalidDistributionError


def sample_cell(scores: np.ndarray, rng: np.random.Generator) -> int:
    """
    Draw one index with probability proportional to ``scores``.

    Raises:
        InvalidDistributionError: no score is positive, or a score is negative
            or not finite.
    """
    cumulative = np.cumsum(scores)
    total = cumulative[-1] if cumulative.size else 0.0

    if not np.isfinite(total) or total <= 0.0:
        raise InvalidDistributionError(f"Cannot sample from scores summing to {total}")
    if scores.min() < 0.0:
        raise InvalidDistributionError("Scores must be non-negative")

    cell = int(np.searchsorted(cumulative, rng.random() * total, side="right"))
    if cell >= scores.size:
        # Rounding put the draw on the upper edge: take the last positive cell
        cell = int(np.flatnonzero(scores)[-1])
    return cell

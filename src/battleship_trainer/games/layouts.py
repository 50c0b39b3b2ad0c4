"""
Ship layouts - placement routines that build a complete TargetBoard.

Placement is not the learned behaviour, so agents may use the fixed
canonical layout; the random layout exists for opponents that should not
be trivially predictable.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from battleship_trainer.core.errors import InvalidPlacementError
from battleship_trainer.core.types import BOARD_WIDTH, CELL_COUNT, SHIP_LENGTHS, Orientation
from battleship_trainer.games.grid import cell_index
from battleship_trainer.games.target_board import TargetBoard

MAX_ATTEMPTS = 1000
_ORIENTATIONS = (Orientation.HORIZONTAL, Orientation.VERTICAL)


def canonical_layout(ship_lengths: Iterable[int] = SHIP_LENGTHS) -> TargetBoard:
    """Ship i stands vertically in column i, starting on row 0."""
    lengths = list(ship_lengths)
    board = TargetBoard(lengths)
    if len(lengths) > BOARD_WIDTH:
        raise InvalidPlacementError(
            f"Canonical layout has {BOARD_WIDTH} columns for {len(lengths)} ships"
        )
    for col, length in enumerate(lengths):
        if not board.place_ship(cell_index(0, col), length, Orientation.VERTICAL):
            raise InvalidPlacementError(
                f"Canonical layout cannot place length {length} in column {col}"
            )
    return board


def random_layout(
    rng: np.random.Generator,
    ship_lengths: Iterable[int] = SHIP_LENGTHS,
    max_attempts: int = MAX_ATTEMPTS,
) -> TargetBoard:
    """
    Place every ship at a random origin and orientation.

    Each ship gets up to ``max_attempts`` tries; if one cannot be placed the
    whole layout restarts from an empty board.
    """
    lengths = list(ship_lengths)
    while True:
        board = TargetBoard(lengths)
        for length in lengths:
            for _ in range(max_attempts):
                origin = int(rng.integers(CELL_COUNT))
                orientation = _ORIENTATIONS[int(rng.integers(2))]
                if board.place_ship(origin, length, orientation):
                    break
            else:
                break
        if board.is_complete:
            return board


LAYOUTS = {
    "canonical": lambda rng, lengths: canonical_layout(lengths),
    "random": random_layout,
}

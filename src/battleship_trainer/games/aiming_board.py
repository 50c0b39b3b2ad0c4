"""
AimingBoard - one player's record of its own shots.

Three parallel float vectors over the grid:
    hits        1.0 where the player's shot hit a ship
    misses      1.0 where the player's shot missed
    targetable  1.0 where the player may still fire, 0.0 once fired upon

Float storage lets agents feed the vectors straight into matrix-vector
products without converting per shot.
"""

from __future__ import annotations

import numpy as np

from battleship_trainer.core.errors import RepeatedShotError
from battleship_trainer.core.types import BOARD_HEIGHT, BOARD_WIDTH, CELL_COUNT
from battleship_trainer.games.grid import check_cell

# Cell strings: (hit, miss) -> display string
CELL_STRINGS = {(0, 0): "·", (1, 0): "X", (0, 1): "o"}


class AimingBoard:
    """Per-observer view of the opponent's grid, mutated only by the game."""

    __slots__ = ('hits', 'misses', 'targetable')

    def __init__(self):
        self.hits = np.zeros(CELL_COUNT, dtype=np.float64)
        self.misses = np.zeros(CELL_COUNT, dtype=np.float64)
        self.targetable = np.ones(CELL_COUNT, dtype=np.float64)

    def copy(self) -> "AimingBoard":
        b = AimingBoard.__new__(AimingBoard)
        b.hits = self.hits.copy()
        b.misses = self.misses.copy()
        b.targetable = self.targetable.copy()
        return b

    def is_targetable(self, cell: int) -> bool:
        return bool(self.targetable[check_cell(cell)] != 0.0)

    def record_hit(self, cell: int) -> None:
        cell = self._consume(cell)
        self.hits[cell] = 1.0

    def record_miss(self, cell: int) -> None:
        cell = self._consume(cell)
        self.misses[cell] = 1.0

    def _consume(self, cell: int) -> int:
        cell = check_cell(cell)
        if self.targetable[cell] == 0.0:
            raise RepeatedShotError(f"Cell {cell} has already been fired upon")
        self.targetable[cell] = 0.0
        return cell

    @property
    def shots_fired(self) -> int:
        return CELL_COUNT - int(np.count_nonzero(self.targetable))

    @property
    def hit_count(self) -> int:
        return int(np.count_nonzero(self.hits))

    def targetable_cells(self) -> np.ndarray:
        return np.flatnonzero(self.targetable)

    def state_string(self) -> str:
        hits = self.hits.reshape(BOARD_HEIGHT, BOARD_WIDTH)
        misses = self.misses.reshape(BOARD_HEIGHT, BOARD_WIDTH)
        lines = []
        for r in range(BOARD_HEIGHT):
            lines.append(" ".join(
                CELL_STRINGS[(int(hits[r, c]), int(misses[r, c]))]
                for c in range(BOARD_WIDTH)
            ))
        return "\n".join(lines)

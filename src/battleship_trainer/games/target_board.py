"""
TargetBoard - a player's hidden ship layout.

Built once per game by the player's placement routine; occupancy never
changes after placement finishes. Opponent shots are resolved against it
with check_hit().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np

from battleship_trainer.core.errors import InvalidPlacementError
from battleship_trainer.core.types import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    CELL_COUNT,
    SHIP_LENGTHS,
    Orientation,
)
from battleship_trainer.games.grid import check_cell, ship_cells

logger = logging.getLogger(__name__)

# Cell strings: occupancy -> display string
CELL_STRINGS = {False: "·", True: "■"}


@dataclass(frozen=True)
class Ship:
    """A placed ship. Ships never move once placed."""
    origin: int
    length: int
    orientation: Orientation

    @property
    def cells(self) -> List[int]:
        return ship_cells(self.origin, self.length, self.orientation)


class TargetBoard:
    """
    Set of placed ships plus a derived boolean occupancy map.

    Invariants:
        - no two ships overlap
        - every placed ship consumed one matching entry of ``required``
        - every ship lies fully inside the grid
    """

    __slots__ = ('ships', 'required', 'occupied')

    def __init__(self, ship_lengths: Iterable[int] = SHIP_LENGTHS):
        self.ships: List[Ship] = []
        self.required: List[int] = list(ship_lengths)
        self.occupied = np.zeros(CELL_COUNT, dtype=bool)

    def validate_placement(
        self, origin: int, length: int, orientation: Orientation
    ) -> List[int]:
        """
        Check a placement without applying it.

        Returns:
            The cells the ship would cover.

        Raises:
            InvalidPlacementError: length not required, out of bounds, or overlap.
        """
        if length not in self.required:
            raise InvalidPlacementError(
                f"Length {length} is not among the remaining lengths {self.required}"
            )
        cells = ship_cells(origin, length, orientation)
        if self.occupied[cells].any():
            raise InvalidPlacementError(
                f"Ship of length {length} at cell {origin} overlaps a placed ship"
            )
        return cells

    def place_ship(self, origin: int, length: int, orientation: Orientation) -> bool:
        """
        Place a ship if the placement is legal.

        A rejected placement is a no-op: required lengths, ships and
        occupancy are left exactly as they were.

        Returns:
            True if the ship was placed.
        """
        try:
            cells = self.validate_placement(origin, length, orientation)
        except InvalidPlacementError as e:
            logger.debug("Rejected placement: %s", e)
            return False

        self.required.remove(length)
        self.ships.append(Ship(int(origin), int(length), orientation))
        self.occupied[cells] = True
        return True

    def check_hit(self, cell: int) -> bool:
        """True iff ``cell`` is covered by a ship."""
        return bool(self.occupied[check_cell(cell)])

    @property
    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.occupied))

    @property
    def is_complete(self) -> bool:
        """True once every required length has been placed."""
        return not self.required

    def cells(self) -> Tuple[int, ...]:
        """Occupied cells in ascending order."""
        return tuple(int(c) for c in np.flatnonzero(self.occupied))

    def state_string(self) -> str:
        grid = self.occupied.reshape(BOARD_HEIGHT, BOARD_WIDTH)
        return "\n".join(
            " ".join(CELL_STRINGS[bool(v)] for v in row) for row in grid
        )

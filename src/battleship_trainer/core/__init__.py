"""
Core module - constants, enums and the error taxonomy.

This module provides the building blocks used throughout the trainer.
"""

from battleship_trainer.core.types import (
    BOARD_WIDTH,
    BOARD_HEIGHT,
    CELL_COUNT,
    SHIP_LENGTHS,
    TOTAL_SHIP_HEALTH,
    NUM_PLAYERS,
    Orientation,
    Phase,
    State,
)
from battleship_trainer.core.errors import (
    BattleshipError,
    InvalidPlacementError,
    InvalidDistributionError,
    CellIndexError,
    RepeatedShotError,
)

__all__ = [
    # Constants
    "BOARD_WIDTH",
    "BOARD_HEIGHT",
    "CELL_COUNT",
    "SHIP_LENGTHS",
    "TOTAL_SHIP_HEALTH",
    "NUM_PLAYERS",
    # Enums
    "Orientation",
    "Phase",
    "State",
    # Errors
    "BattleshipError",
    "InvalidPlacementError",
    "InvalidDistributionError",
    "CellIndexError",
    "RepeatedShotError",
]

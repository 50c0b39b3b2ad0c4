"""
Core types and constants.

This module contains the fundamental values shared by every layer:
- Board geometry (width, height, flat cell count)
- The required fleet and its total hit-points
- Enums for ship orientation, game phase and game outcome
"""

from __future__ import annotations

from enum import Enum, auto


# ╔═════════════════════════════════════════════════════════════════════════════╗
# ║                          BOARD & FLEET GEOMETRY                             ║
# ║                                                                             ║
# ║  Cells are addressed by a flat row-major index in [0, CELL_COUNT).          ║
# ║  Every per-cell vector in the system has exactly CELL_COUNT entries.        ║
# ╚═════════════════════════════════════════════════════════════════════════════╝

BOARD_WIDTH = 10
BOARD_HEIGHT = 10
CELL_COUNT = BOARD_WIDTH * BOARD_HEIGHT

SHIP_LENGTHS = (5, 4, 3, 3, 2)
TOTAL_SHIP_HEALTH = sum(SHIP_LENGTHS)  # 17

NUM_PLAYERS = 2


class Orientation(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()


class Phase(Enum):
    """Lifecycle of a single game."""
    SETUP = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


class State(Enum):
    WIN = auto()
    LOSS = auto()

"""
Games module - grid geometry, boards and the battleship state machine.
"""

from battleship_trainer.games.grid import (
    cell_index,
    cell_coords,
    in_bounds,
    check_cell,
    ship_cells,
    heatmap_string,
)
from battleship_trainer.games.target_board import Ship, TargetBoard
from battleship_trainer.games.aiming_board import AimingBoard
from battleship_trainer.games.layouts import canonical_layout, random_layout, LAYOUTS
from battleship_trainer.games.battleship import (
    BattleshipGame,
    GameResult,
    Seat,
    ShotOutcome,
)

__all__ = [
    "BattleshipGame",
    "GameResult",
    "Seat",
    "ShotOutcome",
    "Ship",
    "TargetBoard",
    "AimingBoard",
    "canonical_layout",
    "random_layout",
    "LAYOUTS",
    "cell_index",
    "cell_coords",
    "in_bounds",
    "check_cell",
    "ship_cells",
    "heatmap_string",
]

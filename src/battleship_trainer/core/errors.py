"""
Error taxonomy.

Placement errors are recovered locally (the placement is rejected and the
board is left untouched). Distribution, index and repeated-shot errors abort
the game they occur in; the simulation worker isolates them so sibling game
instances keep running.
"""


class BattleshipError(Exception):
    """Base class for every error raised by battleship_trainer."""


class InvalidPlacementError(BattleshipError, ValueError):
    """Ship is out of bounds, overlaps another ship, or its length is not required."""


class InvalidDistributionError(BattleshipError, ValueError):
    """No targetable cell has a positive score, so a shot cannot be sampled."""


class CellIndexError(BattleshipError, IndexError):
    """Cell index outside [0, CELL_COUNT)."""


class RepeatedShotError(BattleshipError, ValueError):
    """A player fired at a cell it has already fired upon."""

"""
Grid geometry utilities.

Cells are flat row-major indices; every helper here converts between
(row, col) pairs and flat indices or derives the cells a ship covers.
"""

from __future__ import annotations

import operator
from typing import List, Sequence, Tuple

import numpy as np

from battleship_trainer.core.errors import CellIndexError, InvalidPlacementError
from battleship_trainer.core.types import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    CELL_COUNT,
    Orientation,
)


def cell_index(row: int, col: int) -> int:
    """Flat index of (row, col)."""
    if not in_bounds(row, col):
        raise CellIndexError(f"({row},{col}) is outside the {BOARD_HEIGHT}x{BOARD_WIDTH} grid")
    return row * BOARD_WIDTH + col


def cell_coords(cell: int) -> Tuple[int, int]:
    """(row, col) of a flat index."""
    return divmod(check_cell(cell), BOARD_WIDTH)


def in_bounds(row: int, col: int) -> bool:
    """Return True if (row, col) is inside the grid."""
    return 0 <= row < BOARD_HEIGHT and 0 <= col < BOARD_WIDTH


def check_cell(cell: int) -> int:
    """Return ``cell`` as an int, or raise CellIndexError if it is not on the grid."""
    try:
        cell = operator.index(cell)
    except TypeError:
        raise CellIndexError(f"Cell {cell!r} is not an integer index") from None
    if not 0 <= cell < CELL_COUNT:
        raise CellIndexError(f"Cell {cell} is outside [0, {CELL_COUNT})")
    return int(cell)


def ship_cells(origin: int, length: int, orientation: Orientation) -> List[int]:
    """
    Cells covered by a ship.

    Horizontal ships extend toward higher columns, vertical ships toward
    higher rows. The whole ship must fit on the grid.

    Raises:
        InvalidPlacementError: origin is off the grid, length is not
            positive, or the ship runs past the edge.
    """
    if length <= 0:
        raise InvalidPlacementError(f"Ship length must be positive, got {length}")
    if not 0 <= origin < CELL_COUNT:
        raise InvalidPlacementError(f"Origin {origin} is outside the grid")

    row, col = divmod(int(origin), BOARD_WIDTH)
    if orientation is Orientation.HORIZONTAL:
        if col + length > BOARD_WIDTH:
            raise InvalidPlacementError(
                f"Horizontal ship of length {length} at ({row},{col}) runs off the grid"
            )
        return [row * BOARD_WIDTH + col + i for i in range(length)]

    if row + length > BOARD_HEIGHT:
        raise InvalidPlacementError(
            f"Vertical ship of length {length} at ({row},{col}) runs off the grid"
        )
    return [(row + i) * BOARD_WIDTH + col for i in range(length)]


def heatmap_string(values: Sequence[float], precision: int = 1) -> str:
    """
    Render a per-cell vector as a grid of numbers.

    Used by the CLI to show a learned base-weight map.
    """
    grid = np.asarray(values, dtype=np.float64).reshape(BOARD_HEIGHT, BOARD_WIDTH)
    cells = [[f"{v:.{precision}f}" for v in row] for row in grid]
    width = max(len(c) for row in cells for c in row)

    header = "    " + " ".join(f"{c:>{width}}" for c in range(BOARD_WIDTH))
    lines = [header]
    for r, row in enumerate(cells):
        lines.append(f"{r:>2}  " + " ".join(f"{c:>{width}}" for c in row))
    return "\n".join(lines)

"""
RandomPlayer - uniform random shots, random fleet, no learning.

Useful as a fixed baseline opponent and as a second implementation of the
Player interface.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from battleship_trainer.agent.player import Player
from battleship_trainer.core.errors import InvalidDistributionError
from battleship_trainer.core.types import SHIP_LENGTHS
from battleship_trainer.games.aiming_board import AimingBoard
from battleship_trainer.games.layouts import random_layout
from battleship_trainer.games.target_board import TargetBoard


class RandomPlayer(Player):

    def __init__(self, ship_lengths=SHIP_LENGTHS, rng: Optional[np.random.Generator] = None):
        self.ship_lengths = tuple(ship_lengths)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.games_played = 0
        self.wins = 0

    def new_game(self) -> None:
        pass

    def place_ships(self) -> TargetBoard:
        return random_layout(self.rng, self.ship_lengths)

    def take_shot(self, aiming_board: AimingBoard) -> int:
        cells = aiming_board.targetable_cells()
        if cells.size == 0:
            raise InvalidDistributionError("No targetable cells left")
        return int(self.rng.choice(cells))

    def finish_game(self, won: bool) -> None:
        self.games_played += 1
        self.wins += int(won)

"""
Player - the capability set every policy must provide.

A game only ever talks to its players through these four calls:

    new_game()        once per game, before anything else
    place_ships()     returns a fresh TargetBoard
    take_shot(board)  returns the cell to fire at, given the player's own AimingBoard
    finish_game(won)  outcome hook, the place to learn

LearningPlayer adds the merge/adopt pair the simulation layer uses to
synchronise learned models between game instances. Plain players are
simply left out of synchronisation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from battleship_trainer.agent.model import WeightedModel
    from battleship_trainer.games.aiming_board import AimingBoard
    from battleship_trainer.games.target_board import TargetBoard


class Player(ABC):
    """Abstract base class for every shot-selection policy."""

    @abstractmethod
    def new_game(self) -> None:
        """Reset per-game bookkeeping. Called before place_ships()."""
        pass

    @abstractmethod
    def place_ships(self) -> "TargetBoard":
        """Return a freshly built TargetBoard for the coming game."""
        pass

    @abstractmethod
    def take_shot(self, aiming_board: "AimingBoard") -> int:
        """
        Choose the next cell to fire at.

        The board is the player's own record of its shots so far. It must be
        treated as read-only; the game updates it after resolving the shot.
        """
        pass

    @abstractmethod
    def finish_game(self, won: bool) -> None:
        """Called exactly once when the game ends."""
        pass


class LearningPlayer(Player):
    """A player whose behaviour is driven by a WeightedModel."""

    @property
    @abstractmethod
    def model(self) -> "WeightedModel":
        """The learned weights."""
        pass

    def merge(self, other: "LearningPlayer") -> None:
        """Replace this player's model with the average of both models."""
        self.model.merge(other.model)

    def adopt(self, other: "LearningPlayer") -> None:
        """Overwrite this player's model with a copy of ``other``'s."""
        self.model.adopt(other.model)

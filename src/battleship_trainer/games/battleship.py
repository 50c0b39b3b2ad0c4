"""
BattleshipGame - the turn-by-turn state machine for one two-player game.

    SETUP  ──setup()──▶  IN_PROGRESS  ──last ship cell hit──▶  FINISHED

A game instance owns its two players, their target boards, their aiming
boards and the turn cursor. Nothing in it is shared with any other game,
which is what lets the simulation layer run many instances in parallel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from battleship_trainer.agent.player import LearningPlayer, Player
from battleship_trainer.core.types import SHIP_LENGTHS, Phase, State
from battleship_trainer.games.aiming_board import AimingBoard
from battleship_trainer.games.grid import check_cell
from battleship_trainer.games.target_board import TargetBoard

logger = logging.getLogger(__name__)


@dataclass
class Seat:
    """Everything the game tracks for one player."""
    player: Player
    target_board: Optional[TargetBoard] = None
    aiming_board: AimingBoard = field(default_factory=AimingBoard)
    hits_left: int = 0


@dataclass(frozen=True)
class ShotOutcome:
    player: int
    cell: int
    hit: bool


@dataclass(frozen=True)
class GameResult:
    """Final tallies of a finished game."""
    winner: int
    shots: Tuple[int, int]
    hits_left: Tuple[int, int]

    @property
    def loser(self) -> int:
        return 1 - self.winner

    def outcome(self, seat: int) -> State:
        return State.WIN if seat == self.winner else State.LOSS


class BattleshipGame:
    """Two players exchanging shots until one fleet is sunk."""

    __slots__ = ('seats', 'ship_lengths', 'phase', 'winner', '_current')

    def __init__(
        self,
        player_one: Player,
        player_two: Player,
        ship_lengths: Iterable[int] = SHIP_LENGTHS,
    ):
        self.seats = [Seat(player_one), Seat(player_two)]
        self.ship_lengths = tuple(ship_lengths)
        self.phase = Phase.SETUP
        self.winner: Optional[int] = None
        self._current = 0

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def players(self) -> List[Player]:
        return [s.player for s in self.seats]

    def seat(self, index: int) -> Seat:
        return self.seats[index]

    def learners(self) -> List[LearningPlayer]:
        """Players that carry a weighted model (merge/adopt capable)."""
        return [p for p in self.players if isinstance(p, LearningPlayer)]

    def current_player(self) -> int:
        return self._current

    def is_over(self) -> bool:
        return self.phase is Phase.FINISHED

    # -------------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------------

    def setup(self) -> None:
        """Start a fresh game: new boards for both seats, player 0 to move."""
        expected = sum(self.ship_lengths)
        for index, seat in enumerate(self.seats):
            seat.player.new_game()
            board = seat.player.place_ships()
            if not board.is_complete or board.occupied_count != expected:
                logger.warning(
                    "Player %d placed %d of %d ship cells (missing lengths %s)",
                    index, board.occupied_count, expected, board.required,
                )
            seat.target_board = board
            seat.aiming_board = AimingBoard()
            seat.hits_left = board.occupied_count

        self._current = 0
        self.winner = None
        self.phase = Phase.IN_PROGRESS

        for index, seat in enumerate(self.seats):
            if seat.hits_left == 0:
                self._finish(loser=index)
                break

    def step(self) -> ShotOutcome:
        """
        Play one turn for the player to move.

        Raises:
            RuntimeError: the game is not in progress.
            CellIndexError: the player chose a cell off the grid.
            RepeatedShotError: the player chose a cell it already fired upon.
        """
        if self.phase is not Phase.IN_PROGRESS:
            raise RuntimeError(f"Cannot take a turn during {self.phase.name}")

        current = self._current
        shooter = self.seats[current]
        target = self.seats[1 - current]

        cell = check_cell(shooter.player.take_shot(shooter.aiming_board))
        hit = target.target_board.check_hit(cell)

        if hit:
            shooter.aiming_board.record_hit(cell)
            target.hits_left -= 1
        else:
            shooter.aiming_board.record_miss(cell)

        if target.hits_left == 0:
            self._finish(loser=1 - current)
        else:
            self._current = 1 - current

        return ShotOutcome(current, cell, hit)

    def _finish(self, loser: int) -> None:
        self.winner = 1 - loser
        self.phase = Phase.FINISHED
        self.seats[loser].player.finish_game(False)
        self.seats[self.winner].player.finish_game(True)

    def play(self) -> GameResult:
        """Run one full game from setup to finish."""
        self.setup()
        while self.phase is Phase.IN_PROGRESS:
            self.step()
        return self.result()

    def run_for(self, games: int) -> List[GameResult]:
        """Play ``games`` games back to back."""
        return [self.play() for _ in range(games)]

    def result(self) -> GameResult:
        if self.phase is not Phase.FINISHED:
            raise RuntimeError("Game has not finished")
        return GameResult(
            winner=self.winner,
            shots=tuple(s.aiming_board.shots_fired for s in self.seats),
            hits_left=tuple(s.hits_left for s in self.seats),
        )

    # -------------------------------------------------------------------------
    # Model synchronisation
    # -------------------------------------------------------------------------

    def merge_players(self, other: "BattleshipGame") -> None:
        """Seat-wise merge of every learning player with ``other``'s."""
        for mine, theirs in zip(self.players, other.players):
            if isinstance(mine, LearningPlayer) and isinstance(theirs, LearningPlayer):
                mine.merge(theirs)

    def adopt_players(self, other: "BattleshipGame") -> None:
        """Seat-wise copy of ``other``'s learned models into this game's players."""
        for mine, theirs in zip(self.players, other.players):
            if isinstance(mine, LearningPlayer) and isinstance(theirs, LearningPlayer):
                mine.adopt(theirs)

    def state_string(self) -> str:
        """Both aiming boards side by side."""
        left = self.seats[0].aiming_board.state_string().split("\n")
        right = self.seats[1].aiming_board.state_string().split("\n")
        lines = [f"{'Player 0':<19}   Player 1"]
        lines += [f"{a}   {b}" for a, b in zip(left, right)]
        return "\n".join(lines)

"""
Tests for battleship_trainer.games.battleship

Tests the turn-by-turn state machine with scripted and heuristic players.
"""

import logging

import numpy as np
import pytest

from battleship_trainer.agent.heuristic import WeightedHeuristicAgent
from battleship_trainer.agent.random_player import RandomPlayer
from battleship_trainer.core import (
    CELL_COUNT,
    TOTAL_SHIP_HEALTH,
    CellIndexError,
    Orientation,
    Phase,
    RepeatedShotError,
    State,
)
from battleship_trainer.games.battleship import BattleshipGame, GameResult
from battleship_trainer.games.target_board import TargetBoard

from conftest import CANONICAL_CELLS, OPEN_WATER, ScriptedPlayer


@pytest.fixture
def scripted_game():
    """Player 0 sinks the canonical fleet in 17 shots; player 1 only misses."""
    return BattleshipGame(
        ScriptedPlayer(CANONICAL_CELLS),
        ScriptedPlayer(OPEN_WATER),
    )


class TestSetup:
    """Setup phase tests."""

    def test_initial_phase(self, scripted_game: BattleshipGame):
        """A new game waits in SETUP."""
        assert scripted_game.phase is Phase.SETUP
        assert scripted_game.is_over() is False

    def test_setup(self, scripted_game: BattleshipGame):
        """Setup places fleets, resets boards, player 0 moves first."""
        scripted_game.setup()
        assert scripted_game.phase is Phase.IN_PROGRESS
        assert scripted_game.current_player() == 0
        for seat in scripted_game.seats:
            assert seat.hits_left == TOTAL_SHIP_HEALTH
            assert seat.aiming_board.shots_fired == 0
            assert seat.player.new_games == 1

    def test_step_before_setup(self, scripted_game: BattleshipGame):
        """Turns cannot be taken before setup."""
        with pytest.raises(RuntimeError):
            scripted_game.step()

    def test_incomplete_board_still_playable(self, caplog):
        """A short fleet is logged and its cells become the hit-points."""
        board = TargetBoard()
        board.place_ship(0, 2, Orientation.HORIZONTAL)
        game = BattleshipGame(ScriptedPlayer([0, 1]), ScriptedPlayer(OPEN_WATER, board=board))

        with caplog.at_level(logging.WARNING):
            game.setup()
        assert "placed 2 of 17" in caplog.text
        assert game.seat(1).hits_left == 2

        result = game.play()
        assert result.winner == 0
        assert result.shots == (2, 1)

    def test_empty_fleet_loses_immediately(self):
        """A player with no ships loses at setup."""
        loser = ScriptedPlayer([], board=TargetBoard())
        winner = ScriptedPlayer([])
        game = BattleshipGame(loser, winner)
        game.setup()
        assert game.is_over()
        assert game.winner == 1
        assert loser.outcomes == [False]
        assert winner.outcomes == [True]


class TestStep:
    """Single-turn tests."""

    def test_hit(self, scripted_game: BattleshipGame):
        """A hit marks the shooter's board and costs the target a hit-point."""
        scripted_game.setup()
        outcome = scripted_game.step()

        assert outcome.player == 0
        assert outcome.cell == CANONICAL_CELLS[0]
        assert outcome.hit is True

        board = scripted_game.seat(0).aiming_board
        assert board.hits[outcome.cell] == 1.0
        assert board.targetable[outcome.cell] == 0.0
        assert scripted_game.seat(1).hits_left == TOTAL_SHIP_HEALTH - 1

    def test_miss(self, scripted_game: BattleshipGame):
        """A miss is recorded in misses, not hits."""
        scripted_game.setup()
        scripted_game.step()
        outcome = scripted_game.step()

        assert outcome.player == 1
        assert outcome.hit is False
        board = scripted_game.seat(1).aiming_board
        assert board.misses[outcome.cell] == 1.0
        assert board.hits[outcome.cell] == 0.0
        assert board.targetable[outcome.cell] == 0.0
        assert scripted_game.seat(0).hits_left == TOTAL_SHIP_HEALTH

    def test_alternates_turns(self, scripted_game: BattleshipGame):
        """Turn passes after every shot."""
        scripted_game.setup()
        players = [scripted_game.step().player for _ in range(4)]
        assert players == [0, 1, 0, 1]

    def test_repeat_shot_raises(self):
        """Firing twice at one cell is an error."""
        game = BattleshipGame(ScriptedPlayer([60, 60]), ScriptedPlayer(OPEN_WATER))
        game.setup()
        game.step()
        game.step()
        with pytest.raises(RepeatedShotError):
            game.step()

    def test_out_of_range_raises(self):
        """Firing off the grid is an error."""
        game = BattleshipGame(ScriptedPlayer([CELL_COUNT]), ScriptedPlayer(OPEN_WATER))
        game.setup()
        with pytest.raises(CellIndexError):
            game.step()


class TestFinish:
    """Game end tests."""

    def test_scripted_win(self, scripted_game: BattleshipGame):
        """Sinking the last ship cell ends the game at once."""
        result = scripted_game.play()

        assert scripted_game.phase is Phase.FINISHED
        assert result.winner == 0
        assert result.loser == 1
        assert result.shots == (TOTAL_SHIP_HEALTH, TOTAL_SHIP_HEALTH - 1)
        assert result.hits_left == (TOTAL_SHIP_HEALTH, 0)

    def test_outcome_hooks(self, scripted_game: BattleshipGame):
        """Winner and loser are each told once."""
        scripted_game.play()
        assert scripted_game.seat(0).player.outcomes == [True]
        assert scripted_game.seat(1).player.outcomes == [False]

    def test_step_after_finish(self, scripted_game: BattleshipGame):
        """No turns after the game is over."""
        scripted_game.play()
        with pytest.raises(RuntimeError):
            scripted_game.step()

    def test_result_before_finish(self, scripted_game: BattleshipGame):
        """result() requires a finished game."""
        with pytest.raises(RuntimeError):
            scripted_game.result()

    def test_game_result_outcome(self):
        """GameResult maps seats to WIN/LOSS."""
        result = GameResult(winner=1, shots=(40, 40), hits_left=(0, 3))
        assert result.outcome(1) is State.WIN
        assert result.outcome(0) is State.LOSS


def seat_opponent_hits_left(game: BattleshipGame, seat) -> int:
    other = game.seats[1] if seat is game.seats[0] else game.seats[0]
    return other.hits_left


class TestHeuristicSelfPlay:
    """Full games between learning agents."""

    def test_terminates_with_one_winner(self, heuristic_game: BattleshipGame):
        """At most 100 shots each, exactly one fleet sunk."""
        result = heuristic_game.play()

        assert all(s <= CELL_COUNT for s in result.shots)
        assert sorted(result.hits_left)[0] == 0
        assert sorted(result.hits_left)[1] > 0
        assert result.hits_left[result.loser] == 0
        assert min(result.hits_left) >= 0
        assert result.shots[result.winner] >= TOTAL_SHIP_HEALTH

    def test_targetable_shrinks_monotonically(self, heuristic_game: BattleshipGame):
        """Every shot removes exactly one cell and no cell is chosen twice."""
        heuristic_game.setup()
        fired = {0: set(), 1: set()}
        while not heuristic_game.is_over():
            shooter = heuristic_game.current_player()
            before = heuristic_game.seat(shooter).aiming_board.shots_fired
            outcome = heuristic_game.step()

            assert outcome.cell not in fired[shooter]
            fired[shooter].add(outcome.cell)
            assert heuristic_game.seat(shooter).aiming_board.shots_fired == before + 1

    def test_hits_and_misses_partition_fired_cells(self, heuristic_game: BattleshipGame):
        """hits and misses are disjoint and together equal the fired cells."""
        heuristic_game.play()
        for seat in heuristic_game.seats:
            board = seat.aiming_board
            assert not np.any(board.hits * board.misses)
            np.testing.assert_array_equal(board.hits + board.misses, 1.0 - board.targetable)
            assert board.hit_count == TOTAL_SHIP_HEALTH - seat_opponent_hits_left(heuristic_game, seat)

    def test_run_for(self, heuristic_game: BattleshipGame):
        """run_for plays several independent games."""
        results = heuristic_game.run_for(3)
        assert len(results) == 3
        assert all(isinstance(r, GameResult) for r in results)

    def test_mixed_players(self):
        """Heuristic agent against the random baseline."""
        game = BattleshipGame(
            WeightedHeuristicAgent(rng=np.random.default_rng(1)),
            RandomPlayer(rng=np.random.default_rng(2)),
        )
        result = game.play()
        assert result.winner in (0, 1)
        assert len(game.learners()) == 1


class TestModelSync:
    """merge_players / adopt_players tests."""

    def test_merge_and_adopt(self, heuristic_game: BattleshipGame):
        """Seat-wise merge then adopt leaves both games identical."""
        other = BattleshipGame(
            WeightedHeuristicAgent(rng=np.random.default_rng(3)),
            WeightedHeuristicAgent(rng=np.random.default_rng(4)),
        )
        for p in other.learners():
            p.model.base_weights += 2.0

        heuristic_game.merge_players(other)
        assert heuristic_game.seat(0).player.model.base_weights[0] == pytest.approx(11.0)

        other.adopt_players(heuristic_game)
        for mine, theirs in zip(heuristic_game.learners(), other.learners()):
            assert mine.model.equals(theirs.model)

    def test_state_string(self, heuristic_game: BattleshipGame):
        """Both aiming boards rendered side by side."""
        heuristic_game.setup()
        heuristic_game.step()
        assert len(heuristic_game.state_string().split("\n")) == 11

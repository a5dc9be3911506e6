"""
Tests for perfect_play.games.tic_tac_toe

Tests the stateful TicTacToe game.
"""

import numpy as np
import pytest

from perfect_play.core.types import MARK_O, MARK_X, IllegalMoveError, InvalidBoardError, State
from perfect_play.games.board import board_to_string
from perfect_play.games.game_state import GameState
from perfect_play.games.tic_tac_toe import TicTacToe


@pytest.fixture
def game() -> TicTacToe:
    """Fresh TicTacToe game."""
    return TicTacToe()


def play(game: TicTacToe, moves):
    for m in moves:
        game.apply_move(m)


class TestInitialization:
    """Initial game state tests."""

    def test_initial_state(self, game: TicTacToe):
        """Game starts with empty board, X to move, not over."""
        assert np.all(game.get_state().board == 0)
        assert game.current_player() == MARK_X
        assert game.is_over() is False
        assert game.is_empty()

    def test_metadata(self, game: TicTacToe):
        assert game.game_id() == "tic_tac_toe"
        assert game.num_players() == 2

    def test_from_board_infers_mover(self):
        g = TicTacToe("X--------")
        assert g.current_player() == MARK_O

    def test_from_board_explicit_mover(self):
        g = TicTacToe("X---O----", current_player=MARK_O)
        assert g.current_player() == MARK_O


class TestValidMoves:

    def test_initial_nine_moves(self, game: TicTacToe):
        assert game.valid_moves() == list(range(9))

    def test_occupied_not_in_moves(self, game: TicTacToe):
        game.apply_move(4)
        assert 4 not in game.valid_moves()
        assert len(game.valid_moves()) == 8

    def test_no_moves_after_win(self, game: TicTacToe):
        play(game, [0, 3, 1, 4, 2])
        assert game.valid_moves() == []


class TestApplyMove:

    def test_places_marker_and_switches(self, game: TicTacToe):
        game.apply_move(0)
        assert game.board[0] == MARK_X
        assert game.current_player() == MARK_O
        game.apply_move(4)
        assert game.board[4] == MARK_O
        assert game.current_player() == MARK_X

    @pytest.mark.parametrize("bad", [0, -1, 9, "a"])
    def test_illegal_raises(self, game: TicTacToe, bad):
        game.apply_move(0)
        with pytest.raises(IllegalMoveError):
            game.apply_move(bad)

    def test_move_after_game_over_raises(self, game: TicTacToe):
        play(game, [0, 3, 1, 4, 2])
        with pytest.raises(IllegalMoveError):
            game.apply_move(8)


class TestResults:

    def test_x_wins(self, game: TicTacToe):
        play(game, [0, 3, 1, 4, 2])
        assert game.is_over()
        assert game.outcome().pattern == (0, 1, 2)
        assert game.get_result(MARK_X) == State.WIN
        assert game.get_result(MARK_O) == State.LOSS

    def test_o_wins(self, game: TicTacToe):
        play(game, [0, 6, 1, 7, 5, 8])
        assert game.outcome().mark == MARK_O

    def test_tie(self, game: TicTacToe):
        # X O X / X X O / O X O
        play(game, [0, 1, 2, 5, 3, 6, 4, 8, 7])
        assert game.is_over()
        assert game.get_result(MARK_X) == State.TIE
        assert game.get_result(MARK_O) == State.TIE

    def test_neutral_in_progress(self, game: TicTacToe):
        game.apply_move(4)
        assert game.get_result(MARK_X) == State.NEUTRAL


class TestCloneAndState:

    def test_deep_clone_independent(self, game: TicTacToe):
        game.apply_move(4)
        clone = game.deep_clone()
        clone.apply_move(0)
        assert game.board[0] == 0
        assert clone.board[4] == MARK_X

    def test_set_state_recomputes_outcome(self, game: TicTacToe):
        board = np.array([1, 1, 1, 2, 2, 0, 0, 0, 0], dtype=np.int8)
        game.set_state(GameState(board, MARK_O))
        assert game.is_over()
        assert game.outcome().mark == MARK_X

    def test_state_copy(self):
        state = GameState(np.zeros(9, dtype=np.int8), MARK_X)
        copy = state.copy()
        copy.board[0] = MARK_X
        assert state.board[0] == 0

    def test_state_string(self, game: TicTacToe):
        play(game, [0, 4])
        text = game.state_string()
        assert text.splitlines()[1] == "│ X │   │   │"
        assert "O" in text
        assert board_to_string(game.board) == "X---O----"


class TestGameState:

    def test_from_cells_infers_mover(self):
        state = GameState.from_cells("XX-OO----")
        assert state.current_player == MARK_X
        assert state.board.dtype == np.int8

    def test_from_cells_copies(self):
        cells = np.zeros(9, dtype=np.int8)
        state = GameState.from_cells(cells)
        state.board[0] = MARK_X
        assert cells[0] == 0

    @pytest.mark.parametrize("text", ["XXX------", "O--------", "OO-X-----"])
    def test_unreachable_counts(self, text):
        with pytest.raises(InvalidBoardError):
            GameState.from_cells(text)

    def test_bad_mover(self):
        with pytest.raises(InvalidBoardError):
            GameState.from_cells("X--------", current_player=3)

    def test_key_and_equality(self):
        a = GameState.from_cells("X---O----")
        b = GameState.from_cells([1, 0, 0, 0, 2, 0, 0, 0, 0])
        assert a == b
        assert len({a, b}) == 1
        assert a.key() != GameState.from_cells("X---O----", MARK_O).key()

    def test_is_empty(self):
        assert GameState.from_cells("---------").is_empty()
        assert not GameState.from_cells("X--------").is_empty()

    def test_repr(self):
        assert repr(GameState.from_cells("X--------")) == "GameState('X--------', current_player=2)"

    def test_game_rejects_unreachable_board(self):
        with pytest.raises(InvalidBoardError):
            TicTacToe("OO-------")

"""
TicTacToe game implementation - the stateful game a session plays on.

Uses int8 board:
    0 = empty
    1 = player 1 (X), always moves first
    2 = player 2 (O)
"""

from __future__ import annotations

from typing import List, Optional

from perfect_play.core.types import IllegalMoveError, Outcome, State
from perfect_play.games.board import (
    CELL_STRINGS,
    is_legal_move,
    legal_moves,
    new_board,
    opponent,
    terminal_outcome,
)
from perfect_play.games.game_state import GameState


class TicTacToe:
    """TicTacToe game: board, mover and cached outcome."""

    __slots__ = ('state', '_outcome')

    def __init__(self, board=None, current_player: Optional[int] = None):
        cells = new_board() if board is None else board
        self.state = GameState.from_cells(cells, current_player)
        self._outcome = terminal_outcome(self.state.board)

    def game_id(self) -> str:
        return "tic_tac_toe"

    def num_players(self) -> int:
        return 2

    def deep_clone(self) -> "TicTacToe":
        g = TicTacToe.__new__(TicTacToe)
        g.state = self.state.copy()
        g._outcome = self._outcome
        return g

    def get_state(self) -> GameState:
        return self.state

    def set_state(self, game_state: GameState) -> None:
        self.state = GameState.from_cells(game_state.board, game_state.current_player)
        # Recompute outcome from state
        self._outcome = terminal_outcome(self.state.board)

    @property
    def board(self):
        return self.state.board

    def current_player(self) -> int:
        return self.state.current_player

    def valid_moves(self) -> List[int]:
        """Empty cell indices, or nothing once the game is decided."""
        if self._outcome.is_over:
            return []
        return legal_moves(self.state.board)

    def apply_move(self, index: int) -> None:
        """
        Place the current player's mark at ``index`` and pass the turn.

        Raises:
            IllegalMoveError: the game is over, or the cell is occupied or
                out of range.
        """
        if self._outcome.is_over:
            raise IllegalMoveError("Game is already over")
        if not is_legal_move(self.state.board, index):
            raise IllegalMoveError(f"Cell {index!r} is not available")

        player = self.state.current_player
        self.state.board[int(index)] = player
        self._outcome = terminal_outcome(self.state.board)
        self.state.current_player = opponent(player)  # Toggle 1<->2

    def is_over(self) -> bool:
        return self._outcome.is_over

    def outcome(self) -> Outcome:
        return self._outcome

    def get_result(self, mark: int) -> State:
        return self._outcome.result_for(mark)

    def is_empty(self) -> bool:
        return self.state.is_empty()

    def state_string(self) -> str:
        board = self.state.board
        lines = ["╭───┬───┬───╮"]
        for i in range(3):
            row = "│ " + " │ ".join(CELL_STRINGS[int(board[i * 3 + j])] for j in range(3)) + " │"
            lines.append(row)
            if i < 2:
                lines.append("├───┼───┼───┤")
        lines.append("╰───┴───┴───╯")
        return "\n".join(lines)

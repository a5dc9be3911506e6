"""
GameState - a validated tic-tac-toe position plus the mark to move.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from perfect_play.core.hashing import position_key
from perfect_play.core.types import EMPTY, MARKS, InvalidBoardError
from perfect_play.games.board import (
    as_board,
    board_to_string,
    count_marks,
    side_to_move,
)


class GameState:
    """
    Board (flat int8, length 9) and the mark to move.

    Build through ``from_cells()`` to get a validated copy;
    the plain constructor trusts its arguments.
    """
    __slots__ = ('board', 'current_player')

    def __init__(self, board: np.ndarray, current_player: int):
        self.board = board
        self.current_player = current_player

    @classmethod
    def from_cells(cls, cells: Any, current_player: Optional[int] = None) -> "GameState":
        """
        Validate ``cells`` into a private board. The mover defaults to the
        side implied by the mark counts.

        Raises:
            InvalidBoardError: malformed board, unknown mover, or mark
                counts no legal game can reach.
        """
        board = as_board(cells)
        x, o = count_marks(board)
        if x - o not in (0, 1):
            raise InvalidBoardError(f"Unreachable mark counts: {x} X, {o} O")
        if current_player is None:
            current_player = side_to_move(board)
        elif current_player not in MARKS:
            raise InvalidBoardError(f"Unknown mark to move: {current_player!r}")
        return cls(board, current_player)

    def key(self) -> bytes:
        """Transposition key of this position."""
        return position_key(self.board, self.current_player)

    def is_empty(self) -> bool:
        return not (self.board != EMPTY).any()

    def copy(self) -> "GameState":
        return GameState(self.board.copy(), self.current_player)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def __repr__(self) -> str:
        return f"GameState({board_to_string(self.board)!r}, current_player={self.current_player})"

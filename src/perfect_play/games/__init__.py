"""
Games module - the tic-tac-toe board model and stateful game.
"""

from perfect_play.games.game_state import GameState
from perfect_play.games.board import (
    new_board,
    as_board,
    board_to_string,
    board_from_string,
    terminal_outcome,
    legal_moves,
    game_outcome,
    is_legal_move,
    opponent,
    side_to_move,
)
from perfect_play.games.tic_tac_toe import TicTacToe

__all__ = [
    "GameState",
    "TicTacToe",
    "new_board",
    "as_board",
    "board_to_string",
    "board_from_string",
    "terminal_outcome",
    "legal_moves",
    "game_outcome",
    "is_legal_move",
    "opponent",
    "side_to_move",
]

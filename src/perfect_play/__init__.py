"""
perfect_play - a perfect-play tic-tac-toe engine.

Exhaustive alpha-beta minimax with a transposition cache and depth-aware
scoring: the engine never loses and wins as fast as the opponent allows.

Quick Start:
    from perfect_play import Engine, MARK_O

    engine = Engine()
    result = engine.choose_move("XX-OO----", maximizer=MARK_O)
    result.move, result.score          # (5, 10)

Modules:
    core     - Board encoding, Outcome / SearchResult types, position keys
    games    - Board model functions and the stateful TicTacToe game
    engine   - Transposition cache, alpha-beta search, move selection
    memory   - sqlite opening book feeding the engine's first move
    session  - Game driver: turns, history, thinking delay, learning
    analytics - Results, streaks and move heatmaps across games
    debug    - Terminal rendering
"""

from perfect_play.analytics import PlayerAnalytics
from perfect_play.api import Engine, choose_move, game_outcome, is_legal_move
from perfect_play.core.types import (
    EMPTY,
    MARK_X,
    MARK_O,
    Outcome,
    Status,
    State,
    MoveScore,
    SearchResult,
    PerfectPlayError,
    InvalidBoardError,
    IllegalMoveError,
)
from perfect_play.engine.cache import TranspositionCache
from perfect_play.memory.opening_book import OpeningBook
from perfect_play.session import GameSession
from perfect_play.utils.config import EngineConfig, DEFAULT_CONFIG

__version__ = "1.0.0"

__all__ = [
    # Main API
    "Engine",
    "choose_move",
    "game_outcome",
    "is_legal_move",
    "GameSession",
    "PlayerAnalytics",
    "OpeningBook",
    "TranspositionCache",
    "EngineConfig",
    "DEFAULT_CONFIG",
    # Types
    "EMPTY",
    "MARK_X",
    "MARK_O",
    "Outcome",
    "Status",
    "State",
    "MoveScore",
    "SearchResult",
    "PerfectPlayError",
    "InvalidBoardError",
    "IllegalMoveError",
]

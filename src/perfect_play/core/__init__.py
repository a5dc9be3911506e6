"""
Core module - fundamental types, constants and position keys.

This module provides the building blocks used throughout the engine.
"""

from perfect_play.core.types import (
    EMPTY,
    MARK_X,
    MARK_O,
    MARKS,
    BOARD_SIZE,
    WIN_LINES,
    WIN_SCORE,
    OUTCOME_INDEX,
    OpeningBias,
    Outcome,
    Status,
    State,
    MoveScore,
    SearchResult,
    Stats,
    PerfectPlayError,
    InvalidBoardError,
    IllegalMoveError,
)
from perfect_play.core.hashing import position_key

__all__ = [
    # Constants
    "EMPTY",
    "MARK_X",
    "MARK_O",
    "MARKS",
    "BOARD_SIZE",
    "WIN_LINES",
    "WIN_SCORE",
    "OUTCOME_INDEX",
    # Types
    "OpeningBias",
    "Outcome",
    "Status",
    "State",
    "MoveScore",
    "SearchResult",
    "Stats",
    # Errors
    "PerfectPlayError",
    "InvalidBoardError",
    "IllegalMoveError",
    # Functions
    "position_key",
]

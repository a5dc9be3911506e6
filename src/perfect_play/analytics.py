"""
Player analytics kept across the games of one session.

Results are counted from the human player's side: a win is a game the
human won. Move timing and the player heatmap cover human moves only;
the engine's moves feed a heatmap of their own.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict

import numpy as np

from perfect_play.core.types import BOARD_SIZE, State, Stats

# Finished games kept in ``games_history``
GAMES_HISTORY_LIMIT = 100


@dataclass(frozen=True)
class GameSummary:
    result: State
    moves: int
    board: str
    timestamp: float


class PlayerAnalytics:
    """Running totals, streaks, move heatmaps and recent game summaries."""

    __slots__ = ('stats', 'current_streak', 'longest_streak', 'player_heatmap',
                 'ai_heatmap', 'total_moves', 'total_move_time_ms', 'games_history')

    def __init__(self, history_limit: int = GAMES_HISTORY_LIMIT):
        if history_limit < 1:
            raise ValueError(f"history_limit must be positive, got {history_limit}")
        self.games_history: Deque[GameSummary] = deque(maxlen=history_limit)
        self.reset()

    def reset(self) -> None:
        self.stats = Stats()
        self.current_streak = 0
        self.longest_streak = 0
        self.player_heatmap = np.zeros(BOARD_SIZE, dtype=np.int64)
        self.ai_heatmap = np.zeros(BOARD_SIZE, dtype=np.int64)
        self.total_moves = 0
        self.total_move_time_ms = 0.0
        self.games_history.clear()

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def record_player_move(self, position: int, elapsed_ms: float) -> None:
        self.player_heatmap[position] += 1
        self.total_moves += 1
        self.total_move_time_ms += elapsed_ms

    def record_ai_move(self, position: int) -> None:
        self.ai_heatmap[position] += 1

    def record_game(self, result: State, moves: int, board: str) -> GameSummary:
        """
        Count a finished game. Only wins extend the streak; a draw or a
        loss resets it.

        Raises:
            ValueError: ``result`` is NEUTRAL.
        """
        self.stats = self.stats.add(result)
        self.current_streak = self.current_streak + 1 if result is State.WIN else 0
        self.longest_streak = max(self.longest_streak, self.current_streak)

        summary = GameSummary(result, moves, board, time.time())
        self.games_history.append(summary)
        return summary

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def total_games(self) -> int:
        return self.stats.total

    @property
    def win_rate(self) -> int:
        return self.stats.win_rate

    @property
    def average_move_time_ms(self) -> float:
        if self.total_moves == 0:
            return 0.0
        return self.total_move_time_ms / self.total_moves

    def summary(self) -> Dict[str, Any]:
        return {
            "total_games": self.total_games,
            "wins": self.stats.wins,
            "losses": self.stats.losses,
            "draws": self.stats.ties,
            "win_rate": self.win_rate,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "average_move_time_ms": round(self.average_move_time_ms),
        }

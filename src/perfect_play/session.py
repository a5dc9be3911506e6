"""
Game session - the driver between a player and the engine.

Owns the engine (and so its transposition cache), the game being played,
the move history, player analytics that outlive a single game and,
optionally, an opening book that learns which openings the engine used.

Usage:
    session = GameSession(human_mark=MARK_X, config=EngineConfig(thinking_delay=False))
    session.play_human(0)
    result = session.play_ai()
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from perfect_play.analytics import PlayerAnalytics
from perfect_play.api import Engine
from perfect_play.core.types import MARKS, MARK_X, Outcome, SearchResult, State
from perfect_play.games.board import board_to_string, is_legal_move, mark_symbol, opponent
from perfect_play.games.tic_tac_toe import TicTacToe
from perfect_play.memory.opening_book import OpeningBook
from perfect_play.utils.config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    position: int
    mark: int
    elapsed_ms: float
    timestamp: float


class GameSession:
    """One human (or scripted) player against the engine, game after game."""

    def __init__(
        self,
        human_mark: int = MARK_X,
        config: EngineConfig = DEFAULT_CONFIG,
        book: Optional[OpeningBook] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.engine = Engine(config)
        self.book = book
        self._rng = rng or random.Random()
        self.analytics = PlayerAnalytics()
        self.human_mark = human_mark
        self.start_new_game(human_mark)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_new_game(self, human_mark: Optional[int] = None) -> None:
        """Fresh board with X to move. Clears the engine's cache; analytics carry over."""
        if human_mark is None:
            human_mark = self.human_mark
        if human_mark not in MARKS:
            raise ValueError(f"human_mark must be one of {MARKS}, got {human_mark!r}")

        self.engine.reset_cache()
        self.game = TicTacToe()
        self.human_mark = human_mark
        self.ai_mark = opponent(human_mark)
        self.move_history: List[MoveRecord] = []
        self.last_result: Optional[SearchResult] = None
        self._last_move_at = time.perf_counter()
        self._recorded = False

        logger.info(
            "New game: human=%s ai=%s",
            mark_symbol(self.human_mark), mark_symbol(self.ai_mark),
        )

    def reset_analytics(self) -> None:
        """Forget results, streaks and heatmaps of earlier games."""
        self.analytics.reset()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def board(self) -> np.ndarray:
        return self.game.board.copy()

    @property
    def current_player(self) -> int:
        return self.game.current_player()

    @property
    def outcome(self) -> Outcome:
        return self.game.outcome()

    def is_over(self) -> bool:
        return self.game.is_over()

    def is_ai_turn(self) -> bool:
        return not self.is_over() and self.current_player == self.ai_mark

    def result_for(self, mark: int) -> State:
        return self.game.get_result(mark)

    # -------------------------------------------------------------------------
    # Moves
    # -------------------------------------------------------------------------

    def play_human(self, index: int) -> bool:
        """
        Apply the human's move. Returns False (and changes nothing) when
        the game is over, it is not the human's turn, or the cell is taken.
        """
        if self.is_over():
            logger.warning("Rejected move %r: game is over", index)
            return False
        if self.current_player != self.human_mark:
            logger.warning("Rejected move %r: not the human's turn", index)
            return False
        if not is_legal_move(self.game.board, index):
            logger.warning("Rejected move %r: illegal", index)
            return False

        elapsed_ms = (time.perf_counter() - self._last_move_at) * 1000.0
        self.game.apply_move(int(index))
        self.analytics.record_player_move(int(index), elapsed_ms)
        self._record(int(index), self.human_mark, elapsed_ms)
        return True

    def play_ai(self, delay: Optional[bool] = None) -> Optional[SearchResult]:
        """
        Let the engine move. Returns the search result, or None when it is
        not the engine's turn.

        ``delay`` overrides ``config.thinking_delay``. The pause happens
        before the search and has no effect on it.
        """
        if not self.is_ai_turn():
            return None

        if delay is None:
            delay = self.config.thinking_delay
        if delay:
            self.think()

        prior_bias = self.book.bias() if self.book is not None and self.game.is_empty() else None
        result = self.engine.choose_move(self.game.board, self.ai_mark, prior_bias)
        if not result.found:
            return result

        self.game.apply_move(result.move)
        self.last_result = result
        self.analytics.record_ai_move(result.move)
        self._record(result.move, self.ai_mark, result.elapsed_ms)
        return result

    def think(self) -> float:
        """Sleep for a random presentation delay; returns the delay in ms."""
        low, high = self.config.thinking_delay_ms
        delay_ms = self._rng.uniform(low, high)
        time.sleep(delay_ms / 1000.0)
        return delay_ms

    # -------------------------------------------------------------------------
    # Bookkeeping
    # -------------------------------------------------------------------------

    def _record(self, position: int, mark: int, elapsed_ms: float) -> None:
        self._last_move_at = time.perf_counter()
        self.move_history.append(MoveRecord(position, mark, elapsed_ms, time.time()))
        if self.is_over():
            self._finish()

    def _finish(self) -> None:
        if self._recorded:
            return
        self._recorded = True

        outcome = self.outcome
        result = outcome.result_for(self.ai_mark)
        self.analytics.record_game(
            outcome.result_for(self.human_mark),
            len(self.move_history),
            board_to_string(self.game.board),
        )
        logger.info(
            "Game over after %d moves: %s",
            len(self.move_history),
            f"{mark_symbol(outcome.mark)} wins" if outcome.is_win else "draw",
        )

        if self.book is None:
            return
        # Opening weights only steer the engine's first move on an empty board.
        if self.move_history and self.move_history[0].mark == self.ai_mark:
            self.book.record_game(self.move_history[0].position, result)
        if result is State.LOSS:
            self.book.record_losing_state(self.game.board)


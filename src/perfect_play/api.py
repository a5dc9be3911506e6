"""
Public API for the perfect-play engine.

Usage:
    from perfect_play import Engine, MARK_O

    engine = Engine()
    engine.reset_cache()                      # at the start of every game
    result = engine.choose_move("XX-OO----", maximizer=MARK_O)
    print(result.move, result.score)
    engine.game_outcome("XXXOO----")          # Outcome(status=WINNER, mark=1, ...)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from perfect_play.core.types import MARKS, OpeningBias, Outcome, SearchResult
from perfect_play.engine.cache import TranspositionCache
from perfect_play.engine.selector import choose_move
from perfect_play.games.board import game_outcome, is_legal_move
from perfect_play.utils.config import DEFAULT_CONFIG, EngineConfig


class Engine:
    """
    Engine facade owning the transposition caches of one session.

    Cached scores belong to one maximizer, so each mark gets its own cache.
    They live as long as the engine and are only emptied by
    ``reset_cache``, which the driver must call when a new game starts.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self._caches: Dict[int, TranspositionCache] = {
            mark: TranspositionCache() for mark in MARKS
        }

    def cache_for(self, maximizer: int) -> TranspositionCache:
        try:
            return self._caches[maximizer]
        except KeyError:
            raise ValueError(f"maximizer must be one of {MARKS}, got {maximizer!r}") from None

    def choose_move(
        self,
        board: Any,
        maximizer: Optional[int] = None,
        prior_bias: Optional[OpeningBias] = None,
    ) -> SearchResult:
        """Optimal move for ``maximizer`` (default: the configured mark)."""
        if maximizer is None:
            maximizer = self.config.maximizer
        return choose_move(
            board,
            maximizer,
            prior_bias,
            cache=self.cache_for(maximizer),
            config=self.config,
        )

    @staticmethod
    def game_outcome(board: Any) -> Outcome:
        return game_outcome(board)

    @staticmethod
    def is_legal_move(board: Any, index: Any) -> bool:
        return is_legal_move(board, index)

    def reset_cache(self) -> None:
        for cache in self._caches.values():
            cache.clear()

    @property
    def cache_size(self) -> int:
        return sum(len(cache) for cache in self._caches.values())


__all__ = [
    "Engine",
    "choose_move",
    "game_outcome",
    "is_legal_move",
]

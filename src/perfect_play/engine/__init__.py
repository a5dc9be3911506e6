"""
Engine module - alpha-beta search, transposition cache and move selection.
"""

from perfect_play.engine.cache import Bound, CacheEntry, TranspositionCache
from perfect_play.engine.search import MinimaxSearch, terminal_score
from perfect_play.engine.selector import choose_move, pick_opening

__all__ = [
    "Bound",
    "CacheEntry",
    "TranspositionCache",
    "MinimaxSearch",
    "terminal_score",
    "choose_move",
    "pick_opening",
]

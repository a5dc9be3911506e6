"""
Transposition cache: (board, side to move) -> resolved minimax score.

Scores are depth-relative (a win at depth d is worth 10 - d), so they are
stored relative to the node that produced them and re-based to the depth of
whoever probes them, the way chess engines store mate scores. A position
reached again from a later root in the same game therefore reads back the
right distance.

Each entry also records whether the score is exact or only a bound produced
by an alpha-beta cutoff. The search decides which entries it may trust.

Scores are from one maximizer's point of view, so a cache is bound to the
first maximizer that searches with it until it is cleared.

One instance per game session. The owner clears it when a new game starts;
the search never does. Not thread-safe: share an instance with one search at
a time.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, NamedTuple, Optional


class Bound(IntEnum):
    EXACT = 0
    LOWER = 1  # true score >= stored score (beta cutoff)
    UPPER = 2  # true score <= stored score (failed low)


class CacheEntry(NamedTuple):
    score: int
    bound: Bound


def _to_stored(score: int, depth: int) -> int:
    if score > 0:
        return score + depth
    if score < 0:
        return score - depth
    return 0


def _from_stored(value: int, depth: int) -> int:
    if value > 0:
        return value - depth
    if value < 0:
        return value + depth
    return 0


class TranspositionCache:
    """Dict-backed transposition table with hit/miss counters."""

    __slots__ = ('_table', 'maximizer', 'hits', 'misses', 'stores')

    def __init__(self):
        self._table: Dict[bytes, CacheEntry] = {}
        self.maximizer: Optional[int] = None
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def bind(self, maximizer: int) -> None:
        """
        Tie the cache to ``maximizer``.

        Raises:
            ValueError: the cache already holds scores for the other side.
        """
        if self.maximizer is None:
            self.maximizer = maximizer
        elif self.maximizer != maximizer:
            raise ValueError(
                f"Cache holds scores for maximizer {self.maximizer}, "
                f"cannot search for {maximizer}; clear it or use another cache"
            )

    def probe(self, key: bytes, depth: int) -> Optional[CacheEntry]:
        """Return the entry for ``key`` re-based to ``depth``, or None."""
        entry = self._table.get(key)
        if entry is None:
            self.misses += 1
            return None
        self.hits += 1
        return CacheEntry(_from_stored(entry.score, depth), entry.bound)

    def store(self, key: bytes, score: int, depth: int, bound: Bound = Bound.EXACT) -> None:
        """
        Record ``score`` found at ``depth``. An exact entry is final: later
        stores for the same key are ignored. Bounds may be replaced.
        """
        existing = self._table.get(key)
        if existing is not None and existing.bound is Bound.EXACT:
            return
        self._table[key] = CacheEntry(_to_stored(score, depth), bound)
        self.stores += 1

    def clear(self) -> None:
        self._table.clear()
        self.maximizer = None
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_info(self) -> Dict[str, int]:
        exact = sum(1 for e in self._table.values() if e.bound is Bound.EXACT)
        return {
            "entries": len(self._table),
            "exact": exact,
            "bounds": len(self._table) - exact,
            "hits": self.hits,
            "misses": self.misses,
            "stores": self.stores,
        }

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key: bytes) -> bool:
        return key in self._table

"""
Tests for perfect_play.engine.cache

Tests depth re-basing, bound handling and lifecycle of the cache.
"""

import pytest

from perfect_play.core.types import MARK_O, MARK_X
from perfect_play.engine.cache import Bound, CacheEntry, TranspositionCache

KEY = b"\x01\x00\x00\x00\x02\x00\x00\x00\x00\x01"
OTHER = b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x01"


class TestDepthRebasing:
    """Scores are stored relative to the producing node."""

    def test_same_depth_reads_back(self, cache: TranspositionCache):
        cache.store(KEY, 8, depth=2)
        assert cache.probe(KEY, 2) == CacheEntry(8, Bound.EXACT)

    def test_win_reads_shallower_as_larger(self, cache: TranspositionCache):
        cache.store(KEY, 8, depth=2)
        assert cache.probe(KEY, 0).score == 10
        assert cache.probe(KEY, 4).score == 6

    def test_loss_rebased_symmetrically(self, cache: TranspositionCache):
        cache.store(KEY, -7, depth=1)
        assert cache.probe(KEY, 3).score == -5
        assert cache.probe(KEY, 0).score == -8

    def test_draw_unchanged(self, cache: TranspositionCache):
        cache.store(KEY, 0, depth=5)
        assert cache.probe(KEY, 0).score == 0


class TestStore:

    def test_exact_is_final(self, cache: TranspositionCache):
        cache.store(KEY, 5, depth=0)
        cache.store(KEY, 3, depth=0, bound=Bound.LOWER)
        cache.store(KEY, 2, depth=0)
        assert cache.probe(KEY, 0) == CacheEntry(5, Bound.EXACT)
        assert cache.stores == 1

    def test_bound_replaced(self, cache: TranspositionCache):
        cache.store(KEY, 3, depth=0, bound=Bound.LOWER)
        cache.store(KEY, 4, depth=0, bound=Bound.EXACT)
        assert cache.probe(KEY, 0) == CacheEntry(4, Bound.EXACT)

    def test_miss_returns_none(self, cache: TranspositionCache):
        assert cache.probe(OTHER, 0) is None
        assert cache.misses == 1
        assert cache.hits == 0


class TestLifecycle:

    def test_len_and_contains(self, cache: TranspositionCache):
        assert len(cache) == 0
        cache.store(KEY, 1, depth=0)
        cache.store(OTHER, 0, depth=0, bound=Bound.UPPER)
        assert len(cache) == 2
        assert KEY in cache

    def test_clear(self, cache: TranspositionCache):
        cache.bind(MARK_O)
        cache.store(KEY, 1, depth=0)
        cache.probe(KEY, 0)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == cache.misses == cache.stores == 0
        assert cache.maximizer is None

    def test_info(self, cache: TranspositionCache):
        cache.store(KEY, 1, depth=0)
        cache.store(OTHER, 0, depth=0, bound=Bound.UPPER)
        info = cache.get_info()
        assert info["entries"] == 2
        assert info["exact"] == 1
        assert info["bounds"] == 1


class TestBinding:
    """A cache serves one maximizer at a time."""

    def test_bind_same_mark_twice(self, cache: TranspositionCache):
        cache.bind(MARK_O)
        cache.bind(MARK_O)
        assert cache.maximizer == MARK_O

    def test_bind_other_mark_raises(self, cache: TranspositionCache):
        cache.bind(MARK_O)
        with pytest.raises(ValueError, match="maximizer"):
            cache.bind(MARK_X)

    def test_clear_releases_binding(self, cache: TranspositionCache):
        cache.bind(MARK_O)
        cache.clear()
        cache.bind(MARK_X)
        assert cache.maximizer == MARK_X

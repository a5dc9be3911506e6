"""
Alpha-beta minimax over the tic-tac-toe board.

The maximizer is a fixed mark chosen by the caller. Terminal scores:

    maximizer wins   +(10 - depth)
    minimizer wins   -(10 - depth)
    draw              0

``depth`` counts plies from the root of the current search call, so faster
wins score higher and faster losses score lower.

The board is searched in place: each move is placed, searched and removed
again in a ``finally`` block, so the caller always gets its board back
unchanged.
"""

from __future__ import annotations

import math

import numpy as np

from perfect_play.core.hashing import position_key
from perfect_play.core.types import EMPTY, MARKS, MARK_O, WIN_SCORE, Outcome
from perfect_play.engine.cache import Bound, TranspositionCache
from perfect_play.games.board import legal_moves, opponent, terminal_outcome

INF = math.inf


def terminal_score(outcome: Outcome, depth: int, maximizer: int) -> int:
    """Depth-aware score of a finished position from the maximizer's side."""
    if outcome.is_win:
        if outcome.mark == maximizer:
            return WIN_SCORE - depth
        return -(WIN_SCORE - depth)
    return 0


def _classify(score: int, alpha: float, beta: float) -> Bound:
    """Bound type of a fail-soft result searched in window (alpha, beta)."""
    if score <= alpha:
        return Bound.UPPER
    if score >= beta:
        return Bound.LOWER
    return Bound.EXACT


class MinimaxSearch:
    """
    Depth-first alpha-beta search with a transposition cache.

    Args:
        cache: Shared cache; owned by the caller, never cleared here.
            Bound to ``maximizer`` on construction.
        maximizer: Mark whose score is maximized.
        exact_bounds: If True, scores from pruned windows are stored as
            bounds and only reused when they decide the probing window.
            If False, every stored score is trusted as exact. That mode is
            unsound: a pruned score read back as exact misjudges some
            reachable positions and can pick a losing move. It exists
            for comparison only; the move selector never uses it.
    """

    __slots__ = ('cache', 'maximizer', 'minimizer', 'exact_bounds',
                 'nodes_visited', 'cache_hits', 'cutoffs')

    def __init__(
        self,
        cache: TranspositionCache,
        maximizer: int = MARK_O,
        exact_bounds: bool = True,
    ):
        if maximizer not in MARKS:
            raise ValueError(f"maximizer must be one of {MARKS}, got {maximizer!r}")
        cache.bind(maximizer)
        self.cache = cache
        self.maximizer = maximizer
        self.minimizer = opponent(maximizer)
        self.exact_bounds = exact_bounds
        self.nodes_visited = 0
        self.cache_hits = 0
        self.cutoffs = 0

    def evaluate(
        self,
        board: np.ndarray,
        depth: int,
        maximizing: bool,
        alpha: float = -INF,
        beta: float = INF,
    ) -> int:
        """Minimax value of ``board`` with the given side to move."""
        self.nodes_visited += 1
        mover = self.maximizer if maximizing else self.minimizer
        key = position_key(board, mover)

        entry = self.cache.probe(key, depth)
        if entry is not None and (
            entry.bound is Bound.EXACT
            or (entry.bound is Bound.LOWER and entry.score >= beta)
            or (entry.bound is Bound.UPPER and entry.score <= alpha)
        ):
            self.cache_hits += 1
            return entry.score

        outcome = terminal_outcome(board)
        if outcome.is_over:
            score = terminal_score(outcome, depth, self.maximizer)
            self.cache.store(key, score, depth, Bound.EXACT)
            return score

        alpha_orig, beta_orig = alpha, beta

        if maximizing:
            best = -INF
            for move in legal_moves(board):
                board[move] = mover
                try:
                    child = self.evaluate(board, depth + 1, False, alpha, beta)
                finally:
                    board[move] = EMPTY

                best = max(best, child)
                alpha = max(alpha, child)
                # Beta cutoff
                if beta <= alpha:
                    self.cutoffs += 1
                    break
        else:
            best = INF
            for move in legal_moves(board):
                board[move] = mover
                try:
                    child = self.evaluate(board, depth + 1, True, alpha, beta)
                finally:
                    board[move] = EMPTY

                best = min(best, child)
                beta = min(beta, child)
                # Alpha cutoff
                if beta <= alpha:
                    self.cutoffs += 1
                    break

        bound = _classify(best, alpha_orig, beta_orig) if self.exact_bounds else Bound.EXACT
        self.cache.store(key, best, depth, bound)
        return best

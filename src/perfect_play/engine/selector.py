"""
Move selection: the top-level driver of one engine move.

Empty board:  no search. Opening bias if it names a cell, else the fixed
              preference order (center, then corners).
Otherwise:    every legal move is scored with a full-window search and the
              first strictly-best move in ascending index order is chosen.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Dict, List, Optional, Sequence

from perfect_play.core.types import (
    BOARD_SIZE,
    EMPTY,
    MARKS,
    MARK_O,
    MoveScore,
    OpeningBias,
    SearchResult,
)
from perfect_play.engine.cache import TranspositionCache
from perfect_play.engine.search import MinimaxSearch
from perfect_play.games.board import as_board, legal_moves, terminal_outcome
from perfect_play.utils.config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _usable_bias(prior_bias: OpeningBias, legal: Sequence[int]) -> Dict[int, float]:
    """Keep entries that name a legal cell with a positive, finite weight."""
    usable: Dict[int, float] = {}
    for cell, weight in prior_bias.items():
        try:
            cell, weight = int(cell), float(weight)
        except (TypeError, ValueError):
            logger.debug("Ignoring malformed opening bias entry %r: %r", cell, weight)
            continue
        if cell in legal and weight > 0 and math.isfinite(weight):
            usable[cell] = weight
    return usable


def pick_opening(
    legal: Sequence[int],
    prior_bias: OpeningBias,
    preference: Sequence[int],
) -> int:
    """
    Choose the first move of the game without searching.

    The highest-weighted usable bias cell wins (lowest index on ties);
    without one, the first legal cell of ``preference``.
    """
    usable = _usable_bias(prior_bias, legal)
    if usable:
        return max(sorted(usable), key=usable.__getitem__)
    for move in preference:
        if move in legal:
            return move
    return legal[0]


def choose_move(
    board: Any,
    maximizer: int = MARK_O,
    prior_bias: Optional[OpeningBias] = None,
    *,
    cache: Optional[TranspositionCache] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> SearchResult:
    """
    Compute the optimal move for ``maximizer`` on ``board``.

    Args:
        board: Any board accepted by ``as_board``. It is copied; the
            caller's object is never touched.
        maximizer: Mark the engine plays.
        prior_bias: Opening weights (cell -> weight), used on an empty
            board only.
        cache: Transposition cache to consult and fill. A private one is
            used when omitted.
        config: Engine settings (opening order).

    Returns:
        SearchResult. ``move`` is None if the board is full or decided.

    Raises:
        InvalidBoardError: malformed board.
        ValueError: ``maximizer`` is not X or O.
    """
    start = time.perf_counter()

    if maximizer not in MARKS:
        raise ValueError(f"maximizer must be one of {MARKS}, got {maximizer!r}")

    work = as_board(board)
    legal = legal_moves(work)
    if not legal or terminal_outcome(work).is_over:
        return SearchResult.no_move(_elapsed_ms(start))

    # First move of the game: symmetric position, skip the search.
    if len(legal) == BOARD_SIZE:
        move = pick_opening(legal, prior_bias or {}, config.opening_preference)
        logger.debug("Opening move %d (bias=%s)", move, bool(prior_bias))
        return SearchResult(
            move=move,
            score=0,
            evaluated_moves=[MoveScore(move, 0)],
            depth=0,
            elapsed_ms=_elapsed_ms(start),
            nodes_evaluated=1,
            nodes_visited=0,
        )

    if cache is None:
        cache = TranspositionCache()
    search = MinimaxSearch(cache, maximizer)

    best_move: Optional[int] = None
    best_score = -math.inf
    evaluated: List[MoveScore] = []

    for move in legal:
        work[move] = maximizer
        try:
            score = search.evaluate(work, 0, False)
        finally:
            work[move] = EMPTY

        evaluated.append(MoveScore(move, score))
        if score > best_score:
            best_score = score
            best_move = move

    # Display order only; the choice above is already fixed.
    evaluated.sort(key=lambda ms: ms.score, reverse=True)

    result = SearchResult(
        move=best_move,
        score=int(best_score),
        evaluated_moves=evaluated,
        depth=len(legal),
        elapsed_ms=_elapsed_ms(start),
        nodes_evaluated=len(cache),
        nodes_visited=search.nodes_visited,
        cache_hits=search.cache_hits,
    )
    logger.debug(
        "Chose move %d score=%d nodes=%d visited=%d hits=%d in %.2fms",
        result.move, result.score, result.nodes_evaluated,
        result.nodes_visited, result.cache_hits, result.elapsed_ms,
    )
    return result

"""
Core types, constants, and data structures.

This module contains the fundamental types used throughout the engine:
- Cell encoding and board geometry constants
- Outcome: tagged terminal-state value
- SearchResult / MoveScore: what the move selector hands back
- Stats: win/tie/loss counts used by the opening book
- Exception hierarchy
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Mapping, NamedTuple, Optional, Tuple


# ─── Board encoding ───────────────────────────────────────────────────────────
#
# Boards are flat int8 arrays of length 9:
#     0 = empty
#     1 = X (moves first)
#     2 = O

EMPTY = 0
MARK_X = 1
MARK_O = 2
MARKS = (MARK_X, MARK_O)

BOARD_SIZE = 9

# Pre-computed winning lines (indices into the flat board)
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),             # diagonals
)

# Base of the depth-aware terminal score: a win at depth d scores 10 - d.
WIN_SCORE = 10

# Opening weights supplied by callers: cell index -> preference weight.
OpeningBias = Mapping[int, float]


# ─── Exceptions ───────────────────────────────────────────────────────────────

class PerfectPlayError(Exception):
    """Base class for all engine errors."""


class InvalidBoardError(PerfectPlayError, ValueError):
    """Board input has the wrong length or contains foreign cell values."""


class IllegalMoveError(PerfectPlayError, ValueError):
    """A move targets an occupied or out-of-range cell."""


# ─── Outcomes ─────────────────────────────────────────────────────────────────

class State(Enum):
    """Result of a game from one player's point of view."""
    WIN = auto()
    TIE = auto()
    LOSS = auto()
    NEUTRAL = auto()


class Status(Enum):
    WINNER = auto()
    DRAW = auto()
    IN_PROGRESS = auto()


class Outcome(NamedTuple):
    """
    Terminal-state query result.

    Exactly one of is_win / is_draw / in_progress holds. ``mark`` is the
    winning mark (0 unless WINNER) and ``pattern`` the completed line.
    """

    status: Status
    mark: int = EMPTY
    pattern: Optional[Tuple[int, int, int]] = None

    @classmethod
    def winner(cls, mark: int, pattern: Tuple[int, int, int]) -> "Outcome":
        return cls(Status.WINNER, mark, pattern)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(Status.DRAW)

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(Status.IN_PROGRESS)

    @property
    def is_win(self) -> bool:
        return self.status is Status.WINNER

    @property
    def is_draw(self) -> bool:
        return self.status is Status.DRAW

    @property
    def is_over(self) -> bool:
        return self.status is not Status.IN_PROGRESS

    def result_for(self, mark: int) -> State:
        """Translate the outcome into WIN/TIE/LOSS/NEUTRAL for ``mark``."""
        if self.status is Status.WINNER:
            return State.WIN if self.mark == mark else State.LOSS
        if self.status is Status.DRAW:
            return State.TIE
        return State.NEUTRAL


# ─── Search results ───────────────────────────────────────────────────────────

class MoveScore(NamedTuple):
    move: int
    score: int


@dataclass(frozen=True)
class SearchResult:
    """
    Output of one move-selector call.

    ``move`` is None when there is nothing to play (full or decided board).
    ``nodes_evaluated`` is the resident cache size after the search, an
    approximation of work done; ``nodes_visited`` counts real recursive calls.
    """

    move: Optional[int]
    score: int
    evaluated_moves: List[MoveScore] = field(default_factory=list)
    depth: int = 0
    elapsed_ms: float = 0.0
    nodes_evaluated: int = 0
    nodes_visited: int = 0
    cache_hits: int = 0

    @property
    def found(self) -> bool:
        return self.move is not None

    @classmethod
    def no_move(cls, elapsed_ms: float = 0.0) -> "SearchResult":
        return cls(move=None, score=0, elapsed_ms=elapsed_ms)


# ─── Opening statistics ───────────────────────────────────────────────────────

class Stats(NamedTuple):
    """Outcome counts with derived scoring properties."""

    wins: int = 0
    ties: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.ties + self.losses

    @property
    def distribution(self) -> Tuple[float, float, float]:
        t = self.total
        if t == 0:
            return (0.0, 0.0, 0.0)
        return (self.wins / t, self.ties / t, self.losses / t)

    @property
    def win_rate(self) -> int:
        """Rounded win percentage, 0 when nothing was recorded."""
        if self.total == 0:
            return 0
        return round(self.wins / self.total * 100)

    def add(self, result: State) -> "Stats":
        if result is State.WIN:
            return self._replace(wins=self.wins + 1)
        if result is State.TIE:
            return self._replace(ties=self.ties + 1)
        if result is State.LOSS:
            return self._replace(losses=self.losses + 1)
        raise ValueError(f"Cannot record unfinished result: {result}")


# Outcome indexing for column lookups
OUTCOME_INDEX = {State.WIN: 0, State.TIE: 1, State.LOSS: 2}

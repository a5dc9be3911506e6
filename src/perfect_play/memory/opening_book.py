"""
Opening book - learning data the session feeds back into the engine.

Every finished game records the cell the engine opened with and how the
game ended for the engine. ``bias()`` turns the per-cell game counts into
the opening weights ``choose_move`` accepts.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from pathlib import Path
from typing import Any, Dict, List

from perfect_play.core.types import BOARD_SIZE, OUTCOME_INDEX, State, Stats
from perfect_play.games.board import as_board, board_to_string
from perfect_play.memory.schema import SCHEMA

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"
_RESULT_COLUMNS = ("wins", "ties", "losses")


class OpeningBook:
    """sqlite3-backed opening statistics."""

    def __init__(self, db_path: str | Path = IN_MEMORY, read_only: bool = False):
        self.in_memory = str(db_path) == IN_MEMORY
        self.db_path = db_path if self.in_memory else Path(db_path).resolve()
        self.read_only = read_only
        self._closed = False

        if not self.in_memory:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(str(self.db_path))
        if not self.in_memory:
            self.conn.execute("PRAGMA journal_mode=WAL")
            self.conn.execute("PRAGMA synchronous=NORMAL")

        if not read_only:
            self.conn.executescript(SCHEMA)
            self.conn.commit()

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def _require_writable(self) -> None:
        if self.read_only:
            raise RuntimeError("Opening book is read-only")

    def record_game(self, position: int, result: State) -> Stats:
        """Count one finished game that the engine opened at ``position``."""
        self._require_writable()
        if not 0 <= position < BOARD_SIZE:
            raise ValueError(f"Opening position out of range: {position}")
        if result not in OUTCOME_INDEX:
            raise ValueError(f"Cannot record unfinished result: {result}")

        column = _RESULT_COLUMNS[OUTCOME_INDEX[result]]
        self.conn.execute(
            "INSERT OR IGNORE INTO openings (position) VALUES (?)", (position,)
        )
        self.conn.execute(
            f"UPDATE openings SET {column} = {column} + 1 WHERE position = ?",
            (position,),
        )
        self.conn.commit()

        stats = self.get_stats(position)
        logger.debug("Opening %d recorded as %s -> %s", position, result.name, stats)
        return stats

    def record_losing_state(self, board: Any) -> None:
        """Keep the final board of a lost game for inspection."""
        self._require_writable()
        text = board_to_string(as_board(board))
        self.conn.execute(
            "INSERT INTO losing_states (board, recorded_at) VALUES (?, ?)",
            (text, time.time()),
        )
        self.conn.commit()
        logger.warning("Recorded losing state %s", text)

    def reset(self) -> None:
        """Forget all recorded games."""
        self._require_writable()
        self.conn.execute("DELETE FROM openings")
        self.conn.execute("DELETE FROM losing_states")
        self.conn.commit()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_stats(self, position: int) -> Stats:
        row = self.conn.execute(
            "SELECT wins, ties, losses FROM openings WHERE position = ?",
            (position,),
        ).fetchone()
        return Stats(*row) if row else Stats()

    def all_stats(self) -> Dict[int, Stats]:
        rows = self.conn.execute(
            "SELECT position, wins, ties, losses FROM openings ORDER BY position"
        ).fetchall()
        return {pos: Stats(w, t, l) for pos, w, t, l in rows}

    def bias(self) -> Dict[int, float]:
        """Opening weights: number of recorded games per opening cell."""
        return {
            pos: float(stats.total)
            for pos, stats in self.all_stats().items()
            if stats.total > 0
        }

    def losing_states(self) -> List[str]:
        rows = self.conn.execute(
            "SELECT board FROM losing_states ORDER BY id"
        ).fetchall()
        return [r[0] for r in rows]

    def get_info(self) -> Dict[str, Any]:
        stats = self.all_stats()
        losing = self.conn.execute("SELECT COUNT(*) FROM losing_states").fetchone()[0]
        return {
            "openings": len(stats),
            "games": sum(s.total for s in stats.values()),
            "losing_states": losing,
        }

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the database connection."""
        if self._closed:
            return
        self._closed = True

        if not self.in_memory and not self.read_only:
            self.conn.execute("PRAGMA wal_checkpoint(TRUNCATE)")
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()


def open_book(base_dir: str | Path, read_only: bool = False) -> OpeningBook:
    """Open (or create) the opening book stored under ``base_dir``."""
    return OpeningBook(Path(base_dir) / "opening_book.db", read_only=read_only)

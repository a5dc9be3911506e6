"""
Board model - pure functions over the flat 3x3 board.

Uses int8 board of length 9:
    0 = empty
    1 = X
    2 = O

Everything here treats the board by value. ``terminal_outcome`` and
``legal_moves`` are the search hot path and expect an already validated
array; the public wrappers (``game_outcome``, ``is_legal_move``) validate
their input through ``as_board`` first.
"""

from __future__ import annotations

from typing import Any, List, Optional

import numpy as np

from perfect_play.core.types import (
    BOARD_SIZE,
    EMPTY,
    MARK_O,
    MARK_X,
    WIN_LINES,
    InvalidBoardError,
    Outcome,
)

_LINES = np.array(WIN_LINES, dtype=np.intp)
_CELL_VALUES = (EMPTY, MARK_X, MARK_O)

# Cell strings: each cell value maps to its display string
CELL_STRINGS = {EMPTY: " ", MARK_X: "X", MARK_O: "O"}

_TO_SYMBOL = {EMPTY: "-", MARK_X: "X", MARK_O: "O"}
_FROM_SYMBOL = {"X": MARK_X, "O": MARK_O, "-": EMPTY, ".": EMPTY, "_": EMPTY, " ": EMPTY, "": EMPTY}
_SEPARATORS = str.maketrans("", "", "/|\n")

CELL_NAMES = (
    "Top Left", "Top Center", "Top Right",
    "Middle Left", "Center", "Middle Right",
    "Bottom Left", "Bottom Center", "Bottom Right",
)


# ---------------------------------------------------------------------------
# Construction & validation
# ---------------------------------------------------------------------------

def new_board() -> np.ndarray:
    """Return an empty board."""
    return np.zeros(BOARD_SIZE, dtype=np.int8)


def _cell_value(cell: Any) -> int:
    if cell is None:
        return EMPTY
    if isinstance(cell, str):
        try:
            return _FROM_SYMBOL[cell.upper()]
        except KeyError:
            raise InvalidBoardError(f"Unknown cell symbol: {cell!r}") from None
    if isinstance(cell, (int, np.integer)) and not isinstance(cell, (bool, np.bool_)):
        if int(cell) in _CELL_VALUES:
            return int(cell)
    raise InvalidBoardError(f"Unknown cell value: {cell!r}")


def as_board(cells: Any) -> np.ndarray:
    """
    Validate ``cells`` and return it as a fresh int8 board.

    Accepts an integer numpy array (flat or 3x3), a 9-character string
    (see ``board_from_string``) or any sequence of cells, where a cell is
    0/1/2, "X"/"O", or None/""/"-" for empty. The result is always a copy,
    so callers may mutate it freely.

    Raises:
        InvalidBoardError: wrong number of cells or a foreign cell value.
    """
    if isinstance(cells, str):
        return board_from_string(cells)

    if isinstance(cells, np.ndarray) and cells.dtype.kind in "iu":
        flat = cells.ravel()
        if flat.size != BOARD_SIZE:
            raise InvalidBoardError(f"Board must have {BOARD_SIZE} cells, got {flat.size}")
        if not np.isin(flat, _CELL_VALUES).all():
            raise InvalidBoardError(f"Board contains foreign values: {flat.tolist()}")
        return flat.astype(np.int8)

    try:
        values = cells.ravel().tolist() if isinstance(cells, np.ndarray) else list(cells)
    except TypeError:
        raise InvalidBoardError(f"Not a board: {cells!r}") from None

    if len(values) != BOARD_SIZE:
        raise InvalidBoardError(f"Board must have {BOARD_SIZE} cells, got {len(values)}")
    return np.array([_cell_value(c) for c in values], dtype=np.int8)


def board_to_string(board: np.ndarray) -> str:
    """Compact form used for storage and the CLI, e.g. ``"XX-OO----"``."""
    return "".join(_TO_SYMBOL[int(v)] for v in board)


def board_from_string(text: str) -> np.ndarray:
    """
    Parse the compact form. ``X``/``O`` (any case) are marks; ``-``, ``.``,
    ``_`` and space are empty. Row separators ``/`` and ``|`` are ignored.
    """
    symbols = text.translate(_SEPARATORS)
    if len(symbols) != BOARD_SIZE:
        raise InvalidBoardError(
            f"Board string must have {BOARD_SIZE} cells, got {len(symbols)}: {text!r}"
        )
    return np.array([_cell_value(s) for s in symbols], dtype=np.int8)


# ---------------------------------------------------------------------------
# Marks
# ---------------------------------------------------------------------------

def opponent(mark: int) -> int:
    """Toggle X <-> O."""
    return MARK_X + MARK_O - mark


def mark_symbol(mark: int) -> str:
    return CELL_STRINGS[mark]


def mark_from_symbol(symbol: str) -> int:
    """Parse "X" or "O" (any case) into a mark."""
    value = _FROM_SYMBOL.get(symbol.strip().upper())
    if value not in (MARK_X, MARK_O):
        raise ValueError(f"Unknown mark: {symbol!r} (expected X or O)")
    return value


def count_marks(board: np.ndarray) -> tuple:
    """Return (x_count, o_count)."""
    return int(np.count_nonzero(board == MARK_X)), int(np.count_nonzero(board == MARK_O))


def side_to_move(board: np.ndarray) -> int:
    """Infer the mover from mark counts (X moves first)."""
    x_cnt, o_cnt = count_marks(board)
    return MARK_X if x_cnt == o_cnt else MARK_O


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def terminal_outcome(board: np.ndarray) -> Outcome:
    """
    Winner first, then draw, else in progress.

    A legal board has at most one completed line; if an illegal board has
    several, the first in WIN_LINES order is reported.
    """
    cells = board[_LINES]
    won = (cells[:, 0] != EMPTY) & (cells[:, 0] == cells[:, 1]) & (cells[:, 1] == cells[:, 2])
    if won.any():
        i = int(np.argmax(won))
        return Outcome.winner(int(cells[i, 0]), WIN_LINES[i])
    if not (board == EMPTY).any():
        return Outcome.draw()
    return Outcome.in_progress()


def legal_moves(board: np.ndarray) -> List[int]:
    """Indices of empty cells, ascending. This is the search's move order."""
    return np.flatnonzero(board == EMPTY).tolist()


def game_outcome(board: Any) -> Outcome:
    """Validated terminal-state query for external drivers."""
    return terminal_outcome(as_board(board))


def is_legal_move(board: Any, index: Any) -> bool:
    """True iff ``index`` is an in-range integer naming an empty cell."""
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        return False
    if not 0 <= index < BOARD_SIZE:
        return False
    return bool(as_board(board)[index] == EMPTY)


# ---------------------------------------------------------------------------
# Cell helpers
# ---------------------------------------------------------------------------

def cell_name(index: int) -> Optional[str]:
    if 0 <= index < BOARD_SIZE:
        return CELL_NAMES[index]
    return None

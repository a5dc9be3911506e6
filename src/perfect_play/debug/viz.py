"""
Terminal visualizer for boards and search results.

    render_board        - box-drawn board, empty cells numbered, win line highlighted
    render_move_scores  - 3x3 grid of the scores the engine gave each candidate move
    format_search       - one-line summary of a SearchResult
    format_analytics    - one-line summary of the player's results so far
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

import numpy as np

from perfect_play.analytics import PlayerAnalytics
from perfect_play.core.types import EMPTY, SearchResult
from perfect_play.games.board import CELL_STRINGS

# ═══════════════════════════════════════════════════════════════════════════════
# ANSI Colors & Styling
# ═══════════════════════════════════════════════════════════════════════════════

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

FG = {
    "green": "\033[38;5;28m",
    "red": "\033[38;5;124m",
    "yellow": "\033[38;5;142m",
    "gray": "\033[38;5;245m",
    "cyan": "\033[38;5;37m",
}

BG = {
    "selected": "\033[48;5;22m",  # Dark green
}


def score_color(score: int) -> str:
    if score > 0:
        return FG["green"]
    if score == 0:
        return FG["yellow"]
    return FG["red"]


# ═══════════════════════════════════════════════════════════════════════════════
# Text utilities
# ═══════════════════════════════════════════════════════════════════════════════

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def visible_len(text: str) -> int:
    return len(strip_ansi(text))


def pad(text: str, width: int, align: str = "left") -> str:
    gap = max(0, width - visible_len(text))
    if align == "right":
        return " " * gap + text
    if align == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def format_time(ms: float) -> str:
    """``523ms`` below a second, ``1.52s`` above."""
    if ms < 1000:
        return f"{round(ms)}ms"
    return f"{ms / 1000:.2f}s"


# ═══════════════════════════════════════════════════════════════════════════════
# Grids
# ═══════════════════════════════════════════════════════════════════════════════

_TOP = "╭─────┬─────┬─────╮"
_MID = "├─────┼─────┼─────┤"
_BOT = "╰─────┴─────┴─────╯"
_CELL_WIDTH = 5


def _grid(cells: Iterable[str]) -> str:
    cells = list(cells)
    lines = [_TOP]
    for r in range(3):
        row = cells[r * 3:(r + 1) * 3]
        lines.append("│" + "│".join(pad(c, _CELL_WIDTH, "center") for c in row) + "│")
        lines.append(_MID if r < 2 else _BOT)
    return "\n".join(lines)


def render_board(
    board: np.ndarray,
    highlight: Optional[Iterable[int]] = None,
    color: bool = True,
) -> str:
    """Draw the board. Empty cells show their index so players can type it."""
    marked = set(highlight or ())
    cells = []
    for i, v in enumerate(board):
        v = int(v)
        if v == EMPTY:
            text = f"{DIM}{i}{RESET}" if color else str(i)
        else:
            text = CELL_STRINGS[v]
            if color and i in marked:
                text = f"{BG['selected']}{BOLD} {text} {RESET}"
            elif color:
                text = f"{BOLD}{text}{RESET}"
        cells.append(text)
    return _grid(cells)


def render_move_scores(result: SearchResult, color: bool = True) -> str:
    """Grid of candidate-move scores; the chosen cell is starred."""
    scores = {ms.move: ms.score for ms in result.evaluated_moves}
    cells = []
    for i in range(9):
        if i not in scores:
            cells.append("·")
            continue
        text = f"{scores[i]:+d}" if scores[i] else "0"
        if i == result.move:
            text += "*"
        if color:
            text = f"{score_color(scores[i])}{text}{RESET}"
        cells.append(text)
    return _grid(cells)


def format_search(result: SearchResult) -> str:
    if not result.found:
        return "no move available"
    return (
        f"move={result.move} score={result.score:+d} depth={result.depth} "
        f"nodes={result.nodes_evaluated} visited={result.nodes_visited} "
        f"hits={result.cache_hits} time={format_time(result.elapsed_ms)}"
    )


def format_analytics(analytics: PlayerAnalytics) -> str:
    s = analytics.summary()
    return (
        f"games={s['total_games']} W/D/L={s['wins']}/{s['draws']}/{s['losses']} "
        f"win_rate={s['win_rate']}% streak={s['current_streak']} "
        f"best_streak={s['longest_streak']} "
        f"avg_move={format_time(analytics.average_move_time_ms)}"
    )

"""
Debug module - terminal rendering of boards and search results.
"""

from perfect_play.debug.viz import (
    render_board,
    render_move_scores,
    format_search,
    format_time,
    format_analytics,
)

__all__ = [
    "render_board",
    "render_move_scores",
    "format_search",
    "format_time",
    "format_analytics",
]

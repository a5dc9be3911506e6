"""
Memory module - persistent opening statistics.
"""

from perfect_play.memory.opening_book import OpeningBook, open_book, IN_MEMORY

__all__ = [
    "OpeningBook",
    "open_book",
    "IN_MEMORY",
]

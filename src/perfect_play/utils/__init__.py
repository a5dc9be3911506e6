"""
Utilities - configuration and paths.
"""

from perfect_play.utils.config import (
    EngineConfig,
    DEFAULT_CONFIG,
    DATA_DIR,
    BOOK_PATH,
    OPENING_PREFERENCE,
)

__all__ = [
    "EngineConfig",
    "DEFAULT_CONFIG",
    "DATA_DIR",
    "BOOK_PATH",
    "OPENING_PREFERENCE",
]

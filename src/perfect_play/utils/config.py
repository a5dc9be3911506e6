"""
Configuration and paths.
"""

from pathlib import Path
from typing import Sequence, Tuple

from perfect_play.core.types import BOARD_SIZE, MARKS, MARK_O


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).parent.parent  # src/perfect_play/
DATA_DIR = PACKAGE_DIR / "data"
BOOK_PATH = DATA_DIR / "opening_book.db"


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

# Center first, then the corners
OPENING_PREFERENCE = (4, 0, 2, 6, 8)

# Presentation-only pause around an AI move (min, max) in milliseconds
THINKING_DELAY_MS = (400, 900)


def _validate_opening_preference(order: Sequence[int]) -> Tuple[int, ...]:
    order = tuple(int(i) for i in order)
    if not order:
        raise ValueError("opening_preference must name at least one cell")
    bad = [i for i in order if not 0 <= i < BOARD_SIZE]
    if bad:
        raise ValueError(f"opening_preference has out-of-range cells: {bad}")
    return order


class EngineConfig:
    """Engine and session configuration with sensible defaults."""

    def __init__(
        self,
        maximizer: int = MARK_O,
        opening_preference: Sequence[int] = OPENING_PREFERENCE,
        thinking_delay: bool = True,
        thinking_delay_ms: Tuple[int, int] = THINKING_DELAY_MS,
    ):
        if maximizer not in MARKS:
            raise ValueError(f"maximizer must be one of {MARKS}, got {maximizer!r}")

        low, high = thinking_delay_ms
        if low < 0 or high < low:
            raise ValueError(f"Invalid thinking_delay_ms range: {thinking_delay_ms}")

        self.maximizer = maximizer
        self.opening_preference = _validate_opening_preference(opening_preference)
        self.thinking_delay = thinking_delay
        self.thinking_delay_ms = (low, high)

    def __repr__(self) -> str:
        return (
            f"EngineConfig(maximizer={self.maximizer}, "
            f"opening_preference={self.opening_preference}, "
            f"thinking_delay={self.thinking_delay}, thinking_delay_ms={self.thinking_delay_ms})"
        )


# Default configuration
DEFAULT_CONFIG = EngineConfig()

"""
Shared test fixtures for perfect_play tests.

Design principles:
- Boards built from the compact string form for readability
- Sessions never sleep (thinking delay off)
- sqlite files live in temporary paths
"""

import random
import tempfile
from pathlib import Path
from typing import Generator

import numpy as np
import pytest

from perfect_play.api import Engine
from perfect_play.core.types import MARK_X
from perfect_play.engine.cache import TranspositionCache
from perfect_play.games.board import board_from_string, new_board
from perfect_play.memory.opening_book import OpeningBook
from perfect_play.session import GameSession
from perfect_play.utils.config import EngineConfig


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def temp_db_path() -> Generator[Path, None, None]:
    """Temporary database file with cleanup."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    for suffix in ["", "-wal", "-shm"]:
        p = Path(str(path) + suffix)
        if p.exists():
            p.unlink()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory with cleanup."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


# =============================================================================
# Board Fixtures
# =============================================================================

@pytest.fixture
def empty_board() -> np.ndarray:
    return new_board()


@pytest.fixture
def x_threatens_row() -> np.ndarray:
    """X on 0,1 threatening 2; O on 3,4 threatening 5."""
    return board_from_string("XX-OO----")


@pytest.fixture
def drawn_midgame() -> np.ndarray:
    """X center and far corner, O near corner; O to move holds the draw."""
    return board_from_string("O---X---X")


# =============================================================================
# Engine Fixtures
# =============================================================================

@pytest.fixture
def quiet_config() -> EngineConfig:
    """Default engine settings without the presentation delay."""
    return EngineConfig(thinking_delay=False)


@pytest.fixture
def cache() -> TranspositionCache:
    return TranspositionCache()


@pytest.fixture
def engine(quiet_config: EngineConfig) -> Engine:
    return Engine(quiet_config)


# =============================================================================
# Memory & Session Fixtures
# =============================================================================

@pytest.fixture
def book() -> Generator[OpeningBook, None, None]:
    """In-memory opening book."""
    b = OpeningBook()
    yield b
    b.close()


@pytest.fixture
def session(quiet_config: EngineConfig) -> GameSession:
    """Human plays X (moves first), no opening book."""
    return GameSession(human_mark=MARK_X, config=quiet_config, rng=random.Random(0))

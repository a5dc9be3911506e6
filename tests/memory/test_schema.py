"""
Tests for perfect_play.memory.schema

Tests database schema validity.
"""

import sqlite3

import pytest

from perfect_play.memory.schema import SCHEMA


@pytest.fixture
def conn():
    """In-memory database with schema."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(SCHEMA)
    yield conn
    conn.close()


class TestSchemaValidity:

    def test_schema_idempotent(self, conn):
        """Schema can be executed multiple times."""
        conn.executescript(SCHEMA)

    @pytest.mark.parametrize("table", ["openings", "losing_states", "metadata"])
    def test_table_exists(self, conn, table):
        result = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table,)
        ).fetchone()
        assert result is not None


class TestOpeningsTable:

    def test_counts_default_to_zero(self, conn):
        conn.execute("INSERT INTO openings (position) VALUES (4)")
        row = conn.execute("SELECT wins, ties, losses FROM openings").fetchone()
        assert row == (0, 0, 0)

    def test_position_unique(self, conn):
        conn.execute("INSERT INTO openings (position) VALUES (4)")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO openings (position) VALUES (4)")

    def test_losing_state_requires_board(self, conn):
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("INSERT INTO losing_states (recorded_at) VALUES (0)")

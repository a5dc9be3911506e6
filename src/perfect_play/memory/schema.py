"""
Database schema for the opening book.

Tables:
    openings       - Per opening cell: games started there and their results
    losing_states  - Final boards of games the engine lost (should stay empty)
    metadata       - Key-value store for settings
"""

SCHEMA = """
CREATE TABLE IF NOT EXISTS openings (
    position INTEGER PRIMARY KEY,
    wins INTEGER DEFAULT 0,
    ties INTEGER DEFAULT 0,
    losses INTEGER DEFAULT 0
);

CREATE TABLE IF NOT EXISTS losing_states (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    board TEXT NOT NULL,
    recorded_at REAL NOT NULL
);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""

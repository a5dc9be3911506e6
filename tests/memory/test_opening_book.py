"""
Tests for perfect_play.memory.opening_book

Tests recording, bias derivation and persistence of the opening book.
"""

import sqlite3

import pytest

from perfect_play.core.types import State, Stats
from perfect_play.games.board import board_from_string
from perfect_play.memory.opening_book import OpeningBook, open_book


class TestRecordGame:

    def test_first_record(self, book: OpeningBook):
        stats = book.record_game(4, State.TIE)
        assert stats == Stats(wins=0, ties=1, losses=0)

    def test_accumulates(self, book: OpeningBook):
        book.record_game(4, State.TIE)
        book.record_game(4, State.WIN)
        book.record_game(4, State.TIE)
        assert book.get_stats(4) == Stats(1, 2, 0)
        assert book.get_stats(4).total == 3

    def test_positions_independent(self, book: OpeningBook):
        book.record_game(0, State.WIN)
        book.record_game(8, State.LOSS)
        assert book.all_stats() == {0: Stats(1, 0, 0), 8: Stats(0, 0, 1)}

    @pytest.mark.parametrize("position", [-1, 9])
    def test_out_of_range(self, book: OpeningBook, position):
        with pytest.raises(ValueError):
            book.record_game(position, State.WIN)

    def test_neutral_rejected(self, book: OpeningBook):
        with pytest.raises(ValueError):
            book.record_game(4, State.NEUTRAL)

    def test_unknown_position_empty_stats(self, book: OpeningBook):
        assert book.get_stats(2) == Stats()


class TestBias:

    def test_empty_book(self, book: OpeningBook):
        assert book.bias() == {}

    def test_game_counts(self, book: OpeningBook):
        book.record_game(4, State.TIE)
        book.record_game(4, State.WIN)
        book.record_game(0, State.TIE)
        assert book.bias() == {0: 1.0, 4: 2.0}


class TestLosingStates:

    def test_recorded_in_order(self, book: OpeningBook):
        book.record_losing_state(board_from_string("XXXOO----"))
        book.record_losing_state("OOOXX-X--")
        assert book.losing_states() == ["XXXOO----", "OOOXX-X--"]

    def test_info(self, book: OpeningBook):
        book.record_game(4, State.LOSS)
        book.record_losing_state("XXXOO----")
        assert book.get_info() == {"openings": 1, "games": 1, "losing_states": 1}

    def test_reset(self, book: OpeningBook):
        book.record_game(4, State.LOSS)
        book.record_losing_state("XXXOO----")
        book.reset()
        assert book.all_stats() == {}
        assert book.losing_states() == []


class TestPersistence:

    def test_survives_reopen(self, temp_db_path):
        with OpeningBook(temp_db_path) as book:
            book.record_game(4, State.TIE)
        with OpeningBook(temp_db_path) as book:
            assert book.get_stats(4) == Stats(0, 1, 0)

    def test_open_book_creates_directory(self, temp_dir):
        with open_book(temp_dir / "nested") as book:
            book.record_game(2, State.WIN)
        assert (temp_dir / "nested" / "opening_book.db").exists()

    def test_read_only_refuses_writes(self, temp_db_path):
        with OpeningBook(temp_db_path) as book:
            book.record_game(4, State.TIE)
        with OpeningBook(temp_db_path, read_only=True) as book:
            assert book.bias() == {4: 1.0}
            with pytest.raises(RuntimeError, match="read-only"):
                book.record_game(4, State.WIN)

    def test_close_idempotent(self, temp_db_path):
        book = OpeningBook(temp_db_path)
        book.close()
        book.close()
        with pytest.raises(sqlite3.ProgrammingError):
            book.get_stats(4)

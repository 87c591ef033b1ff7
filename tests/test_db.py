"""Tests for DatabaseConnection."""

import pytest
from sqlalchemy.exc import OperationalError

from datatable_plus.db import DatabaseConnection


class TestDatabaseConnection:
    """Tests for the open/close-able connection handle."""

    def test_starts_closed(self, connection):
        assert connection.is_closed
        assert not connection.is_open
        assert connection.dialect_name == "sqlite"

    def test_open_and_close(self, connection):
        connection.open()
        assert connection.is_open

        connection.close()
        assert connection.is_closed

    def test_open_and_close_are_idempotent(self, connection):
        connection.open()
        connection.open()
        assert connection.is_open

        connection.close()
        connection.close()
        assert connection.is_closed

    def test_context_manager(self, engine):
        with DatabaseConnection(engine) as conn:
            assert conn.is_open
        assert conn.is_closed

    def test_execute(self, connection):
        connection.open()
        result = connection.execute("SELECT :value AS v", {"value": 7})
        assert result.scalar_one() == 7

    def test_read_frame(self, connection):
        connection.open()
        frame = connection.read_frame("SELECT :a AS a, :b AS b", {"a": 1, "b": "x"})

        assert list(frame.columns) == ["a", "b"]
        assert frame.iloc[0]["a"] == 1
        assert frame.iloc[0]["b"] == "x"

    def test_read_frame_error_is_unwrapped(self, connection):
        connection.open()
        with pytest.raises(OperationalError):
            connection.read_frame("SELECT * FROM missing_table")

    def test_rollback_ends_transaction(self, connection):
        assert not connection.in_transaction
        connection.open()
        connection.execute("SELECT 1")
        assert connection.in_transaction

        connection.rollback()
        assert not connection.in_transaction
        assert connection.is_open

    def test_rollback_without_transaction_is_noop(self, connection):
        connection.rollback()
        connection.open()
        connection.rollback()
        assert connection.is_open

    def test_requires_open_connection(self, connection):
        with pytest.raises(RuntimeError):
            connection.execute("SELECT 1")
        with pytest.raises(RuntimeError):
            connection.read_frame("SELECT 1")

    def test_built_from_url(self):
        conn = DatabaseConnection("sqlite://")
        try:
            assert conn.dialect_name == "sqlite"
            conn.open()
            assert conn.execute("SELECT 1").scalar_one() == 1
        finally:
            conn.dispose()
        assert conn.is_closed

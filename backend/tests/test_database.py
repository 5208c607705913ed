"""Test cases for database utilities."""

import pytest
from unittest.mock import patch, MagicMock
from sqlalchemy.exc import SQLAlchemyError

from fraudcheck.database import (
    _engine_options, create_tables, drop_tables, check_database_connection, engine, Base
)


class TestDatabaseUtilities:
    """Test cases for database utility functions."""

    @patch('fraudcheck.database.Base.metadata.create_all')
    def test_create_tables_success(self, mock_create_all):
        """Test successful table creation."""
        create_tables()

        mock_create_all.assert_called_once_with(bind=engine)

    @patch('fraudcheck.database.Base.metadata.create_all')
    def test_create_tables_error(self, mock_create_all):
        """Test table creation error handling."""
        mock_create_all.side_effect = SQLAlchemyError("Connection failed")

        with pytest.raises(SQLAlchemyError):
            create_tables()

    @patch('fraudcheck.database.Base.metadata.drop_all')
    def test_drop_tables_success(self, mock_drop_all):
        """Test successful table dropping."""
        drop_tables()

        mock_drop_all.assert_called_once_with(bind=engine)

    @patch('fraudcheck.database.engine.connect')
    def test_check_database_connection_success(self, mock_connect):
        """Test successful database connection check."""
        mock_conn = MagicMock()
        mock_connect.return_value.__enter__.return_value = mock_conn

        assert check_database_connection() is True
        mock_conn.execute.assert_called_once()

    @patch('fraudcheck.database.engine.connect')
    def test_check_database_connection_failure(self, mock_connect):
        """Test database connection check failure."""
        mock_connect.side_effect = SQLAlchemyError("Connection failed")

        assert check_database_connection() is False


class TestDatabaseConfiguration:
    """Test cases for database configuration."""

    def test_sqlite_options(self):
        assert _engine_options("sqlite:///./fraudcheck.db") == {
            "connect_args": {"check_same_thread": False}
        }

    def test_server_pool_options(self):
        options = _engine_options("postgresql://user:pw@db:5432/fraudcheck")
        assert options["pool_size"] == 10
        assert options["pool_recycle"] == 3600
        assert options["pool_pre_ping"] is True

    def test_tables_registered(self):
        """Every store has a table on the shared metadata."""
        assert {"users", "assignments", "notifications"} <= set(Base.metadata.tables)

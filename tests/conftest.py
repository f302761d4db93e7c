"""Shared test fixtures for the dbaccess test suite."""

from unittest.mock import MagicMock, patch

import pytest

from dbaccess.config import ConnectionConfig
from dbaccess.connection import ConnectionHandle


# ---------------------------------------------------------------------------
# Driver fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_cursor():
    """Mock DB-API cursor usable as a context manager."""
    cursor = MagicMock()
    cursor.__enter__.return_value = cursor
    cursor.__exit__.return_value = False
    cursor.fetchall.return_value = []
    cursor.rowcount = 0
    return cursor


@pytest.fixture
def mock_connection(mock_cursor):
    """Mock driver connection handing out mock_cursor."""
    conn = MagicMock()
    conn.cursor.return_value = mock_cursor
    return conn


@pytest.fixture
def mock_pymysql(mock_connection):
    """Patch pymysql.connect to return mock_connection."""
    with patch("dbaccess.connection.pymysql.connect", return_value=mock_connection) as m:
        yield m


@pytest.fixture
def mock_psycopg2(mock_connection):
    """Patch psycopg2.connect to return mock_connection."""
    with patch("dbaccess.connection.psycopg2.connect", return_value=mock_connection) as m:
        yield m


# ---------------------------------------------------------------------------
# Handle / config fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def handle():
    """Fresh, empty connection handle."""
    return ConnectionHandle()


@pytest.fixture
def open_handle(handle, mock_connection):
    """Handle already holding mock_connection."""
    handle.get_or_open(lambda: mock_connection)
    return handle


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def db_env(monkeypatch):
    """Set DB_* environment variables and clear DATABASE_URL."""
    for name in ("DATABASE_URL", "DB_DEBUG", "DB_DRIVER", "DB_CHARSET"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DB_NAME", "test")
    monkeypatch.setenv("DB_HOST", "db.local")
    monkeypatch.setenv("DB_PORT", "3307")
    monkeypatch.setenv("DB_USER", "app")
    monkeypatch.setenv("DB_PASSWORD", "secret")


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def make_config(**kwargs):
    """Create a ConnectionConfig with sensible defaults."""
    defaults = {
        "dbname": "test",
        "host": "127.0.0.1",
        "port": 3306,
        "user": "root",
        "password": "passwd",
    }
    defaults.update(kwargs)
    return ConnectionConfig(**defaults)

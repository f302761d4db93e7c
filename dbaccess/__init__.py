"""Minimal database access: one shared connection, catch() for rows, commit() for counts."""

from .config import ConnectionConfig
from .connection import SHARED_HANDLE, ConnectionHandle, open_connection
from .database import Database, DBConnection, DriverConnection, NullConnection
from .errors import (
    CatchFailed,
    CommitFailed,
    ConnectFailed,
    ConnectionUnavailable,
    DatabaseError,
    InvalidParameterShape,
)
from .query_format import (
    check_params,
    format_columns,
    format_conditions,
    format_placeholders,
)

__all__ = [
    "ConnectionConfig",
    "ConnectionHandle",
    "SHARED_HANDLE",
    "open_connection",
    "Database",
    "DriverConnection",
    "DBConnection",
    "NullConnection",
    "DatabaseError",
    "InvalidParameterShape",
    "ConnectionUnavailable",
    "ConnectFailed",
    "CommitFailed",
    "CatchFailed",
    "check_params",
    "format_columns",
    "format_placeholders",
    "format_conditions",
]

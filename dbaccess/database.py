"""Database clients: read rows with catch(), write with commit()."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .config import ConnectionConfig
from .connection import SHARED_HANDLE, ConnectionHandle, get_driver, open_connection
from .errors import CatchFailed, CommitFailed, ConnectionUnavailable, PlaceholderMismatch
from .query_format import bound_values, check_params, count_placeholders, translate_query

logger = logging.getLogger(__name__)

COMMIT_FAILED = "Error: Commit rows was failed."
CATCH_FAILED = "Error: Catch data was failed."
VERSION_QUERY = "SELECT VERSION() AS `VERSION`;"


class Database(ABC):
    """Basic database operations."""

    @abstractmethod
    def connect(self, config: ConnectionConfig):
        """Open a connection for config."""

    @abstractmethod
    def catch(self, query: str, params=()) -> Optional[list[dict]]:
        """Run a read statement and return its rows."""

    @abstractmethod
    def commit(self, query: str, params=()) -> Optional[int]:
        """Run a write statement and return the affected-row count."""


class DriverConnection(Database):
    """Database backed by a DB-API driver and the shared connection handle."""

    def __init__(self, config: ConnectionConfig, handle: Optional[ConnectionHandle] = None):
        self.config = config
        self.driver = get_driver(config.driver)
        self.handle = handle if handle is not None else SHARED_HANDLE

    @property
    def debug(self) -> bool:
        return self.config.debug

    def check_connection(self) -> None:
        if not self.handle.is_open():
            raise ConnectionUnavailable()

    def connect(self, config: Optional[ConnectionConfig] = None):
        return open_connection(config or self.config)

    def _run(self, query: str, params, fetch: bool):
        self.check_connection()
        check_params(params)

        quote = self.driver.identifier_quote
        hash_comments = self.driver.hash_comments
        if params:
            values = bound_values(params)
            expected = count_placeholders(query, hash_comments)
            if expected != len(values):
                raise PlaceholderMismatch(
                    f"Statement has {expected} placeholders but {len(values)} values were bound"
                )
            sql = translate_query(query, quote, paramstyle=True, hash_comments=hash_comments)
        else:
            values = None
            sql = translate_query(query, quote, hash_comments=hash_comments)

        with self.handle.connection.cursor() as cur:
            if values is None:
                cur.execute(sql)
            else:
                cur.execute(sql, values)
            if fetch:
                return [dict(row) for row in cur.fetchall()]
            return cur.rowcount

    def _failure(self, error_cls, generic: str, e: Exception):
        if self.debug:
            return error_cls(str(e))
        return error_cls(generic)

    def commit(self, query: str, params=()) -> int:
        """
        Execute an INSERT/UPDATE/DELETE statement.

        Args:
            query: SQL with `?` placeholders
            params: Mapping, list or tuple of values, bound in key order

        Returns:
            Number of rows the statement affected
        """
        try:
            return self._run(query, params, fetch=False)
        except (self.driver.error, PlaceholderMismatch) as e:
            logger.error(f"Commit failed: {e}")
            raise self._failure(CommitFailed, COMMIT_FAILED, e) from e

    def catch(self, query: str, params=()) -> list[dict]:
        """
        Execute a SELECT statement.

        Args:
            query: SQL with `?` placeholders
            params: Mapping, list or tuple of values, bound in key order

        Returns:
            All rows as dicts of column name to value (empty list if none)
        """
        try:
            return self._run(query, params, fetch=True)
        except (self.driver.error, PlaceholderMismatch) as e:
            logger.error(f"Catch failed: {e}")
            raise self._failure(CatchFailed, CATCH_FAILED, e) from e


class NullConnection(Database):
    """Placeholder implementation that does nothing."""

    def connect(self, config: ConnectionConfig):
        return None

    def catch(self, query: str, params=()):
        return None

    def commit(self, query: str, params=()):
        return None


class DBConnection(DriverConnection):
    """
    Driver-backed client that opens the shared connection on first use.

    Later constructions reuse the already-open connection. If opening
    fails, ConnectFailed propagates and the handle stays empty.
    """

    def __init__(self, config: ConnectionConfig, handle: Optional[ConnectionHandle] = None):
        super().__init__(config, handle)
        self.handle.get_or_open(self.connect)

    def try_connect(self) -> str:
        """Return the server version, or "ERROR" if the query returned nothing."""
        result = self.catch(VERSION_QUERY)
        return result[0]["VERSION"] if result else "ERROR"

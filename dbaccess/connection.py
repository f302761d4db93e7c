"""Shared connection handle and the drivers that open it."""

import logging
import threading
from urllib.parse import quote

import psycopg2
import psycopg2.extensions
import pymysql
from psycopg2.extras import RealDictCursor
from pymysql.cursors import DictCursor

from .config import ConnectionConfig
from .errors import ConnectFailed

logger = logging.getLogger(__name__)


class MySQLDriver:
    """MySQL / MariaDB through PyMySQL."""

    name = "mysql"
    label = "MySQL"
    identifier_quote = "`"
    hash_comments = True
    error = pymysql.MySQLError

    def build_dsn(self, config: ConnectionConfig) -> str:
        """Descriptor for logs and diagnostics. Never includes the password."""
        host = f"[{config.host}]" if ":" in config.host else quote(config.host, safe="")
        return (
            f"mysql://{quote(config.user, safe='')}@{host}:{config.port}"
            f"/{quote(config.dbname, safe='')}?charset={quote(config.charset, safe='')}"
        )

    def open(self, config: ConnectionConfig):
        return pymysql.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.dbname,
            charset=config.charset,
            cursorclass=DictCursor,
            autocommit=True,
        )


class PostgresDriver:
    """PostgreSQL through psycopg2."""

    name = "postgresql"
    label = "PostgreSQL"
    identifier_quote = '"'
    hash_comments = False
    error = psycopg2.Error

    # MySQL charset names that libpq spells differently
    ENCODINGS = {"utf8mb4": "UTF8", "utf8": "UTF8", "latin1": "LATIN1"}

    def build_dsn(self, config: ConnectionConfig, with_password: bool = False) -> str:
        """libpq connection string, escaped by psycopg2."""
        kwargs = {
            "host": config.host,
            "port": config.port,
            "dbname": config.dbname,
            "user": config.user,
            "client_encoding": self.ENCODINGS.get(config.charset.lower(), config.charset),
        }
        if with_password:
            kwargs["password"] = config.password
        return psycopg2.extensions.make_dsn(**kwargs)

    def open(self, config: ConnectionConfig):
        conn = psycopg2.connect(
            self.build_dsn(config, with_password=True),
            cursor_factory=RealDictCursor,
        )
        conn.autocommit = True
        return conn


DRIVER_REGISTRY = {
    MySQLDriver.name: MySQLDriver(),
    PostgresDriver.name: PostgresDriver(),
}


def get_driver(name: str):
    """Look up a driver by its config name."""
    try:
        return DRIVER_REGISTRY[name]
    except KeyError:
        raise ValueError(f"Unsupported driver: {name!r}") from None


def open_connection(config: ConnectionConfig):
    """
    Open a new connection for config.

    Raises:
        ConnectFailed: The driver refused the connection. The message is the
            raw driver diagnostic when config.debug is set, a generic one
            otherwise.
    """
    driver = get_driver(config.driver)
    logger.info(f"Connecting to {driver.build_dsn(config)}")

    try:
        return driver.open(config)
    except driver.error as e:
        logger.warning(f"Connect to {driver.label} failed: {e}")
        if config.debug:
            raise ConnectFailed(str(e)) from e
        raise ConnectFailed(f"Error: Connect to {driver.label} was failed.") from e


class ConnectionHandle:
    """
    Holder for the one live connection a process shares.

    The connection is opened at most once and is never replaced or
    closed; it lives as long as the process.
    """

    def __init__(self):
        self._connection = None
        self._lock = threading.Lock()

    @property
    def connection(self):
        return self._connection

    def is_open(self) -> bool:
        return self._connection is not None

    def get_or_open(self, opener):
        """Return the held connection, calling opener() first if there is none."""
        with self._lock:
            if self._connection is None:
                self._connection = opener()
            else:
                logger.debug("Reusing shared database connection")
            return self._connection


# Process-wide default handle
SHARED_HANDLE = ConnectionHandle()

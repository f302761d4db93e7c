"""Error types raised by the database access layer."""


class DatabaseError(Exception):
    """Base class for all database access errors."""


class InvalidParameterShape(DatabaseError, TypeError):
    """Statement parameters are not a mapping, list or tuple."""

    def __init__(self, message: str = "Error: wrong data type."):
        super().__init__(message)


class ConnectionUnavailable(DatabaseError):
    """An operation needed the shared connection before it was opened."""

    def __init__(self, message: str = "Error: Database connection failed."):
        super().__init__(message)


class ConnectFailed(DatabaseError):
    """The driver could not open a connection."""


class CommitFailed(DatabaseError):
    """The driver failed to execute a write statement."""


class CatchFailed(DatabaseError):
    """The driver failed to execute a read statement."""


class PlaceholderMismatch(DatabaseError):
    """A statement's `?` markers and its bound values differ in number.

    Raised inside catch()/commit() and reported as CatchFailed/CommitFailed.
    """

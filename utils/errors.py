"""
utils/errors.py
---------------
Exceptions raised by the reporting layer.

Every error carries the name of the query operation that failed so that
callers and logs can tell which report broke.
"""

from typing import Optional


class ReportError(Exception):
    """Base class for all reporting failures."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message)


class InvalidArgumentError(ReportError, ValueError):
    """A caller-supplied argument was rejected before any SQL was issued."""


class NoDataError(ReportError, LookupError):
    """A single scalar was requested over an empty set of rows."""


class StoreUnavailableError(ReportError):
    """
    The database failed while executing a statement.

    The driver exception is kept on ``original`` and chained as ``__cause__``.
    """

    def __init__(self, operation: str, original: Exception):
        self.original = original
        super().__init__(f"database error: {original}", operation)

# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Exception hierarchy for the SP account database layer.

Callers only ever need to catch :class:`QueryFailure` (and
:class:`ConnectError` at construction time).  The ``ResultError`` family
signals misuse of the Result/Value API; operations re-raise those as
``QueryFailure`` so the statement text travels with the error.
"""

from typing import Optional


class SpDatabaseError(Exception):
    """Base class for every error raised by this package."""


class ConnectError(SpDatabaseError):
    """Opening the session to the MySQL server failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Unable to connect to MySQL server: {reason}")


class QueryFailure(SpDatabaseError):
    """
    A statement could not be executed or its result could not be read.

    ``statement`` is the SQL text that was submitted (placeholders, not
    values) and ``cause`` the human-readable reason, usually the server's
    error message.  The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, statement: str, cause: Optional[str] = None):
        self.statement = statement
        self.cause = cause
        if cause:
            description = f"An error occurred when processing a query: {cause}"
        else:
            description = "An error occurred when processing a query."
        super().__init__(f"{description} The query string was: {statement}")


# -- Result / Value API misuse ---------------------------------------------


class ResultError(SpDatabaseError):
    """Programmer error against the Result/Value API."""


class NullResult(ResultError):
    """The statement produced no result set (INSERT, UPDATE …)."""


class NullValue(ResultError):
    """A NULL cell was converted to a concrete type."""


class ColumnNotFound(ResultError):
    """No column with the requested name exists in the result."""


class OutOfRange(ResultError):
    """A row or column index lies outside the result."""

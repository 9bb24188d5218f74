# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Serialised statement execution on a single session.

Concurrency invariant
---------------------
At most one statement is in flight on the session.  ``_lock`` is held from
submission through materialisation of the full result set, and the insert
id is read before it is released, so ``Result.auto_generated_id`` always
belongs to the caller's own statement.  The ``with`` block releases the lock
on every exit path, including both failure kinds.
"""

import threading
from typing import Any, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from spdb.core.logger import logger
from spdb.database import close_session, describe_error
from spdb.errors import QueryFailure
from spdb.result import Result

_CLOSED = "The database session is closed."


class QueryExecutor:
    """Owns one session and runs statements on it one at a time."""

    def __init__(self, connection: Connection):
        self._connection: Optional[Connection] = connection
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._connection is None

    def execute(self, statement: str, params: Optional[Mapping[str, Any]] = None) -> Result:
        """
        Run *statement* with bound *params* and return the fully fetched
        Result.  Raises QueryFailure on any database error.
        """
        with self._lock:
            connection = self._connection
            if connection is None:
                raise QueryFailure(statement, _CLOSED)

            logger.debug("Executing: %s", statement)
            try:
                cursor_result = connection.execute(text(statement), dict(params or {}))
                # Read while the lock is held so no other insert can move it
                auto_generated_id = cursor_result.lastrowid or 0
                if cursor_result.returns_rows:
                    columns = list(cursor_result.keys())
                    rows = [tuple(row) for row in cursor_result.fetchall()]
                    return Result(columns, rows, auto_generated_id=auto_generated_id)
                return Result(
                    None,
                    auto_generated_id=auto_generated_id,
                    affected_rows=cursor_result.rowcount,
                )
            except SQLAlchemyError as exc:
                cause = describe_error(exc)
                logger.warning("Query failed: %s | statement=%s", cause, statement)
                self._recover(connection)
                raise QueryFailure(statement, cause) from exc

    def _recover(self, connection: Connection) -> None:
        # Clears SQLAlchemy's failed-transaction state so the session stays
        # usable for the next statement.
        try:
            connection.rollback()
        except SQLAlchemyError as exc:
            logger.warning("Rollback after failed query also failed: %s", describe_error(exc))

    def close(self) -> None:
        with self._lock:
            connection, self._connection = self._connection, None
        if connection is not None:
            close_session(connection)
            logger.info("Database session closed")

# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy declarative base and the session opener.

A session here is one long-lived autocommit connection to the ``sp`` schema,
owned exclusively by one :class:`spdb.executor.QueryExecutor`.  There is no
pool and no reconnection logic: a lost session surfaces as a QueryFailure and
the caller builds a new wrapper.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from spdb.core.logger import logger
from spdb.errors import ConnectError

# The schema name is fixed for every deployment
DATABASE_NAME = "sp"

Base = declarative_base()


def describe_error(exc: BaseException) -> str:
    """Human-readable cause: the driver's message when there is one."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def build_url(host: str, port: int, user_name: str, password: str) -> URL:
    return URL.create(
        "mysql+pymysql",
        username=user_name,
        password=password,
        host=host,
        port=port,
        database=DATABASE_NAME,
        query={"charset": "utf8mb4"},
    )


def open_session(
    host: str,
    port: int,
    user_name: str,
    password: str,
    connect_timeout: int = 10,
) -> Connection:
    """
    Open one authenticated connection to ``sp`` and return it.

    Every statement on the returned connection commits on its own
    (AUTOCOMMIT), matching the MySQL client default.
    """
    engine = None
    try:
        # A missing driver surfaces here as ImportError
        engine = create_engine(
            build_url(host, port, user_name, password),
            poolclass=NullPool,
            isolation_level="AUTOCOMMIT",
            connect_args={"connect_timeout": connect_timeout},
        )
        connection = engine.connect()
    except (SQLAlchemyError, ImportError) as exc:
        reason = describe_error(exc)
        logger.warning("Unable to connect to MySQL server %s:%s: %s", host, port, reason)
        if engine is not None:
            engine.dispose()
        raise ConnectError(reason) from exc

    logger.info("Connected to MySQL server %s:%s (database=%s)", host, port, DATABASE_NAME)
    return connection


def close_session(connection: Connection) -> None:
    """Close *connection* and release its engine."""
    engine = connection.engine
    try:
        connection.close()
    finally:
        engine.dispose()

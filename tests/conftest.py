"""
Shared fixtures.

``FakeConnection`` stands in for a SQLAlchemy ``Connection``: it records every
statement with its bound parameters and answers from a queue of scripted
cursor results (or exceptions).
"""

from collections import deque

import pytest

from spdb.core import config
from spdb.executor import QueryExecutor
from spdb.wrapper import SpDatabase

BAN_COLUMNS = ("ban_count", "permanent_count", "latest_expiration")


class FakeCursorResult:
    def __init__(self, columns=None, rows=(), lastrowid=0, rowcount=0):
        self._columns = columns
        self._rows = list(rows)
        self.lastrowid = lastrowid
        self.rowcount = rowcount

    @property
    def returns_rows(self):
        return self._columns is not None

    def keys(self):
        return list(self._columns)

    def fetchall(self):
        return list(self._rows)


class FakeEngine:
    def __init__(self):
        self.disposed = False

    def dispose(self):
        self.disposed = True


class FakeConnection:
    def __init__(self):
        self.calls = []
        self.responses = deque()
        self.handler = None
        self.engine = FakeEngine()
        self.rollbacks = 0
        self.closed = False

    def queue(self, *items):
        self.responses.extend(items)

    def queue_rows(self, columns, rows):
        self.queue(FakeCursorResult(columns=columns, rows=rows))

    def queue_ban(self, ban_count, permanent_count, latest_expiration):
        self.queue_rows(BAN_COLUMNS, [(ban_count, permanent_count, latest_expiration)])

    def execute(self, clause, params):
        self.calls.append((clause.text, params))
        if self.handler is not None:
            return self.handler(clause.text, params)
        item = self.responses.popleft() if self.responses else FakeCursorResult()
        if isinstance(item, BaseException):
            raise item
        return item

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True

    @property
    def statements(self):
        return [statement for statement, _ in self.calls]


@pytest.fixture
def connection():
    return FakeConnection()


@pytest.fixture
def executor(connection):
    return QueryExecutor(connection)


@pytest.fixture
def db(executor):
    return SpDatabase(executor=executor)


@pytest.fixture
def clean_defaults(monkeypatch):
    """Isolate the process-wide default settings and the Settings cache."""
    monkeypatch.setattr(config, "_default_connection_settings", None)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()

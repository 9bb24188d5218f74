from decimal import Decimal

import pytest

from spdb import wrapper
from spdb.bans import BanKind
from spdb.core import config
from spdb.core.config import ConnectionSettings
from spdb.errors import OutOfRange, QueryFailure
from spdb.schemas import IpBanInfo, UserLoginInfo, UserPostLoginInfo
from spdb.wrapper import SpDatabase

from conftest import FakeConnection, FakeCursorResult

POST_LOGIN_COLUMNS = ("is_male", "auth", "default_character", "rank", "rank_record", "points", "code")


# -- construction -------------------------------------------------------------


def test_open_with_explicit_tuple(monkeypatch):
    opened = []

    def fake_open_session(host, port, user_name, password, connect_timeout=10):
        opened.append((host, port, user_name, password, connect_timeout))
        return FakeConnection()

    monkeypatch.setattr(wrapper, "open_session", fake_open_session)

    db = SpDatabase.open("db.example", 3307, "sp", "secret")

    assert opened == [("db.example", 3307, "sp", "secret", 10)]
    assert not db.closed


def test_parameterless_constructor_uses_installed_default(monkeypatch, clean_defaults):
    opened = []
    monkeypatch.setattr(
        wrapper,
        "open_session",
        lambda host, port, user_name, password, connect_timeout=10: opened.append(host) or FakeConnection(),
    )
    config.set_default_connection_settings(ConnectionSettings(host="default.example", user_name="sp", password="pw"))

    SpDatabase()

    assert opened == ["default.example"]


def test_context_manager_closes(db, connection):
    with db as entered:
        assert entered is db
    assert db.closed
    assert connection.closed


# -- users --------------------------------------------------------------------


def test_new_account_clean_login(db, connection):
    connection.queue(
        FakeCursorResult(lastrowid=1, rowcount=1),
        FakeCursorResult(columns=["id"], rows=[(1,)]),
        FakeCursorResult(columns=["password", "is_deleted"], rows=[("H", 0)]),
    )
    connection.queue_ban(0, 0, None)

    assert db.create_user("alice", "H", True, "") == 1
    assert db.get_user_id("alice") == 1
    assert db.get_user_login_info(1) == UserLoginInfo(password_hash="H", is_deleted=False, ban_expiration=0)

    statement, params = connection.calls[0]
    assert "creation_ip" not in statement
    assert params == {"name": "alice", "password": "H", "is_male": 1}


def test_create_user_records_creation_ip(db, connection):
    connection.queue(FakeCursorResult(lastrowid=5, rowcount=1))

    assert db.create_user("bob", "H2", False, "10.0.0.7") == 5

    statement, params = connection.calls[0]
    assert statement.endswith("creation_ip = :creation_ip")
    assert params["creation_ip"] == "10.0.0.7"
    assert params["is_male"] == 0


def test_names_are_bound_not_interpolated(db, connection):
    connection.queue(FakeCursorResult(columns=["id"], rows=[]))

    assert db.get_user_id("o'neil") == 0

    statement, params = connection.calls[0]
    assert "o'neil" not in statement
    assert params == {"name": "o'neil"}


def test_login_info_reads_password_column(db, connection):
    connection.queue_rows(("password", "is_deleted"), [("$hash$", 1)])
    connection.queue_ban(0, 0, None)

    info = db.get_user_login_info(9)

    assert info.password_hash == "$hash$"
    assert info.is_deleted is True
    assert connection.calls[0][1] == {"user_id": 9}
    assert connection.calls[1][1] == {"user_id": 9}


def test_login_info_unknown_user(db, connection):
    connection.queue_rows(("password", "is_deleted"), [])

    with pytest.raises(QueryFailure) as info:
        db.get_user_login_info(404)

    assert info.value.statement.startswith("SELECT password, is_deleted FROM user")
    assert isinstance(info.value.__cause__, OutOfRange)


def test_permanent_user_ban_dominates_timed(db, connection):
    connection.queue_rows(("password", "is_deleted"), [("H", 0)])
    connection.queue_ban(2, 1, 2000000000)

    info = db.get_user_login_info(1)

    assert info.ban_expiration == -1
    assert info.ban.kind is BanKind.PERMANENT


def test_latest_timed_user_ban_wins(db, connection):
    connection.queue_rows(("password", "is_deleted"), [("H", 0)])
    connection.queue_ban(2, 0, Decimal("1800000000"))

    assert db.get_user_login_info(2).ban_expiration == 1800000000


def test_user_ban_resolution_statement(db, connection):
    connection.queue_rows(("password", "is_deleted"), [("H", 0)])
    connection.queue_ban(0, 0, None)

    db.get_user_login_info(2)

    assert connection.calls[1] == (
        "SELECT COUNT(*) AS ban_count, "
        "COUNT(*) - COUNT(expiration_date) AS permanent_count, "
        "MAX(UNIX_TIMESTAMP(expiration_date)) AS latest_expiration "
        "FROM userban WHERE user_id = :user_id",
        {"user_id": 2},
    )


def test_ip_ban_absent(db, connection):
    connection.queue_ban(0, 0, None)

    assert db.get_ip_ban_info("10.0.0.1") == IpBanInfo(ban_expiration=0)
    statement, params = connection.calls[0]
    assert "FROM ipban" in statement
    assert params == {"ip": "10.0.0.1"}


def test_ip_ban_permanent(db, connection):
    connection.queue_ban(1, 1, None)
    assert db.get_ip_ban_info("10.0.0.2").ban_expiration == -1


def test_post_login_projection(db, connection):
    connection.queue_rows(POST_LOGIN_COLUMNS, [(0, 5, 7, 2, 9, 100, 42)])

    info = db.get_user_post_login_info(3)

    assert info == UserPostLoginInfo(
        is_male=False, auth=5, default_character=7, rank=2, rank_record=9, points=100, code=42
    )
    statement, params = connection.calls[0]
    assert statement.endswith("WHERE id = :user_id")
    assert params == {"user_id": 3}


def test_post_login_unknown_user(db, connection):
    connection.queue_rows(POST_LOGIN_COLUMNS, [])
    with pytest.raises(QueryFailure):
        db.get_user_post_login_info(404)


# -- bans ---------------------------------------------------------------------


@pytest.mark.parametrize("expiration", [None, -1])
def test_permanent_user_ban_leaves_expiration_null(db, connection, expiration):
    connection.queue(FakeCursorResult(lastrowid=11, rowcount=1))

    assert db.create_user_ban(1, expiration) == 11
    assert connection.calls[0] == ("INSERT INTO userban SET user_id = :user_id", {"user_id": 1})


def test_timed_user_ban(db, connection):
    connection.queue(FakeCursorResult(lastrowid=12, rowcount=1))

    assert db.create_user_ban(2, 1800000000) == 12
    statement, params = connection.calls[0]
    assert statement.endswith("expiration_date = FROM_UNIXTIME(:expiration)")
    assert params == {"user_id": 2, "expiration": 1800000000}


@pytest.mark.parametrize("expiration", [-2, -1700000000])
def test_negative_ban_expiration_is_rejected(db, connection, expiration):
    with pytest.raises(ValueError):
        db.create_user_ban(1, expiration)
    with pytest.raises(ValueError):
        db.create_ip_ban("1.2.3.4", expiration)

    assert connection.calls == []


def test_ip_bans(db, connection):
    connection.queue(FakeCursorResult(lastrowid=3, rowcount=1), FakeCursorResult(lastrowid=4, rowcount=1))

    assert db.create_ip_ban("1.2.3.4") == 3
    assert db.create_ip_ban("1.2.3.4", 1700000000) == 4

    assert connection.calls[0] == ("INSERT INTO ipban SET ip = :ip", {"ip": "1.2.3.4"})
    assert connection.calls[1][1] == {"ip": "1.2.3.4", "expiration": 1700000000}


# -- activity -----------------------------------------------------------------


def test_user_ip_upsert(db, connection):
    db.create_or_update_user_ip(1, "1.2.3.4")
    db.create_or_update_user_ip(1, "1.2.3.4")

    assert len(connection.calls) == 2
    statement, params = connection.calls[1]
    assert "ON DUPLICATE KEY UPDATE last_show_up_date = NOW()" in statement
    assert params == {"user_id": 1, "ip": "1.2.3.4"}


@pytest.mark.parametrize(
    "method,column",
    [
        ("update_last_login_date", "last_login_date"),
        ("update_last_loginserver_online_date", "last_loginserver_online_date"),
        ("update_last_gameserver_online_date", "last_gameserver_online_date"),
    ],
)
def test_timestamp_updates(db, connection, method, column):
    connection.queue(FakeCursorResult(rowcount=1))

    getattr(db, method)(8)

    statement, params = connection.calls[0]
    assert statement == f"UPDATE user SET {column} = NOW() WHERE id = :user_id"
    assert params == {"user_id": 8}


def test_timestamp_update_for_unknown_user_is_no_op(db, connection):
    connection.queue(FakeCursorResult(rowcount=0))
    db.update_last_login_date(999)


def test_database_errors_surface_as_query_failure(db, connection):
    from sqlalchemy.exc import IntegrityError

    connection.queue(IntegrityError("INSERT", {}, Exception(1062, "Duplicate entry 'alice' for key 'name'")))

    with pytest.raises(QueryFailure) as info:
        db.create_user("alice", "H", True)

    assert "Duplicate entry" in info.value.cause
    assert info.value.statement.startswith("INSERT INTO user SET")

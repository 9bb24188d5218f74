# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Data-access operations on the ``sp`` schema.

:class:`SpDatabase` is the thread-safe façade the login and game servers use.
Every operation composes one or two statements, runs them through the
wrapper's :class:`~spdb.executor.QueryExecutor` and maps the rows to a
record.  All failures surface as :class:`~spdb.errors.QueryFailure`.

Security notes
--------------
* Caller-supplied values (names, IPs, hashes) are always bound parameters,
  never interpolated into the statement text.
* Statement text is logged at DEBUG; parameter values are never logged.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from spdb.bans import PERMANENT_BAN, BanState
from spdb.core.config import ConnectionSettings, get_default_connection_settings
from spdb.core.logger import logger
from spdb.database import open_session
from spdb.errors import QueryFailure, ResultError
from spdb.executor import QueryExecutor
from spdb.result import Result
from spdb.schemas import IpBanInfo, UserLoginInfo, UserPostLoginInfo

# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

_INSERT_USER = "INSERT INTO user SET name = :name, password = :password, is_male = :is_male"
_CREATION_IP = ", creation_ip = :creation_ip"

_SELECT_USER_ID = "SELECT id FROM user WHERE name = :name"

_SELECT_LOGIN_INFO = "SELECT password, is_deleted FROM user WHERE id = :user_id"

# One aggregate row per subject: how many bans, how many of them permanent,
# and the latest timed expiration.  BanState.resolve() folds it.
_SELECT_USER_BAN = (
    "SELECT COUNT(*) AS ban_count, "
    "COUNT(*) - COUNT(expiration_date) AS permanent_count, "
    "MAX(UNIX_TIMESTAMP(expiration_date)) AS latest_expiration "
    "FROM userban WHERE user_id = :user_id"
)
_SELECT_IP_BAN = (
    "SELECT COUNT(*) AS ban_count, "
    "COUNT(*) - COUNT(expiration_date) AS permanent_count, "
    "MAX(UNIX_TIMESTAMP(expiration_date)) AS latest_expiration "
    "FROM ipban WHERE ip = :ip"
)

_INSERT_USER_BAN = "INSERT INTO userban SET user_id = :user_id"
_INSERT_IP_BAN = "INSERT INTO ipban SET ip = :ip"
_EXPIRATION = ", expiration_date = FROM_UNIXTIME(:expiration)"

_UPSERT_USER_IP = (
    "INSERT INTO userip SET user_id = :user_id, ip = :ip "
    "ON DUPLICATE KEY UPDATE last_show_up_date = NOW()"
)

_UPDATE_LAST_LOGIN = "UPDATE user SET last_login_date = NOW() WHERE id = :user_id"
_UPDATE_LAST_LOGINSERVER_ONLINE = "UPDATE user SET last_loginserver_online_date = NOW() WHERE id = :user_id"
_UPDATE_LAST_GAMESERVER_ONLINE = "UPDATE user SET last_gameserver_online_date = NOW() WHERE id = :user_id"

# rank is a reserved word since MySQL 8.0.2
_SELECT_POST_LOGIN_INFO = (
    "SELECT is_male, auth, default_character, `rank`, rank_record, points, code "
    "FROM user WHERE id = :user_id"
)


@contextmanager
def _reading(statement: str) -> Iterator[None]:
    """Re-raise Result/Value misuse as a QueryFailure carrying *statement*."""
    try:
        yield
    except ResultError as exc:
        raise QueryFailure(statement, str(exc)) from exc


def _resolve_ban(statement: str, res: Result) -> BanState:
    with _reading(statement):
        latest = res.value("latest_expiration")
        return BanState.resolve(
            res.value("ban_count").as_int(),
            res.value("permanent_count").as_int(),
            None if latest.is_null() else latest.as_long(),
        )


class SpDatabase:
    """
    Thread-safe access to the account database.

    ``SpDatabase()`` connects with the process-wide default settings,
    ``SpDatabase(settings)`` with explicit ones and
    ``SpDatabase.open(host, port, user_name, password)`` with a direct tuple.
    Connection failures raise :class:`~spdb.errors.ConnectError`.
    """

    def __init__(
        self,
        settings: Optional[ConnectionSettings] = None,
        *,
        executor: Optional[QueryExecutor] = None,
    ):
        if executor is None:
            if settings is None:
                settings = get_default_connection_settings()
            executor = QueryExecutor(
                open_session(
                    settings.host,
                    settings.port,
                    settings.user_name,
                    settings.password,
                    connect_timeout=settings.connect_timeout,
                )
            )
        self._executor = executor

    @classmethod
    def open(cls, host: str, port: int, user_name: str, password: str) -> "SpDatabase":
        return cls(ConnectionSettings(host=host, port=port, user_name=user_name, password=password))

    # -- lifecycle ------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._executor.closed

    def close(self) -> None:
        self._executor.close()

    def __enter__(self) -> "SpDatabase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- users ----------------------------------------------------------------

    def create_user(self, name: str, password: str, is_male: bool, creation_ip: Optional[str] = None) -> int:
        """
        Insert a user and return its generated id.  ``creation_ip`` is only
        written when non-empty; otherwise the column keeps its default.
        """
        statement = _INSERT_USER
        params = {"name": name, "password": password, "is_male": int(bool(is_male))}
        if creation_ip:
            statement += _CREATION_IP
            params["creation_ip"] = creation_ip

        user_id = self._executor.execute(statement, params).auto_generated_id
        logger.info("Created user id=%d", user_id)
        return user_id

    def get_user_id(self, name: str) -> int:
        """Return the id of the user called *name*, or 0 when there is none."""
        res = self._executor.execute(_SELECT_USER_ID, {"name": name})
        with _reading(_SELECT_USER_ID):
            if res.row_count == 0:
                return 0
            return res.value().as_int()

    def get_user_login_info(self, user_id: int) -> UserLoginInfo:
        res = self._executor.execute(_SELECT_LOGIN_INFO, {"user_id": user_id})
        with _reading(_SELECT_LOGIN_INFO):
            password_hash = res.value("password").as_string()
            is_deleted = res.value("is_deleted").as_bool()

        res = self._executor.execute(_SELECT_USER_BAN, {"user_id": user_id})
        ban = _resolve_ban(_SELECT_USER_BAN, res)

        return UserLoginInfo(
            password_hash=password_hash,
            is_deleted=is_deleted,
            ban_expiration=ban.to_expiration(),
        )

    def get_user_post_login_info(self, user_id: int) -> UserPostLoginInfo:
        res = self._executor.execute(_SELECT_POST_LOGIN_INFO, {"user_id": user_id})
        with _reading(_SELECT_POST_LOGIN_INFO):
            return UserPostLoginInfo(
                is_male=res.value("is_male").as_bool(),
                auth=res.value("auth").as_int(),
                default_character=res.value("default_character").as_int(),
                rank=res.value("rank").as_int(),
                rank_record=res.value("rank_record").as_int(),
                points=res.value("points").as_int(),
                code=res.value("code").as_int(),
            )

    # -- bans -----------------------------------------------------------------

    def get_ip_ban_info(self, ip: str) -> IpBanInfo:
        res = self._executor.execute(_SELECT_IP_BAN, {"ip": ip})
        return IpBanInfo(ban_expiration=_resolve_ban(_SELECT_IP_BAN, res).to_expiration())

    def create_user_ban(self, user_id: int, expiration: Optional[int] = None) -> int:
        """
        Ban *user_id* until *expiration* (epoch seconds).  ``None`` or ``-1``
        creates a permanent ban; any other negative value raises ValueError.
        Returns the new ban id.
        """
        statement, params = self._ban_insert(_INSERT_USER_BAN, {"user_id": user_id}, expiration)
        ban_id = self._executor.execute(statement, params).auto_generated_id
        logger.info("Created user ban id=%d user_id=%d expiration=%s", ban_id, user_id, params.get("expiration", "permanent"))
        return ban_id

    def create_ip_ban(self, ip: str, expiration: Optional[int] = None) -> int:
        statement, params = self._ban_insert(_INSERT_IP_BAN, {"ip": ip}, expiration)
        ban_id = self._executor.execute(statement, params).auto_generated_id
        logger.info("Created ip ban id=%d expiration=%s", ban_id, params.get("expiration", "permanent"))
        return ban_id

    @staticmethod
    def _ban_insert(statement: str, params: dict, expiration: Optional[int]):
        if expiration is None or expiration == PERMANENT_BAN:
            return statement, params
        # FROM_UNIXTIME() yields NULL for negative input, i.e. a permanent ban
        if expiration < PERMANENT_BAN:
            raise ValueError(f"Invalid ban expiration: {expiration}")
        return statement + _EXPIRATION, dict(params, expiration=int(expiration))

    # -- activity -------------------------------------------------------------

    def create_or_update_user_ip(self, user_id: int, ip: str) -> None:
        """Record a sighting of *user_id* from *ip*, touching last_show_up_date."""
        self._executor.execute(_UPSERT_USER_IP, {"user_id": user_id, "ip": ip})

    def update_last_login_date(self, user_id: int) -> None:
        self._touch(_UPDATE_LAST_LOGIN, user_id)

    def update_last_loginserver_online_date(self, user_id: int) -> None:
        self._touch(_UPDATE_LAST_LOGINSERVER_ONLINE, user_id)

    def update_last_gameserver_online_date(self, user_id: int) -> None:
        self._touch(_UPDATE_LAST_GAMESERVER_ONLINE, user_id)

    def _touch(self, statement: str, user_id: int) -> None:
        res = self._executor.execute(statement, {"user_id": user_id})
        # Unknown ids are a silent no-op
        if res.affected_rows == 0:
            logger.debug("No user row updated for id=%d", user_id)

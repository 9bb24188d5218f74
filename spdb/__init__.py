"""
Data-access layer for the SP account database.

    from spdb import SpDatabase, ConnectionSettings, QueryFailure

    with SpDatabase(ConnectionSettings(host="db", user_name="sp", password="...")) as db:
        user_id = db.get_user_id("alice")
"""

from spdb.bans import BanKind, BanState
from spdb.core.config import (
    ConnectionSettings,
    get_default_connection_settings,
    set_default_connection_settings,
)
from spdb.errors import (
    ColumnNotFound,
    ConnectError,
    NullResult,
    NullValue,
    OutOfRange,
    QueryFailure,
    ResultError,
    SpDatabaseError,
)
from spdb.schemas import IpBanInfo, UserLoginInfo, UserPostLoginInfo
from spdb.wrapper import SpDatabase

__version__ = "1.0.0"

__all__ = [
    "BanKind",
    "BanState",
    "ColumnNotFound",
    "ConnectError",
    "ConnectionSettings",
    "IpBanInfo",
    "NullResult",
    "NullValue",
    "OutOfRange",
    "QueryFailure",
    "ResultError",
    "SpDatabase",
    "SpDatabaseError",
    "UserLoginInfo",
    "UserPostLoginInfo",
    "get_default_connection_settings",
    "set_default_connection_settings",
]

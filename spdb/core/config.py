# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v2
# ---------------------------------------------------------------------------
"""
Application configuration.

Credentials are loaded exclusively from environment variables (prefix
``SP_``) or the etc/app.conf file.  Nothing sensitive is hard-coded here.

Relative paths (the config file, the log file) resolve against the working
directory of the process, not the installed package.  ``SP_CONFIG_FILE``
points at a config file elsewhere.

Two layers live in this module:

* :class:`Settings` – everything read from the environment.
* :class:`ConnectionSettings` – the immutable (host, port, user, password)
  value a wrapper is built from, plus the process-wide write-once default
  read by the parameterless ``SpDatabase()`` constructor.
"""

import os
import threading
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_FILE = os.path.join("etc", "app.conf")
DEFAULT_LOG_FILE = os.path.join("log", "spdb.log")


def config_file() -> str:
    """The env file Settings is loaded from: $SP_CONFIG_FILE or etc/app.conf."""
    return os.getenv("SP_CONFIG_FILE") or DEFAULT_CONFIG_FILE


class ConnectionSettings(BaseModel):
    host: str
    port: int = 3306
    user_name: str
    # Kept out of repr()/str() so the value can be logged
    password: str = Field(repr=False)
    connect_timeout: int = 10

    model_config = {"frozen": True}


class Settings(BaseSettings):
    # MySQL server holding the ``sp`` schema.  Credentials are optional here
    # so logging can be configured by callers that pass ConnectionSettings in
    # code; connection_settings() insists on them.
    db_host: str = "127.0.0.1"
    db_port: int = 3306
    db_user_name: str = ""
    db_password: str = Field(default="", repr=False)
    db_connect_timeout: int = 10

    # Logging – log_config overrides the packaged spdb/etc/logging.conf
    log_file: str = DEFAULT_LOG_FILE
    log_config: Optional[str] = None

    # Used only by sp-seed-user to bootstrap the first account.
    first_user_name: str = ""
    first_user_password_hash: str = ""
    first_user_is_male: bool = True

    model_config = SettingsConfigDict(
        env_prefix="SP_",
        env_file=DEFAULT_CONFIG_FILE,
        extra="ignore",
    )

    def connection_settings(self) -> ConnectionSettings:
        if not self.db_user_name or not self.db_password:
            raise RuntimeError("SP_DB_USER_NAME and SP_DB_PASSWORD must be set to connect")
        return ConnectionSettings(
            host=self.db_host,
            port=self.db_port,
            user_name=self.db_user_name,
            password=self.db_password,
            connect_timeout=self.db_connect_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Load Settings once; later calls return the same instance."""
    return Settings(_env_file=config_file())


# ---------------------------------------------------------------------------
# Process-wide default connection settings
# ---------------------------------------------------------------------------
# Installed once at startup.  A wrapper copies the value when it is
# constructed, so an install after that point is not observed by it.

_default_connection_settings: Optional[ConnectionSettings] = None
_default_lock = threading.Lock()


def set_default_connection_settings(settings: ConnectionSettings) -> None:
    global _default_connection_settings
    with _default_lock:
        if _default_connection_settings is not None:
            raise RuntimeError("Default connection settings are already installed")
        _default_connection_settings = settings


def get_default_connection_settings() -> ConnectionSettings:
    """
    Return the installed default, or fall back to the values from the
    environment / etc/app.conf when nothing was installed.
    """
    with _default_lock:
        installed = _default_connection_settings
    if installed is not None:
        return installed
    return get_settings().connection_settings()

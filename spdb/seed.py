# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first game account.

Run once after the schema has been provisioned:
    sp-seed-user

The script reads SP_FIRST_USER_NAME and SP_FIRST_USER_PASSWORD_HASH from
etc/app.conf (or the environment).  The hash is stored verbatim; it must
already be in the format the login server expects.
"""

from typing import Optional

from spdb.core.config import Settings, get_settings
from spdb.core.logger import configure_logging
from spdb.wrapper import SpDatabase


def seed(settings: Settings, db: Optional[SpDatabase] = None) -> int:
    """Create the configured account unless it exists; return its id (0 if skipped)."""
    if not settings.first_user_name or not settings.first_user_password_hash:
        print("[seed_user] SP_FIRST_USER_NAME or SP_FIRST_USER_PASSWORD_HASH not set – nothing to do.")
        return 0

    owned = db is None
    if db is None:
        db = SpDatabase(settings.connection_settings())
    try:
        existing = db.get_user_id(settings.first_user_name)
        if existing:
            print(f"[seed_user] User '{settings.first_user_name}' already exists (id={existing}) – skipping.")
            return existing

        user_id = db.create_user(
            settings.first_user_name,
            settings.first_user_password_hash,
            settings.first_user_is_male,
        )
        print(f"[seed_user] User '{settings.first_user_name}' created with id={user_id}.")
        return user_id
    finally:
        if owned:
            db.close()


def main() -> None:
    configure_logging()
    seed(get_settings())


if __name__ == "__main__":
    main()

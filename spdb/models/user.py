# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""User ORM model – one row per game account."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, text

from spdb.database import Base


class User(Base):
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(32), unique=True, nullable=False)
    # Hash computed by the login server; stored and returned verbatim.
    password = Column(String(255), nullable=False)
    is_male = Column(Boolean, nullable=False)
    # Accounts are never deleted physically, only flagged.
    is_deleted = Column(Boolean, nullable=False, server_default=text("0"))
    creation_ip = Column(String(45), nullable=True)  # IPv6-sized
    last_login_date = Column(DateTime, nullable=True)
    last_loginserver_online_date = Column(DateTime, nullable=True)
    last_gameserver_online_date = Column(DateTime, nullable=True)
    auth = Column(Integer, nullable=False, server_default=text("0"))
    default_character = Column(Integer, nullable=False, server_default=text("0"))
    rank = Column(Integer, nullable=False, server_default=text("0"))
    rank_record = Column(Integer, nullable=False, server_default=text("0"))
    points = Column(Integer, nullable=False, server_default=text("0"))
    code = Column(Integer, nullable=False, server_default=text("0"))

# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""UserBan ORM model – append-only, one row per ban."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey

from spdb.database import Base


class UserBan(Base):
    __tablename__ = "userban"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    # NULL means the ban never expires
    expiration_date = Column(DateTime, nullable=True)

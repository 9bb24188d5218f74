# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""IpBan ORM model – same shape as UserBan, keyed by IP string."""

from sqlalchemy import Column, Integer, String, DateTime

from spdb.database import Base


class IpBan(Base):
    __tablename__ = "ipban"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ip = Column(String(45), nullable=False, index=True)
    expiration_date = Column(DateTime, nullable=True)

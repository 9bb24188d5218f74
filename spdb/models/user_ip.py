# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""UserIp ORM model – history of the addresses a user was seen from."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func

from spdb.database import Base


class UserIp(Base):
    __tablename__ = "userip"

    # The composite key doubles as the (user_id, ip) unique key the upsert
    # relies on.
    user_id = Column(Integer, ForeignKey("user.id"), primary_key=True)
    ip = Column(String(45), primary_key=True)
    last_show_up_date = Column(DateTime, server_default=func.now(), nullable=False)

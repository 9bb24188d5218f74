# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Ban state and its integer wire encoding.

Callers receive a single integer per subject:

    0   no active ban
    -1  permanent ban (at least one row with NULL expiration)
    >0  epoch seconds of the furthest-in-the-future timed ban

Inside the package the same information is carried by :class:`BanState`;
conversion happens only at the record boundary.
"""

import enum
from typing import Optional

from pydantic import BaseModel

NO_BAN = 0
PERMANENT_BAN = -1


class BanKind(str, enum.Enum):
    NONE = "none"
    PERMANENT = "permanent"
    UNTIL = "until"


class BanState(BaseModel):
    kind: BanKind = BanKind.NONE
    until: int = 0  # epoch seconds, only meaningful for UNTIL

    model_config = {"frozen": True}

    @classmethod
    def none(cls) -> "BanState":
        return cls(kind=BanKind.NONE)

    @classmethod
    def permanent(cls) -> "BanState":
        return cls(kind=BanKind.PERMANENT)

    @classmethod
    def until_epoch(cls, seconds: int) -> "BanState":
        return cls(kind=BanKind.UNTIL, until=seconds)

    @classmethod
    def resolve(cls, ban_count: int, permanent_count: int, latest_expiration: Optional[int]) -> "BanState":
        """
        Fold the ban rows of one subject into a state.  A permanent row wins
        over every timed row regardless of dates; otherwise the latest
        expiration wins.
        """
        if ban_count <= 0:
            return cls.none()
        if permanent_count > 0 or latest_expiration is None:
            return cls.permanent()
        return cls.until_epoch(latest_expiration)

    @classmethod
    def from_expiration(cls, value: int) -> "BanState":
        if value == NO_BAN:
            return cls.none()
        if value == PERMANENT_BAN:
            return cls.permanent()
        if value < 0:
            raise ValueError(f"Invalid ban expiration: {value}")
        return cls.until_epoch(value)

    def to_expiration(self) -> int:
        if self.kind is BanKind.PERMANENT:
            return PERMANENT_BAN
        if self.kind is BanKind.UNTIL:
            return self.until
        return NO_BAN

    @property
    def is_banned(self) -> bool:
        return self.kind is not BanKind.NONE

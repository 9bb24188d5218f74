# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""Pydantic records returned by the data-access operations."""

from pydantic import BaseModel

from spdb.bans import BanState


class UserLoginInfo(BaseModel):
    password_hash: str
    is_deleted: bool
    ban_expiration: int  # 0 none, -1 permanent, >0 epoch seconds

    model_config = {"frozen": True}

    @property
    def ban(self) -> BanState:
        return BanState.from_expiration(self.ban_expiration)


class IpBanInfo(BaseModel):
    ban_expiration: int

    model_config = {"frozen": True}

    @property
    def ban(self) -> BanState:
        return BanState.from_expiration(self.ban_expiration)


class UserPostLoginInfo(BaseModel):
    is_male: bool
    auth: int
    default_character: int
    rank: int
    rank_record: int
    points: int
    code: int

    model_config = {"frozen": True}

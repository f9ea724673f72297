"""Data models for the server list.

``ServerRecord`` mirrors one entry of the Steam ``GetServerList`` response
field-for-field; ``Snapshot`` is one cache generation of those records.
"""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class ServerRecord(BaseModel):
    """A single game server as reported by the Steam master server."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    addr: str = ""
    gameport: int = 0
    steamid: str = ""
    name: str = ""
    appid: int = 0
    gamedir: str = ""
    version: str = ""
    product: str = ""
    region: int = 0
    players: int = 0
    max_players: int = 0
    bots: int = 0
    map: str = ""
    secure: bool = False
    dedicated: bool = False
    os: str = ""
    gametype: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_zero_value(cls, value: object, info: ValidationInfo) -> object:
        # Steam occasionally sends null for a field; treat it like a missing one.
        if value is None and info.field_name is not None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def host(self) -> str:
        """Host part of ``addr``."""
        host, _, _ = self.addr.rpartition(":")
        return host or self.addr

    @property
    def query_port(self) -> int | None:
        """Query port part of ``addr``, or ``None`` when it is absent."""
        _, sep, port = self.addr.rpartition(":")
        if not sep or not port.isdigit():
            return None
        return int(port)


class ServerListPayload(BaseModel):
    servers: list[ServerRecord] = []


class ServerListResponse(BaseModel):
    """Top-level ``GetServerList`` envelope: ``{"response": {"servers": [...]}}``."""

    response: ServerListPayload


@dataclass(frozen=True)
class Snapshot:
    """Records from one successful fetch and the time they were obtained.

    The default instance (no servers, ``fetched_at`` of ``None``) stands for
    "never fetched".
    """

    servers: tuple[ServerRecord, ...] = ()
    fetched_at: datetime | None = None

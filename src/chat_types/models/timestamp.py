"""
Timestamp values for `editedAt`.

`Timestamp` mirrors the document store's timestamp type (seconds +
nanoseconds since the Unix epoch). `EPOCH` is what a parsed message gets when
the payload carries no usable `editedAt`; `SERVER_TIMESTAMP` is written on
every serialize and is replaced by the store at write time.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

_NANOS_PER_SECOND = 1_000_000_000


class Timestamp(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    seconds: int
    nanoseconds: int = Field(default=0, ge=0, lt=_NANOS_PER_SECOND)

    @classmethod
    def from_milliseconds_since_epoch(cls, milliseconds: int) -> Timestamp:
        seconds, millis = divmod(milliseconds, 1000)
        return cls(seconds=seconds, nanoseconds=millis * 1_000_000)

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - datetime(1970, 1, 1, tzinfo=timezone.utc)
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds=seconds, nanoseconds=delta.microseconds * 1000)

    def to_milliseconds(self) -> int:
        return self.seconds * 1000 + self.nanoseconds // 1_000_000

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc).replace(
            microsecond=self.nanoseconds // 1000
        )


class ServerTimestamp:
    """Write-time placeholder. Compare by identity against SERVER_TIMESTAMP."""
    __slots__ = ()
    _instance: ServerTimestamp | None = None

    def __new__(cls) -> ServerTimestamp:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"

    def __reduce__(self):
        return (ServerTimestamp, ())


EPOCH = Timestamp(seconds=0, nanoseconds=0)
SERVER_TIMESTAMP = ServerTimestamp()

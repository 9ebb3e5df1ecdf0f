from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, field_validator


class StatusCacheRecord(BaseModel):
    """Last-known closed set, replaced as a whole on every refresh pass."""

    closed: dict[str, str] = {}  # plugin identifier → closure notice
    last_checked: datetime | None = None  # UTC; None until the first pass completes

    @field_validator("last_checked")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        # Stored timestamps without an offset were written in UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def closed_count(self) -> int:
        return len(self.closed)

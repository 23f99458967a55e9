from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EmergencySmsRequest(BaseModel):
    # Everything is optional here so a missing field becomes our 400,
    # not FastAPI's 422. contactName and hasLocation are only logged,
    # so any JSON value is accepted for them.
    model_config = ConfigDict(populate_by_name=True)

    to: str | None = None
    message: str | None = None
    contact_name: Any = Field(default=None, alias="contactName")
    has_location: Any = Field(default=None, alias="hasLocation")


class TestSmsRequest(BaseModel):
    to: str | None = None


@dataclass(frozen=True)
class SentMessage:
    sid: str
    status: str | None


def utc_timestamp() -> str:
    """ISO-8601 UTC instant with millisecond precision, e.g. 2026-10-17T09:30:00.123Z."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")

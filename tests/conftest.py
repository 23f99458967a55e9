from __future__ import annotations

from typing import Any

import pytest

from lunalock_relay.config import get_settings
from lunalock_relay.errors import ProviderError
from lunalock_relay.sms import SentMessage


class FakeSender:
    """Stands in for SmsSender: records calls, returns a canned result or raises."""

    def __init__(
        self,
        sid: str = "SM123",
        status: str = "queued",
        error: ProviderError | None = None,
    ) -> None:
        self.sid = sid
        self.status = status
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def send(self, to: str, body: str) -> SentMessage:
        self.calls.append({"to": to, "body": body})
        if self.error is not None:
            raise self.error
        return SentMessage(sid=self.sid, status=self.status)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Any:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

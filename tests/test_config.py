from __future__ import annotations

import pytest

from lunalock_relay.config import Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "HOST", "CORS_ORIGINS", "PROVIDER_TIMEOUT_SECONDS", "TWILIO_ACCOUNT_SID"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.cors_origins == ["*"]
    assert settings.provider_timeout is None
    assert settings.masked_account_sid == "NOT SET"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC1234567890abcdef")
    monkeypatch.setenv("TWILIO_PHONE_NUMBER", "+15550001111")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "7.5")

    settings = get_settings()

    assert settings.port == 8080
    assert settings.twilio_phone_number == "+15550001111"
    assert settings.masked_account_sid == "AC12345678..."
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.provider_timeout == 7.5


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "4000")
    first = get_settings()
    monkeypatch.setenv("PORT", "5000")
    assert get_settings() is first
    assert get_settings().port == 4000

    get_settings.cache_clear()
    assert Settings().port == 5000

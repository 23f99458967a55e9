from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


class Settings(BaseModel):
    # --- Twilio account used for every outbound SMS ---
    twilio_account_sid: str | None = Field(default_factory=lambda: os.getenv("TWILIO_ACCOUNT_SID"))
    twilio_auth_token: str | None = Field(default_factory=lambda: os.getenv("TWILIO_AUTH_TOKEN"))
    twilio_phone_number: str | None = Field(
        default_factory=lambda: os.getenv("TWILIO_PHONE_NUMBER")
    )

    # Seconds to wait on the Twilio HTTP call. None keeps the client's defaults.
    provider_timeout: float | None = Field(
        default_factory=lambda: _env_float("PROVIDER_TIMEOUT_SECONDS")
    )

    # --- HTTP server ---
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT") or 3000))

    # Comma-separated list; "*" lets the mobile app and browser demos through.
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
    )

    # --- Logging ---
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = Field(default_factory=lambda: os.getenv("LOG_FORMAT", "text"))

    @property
    def masked_account_sid(self) -> str:
        """First 10 characters of the account SID, safe to print at startup."""
        if not self.twilio_account_sid:
            return "NOT SET"
        return self.twilio_account_sid[:10] + "..."


@lru_cache
def get_settings() -> Settings:
    return Settings()

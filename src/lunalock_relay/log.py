"""
Logging configuration.

Plain, human-readable lines for local runs and a JSON formatter for
hosted deployments where logs are shipped to a collector.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

from .config import Settings, get_settings

ROOT_LOGGER_NAME = "lunalock"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(
            fmt="[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """
    Configure the root logger once for the whole process.

    LOG_FORMAT=json switches to structured output; anything else is text.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # The Twilio client logs every request/response header at INFO.
    logging.getLogger("twilio.http_client").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger(ROOT_LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """Logger under the project namespace, e.g. get_logger(__name__)."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")

from __future__ import annotations

import json
import logging

import pytest

from lunalock_relay.config import Settings
from lunalock_relay.log import JsonFormatter, TextFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger() -> object:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_json() -> None:
    setup_logging(Settings(log_format="json", log_level="debug"))
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    assert logging.getLogger("twilio.http_client").level == logging.WARNING


def test_setup_logging_text_by_default() -> None:
    setup_logging(Settings(log_format="text", log_level="INFO"))
    assert isinstance(logging.getLogger().handlers[0].formatter, TextFormatter)


def test_json_formatter_output() -> None:
    record = logging.LogRecord("lunalock.main", logging.INFO, __file__, 1, "sent %s", ("SM1",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "sent SM1"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "lunalock.main"


def test_get_logger_namespace() -> None:
    assert get_logger("lunalock_relay.main").name == "lunalock.main"

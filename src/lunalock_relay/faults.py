"""
Process-wide fault boundary.

Anything that escapes a request handler is a bug, not a delivery
failure: log it and take the whole process down with a nonzero status
so the supervisor restarts it.
"""

from __future__ import annotations

import asyncio
import os
import sys
import threading
from types import TracebackType
from typing import Any, NoReturn

from .log import get_logger

logger = get_logger(__name__)

FATAL_EXIT_CODE = 1


def die(reason: str, exc: BaseException | None = None) -> NoReturn:
    if exc is not None:
        logger.critical("❌ %s", reason, exc_info=(type(exc), exc, exc.__traceback__))
    else:
        logger.critical("❌ %s", reason)
    # os._exit skips atexit hooks and thread joins: no draining.
    os._exit(FATAL_EXIT_CODE)


def _excepthook(
    exc_type: type[BaseException], exc: BaseException, tb: TracebackType | None
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    die("Uncaught Exception", exc)


def _thread_excepthook(args: threading.ExceptHookArgs) -> None:
    if args.exc_value is None or isinstance(args.exc_value, SystemExit):
        return
    thread_name = args.thread.name if args.thread else "unknown"
    die(f"Uncaught Exception in thread {thread_name}", args.exc_value)


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    exc = context.get("exception")
    if isinstance(context.get("future"), asyncio.Future) and exc is not None:
        die(f"Unhandled Rejection: {context.get('message', 'task failed')}", exc)
    # Transport noise (client resets, ...) is not a reason to exit.
    loop.default_exception_handler(context)


def install_fault_handlers() -> None:
    """Exit on exceptions nobody caught, in the main thread or any worker thread."""
    sys.excepthook = _excepthook
    threading.excepthook = _thread_excepthook


def install_loop_exception_handler(loop: asyncio.AbstractEventLoop) -> None:
    """Exit when an asyncio task fails and nobody ever awaited its result."""
    loop.set_exception_handler(_loop_exception_handler)

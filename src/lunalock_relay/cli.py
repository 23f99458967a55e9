from __future__ import annotations

import asyncio
import os
import signal
from types import FrameType

import uvicorn

from .config import get_settings
from .faults import install_fault_handlers, install_loop_exception_handler
from .log import get_logger, setup_logging

logger = get_logger(__name__)


class RelayServer(uvicorn.Server):
    """
    uvicorn server that stops on Ctrl-C without draining in-flight requests.

    SIGTERM keeps uvicorn's normal graceful shutdown.
    """

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        if sig == signal.SIGINT:
            logger.info("🛑 Shutting down server...")
            os._exit(0)
        super().handle_exit(sig, frame)


async def _serve(server: uvicorn.Server) -> None:
    install_loop_exception_handler(asyncio.get_running_loop())
    await server.serve()


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    install_fault_handlers()

    config = uvicorn.Config(
        "lunalock_relay.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # keep the handlers installed by setup_logging
    )
    asyncio.run(_serve(RelayServer(config)))


if __name__ == "__main__":
    main()

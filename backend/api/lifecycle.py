"""
Process-level failure handling.

An exception that escapes to the event loop (a task nobody awaited, a
failing callback) leaves the process in an unknown state. It is logged and
the server is asked to shut down gracefully: stop accepting connections,
let in-flight requests drain, then exit with status 1.
"""

import asyncio
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ShutdownTarget(Protocol):
    """The part of uvicorn.Server the monitor relies on."""

    should_exit: bool


class FatalErrorMonitor:
    """
    Event loop exception handler that triggers a graceful shutdown.

    Usage:
        monitor = FatalErrorMonitor(server)
        monitor.install(asyncio.get_running_loop())
        await server.serve()
        sys.exit(monitor.exit_code)
    """

    def __init__(self, server: ShutdownTarget):
        self._server = server
        self.tripped = False

    @property
    def exit_code(self) -> int:
        return 1 if self.tripped else 0

    def install(self, loop: asyncio.AbstractEventLoop) -> None:
        loop.set_exception_handler(self.handle)

    def handle(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        message = context.get("message", "Unhandled error in event loop")
        if exc is not None:
            logger.critical("Error: %s", exc, exc_info=exc)
        else:
            logger.critical("Error: %s", message)

        if not self.tripped:
            logger.critical("Shutting down: waiting for in-flight requests to finish")
        self.tripped = True
        self._server.should_exit = True

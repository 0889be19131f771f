#!/usr/bin/env python
"""
Run the Storefront API server.

Usage:
    uv run python run_api.py
    uv run python run_api.py --reload  # Development mode

Without --reload, an error escaping to the event loop shuts the server down
gracefully and the process exits with status 1.
"""

import argparse
import asyncio
import logging
import sys

import uvicorn

from api.lifecycle import FatalErrorMonitor
from shared.config import get_settings


async def serve(server: uvicorn.Server, monitor: FatalErrorMonitor) -> None:
    monitor.install(asyncio.get_running_loop())
    await server.serve()


def main():
    parser = argparse.ArgumentParser(description="Run Storefront API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = args.host or settings.host
    port = args.port or settings.port

    if args.reload or settings.reload:
        # The reloader runs the app in a subprocess it manages itself
        uvicorn.run("api:app", host=host, port=port, reload=True)
        return

    server = uvicorn.Server(uvicorn.Config("api:app", host=host, port=port))
    monitor = FatalErrorMonitor(server)
    asyncio.run(serve(server, monitor))
    sys.exit(monitor.exit_code)


if __name__ == "__main__":
    main()

"""Entry point for the reservation service.

Serves ``reservation_api.app.main:app`` with Uvicorn.  Host and port are
read from ``API_HOST`` and ``API_PORT`` (defaults ``0.0.0.0`` and
``8000``); everything else comes from the settings environment
variables, see ``reservation_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from reservation_api.app.core.config import settings
from reservation_api.app.main import app


async def run_api() -> None:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")

"""Entry point for the Clinic API.

Serves ``clinic_api.app.main:app`` with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as ``DATABASE_URL``, ``LOG_LEVEL``, ``HOST`` and
``PORT`` is read from environment variables; see
``clinic_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from clinic_api.app.core.config import settings
from clinic_api.app.main import app


async def main() -> None:
    """Start the API server.

    Host and port come from the ``HOST`` and ``PORT`` settings.
    Defaults are ``0.0.0.0`` and ``8000``.
    """
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")

"""Entry point for the tourism flow records API.

Launches the FastAPI application with uvicorn.  Host and port are read
from the ``API_HOST`` and ``API_PORT`` environment variables (defaults
``0.0.0.0`` and ``8083``); data file locations and the log level come
from the settings in ``turismo_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from turismo_api.app.main import app as api_app


async def run_api() -> None:
    """Serve the API until interrupted."""
    api_host = os.getenv("API_HOST", "0.0.0.0")
    api_port = int(os.getenv("API_PORT", "8083"))
    config = Config(app=api_app, host=api_host, port=api_port, reload=False, log_level="info", log_config=None)
    server = Server(config)
    logging.getLogger(__name__).info("Starting API on %s:%d", api_host, api_port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass

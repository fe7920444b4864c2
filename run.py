"""Entry point for serving the Food Storage API.

Launches the FastAPI application under Uvicorn.  Host, port and the
database location are read from environment variables (``HOST``,
``PORT``, ``DATABASE_URL``); see ``food_api.app.core.config`` for the
full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from food_api.app.core.config import settings
from food_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    try:
        await server.serve()
    except Exception:
        logging.exception("API server stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

"""
Main entrypoint for the Food Storage API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, so it can be served directly::

    uvicorn food_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse

from .core.config import settings
from .core.logging_config import setup_logging
from .core.db import get_database_path, init_db
from .core.stable_map import StableMap, StorageUnavailableError
from .api.v1.router import router as v1_router
from .schemas.food import Food
from .services.food_service import FoodService

logger = logging.getLogger(__name__)


def create_app(database_path: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database_path : Optional[str]
        SQLite file to keep the records in.  Defaults to
        ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The food store is
        opened when the application starts up and is kept on
        ``app.state`` for the lifetime of the process.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.include_router(v1_router, prefix=settings.api_prefix)

    db_path = get_database_path(database_path)

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db(db_path)
        storage = StableMap(db_path, Food, memory_id=settings.foods_memory_id)
        app.state.food_service = FoodService(storage)
        logger.info("Food storage opened at %s (memory id %s)", db_path, settings.foods_memory_id)

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError) -> PlainTextResponse:
        logger.error("Storage unavailable during %s %s", request.method, request.url.path, exc_info=exc)
        return PlainTextResponse(
            "storage unavailable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return app


app = create_app()

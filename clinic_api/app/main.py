"""
Main entrypoint for the Clinic API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``::

    uvicorn clinic_api.app.main:app --reload

Besides routing, the app installs:

* an HTTP middleware that writes one ``[METHOD] path - status`` line
  per request and turns unhandled exceptions into a 500 response;
* exception handlers rendering framework errors (bad request bodies,
  unknown routes, rejected identifiers) as ``{"message": ...}``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.db import init_db
from .core.errors import INTERNAL_ERROR_MESSAGE, error_response, validation_message
from .core.logging_config import log_request, setup_logging
from .api.v1.router import router as v1_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Creates the database file if needed and brings the schema up to date.
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that anything below can log.
    setup_logging(settings.log_level, settings.log_file or None)
    logger = logging.getLogger(__name__)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error for %s %s", request.method, request.url.path)
            response = error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
        log_request(request.method, request.url.path, response.status_code)
        return response

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        response = error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()

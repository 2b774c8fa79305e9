"""
Main entrypoint for the Enrollment API.

This module assembles the FastAPI application, sets up logging,
registers the handlers that turn application errors into HTTP
responses and includes versioned routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn enrollment_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import ApplicationError, InvalidDataError, NotFoundError, UnauthorizedError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Map an ``ApplicationError`` to a JSON error response."""
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidDataError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, UnauthorizedError):
        status_code = status.HTTP_401_UNAUTHORIZED
    else:
        logger.error("Unhandled application error on %s: %s", request.url.path, exc)
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    body = {"name": exc.name, "message": exc.message}
    if isinstance(exc, InvalidDataError):
        body["details"] = exc.details
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, registers error handlers and the v1 router,
    and applies database migrations on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first run.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()

"""
Main entrypoint for the Barbershop Scheduling API.

This module assembles the FastAPI application, sets up logging,
registers the handlers that turn domain errors into HTTP responses and
includes the versioned routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``::

    uvicorn barbershop_api.app.main:app --reload
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import (
    MissingField,
    NotFound,
    ReferenceNotFound,
    SchedulingError,
    SlotConflict,
    StorageFailure,
    ValidationError,
)
from .core.logging_config import setup_logging
from .core.store import get_store, init_store

# Checked in order; subclasses must precede their bases.
ERROR_STATUS = (
    (SlotConflict, 409),
    (ReferenceNotFound, 400),
    (NotFound, 404),
    (MissingField, 400),
    (ValidationError, 400),
    (StorageFailure, 500),
)


def status_for(exc: SchedulingError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logging.getLogger(__name__).error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"error": exc.message})


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None, access_log=settings.debug)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.add_exception_handler(SchedulingError, scheduling_error_handler)

    app.include_router(v1_router, prefix="/api/v1")
    # NOTE: front-ends built against the first release call ``/api/customers``
    # and friends without a version segment.  The same router is mounted
    # under ``/api`` so both paths keep working.
    app.include_router(v1_router, prefix="/api", include_in_schema=False)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Create empty collection files on first run.
        created = init_store()
        logging.getLogger(__name__).info(
            "Data directory %s ready (created: %s)", get_store().data_dir, ", ".join(created) or "none"
        )

    # Static assets go last so they never shadow API routes.
    if os.path.isdir(settings.public_dir):
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")

    return app


app = create_app()

"""
Main entrypoint for the Reservation Store API.

``create_app`` configures logging, mounts the versioned routers and
registers the startup hook that migrates and seeds the store.  The
instance created at import time can be served directly::

    uvicorn reservation_api.app.main:app --reload
"""

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.logging_config import setup_logging
from .core.store import get_store, init_store


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured application exposing the v1 routes under
        ``/api/v1``.
    """
    # Logging first so that everything below may log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the store file when missing, applies migrations and
        # seeds the primary administrator into an empty store.  Honour a
        # test override of the store dependency.
        store_provider = app.dependency_overrides.get(get_store, get_store)
        init_store(store_provider())

    return app


app = create_app()

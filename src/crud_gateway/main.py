"""
Application factory.

    app = create_app()                       # production: connects on startup
    app = create_app(storage=FakeStorage())  # tests: no database involved

One CRUD router is mounted per table known to the schema registry, under
settings.API_PREFIX.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crud_gateway.api.crud_endpoints import crud_router
from crud_gateway.api.error_handlers import register_exception_handlers
from crud_gateway.config.settings import Settings, get_settings
from crud_gateway.core.logging.middleware import RequestIDMiddleware
from crud_gateway.db.database import connect_to_db, disconnect_from_db
from crud_gateway.db.storage import SQLAlchemyStorage, Storage
from crud_gateway.schemas.registry import get_schema_registry
from crud_gateway.utils.project import get_project_name, get_project_version

logger = logging.getLogger(__name__)


class DatabaseUnavailableError(RuntimeError):
    """Raised at startup when the database cannot be reached."""


def _lifespan(settings: Settings, storage: Storage | None):

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if storage is not None:
            app.state.storage = storage
            yield
            return

        engine = await connect_to_db(settings)
        if engine is None:
            raise DatabaseUnavailableError("Could not connect to the database")

        app.state.storage = SQLAlchemyStorage(engine)
        try:
            yield
        finally:
            await disconnect_from_db(engine)

    return lifespan


def create_app(settings: Settings | None = None, storage: Storage | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=get_project_name(),
        version=get_project_version(default="0.0.0"),
        lifespan=_lifespan(settings, storage),
    )
    # also set here so the app works with clients that skip the lifespan
    if storage is not None:
        app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONT_END_URL] if settings.FRONT_END_URL else [],
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
        allow_credentials=True,
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    for table_name in get_schema_registry().table_names():
        app.include_router(crud_router(table_name), prefix=settings.API_PREFIX)

    logger.debug("app.created", extra={"api_prefix": settings.API_PREFIX})
    return app

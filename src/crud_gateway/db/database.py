import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from crud_gateway.config.settings import Settings

logger = logging.getLogger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        pool_pre_ping=True,              # Enables connection health checks
    )


async def connect_to_db(settings: Settings) -> AsyncEngine | None:
    """
    Create the connection pool and prove it works with `SELECT 1`.

    Returns None (after disposing the pool) when the database is unreachable;
    the caller decides whether that is fatal.
    """
    engine = create_engine(settings)

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1;"))
    except (SQLAlchemyError, OSError):
        logger.exception("Error connecting to database")
        await engine.dispose()
        return None

    logger.info("Connected to database")
    return engine


async def disconnect_from_db(engine: AsyncEngine) -> None:
    try:
        await engine.dispose()
    except (SQLAlchemyError, OSError):
        logger.exception("Error disconnecting from database")
        return

    logger.info("Disconnected from database")

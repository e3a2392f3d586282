"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from crud_shared.config.logging import api_logger as logger, setup_logging
from crud_shared.config.settings import settings
from crud_shared.infrastructure.db import dispose_engine, get_engine
from generic_server.models import Base


async def create_tables() -> None:
    """Create tables for every mapped entity (no-op for existing tables)."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()

    config_errors = settings.validate_production_config()
    if config_errors:
        for error in config_errors:
            logger.error("Configuration error: %s", error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(config_errors)}. "
                "Server will not start with insecure configuration."
            )
        logger.warning("Running with development defaults")

    logger.info("Starting generic server", port=settings.port, env=settings.environment)

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables created/verified")

    yield

    logger.info("Shutting down generic server")
    await dispose_engine()

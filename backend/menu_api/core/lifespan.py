"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.config.logging import menu_api_logger as logger, setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import engine
from menu_api.models import Base


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()

    # Validate production secrets before startup
    secret_errors = settings.validate_production_secrets()
    if secret_errors:
        for error in secret_errors:
            logger.error("Configuration error: %s", error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(secret_errors)}. "
                "Server will not start with insecure configuration."
            )
        logger.warning("Running with insecure defaults (acceptable for development only)")

    logger.info("Starting menu API", port=settings.api_port, env=settings.environment)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    app.state.started_at = time.monotonic()

    yield

    logger.info("Shutting down menu API")
    engine.dispose()

"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from cafe_api.models import Base
from cafe_api.services.domain import AuthService
from shared.config.logging import cafe_api_logger as logger, setup_logging
from shared.config.settings import settings
from shared.infrastructure.db import engine, get_db_context
from shared.infrastructure.events import close_redis_pool, reset_event_publisher


def bootstrap_super_admin() -> None:
    """Create the configured super admin when none exists yet."""
    if not (settings.bootstrap_super_admin_email and settings.bootstrap_super_admin_password):
        return
    with get_db_context() as db:
        created = AuthService(db).bootstrap_super_admin(
            settings.bootstrap_super_admin_name,
            settings.bootstrap_super_admin_email,
            settings.bootstrap_super_admin_password,
        )
    if created is not None:
        logger.info("Bootstrap super admin created", user_id=created.id)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()

    secret_errors = settings.validate_production_secrets()
    if secret_errors:
        for error in secret_errors:
            logger.error("Configuration error: %s", error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(secret_errors)}. "
                "Server will not start with insecure configuration."
            )

    logger.info("Starting cafe API", port=settings.api_port, env=settings.environment)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    bootstrap_super_admin()

    yield

    logger.info("Shutting down cafe API")

    await close_redis_pool()
    reset_event_publisher()
    logger.info("Redis connection pool closed")

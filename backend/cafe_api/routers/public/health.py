"""
Health check endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import SessionLocal
from shared.infrastructure.events import check_redis_health, get_event_circuit_breaker

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check():
    """Service status without checking dependencies."""
    return {
        "status": "healthy",
        "service": "cafe-api",
        "environment": settings.environment,
    }


@router.get("/health/detailed")
async def detailed_health_check():
    """
    Database and Redis connectivity. Returns 503 when the database is down;
    Redis only degrades the status since notifications are best-effort.
    """
    database_ok = True
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        database_ok = False

    redis_ok = await check_redis_health() if settings.event_publishing_enabled else None

    if not database_ok:
        overall = "unhealthy"
    elif redis_ok is False:
        overall = "degraded"
    else:
        overall = "healthy"

    body = {
        "service": "cafe-api",
        "environment": settings.environment,
        "status": overall,
        "dependencies": {
            "database": "healthy" if database_ok else "unhealthy",
            "redis": "disabled" if redis_ok is None else ("healthy" if redis_ok else "unhealthy"),
        },
        "event_circuit_breaker": get_event_circuit_breaker().get_stats(),
    }
    return JSONResponse(content=body, status_code=200 if database_ok else 503)

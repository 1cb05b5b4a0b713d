"""
Cafe API main application.
Entry point for the FastAPI REST server.

    uvicorn cafe_api.main:app --app-dir backend --port 8000
"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from cafe_api.core import configure_cors, lifespan, register_middlewares
from cafe_api.routers import (
    admin_router,
    auth_router,
    health_router,
    orders_router,
    public_router,
)
from shared.config.settings import settings
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler


def create_app() -> FastAPI:
    app = FastAPI(
        title="Cafe Orders API",
        description="Table QR ordering, kitchen and delivery screens, payments and cafe administration.",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    register_middlewares(app)
    configure_cors(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(public_router)
    app.include_router(orders_router)
    app.include_router(admin_router)

    return app


app = create_app()

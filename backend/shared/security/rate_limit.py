"""
Rate limiting using slowapi, keyed by client IP.

Usage in a router (the endpoint must accept `request: Request`):

    from shared.security.rate_limit import limiter, LOGIN_LIMIT

    @router.post("/login")
    @limiter.limit(LOGIN_LIMIT)
    def login(request: Request, body: LoginRequest): ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)

limiter = Limiter(key_func=get_remote_address)

# Login attempts per window, from settings
LOGIN_LIMIT = f"{settings.login_rate_limit}/{settings.login_rate_window} seconds"
# Unauthenticated table endpoints (order placement, public cancel)
PUBLIC_WRITE_LIMIT = "20/minute"


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return a JSON 429 with retry information."""
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please try again later.",
            "retry_after": exc.detail,
        },
        headers={"Retry-After": str(exc.detail)},
    )

"""
Authentication and authorization utilities.

Staff authenticate with short-lived JWT access tokens and a longer-lived
refresh token kept in an HttpOnly cookie. Authorization is a static lookup
of the caller's role in OPERATION_ROLES:

- no identity or a bad token -> UnauthorizedError (401)
- identity present, role not allowed -> InsufficientRoleError (403)
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Callable

import jwt
from fastapi import Depends, Header

from shared.config.constants import OPERATION_ROLES, ErrorMessages, Roles
from shared.config.settings import JWT_SECRET, JWT_ISSUER, JWT_AUDIENCE, settings
from shared.config.logging import get_logger
from shared.utils.exceptions import (
    CafeAccessError,
    InsufficientRoleError,
    UnauthorizedError,
)

logger = get_logger(__name__)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


# =============================================================================
# JWT Functions
# =============================================================================


def sign_jwt(
    payload: dict[str, Any],
    ttl_seconds: int | None = None,
    token_type: str = ACCESS_TOKEN,
) -> str:
    """
    Sign a JWT with the given claims plus iss, aud, iat, exp, type and jti.

    ttl_seconds defaults to the configured access or refresh lifetime.
    """
    if ttl_seconds is None:
        if token_type == REFRESH_TOKEN:
            ttl_seconds = settings.jwt_refresh_token_expire_days * 24 * 60 * 60
        else:
            ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": token_type,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm="HS256")


def sign_access_token(
    user_id: int,
    role: str,
    cafe_id: int | None,
    email: str,
    name: str,
) -> str:
    """Create an access token carrying the identity used by the role gate."""
    return sign_jwt(
        {
            "sub": str(user_id),
            "role": role,
            "cafe_id": cafe_id,
            "email": email,
            "name": name,
        },
        token_type=ACCESS_TOKEN,
    )


def sign_refresh_token(user_id: int) -> str:
    """Refresh tokens only carry the subject; role is re-read from the database."""
    return sign_jwt({"sub": str(user_id)}, token_type=REFRESH_TOKEN)


def verify_jwt(token: str, expected_type: str = ACCESS_TOKEN) -> dict[str, Any]:
    """
    Verify and decode a JWT.

    Raises:
        UnauthorizedError: expired, malformed, wrong type or missing claims.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError(ErrorMessages.TOKEN_EXPIRED)
    except jwt.InvalidTokenError as e:
        # Keep library details out of the response
        raise UnauthorizedError(ErrorMessages.INVALID_TOKEN, reason=str(e))

    if payload.get("type") != expected_type:
        raise UnauthorizedError(
            f"Invalid token type. Expected {expected_type} token.",
            token_type=payload.get("type"),
        )

    try:
        int(payload["sub"])
    except (KeyError, ValueError, TypeError):
        raise UnauthorizedError("Invalid token: malformed subject claim")

    if expected_type == ACCESS_TOKEN:
        if payload.get("role") not in Roles.ALL:
            raise UnauthorizedError("Invalid token: unknown role claim")
        cafe_id = payload.get("cafe_id")
        if cafe_id is not None and not isinstance(cafe_id, int):
            raise UnauthorizedError("Invalid token: malformed cafe_id claim")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract the token from an Authorization header.

    Raises:
        UnauthorizedError: header missing or not of the form "Bearer <token>".
    """
    if not authorization:
        raise UnauthorizedError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Invalid Authorization header format. Expected: Bearer <token>")
    return token.strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency resolving the caller identity from the bearer token.

    Returns:
        Dict with user_id, role, cafe_id, email, name.
    """
    payload = verify_jwt(get_bearer_token(authorization))
    return {
        "user_id": int(payload["sub"]),
        "role": payload["role"],
        "cafe_id": payload.get("cafe_id"),
        "email": payload.get("email"),
        "name": payload.get("name"),
    }


# =============================================================================
# Authorization gate
# =============================================================================


def require_roles(ctx: dict[str, Any] | None, allowed: list[str] | frozenset[str]) -> None:
    """
    Verify that the caller's role is in the allow-list.

    Raises:
        UnauthorizedError: no identity.
        InsufficientRoleError: identity present but role not allowed.
    """
    if not ctx or not ctx.get("role"):
        raise UnauthorizedError()
    if ctx["role"] not in allowed:
        raise InsufficientRoleError(
            sorted(allowed),
            user_id=ctx.get("user_id"),
            role=ctx["role"],
        )


def authorize(ctx: dict[str, Any] | None, operation: str) -> None:
    """Check the caller against the static allow-list for an operation."""
    allowed = OPERATION_ROLES.get(operation)
    if allowed is None:
        raise KeyError(f"Unknown operation: {operation}")
    require_roles(ctx, allowed)


def require_operation(operation: str) -> Callable[..., dict[str, Any]]:
    """
    Build a dependency that resolves the caller and authorizes an operation.

    Usage:
        @router.post("/{order_id}/payments")
        def record_payment(ctx = Depends(require_operation(Operation.ORDER_RECORD_PAYMENT))):
            ...
    """

    def dependency(ctx: dict[str, Any] = Depends(current_user_context)) -> dict[str, Any]:
        authorize(ctx, operation)
        return ctx

    dependency.__name__ = f"require_{operation.replace('.', '_')}"
    return dependency


def is_super_admin(ctx: dict[str, Any]) -> bool:
    return ctx.get("role") == Roles.SUPER_ADMIN


def require_cafe_access(ctx: dict[str, Any], cafe_id: int | None) -> None:
    """
    Staff only touch records of their own cafe; SUPER_ADMIN is unrestricted.

    Raises:
        CafeAccessError: the record belongs to another cafe.
    """
    if is_super_admin(ctx):
        return
    if cafe_id is None or ctx.get("cafe_id") != cafe_id:
        raise CafeAccessError(cafe_id, user_id=ctx.get("user_id"))


def scoped_cafe_id(ctx: dict[str, Any], requested: int | None) -> int | None:
    """
    Resolve the cafe filter for list endpoints.

    SUPER_ADMIN may pass any cafe (or none for all); staff are pinned to
    their own cafe and asking for another one is forbidden.
    """
    if is_super_admin(ctx):
        return requested
    own_cafe = ctx.get("cafe_id")
    if own_cafe is None or (requested is not None and requested != own_cafe):
        raise CafeAccessError(requested, user_id=ctx.get("user_id"))
    return own_cafe

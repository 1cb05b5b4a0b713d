"""
Security module: authentication, authorization gate, password hashing, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    sign_access_token,
    sign_refresh_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    require_roles,
    authorize,
    require_operation,
    require_cafe_access,
    scoped_cafe_id,
    is_super_admin,
)
from shared.security.password import hash_password, verify_password, needs_rehash
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "sign_jwt",
    "sign_access_token",
    "sign_refresh_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "require_roles",
    "authorize",
    "require_operation",
    "require_cafe_access",
    "scoped_cafe_id",
    "is_super_admin",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]

"""
Authentication router.
Handles login, token refresh, logout and the super admin bootstrap.
"""

from typing import Any

from fastapi import APIRouter, Cookie, Depends, Request, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from cafe_api.models import User
from cafe_api.services.domain import AuthService
from shared.config.logging import audit_auth_event, auth_logger as logger, mask_email
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.auth import (
    REFRESH_TOKEN,
    current_user_context,
    sign_access_token,
    sign_refresh_token,
    verify_jwt,
)
from shared.security.rate_limit import LOGIN_LIMIT, limiter
from shared.utils.exceptions import UnauthorizedError
from shared.utils.schemas import (
    LoginRequest,
    LoginResponse,
    SuperAdminRegister,
    SuperAdminStatus,
    UserInfo,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])

REFRESH_COOKIE = "refresh_token"


# =============================================================================
# HttpOnly cookie helpers
# =============================================================================


def set_refresh_token_cookie(response: Response, refresh_token: str) -> None:
    """Refresh token cookie: HttpOnly, only sent to /api/auth."""
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=refresh_token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        max_age=settings.jwt_refresh_token_expire_days * 24 * 60 * 60,
        path="/api/auth",
        domain=settings.cookie_domain or None,
    )


def clear_refresh_token_cookie(response: Response) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE,
        path="/api/auth",
        domain=settings.cookie_domain or None,
    )


class LogoutResponse(BaseModel):
    success: bool
    message: str


def _user_info(user: User) -> UserInfo:
    return UserInfo(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        cafe_id=user.cafe_id,
    )


def _login_response(user: User) -> LoginResponse:
    access_token = sign_access_token(
        user_id=user.id,
        role=user.role,
        cafe_id=user.cafe_id,
        email=user.email,
        name=user.name,
    )
    return LoginResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=_user_info(user),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: Session = Depends(get_db),
) -> LoginResponse:
    """
    Authenticate a staff member.

    The access token is returned in the body; the refresh token is set as an
    HttpOnly cookie.
    """
    client_ip = request.client.host if request.client else None
    user = AuthService(db).authenticate(body.email, body.password, ip_address=client_ip)

    set_refresh_token_cookie(response, sign_refresh_token(user.id))
    logger.info("LOGIN_SUCCESS", email=mask_email(user.email), user_id=user.id, role=user.role)
    return _login_response(user)


@router.post("/refresh", response_model=LoginResponse)
def refresh(
    response: Response,
    refresh_token: str | None = Cookie(default=None),
    db: Session = Depends(get_db),
) -> LoginResponse:
    """
    Exchange the refresh cookie for a new access token. The refresh token
    is rotated; role and cafe are re-read from the database.
    """
    if not refresh_token:
        raise UnauthorizedError("Missing refresh token")

    payload = verify_jwt(refresh_token, expected_type=REFRESH_TOKEN)
    user = AuthService(db).get_login_user(int(payload["sub"]))

    set_refresh_token_cookie(response, sign_refresh_token(user.id))
    audit_auth_event("TOKEN_REFRESH", user_id=user.id, email=user.email)
    return _login_response(user)


@router.post("/logout", response_model=LogoutResponse)
def logout(response: Response) -> LogoutResponse:
    clear_refresh_token_cookie(response)
    return LogoutResponse(success=True, message="Logged out")


@router.get("/me", response_model=UserInfo)
def me(
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> UserInfo:
    """Current identity, read fresh from the database."""
    return _user_info(AuthService(db).get_login_user(ctx["user_id"]))


@router.get("/super-admin/exists", response_model=SuperAdminStatus)
def super_admin_exists(db: Session = Depends(get_db)) -> SuperAdminStatus:
    count = AuthService(db).super_admin_count()
    return SuperAdminStatus(
        exists=count > 0,
        count=count,
        message="Super admin configured" if count else "No super admin yet",
    )


@router.post(
    "/super-admin",
    response_model=UserInfo,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(LOGIN_LIMIT)
def register_super_admin(
    request: Request,
    body: SuperAdminRegister,
    db: Session = Depends(get_db),
) -> UserInfo:
    """Create the first platform administrator; 409 once one exists."""
    user = AuthService(db).register_super_admin(body.name, body.email, body.password)
    return _user_info(user)

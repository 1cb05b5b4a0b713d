"""
Auth Service - credential checks and super admin bootstrap.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cafe_api.models import User
from cafe_api.services.domain.staff_service import email_in_use
from shared.config.constants import ErrorMessages, Roles, UserStatus
from shared.config.logging import audit_auth_event, auth_logger, mask_email
from shared.infrastructure.db import safe_commit
from shared.security.password import hash_password, needs_rehash, verify_password
from shared.utils.exceptions import ConflictError, UnauthorizedError


class AuthService:

    def __init__(self, db: Session):
        self._db = db

    def authenticate(self, email: str, password: str, ip_address: str | None = None) -> User:
        """
        Raises:
            UnauthorizedError: unknown email, wrong password or disabled account.
                The message never tells which.
        """
        user = self._db.scalar(
            select(User).where(func.lower(User.email) == email.lower(), User.is_active.is_(True))
        )
        if user is None or not verify_password(password, user.password_hash):
            audit_auth_event(
                "LOGIN",
                user_id=user.id if user else None,
                email=email,
                success=False,
                reason="invalid_credentials",
                ip_address=ip_address,
            )
            raise UnauthorizedError(ErrorMessages.INVALID_CREDENTIALS)

        if not user.can_login:
            audit_auth_event("LOGIN", user_id=user.id, email=email, success=False, reason="inactive")
            raise UnauthorizedError(ErrorMessages.INVALID_CREDENTIALS)

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            safe_commit(self._db)

        audit_auth_event("LOGIN", user_id=user.id, email=user.email, ip_address=ip_address, role=user.role)
        return user

    def get_login_user(self, user_id: int) -> User:
        """Account behind a refresh token; it must still be allowed to sign in."""
        user = self._db.get(User, user_id)
        if user is None or not user.can_login:
            raise UnauthorizedError(ErrorMessages.INVALID_TOKEN, user_id=user_id)
        return user

    # =========================================================================
    # Super admin bootstrap
    # =========================================================================

    def super_admin_count(self) -> int:
        return self._db.scalar(
            select(func.count())
            .select_from(User)
            .where(User.role == Roles.SUPER_ADMIN, User.is_active.is_(True))
        ) or 0

    def register_super_admin(self, name: str, email: str, password: str) -> User:
        """
        Create the first platform administrator.

        Raises:
            ConflictError: a super admin already exists or the email is taken.
        """
        if self.super_admin_count() > 0:
            raise ConflictError("Super admin already exists")
        if email_in_use(self._db, email):
            raise ConflictError(ErrorMessages.EMAIL_IN_USE, email=mask_email(email))

        user = User(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role=Roles.SUPER_ADMIN,
            cafe_id=None,
            status=UserStatus.ACTIVE,
        )
        self._db.add(user)
        safe_commit(self._db)
        self._db.refresh(user)

        audit_auth_event("SUPER_ADMIN_BOOTSTRAP", user_id=user.id, email=user.email)
        return user

    def bootstrap_super_admin(self, name: str, email: str, password: str) -> User | None:
        """Create a super admin from configuration unless one already exists."""
        if self.super_admin_count() > 0:
            auth_logger.debug("Super admin present, bootstrap skipped")
            return None
        return self.register_super_admin(name, email, password)

"""
Staff Service - user accounts bound to a cafe.

SUPER_ADMIN accounts are never listed or edited here; they are managed
through the bootstrap flow in AuthService.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cafe_api.models import User
from cafe_api.services.base_service import BaseCRUDService
from cafe_api.services.domain.cafe_service import get_active_cafe
from shared.config.constants import ErrorMessages, Limits, Roles
from shared.config.logging import admin_logger, mask_email
from shared.security.password import hash_password
from shared.utils.admin_schemas import UserOutput
from shared.utils.exceptions import ConflictError, ForbiddenError


def email_in_use(db: Session, email: str, exclude_user_id: int | None = None) -> bool:
    """Case-insensitive check across all accounts, deleted ones included."""
    query = select(User.id).where(func.lower(User.email) == email.lower())
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    return db.scalar(query) is not None


class StaffService(BaseCRUDService[User, UserOutput]):

    def __init__(self, db: Session):
        super().__init__(db, User, UserOutput, "User", order_by=[User.name, User.id])

    def list_staff(
        self,
        cafe_id: int | None = None,
        role: str | None = None,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[UserOutput]:
        query = select(User).where(User.is_active.is_(True), User.role != Roles.SUPER_ADMIN)
        if cafe_id is not None:
            query = query.where(User.cafe_id == cafe_id)
        if role:
            query = query.where(User.role == role)
        query = query.order_by(User.name, User.id).offset(offset).limit(min(limit, Limits.MAX_PAGE_SIZE))
        return [self.to_output(u) for u in self._db.execute(query).scalars().all()]

    def _validate_create(self, data: dict[str, Any]) -> None:
        data["email"] = data["email"].lower()
        if email_in_use(self._db, data["email"]):
            raise ConflictError(ErrorMessages.EMAIL_IN_USE, email=mask_email(data["email"]))
        get_active_cafe(self._db, data["cafe_id"])
        data["password_hash"] = hash_password(data.pop("password"))
        admin_logger.info("Creating staff user", email=mask_email(data["email"]), role=data["role"])

    def _validate_update(self, entity: User, data: dict[str, Any]) -> None:
        self._reject_super_admin(entity)
        if data.get("email"):
            data["email"] = data["email"].lower()
            if email_in_use(self._db, data["email"], exclude_user_id=entity.id):
                raise ConflictError(ErrorMessages.EMAIL_IN_USE, email=mask_email(data["email"]))
        if data.get("cafe_id") is not None:
            get_active_cafe(self._db, data["cafe_id"])
        if "password" in data:
            password = data.pop("password")
            if password:
                data["password_hash"] = hash_password(password)

    def _before_delete(self, entity: User) -> None:
        self._reject_super_admin(entity)

    @staticmethod
    def _reject_super_admin(entity: User) -> None:
        if entity.role == Roles.SUPER_ADMIN:
            raise ForbiddenError("modify a super admin account", user_id=entity.id)

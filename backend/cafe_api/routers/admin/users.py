"""
Staff account endpoints (SUPER_ADMIN).
Password hashes never leave the service layer.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from cafe_api.routers._common import get_user_email, get_user_id
from cafe_api.services.domain import StaffService
from shared.config.constants import Limits, Operation
from shared.infrastructure.db import get_db
from shared.security.auth import require_operation
from shared.utils.admin_schemas import StaffRole, UserCreate, UserOutput, UserUpdate


router = APIRouter(prefix="/api/admin/users", tags=["admin-users"])

require_user_manage = require_operation(Operation.USER_MANAGE)


@router.get("", response_model=list[UserOutput])
def list_users(
    cafe_id: int | None = None,
    role: StaffRole | None = None,
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_user_manage),
) -> list[UserOutput]:
    """Staff accounts; super admins are never listed."""
    return StaffService(db).list_staff(cafe_id=cafe_id, role=role, limit=limit, offset=offset)


@router.post("", response_model=UserOutput, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_user_manage),
) -> UserOutput:
    """409 "Email in use" when the address already has an account."""
    return StaffService(db).create(body.model_dump(), get_user_id(ctx), get_user_email(ctx))


@router.patch("/{user_id}", response_model=UserOutput)
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_user_manage),
) -> UserOutput:
    return StaffService(db).update(
        user_id,
        body.model_dump(exclude_unset=True),
        get_user_id(ctx),
        get_user_email(ctx),
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_user_manage),
) -> None:
    StaffService(db).delete(user_id, get_user_id(ctx), get_user_email(ctx))

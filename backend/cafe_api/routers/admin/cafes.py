"""
Cafe management endpoints (SUPER_ADMIN).
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from cafe_api.routers._common import get_user_email, get_user_id
from cafe_api.services.domain import CafeService
from shared.config.constants import Limits, Operation
from shared.infrastructure.db import get_db
from shared.security.auth import require_operation
from shared.utils.admin_schemas import CafeCreate, CafeOutput, CafeUpdate


router = APIRouter(prefix="/api/admin/cafes", tags=["admin-cafes"])

require_cafe_manage = require_operation(Operation.CAFE_MANAGE)


@router.get("", response_model=list[CafeOutput])
def list_cafes(
    include_deleted: bool = False,
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_cafe_manage),
) -> list[CafeOutput]:
    return CafeService(db).list_all(include_deleted=include_deleted, limit=limit, offset=offset)


@router.get("/{cafe_id}", response_model=CafeOutput)
def get_cafe(
    cafe_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_cafe_manage),
) -> CafeOutput:
    return CafeService(db).get(cafe_id)


@router.post("", response_model=CafeOutput, status_code=status.HTTP_201_CREATED)
def create_cafe(
    body: CafeCreate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_cafe_manage),
) -> CafeOutput:
    return CafeService(db).create(body.model_dump(), get_user_id(ctx), get_user_email(ctx))


@router.patch("/{cafe_id}", response_model=CafeOutput)
def update_cafe(
    cafe_id: int,
    body: CafeUpdate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_cafe_manage),
) -> CafeOutput:
    return CafeService(db).update(
        cafe_id,
        body.model_dump(exclude_unset=True),
        get_user_id(ctx),
        get_user_email(ctx),
    )


@router.delete("/{cafe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cafe(
    cafe_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_cafe_manage),
) -> None:
    """Soft delete: the cafe is marked DELETED and hidden from listings."""
    CafeService(db).delete(cafe_id, get_user_id(ctx), get_user_email(ctx))

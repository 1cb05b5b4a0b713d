"""
Subscription plan endpoints (SUPER_ADMIN).
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cafe_api.routers._common import get_user_email, get_user_id
from cafe_api.services.domain import PlanService
from shared.config.constants import Operation
from shared.infrastructure.db import get_db
from shared.security.auth import require_operation
from shared.utils.admin_schemas import PlanCreate, PlanOutput, PlanUpdate


router = APIRouter(prefix="/api/admin/plans", tags=["admin-plans"])

require_plan_manage = require_operation(Operation.PLAN_MANAGE)


@router.get("", response_model=list[PlanOutput])
def list_plans(
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_plan_manage),
) -> list[PlanOutput]:
    return PlanService(db).list_all()


@router.post("", response_model=PlanOutput, status_code=status.HTTP_201_CREATED)
def create_plan(
    body: PlanCreate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_plan_manage),
) -> PlanOutput:
    return PlanService(db).create(body.model_dump(), get_user_id(ctx), get_user_email(ctx))


@router.patch("/{plan_id}", response_model=PlanOutput)
def update_plan(
    plan_id: int,
    body: PlanUpdate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_plan_manage),
) -> PlanOutput:
    return PlanService(db).update(
        plan_id,
        body.model_dump(exclude_unset=True),
        get_user_id(ctx),
        get_user_email(ctx),
    )


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_plan_manage),
) -> None:
    PlanService(db).delete(plan_id, get_user_id(ctx), get_user_email(ctx))

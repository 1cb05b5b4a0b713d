"""
Menu item endpoints (ADMIN, SUPER_ADMIN).
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cafe_api.routers._common import get_user_email, get_user_id
from cafe_api.routers.admin._base import resolve_target_cafe
from cafe_api.services.domain import MenuService
from shared.config.constants import Operation
from shared.infrastructure.db import get_db
from shared.security.auth import require_cafe_access, require_operation, scoped_cafe_id
from shared.utils.admin_schemas import MenuItemCreate, MenuItemOutput, MenuItemUpdate


router = APIRouter(prefix="/api/admin/menu", tags=["admin-menu"])

require_menu_manage = require_operation(Operation.MENU_MANAGE)


@router.get("", response_model=list[MenuItemOutput])
def list_menu(
    cafe_id: int | None = None,
    category: str | None = None,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_menu_manage),
) -> list[MenuItemOutput]:
    """All items including unavailable ones."""
    return MenuService(db).list_for_cafe(scoped_cafe_id(ctx, cafe_id), category=category)


@router.post("", response_model=MenuItemOutput, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    body: MenuItemCreate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_menu_manage),
) -> MenuItemOutput:
    data = body.model_dump()
    data["cafe_id"] = resolve_target_cafe(ctx, body.cafe_id)
    return MenuService(db).create(data, get_user_id(ctx), get_user_email(ctx))


@router.patch("/{item_id}", response_model=MenuItemOutput)
def update_menu_item(
    item_id: int,
    body: MenuItemUpdate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_menu_manage),
) -> MenuItemOutput:
    """Price changes never affect orders already placed."""
    service = MenuService(db)
    require_cafe_access(ctx, service.get_entity(item_id).cafe_id)
    return service.update(
        item_id,
        body.model_dump(exclude_unset=True),
        get_user_id(ctx),
        get_user_email(ctx),
    )


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_menu_manage),
) -> None:
    service = MenuService(db)
    require_cafe_access(ctx, service.get_entity(item_id).cafe_id)
    service.delete(item_id, get_user_id(ctx), get_user_email(ctx))

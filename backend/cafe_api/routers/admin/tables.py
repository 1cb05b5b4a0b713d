"""
Table management endpoints (ADMIN, SUPER_ADMIN).
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from cafe_api.routers._common import get_user_email, get_user_id
from cafe_api.routers.admin._base import resolve_target_cafe
from cafe_api.services.domain import TableService
from shared.config.constants import Operation
from shared.infrastructure.db import get_db
from shared.security.auth import require_cafe_access, require_operation, scoped_cafe_id
from shared.utils.admin_schemas import TableCreate, TableOutput, TableUpdate


router = APIRouter(prefix="/api/admin/tables", tags=["admin-tables"])

require_table_manage = require_operation(Operation.TABLE_MANAGE)


@router.get("", response_model=list[TableOutput])
def list_tables(
    cafe_id: int | None = None,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_table_manage),
) -> list[TableOutput]:
    return TableService(db).list_all(scoped_cafe_id(ctx, cafe_id), limit=200)


@router.post("", response_model=TableOutput, status_code=status.HTTP_201_CREATED)
def create_table(
    body: TableCreate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_table_manage),
) -> TableOutput:
    """The slug defaults to "table-{number}" when not supplied."""
    data = body.model_dump()
    data["cafe_id"] = resolve_target_cafe(ctx, body.cafe_id)
    return TableService(db).create(data, get_user_id(ctx), get_user_email(ctx))


@router.patch("/{table_id}", response_model=TableOutput)
def update_table(
    table_id: int,
    body: TableUpdate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_table_manage),
) -> TableOutput:
    service = TableService(db)
    require_cafe_access(ctx, service.get_entity(table_id).cafe_id)
    return service.update(
        table_id,
        body.model_dump(exclude_unset=True),
        get_user_id(ctx),
        get_user_email(ctx),
    )


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_table(
    table_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_table_manage),
) -> None:
    service = TableService(db)
    require_cafe_access(ctx, service.get_entity(table_id).cafe_id)
    service.delete(table_id, get_user_id(ctx), get_user_email(ctx))

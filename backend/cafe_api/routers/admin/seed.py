"""
Seeding endpoint (SUPER_ADMIN).
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cafe_api.routers._common import get_user_id
from cafe_api.seed import seed_basic
from shared.config.constants import Operation
from shared.config.logging import admin_logger as logger
from shared.infrastructure.db import get_db
from shared.security.auth import require_operation
from shared.utils.admin_schemas import SeedResult


router = APIRouter(prefix="/api/admin", tags=["admin-seed"])


@router.post("/seed", response_model=SeedResult)
def seed_cafe(
    cafe_id: int = Query(...),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_operation(Operation.SEED)),
) -> SeedResult:
    """Create eight tables and a starter menu; existing rows are kept."""
    result = seed_basic(db, cafe_id, user_id=get_user_id(ctx))
    logger.info("Seed requested", cafe_id=cafe_id, user_id=get_user_id(ctx))
    return result

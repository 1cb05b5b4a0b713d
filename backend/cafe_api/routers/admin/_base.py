"""
Shared helpers for admin routers.
"""

from typing import Any

from shared.security.auth import is_super_admin, scoped_cafe_id
from shared.utils.exceptions import ValidationError


def resolve_target_cafe(ctx: dict[str, Any], requested: int | None) -> int:
    """
    Cafe a new table or menu item belongs to.

    Staff default to their own cafe; SUPER_ADMIN must name one.
    """
    if is_super_admin(ctx):
        if requested is None:
            raise ValidationError("cafe_id is required", field="cafe_id")
        return requested
    return scoped_cafe_id(ctx, requested)

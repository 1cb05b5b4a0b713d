"""
Admin API router - combines the admin sub-routers.

- cafes: cafe tenants (SUPER_ADMIN)
- plans: subscription plans (SUPER_ADMIN)
- users: staff accounts (SUPER_ADMIN)
- tables: tables and QR slugs (ADMIN, SUPER_ADMIN)
- menu: menu items (ADMIN, SUPER_ADMIN)
- seed: starter data for a cafe (SUPER_ADMIN)

All routes are prefixed with /api/admin
"""

from fastapi import APIRouter

from .cafes import router as cafes_router
from .plans import router as plans_router
from .users import router as users_router
from .tables import router as tables_router
from .menu import router as menu_router
from .seed import router as seed_router


router = APIRouter()

router.include_router(cafes_router)
router.include_router(plans_router)
router.include_router(users_router)
router.include_router(tables_router)
router.include_router(menu_router)
router.include_router(seed_router)


__all__ = ["router"]

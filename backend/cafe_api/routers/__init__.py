"""
API routers.

- auth: login, refresh, logout, super admin bootstrap
- public: table holder endpoints and health checks
- orders: staff order views, status changes and payments
- admin: cafes, plans, users, tables, menu, seeding
"""

from .auth import router as auth_router
from .public import router as public_router, health_router
from .orders import router as orders_router
from .admin import router as admin_router

__all__ = ["auth_router", "public_router", "health_router", "orders_router", "admin_router"]

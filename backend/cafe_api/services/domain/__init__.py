"""
Domain Services - application layer.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from cafe_api.services.domain import OrderService

    service = OrderService(db)
    order, previous = service.update_status(order_id, "ACCEPTED", ctx)
"""

from .order_service import OrderService
from .payment_service import PaymentService
from .cafe_service import CafeService, PlanService, get_active_cafe
from .staff_service import StaffService
from .table_service import TableService
from .menu_service import MenuService
from .auth_service import AuthService

__all__ = [
    "OrderService",
    "PaymentService",
    "CafeService",
    "PlanService",
    "get_active_cafe",
    "StaffService",
    "TableService",
    "MenuService",
    "AuthService",
]

"""
SQLAlchemy ORM Models Package.

- base: Base class and AuditMixin
- cafe: SubscriptionPlan, Cafe
- user: User
- table: Table
- menu: MenuItem
- order: Order, OrderLine, OrderPayment
"""

from .base import Base, AuditMixin
from .cafe import SubscriptionPlan, Cafe
from .user import User
from .table import Table
from .menu import MenuItem
from .order import Order, OrderLine, OrderPayment

__all__ = [
    "Base",
    "AuditMixin",
    "SubscriptionPlan",
    "Cafe",
    "User",
    "Table",
    "MenuItem",
    "Order",
    "OrderLine",
    "OrderPayment",
]

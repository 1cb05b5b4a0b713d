"""
Configuration module: settings, logging, constants.
"""

from shared.config.settings import settings, get_settings, DATABASE_URL
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    Roles,
    OrderStatus,
    PaymentMethod,
    TableStatus,
    Operation,
    OPERATION_ROLES,
    ORDER_TRANSITIONS,
    PRIVILEGED_ROLES,
    Limits,
)

__all__ = [
    # settings
    "settings",
    "get_settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Roles",
    "OrderStatus",
    "PaymentMethod",
    "TableStatus",
    "Operation",
    "OPERATION_ROLES",
    "ORDER_TRANSITIONS",
    "PRIVILEGED_ROLES",
    "Limits",
]

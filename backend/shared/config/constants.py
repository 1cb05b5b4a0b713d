"""
Centralized constants for the backend application.

Usage:
    from shared.config.constants import Roles, OrderStatus, PRIVILEGED_ROLES

    if role in PRIVILEGED_ROLES:
        ...

    if order.status == OrderStatus.NEW:
        ...
"""

from decimal import Decimal
from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    SUPER_ADMIN: Final[str] = "SUPER_ADMIN"
    ADMIN: Final[str] = "ADMIN"
    MANAGER: Final[str] = "MANAGER"
    KITCHEN: Final[str] = "KITCHEN"
    WAITER: Final[str] = "WAITER"
    DELIVERY: Final[str] = "DELIVERY"

    ALL: Final[list[str]] = [SUPER_ADMIN, ADMIN, MANAGER, KITCHEN, WAITER, DELIVERY]
    # Roles that belong to a single cafe
    CAFE_STAFF: Final[list[str]] = [ADMIN, MANAGER, KITCHEN, WAITER, DELIVERY]


# Administrative roles allowed to force any order status
PRIVILEGED_ROLES: Final[frozenset[str]] = frozenset({Roles.SUPER_ADMIN, Roles.ADMIN})
ALL_STAFF_ROLES: Final[frozenset[str]] = frozenset(Roles.ALL)
SUPER_ADMIN_ONLY: Final[frozenset[str]] = frozenset({Roles.SUPER_ADMIN})


# =============================================================================
# Entity Status Constants
# =============================================================================


class OrderStatus:
    """Order lifecycle status constants."""

    NEW: Final[str] = "NEW"
    ACCEPTED: Final[str] = "ACCEPTED"
    IN_PROGRESS: Final[str] = "IN_PROGRESS"
    COMPLETED: Final[str] = "COMPLETED"
    DELIVERED: Final[str] = "DELIVERED"
    PAID: Final[str] = "PAID"
    CANCELLED: Final[str] = "CANCELLED"

    ALL: Final[list[str]] = [NEW, ACCEPTED, IN_PROGRESS, COMPLETED, DELIVERED, PAID, CANCELLED]
    TERMINAL: Final[list[str]] = [PAID, CANCELLED]
    KITCHEN_VISIBLE: Final[list[str]] = [NEW, ACCEPTED, IN_PROGRESS]
    DELIVERY_VISIBLE: Final[list[str]] = [COMPLETED]
    # Window in which the table holder may cancel without staff
    PUBLIC_CANCELLABLE: Final[list[str]] = [NEW, ACCEPTED]


class PaymentMethod:
    """Payment method constants."""

    CASH: Final[str] = "CASH"
    CARD: Final[str] = "CARD"
    UPI: Final[str] = "UPI"

    ALL: Final[list[str]] = [CASH, CARD, UPI]


class TableStatus:
    """Table status constants."""

    AVAILABLE: Final[str] = "AVAILABLE"
    OCCUPIED: Final[str] = "OCCUPIED"
    RESERVED: Final[str] = "RESERVED"

    ALL: Final[list[str]] = [AVAILABLE, OCCUPIED, RESERVED]


class CafeStatus:
    """Cafe lifecycle status constants."""

    ACTIVE: Final[str] = "ACTIVE"
    SUSPENDED: Final[str] = "SUSPENDED"
    DELETED: Final[str] = "DELETED"

    ALL: Final[list[str]] = [ACTIVE, SUSPENDED, DELETED]


class CafePaymentStatus:
    """Subscription billing status of a cafe."""

    ACTIVE: Final[str] = "ACTIVE"
    EXPIRED: Final[str] = "EXPIRED"
    OVERDUE: Final[str] = "OVERDUE"

    ALL: Final[list[str]] = [ACTIVE, EXPIRED, OVERDUE]


class PlanType:
    """Subscription plan billing period."""

    MONTHLY: Final[str] = "MONTHLY"
    YEARLY: Final[str] = "YEARLY"
    TRIAL: Final[str] = "TRIAL"

    ALL: Final[list[str]] = [MONTHLY, YEARLY, TRIAL]


class UserStatus:
    """Staff account status."""

    ACTIVE: Final[str] = "ACTIVE"
    INACTIVE: Final[str] = "INACTIVE"

    ALL: Final[list[str]] = [ACTIVE, INACTIVE]


# =============================================================================
# Status Transitions
# =============================================================================

# Valid order status transitions (from -> [allowed to states])
ORDER_TRANSITIONS: Final[dict[str, list[str]]] = {
    OrderStatus.NEW: [
        OrderStatus.ACCEPTED,
        OrderStatus.IN_PROGRESS,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
    ],
    OrderStatus.ACCEPTED: [OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED, OrderStatus.CANCELLED],
    OrderStatus.IN_PROGRESS: [OrderStatus.COMPLETED, OrderStatus.CANCELLED],
    OrderStatus.COMPLETED: [OrderStatus.DELIVERED, OrderStatus.CANCELLED],
    OrderStatus.DELIVERED: [OrderStatus.PAID],
    OrderStatus.PAID: [],  # Terminal state
    OrderStatus.CANCELLED: [],  # Terminal state
}


# =============================================================================
# Operation Authorization
# =============================================================================


class Operation:
    """Operation names checked by the authorization gate."""

    ORDER_LIST: Final[str] = "order.list"
    ORDER_VIEW: Final[str] = "order.view"
    ORDER_UPDATE_STATUS: Final[str] = "order.update_status"
    ORDER_RECORD_PAYMENT: Final[str] = "order.record_payment"
    TABLE_MANAGE: Final[str] = "table.manage"
    MENU_MANAGE: Final[str] = "menu.manage"
    CAFE_MANAGE: Final[str] = "cafe.manage"
    PLAN_MANAGE: Final[str] = "plan.manage"
    USER_MANAGE: Final[str] = "user.manage"
    SEED: Final[str] = "seed"


OPERATION_ROLES: Final[dict[str, frozenset[str]]] = {
    Operation.ORDER_LIST: ALL_STAFF_ROLES,
    Operation.ORDER_VIEW: ALL_STAFF_ROLES,
    Operation.ORDER_UPDATE_STATUS: ALL_STAFF_ROLES,
    Operation.ORDER_RECORD_PAYMENT: PRIVILEGED_ROLES,
    Operation.TABLE_MANAGE: PRIVILEGED_ROLES,
    Operation.MENU_MANAGE: PRIVILEGED_ROLES,
    Operation.CAFE_MANAGE: SUPER_ADMIN_ONLY,
    Operation.PLAN_MANAGE: SUPER_ADMIN_ONLY,
    Operation.USER_MANAGE: SUPER_ADMIN_ONLY,
    Operation.SEED: SUPER_ADMIN_ONLY,
}


# =============================================================================
# Money
# =============================================================================

# Fixed tax applied to the order line sum
TAX_RATE: Final[Decimal] = Decimal("0.05")


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    # Quantity limits
    MIN_QUANTITY: Final[int] = 1
    MAX_QUANTITY: Final[int] = 99
    MAX_ORDER_LINES: Final[int] = 50

    # Price limits (in cents)
    MIN_PRICE_CENTS: Final[int] = 0
    MAX_PRICE_CENTS: Final[int] = 100_000_00
    MAX_PAYMENT_CENTS: Final[int] = 10_000_000_00

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_NOTES_LENGTH: Final[int] = 500
    MAX_REFERENCE_LENGTH: Final[int] = 200
    MAX_URL_LENGTH: Final[int] = 2048
    MAX_SLUG_LENGTH: Final[int] = 100

    # Passwords
    MIN_PASSWORD_LENGTH: Final[int] = 8

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200


# =============================================================================
# Error Messages
# =============================================================================


class ErrorMessages:
    """Standardized error messages."""

    NOT_AUTHENTICATED: Final[str] = "Unauthorized"
    INVALID_TOKEN: Final[str] = "Invalid token"
    TOKEN_EXPIRED: Final[str] = "Token expired"
    INVALID_CREDENTIALS: Final[str] = "Invalid credentials"
    INSUFFICIENT_PERMISSIONS: Final[str] = "Forbidden"

    INVALID_TRANSITION: Final[str] = "Invalid transition"
    CANNOT_CANCEL: Final[str] = "Cannot cancel at this stage"
    INVALID_TABLE: Final[str] = "Invalid table"
    MISSING_TABLE_SLUG: Final[str] = "Missing table_slug"
    EMAIL_IN_USE: Final[str] = "Email in use"
    NO_CAFE_ACCESS: Final[str] = "You do not have access to this cafe"


def validate_order_status(status: str) -> bool:
    """Validate that an order status is known."""
    return status in OrderStatus.ALL


def validate_order_transition(current_status: str, new_status: str) -> bool:
    """Return True if the allowed-transition table permits the move."""
    return new_status in ORDER_TRANSITIONS.get(current_status, [])

"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from shared.utils.exceptions import NotFoundError, ForbiddenError, ValidationError

    raise NotFoundError("Order", order_id)
    raise ForbiddenError("record payments")
    raise ValidationError("Amount must be positive")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions inherit from this class so every error leaves a
    structured log line with its context.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Order", 123)
        raise NotFoundError("Table", slug=slug)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: int | None = None, **log_context: Any):
        super().__init__("Order", order_id, **log_context)


class TableNotFoundError(NotFoundError):
    """Table not found by id or slug."""

    def __init__(self, table_ref: int | str | None = None, **log_context: Any):
        super().__init__("Table", table_ref, **log_context)


# =============================================================================
# 401 Unauthorized Errors
# =============================================================================


class UnauthorizedError(AppException):
    """
    No valid identity was presented (401).

    Usage:
        raise UnauthorizedError()
        raise UnauthorizedError("Token expired")
    """

    def __init__(self, detail: str = ErrorMessages.NOT_AUTHENTICATED, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            log_level="warning",
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Identity present but not allowed (403).

    Usage:
        raise ForbiddenError("record payments")
        raise ForbiddenError("access this cafe", user_id=user_id)
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not allowed to {action}"
        else:
            detail = ErrorMessages.INSUFFICIENT_PERMISSIONS

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class CafeAccessError(ForbiddenError):
    """User doesn't belong to the cafe that owns the resource."""

    def __init__(self, cafe_id: int | None = None, **log_context: Any):
        super().__init__("access this cafe", cafe_id=cafe_id, **log_context)


class InsufficientRoleError(ForbiddenError):
    """User doesn't have one of the required roles."""

    def __init__(self, required_roles: list[str], **log_context: Any):
        roles_str = ", ".join(required_roles)
        super().__init__(
            f"perform this action (requires role: {roles_str})",
            required_roles=required_roles,
            **log_context,
        )


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Amount must be positive")
        raise ValidationError("Invalid quantity", field="quantity", value=-1)
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidStateError(ValidationError):
    """Entity is in an invalid state for the operation."""

    def __init__(
        self,
        entity: str,
        current_state: str,
        expected_states: list[str] | None = None,
        detail: str | None = None,
        **log_context: Any,
    ):
        if detail is None:
            if expected_states:
                states_str = ", ".join(expected_states)
                detail = f"{entity} is in state '{current_state}', expected one of: {states_str}"
            else:
                detail = f"{entity} cannot be in state '{current_state}' for this operation"

        super().__init__(
            detail,
            entity=entity,
            current_state=current_state,
            expected_states=expected_states,
            **log_context,
        )


class CannotCancelError(InvalidStateError):
    """Public cancellation attempted outside the NEW/ACCEPTED window."""

    def __init__(self, current_state: str, expected_states: list[str], **log_context: Any):
        super().__init__(
            "Order",
            current_state,
            expected_states,
            detail=ErrorMessages.CANNOT_CANCEL,
            **log_context,
        )


class InvalidTransitionError(ValidationError):
    """Status change not permitted by the transition table."""

    def __init__(self, entity: str, from_status: str, to_status: str, **log_context: Any):
        detail = f"{ErrorMessages.INVALID_TRANSITION} from '{from_status}' to '{to_status}' for {entity}"
        super().__init__(
            detail,
            entity=entity,
            from_status=from_status,
            to_status=to_status,
            **log_context,
        )


class PaymentAmountError(ValidationError):
    """Payment amount validation error."""

    def __init__(self, amount: int, reason: str, **log_context: Any):
        detail = f"Invalid payment amount ({amount}): {reason}"
        super().__init__(detail, amount=amount, **log_context)


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Email in use")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Failed to persist order", order_id=123)
    """

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, operation: str, **log_context: Any):
        detail = f"Database error during {operation}. Please try again."
        super().__init__(detail, operation=operation, **log_context)

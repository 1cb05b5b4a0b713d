"""
Order lifecycle rules.

Pure functions over Order objects: they validate and mutate the in-memory
entity and never touch the session. Persistence and notifications live in
OrderService / PaymentService.

Transition rules:
- A move is allowed when the requested status is in ORDER_TRANSITIONS for
  the current status.
- SUPER_ADMIN and ADMIN may force any move, terminal states included.
- ACCEPTED / COMPLETED / DELIVERED record the acting user.

Payment rules:
- Payments are appended, paid_cents only grows.
- Once paid_cents >= total_cents the order becomes PAID whatever its
  current status; the transition table is not consulted.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from shared.config.constants import (
    ORDER_TRANSITIONS,
    PRIVILEGED_ROLES,
    OrderStatus,
    PaymentMethod,
    TAX_RATE,
    validate_order_status,
    validate_order_transition,
)
from shared.utils.exceptions import (
    CannotCancelError,
    ForbiddenError,
    InvalidTransitionError,
    PaymentAmountError,
    ValidationError,
)
from cafe_api.models import Order, OrderLine, OrderPayment
from cafe_api.models.base import utcnow

# Status -> attribute recording who performed the step
_ACTOR_FIELDS: dict[str, str] = {
    OrderStatus.ACCEPTED: "accepted_by_id",
    OrderStatus.COMPLETED: "completed_by_id",
    OrderStatus.DELIVERED: "delivered_by_id",
}


@dataclass(frozen=True)
class OrderTotals:
    subtotal_cents: int
    tax_cents: int
    total_cents: int


def compute_tax_cents(subtotal_cents: int) -> int:
    """5% of the subtotal, rounded half-up to the cent."""
    tax = (Decimal(subtotal_cents) * TAX_RATE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(tax)


def compute_totals(lines: Iterable[OrderLine]) -> OrderTotals:
    subtotal = sum(line.price_snapshot_cents * line.quantity for line in lines)
    tax = compute_tax_cents(subtotal)
    return OrderTotals(subtotal_cents=subtotal, tax_cents=tax, total_cents=subtotal + tax)


def apply_totals(order: Order) -> OrderTotals:
    """Recalculate the order amounts from its lines."""
    totals = compute_totals(order.lines)
    order.subtotal_cents = totals.subtotal_cents
    order.tax_cents = totals.tax_cents
    order.total_cents = totals.total_cents
    return totals


def allowed_next_statuses(current_status: str) -> list[str]:
    return list(ORDER_TRANSITIONS.get(current_status, []))


def apply_transition(
    order: Order,
    requested_status: str,
    actor_role: str,
    actor_id: int | None,
) -> str:
    """
    Move the order to requested_status.

    Returns:
        The status the order had before the move.

    Raises:
        ValidationError: requested_status is not a known status.
        InvalidTransitionError: the move is not in the table and the actor
            is not privileged. The order is left untouched.
    """
    if not validate_order_status(requested_status):
        raise ValidationError(f"Unknown order status '{requested_status}'", order_id=order.id)

    previous = order.status
    if not validate_order_transition(previous, requested_status):
        if actor_role not in PRIVILEGED_ROLES:
            raise InvalidTransitionError(
                "Order",
                previous,
                requested_status,
                order_id=order.id,
                actor_role=actor_role,
            )

    order.status = requested_status
    actor_field = _ACTOR_FIELDS.get(requested_status)
    if actor_field is not None:
        setattr(order, actor_field, actor_id)
    return previous


def apply_public_cancel(order: Order, table_slug: str) -> str:
    """
    Cancel on behalf of the table holder.

    Returns:
        The status the order had before cancellation.

    Raises:
        ForbiddenError: the slug does not belong to the order's table.
        CannotCancelError: the order is past NEW/ACCEPTED.
    """
    if order.table is None or order.table.slug != table_slug:
        raise ForbiddenError("cancel an order placed from another table", order_id=order.id)

    if order.status not in OrderStatus.PUBLIC_CANCELLABLE:
        raise CannotCancelError(order.status, OrderStatus.PUBLIC_CANCELLABLE, order_id=order.id)

    previous = order.status
    order.status = OrderStatus.CANCELLED
    return previous


def apply_payment(
    order: Order,
    method: str,
    amount_cents: int,
    reference: str | None = None,
    recorded_by_id: int | None = None,
) -> OrderPayment:
    """
    Append a payment and promote the order to PAID once it is covered.

    Overpayment is accepted; paid_cents may exceed total_cents.

    Raises:
        ValidationError: method outside CASH/CARD/UPI.
        PaymentAmountError: amount is not a positive integer.
    """
    if method not in PaymentMethod.ALL:
        raise ValidationError(
            f"Invalid payment method '{method}'. Expected one of: {', '.join(PaymentMethod.ALL)}",
            order_id=order.id,
        )
    if isinstance(amount_cents, bool) or not isinstance(amount_cents, int) or amount_cents <= 0:
        raise PaymentAmountError(amount_cents, "must be a positive number", order_id=order.id)

    payment = OrderPayment(
        method=method,
        amount_cents=amount_cents,
        reference=reference,
        recorded_at=utcnow(),
        recorded_by_id=recorded_by_id,
    )
    order.payments.append(payment)
    order.paid_cents = (order.paid_cents or 0) + amount_cents

    if order.paid_cents >= order.total_cents:
        order.status = OrderStatus.PAID
    return payment

"""
Payment Service - records payments against orders.
"""

from typing import Any

from sqlalchemy.orm import Session

from cafe_api.models import Order
from cafe_api.services.domain.order_lifecycle import apply_payment
from cafe_api.services.domain.order_service import OrderService
from shared.config.logging import payments_logger
from shared.infrastructure.db import safe_commit
from shared.utils.validators import sanitize_text


class PaymentService:
    """Append-only payment recording for ADMIN and SUPER_ADMIN."""

    def __init__(self, db: Session):
        self._db = db
        self._orders = OrderService(db)

    def record_payment(
        self,
        order_id: int,
        method: str,
        amount_cents: int,
        ctx: dict[str, Any],
        reference: str | None = None,
    ) -> tuple[Order, str]:
        """
        Append a payment; the order turns PAID once fully covered.

        Returns:
            (updated order, status before the payment)
        """
        order = self._orders.get_order_for_staff(order_id, ctx)
        previous = order.status

        payment = apply_payment(
            order,
            method,
            amount_cents,
            reference=sanitize_text(reference),
            recorded_by_id=ctx.get("user_id"),
        )
        order.set_updated_by(ctx.get("user_id"), ctx.get("email"))
        safe_commit(self._db)

        payments_logger.info(
            "Payment recorded",
            order_id=order_id,
            payment_id=payment.id,
            method=method,
            amount_cents=amount_cents,
            paid_cents=order.paid_cents,
            total_cents=order.total_cents,
            status=order.status,
            recorded_by=ctx.get("user_id"),
        )
        self._db.expire_all()
        return self._orders.get_order(order_id), previous

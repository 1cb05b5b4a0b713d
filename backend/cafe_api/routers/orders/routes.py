"""
Staff order router.
Order screens for kitchen, waiters, delivery and administration.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from cafe_api.routers._common import event_payload, order_output
from cafe_api.services.domain import OrderService, PaymentService
from shared.config.constants import Limits, Operation
from shared.config.logging import orders_logger as logger
from shared.infrastructure.db import get_db
from shared.infrastructure.events import (
    EventPublisher,
    get_event_publisher,
    publish_order_transition,
    publish_payment_recorded,
)
from shared.security.auth import require_operation, scoped_cafe_id
from shared.utils.schemas import OrderOutput, OrderStatus, PaymentCreate, StatusUpdate


router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=list[OrderOutput])
def list_orders(
    cafe_id: int | None = Query(default=None),
    order_status: OrderStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_operation(Operation.ORDER_LIST)),
) -> list[OrderOutput]:
    """
    Orders of the caller's cafe, newest first.

    KITCHEN only receives NEW/ACCEPTED/IN_PROGRESS orders and DELIVERY only
    COMPLETED ones. SUPER_ADMIN may pick any cafe or omit cafe_id.
    """
    target_cafe = scoped_cafe_id(ctx, cafe_id)
    orders = OrderService(db).list_orders(ctx, target_cafe, order_status, limit=limit, offset=offset)
    return [order_output(o) for o in orders]


@router.get("/{order_id}", response_model=OrderOutput)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_operation(Operation.ORDER_VIEW)),
) -> OrderOutput:
    return order_output(OrderService(db).get_order_for_staff(order_id, ctx))


@router.patch("/{order_id}/status", response_model=OrderOutput)
async def update_order_status(
    order_id: int,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_operation(Operation.ORDER_UPDATE_STATUS)),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> OrderOutput:
    """
    Move an order along its lifecycle.

    Moves outside the transition table are rejected with 400 unless the
    caller is ADMIN or SUPER_ADMIN.
    """
    order, previous = OrderService(db).update_status(order_id, body.status, ctx)
    output = order_output(order)

    # Committed already; a failed notification never undoes the change
    try:
        await publish_order_transition(
            publisher,
            order.cafe_id,
            order.table_slug,
            previous,
            event_payload(output),
        )
    except Exception as e:
        logger.error("Failed to publish order update", order_id=order_id, error=str(e))

    return output


@router.post(
    "/{order_id}/payments",
    response_model=OrderOutput,
    status_code=status.HTTP_201_CREATED,
)
async def record_payment(
    order_id: int,
    body: PaymentCreate,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(require_operation(Operation.ORDER_RECORD_PAYMENT)),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> OrderOutput:
    """
    Record a payment. The order becomes PAID once payments cover the total;
    overpayment is accepted.
    """
    order, _ = PaymentService(db).record_payment(
        order_id,
        body.method,
        body.amount_cents,
        ctx,
        reference=body.reference,
    )
    output = order_output(order)

    try:
        await publish_payment_recorded(publisher, order.cafe_id, event_payload(output))
    except Exception as e:
        logger.error("Failed to publish payment event", order_id=order_id, error=str(e))

    return output

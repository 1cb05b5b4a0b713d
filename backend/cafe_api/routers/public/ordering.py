"""
Public router for table holders.

No authentication: holding the table slug from the QR code is the only
credential. Writes are rate limited per client IP.
"""

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from cafe_api.routers._common import event_payload, order_output
from cafe_api.services.domain import CafeService, MenuService, OrderService, TableService
from shared.config.logging import orders_logger as logger
from shared.infrastructure.db import get_db
from shared.infrastructure.events import (
    EventPublisher,
    get_event_publisher,
    publish_order_cancelled_by_table,
    publish_order_created,
)
from shared.security.rate_limit import PUBLIC_WRITE_LIMIT, limiter
from shared.utils.admin_schemas import CafePublicOutput, MenuItemOutput, PublicTableOutput
from shared.utils.schemas import OrderCreate, OrderOutput, PublicCancelRequest


router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/tables/{slug}", response_model=PublicTableOutput)
def get_table(slug: str, db: Session = Depends(get_db)) -> PublicTableOutput:
    return TableService(db).get_public(slug)


@router.get("/tables/{slug}/orders", response_model=list[OrderOutput])
def list_table_orders(slug: str, db: Session = Depends(get_db)) -> list[OrderOutput]:
    """Orders placed from this table, newest first."""
    return [order_output(o) for o in OrderService(db).list_for_table(slug)]


@router.get("/cafes/{cafe_id}", response_model=CafePublicOutput)
def get_cafe(cafe_id: int, db: Session = Depends(get_db)) -> CafePublicOutput:
    return CafeService(db).get_public(cafe_id)


@router.get("/menu", response_model=list[MenuItemOutput])
def get_menu(cafe_id: int = Query(...), db: Session = Depends(get_db)) -> list[MenuItemOutput]:
    """Available items of a cafe."""
    return MenuService(db).public_menu(cafe_id)


@router.post("/orders", response_model=OrderOutput, status_code=status.HTTP_201_CREATED)
@limiter.limit(PUBLIC_WRITE_LIMIT)
async def create_order(
    request: Request,
    body: OrderCreate,
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> OrderOutput:
    """
    Place an order from a cart.

    Prices come from the menu at the time of ordering; tax is 5% of the
    subtotal. Unknown slugs are rejected with "Invalid table".
    """
    order = OrderService(db).create_order(body)
    output = order_output(order)

    try:
        await publish_order_created(publisher, order.cafe_id, order.table_slug, event_payload(output))
    except Exception as e:
        logger.error("Failed to publish new order", order_id=order.id, error=str(e))

    return output


@router.post("/orders/{order_id}/cancel", response_model=OrderOutput)
@limiter.limit(PUBLIC_WRITE_LIMIT)
async def cancel_order(
    request: Request,
    order_id: int,
    body: PublicCancelRequest | None = None,
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> OrderOutput:
    """
    Cancel an order while it is still NEW or ACCEPTED.

    The slug must be the one of the table the order was placed from.
    """
    table_slug = body.table_slug if body else None
    order, _ = OrderService(db).cancel_by_table(order_id, table_slug)
    output = order_output(order)

    try:
        await publish_order_cancelled_by_table(
            publisher, order.cafe_id, order.table_slug, event_payload(output)
        )
    except Exception as e:
        logger.error("Failed to publish cancellation", order_id=order_id, error=str(e))

    return output

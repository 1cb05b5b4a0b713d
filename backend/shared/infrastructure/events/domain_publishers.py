"""
Order event publishing.

Decides which subscriber groups hear about an order change and fans the
event out. Publishing happens after the database commit and is
fire-and-forget: a failing group is logged and skipped, never raised to the
request that triggered it.
"""

from __future__ import annotations

from typing import Any, Iterable

from shared.config.constants import OrderStatus
from shared.config.logging import get_logger
from .broadcaster import EventPublisher
from .channels import (
    channel_cafe_admin,
    channel_cafe_kitchen,
    channel_cafe_delivery,
    channel_table,
)
from .event_types import ORDER_NEW, ORDER_UPDATE

logger = get_logger(__name__)

# Statuses that appear on the kitchen screen or mark an order leaving it
_KITCHEN_STATUSES = frozenset(OrderStatus.KITCHEN_VISIBLE + [OrderStatus.COMPLETED])
# Statuses that appear on the delivery screen
_DELIVERY_STATUSES = frozenset(OrderStatus.DELIVERY_VISIBLE)


def transition_groups(
    cafe_id: int,
    table_slug: str | None,
    previous_status: str,
    new_status: str,
) -> list[str]:
    """Subscriber groups for an order status change."""
    groups = [channel_cafe_admin(cafe_id)]

    cancelled = new_status == OrderStatus.CANCELLED
    if cancelled or previous_status in _KITCHEN_STATUSES or new_status in _KITCHEN_STATUSES:
        groups.append(channel_cafe_kitchen(cafe_id))
    if (
        cancelled
        or new_status == OrderStatus.DELIVERED
        or previous_status in _DELIVERY_STATUSES
        or new_status in _DELIVERY_STATUSES
    ):
        groups.append(channel_cafe_delivery(cafe_id))

    if table_slug:
        groups.append(channel_table(table_slug))
    return groups


def new_order_groups(cafe_id: int, table_slug: str | None) -> list[str]:
    """Subscriber groups for a freshly placed order."""
    groups = [channel_cafe_admin(cafe_id), channel_cafe_kitchen(cafe_id)]
    if table_slug:
        groups.append(channel_table(table_slug))
    return groups


def public_cancel_groups(cafe_id: int, table_slug: str) -> list[str]:
    """Subscriber groups for a cancellation made by the table holder."""
    return [channel_cafe_admin(cafe_id), channel_cafe_kitchen(cafe_id), channel_table(table_slug)]


def payment_groups(cafe_id: int) -> list[str]:
    """Payments only concern the cafe administration."""
    return [channel_cafe_admin(cafe_id)]


async def broadcast(
    publisher: EventPublisher,
    groups: Iterable[str],
    event_name: str,
    payload: dict[str, Any],
) -> int:
    """
    Publish one event to several groups.

    Returns the number of groups the publisher accepted. Errors are logged per
    group and swallowed.
    """
    delivered = 0
    for group in groups:
        try:
            await publisher.publish(group, event_name, payload)
            delivered += 1
        except Exception as e:
            logger.error(
                "Failed to publish event",
                channel=group,
                event_type=event_name,
                order_id=payload.get("id"),
                error=str(e),
            )
    return delivered


async def publish_order_created(
    publisher: EventPublisher,
    cafe_id: int,
    table_slug: str | None,
    payload: dict[str, Any],
) -> int:
    return await broadcast(publisher, new_order_groups(cafe_id, table_slug), ORDER_NEW, payload)


async def publish_order_transition(
    publisher: EventPublisher,
    cafe_id: int,
    table_slug: str | None,
    previous_status: str,
    payload: dict[str, Any],
) -> int:
    groups = transition_groups(cafe_id, table_slug, previous_status, payload["status"])
    return await broadcast(publisher, groups, ORDER_UPDATE, payload)


async def publish_order_cancelled_by_table(
    publisher: EventPublisher,
    cafe_id: int,
    table_slug: str,
    payload: dict[str, Any],
) -> int:
    return await broadcast(publisher, public_cancel_groups(cafe_id, table_slug), ORDER_UPDATE, payload)


async def publish_payment_recorded(
    publisher: EventPublisher,
    cafe_id: int,
    payload: dict[str, Any],
) -> int:
    return await broadcast(publisher, payment_groups(cafe_id), ORDER_UPDATE, payload)

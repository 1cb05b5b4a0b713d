"""
Helpers shared by the routers.
"""

from typing import Any

from cafe_api.models import Order
from shared.utils.schemas import OrderOutput


def order_output(order: Order) -> OrderOutput:
    return OrderOutput.model_validate(order)


def event_payload(output: OrderOutput) -> dict[str, Any]:
    """JSON-safe order snapshot carried by order events."""
    return output.model_dump(mode="json")


def get_user_id(ctx: dict[str, Any]) -> int | None:
    return ctx.get("user_id")


def get_user_email(ctx: dict[str, Any]) -> str | None:
    return ctx.get("email")

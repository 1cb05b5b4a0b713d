"""
Subscriber group keys.

A group key is also the Redis channel the group listens on.
"""

from __future__ import annotations


def _validate_positive_id(id_value: int, name: str) -> None:
    if not isinstance(id_value, int) or isinstance(id_value, bool) or id_value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {id_value!r}")


def channel_cafe_admin(cafe_id: int) -> str:
    """Admin dashboards of a cafe."""
    _validate_positive_id(cafe_id, "cafe_id")
    return f"cafe:{cafe_id}:admin"


def channel_cafe_kitchen(cafe_id: int) -> str:
    """Kitchen screens of a cafe."""
    _validate_positive_id(cafe_id, "cafe_id")
    return f"cafe:{cafe_id}:kitchen"


def channel_cafe_delivery(cafe_id: int) -> str:
    """Delivery staff of a cafe."""
    _validate_positive_id(cafe_id, "cafe_id")
    return f"cafe:{cafe_id}:delivery"



def channel_table(slug: str) -> str:
    """Customers following orders placed from one table."""
    if not slug or not isinstance(slug, str):
        raise ValueError(f"table slug must be a non-empty string, got {slug!r}")
    return f"table:{slug}"

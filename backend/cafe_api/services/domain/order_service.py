"""
Order Service - order placement, staff listing and status changes.

Placement snapshots name and price of every menu item so later menu edits
never touch existing orders. Totals are computed server side; client
prices are never read.
"""

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from cafe_api.models import Cafe, MenuItem, Order, OrderLine, Table
from cafe_api.repositories import MenuItemRepository, OrderFilters, OrderRepository
from cafe_api.services.domain.order_lifecycle import (
    apply_public_cancel,
    apply_totals,
    apply_transition,
)
from shared.config.constants import CafeStatus, ErrorMessages, Limits, OrderStatus, Roles
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.security.auth import require_cafe_access
from shared.utils.exceptions import OrderNotFoundError, TableNotFoundError, ValidationError
from shared.utils.schemas import OrderCreate
from shared.utils.validators import sanitize_text

logger = get_logger(__name__)


class OrderService:
    """Business logic around Order persistence."""

    def __init__(self, db: Session):
        self._db = db
        self._orders = OrderRepository(db)
        self._menu = MenuItemRepository(db)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_order(self, order_id: int) -> Order:
        order = self._orders.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def get_order_for_staff(self, order_id: int, ctx: dict[str, Any]) -> Order:
        """Load an order the caller's cafe owns."""
        order = self.get_order(order_id)
        require_cafe_access(ctx, order.cafe_id)
        return order

    def list_orders(
        self,
        ctx: dict[str, Any],
        cafe_id: int | None,
        status: str | None = None,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> Sequence[Order]:
        """
        Orders for a staff screen, newest first.

        KITCHEN only sees NEW/ACCEPTED/IN_PROGRESS and DELIVERY only sees
        COMPLETED; an explicit status outside that set yields nothing.
        cafe_id must already be scoped to the caller.
        """
        role = ctx.get("role")
        visible: list[str] | None = None
        if role == Roles.KITCHEN:
            visible = OrderStatus.KITCHEN_VISIBLE
        elif role == Roles.DELIVERY:
            visible = OrderStatus.DELIVERY_VISIBLE

        filters = OrderFilters(cafe_id=cafe_id, limit=limit, offset=offset)
        if visible is None:
            filters.status = status
        elif status is None:
            filters.statuses = list(visible)
        else:
            filters.statuses = [status] if status in visible else []

        return self._orders.find_all(filters)

    def list_for_table(self, table_slug: str) -> Sequence[Order]:
        """Orders placed from a table, newest first."""
        if self._find_table_by_slug(table_slug) is None:
            raise TableNotFoundError(table_slug)
        return self._orders.find_by_table_slug(table_slug)

    # =========================================================================
    # Commands
    # =========================================================================

    def create_order(self, data: OrderCreate) -> Order:
        """
        Place an order from a customer's cart.

        Raises:
            ValidationError: unknown table slug, closed cafe, or a cart entry
                that is not an orderable item of the table's cafe.
        """
        table = self._find_table_by_slug(data.table_slug)
        if table is None:
            raise ValidationError(ErrorMessages.INVALID_TABLE, table_slug=data.table_slug)

        cafe = self._db.get(Cafe, table.cafe_id)
        if cafe is None or not cafe.is_active or cafe.status != CafeStatus.ACTIVE:
            raise ValidationError("Cafe is not accepting orders", cafe_id=table.cafe_id)

        item_ids = {entry.menu_item_id for entry in data.items}
        items = self._menu.find_by_ids(list(item_ids), cafe_id=table.cafe_id)
        items_by_id: dict[int, MenuItem] = {item.id: item for item in items}

        lines: list[OrderLine] = []
        for entry in data.items:
            item = items_by_id.get(entry.menu_item_id)
            if item is None:
                raise ValidationError(
                    f"Menu item {entry.menu_item_id} not found",
                    menu_item_id=entry.menu_item_id,
                    cafe_id=table.cafe_id,
                )
            if not item.is_available:
                raise ValidationError(
                    f"Menu item '{item.name}' is not available",
                    menu_item_id=item.id,
                )
            lines.append(
                OrderLine(
                    menu_item_id=item.id,
                    name_snapshot=item.name,
                    price_snapshot_cents=item.price_cents,
                    quantity=entry.quantity,
                    notes=sanitize_text(entry.notes),
                )
            )

        order = Order(
            cafe_id=table.cafe_id,
            table_id=table.id,
            status=OrderStatus.NEW,
            paid_cents=0,
            customer_notes=sanitize_text(data.notes),
            lines=lines,
        )
        apply_totals(order)

        self._db.add(order)
        safe_commit(self._db)

        logger.info(
            "Order placed",
            order_id=order.id,
            cafe_id=order.cafe_id,
            table_id=table.id,
            line_count=len(lines),
            total_cents=order.total_cents,
        )
        return self._reload(order.id)

    def update_status(
        self,
        order_id: int,
        requested_status: str,
        ctx: dict[str, Any],
    ) -> tuple[Order, str]:
        """
        Staff status change.

        Returns:
            (updated order, previous status)
        """
        order = self.get_order_for_staff(order_id, ctx)
        previous = apply_transition(order, requested_status, ctx["role"], ctx.get("user_id"))
        order.set_updated_by(ctx.get("user_id"), ctx.get("email"))
        safe_commit(self._db)

        logger.info(
            "Order status changed",
            order_id=order_id,
            from_status=previous,
            to_status=requested_status,
            actor_id=ctx.get("user_id"),
            actor_role=ctx.get("role"),
        )
        return self._reload(order_id), previous

    def cancel_by_table(self, order_id: int, table_slug: str | None) -> tuple[Order, str]:
        """
        Cancellation requested by whoever holds the table slug.

        Returns:
            (cancelled order, previous status)
        """
        if not table_slug:
            raise ValidationError(ErrorMessages.MISSING_TABLE_SLUG, order_id=order_id)

        order = self.get_order(order_id)
        previous = apply_public_cancel(order, table_slug)
        safe_commit(self._db)

        logger.info("Order cancelled by table", order_id=order_id, from_status=previous)
        return self._reload(order_id), previous

    # =========================================================================
    # Helpers
    # =========================================================================

    def _find_table_by_slug(self, slug: str) -> Table | None:
        return self._db.scalar(
            select(Table).where(Table.slug == slug, Table.is_active.is_(True))
        )

    def _reload(self, order_id: int) -> Order:
        # Fresh load with lines/payments/table after commit expired the instance
        self._db.expire_all()
        return self.get_order(order_id)

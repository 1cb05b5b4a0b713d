"""
Order Repository - data access for orders with eager loading of lines,
payments and table.
"""

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.orm import joinedload, selectinload

from cafe_api.models import Order, Table
from .base import BaseRepository, RepositoryFilters


@dataclass
class OrderFilters(RepositoryFilters):
    """Filters specific to orders."""

    status: str | None = None
    statuses: list[str] | None = None
    table_id: int | None = None


class OrderRepository(BaseRepository[Order]):
    """
    Repository for Order entities.

    Guarantees eager loading of lines, payments and table so serializing an
    order never lazy-loads.
    """

    @property
    def model(self) -> type[Order]:
        return Order

    def _base_query(self) -> Select:
        return (
            select(Order)
            .options(
                selectinload(Order.lines),
                selectinload(Order.payments),
                joinedload(Order.table),
            )
            .order_by(Order.created_at.desc(), Order.id.desc())
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, OrderFilters):
            return query

        if filters.status:
            query = query.where(Order.status == filters.status)
        elif filters.statuses is not None:
            query = query.where(Order.status.in_(filters.statuses))

        if filters.table_id:
            query = query.where(Order.table_id == filters.table_id)

        return query

    def find_by_table_slug(self, slug: str, limit: int = 50) -> Sequence[Order]:
        """Orders placed from the table carrying this slug, newest first."""
        query = (
            self._base_query()
            .join(Table, Order.table_id == Table.id)
            .where(Table.slug == slug, Order.is_active.is_(True))
            .limit(limit)
        )
        return self._db.execute(query).scalars().unique().all()

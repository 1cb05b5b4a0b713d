"""
Menu Item Repository.
"""

from dataclasses import dataclass

from sqlalchemy import Select, select

from cafe_api.models import MenuItem
from .base import BaseRepository, RepositoryFilters


@dataclass
class MenuItemFilters(RepositoryFilters):
    category: str | None = None
    available_only: bool = False


class MenuItemRepository(BaseRepository[MenuItem]):

    @property
    def model(self) -> type[MenuItem]:
        return MenuItem

    def _base_query(self) -> Select:
        return select(MenuItem).order_by(MenuItem.category, MenuItem.name, MenuItem.id)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, MenuItemFilters):
            return query
        if filters.category:
            query = query.where(MenuItem.category == filters.category)
        if filters.available_only:
            query = query.where(MenuItem.is_available.is_(True))
        return query

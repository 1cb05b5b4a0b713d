"""
Menu Service - items a cafe offers.
"""

from typing import Any

from sqlalchemy.orm import Session

from cafe_api.models import MenuItem
from cafe_api.repositories import MenuItemFilters, MenuItemRepository
from cafe_api.services.base_service import BaseCRUDService
from cafe_api.services.domain.cafe_service import get_active_cafe
from shared.config.constants import Limits
from shared.utils.admin_schemas import MenuItemOutput


class MenuService(BaseCRUDService[MenuItem, MenuItemOutput]):

    def __init__(self, db: Session):
        super().__init__(db, MenuItem, MenuItemOutput, "Menu item")
        self._items = MenuItemRepository(db)

    def list_for_cafe(
        self,
        cafe_id: int | None,
        *,
        available_only: bool = False,
        category: str | None = None,
    ) -> list[MenuItemOutput]:
        filters = MenuItemFilters(
            cafe_id=cafe_id,
            available_only=available_only,
            category=category,
            limit=Limits.MAX_PAGE_SIZE,
        )
        return [self.to_output(item) for item in self._items.find_all(filters)]

    def public_menu(self, cafe_id: int) -> list[MenuItemOutput]:
        """Orderable items of an active cafe."""
        get_active_cafe(self._db, cafe_id)
        return self.list_for_cafe(cafe_id, available_only=True)

    def _validate_create(self, data: dict[str, Any]) -> None:
        get_active_cafe(self._db, data["cafe_id"])

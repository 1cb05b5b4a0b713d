"""
Table Service - tables and the slugs printed in their QR codes.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from cafe_api.models import Table
from cafe_api.services.base_service import BaseCRUDService
from cafe_api.services.domain.cafe_service import get_active_cafe
from shared.utils.admin_schemas import CafePublicOutput, PublicTableOutput, TableOutput
from shared.utils.exceptions import ConflictError, TableNotFoundError
from shared.utils.validators import slugify


class TableService(BaseCRUDService[Table, TableOutput]):
    """Service for table management."""

    def __init__(self, db: Session):
        super().__init__(db, Table, TableOutput, "Table", order_by=[Table.table_number, Table.id])

    def get_public(self, slug: str) -> PublicTableOutput:
        """What a customer sees after scanning the code."""
        table = self._db.scalar(select(Table).where(Table.slug == slug, Table.is_active.is_(True)))
        if table is None:
            raise TableNotFoundError(slug)
        cafe = get_active_cafe(self._db, table.cafe_id)
        return PublicTableOutput(
            slug=table.slug,
            table_number=table.table_number,
            cafe=CafePublicOutput.model_validate(cafe),
        )

    def generate_slug(self, cafe_id: int, table_number: int) -> str:
        """
        "table-{n}", prefixed with the cafe when another cafe already
        owns that slug.
        """
        slug = slugify(f"table-{table_number}")
        if self._slug_taken(slug):
            slug = slugify(f"cafe-{cafe_id}-table-{table_number}")
        return slug

    def _validate_create(self, data: dict[str, Any]) -> None:
        cafe_id = data["cafe_id"]
        get_active_cafe(self._db, cafe_id)

        existing = self._db.scalar(
            select(Table.id).where(
                Table.cafe_id == cafe_id,
                Table.table_number == data["table_number"],
            )
        )
        if existing is not None:
            raise ConflictError(
                f"Table number {data['table_number']} already exists in this cafe",
                cafe_id=cafe_id,
            )

        if data.get("slug"):
            if self._slug_taken(data["slug"]):
                raise ConflictError(f"Slug '{data['slug']}' is already in use")
        else:
            data["slug"] = self.generate_slug(cafe_id, data["table_number"])

    def _validate_update(self, entity: Table, data: dict[str, Any]) -> None:
        slug = data.get("slug")
        if slug and slug != entity.slug and self._slug_taken(slug):
            raise ConflictError(f"Slug '{slug}' is already in use")

    def _slug_taken(self, slug: str) -> bool:
        return self._db.scalar(select(Table.id).where(Table.slug == slug)) is not None

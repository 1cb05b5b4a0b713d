"""
Base service for administration CRUD.

Architecture:
    Router (thin) -> Service (business logic) -> Repository (data access) -> Model

Usage:
    class PlanService(BaseCRUDService[SubscriptionPlan, PlanOutput]):
        def __init__(self, db: Session):
            super().__init__(db, SubscriptionPlan, PlanOutput, "Subscription plan")
"""

from __future__ import annotations

from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cafe_api.models import Base
from cafe_api.repositories import EntityRepository, RepositoryFilters
from shared.config.constants import Limits
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import ConflictError, DatabaseError, NotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseCRUDService(Generic[ModelT, OutputT]):
    """
    Standard list/get/create/update/soft-delete for one entity type.

    Subclasses override the _validate_* and _after_* hooks for their rules.
    Cafe scoping only applies to models with a cafe_id column.
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        order_by: list | None = None,
    ):
        self._db = db
        self._model = model
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._repo = EntityRepository(model, db, order_by=order_by)

    @property
    def entity_name(self) -> str:
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(
        self,
        entity_id: int,
        cafe_id: int | None = None,
        *,
        include_deleted: bool = False,
    ) -> ModelT:
        """
        Raises:
            NotFoundError: missing, soft-deleted, or owned by another cafe.
        """
        entity = self._repo.find_by_id(entity_id, cafe_id, include_deleted=include_deleted)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id, cafe_id=cafe_id)
        return entity

    def get(self, entity_id: int, cafe_id: int | None = None) -> OutputT:
        return self.to_output(self.get_entity(entity_id, cafe_id))

    def list_all(
        self,
        cafe_id: int | None = None,
        *,
        include_deleted: bool = False,
        limit: int = Limits.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> list[OutputT]:
        filters = RepositoryFilters(
            cafe_id=cafe_id,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        )
        return [self.to_output(e) for e in self._repo.find_all(filters)]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], user_id: int | None, user_email: str | None) -> OutputT:
        """
        Raises:
            ValidationError: rejected by _validate_create.
            ConflictError: unique constraint violated.
        """
        self._validate_create(data)

        entity = self._model(**data)
        entity.set_created_by(user_id, user_email)
        self._db.add(entity)
        self._commit("create")
        self._db.refresh(entity)

        logger.info(f"{self._entity_name} created", entity_id=entity.id, user_id=user_id)
        return self.to_output(entity)

    def update(
        self,
        entity_id: int,
        data: dict[str, Any],
        user_id: int | None,
        user_email: str | None,
        cafe_id: int | None = None,
    ) -> OutputT:
        """Apply the given fields; keys absent from data are left unchanged."""
        entity = self.get_entity(entity_id, cafe_id)
        self._validate_update(entity, data)

        columns = self._model.__table__.columns
        for field_name, value in data.items():
            if not hasattr(entity, field_name):
                continue
            # null only clears optional columns
            if value is None and field_name in columns and not columns[field_name].nullable:
                continue
            setattr(entity, field_name, value)

        entity.set_updated_by(user_id, user_email)
        self._commit("update")
        self._db.refresh(entity)

        logger.info(
            f"{self._entity_name} updated",
            entity_id=entity_id,
            fields=sorted(data.keys()),
            user_id=user_id,
        )
        return self.to_output(entity)

    def delete(
        self,
        entity_id: int,
        user_id: int | None,
        user_email: str | None,
        cafe_id: int | None = None,
    ) -> None:
        """Soft delete; the row stays for order history."""
        entity = self.get_entity(entity_id, cafe_id)
        self._before_delete(entity)
        entity.soft_delete(user_id, user_email)
        self._commit("delete")

        logger.info(f"{self._entity_name} deleted", entity_id=entity_id, user_id=user_id)

    def to_output(self, entity: ModelT) -> OutputT:
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        pass

    def _before_delete(self, entity: ModelT) -> None:
        pass

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _commit(self, operation: str) -> None:
        try:
            safe_commit(self._db)
        except IntegrityError as e:
            raise ConflictError(
                f"{self._entity_name} conflicts with an existing record",
                operation=operation,
                error=str(e.orig),
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to {operation} {self._entity_name}", error=str(e))
            raise DatabaseError(f"{operation} of {self._entity_name.lower()}")

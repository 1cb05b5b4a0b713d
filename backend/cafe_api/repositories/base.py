"""
Base Repository implementation.
Common data access patterns with optional cafe scoping.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from shared.config.constants import Limits


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0
    include_deleted: bool = False
    # None means every cafe (super admin views)
    cafe_id: int | None = None

    def __post_init__(self):
        self.limit = min(max(1, self.limit), Limits.MAX_PAGE_SIZE)
        self.offset = max(0, self.offset)


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository.

    Subclasses implement:
    - model: the SQLAlchemy model class
    - _base_query(): select with eager loading and default ordering
    - _apply_filters(): entity-specific filters
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        ...

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        return query

    def _scope(self, query: Select, cafe_id: int | None, include_deleted: bool) -> Select:
        if cafe_id is not None and hasattr(self.model, "cafe_id"):
            query = query.where(self.model.cafe_id == cafe_id)
        if not include_deleted and hasattr(self.model, "is_active"):
            query = query.where(self.model.is_active.is_(True))
        return query

    def find_all(self, filters: RepositoryFilters | None = None) -> Sequence[ModelT]:
        filters = filters or RepositoryFilters()
        query = self._scope(self._base_query(), filters.cafe_id, filters.include_deleted)
        query = self._apply_filters(query, filters)
        query = query.offset(filters.offset).limit(filters.limit)
        return self._db.execute(query).scalars().unique().all()

    def find_by_id(
        self,
        entity_id: int,
        cafe_id: int | None = None,
        include_deleted: bool = False,
    ) -> ModelT | None:
        query = self._scope(
            self._base_query().where(self.model.id == entity_id),
            cafe_id,
            include_deleted,
        )
        return self._db.execute(query).scalars().unique().first()

    def find_by_ids(
        self,
        entity_ids: list[int],
        cafe_id: int | None = None,
        include_deleted: bool = False,
    ) -> Sequence[ModelT]:
        """Entities whose ids are in entity_ids; order not guaranteed."""
        if not entity_ids:
            return []
        query = self._scope(
            self._base_query().where(self.model.id.in_(entity_ids)),
            cafe_id,
            include_deleted,
        )
        return self._db.execute(query).scalars().unique().all()

    def count(self, filters: RepositoryFilters | None = None) -> int:
        filters = filters or RepositoryFilters()
        query = self._scope(
            select(func.count()).select_from(self.model),
            filters.cafe_id,
            filters.include_deleted,
        )
        return self._db.scalar(query) or 0


class EntityRepository(BaseRepository[ModelT]):
    """
    Repository for plain entities that need no eager loading.

    Usage:
        repo = EntityRepository(Table, db, order_by=[Table.table_number])
        tables = repo.find_all(RepositoryFilters(cafe_id=cafe_id))
    """

    def __init__(self, model: type[ModelT], db: Session, order_by: list | None = None):
        super().__init__(db)
        self._model = model
        self._order_by = order_by

    @property
    def model(self) -> type[ModelT]:
        return self._model

    def _base_query(self) -> Select:
        return select(self._model).order_by(*(self._order_by or [self._model.id]))

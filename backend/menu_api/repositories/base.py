"""
Base Repository implementation.
Provides common data access patterns; visibility scoping is expressed as
filters so that paged rows and the total count share the same WHERE clause.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.utils.validators import sanitize_search_term


ModelT = TypeVar("ModelT")


@dataclass
class RepositoryFilters:
    """Base filters for repository queries."""

    # Pagination
    limit: int = Limits.DEFAULT_PAGE_SIZE
    offset: int = 0
    max_limit: int = Limits.MAX_MENU_PAGE_SIZE

    # Search
    search: str | None = None

    def __post_init__(self):
        """Validate and normalize filters."""
        self.limit = min(max(1, self.limit), self.max_limit)
        self.offset = max(0, self.offset)
        if self.search:
            self.search = sanitize_search_term(self.search) or None


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    def _base_query(self) -> Select:
        """Base query; override to add eager loading."""
        return select(self.model)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply entity-specific filters to query; override in subclasses."""
        return query

    def _order_by(self, filters: RepositoryFilters) -> list[Any]:
        """Listing order: newest first, id as tie-breaker."""
        return [self.model.created_at.desc(), self.model.id.desc()]

    def find_all(self, filters: RepositoryFilters) -> Sequence[ModelT]:
        """Find one page of entities matching filters."""
        query = self._apply_filters(self._base_query(), filters)
        query = query.order_by(*self._order_by(filters))
        query = query.offset(filters.offset).limit(filters.limit)
        return self._db.execute(query).scalars().unique().all()

    def count(self, filters: RepositoryFilters) -> int:
        """Count all entities matching filters, ignoring pagination."""
        query = self._apply_filters(select(self.model.id), filters)
        return self._db.scalar(select(func.count()).select_from(query.subquery())) or 0

    def find_by_id(self, entity_id: str) -> ModelT | None:
        return self._db.scalar(self._base_query().where(self.model.id == entity_id))

    def save(self, entity: ModelT) -> ModelT:
        """Stage entity for insert or update; the service commits."""
        self._db.add(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Stage entity for deletion; the service commits."""
        self._db.delete(entity)

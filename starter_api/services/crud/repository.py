"""
Repository Pattern for database access.

Provides the storage contract every entity repository satisfies, on top of
SQLAlchemy. Repositories never commit: transaction boundaries belong to the
service layer (see starter_shared.infrastructure.db.transactional).

Usage:
    from starter_api.services.crud.repository import GenericRepository

    repo = GenericRepository(User, db)

    user = repo.find_by_id(user_id)
    mine = repo.find_by_id_and_owner(user_id, owner)
    users = repo.find_all(parse_sort("username,ASC"))
    page = repo.find_page(0, 10, parse_sort("createdAt,DESC"))
    taken = repo.exists(None, username="alice", email="alice@example.com")
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from starter_api.models import GenericEntity
from starter_shared.config.logging import get_logger

from .page import Page
from .sorting import SortDirective, build_order_by

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=GenericEntity)


def owner_key(owner: Any) -> UUID | None:
    """Accept either an entity or its id as an owner reference."""
    if owner is None:
        return None
    if isinstance(owner, GenericEntity):
        return owner.id
    return owner


class GenericRepository(Generic[ModelT]):
    """
    Base repository providing the common storage operations.

    Subclass this to add entity-specific finders and natural-key checks.
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        """Create base select query."""
        return select(self._model)

    def _apply_sort(self, query: Select, sort: Sequence[SortDirective] | None) -> Select:
        clauses = build_order_by(self._model, sort)
        if clauses:
            query = query.order_by(*clauses)
        return query

    # =========================================================================
    # Finders
    # =========================================================================

    def find_by_id(self, entity_id: UUID) -> ModelT | None:
        """Find entity by primary key."""
        return self._session.get(self._model, entity_id)

    def find_by_id_and_owner(self, entity_id: UUID, owner: Any) -> ModelT | None:
        """
        Find entity by primary key within an owner's scope.

        Returns None both when the id does not exist and when it belongs to
        another owner; callers cannot distinguish the two.
        """
        owner_id = owner_key(owner)
        if owner_id is None:
            return None
        query = self._base_query().where(
            self._model.id == entity_id,
            self._model.owner_id == owner_id,
        )
        return self._session.scalar(query)

    def find_all(self, sort: Sequence[SortDirective] | None = None) -> list[ModelT]:
        """Find all entities, ordered by sort when given."""
        query = self._apply_sort(self._base_query(), sort)
        return list(self._session.scalars(query).all())

    def find_page(
        self,
        page: int,
        size: int,
        sort: Sequence[SortDirective] | None = None,
    ) -> Page[ModelT]:
        """
        Find one zero-based page of entities.

        Args:
            page: Zero-based page index.
            size: Page size (at least 1).
            sort: Ordering directives.

        Returns:
            The page content with the total row count.
        """
        page = max(page, 0)
        size = max(size, 1)
        query = (
            self._apply_sort(self._base_query(), sort)
            .offset(page * size)
            .limit(size)
        )
        content = list(self._session.scalars(query).all())
        return Page(content=content, number=page, size=size, total_elements=self.count())

    def count(self) -> int:
        """Count all entities."""
        query = select(func.count()).select_from(self._model)
        return self._session.scalar(query) or 0

    def exists(self, entity_id: UUID | None, **unique_fields: Any) -> bool:
        """
        Check whether a row already holds this id or any of the natural keys.

        String keys are compared case-insensitively. None values are ignored.
        """
        criteria = []
        if entity_id is not None:
            criteria.append(self._model.id == entity_id)
        for name, value in unique_fields.items():
            if value is None:
                continue
            column = getattr(self._model, name)
            if isinstance(value, str):
                criteria.append(func.lower(column) == value.lower())
            else:
                criteria.append(column == value)

        if not criteria:
            return False

        query = select(func.count()).select_from(self._model).where(or_(*criteria))
        return (self._session.scalar(query) or 0) > 0

    # =========================================================================
    # Writes (flushed, not committed)
    # =========================================================================

    def save(self, entity: ModelT) -> ModelT:
        """Add entity to the session and flush so generated fields are populated."""
        self._session.add(entity)
        self._session.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        """Delete entity (flushed, not committed)."""
        self._session.delete(entity)
        self._session.flush()

    def delete_by_id(self, entity_id: UUID) -> bool:
        """Delete entity by primary key. Returns False when it does not exist."""
        entity = self.find_by_id(entity_id)
        if entity is None:
            return False
        self.delete(entity)
        return True

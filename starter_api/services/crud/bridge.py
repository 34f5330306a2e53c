"""
Entity <-> DTO bridge.

Converts persisted entities to their wire DTOs and back. The common
GenericEntity fields are handled here; type-specific fields go through the
EntityStrategy hooks.

References (created_by, modified_by, owner) travel as bare user ids. With a
ReferenceResolver every id is checked against the users table and ids that
do not resolve are dropped with a warning. Without one, ids are copied as-is.

Usage:
    from starter_api.services.crud.bridge import GenericBridge, session_resolver

    bridge = GenericBridge(USER_STRATEGY)
    dto = bridge.to_dto(user)
    user = bridge.to_entity(dto)

    # Validate references against the database
    checked = GenericBridge(USER_STRATEGY, resolver=session_resolver(db))
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Protocol, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from starter_api.models import GenericEntity, User
from starter_shared.config.logging import get_logger

from .strategy import EntityStrategy

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=GenericEntity)
DtoT = TypeVar("DtoT", bound=BaseModel)


class ReferenceResolver(Protocol):
    """Looks up the user behind a reference id; None when there is none."""

    def __call__(self, user_id: UUID) -> User | None: ...


def session_resolver(session: Session) -> ReferenceResolver:
    """Resolver backed by a database session."""

    def resolve(user_id: UUID) -> User | None:
        return session.get(User, user_id)

    return resolve


class GenericBridge(Generic[ModelT, DtoT]):
    """
    Bidirectional mapper for one entity kind.

    to_entity never mutates the DTO it is given and always builds a fresh
    entity; to_dto never exposes secrets (the strategy decides which fields
    are copied out).
    """

    def __init__(
        self,
        strategy: EntityStrategy[ModelT, DtoT],
        resolver: ReferenceResolver | None = None,
    ):
        self._strategy = strategy
        self._resolver = resolver

    @property
    def strategy(self) -> EntityStrategy[ModelT, DtoT]:
        return self._strategy

    def _reference(self, user_id: UUID | None, field: str) -> UUID | None:
        if user_id is None or self._resolver is None:
            return user_id
        if self._resolver(user_id) is None:
            logger.warning(
                "Dropping unresolved reference",
                entity=self._strategy.entity_name,
                field=field,
                user_id=str(user_id),
            )
            return None
        return user_id

    def to_entity(self, dto: DtoT) -> ModelT:
        """Build a new, detached entity from a DTO."""
        entity = self._strategy.model()

        if dto.id is not None:
            entity.id = dto.id
        if dto.created_at is not None:
            entity.created_at = dto.created_at
        entity.modified_at = dto.modified_at

        entity.created_by_id = self._reference(dto.created_by, "created_by")
        entity.modified_by_id = self._reference(dto.modified_by, "modified_by")
        entity.owner_id = self._reference(dto.owner, "owner")

        self._strategy.copy_to_entity(dto, entity)
        return entity

    def to_dto(self, entity: ModelT) -> DtoT:
        """Project an entity to its DTO."""
        data: dict[str, Any] = {
            "id": entity.id,
            "created_at": entity.created_at,
            "created_by": self._reference(entity.created_by_id, "created_by"),
            "modified_at": entity.modified_at,
            "modified_by": self._reference(entity.modified_by_id, "modified_by"),
            "owner": self._reference(entity.owner_id, "owner"),
        }
        data.update(self._strategy.copy_to_dto(entity))
        return self._strategy.dto_schema(**data)

    def to_entities(self, dtos: Iterable[DtoT]) -> list[ModelT]:
        return [self.to_entity(dto) for dto in dtos]

    def to_dtos(self, entities: Iterable[ModelT]) -> list[DtoT]:
        return [self.to_dto(entity) for entity in entities]

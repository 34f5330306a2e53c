"""
Per-entity configuration for the generic CRUD layer.

One EntityStrategy describes everything the generic repository, bridge,
service and controller need to know about an entity kind: its model and DTO
classes, which fields are natural keys, how type-specific fields are copied
and merged, what to clean up before a delete, and how to build its
not-found error.

Usage:
    USER_STRATEGY = EntityStrategy(
        model=User,
        dto_schema=UserDto,
        entity_name="User",
        unique_fields=("username", "email"),
        copy_to_entity=_user_fields_from_dto,
        copy_to_dto=_user_fields_to_dto,
        merge=_merge_user,
        before_delete=_clear_user_references,
        not_found=UserNotFoundError,
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from starter_api.models import GenericEntity
from starter_shared.utils.exceptions import EntityNotFoundError

ModelT = TypeVar("ModelT", bound=GenericEntity)
DtoT = TypeVar("DtoT", bound=BaseModel)


def _no_fields_from_dto(dto: Any, entity: Any) -> None:
    pass


def _no_fields_to_dto(entity: Any) -> dict[str, Any]:
    return {}


def _no_merge(current: Any, incoming: Any) -> None:
    pass


def _no_before_delete(repository: Any, entity: Any) -> None:
    pass


@dataclass
class EntityStrategy(Generic[ModelT, DtoT]):
    """Configuration for one entity kind."""

    # Required
    model: type[ModelT]
    dto_schema: type[DtoT]
    entity_name: str  # Human-readable name for messages and logs

    # Natural keys checked (besides id) before inserting
    unique_fields: tuple[str, ...] = ()

    # Copy type-specific fields DTO -> fresh entity
    copy_to_entity: Callable[[DtoT, ModelT], None] = _no_fields_from_dto

    # Type-specific DTO fields for an entity (secrets must not appear here)
    copy_to_dto: Callable[[ModelT], dict[str, Any]] = _no_fields_to_dto

    # Merge type-specific mutable fields incoming -> current on update
    merge: Callable[[ModelT, ModelT], None] = _no_merge

    # Runs inside the delete transaction, before the row is removed
    before_delete: Callable[[Any, ModelT], None] = _no_before_delete

    # Build the error raised when an id (optionally owner-scoped) does not resolve
    not_found: Callable[..., EntityNotFoundError] | None = None

    def unique_values(self, entity: ModelT) -> dict[str, Any]:
        """Natural-key values of entity, keyed by attribute name."""
        return {name: getattr(entity, name, None) for name in self.unique_fields}

    def entity_not_found(self, entity_id: Any, owner_id: Any = None) -> EntityNotFoundError:
        """Build the not-found error for this entity kind."""
        if self.not_found is not None:
            if owner_id is not None:
                return self.not_found(entity_id, owner_id=owner_id)
            return self.not_found(entity_id)
        return EntityNotFoundError(self.entity_name, entity_id, owner_id=owner_id)

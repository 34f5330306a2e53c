"""
Generic CRUD Service.

Orchestrates the repository and the bridge for one entity kind:
- add: refuse duplicates (id or any natural key), otherwise persist
- update: load current state, merge the mutable fields, persist
- delete: run the entity's cleanup hook, then remove
- listings: plain delegation to the repository

Every public method is one transaction on the service's session (see
starter_shared.infrastructure.db.transactional).

Architecture:
    Router (thin) -> Controller (outcomes) -> Service (transactions)
        -> Repository (data access) -> Model

Usage:
    from starter_api.services.base_service import GenericService

    service = GenericService(db, GenericRepository(Widget, db), GenericBridge(WIDGET_STRATEGY))
    if service.add(service.to_entity(dto)):
        ...
"""

from __future__ import annotations

from typing import Generic, Iterable, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.orm import Session

from starter_api.models import GenericEntity
from starter_api.services.crud.bridge import GenericBridge
from starter_api.services.crud.page import Page
from starter_api.services.crud.repository import GenericRepository
from starter_api.services.crud.sorting import SortDirective
from starter_api.services.crud.strategy import EntityStrategy
from starter_shared.config.logging import get_logger
from starter_shared.infrastructure.db import transactional

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=GenericEntity)
DtoT = TypeVar("DtoT", bound=BaseModel)


class GenericService(Generic[ModelT, DtoT]):
    """
    Base service for entities with CRUD operations.

    Entity-specific behavior comes from the EntityStrategy; subclasses add
    domain queries and commands on top.
    """

    def __init__(
        self,
        db: Session,
        repository: GenericRepository[ModelT],
        bridge: GenericBridge[ModelT, DtoT],
        strategy: EntityStrategy[ModelT, DtoT] | None = None,
    ):
        self._db = db
        self._repo = repository
        self._bridge = bridge
        self._strategy = strategy or bridge.strategy

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> GenericRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    @property
    def bridge(self) -> GenericBridge[ModelT, DtoT]:
        return self._bridge

    @property
    def strategy(self) -> EntityStrategy[ModelT, DtoT]:
        return self._strategy

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._strategy.entity_name

    # =========================================================================
    # Write Operations
    # =========================================================================

    @transactional()
    def add(self, entity: ModelT) -> bool:
        """
        Persist a new entity unless it duplicates an existing one.

        A duplicate is any row with the same id or the same value (case
        insensitive for strings) of any natural key.

        Returns:
            True when stored, False on a duplicate (nothing is written).
        """
        if self._repo.exists(entity.id, **self._strategy.unique_values(entity)):
            logger.info(
                "Duplicate entity not added",
                entity=self.entity_name,
                entity_id=str(entity.id) if entity.id else None,
            )
            return False

        self._repo.save(entity)
        logger.info("Entity added", entity=self.entity_name, entity_id=str(entity.id))
        return True

    @transactional()
    def update(self, entity: ModelT) -> ModelT:
        """
        Merge entity into the stored row with the same id.

        The owner is always taken from entity; the other mutable fields are
        merged by the strategy. id, created_at and created_by never change.

        Raises:
            EntityNotFoundError: If no row has this id.
        """
        current = self._repo.find_by_id(entity.id) if entity.id is not None else None
        if current is None:
            raise self._strategy.entity_not_found(entity.id)

        if current.owner_id != entity.owner_id:
            current.owner_id = entity.owner_id
        self._strategy.merge(current, entity)

        self._db.flush()
        logger.info("Entity updated", entity=self.entity_name, entity_id=str(current.id))
        return current

    @transactional()
    def delete_by_id(self, entity_id: UUID) -> None:
        """
        Delete the row with this id.

        Raises:
            EntityNotFoundError: If no row has this id.
        """
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            raise self._strategy.entity_not_found(entity_id)

        self._strategy.before_delete(self._repo, entity)
        self._repo.delete(entity)
        logger.info("Entity deleted", entity=self.entity_name, entity_id=str(entity_id))

    # =========================================================================
    # Read Operations
    # =========================================================================

    @transactional(read_only=True)
    def find_by_id(self, entity_id: UUID) -> ModelT | None:
        return self._repo.find_by_id(entity_id)

    @transactional(read_only=True)
    def find_all(self, sort: Sequence[SortDirective] | None = None) -> list[ModelT]:
        return self._repo.find_all(sort)

    @transactional(read_only=True)
    def find_page(
        self,
        page: int,
        size: int,
        sort: Sequence[SortDirective] | None = None,
    ) -> Page[ModelT]:
        return self._repo.find_page(page, size, sort)

    # =========================================================================
    # Mapping
    # =========================================================================

    def to_dto(self, entity: ModelT) -> DtoT:
        return self._bridge.to_dto(entity)

    def to_dtos(self, entities: Iterable[ModelT]) -> list[DtoT]:
        return self._bridge.to_dtos(entities)

    def to_entity(self, dto: DtoT) -> ModelT:
        return self._bridge.to_entity(dto)

    def to_entities(self, dtos: Iterable[DtoT]) -> list[ModelT]:
        return self._bridge.to_entities(dtos)

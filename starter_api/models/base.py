"""
Base class and GenericEntity for all SQLAlchemy ORM models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, ForeignKey, Uuid, event
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column, validates


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class GenericEntity(Base):
    """
    Abstract base for every persisted resource.

    Fields:
    - id: UUID primary key, generated on first insert if absent
    - created_at: set on first insert if absent, never changed afterwards
    - modified_at: None until the first update, then refreshed on every update
    - created_by_id, modified_by_id, owner_id: plain references to users.id

    References are kept as identifiers only; the objects behind them are
    resolved explicitly by the bridge or repository when needed.

    Equality is by id: two entities with the same non-null id are equal.
    """

    __abstract__ = True

    # Attribute names holding references to users.id
    REFERENCE_FIELDS = ("created_by_id", "modified_by_id", "owner_id")

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    modified_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @declared_attr
    def created_by_id(cls) -> Mapped[Optional[uuid.UUID]]:
        return mapped_column(
            "created_by", Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
        )

    @declared_attr
    def modified_by_id(cls) -> Mapped[Optional[uuid.UUID]]:
        return mapped_column(
            "modified_by", Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
        )

    @declared_attr
    def owner_id(cls) -> Mapped[Optional[uuid.UUID]]:
        return mapped_column(
            "owner", Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
        )

    @validates("id", "created_at")
    def _validate_write_once(self, key: str, value: Any) -> Any:
        current = getattr(self, key)
        if current is not None and value != current:
            raise ValueError(f"{type(self).__name__}.{key} cannot be changed once assigned")
        return value

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, GenericEntity):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id})>"


@event.listens_for(GenericEntity, "before_insert", propagate=True)
def _assign_identity(mapper, connection, target: GenericEntity) -> None:
    """Generate id and creation time for new rows that do not carry them."""
    if target.id is None:
        target.id = uuid.uuid4()
    if target.created_at is None:
        target.created_at = utcnow()


@event.listens_for(GenericEntity, "before_update", propagate=True)
def _touch_modified(mapper, connection, target: GenericEntity) -> None:
    """Refresh modification time on every persisted update."""
    target.modified_at = utcnow()


def generic_entity_models() -> list[type[GenericEntity]]:
    """All mapped GenericEntity subclasses."""
    return [
        mapper.class_
        for mapper in Base.registry.mappers
        if issubclass(mapper.class_, GenericEntity)
    ]

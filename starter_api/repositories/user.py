"""
User repository.

Natural-key lookups (case-insensitive), substring search, account flag
updates (optionally scoped to an owner) and the reference cleanup that has to
run before a user row can be deleted.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from starter_api.models import GenericEntity, User, generic_entity_models
from starter_api.models.base import utcnow
from starter_api.services.crud.repository import GenericRepository
from starter_shared.config.logging import get_logger

logger = get_logger(__name__)


def _equals_ignore_case(column: Any, value: str) -> ColumnElement[bool]:
    return func.lower(column) == value.lower()


def _contains_ignore_case(column: Any, value: str) -> ColumnElement[bool]:
    return func.lower(column).contains(value.lower(), autoescape=True)


class UserRepository(GenericRepository[User]):
    """Repository for User entities."""

    def __init__(self, session: Session):
        super().__init__(User, session)

    def exists(
        self,
        entity_id: UUID | None,
        username: str | None = None,
        email: str | None = None,
        **unique_fields: Any,
    ) -> bool:
        """True if a user has this id, this username or this email (ignoring case)."""
        return super().exists(entity_id, username=username, email=email, **unique_fields)

    # =========================================================================
    # Natural-key lookups
    # =========================================================================

    def find_by_username(self, username: str) -> User | None:
        query = self._base_query().where(_equals_ignore_case(User.username, username))
        return self._session.scalar(query)

    def find_by_email(self, email: str) -> User | None:
        query = self._base_query().where(_equals_ignore_case(User.email, email))
        return self._session.scalar(query)

    def find_by_username_or_email(self, username: str | None, email: str | None) -> User | None:
        """
        First user matching the username or the email.

        When the two keys match different users, the oldest account wins.
        """
        criteria = []
        if username:
            criteria.append(_equals_ignore_case(User.username, username))
        if email:
            criteria.append(_equals_ignore_case(User.email, email))
        if not criteria:
            return None

        query = (
            self._base_query()
            .where(or_(*criteria))
            .order_by(User.created_at.asc())
            .limit(1)
        )
        return self._session.scalar(query)

    # =========================================================================
    # Substring search
    # =========================================================================

    def find_all_containing_username(self, username: str) -> list[User]:
        query = self._base_query().where(_contains_ignore_case(User.username, username))
        return list(self._session.scalars(query).all())

    def find_all_containing_email(self, email: str) -> list[User]:
        query = self._base_query().where(_contains_ignore_case(User.email, email))
        return list(self._session.scalars(query).all())

    def find_all_containing_username_or_email(self, username: str, email: str) -> list[User]:
        query = self._base_query().where(
            or_(
                _contains_ignore_case(User.username, username),
                _contains_ignore_case(User.email, email),
            )
        )
        return list(self._session.scalars(query).all())

    # =========================================================================
    # Account flags
    # =========================================================================

    def _apply(self, user: User | None, **values: Any) -> User | None:
        if user is None:
            return None
        for key, value in values.items():
            setattr(user, key, value)
        self._session.flush()
        return user

    def set_enabled(self, user_id: UUID, enabled: bool) -> User | None:
        """Set the enabled flag. Returns the user, None if absent."""
        return self._apply(self.find_by_id(user_id), enabled=enabled)

    def set_enabled_by_owner(self, user_id: UUID, enabled: bool, owner: Any) -> User | None:
        """Like set_enabled, but only for a user owned by owner."""
        return self._apply(self.find_by_id_and_owner(user_id, owner), enabled=enabled)

    def set_verified(self, user_id: UUID, verified: bool) -> User | None:
        """Set the verified flag. Returns the user, None if absent."""
        return self._apply(self.find_by_id(user_id), verified=verified)

    def set_verified_by_owner(self, user_id: UUID, verified: bool, owner: Any) -> User | None:
        """Like set_verified, but only for a user owned by owner."""
        return self._apply(self.find_by_id_and_owner(user_id, owner), verified=verified)

    # =========================================================================
    # Delete support
    # =========================================================================

    def clear_references(self, user_id: UUID) -> None:
        """
        Null every created_by / modified_by / owner reference to user_id.

        Covers all GenericEntity tables, users included. Bulk updates skip the
        before_update event, so modified_at is stamped here. Flushed, not
        committed.
        """
        for model in generic_entity_models():
            for field in GenericEntity.REFERENCE_FIELDS:
                column = getattr(model, field)
                result = self._session.execute(
                    update(model)
                    .where(column == user_id)
                    .values({column: None, model.modified_at: utcnow()})
                    .execution_options(synchronize_session="fetch")
                )
                if result.rowcount:
                    logger.debug(
                        "Cleared user references",
                        model=model.__name__,
                        field=field,
                        user_id=str(user_id),
                        rows=result.rowcount,
                    )

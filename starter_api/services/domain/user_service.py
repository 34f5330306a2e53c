"""
User Service - account management on top of the generic CRUD service.

Handles:
- User CRUD with password hashing (clear passwords never reach the database)
- Natural-key lookups and substring search
- Account flags (enabled, verified) and password changes, optionally scoped
  to an owner

Usage:
    from starter_api.services.domain import UserService

    service = UserService(db)
    user = service.find_by_username_or_email("alice", None)
    service.set_enabled_by_owner(user_id, False, owner)
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from starter_api.models import User
from starter_api.repositories.user import UserRepository
from starter_api.schemas import UserDto
from starter_api.services.base_service import GenericService
from starter_api.services.crud.bridge import GenericBridge, session_resolver
from starter_api.services.crud.repository import owner_key
from starter_api.services.crud.strategy import EntityStrategy
from starter_shared.config.logging import get_logger, mask_email
from starter_shared.infrastructure.db import transactional
from starter_shared.security.password import hash_password, is_hashed
from starter_shared.utils.exceptions import UserNotFoundError

logger = get_logger(__name__)


# =============================================================================
# Strategy hooks
# =============================================================================


def _user_fields_from_dto(dto: UserDto, user: User) -> None:
    user.username = dto.username
    user.email = dto.email
    if dto.password is not None:
        user.password = dto.password if is_hashed(dto.password) else hash_password(dto.password)
    user.firstname = dto.firstname
    user.lastname = dto.lastname
    user.enabled = dto.enabled
    user.verified = dto.verified


def _user_fields_to_dto(user: User) -> dict[str, Any]:
    return {
        "username": user.username,
        "email": user.email,
        "password": None,
        "firstname": user.firstname,
        "lastname": user.lastname,
        "enabled": user.enabled,
        "verified": user.verified,
    }


def _merge_user(current: User, incoming: User) -> None:
    # enabled / verified have dedicated commands; an email change resets verified
    for field in ("username", "email", "password", "firstname", "lastname"):
        value = getattr(incoming, field)
        if value is not None and value != getattr(current, field):
            setattr(current, field, value)


def _clear_user_references(repository: UserRepository, user: User) -> None:
    repository.clear_references(user.id)


USER_STRATEGY: EntityStrategy[User, UserDto] = EntityStrategy(
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


# =============================================================================
# Service
# =============================================================================


class UserService(GenericService[User, UserDto]):
    """
    Service for user accounts.

    Business rules:
    - username and email are unique, compared ignoring case
    - passwords are stored as bcrypt hashes and never returned
    - changing the email resets the verified flag
    - the *_by_owner commands act only on users owned by the given owner and
      report a foreign user exactly like a missing one
    - deleting a user first clears every reference other rows hold to it
    """

    def __init__(self, db: Session, *, resolve_references: bool = False):
        repository = UserRepository(db)
        bridge = GenericBridge(
            USER_STRATEGY,
            resolver=session_resolver(db) if resolve_references else None,
        )
        super().__init__(db, repository, bridge, USER_STRATEGY)

    @property
    def repo(self) -> UserRepository:
        return self._repo  # type: ignore[return-value]

    # =========================================================================
    # Query Methods
    # =========================================================================

    @transactional(read_only=True)
    def find_by_username(self, username: str) -> User | None:
        return self.repo.find_by_username(username)

    @transactional(read_only=True)
    def find_by_email(self, email: str) -> User | None:
        return self.repo.find_by_email(email)

    @transactional(read_only=True)
    def find_by_username_or_email(self, username: str | None, email: str | None) -> User | None:
        """User matching either key (ignoring case), None when there is none."""
        return self.repo.find_by_username_or_email(username, email)

    @transactional(read_only=True)
    def find_all_containing_username(self, username: str) -> list[User]:
        return self.repo.find_all_containing_username(username)

    @transactional(read_only=True)
    def find_all_containing_email(self, email: str) -> list[User]:
        return self.repo.find_all_containing_email(email)

    @transactional(read_only=True)
    def find_all_containing_username_or_email(self, username: str, email: str) -> list[User]:
        return self.repo.find_all_containing_username_or_email(username, email)

    # =========================================================================
    # Account Commands
    # =========================================================================

    @transactional()
    def set_password(self, user_id: UUID, password: str) -> User:
        """
        Replace the password of a user.

        Args:
            user_id: User to update.
            password: New password in clear text.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        user = self.repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return self._store_password(user, password)

    @transactional()
    def set_password_by_owner(self, user_id: UUID, password: str, owner: Any) -> User:
        """
        Replace the password of a user owned by owner.

        Raises:
            UserNotFoundError: If the user does not exist or has another owner.
        """
        user = self.repo.find_by_id_and_owner(user_id, owner)
        if user is None:
            raise UserNotFoundError(user_id, owner_id=owner_key(owner))
        return self._store_password(user, password)

    def _store_password(self, user: User, password: str) -> User:
        user.password = hash_password(password)
        self._db.flush()
        logger.info("Password changed", user_id=str(user.id), email=mask_email(user.email))
        return user

    @transactional()
    def set_enabled(self, user_id: UUID, enabled: bool) -> User:
        user = self.repo.set_enabled(user_id, enabled)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("User enabled flag set", user_id=str(user_id), enabled=enabled)
        return user

    @transactional()
    def set_enabled_by_owner(self, user_id: UUID, enabled: bool, owner: Any) -> User:
        user = self.repo.set_enabled_by_owner(user_id, enabled, owner)
        if user is None:
            raise UserNotFoundError(user_id, owner_id=owner_key(owner))
        logger.info("User enabled flag set", user_id=str(user_id), enabled=enabled)
        return user

    @transactional()
    def set_verified(self, user_id: UUID, verified: bool) -> User:
        user = self.repo.set_verified(user_id, verified)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("User verified flag set", user_id=str(user_id), verified=verified)
        return user

    @transactional()
    def set_verified_by_owner(self, user_id: UUID, verified: bool, owner: Any) -> User:
        user = self.repo.set_verified_by_owner(user_id, verified, owner)
        if user is None:
            raise UserNotFoundError(user_id, owner_id=owner_key(owner))
        logger.info("User verified flag set", user_id=str(user_id), verified=verified)
        return user

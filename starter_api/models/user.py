"""
User model.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from starter_shared.config.constants import Limits

from .base import GenericEntity


class User(GenericEntity):
    """
    Represents an account of the application.

    Inherits: id, created_at, modified_at, created_by_id, modified_by_id,
    owner_id from GenericEntity.

    Changing the email of a user that already has one resets ``verified``.
    The password column only ever holds a bcrypt hash.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(Limits.MAX_USERNAME_LENGTH), unique=True, nullable=False
    )
    email: Mapped[str] = mapped_column(
        String(Limits.MAX_EMAIL_LENGTH), unique=True, nullable=False
    )
    password: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_PASSWORD_LENGTH))
    firstname: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_NAME_LENGTH))
    lastname: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_NAME_LENGTH))
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Back-references, read-only: rows are re-pointed by UserRepository.clear_references()
    created_users: Mapped[list["User"]] = relationship(
        "User", foreign_keys="User.created_by_id", viewonly=True
    )
    modified_users: Mapped[list["User"]] = relationship(
        "User", foreign_keys="User.modified_by_id", viewonly=True
    )
    owned_users: Mapped[list["User"]] = relationship(
        "User", foreign_keys="User.owner_id", viewonly=True
    )

    def __init__(self, **kwargs: Any):
        kwargs.setdefault("enabled", True)
        kwargs.setdefault("verified", False)
        super().__init__(**kwargs)

    @validates("email")
    def _reset_verified_on_email_change(self, key: str, value: str | None) -> str | None:
        current = self.email
        if current is not None and value != current:
            self.verified = False
        return value

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"

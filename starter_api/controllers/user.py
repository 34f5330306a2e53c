"""
User controller.
"""

from __future__ import annotations

from fastapi import status

from starter_api.models import User
from starter_api.schemas import UserDto
from starter_api.services.domain.user_service import UserService
from starter_shared.i18n.messages import MessageSource

from .base import GenericController, ResponseOutcome

CONTROLLER_PATH = "/users"


class UserController(GenericController[User, UserDto]):
    """Generic CRUD for users plus natural-key lookup and search."""

    def __init__(self, service: UserService, messages: MessageSource | None = None):
        super().__init__(service, messages, CONTROLLER_PATH)

    @property
    def service(self) -> UserService:
        return self._service  # type: ignore[return-value]

    def get_by_username_or_email(self, username: str | None, email: str | None) -> ResponseOutcome:
        """200 with the user matching either key, 404 when none does."""
        user = self.service.find_by_username_or_email(username, email)
        if user is None:
            return ResponseOutcome(status.HTTP_404_NOT_FOUND)
        return ResponseOutcome(status.HTTP_200_OK, self.service.to_dto(user))

    def search(self, username: str | None, email: str | None) -> ResponseOutcome:
        """200 with the users whose username and/or email contain the given text."""
        if username and email:
            users = self.service.find_all_containing_username_or_email(username, email)
        elif username:
            users = self.service.find_all_containing_username(username)
        elif email:
            users = self.service.find_all_containing_email(email)
        else:
            users = []
        return ResponseOutcome(status.HTTP_200_OK, self.service.to_dtos(users))

"""
Shared utilities: exceptions.
"""

from starter_shared.utils.exceptions import (
    AppException,
    NotFoundError,
    EntityNotFoundError,
    UserNotFoundError,
    PageNotFoundError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "EntityNotFoundError",
    "UserNotFoundError",
    "PageNotFoundError",
]

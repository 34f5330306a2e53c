"""
Centralized HTTP exceptions for consistent error handling.

Usage:
    from starter_shared.utils.exceptions import EntityNotFoundError, PageNotFoundError

    raise EntityNotFoundError("User", user_id)
    raise PageNotFoundError(page=5, total_pages=2, detail=message)
"""

from typing import Any

from fastapi import HTTPException, status

from starter_shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def __str__(self) -> str:
        return str(self.detail)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Resource not found error (404).

    Usage:
        raise NotFoundError("No such resource")
    """

    def __init__(self, detail: str, log_level: str = "warning", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level=log_level,
            **log_context,
        )


class EntityNotFoundError(NotFoundError):
    """
    Entity not found, optionally within an owner's scope.

    The message is the same whether the entity is missing or belongs to
    another owner, so a caller cannot tell the two apart.

    Usage:
        raise EntityNotFoundError("User", user_id)
        raise EntityNotFoundError("User", user_id, owner_id=owner.id)
    """

    def __init__(self, entity: str, entity_id: Any = None, *, owner_id: Any = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            detail,
            log_level="info",
            entity=entity,
            entity_id=entity_id,
            owner_id=owner_id,
            **log_context,
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: Any = None, **log_context: Any):
        super().__init__("User", user_id, **log_context)


class PageNotFoundError(NotFoundError):
    """
    Requested page is beyond the available pages.

    Carries the requested page and the total page count so the message
    can be rendered in the caller's locale.
    """

    def __init__(self, page: int, total_pages: int, detail: str | None = None, **log_context: Any):
        self.page = page
        self.total_pages = total_pages
        super().__init__(
            detail or f"Page {page} not found, available pages: {total_pages}",
            page=page,
            total_pages=total_pages,
            **log_context,
        )

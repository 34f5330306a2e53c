"""
Centralized constants for the backend application.

Usage:
    from starter_shared.config.constants import Limits, SortDefaults

    size = size or Limits.DEFAULT_PAGE_SIZE
"""

from typing import Final


# =============================================================================
# Validation / pagination limits
# =============================================================================


class Limits:
    """Validation limits."""

    # String lengths (users table)
    MAX_USERNAME_LENGTH: Final[int] = 255
    MAX_EMAIL_LENGTH: Final[int] = 255
    MAX_NAME_LENGTH: Final[int] = 255
    MAX_PASSWORD_LENGTH: Final[int] = 512

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 200


# =============================================================================
# Sort query language
# =============================================================================


class SortDefaults:
    """Sort query separators and the default listing order."""

    PROPERTY_SEPARATOR: Final[str] = ";"
    OPTION_SEPARATOR: Final[str] = ","
    DEFAULT_SORT_QUERY: Final[str] = "createdAt,DESC;modifiedAt,DESC"


# =============================================================================
# Query parameter names
# =============================================================================


class QueryParams:
    """Names of the listing / batch query parameters."""

    SORT: Final[str] = "sort"
    PAGE: Final[str] = "page"
    SIZE: Final[str] = "size"
    IDS: Final[str] = "ids"


# =============================================================================
# Message keys
# =============================================================================


class MessageKeys:
    """Keys looked up in the message catalogs."""

    PAGE_NOT_FOUND: Final[str] = "controller.page_not_found"


# =============================================================================
# Request correlation
# =============================================================================


class Correlation:
    """Request ID header and the shape accepted from clients."""

    HEADER: Final[str] = "X-Request-ID"
    MAX_LENGTH: Final[int] = 64
    ALLOWED_PATTERN: Final[str] = r"^[A-Za-z0-9._:-]+$"

"""
Message catalogs and lookup.
"""

from starter_shared.i18n.messages import (
    DEFAULT_CATALOGS,
    MessageSource,
    default_messages,
    parse_accept_language,
)

__all__ = [
    "DEFAULT_CATALOGS",
    "MessageSource",
    "default_messages",
    "parse_accept_language",
]

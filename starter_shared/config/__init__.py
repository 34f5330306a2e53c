"""
Configuration module: Settings, logging, constants.
"""

from starter_shared.config.settings import settings, get_settings, DATABASE_URL
from starter_shared.config.logging import get_logger, setup_logging, mask_email
from starter_shared.config.constants import (
    Limits,
    MessageKeys,
    QueryParams,
    SortDefaults,
)

__all__ = [
    # settings
    "settings",
    "get_settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    "mask_email",
    # constants
    "Limits",
    "MessageKeys",
    "QueryParams",
    "SortDefaults",
]

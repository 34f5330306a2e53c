"""
Infrastructure: database sessions and request correlation.
"""

from starter_shared.infrastructure.db import (
    engine,
    SessionLocal,
    build_engine,
    get_db,
    get_db_context,
    safe_commit,
    transactional,
)
from starter_shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    CorrelationIdFilter,
)

__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "get_db",
    "get_db_context",
    "safe_commit",
    "transactional",
    "CorrelationIdMiddleware",
    "CorrelationIdFilter",
]

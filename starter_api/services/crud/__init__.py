"""
CRUD Services - Generic building blocks shared by every entity.

Provides:
- Sorting: sort query parsing and ORDER BY construction
- Page: zero-based page of results
- EntityStrategy: per-entity hooks (natural keys, copy, merge, delete cleanup)
- GenericBridge: entity <-> DTO mapping with optional reference resolution
- GenericRepository: storage operations on top of SQLAlchemy
"""

from .sorting import (
    Direction,
    NullHandling,
    SortDirective,
    parse_sort,
    build_order_by,
    resolve_column,
)
from .page import Page
from .strategy import EntityStrategy
from .bridge import GenericBridge, ReferenceResolver, session_resolver
from .repository import GenericRepository, owner_key

__all__ = [
    # Sorting
    "Direction",
    "NullHandling",
    "SortDirective",
    "parse_sort",
    "build_order_by",
    "resolve_column",
    # Paging
    "Page",
    # Strategy
    "EntityStrategy",
    # Bridge
    "GenericBridge",
    "ReferenceResolver",
    "session_resolver",
    # Repository
    "GenericRepository",
    "owner_key",
]

"""
SQLAlchemy ORM models.

Importing this package registers every mapper with Base.metadata.
"""

from .base import Base, GenericEntity, generic_entity_models, utcnow
from .user import User

__all__ = [
    "Base",
    "GenericEntity",
    "generic_entity_models",
    "utcnow",
    "User",
]

"""
Domain Services - entity-specific business logic.

Structure:
    Router (thin)
        ↓
    Controller (outcomes)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)
"""

from .user_service import UserService, USER_STRATEGY

__all__ = [
    "UserService",
    "USER_STRATEGY",
]

"""
Security helpers: password hashing.
"""

from starter_shared.security.password import (
    hash_password,
    is_hashed,
)

__all__ = [
    "hash_password",
    "is_hashed",
]

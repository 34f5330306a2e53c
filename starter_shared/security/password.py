"""
Password hashing utilities using bcrypt.

The cost factor comes from settings.bcrypt_rounds so tests can run with the
minimum cost.
"""

import re

import bcrypt

from starter_shared.config.settings import settings

# $2b$12$ followed by 22 salt and 31 checksum characters
BCRYPT_HASH_PATTERN = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash.
        rounds: Cost factor, defaults to settings.bcrypt_rounds.

    Returns:
        Hashed password string (includes salt and algorithm info).

    Example:
        hashed = hash_password("mypassword123")
        # Returns something like: $2b$12$...
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def is_hashed(value: str) -> bool:
    """
    Whether value is a complete bcrypt hash.

    A clear password that merely starts with a bcrypt prefix ("$2b$...")
    does not match and gets hashed like any other.
    """
    return BCRYPT_HASH_PATTERN.match(value) is not None

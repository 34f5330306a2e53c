"""
Controllers - transport-agnostic request handling.

Routers call controllers and translate the returned ResponseOutcome into an
HTTP response.
"""

from .base import GenericController, ResponseOutcome, parse_id
from .user import UserController, CONTROLLER_PATH as USERS_PATH

__all__ = [
    "GenericController",
    "ResponseOutcome",
    "parse_id",
    "UserController",
    "USERS_PATH",
]

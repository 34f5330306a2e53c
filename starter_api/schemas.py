"""
Pydantic DTOs for the REST API.

Field names are snake_case in Python and camelCase on the wire
(``created_at`` <-> ``createdAt``). References to other entities are bare
UUIDs, never embedded objects.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from starter_shared.config.constants import Limits


class GenericDto(BaseModel):
    """Wire projection shared by every entity."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: UUID | None = None
    created_at: datetime | None = None
    created_by: UUID | None = None
    modified_at: datetime | None = None
    modified_by: UUID | None = None
    owner: UUID | None = None

    def to_json(self) -> dict:
        """JSON-ready dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)


class UserDto(GenericDto):
    """
    User projection.

    ``password`` is accepted on input (clear text, hashed before storage)
    and always None on output.
    """

    username: str | None = Field(default=None, max_length=Limits.MAX_USERNAME_LENGTH)
    email: str | None = Field(default=None, max_length=Limits.MAX_EMAIL_LENGTH)
    password: str | None = None
    firstname: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    lastname: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    enabled: bool = True
    verified: bool = False

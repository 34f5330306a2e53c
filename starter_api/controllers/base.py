"""
Transport-agnostic CRUD controller.

A controller turns raw request values (path ids, query strings, DTOs) into
service calls and answers with a ResponseOutcome: a status code, an optional
body (a DTO or a list of DTOs) and headers. The HTTP router only translates
outcomes into responses, so everything here can be exercised without a web
server.

Lookups of a single id and out-of-range pages raise EntityNotFoundError /
PageNotFoundError; the application maps them to 404 responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
from uuid import UUID

from fastapi import status
from pydantic import BaseModel

from starter_api.models import GenericEntity
from starter_api.services.base_service import GenericService
from starter_api.services.crud.sorting import parse_sort
from starter_shared.config.constants import Limits, MessageKeys, SortDefaults
from starter_shared.config.logging import get_logger
from starter_shared.i18n.messages import MessageSource, default_messages
from starter_shared.utils.exceptions import EntityNotFoundError, PageNotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=GenericEntity)
DtoT = TypeVar("DtoT", bound=BaseModel)

ID_SEPARATOR = ","


@dataclass
class ResponseOutcome:
    """Status, optional body and headers of a controller answer."""

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


def parse_id(raw: Any) -> UUID | None:
    """UUID from a path/query value, None when malformed."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw).strip())
    except (TypeError, ValueError):
        return None


class GenericController(Generic[ModelT, DtoT]):
    """
    CRUD endpoints for one entity kind.

    Args:
        service: Service for the entity kind.
        messages: Message source for localized errors.
        controller_path: Path segment of the resource, e.g. "/users".
    """

    def __init__(
        self,
        service: GenericService[ModelT, DtoT],
        messages: MessageSource | None = None,
        controller_path: str = "",
    ):
        self._service = service
        self._messages = messages or default_messages
        self._controller_path = controller_path

    @property
    def service(self) -> GenericService[ModelT, DtoT]:
        return self._service

    @property
    def controller_path(self) -> str:
        return self._controller_path

    # =========================================================================
    # Reads
    # =========================================================================

    def get_by_id(self, entity_id: str) -> ResponseOutcome:
        """200 with the DTO; raises EntityNotFoundError for a malformed or unknown id."""
        uid = parse_id(entity_id)
        entity = self._service.find_by_id(uid) if uid is not None else None
        if entity is None:
            raise self._service.strategy.entity_not_found(entity_id)
        return ResponseOutcome(status.HTTP_200_OK, self._service.to_dto(entity))

    def list_all(self, sort_query: str | None = SortDefaults.DEFAULT_SORT_QUERY) -> ResponseOutcome:
        """200 with every DTO, ordered by the sort query when it yields directives."""
        directives = parse_sort(sort_query) or None
        entities = self._service.find_all(directives)
        return ResponseOutcome(status.HTTP_200_OK, self._service.to_dtos(entities))

    def list_paginated(
        self,
        sort_query: str | None = SortDefaults.DEFAULT_SORT_QUERY,
        page: int = 0,
        size: int = Limits.DEFAULT_PAGE_SIZE,
        locale: str | None = None,
    ) -> ResponseOutcome:
        """
        200 with the DTOs of one zero-based page.

        Requesting exactly the page after the last one yields an empty list;
        a negative page or anything further raises PageNotFoundError with a
        localized message.
        """
        directives = parse_sort(sort_query) or None
        result = self._service.find_page(max(page, 0), size, directives)

        total_pages = result.total_pages
        if page < 0 or page > total_pages:
            message = self._messages.lookup(MessageKeys.PAGE_NOT_FOUND, (page, total_pages), locale)
            raise PageNotFoundError(page, total_pages, detail=message)

        return ResponseOutcome(status.HTTP_200_OK, self._service.to_dtos(result.content))

    # =========================================================================
    # Writes
    # =========================================================================

    def add(self, dto: DtoT, base_url: str = "") -> ResponseOutcome:
        """201 with the stored DTO and its Location; 409 on a duplicate."""
        entity = self._service.to_entity(dto)
        if not self._service.add(entity):
            return ResponseOutcome(status.HTTP_409_CONFLICT)

        body = self._service.to_dto(entity)
        location = f"{base_url.rstrip('/')}{self._controller_path}/{body.id}"
        return ResponseOutcome(status.HTTP_201_CREATED, body, {"Location": location})

    def update(self, entity_id: str, dto: DtoT | None) -> ResponseOutcome:
        """200 with the merged DTO; 400 when the body id is missing or differs; 404 when unknown."""
        if dto is None or dto.id is None or entity_id != str(dto.id):
            logger.debug("Update rejected, id mismatch", path_id=entity_id)
            return ResponseOutcome(status.HTTP_400_BAD_REQUEST)

        try:
            updated = self._service.update(self._service.to_entity(dto))
        except EntityNotFoundError:
            return ResponseOutcome(status.HTTP_404_NOT_FOUND)

        return ResponseOutcome(status.HTTP_200_OK, self._service.to_dto(updated))

    def delete(self, entity_id: str) -> ResponseOutcome:
        """204 when deleted; 404 when the id is malformed or unknown."""
        uid = parse_id(entity_id)
        if uid is None or not self._delete(uid):
            return ResponseOutcome(status.HTTP_404_NOT_FOUND)
        return ResponseOutcome(status.HTTP_204_NO_CONTENT)

    def delete_all(self, ids_csv: str) -> ResponseOutcome:
        """
        Delete every id of a comma-separated list.

        Malformed ids are skipped. Each delete commits on its own, so earlier
        deletes stay when a later one fails.

        Returns:
            204 when every delete succeeded, 409 otherwise.
        """
        ids: list[UUID] = []
        for raw in (ids_csv or "").split(ID_SEPARATOR):
            uid = parse_id(raw)
            if uid is None:
                logger.debug("Invalid id skipped", raw_id=raw)
                continue
            ids.append(uid)

        deleted_all = True
        for uid in ids:
            deleted_all &= self._delete(uid)

        if not deleted_all:
            return ResponseOutcome(status.HTTP_409_CONFLICT)
        return ResponseOutcome(status.HTTP_204_NO_CONTENT)

    def _delete(self, entity_id: UUID) -> bool:
        try:
            self._service.delete_by_id(entity_id)
        except EntityNotFoundError:
            logger.debug("Delete failed, entity not found", entity_id=str(entity_id))
            return False
        return True

"""
User endpoints.

Thin router that delegates to UserController and turns its ResponseOutcome
into an HTTP response. The fixed paths (/users/get, /users/search) are
declared before /users/{user_id} so they are not captured as ids.
"""

from fastapi import APIRouter, Body, Depends, Header, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from starter_api.controllers import ResponseOutcome, UserController
from starter_api.schemas import UserDto
from starter_api.services.domain import UserService
from starter_shared.config.constants import Limits, QueryParams, SortDefaults
from starter_shared.config.settings import settings
from starter_shared.i18n.messages import parse_accept_language
from starter_shared.infrastructure.db import get_db

router = APIRouter(tags=["users"])


def get_user_controller(db: Session = Depends(get_db)) -> UserController:
    """Controller bound to the request's session."""
    service = UserService(db, resolve_references=settings.validate_references)
    return UserController(service)


def to_response(outcome: ResponseOutcome) -> Response:
    """Render a controller outcome; DTO bodies use camelCase wire names."""
    body = outcome.body
    if body is None:
        return Response(status_code=outcome.status_code, headers=outcome.headers)

    if isinstance(body, list):
        content = [dto.to_json() for dto in body]
    else:
        content = body.to_json()
    return JSONResponse(content=content, status_code=outcome.status_code, headers=outcome.headers)


# =============================================================================
# Lookup and search
# =============================================================================


@router.get("/users/get")
def get_user_by_username_or_email(
    username: str | None = None,
    email: str | None = None,
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """Get the user with this username or email."""
    return to_response(controller.get_by_username_or_email(username, email))


@router.get("/users/search")
def search_users(
    username: str | None = None,
    email: str | None = None,
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """Users whose username and/or email contain the given text (ignoring case)."""
    return to_response(controller.search(username, email))


# =============================================================================
# Collection
# =============================================================================


@router.get("/users")
def list_users(
    sort: str = Query(default=SortDefaults.DEFAULT_SORT_QUERY, alias=QueryParams.SORT),
    page: int | None = Query(default=None, ge=0, alias=QueryParams.PAGE),
    size: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE, alias=QueryParams.SIZE
    ),
    accept_language: str | None = Header(default=None),
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """
    List users.

    Without ``page`` every user is returned. With ``page`` (zero-based) one
    page of ``size`` users is returned; pages past the end answer 404.
    """
    if page is None:
        return to_response(controller.list_all(sort))
    locale = parse_accept_language(accept_language)
    return to_response(controller.list_paginated(sort, page, size, locale))


@router.post("/users")
def create_user(
    request: Request,
    dto: UserDto,
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """Create a user. 409 when the id, username or email is taken."""
    base_url = str(request.base_url).rstrip("/") + settings.api_prefix
    return to_response(controller.add(dto, base_url))


@router.delete("/users")
def delete_users(
    ids: str = Query(..., alias=QueryParams.IDS),
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """Delete a comma-separated list of users. 409 unless every delete succeeded."""
    return to_response(controller.delete_all(ids))


# =============================================================================
# Item
# =============================================================================


@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """Get a user by id."""
    return to_response(controller.get_by_id(user_id))


@router.put("/users/{user_id}")
def update_user(
    user_id: str,
    dto: UserDto | None = Body(default=None),
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """Update a user. The body id must match the path id."""
    return to_response(controller.update(user_id, dto))


@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    controller: UserController = Depends(get_user_controller),
) -> Response:
    """Delete a user."""
    return to_response(controller.delete(user_id))

"""
Sort query parsing.

The sort query is a list of directives separated by ``;``. Each directive is
``PROPERTY[,DIRECTION[,NULL_HINT]]``:

    property1;property2,ASC;property3,DESC,NULLS_FIRST;property4,asc,NULLS_LAST

- DIRECTION is ASC or DESC (any case). Without it the store's natural
  ascending order is used.
- NULL_HINT is NULLS_FIRST, NULLS_LAST or NATIVE (any case).

Malformed directives are dropped and logged at debug level; the rest of the
query is still honored.

Usage:
    from starter_api.services.crud.sorting import parse_sort, build_order_by

    directives = parse_sort("createdAt,DESC;modifiedAt,DESC")
    stmt = stmt.order_by(*build_order_by(User, directives))
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from sqlalchemy import inspect as sa_inspect

from starter_shared.config.constants import SortDefaults
from starter_shared.config.logging import get_logger

logger = get_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class NullHandling(str, Enum):
    NATIVE = "NATIVE"
    NULLS_FIRST = "NULLS_FIRST"
    NULLS_LAST = "NULLS_LAST"


@dataclass(frozen=True)
class SortDirective:
    """One ordering instruction: property, direction (None = natural) and null hint."""

    property: str
    direction: Direction | None = None
    null_handling: NullHandling = NullHandling.NATIVE


def _parse_directive(entry: str) -> SortDirective | None:
    options = [option.strip() for option in entry.split(SortDefaults.OPTION_SEPARATOR)]

    if not 1 <= len(options) <= 3 or not options[0]:
        return None

    direction = None
    null_handling = NullHandling.NATIVE
    try:
        if len(options) >= 2:
            direction = Direction(options[1].upper())
        if len(options) == 3:
            null_handling = NullHandling(options[2].upper())
    except ValueError:
        return None

    return SortDirective(options[0], direction, null_handling)


def parse_sort(query: str | None) -> list[SortDirective] | None:
    """
    Parse a sort query into directives.

    Returns None for an empty or missing query, meaning "no explicit
    order". A query made only of malformed directives yields an empty list.
    """
    if not query:
        return None

    directives: list[SortDirective] = []
    for entry in query.split(SortDefaults.PROPERTY_SEPARATOR):
        directive = _parse_directive(entry)
        if directive is None:
            logger.debug("Invalid sort entry", entry=entry)
            continue
        directives.append(directive)

    return directives


def to_snake_case(name: str) -> str:
    """createdAt -> created_at; already snake_case names are unchanged."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def resolve_column(model: type, prop: str) -> Any | None:
    """
    Find the mapped column attribute for a sort property.

    Accepts the Python attribute name (``created_by_id``), its camelCase form
    (``createdById``), the wire name (``createdBy``) or the column name
    (``created_by``).
    """
    mapper = sa_inspect(model)
    snake = to_snake_case(prop)

    for candidate in (prop, snake):
        if candidate in mapper.column_attrs:
            return getattr(model, candidate)

    # Wire / column name, e.g. "createdBy" -> column "created_by" -> attribute "created_by_id"
    for attr in mapper.column_attrs:
        if any(column.name == snake for column in attr.columns):
            return getattr(model, attr.key)

    return None


def build_order_by(model: type, directives: Sequence[SortDirective] | None) -> list[Any]:
    """Convert directives into SQLAlchemy ORDER BY clauses for model."""
    clauses: list[Any] = []
    for directive in directives or ():
        column = resolve_column(model, directive.property)
        if column is None:
            logger.warning(
                "Unknown sort property ignored",
                model=model.__name__,
                property=directive.property,
            )
            continue

        if directive.direction is Direction.DESC:
            clause = column.desc()
        elif directive.direction is Direction.ASC:
            clause = column.asc()
        else:
            clause = column

        if directive.null_handling is NullHandling.NULLS_FIRST:
            clause = clause.nulls_first()
        elif directive.null_handling is NullHandling.NULLS_LAST:
            clause = clause.nulls_last()

        clauses.append(clause)

    return clauses

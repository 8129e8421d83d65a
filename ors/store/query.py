"""
Translate a partially-populated filter record into bound SQLAlchemy clauses
and a pagination window. Only set fields take part: non-blank strings,
positive numbers and present dates. Every value travels as a bound parameter.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from sqlalchemy import Date, DateTime, cast, select

from .descriptor import CONTAINS, DATE, EQUALS, PREFIX, EntityDescriptor

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, str):
        return value.strip() != ""
    return True


def build_predicate(descriptor: EntityDescriptor, criteria) -> List[Any]:
    """Return the AND-ed clauses for every set filter field of ``criteria``."""

    if criteria is None:
        return []

    clauses: List[Any] = []
    for filter_field in descriptor.filter_fields:
        value = getattr(criteria, filter_field.name, None)
        if not is_set(value):
            continue
        column = descriptor.column(filter_field.name)

        if filter_field.match == PREFIX:
            clauses.append(column.ilike(f"{escape_like(value.strip())}%", escape=LIKE_ESCAPE))
        elif filter_field.match == CONTAINS:
            clauses.append(column.ilike(f"%{escape_like(value.strip())}%", escape=LIKE_ESCAPE))
        elif filter_field.match == DATE:
            day = value.date() if isinstance(value, datetime) else value
            if isinstance(column.type, DateTime):
                clauses.append(cast(column, Date) == day)
            else:
                clauses.append(column == day)
        elif filter_field.match == EQUALS:
            clauses.append(column == value)
    return clauses


def page_window(page_no: int, page_size: int) -> Optional[Tuple[int, int]]:
    """``(offset, limit)`` for a 1-based page, or None when unpaginated."""

    if not page_size or page_size <= 0:
        return None
    page_no = max(page_no or 1, 1)
    return (page_no - 1) * page_size, page_size


def build_search(descriptor: EntityDescriptor, criteria=None, page_no: int = 0, page_size: int = 0):
    model = descriptor.model
    stmt = select(model).where(*build_predicate(descriptor, criteria)).order_by(model.id)
    window = page_window(page_no, page_size)
    if window is not None:
        offset, limit = window
        stmt = stmt.offset(offset).limit(limit)
    return stmt


def describe(descriptor: EntityDescriptor, criteria) -> dict:
    """Loggable view of the filter fields that are set."""

    if criteria is None:
        return {}
    described = {}
    for filter_field in descriptor.filter_fields:
        value = getattr(criteria, filter_field.name, None)
        if is_set(value):
            described[filter_field.name] = value.isoformat() if isinstance(value, date) else value
    return described

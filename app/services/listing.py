"""
Query helpers shared by the paged list endpoints.

Programs, sub-programs, activities, budgets, stakeholders and roles all
list the same way: optional free-text search over a few columns, exact
filters, a whitelisted sort key and ``page``/``limit`` pagination. Unknown
sort keys fall back to ``created_at`` descending.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from app.schemas.common import PageMeta, PaginationParams, SortParams

logger = logging.getLogger(__name__)


def apply_search(query: Query, term: str | None, columns: list[Any]) -> Query:
    """Keep rows where any of *columns* contains *term* (case-insensitive)."""
    term = (term or "").strip()
    if not term:
        return query
    pattern = f"%{term}%"
    return query.filter(or_(*(column.ilike(pattern) for column in columns)))


def apply_filters(query: Query, filters: dict[Any, Any]) -> Query:
    """Apply ``column == value`` for every filter whose value is set."""
    for column, value in filters.items():
        if value is not None and value != "":
            query = query.filter(column == value)
    return query


def apply_sort(
    query: Query, sort: SortParams, columns: dict[str, Any], fallback: Any
) -> Query:
    """Order by ``columns[sort.sort]``, or by *fallback* descending.

    Args:
        columns: Allowed sort keys mapped to mapped columns.
        fallback: Column used when the key is unknown, usually ``created_at``.
    """
    column = columns.get(sort.sort)
    if column is None:
        return query.order_by(fallback.desc())
    return query.order_by(column.desc() if sort.order == "desc" else column.asc())


def paginate(query: Query, pagination: PaginationParams) -> tuple[list[Any], PageMeta]:
    total = query.order_by(None).count()
    rows = query.offset(pagination.offset).limit(pagination.limit).all()
    meta = PageMeta(
        current_page=pagination.page,
        total_pages=math.ceil(total / pagination.limit),
        total_items=total,
        items_per_page=pagination.limit,
    )
    logger.debug(
        "paginate: page=%d limit=%d total=%d returned=%d",
        pagination.page, pagination.limit, total, len(rows),
    )
    return rows, meta


def count_by(db: Session, fk_column: Any, ids: list[int]) -> dict[int, int]:
    """Number of rows pointing at each of *ids* through *fk_column*."""
    if not ids:
        return {}
    rows = (
        db.query(fk_column, func.count())
        .select_from(fk_column.class_)
        .filter(fk_column.in_(ids))
        .group_by(fk_column)
        .all()
    )
    return {target_id: count for target_id, count in rows}

"""
Query helpers shared by the repositories.

Paging, sorting and counting are identical for every list endpoint; only
the sortable columns differ per model.
"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from bookshelf.schemas.filters import BaseFilter


def apply_order(
    stmt: Select,
    base: BaseFilter,
    columns: dict[str, InstrumentedAttribute[Any]],
    tiebreaker: InstrumentedAttribute[Any],
) -> Select:
    """
    Add ORDER BY clauses for the requested sort fields.

    Sort fields naming a column outside ``columns`` are ignored. The
    tiebreaker (the primary key) always comes last so pages are stable.
    """
    clauses = []
    for sort_field in base.sort:
        column = columns.get(sort_field.column)
        if column is None:
            continue
        clauses.append(column.desc() if sort_field.descending else column.asc())
    clauses.append(tiebreaker.asc())
    return stmt.order_by(*clauses)


def apply_page(stmt: Select, base: BaseFilter) -> Select:
    """Limit the statement to the requested page."""
    return stmt.offset(base.offset).limit(base.limit)


def count_rows(db: Session, stmt: Select) -> int:
    """Count the rows a (filtered, unpaged) statement would return."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return db.execute(count_stmt).scalar() or 0

"""
List Filters

Plain dataclasses describing what a list endpoint was asked for. Routers
build them from query parameters (see dependencies.py) and repositories
turn them into WHERE / ORDER BY / LIMIT / OFFSET clauses.

Every domain filter embeds a BaseFilter with the paging and sorting shared
by all list endpoints:

    GET /api/v1/authors/?page=2&limit=10&sort=last_name,asc&sort=first_name,desc
"""

from dataclasses import dataclass, field
from datetime import date

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class SortField:
    """One ORDER BY entry: a column name and a direction."""

    column: str
    direction: str = SORT_ASC

    @property
    def descending(self) -> bool:
        return self.direction == SORT_DESC


def parse_sort(values: list[str] | None) -> list[SortField]:
    """
    Parse repeated ``sort`` query values into SortFields.

    Each value is ``column[,direction]``. The direction is case-insensitive;
    anything other than ``asc`` sorts descending, and a missing direction
    sorts ascending. Values without a column are skipped. The order of the
    values is the order of the ORDER BY clause.

    Examples:
        parse_sort(["first_name,ASC"]) -> [SortField("first_name", "asc")]
        parse_sort(["created_at,desc", "id"]) ->
            [SortField("created_at", "desc"), SortField("id", "asc")]
    """
    fields: list[SortField] = []
    for value in values or []:
        column, _, direction = value.partition(",")
        column = column.strip().lower()
        if not column:
            continue
        direction = direction.strip().lower()
        if direction and direction != SORT_ASC:
            fields.append(SortField(column, SORT_DESC))
        else:
            fields.append(SortField(column, SORT_ASC))
    return fields


@dataclass
class BaseFilter:
    """
    Paging and sorting shared by every list endpoint.

    offset wins over page when both are known: it is derived from page only
    when the client did not send one.
    """

    page: int = 1
    limit: int = 30
    offset: int = 0
    sort: list[SortField] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        page: int = 1,
        limit: int = 30,
        offset: int | None = None,
        sort: list[str] | None = None,
    ) -> "BaseFilter":
        if offset is None:
            offset = (page - 1) * limit
        return cls(page=page, limit=limit, offset=offset, sort=parse_sort(sort))


@dataclass
class AuthorFilter:
    """Name predicates for author lists (case-insensitive substring match)."""

    base: BaseFilter = field(default_factory=BaseFilter)
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None


@dataclass
class BookFilter:
    """
    Book list predicates.

    The title/description/published_date predicates apply only when search
    is set; a plain list pages through every live book.
    """

    base: BaseFilter = field(default_factory=BaseFilter)
    search: bool = False
    title: str | None = None
    description: str | None = None
    published_date: date | None = None

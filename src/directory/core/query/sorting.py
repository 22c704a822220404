"""Sort resolution for user list queries."""

from dataclasses import dataclass
from typing import Literal

from sqlalchemy.sql.elements import ColumnElement

SORTABLE_COLUMNS: frozenset[str] = frozenset({"first_name", "last_name", "email", "gender"})
DEFAULT_SORT_COLUMN = "id"
SORT_DIRECTIONS: frozenset[str] = frozenset({"asc", "desc"})
DEFAULT_SORT_DIRECTION = "asc"


@dataclass(frozen=True)
class SortSpec:
    column: str
    direction: Literal["asc", "desc"]

    def order_by(self, table: type) -> ColumnElement:
        column = getattr(table, self.column)
        return column.desc() if self.direction == "desc" else column.asc()


def resolve_sort(sort_by: str | None = None, order: str | None = None) -> SortSpec:
    """Map raw ``sortBy``/``order`` parameters onto an allow-listed sort.

    Unknown or missing columns fall back to ``id`` (insertion order); unknown
    or missing directions fall back to ascending. Column names are matched
    exactly, directions case-insensitively.
    """
    column = sort_by if sort_by in SORTABLE_COLUMNS else DEFAULT_SORT_COLUMN
    direction = order.lower() if order else DEFAULT_SORT_DIRECTION
    if direction not in SORT_DIRECTIONS:
        direction = DEFAULT_SORT_DIRECTION
    return SortSpec(column=column, direction=direction)  # type: ignore[arg-type]

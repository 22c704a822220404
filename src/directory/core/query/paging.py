"""Pagination for user list queries."""

import math
from dataclasses import dataclass

from src.directory.core.errors import PaginationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _coerce(value: int | str | None, name: str) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise PaginationError(f"{name} value must be an integer") from e


def paginate(
    page: int | str | None = None,
    limit: int | str | None = None,
    *,
    default_page: int = DEFAULT_PAGE,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int | None = None,
) -> PageRequest:
    """Resolve raw ``page``/``limit`` parameters into a page request.

    Missing values take the defaults (page 1, limit 5). Values below 1 are
    rejected rather than clamped. ``limit`` is unbounded unless ``max_limit``
    is given.

    Raises:
        PaginationError: page or limit is not an integer, is below 1, or
            exceeds ``max_limit``.
    """
    page_value = _coerce(page, "Page")
    limit_value = _coerce(limit, "Limit")

    if page_value is None:
        page_value = default_page
    if limit_value is None:
        limit_value = default_limit

    if page_value <= 0:
        raise PaginationError("Page value must be 1 or more")
    if limit_value <= 0:
        raise PaginationError("Limit value must be 1 or more")
    if max_limit is not None and limit_value > max_limit:
        raise PaginationError(f"Limit value must be {max_limit} or less")

    return PageRequest(page=page_value, limit=limit_value)


def compute_total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` records ``limit`` at a time."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)

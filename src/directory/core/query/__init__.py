"""Query building blocks: filters, sorting and paging for user lists."""

from .filters import (
    And,
    Contains,
    Equals,
    MatchAll,
    Or,
    Predicate,
    build_filter,
    compile_predicate,
)
from .paging import PageRequest, compute_total_pages, paginate
from .sorting import SortSpec, resolve_sort

__all__ = [
    "And",
    "Contains",
    "Equals",
    "MatchAll",
    "Or",
    "Predicate",
    "build_filter",
    "compile_predicate",
    "PageRequest",
    "compute_total_pages",
    "paginate",
    "SortSpec",
    "resolve_sort",
]

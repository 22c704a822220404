"""Unit tests for page resolution."""

import pytest

from src.directory.core.errors import PaginationError
from src.directory.core.query.paging import PageRequest, compute_total_pages, paginate


class TestPaginate:
    def test_defaults(self):
        request = paginate()

        assert request == PageRequest(page=1, limit=5)
        assert request.offset == 0

    def test_offset(self):
        assert paginate(3, 10).offset == 20

    def test_accepts_numeric_strings(self):
        assert paginate("2", "7") == PageRequest(page=2, limit=7)

    def test_empty_strings_use_defaults(self):
        assert paginate("", "") == PageRequest(page=1, limit=5)

    def test_custom_defaults(self):
        assert paginate(default_page=2, default_limit=25) == PageRequest(page=2, limit=25)

    @pytest.mark.parametrize("page", [0, -1, "0", "-3"])
    def test_rejects_page_below_one(self, page):
        with pytest.raises(PaginationError, match="Page value must be 1 or more"):
            paginate(page, 5)

    @pytest.mark.parametrize("limit", [0, -5, "0"])
    def test_rejects_limit_below_one(self, limit):
        with pytest.raises(PaginationError, match="Limit value must be 1 or more"):
            paginate(1, limit)

    def test_page_checked_before_limit(self):
        with pytest.raises(PaginationError, match="Page"):
            paginate(0, 0)

    @pytest.mark.parametrize("page", ["abc", "1.5", "one"])
    def test_rejects_non_integer_page(self, page):
        with pytest.raises(PaginationError, match="Page value must be an integer"):
            paginate(page, 5)

    def test_rejects_non_integer_limit(self):
        with pytest.raises(PaginationError, match="Limit value must be an integer"):
            paginate(1, "lots")

    def test_limit_unbounded_by_default(self):
        assert paginate(1, 10_000).limit == 10_000

    def test_max_limit(self):
        assert paginate(1, 100, max_limit=100).limit == 100
        with pytest.raises(PaginationError, match="Limit value must be 100 or less"):
            paginate(1, 101, max_limit=100)

    def test_error_status(self):
        with pytest.raises(PaginationError) as exc_info:
            paginate(0)

        assert exc_info.value.status_code == 422


class TestComputeTotalPages:
    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(0, 5, 0), (1, 5, 1), (5, 5, 1), (6, 5, 2), (23, 10, 3)],
    )
    def test_ceiling(self, total, limit, expected):
        assert compute_total_pages(total, limit) == expected

"""
Unit tests for pagination helpers
"""
import pytest

from storefront.services.pagination import Page, page_window, paginate, total_pages_for


class TestPageWindow:

    @pytest.mark.parametrize("current,total,expected", [
        (1, 1, []),
        (1, 0, []),
        (1, 2, [1, 2]),
        (2, 3, [1, 2, 3]),
        (3, 3, [1, 2, 3]),
        (1, 5, [1, 2, None, 5]),
        (5, 5, [1, None, 4, 5]),
        (2, 10, [1, 2, 3, None, 10]),
        (3, 10, [1, 2, 3, 4, None, 10]),
        (4, 10, [1, None, 3, 4, 5, None, 10]),
        (5, 10, [1, None, 4, 5, 6, None, 10]),
        (9, 10, [1, None, 8, 9, 10]),
        (10, 10, [1, None, 9, 10]),
    ])
    def test_window(self, current, total, expected):
        assert page_window(current, total) == expected

    def test_last_page_never_listed_twice(self):
        for total in range(2, 12):
            for current in range(1, total + 1):
                pages = [p for p in page_window(current, total) if p is not None]
                assert len(pages) == len(set(pages))
                assert pages[0] == 1 and pages[-1] == total


class TestTotalPages:

    def test_rounds_up(self):
        assert total_pages_for(25, 12) == 3

    def test_at_least_one_page(self):
        assert total_pages_for(0, 12) == 1


class TestPaginate:

    def test_slices_items(self):
        page = paginate(list(range(30)), page=2, per_page=12)

        assert isinstance(page, Page)
        assert page.items == list(range(12, 24))
        assert page.total == 30
        assert page.total_pages == 3
        assert page.window == [1, 2, 3]

    def test_page_past_the_end_is_empty(self):
        page = paginate(list(range(5)), page=3, per_page=12)

        assert page.items == []
        assert page.total == 5
